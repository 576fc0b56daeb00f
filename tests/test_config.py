import logging
from pathlib import Path

from manta.config import DEFAULT_ACTIVATE_BUNDLE, Settings


def test_defaults_from_empty_env() -> None:
    settings = Settings.from_env({})

    assert settings.log_file is None
    assert settings.log_level == logging.INFO
    assert settings.mute is False
    assert settings.sound_file is None
    assert settings.notify_activate == DEFAULT_ACTIVATE_BUNDLE


def test_values_from_env(tmp_path) -> None:
    settings = Settings.from_env(
        {
            "MANTA_LOG_FILE": str(tmp_path / "manta.log"),
            "MANTA_LOG_LEVEL": "debug",
            "MANTA_MUTE": "Yes",
            "MANTA_SOUND_FILE": str(tmp_path / "bell.wav"),
            "MANTA_NOTIFY_ACTIVATE": "",
        }
    )

    assert settings.log_file == tmp_path / "manta.log"
    assert settings.log_level == logging.DEBUG
    assert settings.mute is True
    assert settings.sound_file == Path(tmp_path / "bell.wav")
    assert settings.notify_activate is None


def test_unknown_log_level_falls_back_to_info() -> None:
    assert Settings.from_env({"MANTA_LOG_LEVEL": "chatty"}).log_level == logging.INFO
