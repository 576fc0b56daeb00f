from __future__ import annotations

"""Настройки запуска из переменных окружения `MANTA_*` (флагов командной строки нет)."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping


DEFAULT_ACTIVATE_BUNDLE = "com.mitchellh.ghostty"
_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    log_file: Path | None = None
    log_level: int = logging.INFO
    mute: bool = False
    sound_file: Path | None = None
    notify_activate: str | None = DEFAULT_ACTIVATE_BUNDLE

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if environ is None else environ
        log_file = env.get("MANTA_LOG_FILE", "").strip()
        sound_file = env.get("MANTA_SOUND_FILE", "").strip()
        return cls(
            log_file=Path(log_file).expanduser() if log_file else None,
            log_level=_parse_level(env.get("MANTA_LOG_LEVEL", "INFO")),
            mute=env.get("MANTA_MUTE", "").strip().lower() in _TRUTHY,
            sound_file=Path(sound_file).expanduser() if sound_file else None,
            notify_activate=env.get("MANTA_NOTIFY_ACTIVATE", DEFAULT_ACTIVATE_BUNDLE).strip() or None,
        )


def _parse_level(raw: str) -> int:
    level = logging.getLevelName(raw.strip().upper())
    return level if isinstance(level, int) else logging.INFO
