import io
import os
import wave

import pytest

from manta.core import assets
from manta.core.errors import SoundError
from manta.core.sound import SoundPlayer


class FakeClip:
    def __init__(self, path) -> None:
        self.path = path
        self.plays = 0

    def play(self) -> None:
        self.plays += 1


def beep_file(tmp_path):
    path = tmp_path / "beep.wav"
    path.write_bytes(assets.beep_wav_bytes())
    return path


def test_output_is_created_once(tmp_path) -> None:
    clip_file = beep_file(tmp_path)
    created: list[FakeClip] = []

    def factory(path):
        clip = FakeClip(path)
        created.append(clip)
        return clip

    player = SoundPlayer(clip=clip_file, factory=factory)
    player.play()
    player.play()
    player.acquire()

    assert len(created) == 1
    assert created[0].path == clip_file
    assert created[0].plays == 2
    assert player.initialized is True


def test_failed_setup_is_not_retried(tmp_path) -> None:
    attempts: list[int] = []

    def factory(path):
        attempts.append(1)
        raise RuntimeError("no audio backend")

    player = SoundPlayer(clip=beep_file(tmp_path), factory=factory)

    with pytest.raises(SoundError):
        player.play()
    with pytest.raises(SoundError):
        player.play()
    assert attempts == [1]


def test_missing_custom_clip_is_a_sound_error(tmp_path) -> None:
    player = SoundPlayer(clip=tmp_path / "missing.wav", factory=FakeClip)

    with pytest.raises(SoundError):
        player.play()


def test_beep_is_mono_wav() -> None:
    data = assets.beep_wav_bytes(duration_s=0.1)

    with wave.open(io.BytesIO(data), "rb") as wf:
        assert wf.getnchannels() == 1
        assert wf.getsampwidth() == 2
        assert wf.getframerate() == assets.SAMPLE_RATE
        assert wf.getnframes() == int(assets.SAMPLE_RATE * 0.1)


def test_default_clip_is_private_fresh_and_cached(tmp_path, monkeypatch) -> None:
    monkeypatch.setattr(assets.tempfile, "tempdir", str(tmp_path))
    monkeypatch.setattr(assets, "_CLIP_CACHE", {})
    victim = tmp_path / "victim.txt"
    victim.write_text("keep me")
    (tmp_path / "manta_notify.wav").symlink_to(victim)
    (tmp_path / "manta_stale.wav").write_bytes(b"RIFF")

    first = assets.notification_clip()
    second = assets.notification_clip()

    assert first == second
    assert first.parent == tmp_path
    assert first.name not in {"manta_notify.wav", "manta_stale.wav"}
    assert not first.is_symlink()
    assert first.read_bytes() == assets.beep_wav_bytes()
    assert os.stat(first).st_mode & 0o077 == 0
    assert victim.read_text() == "keep me"
