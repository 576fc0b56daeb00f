from __future__ import annotations

"""Поиск и синтез звука уведомления с кэшированием в памяти."""

import atexit
import io
import math
import os
import struct
import tempfile
import wave
from pathlib import Path


SAMPLE_RATE = 44100
_CLIP_CACHE: dict[str, Path] = {}


def beep_wav_bytes(frequency: float = 880.0, duration_s: float = 0.45) -> bytes:
    """Собирает в памяти короткий моно-сигнал 16 бит с плавной атакой и затуханием."""
    n_frames = int(SAMPLE_RATE * duration_s)
    frames = bytearray()
    for i in range(n_frames):
        t = i / SAMPLE_RATE
        envelope = min(1.0, t * 10) * min(1.0, (duration_s - t) * 10)
        frames += struct.pack("<h", int(32767 * 0.6 * envelope * math.sin(2 * math.pi * frequency * t)))

    buffer = io.BytesIO()
    with wave.open(buffer, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(bytes(frames))
    return buffer.getvalue()


def _remove_quietly(path: Path) -> None:
    try:
        path.unlink()
    except FileNotFoundError:
        pass


def synthesize_clip() -> Path:
    """Пишет сигнал в новый приватный временный файл и удаляет его при выходе."""
    # mkstemp opens with O_EXCL and mode 0600, so a planted file or symlink is never reused
    fd, name = tempfile.mkstemp(prefix="manta_", suffix=".wav")
    path = Path(name)
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(beep_wav_bytes())
    except OSError:
        _remove_quietly(path)
        raise
    atexit.register(_remove_quietly, path)
    return path


def notification_clip(custom: Path | None = None) -> Path:
    """Возвращает звук для воспроизведения; стандартный сигнал создается один раз за процесс.

    Для отсутствующего пользовательского файла бросает ``FileNotFoundError``.
    """
    key = str(custom) if custom is not None else ""
    if key in _CLIP_CACHE:
        return _CLIP_CACHE[key]

    if custom is not None:
        if not custom.is_file():
            raise FileNotFoundError(custom)
        path = custom
    else:
        path = synthesize_clip()

    _CLIP_CACHE[key] = path
    return path
