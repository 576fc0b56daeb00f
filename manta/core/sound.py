from __future__ import annotations

"""Воспроизведение звука уведомления.

Аудиовыход создается один раз на процесс при первом запросе и живет до выхода.
Воспроизведение не блокирует цикл; новый запрос перезапускает звук.
"""

import logging
import threading
from pathlib import Path
from typing import Callable, Protocol

from manta.core.assets import notification_clip
from manta.core.errors import SoundError


logger = logging.getLogger(__name__)

DEFAULT_VOLUME = 0.6


class Clip(Protocol):
    def play(self) -> None: ...


class _QtClip:
    def __init__(self, path: Path) -> None:
        from PyQt6.QtCore import QUrl
        from PyQt6.QtMultimedia import QSoundEffect

        self._error_status = QSoundEffect.Status.Error
        self._effect = QSoundEffect()
        self._effect.setSource(QUrl.fromLocalFile(str(path)))
        self._effect.setLoopCount(1)
        self._effect.setVolume(DEFAULT_VOLUME)
        if self._effect.status() == self._error_status:
            raise SoundError(f"cannot load {path}")

    def play(self) -> None:
        if self._effect.status() == self._error_status:
            raise SoundError(f"cannot decode {self._effect.source().toLocalFile()}")
        self._effect.stop()
        self._effect.play()


class SoundPlayer:
    def __init__(self, clip: Path | None = None, factory: Callable[[Path], Clip] = _QtClip) -> None:
        self.clip = clip
        self._factory = factory
        self._lock = threading.Lock()
        self._output: Clip | None = None
        self._failure: SoundError | None = None

    @property
    def initialized(self) -> bool:
        return self._output is not None

    def acquire(self) -> Clip:
        """Return the shared output, creating it once. A failed setup is never retried."""
        with self._lock:
            if self._output is not None:
                return self._output
            if self._failure is not None:
                raise self._failure
            try:
                self._output = self._factory(notification_clip(self.clip))
            except SoundError as exc:
                self._failure = exc
                raise
            except (OSError, RuntimeError, ImportError) as exc:
                self._failure = SoundError(f"audio setup failed: {exc}")
                raise self._failure from exc
            logger.debug("Audio output ready")
            return self._output

    def play(self) -> None:
        self.acquire().play()


_PLAYER = SoundPlayer()


def configure(clip: Path | None) -> None:
    """Choose the clip before the first playback; later calls have no effect."""
    if not _PLAYER.initialized:
        _PLAYER.clip = clip


def play_notification_sound() -> None:
    _PLAYER.play()
