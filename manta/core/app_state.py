from __future__ import annotations

"""Связка цикла событий Qt с конечным автоматом таймера.

Все источники (тики, кадры анимации, stdin, сигнал изменения размера) вызывают
``AppState.dispatch`` в главном потоке Qt, поэтому события применяются по одному.
"""

import logging
from datetime import datetime
from functools import partial
from typing import Callable

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from manta.config import Settings
from manta.core import notify, sound
from manta.core.errors import NotificationError, SoundError
from manta.core.timer import (
    TICK_MS,
    AnimationFrame,
    ArmTick,
    Command,
    Event,
    KeyPress,
    PlaySound,
    Quit,
    RequestFrame,
    Resize,
    ShowNotification,
    Tick,
    TimerState,
    apply,
)


logger = logging.getLogger(__name__)

Scheduler = Callable[[int, Callable[[], None]], None]


class AppState(QObject):
    state_changed = pyqtSignal()
    quit_requested = pyqtSignal()

    def __init__(
        self,
        settings: Settings | None = None,
        scheduler: Scheduler | None = None,
        play_sound: Callable[[], None] | None = None,
        notifier: Callable[[str, str], None] | None = None,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        super().__init__()
        self.settings = settings or Settings()
        self.timer = TimerState()
        self.sound_enabled = not self.settings.mute
        self._schedule: Scheduler = scheduler or QTimer.singleShot
        self._play_sound = play_sound or sound.play_notification_sound
        self._notify = notifier or partial(notify.show_notification, activate=self.settings.notify_activate)
        self._now = now
        self._stopped = False
        self._frame_pending = False

    @property
    def stopped(self) -> bool:
        return self._stopped

    def start(self) -> None:
        """Arm the first tick and publish the initial view."""
        self._schedule(TICK_MS, self._fire_tick)
        self.state_changed.emit()

    def dispatch(self, event: Event) -> None:
        if self._stopped:
            return
        for command in apply(self.timer, event, self._now):
            self._run(command)
        if not self._stopped:
            self.state_changed.emit()

    def on_key(self, key: str) -> None:
        self.dispatch(KeyPress(key))

    def on_resize(self, width: int, height: int) -> None:
        self.dispatch(Resize(width, height))

    def _fire_tick(self) -> None:
        self.dispatch(Tick())

    def _fire_frame(self) -> None:
        self._frame_pending = False
        self.dispatch(AnimationFrame())

    def _run(self, command: Command) -> None:
        if isinstance(command, Quit):
            self._stopped = True
            self.quit_requested.emit()
        elif isinstance(command, ArmTick):
            self._schedule(command.delay_ms, self._fire_tick)
        elif isinstance(command, RequestFrame):
            # one frame loop at a time; the queued frame keeps stepping toward the new target
            if not self._frame_pending:
                self._frame_pending = True
                self._schedule(command.delay_ms, self._fire_frame)
        elif isinstance(command, PlaySound):
            self._run_play_sound()
        elif isinstance(command, ShowNotification):
            self._run_notify(command.title, command.message)
        else:
            raise TypeError(f"Unsupported command: {command!r}")

    def _run_play_sound(self) -> None:
        if not self.sound_enabled:
            return
        try:
            self._play_sound()
        except SoundError as exc:
            self.sound_enabled = False
            logger.warning("Sound disabled for this session: %s", exc)

    def _run_notify(self, title: str, message: str) -> None:
        try:
            self._notify(title, message)
        except NotificationError as exc:
            logger.info("Notification skipped: %s", exc)
