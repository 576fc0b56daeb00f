from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Callable, Union

from manta.core.progress import FRAME_MS, ProgressBar


logger = logging.getLogger(__name__)

PADDING = 2
MAX_WIDTH = 80
TICK_MS = 1000


class Phase(str, Enum):
    IDLE = "idle"
    WORK = "work"
    REST = "rest"

    @property
    def label(self) -> str:
        return self.value


CHOICES: tuple[Phase, ...] = (Phase.WORK, Phase.REST)
DURATIONS: dict[Phase, int] = {
    Phase.WORK: 25 * 60,
    Phase.REST: 5 * 60,
}


# Events


@dataclass(frozen=True)
class KeyPress:
    key: str


@dataclass(frozen=True)
class Resize:
    width: int
    height: int


@dataclass(frozen=True)
class Tick:
    pass


@dataclass(frozen=True)
class AnimationFrame:
    pass


Event = Union[KeyPress, Resize, Tick, AnimationFrame]


# Commands


@dataclass(frozen=True)
class Quit:
    pass


@dataclass(frozen=True)
class PlaySound:
    pass


@dataclass(frozen=True)
class ShowNotification:
    title: str
    message: str


@dataclass(frozen=True)
class ArmTick:
    delay_ms: int = TICK_MS


@dataclass(frozen=True)
class RequestFrame:
    delay_ms: int = FRAME_MS


Command = Union[Quit, PlaySound, ShowNotification, ArmTick, RequestFrame]


@dataclass
class TimerState:
    phase: Phase = Phase.IDLE
    remaining_seconds: int = 0
    total_seconds: int = 0
    paused: bool = False
    cursor_index: int = 0
    end_time: datetime | None = None
    progress: ProgressBar = field(default_factory=ProgressBar)

    @property
    def is_idle(self) -> bool:
        return self.phase == Phase.IDLE

    @property
    def progress_fraction(self) -> float:
        if self.total_seconds <= 0:
            return 0.0
        return max(0.0, min(1.0, 1.0 - self.remaining_seconds / self.total_seconds))

    @property
    def selected(self) -> Phase:
        return CHOICES[self.cursor_index]


def completion_message(phase: Phase) -> str:
    return f"Time to {phase.label} is over"


def apply(state: TimerState, event: Event, now: Callable[[], datetime] = datetime.now) -> list[Command]:
    """Apply one event to ``state`` in place and return the commands it produced."""
    if isinstance(event, KeyPress):
        return _on_key(state, event.key, now)
    if isinstance(event, Resize):
        state.progress.set_width(min(event.width - PADDING * 2 - 4, MAX_WIDTH))
        return []
    if isinstance(event, Tick):
        return _on_tick(state)
    if isinstance(event, AnimationFrame):
        return [RequestFrame()] if state.progress.step() else []
    raise TypeError(f"Unsupported event: {event!r}")


def _on_key(state: TimerState, key: str, now: Callable[[], datetime]) -> list[Command]:
    if key in {"ctrl+c", "q"}:
        return [Quit()]

    if key == "enter":
        if not state.is_idle:
            return []
        phase = state.selected
        state.phase = phase
        state.total_seconds = DURATIONS[phase]
        state.remaining_seconds = DURATIONS[phase]
        state.paused = False
        state.end_time = now() + timedelta(seconds=state.remaining_seconds)
        logger.info("Started %s for %ss", phase.label, state.total_seconds)
        state.progress.reset()
        return []

    if key in {"down", "j"}:
        state.cursor_index = (state.cursor_index + 1) % len(CHOICES)
        return []

    if key in {"up", "k"}:
        state.cursor_index = (state.cursor_index - 1) % len(CHOICES)
        return []

    if key == "space":
        state.paused = not state.paused
        if not state.is_idle:
            state.end_time = now() + timedelta(seconds=state.remaining_seconds)
        logger.debug("Paused" if state.paused else "Resumed")
        return []

    if key == "esc":
        if not state.is_idle:
            logger.info("Reset %s with %ss left", state.phase.label, state.remaining_seconds)
        _to_idle(state)
        state.progress.reset()
        return []

    return []


def _on_tick(state: TimerState) -> list[Command]:
    commands: list[Command] = [ArmTick()]
    if state.is_idle or state.paused:
        return commands

    state.remaining_seconds = max(0, state.remaining_seconds - 1)
    commands.extend(_retarget(state))

    if state.remaining_seconds == 0:
        finished = state.phase
        logger.info("Finished %s", finished.label)
        _to_idle(state)
        commands.extend([PlaySound(), ShowNotification("manta", completion_message(finished))])
    return commands


def _to_idle(state: TimerState) -> None:
    state.phase = Phase.IDLE
    state.remaining_seconds = 0
    state.paused = False
    state.end_time = None


def _retarget(state: TimerState) -> list[Command]:
    return [RequestFrame()] if state.progress.set_percent(state.progress_fraction) else []
