from __future__ import annotations

"""Модель прогресс-бара с пружинной анимацией.

Бар хранит целевой и отображаемый процент. Каждый кадр анимации сдвигает
отображаемое значение к цели по критически затухающей пружине.
"""

from dataclasses import dataclass, field
from math import exp


FPS = 60
FRAME_MS = 1000 // FPS
DEFAULT_WIDTH = 40
SPRING_FREQUENCY = 18.0
SPRING_DAMPING = 1.0

_SETTLE_DISTANCE = 0.001
_SETTLE_VELOCITY = 0.01


@dataclass(frozen=True)
class Spring:
    """Precomputed coefficients of a critically damped spring for a fixed time step."""

    pos_pos: float
    pos_vel: float
    vel_pos: float
    vel_vel: float

    @classmethod
    def critically_damped(cls, delta_time: float, frequency: float) -> "Spring":
        exp_term = exp(-frequency * delta_time)
        time_exp = delta_time * exp_term
        time_exp_freq = time_exp * frequency
        return cls(
            pos_pos=time_exp_freq + exp_term,
            pos_vel=time_exp,
            vel_pos=-frequency * time_exp_freq,
            vel_vel=-time_exp_freq + exp_term,
        )

    def update(self, position: float, velocity: float, target: float) -> tuple[float, float]:
        offset = position - target
        new_position = offset * self.pos_pos + velocity * self.pos_vel + target
        new_velocity = offset * self.vel_pos + velocity * self.vel_vel
        return new_position, new_velocity


_SPRING = Spring.critically_damped(1.0 / FPS, SPRING_FREQUENCY)


@dataclass
class ProgressBar:
    width: int = DEFAULT_WIDTH
    target: float = 0.0
    shown: float = 0.0
    velocity: float = 0.0
    _spring: Spring = field(default=_SPRING, repr=False, compare=False)

    @property
    def is_animating(self) -> bool:
        distance = abs(self.shown - self.target)
        return not (distance < _SETTLE_DISTANCE and abs(self.velocity) < _SETTLE_VELOCITY)

    def set_percent(self, percent: float) -> bool:
        """Set a new target. Returns True when a frame loop must be started."""
        was_animating = self.is_animating
        self.target = max(0.0, min(1.0, percent))
        if not self.is_animating:
            # too close to animate, jump straight to the target
            self.shown = self.target
            self.velocity = 0.0
            return False
        return not was_animating

    def step(self) -> bool:
        """Advance one frame; returns True while another frame is needed."""
        if not self.is_animating:
            return False
        self.shown, self.velocity = self._spring.update(self.shown, self.velocity, self.target)
        if not self.is_animating:
            self.shown = self.target
            self.velocity = 0.0
            return False
        return True

    def set_width(self, width: int) -> None:
        self.width = max(1, width)

    def reset(self) -> None:
        self.target = 0.0
        self.shown = 0.0
        self.velocity = 0.0
