from __future__ import annotations

"""Текстовая отрисовка состояния таймера; модуль ничего не изменяет."""

from manta.core.progress import ProgressBar
from manta.core.timer import CHOICES, DURATIONS, PADDING, TimerState
from manta.ui.styles import (
    EMPTY_CHAR,
    EMPTY_COLOR,
    FULL_CHAR,
    GRADIENT_END,
    GRADIENT_START,
    blend,
    help_style,
    paint,
)


PLAY_GLYPH = "▶️"
PAUSE_GLYPH = "⏸️"


def format_remaining(seconds: int) -> str:
    """Форматирует остаток как `MMmSSs`."""
    minutes, secs = divmod(max(0, seconds), 60)
    return f"{minutes:02d}m{secs:02d}s"


def render_bar(bar: ProgressBar) -> str:
    """Рисует бар с градиентом и процентом по отображаемому значению."""
    shown = max(0.0, min(1.0, bar.shown))
    filled = round(bar.width * shown)
    cells = []
    for i in range(filled):
        t = i / (bar.width - 1) if bar.width > 1 else 0.0
        cells.append(paint(FULL_CHAR, blend(GRADIENT_START, GRADIENT_END, t)))
    if filled < bar.width:
        cells.append(paint(EMPTY_CHAR * (bar.width - filled), EMPTY_COLOR))
    return "".join(cells) + f" {round(shown * 100):3d}%"


def render_menu(state: TimerState) -> str:
    """Меню выбора режима с отмеченным курсором."""
    lines = ["Choose time type:"]
    for i, choice in enumerate(CHOICES):
        marker = "[•]" if state.cursor_index == i else "[ ]"
        minutes = DURATIONS[choice] // 60
        lines.append(f"{marker} {choice.label} ({minutes:02d}m)")
    lines.append("")
    lines.append("(press q to quit)")
    return "\n".join(lines) + "\n"


def render_countdown(state: TimerState) -> str:
    pad = " " * PADDING
    glyph = PAUSE_GLYPH if state.paused else PLAY_GLYPH
    status = format_remaining(state.remaining_seconds)
    if state.end_time is not None:
        status += " -> " + state.end_time.strftime("%H:%M:%S")
    return (
        "\n"
        + pad + state.phase.label + "\n\n"
        + pad + render_bar(state.progress) + "\n\n"
        + pad + f"{status} {glyph}" + "\n\n"
        + pad + help_style("space: pause/resume • esc: back to menu • q: quit")
    )


def render(state: TimerState) -> str:
    """Меню при нулевом остатке, иначе экран обратного отсчета."""
    if state.remaining_seconds == 0:
        return render_menu(state)
    return render_countdown(state)
