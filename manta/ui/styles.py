from __future__ import annotations

from PyQt6.QtGui import QColor


HELP_COLOR = "#626262"
GRADIENT_START = "#5A56E0"
GRADIENT_END = "#EE6FF8"
EMPTY_COLOR = "#606060"

FULL_CHAR = "█"
EMPTY_CHAR = "░"

RESET = "\x1b[0m"


def foreground(color: QColor | str) -> str:
    qcolor = QColor(color)
    return f"\x1b[38;2;{qcolor.red()};{qcolor.green()};{qcolor.blue()}m"


def paint(text: str, color: QColor | str) -> str:
    return f"{foreground(color)}{text}{RESET}"


def blend(start: str, end: str, t: float) -> QColor:
    a, b = QColor(start), QColor(end)
    t = max(0.0, min(1.0, t))
    return QColor(
        round(a.red() + (b.red() - a.red()) * t),
        round(a.green() + (b.green() - a.green()) * t),
        round(a.blue() + (b.blue() - a.blue()) * t),
    )


def help_style(text: str) -> str:
    return paint(text, HELP_COLOR)
