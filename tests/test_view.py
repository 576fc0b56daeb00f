from datetime import datetime

from manta.core.progress import ProgressBar
from manta.core.timer import KeyPress, Phase, Tick, TimerState, apply
from manta.ui.styles import EMPTY_CHAR, FULL_CHAR
from manta.ui.view import PAUSE_GLYPH, PLAY_GLYPH, format_remaining, render, render_bar


def test_menu_view_marks_cursor() -> None:
    text = render(TimerState(cursor_index=1))

    assert text == (
        "Choose time type:\n"
        "[ ] work (25m)\n"
        "[•] rest (05m)\n"
        "\n"
        "(press q to quit)\n"
    )


def test_countdown_view_shows_phase_time_and_glyph() -> None:
    state = TimerState(
        phase=Phase.WORK,
        remaining_seconds=754,
        total_seconds=1500,
        end_time=datetime(2026, 1, 1, 9, 30, 5),
    )

    text = render(state)

    assert "  work\n" in text
    assert "12m34s -> 09:30:05 " + PLAY_GLYPH in text
    assert "q: quit" in text
    assert "Choose time type" not in text


def test_countdown_view_paused_glyph() -> None:
    state = TimerState(phase=Phase.REST, remaining_seconds=10, total_seconds=300, paused=True)

    assert PAUSE_GLYPH in render(state)


def test_render_does_not_mutate_state() -> None:
    state = TimerState(phase=Phase.REST, remaining_seconds=10, total_seconds=300)
    before = repr(state)

    render(state)

    assert repr(state) == before


def test_format_remaining() -> None:
    assert format_remaining(1500) == "25m00s"
    assert format_remaining(61) == "01m01s"
    assert format_remaining(-3) == "00m00s"


def test_render_bar_cells_and_percent() -> None:
    bar = ProgressBar(width=10, shown=0.5)

    text = render_bar(bar)

    assert text.count(FULL_CHAR) == 5
    assert EMPTY_CHAR * 5 in text
    assert text.endswith("  50%")


def test_render_bar_full() -> None:
    text = render_bar(ProgressBar(width=4, shown=1.0))

    assert text.count(FULL_CHAR) == 4
    assert EMPTY_CHAR not in text
    assert text.endswith(" 100%")


def test_render_after_reset_shows_menu() -> None:
    state = TimerState()
    apply(state, KeyPress("enter"))
    apply(state, Tick())
    assert "Choose time type" not in render(state)

    apply(state, KeyPress("esc"))

    assert render(state).startswith("Choose time type:\n[•] work (25m)")
