from __future__ import annotations

"""Точка входа терминального таймера manta.

Модуль настраивает логирование, цикл событий Qt и терминал, связывает
сигналы терминала с таймером и работает до выхода пользователя.
"""

import logging
import signal
import sys

from PyQt6.QtCore import QCoreApplication, QTimer

from manta.config import Settings
from manta.core import sound
from manta.core.app_state import AppState
from manta.core.errors import MantaError
from manta.ui.terminal import Terminal
from manta.ui.view import render


logger = logging.getLogger("manta")


def configure_logging(settings: Settings) -> None:
    """Пишет лог в файл по запросу; сам терминал занят интерфейсом."""
    if settings.log_file is None:
        if not logger.handlers:
            logger.addHandler(logging.NullHandler())
        logger.propagate = False
        return
    settings.log_file.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=str(settings.log_file),
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run(settings: Settings) -> int:
    """Собирает зависимости, запускает цикл событий и возвращает код выхода."""
    app = QCoreApplication.instance() or QCoreApplication(sys.argv)
    app.setApplicationName("manta")

    sound.configure(settings.sound_file)
    state = AppState(settings=settings)
    terminal = Terminal()

    state.state_changed.connect(lambda: terminal.draw(render(state.timer)))
    state.quit_requested.connect(app.quit)
    terminal.key_pressed.connect(state.on_key)
    terminal.resized.connect(state.on_resize)

    failures: list[BaseException] = []

    # exceptions raised inside Qt slots never reach the caller of exec()
    def excepthook(exc_type, exc, tb) -> None:
        if issubclass(exc_type, KeyboardInterrupt):
            state.on_key("ctrl+c")
            app.exit(0)
            return
        logger.error("Timer crashed", exc_info=(exc_type, exc, tb))
        failures.append(exc)
        app.exit(1)

    # raw mode turns off ISIG, so only signals sent from outside land here
    def interrupt(signum, _frame) -> None:
        logger.info("Received signal %s", signum)
        QTimer.singleShot(0, lambda: state.on_key("ctrl+c"))

    previous_hook = sys.excepthook
    previous_handlers = {signum: signal.getsignal(signum) for signum in (signal.SIGINT, signal.SIGTERM)}
    sys.excepthook = excepthook
    for signum in previous_handlers:
        signal.signal(signum, interrupt)
    code = 1
    try:
        terminal.open()
        if not failures:
            state.start()
            code = app.exec()
    finally:
        terminal.close()
        sys.excepthook = previous_hook
        for signum, handler in previous_handlers.items():
            signal.signal(signum, handler)

    if failures:
        print(f"Oh no! {failures[0]}", file=sys.stderr)
        return 1
    return code


def main() -> int:
    """Запускает таймер; возвращает 0 при выходе пользователя и 1 при ошибке."""
    settings = Settings.from_env()
    configure_logging(settings)
    try:
        code = run(settings)
    except MantaError as exc:
        logger.error("Startup failed: %s", exc)
        print(f"Oh no! {exc}", file=sys.stderr)
        return 1
    except Exception as exc:
        logger.exception("Timer crashed")
        print(f"Oh no! {exc}", file=sys.stderr)
        return 1
    logger.info("Exited with status %s", code)
    return code


if __name__ == "__main__":
    raise SystemExit(main())
