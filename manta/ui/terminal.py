from __future__ import annotations

import logging
import os
import signal
import socket
import sys
import termios
import tty
from typing import TextIO

from PyQt6.QtCore import QObject, QSocketNotifier, pyqtSignal

from manta.core.errors import TerminalError


logger = logging.getLogger(__name__)

ALT_SCREEN_ON = "\x1b[?1049h"
ALT_SCREEN_OFF = "\x1b[?1049l"
CURSOR_HIDE = "\x1b[?25l"
CURSOR_SHOW = "\x1b[?25h"
CLEAR = "\x1b[H\x1b[2J"

_ESCAPES = {
    b"\x1b[A": "up",
    b"\x1b[B": "down",
    b"\x1b[C": "right",
    b"\x1b[D": "left",
    b"\x1bOA": "up",
    b"\x1bOB": "down",
    b"\x1bOC": "right",
    b"\x1bOD": "left",
}
_SINGLE = {
    b"\x03": "ctrl+c",
    b"\r": "enter",
    b"\n": "enter",
    b" ": "space",
    b"\x7f": "backspace",
    b"\t": "tab",
}


def decode_keys(data: bytes) -> list[str]:
    """Translate a chunk read from a raw-mode terminal into key names."""
    keys: list[str] = []
    i = 0
    while i < len(data):
        if data[i:i + 1] == b"\x1b":
            if i + 1 == len(data) or data[i + 1:i + 2] == b"\x1b":
                keys.append("esc")
                i += 1
                continue
            introducer = data[i + 1:i + 2]
            if introducer == b"[":
                # CSI parameters end at the first byte in 0x40-0x7e
                end = i + 2
                while end < len(data) and not 0x40 <= data[end] <= 0x7E:
                    end += 1
                end = min(end + 1, len(data))
            elif introducer == b"O":
                end = min(i + 3, len(data))
            else:
                end = i + 2
            sequence = data[i:end]
            if sequence in _ESCAPES:
                keys.append(_ESCAPES[sequence])
            else:
                logger.debug("Ignoring escape sequence %r", sequence)
            i = end
            continue

        byte = data[i:i + 1]
        if byte in _SINGLE:
            keys.append(_SINGLE[byte])
            i += 1
            continue

        # multi-byte UTF-8 characters are passed through whole
        length = 1
        lead = data[i]
        if lead >= 0xF0:
            length = 4
        elif lead >= 0xE0:
            length = 3
        elif lead >= 0xC0:
            length = 2
        char = data[i:i + length].decode("utf-8", errors="ignore")
        if char.isprintable() and char:
            keys.append(char)
        i += length
    return keys


class Terminal(QObject):
    """Raw-mode terminal wired into the Qt event loop."""

    key_pressed = pyqtSignal(str)
    resized = pyqtSignal(int, int)

    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
        super().__init__()
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout
        self._saved_attrs: list | None = None
        self._key_notifier: QSocketNotifier | None = None
        self._signal_notifier: QSocketNotifier | None = None
        self._signal_pair: tuple[socket.socket, socket.socket] | None = None
        self._previous_wakeup_fd = -1
        self._previous_winch = None

    @property
    def is_open(self) -> bool:
        return self._saved_attrs is not None

    def size(self) -> tuple[int, int]:
        cols, lines = os.get_terminal_size(self._stdout.fileno())
        return cols, lines

    def open(self) -> None:
        if not (self._stdin.isatty() and self._stdout.isatty()):
            raise TerminalError("manta needs an interactive terminal")
        in_fd = self._stdin.fileno()
        try:
            self._saved_attrs = termios.tcgetattr(in_fd)
            tty.setraw(in_fd)
        except termios.error as exc:
            self._saved_attrs = None
            raise TerminalError(f"cannot switch terminal to raw mode: {exc}") from exc

        self._write(ALT_SCREEN_ON + CURSOR_HIDE)

        self._key_notifier = QSocketNotifier(in_fd, QSocketNotifier.Type.Read, self)
        self._key_notifier.activated.connect(self._read_keys)

        reader, writer = socket.socketpair()
        reader.setblocking(False)
        writer.setblocking(False)
        self._signal_pair = (reader, writer)
        self._previous_wakeup_fd = signal.set_wakeup_fd(writer.fileno())
        self._previous_winch = signal.signal(signal.SIGWINCH, lambda *_args: None)
        self._signal_notifier = QSocketNotifier(reader.fileno(), QSocketNotifier.Type.Read, self)
        self._signal_notifier.activated.connect(self._read_signals)

        self.resized.emit(*self.size())

    def close(self) -> None:
        if not self.is_open:
            return
        for notifier in (self._key_notifier, self._signal_notifier):
            if notifier is not None:
                notifier.setEnabled(False)
        self._key_notifier = None
        self._signal_notifier = None

        signal.set_wakeup_fd(self._previous_wakeup_fd)
        if self._previous_winch is not None:
            signal.signal(signal.SIGWINCH, self._previous_winch)
        if self._signal_pair is not None:
            for sock in self._signal_pair:
                sock.close()
            self._signal_pair = None

        self._write(CURSOR_SHOW + ALT_SCREEN_OFF)
        termios.tcsetattr(self._stdin.fileno(), termios.TCSADRAIN, self._saved_attrs)
        self._saved_attrs = None

    def draw(self, text: str) -> None:
        # raw mode disables the newline to carriage-return translation
        self._write(CLEAR + text.replace("\n", "\r\n"))

    def _write(self, text: str) -> None:
        self._stdout.write(text)
        self._stdout.flush()

    def _read_keys(self, *_args) -> None:
        try:
            data = os.read(self._stdin.fileno(), 1024)
        except BlockingIOError:
            return
        for key in decode_keys(data):
            self.key_pressed.emit(key)

    def _read_signals(self, *_args) -> None:
        assert self._signal_pair is not None
        try:
            received = self._signal_pair[0].recv(64)
        except BlockingIOError:
            return
        if int(signal.SIGWINCH) in received:
            self.resized.emit(*self.size())
