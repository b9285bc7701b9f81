"""Terminal adapter used by the navigation loop and by menu actions."""

from __future__ import annotations

import codecs
import os
import sys
from contextlib import contextmanager
from enum import Enum
from typing import Callable, Iterator, Optional, Protocol, Union

import readchar
from rich.console import Console
from rich.text import Text

from term_select.exceptions import TerminalIOError
from term_select.logging import LoggerFactory

_IS_WINDOWS = os.name == "nt"

if not _IS_WINDOWS:
    import select
    import termios
    import tty

log = LoggerFactory.for_terminal()

Line = Union[str, Text]
KeyReader = Callable[[], str]
LineReader = Callable[[str], str]

# Seconds to wait after Esc for the rest of an escape sequence.
ESCAPE_TIMEOUT = 0.05

# termios.error is not an OSError subclass.
if _IS_WINDOWS:
    _TERMINAL_ERRORS: tuple = (OSError,)
else:
    _TERMINAL_ERRORS = (OSError, termios.error)

_CSI = readchar.key.ESC + "["
_SS3 = readchar.key.ESC + "O"
_MAX_SEQUENCE = 16


class Key(Enum):
    ARROW_UP = "up"
    ARROW_DOWN = "down"
    ARROW_LEFT = "left"
    ENTER = "enter"
    ESCAPE = "escape"
    OTHER = "other"


_RAW_KEYS = {
    readchar.key.UP: Key.ARROW_UP,
    readchar.key.DOWN: Key.ARROW_DOWN,
    readchar.key.LEFT: Key.ARROW_LEFT,
    _SS3 + "A": Key.ARROW_UP,
    _SS3 + "B": Key.ARROW_DOWN,
    _SS3 + "D": Key.ARROW_LEFT,
    readchar.key.ENTER: Key.ENTER,
    readchar.key.CR: Key.ENTER,
    readchar.key.LF: Key.ENTER,
    readchar.key.ESC: Key.ESCAPE,
}


def key_from_raw(raw: str) -> Key:
    """Map a raw key string to a ``Key``.

    Esc followed by an ordinary character (Esc typed quickly before another
    key, or an Alt chord) counts as Escape. Unknown CSI/SS3 sequences such as
    Right or the function keys are ``Key.OTHER``.
    """
    key = _RAW_KEYS.get(raw)
    if key is not None:
        return key
    if raw.startswith(readchar.key.ESC) and not raw.startswith((_CSI, _SS3)):
        return Key.ESCAPE
    return Key.OTHER


def _read_char(fd: int, decoder: codecs.IncrementalDecoder) -> str:
    while True:
        data = os.read(fd, 1)
        if not data:
            raise OSError("terminal input closed")
        text = decoder.decode(data)
        if text:
            return text


def _input_pending(fd: int, timeout: float) -> bool:
    readable, _, _ = select.select([fd], [], [], timeout)
    return bool(readable)


def _read_sequence(fd: int, timeout: float) -> str:
    decoder = codecs.getincrementaldecoder("utf-8")("replace")
    sequence = _read_char(fd, decoder)
    if sequence != readchar.key.ESC or not _input_pending(fd, timeout):
        return sequence
    sequence += _read_char(fd, decoder)
    if sequence == _SS3:
        return sequence + _read_char(fd, decoder)
    if sequence == _CSI:
        # Parameter and intermediate bytes until a final byte in "@".."~".
        while len(sequence) < _MAX_SEQUENCE:
            char = _read_char(fd, decoder)
            sequence += char
            if "@" <= char <= "~":
                break
    return sequence


def read_posix_key(
    fd: Optional[int] = None, *, timeout: float = ESCAPE_TIMEOUT
) -> str:
    """Read one key press from a POSIX terminal in cbreak mode.

    Bytes are read straight from the file descriptor so ``select`` sees
    exactly what is still pending. A lone Esc comes back as ``"\\x1b"`` once
    nothing else arrives within ``timeout`` seconds; arrow keys come back as
    their whole escape sequence. The terminal settings are restored before
    returning. Ctrl+C still raises ``KeyboardInterrupt``.
    """
    if fd is None:
        fd = sys.stdin.fileno()
    old_settings = termios.tcgetattr(fd)
    try:
        tty.setcbreak(fd, termios.TCSANOW)
        return _read_sequence(fd, timeout)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)


def default_key_reader() -> KeyReader:
    if _IS_WINDOWS:
        return readchar.readkey
    return read_posix_key


class Terminal(Protocol):
    def clear_screen(self) -> None: ...

    def write_line(self, text: Line) -> None: ...

    def write_str(self, text: Line) -> None: ...

    def read_key(self) -> Key: ...

    def read_line(self, prompt: str = "") -> str: ...

    def cursor_show(self) -> None: ...

    def cursor_hide(self) -> None: ...


class ConsoleTerminal:
    """Terminal backed by a rich Console for output and raw key reads.

    The same instance is handed to every menu action, so actions can write
    to the screen or prompt for a line of text before returning.
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        key_reader: Optional[KeyReader] = None,
        line_reader: Optional[LineReader] = None,
    ) -> None:
        self.console = console or Console(highlight=False)
        self._key_reader = key_reader or default_key_reader()
        self._line_reader = line_reader

    @contextmanager
    def _io(self, operation: str) -> Iterator[None]:
        try:
            yield
        except _TERMINAL_ERRORS as error:
            log.error(f"Terminal {operation} failed: {error}")
            raise TerminalIOError(operation, str(error)) from error

    def is_interactive(self) -> bool:
        stdin = getattr(sys, "stdin", None)
        checker = getattr(stdin, "isatty", None)
        if not callable(checker):
            return False
        return bool(checker()) and self.console.is_terminal

    def clear_screen(self) -> None:
        with self._io("clear"):
            self.console.clear()

    def write_line(self, text: Line) -> None:
        with self._io("write"):
            self.console.print(text, markup=False, highlight=False, soft_wrap=True)

    def write_str(self, text: Line) -> None:
        with self._io("write"):
            self.console.print(
                text, markup=False, highlight=False, soft_wrap=True, end=""
            )

    def read_key(self) -> Key:
        with self._io("read_key"):
            raw = self._key_reader()
        return key_from_raw(raw)

    def read_line(self, prompt: str = "") -> str:
        with self._io("read_line"):
            if self._line_reader is not None:
                return self._line_reader(prompt)
            return self.console.input(prompt, markup=False)

    def cursor_show(self) -> None:
        with self._io("cursor"):
            self.console.show_cursor(True)

    def cursor_hide(self) -> None:
        with self._io("cursor"):
            self.console.show_cursor(False)
