# binbreak/terminal.py
# Terminal backend: blessed reads keys, rich paints the backing buffer.

import logging
from contextlib import ExitStack
from typing import Callable, Dict, List, Optional

from blessed import Terminal
from blessed.keyboard import Keystroke
from rich.console import Console
from rich.control import Control
from rich.text import Text

from .buffer import Buffer
from .keybinds import BACKSPACE, DOWN, ENTER, ESC, LEFT, RIGHT, TAB, UP, KeyEvent

log = logging.getLogger(__name__)

KEY_NAMES: Dict[str, str] = {
    "KEY_UP": UP,
    "KEY_DOWN": DOWN,
    "KEY_LEFT": LEFT,
    "KEY_RIGHT": RIGHT,
    "KEY_ENTER": ENTER,
    "KEY_ESCAPE": ESC,
    "KEY_TAB": TAB,
    "KEY_BACKSPACE": BACKSPACE,
    "KEY_DELETE": BACKSPACE,
}


def translate_keystroke(ks: Keystroke) -> Optional[KeyEvent]:
    """Map a blessed keystroke to a KeyEvent; None for empty or unknown sequences."""
    if ks.is_sequence:
        code = KEY_NAMES.get(ks.name or "")
        if code is None:
            log.debug("ignoring key sequence %r", ks.name)
            return None
        return KeyEvent(code)
    text = str(ks)
    if len(text) != 1:
        return None
    if text in ("\r", "\n"):
        return KeyEvent(ENTER)
    if text == "\x1b":
        return KeyEvent(ESC)
    if "\x01" <= text <= "\x1a":
        return KeyEvent(chr(ord(text) + 96), ctrl=True)
    return KeyEvent(text)


def buffer_rows(buf: Buffer) -> List[Text]:
    rows = []
    for row in buf.cells:
        line = Text(no_wrap=True, overflow="crop", end="")
        # merge runs of equal style to keep the output small
        run: List[str] = []
        style = None
        for cell in row:
            if cell.style != style and run:
                line.append("".join(run), style=style or None)
                run = []
            style = cell.style
            run.append(cell.char)
        if run:
            line.append("".join(run), style=style or None)
        rows.append(line)
    return rows


class TerminalBackend:
    """Full-screen session. Use as a context manager."""

    def __init__(self, term: Optional[Terminal] = None, console: Optional[Console] = None):
        self.term = term or Terminal()
        self.console = console or Console(highlight=False, soft_wrap=False)
        self._stack: Optional[ExitStack] = None

    def __enter__(self) -> "TerminalBackend":
        self._stack = ExitStack()
        self._stack.enter_context(self.term.fullscreen())
        # raw mode so Ctrl+C arrives as a key instead of SIGINT
        self._stack.enter_context(self.term.raw())
        self._stack.enter_context(self.term.hidden_cursor())
        log.info("terminal session started (%dx%d)", self.term.width, self.term.height)
        return self

    def __exit__(self, *exc):
        if self._stack is not None:
            self._stack.close()
            self._stack = None
        log.info("terminal session closed")
        return False

    def size(self):
        return self.term.width, self.term.height

    def read_event(self, timeout: Optional[float]) -> Optional[KeyEvent]:
        """Wait up to `timeout` seconds for a key; None blocks until one arrives."""
        while True:
            ks = self.term.inkey(timeout=timeout)
            if not ks:
                if timeout is None:
                    continue
                return None
            event = translate_keystroke(ks)
            if event is not None or timeout is not None:
                return event

    def draw(self, render: Callable[[Buffer], None]):
        width, height = self.size()
        buf = Buffer(width, height)
        render(buf)
        # raw mode disables newline translation, so address every row directly
        for y, line in enumerate(buffer_rows(buf)):
            self.console.control(Control.move_to(0, y))
            self.console.print(line, end="")
        self.console.file.flush()
