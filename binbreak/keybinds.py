# binbreak/keybinds.py
# Key events and the intent predicates screens dispatch on.

from dataclasses import dataclass

UP, DOWN, LEFT, RIGHT = "up", "down", "left", "right"
ENTER, ESC, TAB, BACKSPACE = "enter", "esc", "tab", "backspace"


@dataclass(frozen=True)
class KeyEvent:
    """A key press. `code` is a named key above or a single character."""
    code: str
    ctrl: bool = False

    def is_char(self, *chars: str) -> bool:
        return not self.ctrl and self.code in chars


def is_up(key: KeyEvent) -> bool: return key.code == UP or key.is_char("k")
def is_down(key: KeyEvent) -> bool: return key.code == DOWN or key.is_char("j")
def is_left(key: KeyEvent) -> bool: return key.code == LEFT or key.is_char("h")
def is_right(key: KeyEvent) -> bool: return key.code == RIGHT or key.is_char("l")
def is_select(key: KeyEvent) -> bool: return key.code == ENTER
def is_exit(key: KeyEvent) -> bool: return key.code == ESC or key.is_char("q", "Q")

def is_force_quit(key: KeyEvent) -> bool:
    return key.ctrl and key.code in ("c", "C")
