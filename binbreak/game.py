# binbreak/game.py
# The binary-number guessing game: read the bits, pick the matching decimal
# value before the round timer runs out.

import logging
import random
import time
from enum import Enum
from typing import List, Optional

from . import keybinds
from .animation import AsciiAnimation, Clock
from .art import AsciiArt, AsciiCells, render_figlet_block, uniform_color_map
from .buffer import Buffer, Rect, center_rect
from .keybinds import KeyEvent

log = logging.getLogger(__name__)

LIVES = 3
SUGGESTIONS = 4
SPINNER = ["|", "/", "-", "\\"]


class Bits(Enum):
    # (significant bits, left shift)
    FOUR = (4, 0)
    FOUR_SHIFT_4 = (4, 4)
    FOUR_SHIFT_8 = (4, 8)
    FOUR_SHIFT_12 = (4, 12)
    EIGHT = (8, 0)
    TWELVE = (12, 0)
    SIXTEEN = (16, 0)

    @property
    def count(self) -> int: return self.value[0]

    @property
    def shift(self) -> int: return self.value[1]

    @property
    def width(self) -> int: return self.count + self.shift

    @property
    def time_limit(self) -> float:
        return 4.0 + self.count

    def random_value(self, rng: random.Random) -> int:
        return rng.randrange(1, 1 << self.count) << self.shift


class Phase(Enum):
    ACTIVE = "active"
    RESULT = "result"
    GAME_OVER = "game_over"


def format_bits(value: int, width: int) -> str:
    digits = format(value, f"0{width}b")
    # group in nibbles, most significant first
    groups = [digits[max(0, i - 4):i] for i in range(len(digits), 0, -4)]
    return "  ".join(" ".join(g) for g in reversed(groups))


class BinaryNumbersGame:
    def __init__(self, bits: Bits, rng: Optional[random.Random] = None, clock: Clock = time.perf_counter):
        self.bits = bits
        self.rng = rng or random.Random()
        self.clock = clock
        self.score = 0
        self.streak = 0
        self.best_streak = 0
        self.rounds = 0
        self.lives = LIVES
        self.exit_intended = False
        self.last_result: Optional[str] = None
        self.spinner = self._build_spinner()
        self._game_over_art: Optional[AsciiArt] = None
        self.new_round()

    # ---- collaborator interface ----

    def is_active(self) -> bool:
        return self.phase is Phase.ACTIVE

    def is_exit_intended(self) -> bool:
        return self.exit_intended

    def run(self, dt: float):
        if self.phase is not Phase.ACTIVE:
            return
        self.time_left = max(0.0, self.time_left - dt)
        if self.time_left <= 0.0:
            self._finish_round(correct=False, timed_out=True)

    def handle_input(self, key: KeyEvent):
        if keybinds.is_exit(key):
            self.exit_intended = True
            return
        if self.phase is Phase.ACTIVE:
            if keybinds.is_left(key):
                self.selected = (self.selected - 1) % len(self.suggestions)
            elif keybinds.is_right(key):
                self.selected = (self.selected + 1) % len(self.suggestions)
            elif keybinds.is_select(key):
                self._finish_round(correct=self.suggestions[self.selected] == self.target)
        elif keybinds.is_select(key):
            if self.phase is Phase.GAME_OVER:
                self.restart()
            else:
                self.new_round()

    # ---- rounds ----

    def new_round(self):
        self.target = self.bits.random_value(self.rng)
        self.suggestions = self._make_suggestions(self.target)
        self.selected = 0
        self.time_left = self.bits.time_limit
        self.phase = Phase.ACTIVE
        self.spinner.reset()

    def restart(self):
        log.info("restarting %s game", self.bits.name)
        self.score = self.streak = self.rounds = 0
        self.lives = LIVES
        self.last_result = None
        self.new_round()

    def _make_suggestions(self, target: int) -> List[int]:
        values = {target}
        while len(values) < SUGGESTIONS:
            values.add(self.bits.random_value(self.rng))
        out = sorted(values)
        self.rng.shuffle(out)
        return out

    def _finish_round(self, correct: bool, timed_out: bool = False):
        self.rounds += 1
        if correct:
            self.streak += 1
            self.best_streak = max(self.best_streak, self.streak)
            self.score += 10 * self.bits.count // 4 + int(self.time_left) + 5 * (self.streak - 1)
            self.last_result = "correct!"
        else:
            self.streak = 0
            self.lives -= 1
            self.last_result = "time's up" if timed_out else "wrong"
            self.last_result += f", it was {self.target}"
        self.phase = Phase.GAME_OVER if self.lives <= 0 else Phase.RESULT
        log.info("round %d finished: %s (score=%d, lives=%d)", self.rounds, self.last_result, self.score, self.lives)

    # ---- rendering ----

    def _build_spinner(self) -> AsciiAnimation:
        frames = [AsciiCells.parse(ch, "s", {"s": "bright_yellow"}, "white") for ch in SPINNER]
        return AsciiAnimation(frames, 0.125, True, self.clock)

    def _game_over(self) -> AsciiArt:
        if self._game_over_art is None:
            block = render_figlet_block("game over", "small")
            width = max((len(line) for line in block), default=0)
            block = [line.ljust(width) for line in block]
            cells = AsciiCells.parse("\n".join(block), "\n".join(uniform_color_map(block, "r")),
                                     {"r": "bold bright_red"}, "white")
            self._game_over_art = AsciiArt(cells)
        return self._game_over_art

    def render(self, area: Rect, buf: Buffer):
        box = center_rect(area, 72, 16)
        hud = f"{self.bits.name.lower():<14} score {self.score:<6} streak {self.streak:<3} best {self.best_streak:<3}"
        buf.set_string(box.x, box.y, hud, "bold bright_cyan", clip=box)
        buf.set_string(box.x + 62, box.y, "♥" * self.lives + "·" * (LIVES - self.lives), "bright_red", clip=box)

        # timer bar
        fraction = self.time_left / self.bits.time_limit
        bar_width = box.width - 4
        filled = int(round(bar_width * fraction))
        bar_style = "bright_green" if fraction > 0.5 else "bright_yellow" if fraction > 0.2 else "bright_red"
        bar = Rect(box.x + 2, box.y + 2, max(0, bar_width), 1).intersection(box)
        buf.fill(Rect(bar.x, bar.y, min(filled, bar.width), bar.height), "█", bar_style)
        buf.fill(Rect(bar.x + filled, bar.y, bar.width - filled, bar.height).intersection(bar), "░", "bright_black")
        if self.phase is Phase.ACTIVE:
            self.spinner.render_to_buffer(Rect(box.x, box.y + 2, 1, 1).intersection(box), buf)

        if self.phase is Phase.GAME_OVER:
            art = self._game_over()
            art.render(center_rect(Rect(box.x, box.y + 4, box.width, 8), art.width, art.height), buf)
            self._center(box, box.y + 12, f"final score {self.score}", "bold", buf)
            self._center(box, box.y + 14, "enter: play again   esc: menu", "bright_black", buf)
            return

        digits = format_bits(self.target, self.bits.width)
        self._center(box, box.y + 5, digits, "bold bright_white", buf)

        labels = [f" {v} " for v in self.suggestions]
        row = "   ".join(labels)
        x = box.x + max(0, (box.width - len(row)) // 2)
        for i, label in enumerate(labels):
            style = "reverse bold bright_green" if i == self.selected else "bright_white"
            buf.set_string(x, box.y + 8, label, style, clip=box)
            x += len(label) + 3

        if self.phase is Phase.RESULT:
            style = "bold bright_green" if self.last_result == "correct!" else "bold bright_red"
            self._center(box, box.y + 11, self.last_result or "", style, buf)
            self._center(box, box.y + 14, "enter: next round   esc: menu", "bright_black", buf)
        else:
            self._center(box, box.y + 14, "←/→ choose   enter: confirm   esc: menu", "bright_black", buf)

    def _center(self, box: Rect, y: int, text: str, style: str, buf: Buffer):
        x = box.x + max(0, (box.width - len(text)) // 2)
        buf.set_string(x, y, text, style, clip=box)
