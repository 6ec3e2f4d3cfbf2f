# binbreak/menu.py
# Start menu: difficulty list plus the animated banner.

import logging
import threading
import time
from typing import List, Optional, Tuple

from .animation import Clock, ProceduralAnimation
from .art import merge_blocks, measure_block, place_block, render_figlet_block
from .config import Config
from .game import Bits

log = logging.getLogger(__name__)

DEFAULT_SELECTED_INDEX = 4
ANIMATION_HINT = "[a: toggle animation]"

MENU_ITEMS: List[Tuple[str, Bits]] = [
    ("easy       (4 bits)", Bits.FOUR),
    ("easy+16    (4 bits*16)", Bits.FOUR_SHIFT_4),
    ("easy+256   (4 bits*256)", Bits.FOUR_SHIFT_8),
    ("easy+4096  (4 bits*4096)", Bits.FOUR_SHIFT_12),
    ("normal     (8 bits)", Bits.EIGHT),
    ("master     (12 bits)", Bits.TWELVE),
    ("insane     (16 bits)", Bits.SIXTEEN),
]

# -------------------------- Selection memory --------------------------

class SelectionMemory:
    """Last confirmed menu index, shared across menu instances for the process lifetime."""

    def __init__(self, index: int = DEFAULT_SELECTED_INDEX):
        self._lock = threading.Lock()
        self._index = index

    def get(self) -> int:
        with self._lock:
            return self._index

    def set(self, index: int):
        with self._lock:
            self._index = index


# Used by the entry point; tests pass their own
LAST_SELECTED = SelectionMemory()

# -------------------------- List cursor --------------------------

class ListCursor:
    """Index into a fixed-length list. Moving past either end wraps around."""

    def __init__(self, length: int, selected: int = 0):
        if length <= 0:
            raise ValueError("cursor needs a non-empty list")
        self.length = length
        self.selected = min(max(selected, 0), length - 1)

    def select_next(self):
        self.selected = (self.selected + 1) % self.length

    def select_previous(self):
        self.selected = (self.selected - 1) % self.length

# -------------------------- Banner --------------------------

def _strip_hash(x: int, y: int) -> int:
    # position-only hash, so the 0/1 pattern under the strip stays put
    h = (x * 2654435761) & 0xFFFFFFFF
    h ^= (y * 2246822519) & 0xFFFFFFFF
    h = (h * 668265263) & 0xFFFFFFFF
    return h ^ (h >> 15)


def banner_art(config: Config) -> str:
    block = render_figlet_block(config.banner_text, config.banner_font)
    width, _ = measure_block(block)
    hint = place_block([ANIMATION_HINT], max(0, width - len(ANIMATION_HINT)), min(1, len(block) - 1))
    return "\n".join(merge_blocks(block, hint))


def ascii_animation(config: Config, clock: Clock = time.perf_counter) -> ProceduralAnimation:
    art = banner_art(config)
    lines = art.splitlines()
    height = len(lines)
    width = max((len(line) for line in lines), default=0)

    strip_width = 8.0
    start_offset = -strip_width
    total_range = (width + height + strip_width) - start_offset

    def in_strip(x: int, y: int, progress: float) -> bool:
        offset = start_offset + progress * total_range
        return abs((x + y) - offset) < strip_width

    def color_fn(x: int, y: int, progress: float) -> str:
        return "bright_green" if in_strip(x, y, progress) else "bright_black"

    def char_fn(x: int, y: int, progress: float, original: str) -> str:
        if not in_strip(x, y, progress):
            return original
        return "0" if _strip_hash(x, y) & 1 == 0 else "1"

    return (ProceduralAnimation(art, config.animation_frames, config.frame_duration, color_fn, clock)
            .with_char_fn(char_fn)
            .with_pause_at_end(config.dwell_seconds))

# -------------------------- Menu state --------------------------

class StartMenuState:
    def __init__(self, animation: ProceduralAnimation, memory: Optional[SelectionMemory] = None,
                 items: Optional[List[Tuple[str, Bits]]] = None):
        self.memory = memory or LAST_SELECTED
        self.items = list(items or MENU_ITEMS)
        self.cursor = ListCursor(len(self.items), self.memory.get())
        self.animation = animation

    @classmethod
    def create(cls, config: Config, memory: Optional[SelectionMemory] = None,
               clock: Clock = time.perf_counter) -> "StartMenuState":
        menu = cls(ascii_animation(config, clock), memory)
        if config.start_paused:
            menu.animation.pause()
        return menu

    def selected_index(self) -> int:
        return self.cursor.selected

    def selected_difficulty(self) -> Bits:
        return self.items[self.selected_index()][1]

    def select_next(self):
        self.cursor.select_next()

    def select_previous(self):
        self.cursor.select_previous()

    def toggle_animation(self):
        self.animation.toggle_pause()
        log.debug("menu animation %s", "paused" if self.animation.is_paused else "running")

    def remember_selection(self):
        self.memory.set(self.selected_index())
