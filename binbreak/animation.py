# binbreak/animation.py
# Time-driven ASCII animations. Everything is derived from the clock on each
# render; nothing accumulates per frame, so there is no drift to correct.

import logging
import math
import time
from typing import Callable, List, Optional

from .art import AsciiCells
from .buffer import Buffer, Rect

log = logging.getLogger(__name__)

Clock = Callable[[], float]
ColorFn = Callable[[int, int, float], str]          # (x, y, progress) -> style
CharFn = Callable[[int, int, float, str], str]      # (x, y, progress, original) -> glyph

# Largest float below 1.0; 1.0 itself is reserved for the dwell
_BELOW_ONE = math.nextafter(1.0, 0.0)


def _to_ms(seconds: float) -> int:
    return int(round(seconds * 1000))

# -------------------------- Frame-based animation --------------------------

class AsciiAnimation:
    """Cycles through pre-built frames. Supports one-shot playback."""

    def __init__(self, frames: List[AsciiCells], frame_duration: float, looping: bool, clock: Clock = time.perf_counter):
        self.frames = frames
        self.frame_duration = frame_duration
        self.looping = looping
        self.pause_at_end = 0.0
        self.clock = clock
        self.start_time = clock()

    @classmethod
    def looped(cls, frames: List[AsciiCells], clock: Clock = time.perf_counter) -> "AsciiAnimation":
        return cls(frames, 0.1, True, clock)

    @classmethod
    def once(cls, frames: List[AsciiCells], clock: Clock = time.perf_counter) -> "AsciiAnimation":
        return cls(frames, 0.1, False, clock)

    def with_pause_at_end(self, pause: float) -> "AsciiAnimation":
        self.pause_at_end = pause
        return self

    def reset(self):
        self.start_time = self.clock()

    def _elapsed_ms(self) -> int:
        return max(0, _to_ms(self.clock() - self.start_time))

    def current_frame_index(self) -> int:
        if not self.frames:
            return 0
        # whole milliseconds, so frame boundaries land exactly
        count = len(self.frames)
        elapsed = self._elapsed_ms()
        frame_ms = max(1, _to_ms(self.frame_duration))
        animation_ms = frame_ms * count
        if self.looping:
            cycle_time = elapsed % (animation_ms + _to_ms(self.pause_at_end))
            if cycle_time >= animation_ms:
                return count - 1
            return min(cycle_time // frame_ms, count - 1)
        return min(elapsed // frame_ms, count - 1)

    def is_finished(self) -> bool:
        if self.looping or not self.frames:
            return False
        return self._elapsed_ms() >= max(1, _to_ms(self.frame_duration)) * len(self.frames)

    @property
    def width(self) -> int:
        return self.frames[0].width if self.frames else 0

    @property
    def height(self) -> int:
        return self.frames[0].height if self.frames else 0

    def render_to_buffer(self, area: Rect, buf: Buffer):
        if not self.frames:
            return
        self.frames[self.current_frame_index()].render_to_buffer(area, buf)

# -------------------------- Procedural animation --------------------------

class ProceduralAnimation:
    """
    Computes glyph and color per cell from a progress value in [0, 1].

    No frames are stored: color_fn (and char_fn, when set) run for every
    visible cell on every render. Progress loops forever, holding at 1.0 for
    pause_at_end seconds after each traversal.
    """

    def __init__(self, art: str, num_frames: int, frame_duration: float, color_fn: ColorFn,
                 clock: Clock = time.perf_counter):
        if num_frames < 0:
            raise ValueError("num_frames must not be negative")
        if frame_duration <= 0:
            raise ValueError("frame_duration must be positive")
        self.lines = tuple(art.splitlines())
        self.num_frames = num_frames
        self.frame_duration = frame_duration
        self.pause_at_end = 0.0
        self.color_fn = color_fn
        self.char_fn: Optional[CharFn] = None
        self.clock = clock
        self.start_time = clock()
        self.paused = False
        self.paused_progress = 0.0

    def with_char_fn(self, char_fn: CharFn) -> "ProceduralAnimation":
        self.char_fn = char_fn
        return self

    def with_pause_at_end(self, pause: float) -> "ProceduralAnimation":
        if pause < 0:
            raise ValueError("pause_at_end must not be negative")
        self.pause_at_end = pause
        return self

    @property
    def width(self) -> int:
        return max((len(line) for line in self.lines), default=0)

    @property
    def height(self) -> int:
        return len(self.lines)

    @property
    def animation_duration(self) -> float:
        return self.frame_duration * self.num_frames

    @property
    def is_paused(self) -> bool:
        return self.paused

    # ---- progress ----

    def progress_at(self, elapsed: float) -> float:
        animation_duration = self.animation_duration
        if animation_duration <= 0:
            return 1.0
        cycle_time = max(0.0, elapsed) % (animation_duration + self.pause_at_end)
        if cycle_time >= animation_duration:
            return 1.0
        return min(cycle_time / animation_duration, _BELOW_ONE)

    def current_progress(self) -> float:
        if self.paused:
            return self.paused_progress
        return self.progress_at(self.clock() - self.start_time)

    # ---- pause / resume ----

    def pause(self):
        if self.paused:
            return
        self.paused_progress = self.current_progress()
        self.paused = True
        log.debug("animation paused at progress %.3f", self.paused_progress)

    def unpause(self):
        if not self.paused:
            return
        # Rewind start_time so the clock lands exactly on the frozen progress
        self.start_time = self.clock() - self.paused_progress * self.animation_duration
        self.paused = False
        log.debug("animation resumed at progress %.3f", self.paused_progress)

    def toggle_pause(self):
        if self.paused:
            self.unpause()
        else:
            self.pause()

    def reset(self):
        self.start_time = self.clock()
        self.paused_progress = 0.0

    # ---- rendering ----

    def render_to_buffer(self, area: Rect, buf: Buffer):
        self.render_to_buffer_at_progress(area, buf, self.current_progress())

    def render_to_buffer_at_progress(self, area: Rect, buf: Buffer, progress: float):
        if self.num_frames == 0:
            return
        bounds = area.intersection(buf.area)
        for y, line in enumerate(self.lines):
            for x, ch in enumerate(line):
                if ch == " ":
                    continue
                px, py = area.x + x, area.y + y
                if not bounds.contains(px, py):
                    continue
                color = self.color_fn(x, y, progress)
                glyph = self.char_fn(x, y, progress, ch) if self.char_fn else ch
                buf.cell(px, py).set(glyph, color)
