# binbreak/config.py
# Runtime options. Built from the command line; nothing is saved to disk.

import argparse
from dataclasses import dataclass
from typing import List, Optional

from pyfiglet import FigletFont

def clamp(v, lo, hi): return lo if v < lo else hi if v > hi else v


@dataclass
class Config:
    # Frame pacing
    fps: int = 30
    # Banner
    banner_text: str = "binbreak"
    banner_font: str = "georgia11"
    animation_frames: int = 50
    frame_ms: int = 50
    dwell_seconds: float = 2.0
    start_paused: bool = False
    # Diagnostics
    log_file: Optional[str] = None

    def clamp(self) -> "Config":
        self.fps              = clamp(self.fps, 10, 120)
        self.animation_frames = clamp(self.animation_frames, 1, 1000)
        self.frame_ms         = clamp(self.frame_ms, 1, 1000)
        self.dwell_seconds    = clamp(self.dwell_seconds, 0.0, 60.0)
        if self.banner_font not in FigletFont.getFonts():
            self.banner_font = "standard"
        return self

    @property
    def target_frame_duration(self) -> float:
        # 30 fps -> 33 ms, matching a whole-millisecond frame budget
        return int(1000 / self.fps) / 1000.0

    @property
    def frame_duration(self) -> float:
        return self.frame_ms / 1000.0


def build_parser() -> argparse.ArgumentParser:
    defaults = Config()
    p = argparse.ArgumentParser(prog="binbreak", description="Guess the value of binary numbers against the clock.")
    p.add_argument("--fps", type=int, default=defaults.fps, help="frame rate cap while animating (10..120)")
    p.add_argument("--banner-text", default=defaults.banner_text)
    p.add_argument("--banner-font", default=defaults.banner_font, help="pyfiglet font for the start banner")
    p.add_argument("--animation-frames", type=int, default=defaults.animation_frames)
    p.add_argument("--frame-ms", type=int, default=defaults.frame_ms)
    p.add_argument("--dwell", dest="dwell_seconds", type=float, default=defaults.dwell_seconds,
                   help="seconds the banner holds after each sweep")
    p.add_argument("--start-paused", action="store_true", help="start with the banner animation paused")
    p.add_argument("--log-file", default=None, help="write debug logs to this file")
    return p


def parse_config(argv: Optional[List[str]] = None) -> Config:
    args = build_parser().parse_args(argv)
    return Config(**vars(args)).clamp()
