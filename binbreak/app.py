# binbreak/app.py
# Application states, input dispatch, and the frame loop that drives them.

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Protocol, Union

from . import keybinds
from .animation import Clock
from .buffer import Buffer, Rect
from .config import Config
from .game import BinaryNumbersGame, Bits
from .keybinds import KeyEvent
from .menu import StartMenuState

log = logging.getLogger(__name__)

PALETTE = ["bright_green", "bright_cyan", "bright_blue", "bright_magenta", "bright_yellow", "bright_red"]
MENU_SPACING = 3

# -------------------------- Collaborators --------------------------

class Game(Protocol):
    def handle_input(self, key: KeyEvent) -> None: ...
    def run(self, dt: float) -> None: ...
    def is_active(self) -> bool: ...
    def is_exit_intended(self) -> bool: ...
    def render(self, area: Rect, buf: Buffer) -> None: ...


class Backend(Protocol):
    def read_event(self, timeout: Optional[float]) -> Optional[KeyEvent]: ...
    def draw(self, render: Callable[[Buffer], None]) -> None: ...

# -------------------------- States --------------------------

@dataclass(frozen=True)
class Start:
    menu: StartMenuState


@dataclass(frozen=True)
class Playing:
    game: Game


@dataclass(frozen=True)
class Exit:
    pass


AppState = Union[Start, Playing, Exit]
EXIT = Exit()


class FpsMode(Enum):
    REAL_TIME = "real_time"      # bounded poll, steady redraws
    PERFORMANCE = "performance"  # block until input


def get_fps_mode(state: AppState) -> FpsMode:
    if isinstance(state, Playing) and state.game.is_active():
        return FpsMode.REAL_TIME
    if isinstance(state, Start) and not state.menu.animation.is_paused:
        return FpsMode.REAL_TIME
    return FpsMode.PERFORMANCE

# -------------------------- Input --------------------------

def handle_start_input(menu: StartMenuState, key: KeyEvent,
                       new_game: Callable[[Bits], Game]) -> Optional[AppState]:
    if keybinds.is_up(key):
        menu.select_previous()
    elif keybinds.is_down(key):
        menu.select_next()
    elif keybinds.is_select(key):
        bits = menu.selected_difficulty()
        menu.remember_selection()
        log.info("starting %s game from menu index %d", bits.name, menu.selected_index())
        return Playing(new_game(bits))
    elif keybinds.is_exit(key):
        return EXIT
    elif key.is_char("a", "A"):
        menu.toggle_animation()
    return None


def handle_event(state: AppState, key: KeyEvent, new_game: Callable[[Bits], Game]) -> AppState:
    """Apply one key to `state` and return the state that replaces it."""
    if keybinds.is_force_quit(key):
        return EXIT
    if isinstance(state, Start):
        return handle_start_input(state.menu, key, new_game) or state
    if isinstance(state, Playing):
        state.game.handle_input(key)
    return state

# -------------------------- Rendering --------------------------

def render_start_screen(menu: StartMenuState, area: Rect, buf: Buffer):
    animation = menu.animation
    labels = [label.upper() for label, _ in menu.items]
    max_len = max((len(s) for s in labels), default=0)
    list_width = 2 + max_len  # marker + space + label
    list_height = len(labels)
    total_height = animation.height + MENU_SPACING + list_height

    start_y = area.y + max(0, area.height - total_height) // 2
    ascii_x = area.x + max(0, area.width - animation.width) // 2
    list_x = area.x + max(0, area.width - list_width) // 2
    list_y = start_y + animation.height + MENU_SPACING

    ascii_area = Rect(ascii_x, start_y, min(animation.width, area.width), min(animation.height, area.height))
    list_area = Rect(list_x, list_y, list_width, list_height).intersection(area)

    animation.render_to_buffer(ascii_area, buf)

    selected = menu.selected_index()
    for i, label in enumerate(labels):
        marker = "»" if i == selected else " "
        style = f"bold {PALETTE[i % len(PALETTE)]}"
        buf.set_string(list_x, list_y + i, f"{marker} {label:<{max_len}}", style, clip=list_area)


def render_state(state: AppState, buf: Buffer):
    if isinstance(state, Start):
        render_start_screen(state.menu, buf.area, buf)
    elif isinstance(state, Playing):
        state.game.render(buf.area, buf)

# -------------------------- Frame loop --------------------------

class FrameScheduler:
    """
    Runs ticks until the state becomes Exit. Each tick advances the game by
    the elapsed time, renders, waits for at most one key (bounded or blocking
    depending on FpsMode), applies it, then sleeps off the rest of the frame.
    """

    def __init__(self, backend: Backend, config: Config,
                 new_menu: Callable[[], StartMenuState],
                 new_game: Callable[[Bits], Game] = BinaryNumbersGame,
                 clock: Clock = time.perf_counter,
                 sleep: Callable[[float], None] = time.sleep):
        self.backend = backend
        self.target_frame_duration = config.target_frame_duration
        self.new_menu = new_menu
        self.new_game = new_game
        self.clock = clock
        self.sleep = sleep
        self.state: AppState = Start(new_menu())
        self.last_frame_time = clock()
        self.mode: Optional[FpsMode] = None
        self.ticks = 0

    @property
    def running(self) -> bool:
        return not isinstance(self.state, Exit)

    def tick(self):
        now = self.clock()
        dt = now - self.last_frame_time
        self.last_frame_time = now
        self.ticks += 1

        # advance before drawing so the game's stats are current
        state = self.state
        if isinstance(state, Playing):
            state.game.run(dt)
            if state.game.is_exit_intended():
                log.info("game left, returning to menu")
                self.state = Start(self.new_menu())
                return

        self.backend.draw(lambda buf: render_state(state, buf))

        mode = get_fps_mode(state)
        if mode is not self.mode:
            log.debug("fps mode -> %s", mode.value)
            self.mode = mode
        if mode is FpsMode.REAL_TIME:
            event = self.backend.read_event(min(dt, self.target_frame_duration))
        else:
            event = self.backend.read_event(None)
        if event is not None:
            self.state = handle_event(state, event, self.new_game)
            if type(self.state) is not type(state):
                log.info("state %s -> %s", type(state).__name__, type(self.state).__name__)

        # cap frame rate
        frame_time = self.clock() - self.last_frame_time
        if frame_time < self.target_frame_duration:
            self.sleep(self.target_frame_duration - frame_time)

    def run(self):
        while self.running:
            self.tick()
        log.info("exiting after %d ticks", self.ticks)


def run_app(backend: Backend, config: Config, new_menu: Callable[[], StartMenuState]) -> None:
    FrameScheduler(backend, config, new_menu).run()
