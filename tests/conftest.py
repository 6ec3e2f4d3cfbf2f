import pytest

from binbreak.animation import ProceduralAnimation
from binbreak.buffer import Buffer


class FakeClock:
    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, dt: float):
        self.now += dt

    # lets the clock double as the scheduler's sleep function
    def sleep(self, dt: float):
        self.advance(dt)


class FakeBackend:
    """Scripted terminal: each read pops the next entry (None = no key before the timeout)."""

    def __init__(self, events, width: int = 80, height: int = 24):
        self.events = list(events)
        self.width = width
        self.height = height
        self.timeouts = []
        self.frames = []

    def read_event(self, timeout):
        self.timeouts.append(timeout)
        if not self.events:
            raise AssertionError("script exhausted")
        event = self.events.pop(0)
        if event is None and timeout is None:
            raise AssertionError("blocking read got no key")
        return event

    def draw(self, render):
        buf = Buffer(self.width, self.height)
        render(buf)
        self.frames.append(buf.rows())


def solid_color(x, y, progress):
    return "white"


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_animation(clock):
    def factory(art: str = "ab\ncd", num_frames: int = 10, frame_duration: float = 0.1,
                pause_at_end: float = 0.5) -> ProceduralAnimation:
        return ProceduralAnimation(art, num_frames, frame_duration, solid_color, clock).with_pause_at_end(pause_at_end)
    return factory
