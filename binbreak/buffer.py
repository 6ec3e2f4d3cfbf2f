# binbreak/buffer.py
# Backing grid that screens draw into before it is flushed to the terminal.

from dataclasses import dataclass, field
from typing import List, Optional

# -------------------------- Geometry --------------------------

@dataclass(frozen=True)
class Rect:
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    @property
    def right(self) -> int: return self.x + self.width

    @property
    def bottom(self) -> int: return self.y + self.height

    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x < self.right and self.y <= y < self.bottom

    def intersection(self, other: "Rect") -> "Rect":
        x, y = max(self.x, other.x), max(self.y, other.y)
        r, b = min(self.right, other.right), min(self.bottom, other.bottom)
        return Rect(x, y, max(0, r - x), max(0, b - y))


def center_rect(area: Rect, width: int, height: int) -> Rect:
    w, h = min(width, area.width), min(height, area.height)
    return Rect(area.x + (area.width - w) // 2, area.y + (area.height - h) // 2, w, h)

# -------------------------- Cells --------------------------

@dataclass
class Cell:
    char: str = " "
    style: str = ""

    def set(self, char: str, style: Optional[str] = None) -> "Cell":
        self.char = char
        if style is not None:
            self.style = style
        return self


@dataclass
class Buffer:
    """Fixed-size grid of cells. Coordinates are absolute, origin top-left."""
    width: int
    height: int
    cells: List[List[Cell]] = field(default_factory=list)

    def __post_init__(self):
        if not self.cells:
            self.cells = [[Cell() for _ in range(self.width)] for _ in range(self.height)]

    @property
    def area(self) -> Rect:
        return Rect(0, 0, self.width, self.height)

    def cell(self, x: int, y: int) -> Cell:
        # Callers clip against their area first; reaching this is a bug.
        if not self.area.contains(x, y):
            raise IndexError(f"cell ({x}, {y}) outside {self.width}x{self.height} buffer")
        return self.cells[y][x]

    def set_string(self, x: int, y: int, text: str, style: str = "", clip: Optional[Rect] = None):
        bounds = self.area if clip is None else clip.intersection(self.area)
        for i, ch in enumerate(text):
            if bounds.contains(x + i, y):
                self.cells[y][x + i].set(ch, style)

    def fill(self, area: Rect, char: str = " ", style: str = ""):
        area = area.intersection(self.area)
        if area.is_empty():
            return
        for y in range(area.y, area.bottom):
            for x in range(area.x, area.right):
                self.cells[y][x].set(char, style)

    def rows(self) -> List[str]:
        return ["".join(c.char for c in row) for row in self.cells]
