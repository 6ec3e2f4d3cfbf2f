# binbreak/art.py
# ASCII block helpers: FIGlet rendering, block composition, and colored cell grids.

from dataclasses import dataclass
from typing import Dict, List, Tuple

from pyfiglet import Figlet, FigletFont

from .buffer import Buffer, Rect

DEFAULT_FONT = "standard"

# -------------------------- Blocks --------------------------

def render_figlet_block(message: str, font: str, width: int = 200) -> List[str]:
    if font not in FigletFont.getFonts():
        font = DEFAULT_FONT
    f = Figlet(font=font, width=width)
    art = f.renderText(message if message.strip() else " ")
    lines = [line.rstrip() for line in art.rstrip("\n").split("\n")]
    # FIGlet pads with blank rows; the banner only wants the inked ones
    while lines and not lines[0]:
        lines.pop(0)
    while lines and not lines[-1]:
        lines.pop()
    return lines

def measure_block(block: List[str]) -> Tuple[int, int]:
    h = len(block)
    w = max((len(line) for line in block), default=0)
    return w, h

def pad_block(block: List[str], width: int) -> List[str]:
    return [line.ljust(width) for line in block]

def place_block(block: List[str], x: int, y: int) -> List[str]:
    return ([""] * y) + [(" " * x) + line for line in block]

def merge_blocks(base: List[str], overlay: List[str]) -> List[str]:
    """Overlay non-space chars onto base. Rows are right-stripped so padding never counts as art."""
    h = max(len(base), len(overlay))
    w = max(measure_block(base)[0], measure_block(overlay)[0])
    base = pad_block(base + [""] * (h - len(base)), w)
    overlay = pad_block(overlay + [""] * (h - len(overlay)), w)
    out = []
    for y in range(h):
        row = []
        for x in range(w):
            ch = overlay[y][x] if overlay[y][x] != " " else base[y][x]
            row.append(ch)
        out.append("".join(row).rstrip())
    return out

def uniform_color_map(block: List[str], key: str) -> List[str]:
    return [key * len(line) for line in block]

# -------------------------- Colored cells --------------------------

@dataclass
class AsciiCell:
    ch: str
    x: int
    y: int
    color: str


def parse_ascii_art(art: str, color_map_art: str, color_map: Dict[str, str], default_color: str) -> List[AsciiCell]:
    art_lines = art.split("\n")
    color_lines = color_map_art.split("\n")
    if len(art_lines) != len(color_lines):
        raise ValueError("art and color map must have the same height")

    cells = []
    for y, (row, color_row) in enumerate(zip(art_lines, color_lines)):
        if len(row) != len(color_row):
            raise ValueError(f"mismatched line lengths on row {y}")
        for x, (ch, key) in enumerate(zip(row, color_row)):
            cells.append(AsciiCell(ch, x, y, color_map.get(key, default_color)))
    return cells


class AsciiCells:
    def __init__(self, cells: List[AsciiCell]):
        self.cells = cells

    @classmethod
    def parse(cls, art: str, color_map_art: str, color_map: Dict[str, str], default_color: str) -> "AsciiCells":
        return cls(parse_ascii_art(art, color_map_art, color_map, default_color))

    @property
    def width(self) -> int:
        return max((c.x for c in self.cells), default=-1) + 1

    @property
    def height(self) -> int:
        return max((c.y for c in self.cells), default=-1) + 1

    def render_to_buffer(self, area: Rect, buf: Buffer):
        bounds = area.intersection(buf.area)
        for cell in self.cells:
            x, y = area.x + cell.x, area.y + cell.y
            if bounds.contains(x, y):
                buf.cell(x, y).set(cell.ch, cell.color)


class AsciiArt:
    """Static art widget."""

    def __init__(self, cells: AsciiCells):
        self.cells = cells

    @property
    def width(self) -> int: return self.cells.width

    @property
    def height(self) -> int: return self.cells.height

    def render(self, area: Rect, buf: Buffer):
        self.cells.render_to_buffer(area, buf)
