"""Drawing surface protocol shared by every renderer.

Coordinates are canvas pixels with the origin at the top-left corner and y
pointing down. Colors are RGB or RGBA tuples of 0-255 ints.
"""

from functools import lru_cache
from typing import Literal, Protocol

from matplotlib.font_manager import FontProperties
from matplotlib.textpath import TextPath

Color = tuple[int, ...]
Align = Literal["left", "center", "right"]


class Surface(Protocol):
    def background(self, color: Color) -> None: ...

    def ellipse(self, x: float, y: float, diameter: float, fill: Color) -> None: ...

    def rect(
        self, x: float, y: float, w: float, h: float, fill: Color, radius: float = 0
    ) -> None: ...

    def text(
        self,
        s: str,
        x: float,
        y: float,
        size: float,
        fill: Color,
        align: Align = "center",
        bold: bool = False,
    ) -> None: ...

    def text_width(self, s: str, size: float, bold: bool = False) -> float: ...

    def push(self) -> None: ...

    def pop(self) -> None: ...

    def translate(self, dx: float, dy: float) -> None: ...


@lru_cache(maxsize=4096)
def measure_text(s: str, size: float, bold: bool = False) -> float:
    """Width in px of the widest line of s at font size ``size`` px.

    Uses matplotlib's TextPath so no renderer or display is needed.
    """
    prop = FontProperties(weight="bold" if bold else "normal")
    widths = [
        TextPath((0, 0), line, size=size, prop=prop).get_extents().width
        for line in s.split("\n")
        if line.strip()
    ]
    return max(widths, default=0.0)


class OffsetStack:
    """push/pop/translate bookkeeping for surfaces that emit absolute coordinates."""

    def __init__(self) -> None:
        self.dx = 0.0
        self.dy = 0.0
        self._saved: list[tuple[float, float]] = []

    def push(self) -> None:
        self._saved.append((self.dx, self.dy))

    def pop(self) -> None:
        self.dx, self.dy = self._saved.pop()

    def translate(self, dx: float, dy: float) -> None:
        self.dx += dx
        self.dy += dy

    def apply(self, x: float, y: float) -> tuple[float, float]:
        return x + self.dx, y + self.dy
