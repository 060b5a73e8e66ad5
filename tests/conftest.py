from __future__ import annotations

import matplotlib

matplotlib.use("Agg")

import pytest  # noqa: E402

from genresky.models import Genre, Movie  # noqa: E402
from genresky.surface import measure_text  # noqa: E402


class RecordingSurface:
    """Surface that records primitive calls in absolute coordinates."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self._dx = 0.0
        self._dy = 0.0
        self._saved: list[tuple[float, float]] = []

    def background(self, color) -> None:
        self.calls.append(("background", color))

    def ellipse(self, x, y, diameter, fill) -> None:
        self.calls.append(("ellipse", x + self._dx, y + self._dy, diameter, fill))

    def rect(self, x, y, w, h, fill, radius=0) -> None:
        self.calls.append(("rect", x + self._dx, y + self._dy, w, h, fill, radius))

    def text(self, s, x, y, size, fill, align="center", bold=False) -> None:
        self.calls.append(("text", s, x + self._dx, y + self._dy, size, fill, align, bold))

    def text_width(self, s, size, bold=False) -> float:
        return measure_text(s, size, bold)

    def push(self) -> None:
        self._saved.append((self._dx, self._dy))

    def pop(self) -> None:
        self._dx, self._dy = self._saved.pop()

    def translate(self, dx, dy) -> None:
        self._dx += dx
        self._dy += dy

    def of_kind(self, kind: str) -> list[tuple]:
        return [c for c in self.calls if c[0] == kind]


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture
def action() -> Genre:
    genre = Genre("Action")
    for title, pop, rev in (
        ("Avatar", 150.0, 2_787_965_087),
        ("Spectre", 107.0, 880_674_609),
        ("John Carter", 43.0, 284_139_100),
        ("Tangled", 48.0, 591_794_936),
    ):
        genre.add_movie(Movie(title, pop, rev))
    return genre
