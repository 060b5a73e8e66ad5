"""Pointer hit-testing against the star positions of the current frame.

Click and hover resolve differently on purpose:
  - click: first star in cache order strictly inside its drawn circle.
  - hover: nearest star within an enlarged tolerance radius.
Both read ``Genre.star_positions`` and are only meaningful after a layout pass.
"""

import math
from collections.abc import Iterable

from genresky.config import DEFAULT_CONFIG, LayoutConfig
from genresky.models import Genre, HoverHit, Movie


def check_click(genre: Genre, px: float, py: float) -> Movie | None:
    """Return the first cached movie whose star contains (px, py), else None."""
    for star in genre.star_positions:
        if math.hypot(px - star.x, py - star.y) < star.size / 2:
            return star.movie
    return None


def get_hover_movie(
    genre: Genre, px: float, py: float, config: LayoutConfig = DEFAULT_CONFIG
) -> HoverHit | None:
    """Return the nearest star within its hover tolerance, else None.

    Tolerance per star is ``max(hover_min_radius, size * hover_scale)``. Ties
    keep the earlier star.
    """
    closest: HoverHit | None = None
    for star in genre.star_positions:
        distance = math.hypot(px - star.x, py - star.y)
        tolerance = max(config.hover_min_radius, star.size * config.hover_scale)
        if distance <= tolerance and (closest is None or distance < closest.distance):
            closest = HoverHit(movie=star.movie, distance=distance)
    return closest


def resolve_click(genres: Iterable[Genre], px: float, py: float) -> Movie | None:
    """First click hit across genres, in genre order."""
    for genre in genres:
        movie = check_click(genre, px, py)
        if movie is not None:
            return movie
    return None


def resolve_hover(
    genres: Iterable[Genre], px: float, py: float, config: LayoutConfig = DEFAULT_CONFIG
) -> HoverHit | None:
    """Globally nearest hover hit across all genres."""
    best: HoverHit | None = None
    for genre in genres:
        hit = get_hover_movie(genre, px, py, config)
        if hit is not None and (best is None or hit.distance < best.distance):
            best = hit
    return best
