"""Radial layout engine. Places a genre's movies evenly on a ring and draws the cluster."""

import math

from genresky.config import DEFAULT_CONFIG, LayoutConfig
from genresky.encoding import star_color, star_size
from genresky.models import Genre, StarPosition
from genresky.surface import Surface

LABEL_PADDING_X = 14
LABEL_PADDING_Y = 8
LABEL_CORNER_RADIUS = 8
LABEL_BOX_FILL = (18, 16, 14, 180)
LABEL_TEXT_FILL = (235, 230, 220)
GLOW_SCALE = 2.6
GLOW_ALPHA = 40


def label_size(row_height: float, config: LayoutConfig = DEFAULT_CONFIG) -> float:
    """Genre label font size, 20% of the row height clamped to [label_min, label_max]."""
    return max(config.label_min, min(config.label_max, row_height * 0.2))


def label_height(size: float) -> float:
    return size + LABEL_PADDING_Y * 2


def label_width(name: str, size: float, surface: Surface) -> float:
    return surface.text_width(name, size, bold=True) + LABEL_PADDING_X * 2


def label_offset(row_height: float, config: LayoutConfig = DEFAULT_CONFIG) -> float:
    """Downward shift applied to every star so the ring clears the label box."""
    return label_height(label_size(row_height, config)) * 0.35


def layout_genre(
    genre: Genre,
    cx: float,
    cy: float,
    radius: float,
    row_height: float,
    config: LayoutConfig = DEFAULT_CONFIG,
) -> list[StarPosition]:
    """Compute one canvas position per movie, evenly spaced on a ring.

    Movie i sits at angle ``i * 2π / k`` (0 = east, increasing clockwise on
    screen since y points down). Overwrites ``genre.star_positions``.

    Args:
        genre: Genre to lay out. An empty genre yields an empty cache.
        cx: Cluster centre x.
        cy: Cluster centre y.
        radius: Ring radius in px.
        row_height: Grid row height; drives label size and, in grid mode, star size.
        config: Layout configuration.

    Returns:
        The new star position list (same object now held by the genre).
    """
    positions: list[StarPosition] = []
    if genre.movies:
        step = 2 * math.pi / len(genre.movies)
        offset = label_offset(row_height, config)
        for i, movie in enumerate(genre.movies):
            angle = i * step
            positions.append(
                StarPosition(
                    x=cx + radius * math.cos(angle),
                    y=cy + radius * math.sin(angle) + offset,
                    size=star_size(movie.popularity, config, row_height),
                    movie=movie,
                )
            )
    genre.star_positions = positions
    return positions


def draw_genre(
    genre: Genre,
    surface: Surface,
    cx: float,
    cy: float,
    row_height: float,
    config: LayoutConfig = DEFAULT_CONFIG,
) -> None:
    """Draw the label box and the cached stars of one genre."""
    size = label_size(row_height, config)
    w = label_width(genre.name, size, surface)
    h = label_height(size)

    surface.push()
    surface.translate(cx, cy)
    surface.rect(-w / 2, -h / 2, w, h, LABEL_BOX_FILL, radius=LABEL_CORNER_RADIUS)
    surface.text(genre.name, 0, size * 0.35, size, LABEL_TEXT_FILL, align="center", bold=True)
    surface.pop()

    for star in genre.star_positions:
        r, g, b = star_color(star.movie.revenue, config)
        surface.ellipse(star.x, star.y, star.size * GLOW_SCALE, (r, g, b, GLOW_ALPHA))
        surface.ellipse(star.x, star.y, star.size, (r, g, b))


def display_genre(
    genre: Genre,
    surface: Surface,
    cx: float,
    cy: float,
    radius: float,
    row_height: float,
    config: LayoutConfig = DEFAULT_CONFIG,
) -> list[StarPosition]:
    """Lay out then draw one genre cluster. Returns the refreshed cache."""
    positions = layout_genre(genre, cx, cy, radius, row_height, config)
    draw_genre(genre, surface, cx, cy, row_height, config)
    return positions
