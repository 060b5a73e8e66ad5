"""Visual encodings: popularity to star size, revenue to a color ramp."""

import math
from typing import NamedTuple

from genresky.config import DEFAULT_CONFIG, LayoutConfig

RGB = tuple[int, int, int]


class ColorStop(NamedTuple):
    offset: float
    color: RGB


# Deep teal → sea green → warm sand → amber → coral
COLOR_STOPS: tuple[ColorStop, ...] = (
    ColorStop(0.0, (12, 74, 62)),
    ColorStop(0.25, (45, 140, 120)),
    ColorStop(0.5, (210, 190, 120)),
    ColorStop(0.75, (240, 140, 80)),
    ColorStop(1.0, (230, 90, 85)),
)


def _round_half_up(value: float) -> int:
    # Python's round() is banker's rounding; 2.5 must become 3
    return math.floor(value + 0.5)


def star_size(
    popularity: float,
    config: LayoutConfig = DEFAULT_CONFIG,
    row_height: float | None = None,
) -> int:
    """Map popularity to a star diameter in px, floored at ``min_star_size``.

    In grid mode the size is additionally scaled by ``row_height`` relative to
    ``size_reference_row_height`` so clusters on a dense grid stay legible.
    """
    base = popularity / config.popularity_divisor
    if config.mode == "grid" and row_height is not None:
        scale = row_height / config.size_reference_row_height
        base *= max(config.size_scale_min, min(config.size_scale_max, scale))
    return max(config.min_star_size, _round_half_up(base))


def normalize_revenue(revenue: float, revenue_max: float) -> float:
    """Revenue as a fraction of ``revenue_max``, clamped to [0, 1]."""
    return max(0.0, min(1.0, revenue / revenue_max))


def color_range(
    value: float, stops: tuple[ColorStop, ...] = COLOR_STOPS
) -> tuple[ColorStop, ColorStop]:
    """Return the first pair of adjacent stops that brackets value.

    Falls back to (first, last) when nothing brackets it.
    """
    for start, end in zip(stops, stops[1:]):
        if start.offset <= value <= end.offset:
            return start, end
    return stops[0], stops[-1]


def interpolate_color(value: float, start: ColorStop, end: ColorStop) -> RGB:
    span = end.offset - start.offset
    ratio = (value - start.offset) / span if span else 0.0
    r, g, b = (
        _round_half_up(lo + (hi - lo) * ratio)
        for lo, hi in zip(start.color, end.color)
    )
    return r, g, b


def star_color(revenue: float, config: LayoutConfig = DEFAULT_CONFIG) -> RGB:
    """Map revenue to an RGB triple along COLOR_STOPS."""
    value = normalize_revenue(revenue, config.revenue_max)
    start, end = color_range(value)
    return interpolate_color(value, start, end)


def rgb_string(color: tuple[int, ...], alpha: float | None = None) -> str:
    """CSS color string. ``alpha`` overrides any alpha channel and is in [0, 1]."""
    r, g, b = color[:3]
    if alpha is None and len(color) == 4:
        alpha = color[3] / 255
    if alpha is None:
        return f"rgb({r}, {g}, {b})"
    return f"rgba({r}, {g}, {b}, {alpha:.3f})"
