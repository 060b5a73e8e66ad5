"""Scene composer — tiles genre clusters into a grid and drives the per-frame cycle.

One frame:
  1. paint the background
  2. lay out and draw every genre cluster (refreshes every star cache)
  3. draw the selection overlay at the last click point
  4. advance the tooltip animation and draw it while visible

Pointer handlers (``handle_click`` / ``handle_move``) only mutate SceneState;
the next frame picks the change up.
"""

import logging
import math
from collections.abc import Sequence

from genresky.config import DEFAULT_CONFIG, LayoutConfig
from genresky.hittest import resolve_click, resolve_hover
from genresky.i18n import t
from genresky.layout import display_genre, layout_genre
from genresky.models import Genre, GridCell, Movie, SceneState
from genresky.surface import Surface

logger = logging.getLogger(__name__)

BG_TOP = (13, 27, 53)
BG_BOTTOM = (26, 47, 85)
_BG_BANDS = 24

DETAIL_FILL = (255, 255, 255)
DETAIL_SIZE = 16
TOOLTIP_BOX_FILL = (18, 16, 14)
TOOLTIP_BOX_ALPHA = 210
TOOLTIP_TEXT_FILL = (235, 230, 220)
TOOLTIP_TITLE_SIZE = 15
TOOLTIP_BODY_SIZE = 13
TOOLTIP_PADDING = 10
TOOLTIP_OFFSET = 14
TOOLTIP_EDGE = 4


def compute_cells(count: int, config: LayoutConfig = DEFAULT_CONFIG) -> list[GridCell]:
    """Grid geometry for ``count`` clusters, in row-major order.

    "simple" mode uses ``config.columns`` columns over the full canvas; "grid"
    mode uses a near-square ``ceil(sqrt(count))`` column grid inside the margins.
    """
    if count <= 0:
        return []

    if config.mode == "simple":
        cols = config.columns
        left = top = 0.0
        usable_w, usable_h = float(config.width), float(config.height)
    else:
        cols = math.ceil(math.sqrt(count))
        left = top = config.margin
        usable_w = max(config.width - 2 * config.margin, 1.0)
        usable_h = max(config.height - 2 * config.margin, 1.0)

    rows = math.ceil(count / cols)
    col_w = usable_w / cols
    row_h = usable_h / rows
    radius = min(col_w, row_h) * config.shrink

    return [
        GridCell(
            cx=left + (i % cols) * col_w + col_w / 2,
            cy=top + (i // cols) * row_h + row_h / 2,
            radius=radius,
            col_width=col_w,
            row_height=row_h,
        )
        for i in range(count)
    ]


def layout_scene(
    genres: Sequence[Genre], config: LayoutConfig = DEFAULT_CONFIG
) -> list[GridCell]:
    """Refresh every genre's star cache without drawing. Returns the cells used."""
    cells = compute_cells(len(genres), config)
    for genre, cell in zip(genres, cells):
        layout_genre(genre, cell.cx, cell.cy, cell.radius, cell.row_height, config)
    return cells


# --- Pointer events ---


def handle_click(state: SceneState, genres: Sequence[Genre], px: float, py: float) -> Movie | None:
    """Select the first star under (px, py); clears the selection on a miss."""
    state.click_x = px
    state.click_y = py
    state.selected = resolve_click(genres, px, py)
    logger.debug("click (%.1f, %.1f) -> %s", px, py, state.selected)
    return state.selected


def handle_move(
    state: SceneState,
    genres: Sequence[Genre],
    px: float,
    py: float,
    config: LayoutConfig = DEFAULT_CONFIG,
) -> None:
    state.pointer_x = px
    state.pointer_y = py
    state.hovered = resolve_hover(genres, px, py, config)


# --- Tooltip animation ---


def _lerp(a: float, b: float, amount: float) -> float:
    return a + (b - a) * amount


def step_tooltip(state: SceneState, config: LayoutConfig = DEFAULT_CONFIG) -> None:
    """Advance the tooltip one frame toward the pointer and the hover target's opacity."""
    amount = config.tooltip_smoothing
    if state.hovered is not None:
        state.tooltip_movie = state.hovered.movie
        target_alpha = 1.0
    else:
        target_alpha = 0.0
    state.tooltip_alpha = _lerp(state.tooltip_alpha, target_alpha, amount)
    state.tooltip_x = _lerp(state.tooltip_x, state.pointer_x, amount)
    state.tooltip_y = _lerp(state.tooltip_y, state.pointer_y, amount)


def tooltip_visible(state: SceneState, config: LayoutConfig = DEFAULT_CONFIG) -> bool:
    return state.tooltip_movie is not None and state.tooltip_alpha >= config.tooltip_threshold


# --- Text ---


def format_revenue(value: float) -> str:
    """Thousands-separated dollars; cents only when the amount is fractional."""
    if float(value).is_integer():
        return f"${value:,.0f}"
    return f"${value:,.2f}"


def format_popularity(value: float) -> str:
    """Plain decimal, at most 6 places, trailing zeros dropped."""
    return f"{value:.6f}".rstrip("0").rstrip(".")


def detail_lines(movie: Movie, lang: str = "en") -> list[str]:
    return [
        f"{t('label_title', lang)}: {movie.title}",
        f"{t('label_popularity', lang)}: {format_popularity(movie.popularity)}",
        f"{t('label_revenue', lang)}: {format_revenue(movie.revenue)}",
    ]


# --- Drawing ---


def paint_background(surface: Surface, config: LayoutConfig = DEFAULT_CONFIG) -> None:
    """Fill the canvas with a vertical gradient from BG_TOP to BG_BOTTOM."""
    surface.background(BG_TOP)
    band_h = config.height / _BG_BANDS
    for i in range(_BG_BANDS):
        amount = i / (_BG_BANDS - 1)
        color = tuple(round(_lerp(a, b, amount)) for a, b in zip(BG_TOP, BG_BOTTOM))
        # +1 px overlap hides seams between bands
        surface.rect(0, i * band_h, config.width, band_h + 1, color)


def draw_selection(surface: Surface, state: SceneState, config: LayoutConfig = DEFAULT_CONFIG) -> None:
    if state.selected is None:
        return
    surface.text(
        "\n".join(detail_lines(state.selected, config.lang)),
        state.click_x,
        state.click_y,
        DETAIL_SIZE,
        DETAIL_FILL,
        align="left",
    )


def draw_tooltip(surface: Surface, state: SceneState, config: LayoutConfig = DEFAULT_CONFIG) -> None:
    movie = state.tooltip_movie
    if movie is None or not tooltip_visible(state, config):
        return
    alpha = state.tooltip_alpha
    title = movie.title
    body = detail_lines(movie, config.lang)[1:]

    line_gap = 4
    w = max(
        surface.text_width(title, TOOLTIP_TITLE_SIZE, bold=True),
        *(surface.text_width(line, TOOLTIP_BODY_SIZE) for line in body),
    ) + TOOLTIP_PADDING * 2
    h = TOOLTIP_TITLE_SIZE + len(body) * (TOOLTIP_BODY_SIZE + line_gap) + TOOLTIP_PADDING * 2 + line_gap

    x = state.tooltip_x + TOOLTIP_OFFSET
    y = state.tooltip_y + TOOLTIP_OFFSET
    x = max(TOOLTIP_EDGE, min(x, config.width - w - TOOLTIP_EDGE))
    y = max(TOOLTIP_EDGE, min(y, config.height - h - TOOLTIP_EDGE))

    text_fill = (*TOOLTIP_TEXT_FILL, round(255 * alpha))
    surface.push()
    surface.translate(x, y)
    surface.rect(0, 0, w, h, (*TOOLTIP_BOX_FILL, round(TOOLTIP_BOX_ALPHA * alpha)), radius=6)
    baseline = TOOLTIP_PADDING + TOOLTIP_TITLE_SIZE * 0.8
    surface.text(title, TOOLTIP_PADDING, baseline, TOOLTIP_TITLE_SIZE, text_fill, align="left", bold=True)
    for line in body:
        baseline += TOOLTIP_BODY_SIZE + line_gap
        surface.text(line, TOOLTIP_PADDING, baseline, TOOLTIP_BODY_SIZE, text_fill, align="left")
    surface.pop()


def render_frame(
    state: SceneState,
    genres: Sequence[Genre],
    surface: Surface,
    config: LayoutConfig = DEFAULT_CONFIG,
) -> list[GridCell]:
    """Draw one complete frame. Every genre's star cache is fresh afterwards.

    Returns:
        The grid cells, in genre order.
    """
    paint_background(surface, config)
    cells = compute_cells(len(genres), config)
    for genre, cell in zip(genres, cells):
        display_genre(genre, surface, cell.cx, cell.cy, cell.radius, cell.row_height, config)
    draw_selection(surface, state, config)
    step_tooltip(state, config)
    draw_tooltip(surface, state, config)
    return cells
