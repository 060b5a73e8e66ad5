"""SVG renderer — a self-contained HTML page with the scene as inline SVG.

The SVG uses viewBox="0 0 width height" so canvas pixel coordinates map
directly; the browser handles scaling. On top of the drawn frame sits an
invisible hit layer: one circle per star with the hover tolerance radius and
a <title>, so the browser shows native tooltips with no script.
"""

from __future__ import annotations

import html
from collections.abc import Sequence

from genresky.config import DEFAULT_CONFIG, LayoutConfig
from genresky.encoding import rgb_string
from genresky.i18n import t
from genresky.models import Genre, SceneState
from genresky.scene import detail_lines, render_frame
from genresky.surface import Align, Color, OffsetStack, measure_text

_BG = "#0d1b35"
_ANCHOR = {"left": "start", "center": "middle", "right": "end"}
_LINE_HEIGHT = 1.25


def _fill_attrs(color: Color) -> str:
    r, g, b = color[:3]
    attrs = f'fill="rgb({r},{g},{b})"'
    if len(color) == 4 and color[3] != 255:
        attrs += f' fill-opacity="{color[3] / 255:.3f}"'
    return attrs


class SvgSurface:
    """Surface that accumulates SVG elements in absolute canvas coordinates."""

    def __init__(self, config: LayoutConfig = DEFAULT_CONFIG) -> None:
        self.config = config
        self.parts: list[str] = []
        self._offset = OffsetStack()

    def background(self, color: Color) -> None:
        self.parts.append(
            f'<rect x="0" y="0" width="{self.config.width}" height="{self.config.height}"'
            f" {_fill_attrs(color)}/>"
        )

    def ellipse(self, x: float, y: float, diameter: float, fill: Color) -> None:
        x, y = self._offset.apply(x, y)
        self.parts.append(
            f'<circle cx="{x:.2f}" cy="{y:.2f}" r="{diameter / 2:.2f}" {_fill_attrs(fill)}/>'
        )

    def rect(
        self, x: float, y: float, w: float, h: float, fill: Color, radius: float = 0
    ) -> None:
        x, y = self._offset.apply(x, y)
        rx = f' rx="{radius:.2f}"' if radius else ""
        self.parts.append(
            f'<rect x="{x:.2f}" y="{y:.2f}" width="{w:.2f}" height="{h:.2f}"{rx}'
            f" {_fill_attrs(fill)}/>"
        )

    def text(
        self,
        s: str,
        x: float,
        y: float,
        size: float,
        fill: Color,
        align: Align = "center",
        bold: bool = False,
    ) -> None:
        x, y = self._offset.apply(x, y)
        weight = ' font-weight="bold"' if bold else ""
        lines = s.split("\n")
        spans = "".join(
            f'<tspan x="{x:.2f}" dy="{0 if i == 0 else size * _LINE_HEIGHT:.2f}">'
            f"{html.escape(line)}</tspan>"
            for i, line in enumerate(lines)
        )
        self.parts.append(
            f'<text x="{x:.2f}" y="{y:.2f}" font-size="{size:.1f}"'
            f' text-anchor="{_ANCHOR[align]}"{weight} {_fill_attrs(fill)}>{spans}</text>'
        )

    def text_width(self, s: str, size: float, bold: bool = False) -> float:
        return measure_text(s, size, bold)

    def push(self) -> None:
        self._offset.push()

    def pop(self) -> None:
        self._offset.pop()

    def translate(self, dx: float, dy: float) -> None:
        self._offset.translate(dx, dy)


def _hit_layer(genres: Sequence[Genre], config: LayoutConfig) -> list[str]:
    parts: list[str] = []
    for genre in genres:
        for star in genre.star_positions:
            r = max(config.hover_min_radius, star.size * config.hover_scale)
            tip = html.escape("\n".join([genre.name, *detail_lines(star.movie, config.lang)]))
            parts.append(
                f'<circle class="hit" cx="{star.x:.2f}" cy="{star.y:.2f}" r="{r:.2f}">'
                f"<title>{tip}</title></circle>"
            )
    return parts


def render_svg_html(
    genres: Sequence[Genre],
    config: LayoutConfig = DEFAULT_CONFIG,
    state: SceneState | None = None,
) -> str:
    """Return a self-contained HTML page with the scene as inline SVG.

    Args:
        genres: Genres in display order.
        config: Layout configuration.
        state: Selection state to overlay; None draws the bare scene.

    Returns:
        HTML string, suitable for writing to disk or st.components.v1.html().
    """
    surface = SvgSurface(config)
    render_frame(state or SceneState(), genres, surface, config)

    scene_svg = "\n    ".join(surface.parts)
    hits_svg = "\n    ".join(_hit_layer(genres, config))
    title = html.escape(t("page_title", config.lang))

    return f"""<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{title}</title>
<style>
* {{ margin: 0; padding: 0; box-sizing: border-box; }}
html, body {{
    width: 100%;
    background: {_BG};
}}
svg#scene {{
    display: block;
    width: 100%;
    height: auto;
    font-family: 'DejaVu Sans', 'Apple SD Gothic Neo', 'Malgun Gothic', sans-serif;
}}
circle.hit {{ fill: transparent; cursor: pointer; }}
circle.hit:hover {{ fill: {rgb_string((235, 230, 220), 0.08)}; }}
</style>
</head>
<body>
<svg id="scene" viewBox="0 0 {config.width} {config.height}" xmlns="http://www.w3.org/2000/svg">
  <g id="frame">
    {scene_svg}
  </g>
  <g id="hits">
    {hits_svg}
  </g>
</svg>
</body>
</html>
"""
