from __future__ import annotations

import matplotlib.pyplot as plt
import pytest
from matplotlib.collections import EllipseCollection

from genresky.config import LayoutConfig
from genresky.hittest import resolve_click
from genresky.models import Genre, Movie, SceneState
from genresky.renderers.plotly_2d import render_plotly_chart
from genresky.renderers.static import MatplotlibSurface, new_canvas, render_static_chart, save_static_chart
from genresky.renderers.svg_2d import render_svg_html
from genresky.surface import measure_text

CONFIG = LayoutConfig(width=640, height=480)


@pytest.fixture
def genres() -> list[Genre]:
    shared = Movie("Inception", 167.6, 825_532_764)
    return [
        Genre("Action", [shared, Movie("Heat", 40.0, 187_436_818), Movie("Drive", 37.0, 76_175_166)]),
        Genre("Science Fiction", [shared, Movie("Moon", 12.0, 9_760_104)]),
        Genre("R&B Musicals", [Movie("Dreamgirls", 20.0, 154_937_680)]),
    ]


def test_measure_text() -> None:
    assert measure_text("", 16) == 0.0
    short, long = measure_text("Up", 16), measure_text("Up in the Air", 16)
    assert 0 < short < long
    assert measure_text("Up", 32) == pytest.approx(short * 2, rel=0.01)
    assert measure_text("wide\nw", 16) == measure_text("wide", 16)


def test_static_chart_draws_every_star(genres) -> None:
    fig = render_static_chart(genres, CONFIG)
    ax = fig.axes[0]
    collections = [c for c in ax.collections if isinstance(c, EllipseCollection)]
    assert sum(len(c.get_offsets()) for c in collections) == 2 * 6
    assert [t.get_text() for t in ax.texts] == ["Action", "Science Fiction", "R&B Musicals"]
    assert ax.get_ylim() == (480, 0)
    plt.close(fig)


def test_static_chart_keeps_painter_order() -> None:
    fig, ax = new_canvas(CONFIG)
    surface = MatplotlibSurface(ax, CONFIG)
    surface.ellipse(10, 10, 4, (255, 0, 0))
    surface.rect(0, 0, 5, 5, (0, 0, 0, 128), radius=2)
    surface.ellipse(20, 20, 4, (0, 255, 0))
    surface.flush()

    artists = sorted([*ax.collections, *ax.patches], key=lambda a: a.get_zorder())
    assert [type(a).__name__ for a in artists] == ["EllipseCollection", "FancyBboxPatch", "EllipseCollection"]
    plt.close(fig)


def test_save_static_chart(genres, tmp_path) -> None:
    path = save_static_chart(genres, tmp_path / "out" / "chart.png", CONFIG)
    assert path.exists()
    assert path.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"


def test_svg_page(genres) -> None:
    state = SceneState(selected=genres[0].movies[1], click_x=30, click_y=40)
    page = render_svg_html(genres, CONFIG, state)

    assert page.startswith("<!DOCTYPE html>")
    assert 'viewBox="0 0 640 480"' in page
    assert page.count('class="hit"') == 6
    assert "R&amp;B Musicals" in page
    assert "R&B Musicals" not in page
    assert "Revenue: $187,436,818" in page  # selection overlay


def test_plotly_markers_round_trip_through_hit_test(genres) -> None:
    fig = render_plotly_chart(genres, CONFIG)
    stars = fig.data[1]
    cached = [s for g in genres for s in g.star_positions]

    assert list(stars.x) == [s.x for s in cached]
    assert list(stars.marker.size) == [s.size for s in cached]
    for x, y, star in zip(stars.x, stars.y, cached):
        assert resolve_click(genres, x, y) is star.movie
    assert len(fig.layout.annotations) == len(genres)
    assert tuple(fig.layout.yaxis.range) == (480, 0)
    assert stars.customdata[0][1] == "Inception"
