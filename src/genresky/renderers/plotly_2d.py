"""Plotly 2D interactive renderer.

Markers sit at the exact cached star positions, so a selected point's (x, y)
round-trips through the hit-test resolver back to its movie.
"""

from collections.abc import Sequence

import numpy as np
import plotly.graph_objects as go

from genresky.config import DEFAULT_CONFIG, LayoutConfig
from genresky.encoding import rgb_string, star_color
from genresky.i18n import t
from genresky.layout import GLOW_ALPHA, GLOW_SCALE, LABEL_BOX_FILL, LABEL_TEXT_FILL, label_size
from genresky.models import Genre
from genresky.scene import BG_TOP, format_popularity, format_revenue, layout_scene

_BG = rgb_string(BG_TOP)


def render_plotly_chart(
    genres: Sequence[Genre], config: LayoutConfig = DEFAULT_CONFIG
) -> go.Figure:
    """Render the genre clusters as a Plotly figure in canvas pixel space.

    Refreshes every genre's star cache as a side effect (same as a frame).

    Args:
        genres: Genres in display order.
        config: Layout configuration.

    Returns:
        Plotly Figure object. Trace 0 is the glow, trace 1 the stars.
    """
    cells = layout_scene(genres, config)
    stars = [(genre, star) for genre in genres for star in genre.star_positions]

    x_vals = [s.x for _, s in stars]
    y_vals = [s.y for _, s in stars]
    sizes = np.array([s.size for _, s in stars], dtype=float)
    colors = [star_color(s.movie.revenue, config) for _, s in stars]

    glow_trace = go.Scatter(
        x=x_vals,
        y=y_vals,
        mode="markers",
        marker=dict(
            size=list(sizes * GLOW_SCALE),
            color=[rgb_string(c, GLOW_ALPHA / 255) for c in colors],
            line=dict(width=0),
        ),
        hoverinfo="skip",
        name="glow",
    )

    star_trace = go.Scatter(
        x=x_vals,
        y=y_vals,
        mode="markers",
        marker=dict(
            size=list(sizes),
            color=[rgb_string(c) for c in colors],
            line=dict(width=0),
        ),
        customdata=[
            [
                genre.name,
                s.movie.title,
                format_popularity(s.movie.popularity),
                format_revenue(s.movie.revenue),
            ]
            for genre, s in stars
        ],
        hovertemplate=(
            "<b>%{customdata[1]}</b><br>"
            "%{customdata[0]}<br>"
            f"{t('label_popularity', config.lang)}: %{{customdata[2]}}<br>"
            f"{t('label_revenue', config.lang)}: %{{customdata[3]}}<extra></extra>"
        ),
        name="stars",
    )

    annotations = [
        dict(
            x=cell.cx,
            y=cell.cy,
            text=f"<b>{genre.name}</b>",
            showarrow=False,
            font=dict(size=label_size(cell.row_height, config), color=rgb_string(LABEL_TEXT_FILL)),
            bgcolor=rgb_string(LABEL_BOX_FILL),
            borderpad=8,
        )
        for genre, cell in zip(genres, cells)
    ]

    fig = go.Figure(data=[glow_trace, star_trace])

    # Axis ranges equal the canvas; y is reversed so canvas y points down.
    fig.update_layout(
        paper_bgcolor=_BG,
        plot_bgcolor=_BG,
        showlegend=False,
        margin=dict(l=0, r=0, t=0, b=0),
        width=config.width,
        height=config.height,
        dragmode=False,
        clickmode="event+select",
        hoverlabel=dict(bgcolor=rgb_string(LABEL_BOX_FILL), font=dict(color=rgb_string(LABEL_TEXT_FILL))),
        xaxis=dict(visible=False, range=[0, config.width], autorange=False, fixedrange=True),
        yaxis=dict(visible=False, range=[config.height, 0], autorange=False, fixedrange=True),
        annotations=annotations,
    )

    # st.plotly_chart call also requires config={"displayModeBar": False}
    fig._config = {"displayModeBar": False}  # type: ignore[attr-defined]

    return fig
