"""Interactive matplotlib window with a fixed-rate redraw plus pointer callbacks.

Single-threaded: matplotlib delivers motion/click events and animation ticks
on the same event loop, so handlers and frames never interleave mid-update.
"""

import logging
import time
from collections.abc import Sequence
from typing import Any

import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation

from genresky.config import DEFAULT_CONFIG, LayoutConfig
from genresky.models import Genre, SceneState
from genresky.renderers.static import MatplotlibSurface, new_canvas
from genresky.scene import handle_click, handle_move, render_frame

logger = logging.getLogger(__name__)


class ViewerSession:
    """Binds one figure, one SceneState and the genres being shown."""

    def __init__(
        self,
        genres: Sequence[Genre],
        config: LayoutConfig = DEFAULT_CONFIG,
        state: SceneState | None = None,
    ) -> None:
        self.genres = list(genres)
        self.config = config
        self.state = state or SceneState()
        self.fig, self.ax = new_canvas(config)
        self.surface = MatplotlibSurface(self.ax, config)
        self.frames = 0

    def draw_frame(self, _frame: Any = None) -> tuple[()]:
        started = time.perf_counter()
        self.surface.reset()
        render_frame(self.state, self.genres, self.surface, self.config)
        self.surface.flush()
        self.frames += 1
        logger.debug("frame %d drawn in %.1f ms", self.frames, (time.perf_counter() - started) * 1000)
        return ()

    def _canvas_xy(self, event: Any) -> tuple[float, float] | None:
        if event.inaxes is not self.ax or event.xdata is None or event.ydata is None:
            return None
        return float(event.xdata), float(event.ydata)

    def on_move(self, event: Any) -> None:
        xy = self._canvas_xy(event)
        if xy is None:
            # Pointer left the canvas: let the tooltip fade out
            self.state.hovered = None
            return
        handle_move(self.state, self.genres, *xy, self.config)

    def on_click(self, event: Any) -> None:
        xy = self._canvas_xy(event)
        if xy is None:
            return
        movie = handle_click(self.state, self.genres, *xy)
        if movie is not None:
            logger.info("selected %r", movie.title)

    def connect(self) -> FuncAnimation:
        """Wire pointer events and start the redraw loop. Keep the return value alive."""
        # Cache must exist before the first pointer event is hit-tested
        self.draw_frame()
        self.fig.canvas.mpl_connect("motion_notify_event", self.on_move)
        self.fig.canvas.mpl_connect("button_press_event", self.on_click)
        return FuncAnimation(
            self.fig,
            self.draw_frame,
            interval=1000 / self.config.fps,
            cache_frame_data=False,
        )


def run_viewer(
    genres: Sequence[Genre], config: LayoutConfig = DEFAULT_CONFIG
) -> SceneState:
    """Open the interactive window and block until it is closed.

    Returns:
        The final SceneState (e.g. the last selection).
    """
    session = ViewerSession(genres, config)
    session.fig.canvas.manager.set_window_title("GenreSky")  # type: ignore[union-attr]
    anim = session.connect()
    plt.show()
    del anim
    return session.state
