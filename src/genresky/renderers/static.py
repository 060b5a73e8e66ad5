"""Matplotlib renderer: static PNG export and the drawing surface used by the viewer."""

from collections.abc import Sequence
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.axes import Axes
from matplotlib.collections import EllipseCollection
from matplotlib.figure import Figure
from matplotlib.patches import FancyBboxPatch, Rectangle

from genresky.config import DEFAULT_CONFIG, LayoutConfig
from genresky.models import Genre, SceneState
from genresky.scene import render_frame
from genresky.surface import Align, Color, OffsetStack, measure_text


def _rgba(color: Color) -> tuple[float, float, float, float]:
    r, g, b = color[:3]
    a = color[3] if len(color) == 4 else 255
    return r / 255, g / 255, b / 255, a / 255


class MatplotlibSurface:
    """Surface drawing onto an Axes whose data units are canvas pixels.

    Consecutive ellipses are buffered and flushed as one EllipseCollection so a
    frame with thousands of stars stays cheap. Every artist gets an increasing
    zorder, which keeps painter's order across the batches.
    """

    def __init__(self, ax: Axes, config: LayoutConfig = DEFAULT_CONFIG) -> None:
        self.ax = ax
        self.config = config
        self._offset = OffsetStack()
        self._z = 0
        self._xy: list[tuple[float, float]] = []
        self._diameters: list[float] = []
        self._colors: list[tuple[float, float, float, float]] = []
        self.reset()

    def reset(self) -> None:
        """Clear the axes for a new frame."""
        self.ax.clear()
        self.ax.set_xlim(0, self.config.width)
        self.ax.set_ylim(self.config.height, 0)  # y points down
        self.ax.set_axis_off()
        self._offset = OffsetStack()
        self._z = 0
        self._xy.clear()
        self._diameters.clear()
        self._colors.clear()

    def _next_z(self) -> int:
        self._z += 1
        return self._z

    def flush(self) -> None:
        """Emit buffered ellipses. Call once after the last primitive of a frame."""
        if not self._xy:
            return
        d = np.array(self._diameters)
        coll = EllipseCollection(
            widths=d,
            heights=d,
            angles=np.zeros_like(d),
            units="xy",
            offsets=np.array(self._xy),
            offset_transform=self.ax.transData,
            facecolors=self._colors,
            linewidths=0,
            zorder=self._next_z(),
        )
        self.ax.add_collection(coll)
        self._xy.clear()
        self._diameters.clear()
        self._colors.clear()

    # --- Surface protocol ---

    def background(self, color: Color) -> None:
        self.flush()
        self.ax.figure.set_facecolor(_rgba(color))
        self.rect(
            -self._offset.dx, -self._offset.dy, self.config.width, self.config.height, color
        )

    def ellipse(self, x: float, y: float, diameter: float, fill: Color) -> None:
        self._xy.append(self._offset.apply(x, y))
        self._diameters.append(diameter)
        self._colors.append(_rgba(fill))

    def rect(
        self, x: float, y: float, w: float, h: float, fill: Color, radius: float = 0
    ) -> None:
        self.flush()
        x, y = self._offset.apply(x, y)
        if radius:
            patch = FancyBboxPatch(
                (x, y),
                w,
                h,
                boxstyle=f"round,pad=0,rounding_size={radius}",
                facecolor=_rgba(fill),
                linewidth=0,
                zorder=self._next_z(),
            )
        else:
            patch = Rectangle(
                (x, y), w, h, facecolor=_rgba(fill), linewidth=0, zorder=self._next_z()
            )
        self.ax.add_patch(patch)

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
        self.flush()
        x, y = self._offset.apply(x, y)
        # size is in px; matplotlib wants points
        self.ax.text(
            x,
            y,
            s,
            fontsize=size * 72 / self.ax.figure.dpi,
            color=_rgba(fill),
            ha=align,
            va="baseline",
            fontweight="bold" if bold else "normal",
            zorder=self._next_z(),
        )

    def text_width(self, s: str, size: float, bold: bool = False) -> float:
        return measure_text(s, size, bold)

    def push(self) -> None:
        self._offset.push()

    def pop(self) -> None:
        self._offset.pop()

    def translate(self, dx: float, dy: float) -> None:
        self._offset.translate(dx, dy)


def new_canvas(config: LayoutConfig = DEFAULT_CONFIG, dpi: int = 100) -> tuple[Figure, Axes]:
    """Figure sized so one data unit is one output pixel."""
    fig = plt.figure(figsize=(config.width / dpi, config.height / dpi), dpi=dpi)
    ax = fig.add_axes((0, 0, 1, 1))
    return fig, ax


def render_static_chart(
    genres: Sequence[Genre],
    config: LayoutConfig = DEFAULT_CONFIG,
    state: SceneState | None = None,
) -> Figure:
    """Render one frame of the scene as a matplotlib Figure.

    Args:
        genres: Genres in display order.
        config: Layout configuration (canvas size, mode).
        state: Selection/hover state to overlay. A fresh state draws no overlay.

    Returns:
        matplotlib Figure object.
    """
    fig, ax = new_canvas(config)
    surface = MatplotlibSurface(ax, config)
    render_frame(state or SceneState(), genres, surface, config)
    surface.flush()
    return fig


def save_static_chart(
    genres: Sequence[Genre],
    output_path: Path | None = None,
    config: LayoutConfig = DEFAULT_CONFIG,
) -> Path:
    """Save the scene as a PNG file.

    Args:
        genres: Genres in display order.
        output_path: Destination path. Auto-generated under results/ if None.
        config: Layout configuration.

    Returns:
        Path to the saved file.
    """
    if output_path is None:
        output_path = Path("results") / f"genresky_{config.mode}.png"

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig = render_static_chart(genres, config)
    fig.savefig(output_path, dpi=fig.dpi, facecolor=fig.get_facecolor())
    plt.close(fig)
    return output_path
