"""Data model definitions — explicit boundaries between ingestion, layout, and render layers."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Movie:
    """A single sanitized movie record. Size and color are derived, not stored."""

    title: str
    popularity: float  # >= 0, TMDB popularity score
    revenue: float  # >= 0, box office revenue in USD


@dataclass(frozen=True)
class StarPosition:
    """Canvas-space position of one rendered star."""

    x: float
    y: float
    size: int  # Rendered diameter in px
    movie: Movie


@dataclass(frozen=True)
class HoverHit:
    """Result of a hover query: the closest star within tolerance."""

    movie: Movie
    distance: float


@dataclass
class Genre:
    """A named cluster of movies. Movie order is first-seen ingestion order.

    ``star_positions`` is a per-frame cache owned by the genre; it is replaced
    wholesale by every layout pass and never mutated from outside.
    """

    name: str
    movies: list[Movie] = field(default_factory=list)
    star_positions: list[StarPosition] = field(default_factory=list, repr=False)

    def add_movie(self, movie: Movie) -> None:
        self.movies.append(movie)


@dataclass(frozen=True)
class GridCell:
    """Geometry of a single genre cluster on the canvas."""

    cx: float  # Cluster centre x
    cy: float  # Cluster centre y
    radius: float  # Radius of the star ring
    col_width: float
    row_height: float


@dataclass
class SceneState:
    """Interaction state for one UI session. Mutated by pointer handlers, read by the next frame."""

    selected: Movie | None = None
    click_x: float = 0.0
    click_y: float = 0.0
    hovered: HoverHit | None = None
    pointer_x: float = 0.0
    pointer_y: float = 0.0
    tooltip_x: float = 0.0
    tooltip_y: float = 0.0
    tooltip_alpha: float = 0.0
    tooltip_movie: Movie | None = None  # Last hover target, kept while the tooltip fades out
