"""Ingestion boundary — CSV rows to sanitized Movies grouped by genre.

Everything downstream (layout, hit-testing) assumes clean input, so every
fallback policy lives here:
  - title      → "Unknown" when missing or blank
  - popularity → 0 when missing, non-numeric, NaN or infinite; negatives clamp to 0
  - revenue    → same as popularity
  - genres     → ["Unknown"] when the JSON list cannot be parsed or is empty
"""

import json
import logging
import math
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import IO, Any

import pandas as pd

from genresky.models import Genre, Movie

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"
COLUMNS: tuple[str, ...] = ("original_title", "popularity", "revenue", "genres")


class GenreParseError(ValueError):
    """Genre field is not a non-empty JSON list of {"name": ...} objects."""


class MovieDataError(ValueError):
    """The movie file is empty, malformed or not UTF-8 text."""


def parse_genres(raw: Any) -> list[str]:
    """Parse a TMDB-style genres cell, e.g. ``'[{"id": 28, "name": "Action"}]'``.

    Raises:
        GenreParseError: On anything but a non-empty list of named objects.
    """
    if not isinstance(raw, str):
        raise GenreParseError(f"expected a JSON string, got {type(raw).__name__}")
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise GenreParseError(f"invalid JSON: {e.msg}") from e
    if not isinstance(data, list):
        raise GenreParseError(f"expected a list, got {type(data).__name__}")

    names: list[str] = []
    for item in data:
        name = item.get("name") if isinstance(item, dict) else None
        if not isinstance(name, str) or not name.strip():
            raise GenreParseError(f"genre entry without a name: {item!r}")
        names.append(name.strip())
    if not names:
        raise GenreParseError("empty genre list")
    return names


def genres_or_default(raw: Any, row: int | None = None) -> list[str]:
    """parse_genres collapsed to ``["Unknown"]`` on failure. Duplicate names keep first."""
    try:
        names = parse_genres(raw)
    except GenreParseError as e:
        logger.warning("Row %s: invalid genre data (%s). Using %r.", row, e, UNKNOWN)
        return [UNKNOWN]
    return list(dict.fromkeys(names))


def _number_or_zero(value: Any, field: str, row: int | None) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        number = math.nan
    if not math.isfinite(number):
        logger.warning("Row %s: invalid %s data %r. Using 0.", row, field, value)
        return 0.0
    if number < 0:
        logger.warning("Row %s: negative %s %r clamped to 0.", row, field, value)
        return 0.0
    return number


def movie_from_record(record: Mapping[str, Any], row: int | None = None) -> Movie:
    """Build a Movie from one raw record, applying the field defaults."""
    title = record.get("original_title")
    if not isinstance(title, str) or not title.strip():
        logger.warning("Row %s: invalid title data. Using %r.", row, UNKNOWN)
        title = UNKNOWN
    return Movie(
        title=title,
        popularity=_number_or_zero(record.get("popularity"), "popularity", row),
        revenue=_number_or_zero(record.get("revenue"), "revenue", row),
    )


def build_genres(records: Iterable[Mapping[str, Any]]) -> dict[str, Genre]:
    """Group records into genres. Genre and movie order follow first appearance.

    A movie listed under several genres is shared (same object) between them.
    """
    genres: dict[str, Genre] = {}
    for row, record in enumerate(records):
        movie = movie_from_record(record, row)
        for name in genres_or_default(record.get("genres"), row):
            if name not in genres:
                genres[name] = Genre(name)
            genres[name].add_movie(movie)
    return genres


def load_records(source: str | Path | IO[Any]) -> list[dict[str, Any]]:
    """Read the movie CSV. Absent columns come back as None rather than failing.

    Every cell is read as text and only empty cells count as missing, so titles
    like "2012" or "NA" survive as written.

    Args:
        source: File path, or an open file object (e.g. a Streamlit upload).

    Raises:
        FileNotFoundError: If a path is given and does not exist.
        MovieDataError: If the file is empty, unparseable or not UTF-8.
    """
    if isinstance(source, (str, Path)):
        source = Path(source)
        if not source.exists():
            raise FileNotFoundError(f"Movie data not found: {source}")
    try:
        df = pd.read_csv(source, dtype=str, keep_default_na=False, na_values=[""])
    except (pd.errors.EmptyDataError, pd.errors.ParserError, UnicodeDecodeError) as e:
        raise MovieDataError(f"Cannot read movie data: {e}") from e
    missing = [c for c in COLUMNS if c not in df.columns]
    if missing:
        logger.warning("Movie data is missing columns: %s", ", ".join(missing))
    df = df.reindex(columns=list(COLUMNS))
    # NA → None so record.get() sees a plain missing value
    df = df.astype(object).where(df.notna(), None)
    return df.to_dict("records")


def load_genres(source: str | Path | IO[Any]) -> dict[str, Genre]:
    """Top-level ingestion entry point: movie CSV → genres by name."""
    records = load_records(source)
    genres = build_genres(records)
    logger.info("Loaded %d movies into %d genres", len(records), len(genres))
    return genres
