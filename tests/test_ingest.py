from __future__ import annotations

import io
import json
import logging
import math

import pandas as pd
import pytest

from genresky.ingest import (
    GenreParseError,
    MovieDataError,
    build_genres,
    genres_or_default,
    load_genres,
    load_records,
    movie_from_record,
    parse_genres,
)
from genresky.models import Movie


def _genres_json(*names: str) -> str:
    return json.dumps([{"id": i, "name": n} for i, n in enumerate(names)])


def test_parse_genres() -> None:
    assert parse_genres(_genres_json("Action", "Adventure")) == ["Action", "Adventure"]


@pytest.mark.parametrize(
    "raw",
    ["not json", "[]", '{"name": "Action"}', '[{"id": 1}]', '["Action"]', None, math.nan, 3],
)
def test_parse_genres_rejects_malformed(raw) -> None:
    with pytest.raises(GenreParseError):
        parse_genres(raw)


def test_malformed_genres_default_to_unknown(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="genresky.ingest"):
        assert genres_or_default("not json", row=7) == ["Unknown"]
    assert "Row 7" in caplog.text


def test_duplicate_genres_in_one_row_collapse() -> None:
    assert genres_or_default(_genres_json("Drama", "Drama", "Crime")) == ["Drama", "Crime"]


def test_movie_defaults() -> None:
    assert movie_from_record({}) == Movie("Unknown", 0.0, 0.0)
    assert movie_from_record(
        {"original_title": "   ", "popularity": "abc", "revenue": math.nan}
    ) == Movie("Unknown", 0.0, 0.0)
    assert movie_from_record(
        {"original_title": "Heat", "popularity": "12.5", "revenue": -3}
    ) == Movie("Heat", 12.5, 0.0)
    assert movie_from_record({"original_title": "Up", "popularity": math.inf}).popularity == 0.0


def test_build_genres_keeps_first_seen_order_and_shares_movies() -> None:
    records = [
        {"original_title": "Heat", "popularity": 40, "revenue": 187e6, "genres": _genres_json("Action", "Drama")},
        {"original_title": "Fargo", "popularity": 30, "revenue": 60e6, "genres": _genres_json("Drama", "Comedy")},
        {"original_title": "Mystery", "popularity": 1, "revenue": 0, "genres": "oops"},
    ]
    genres = build_genres(records)

    assert list(genres) == ["Action", "Drama", "Comedy", "Unknown"]
    assert [m.title for m in genres["Drama"].movies] == ["Heat", "Fargo"]
    assert genres["Drama"].movies[0] is genres["Action"].movies[0]
    assert genres["Unknown"].movies[0].title == "Mystery"


def _write_csv(path, rows: list[dict]) -> None:
    pd.DataFrame(rows).to_csv(path, index=False)


def test_load_records_from_csv(tmp_path) -> None:
    path = tmp_path / "movies.csv"
    _write_csv(
        path,
        [
            {"budget": 1, "original_title": "Avatar", "popularity": 150.4, "genres": _genres_json("Action")},
            {"budget": 2, "original_title": None, "popularity": None, "genres": None},
        ],
    )
    records = load_records(path)

    assert len(records) == 2
    assert set(records[0]) == {"original_title", "popularity", "revenue", "genres"}
    assert records[0]["revenue"] is None  # column absent from the file
    assert records[1]["original_title"] is None


def test_load_genres_processes_each_row_once(tmp_path) -> None:
    path = tmp_path / "movies.csv"
    _write_csv(
        path,
        [
            {"original_title": "Avatar", "popularity": 150.4, "revenue": 2787965087, "genres": _genres_json("Action", "Adventure")},
            {"original_title": "Spectre", "popularity": 107.4, "revenue": 880674609, "genres": _genres_json("Action")},
            {"original_title": "", "popularity": "n/a", "revenue": None, "genres": "not json"},
        ],
    )
    genres = load_genres(path)

    assert [m.title for m in genres["Action"].movies] == ["Avatar", "Spectre"]
    assert genres["Action"].movies[0].revenue == 2787965087
    assert genres["Unknown"].movies == [Movie("Unknown", 0.0, 0.0)]


def test_load_genres_from_buffer() -> None:
    buf = io.BytesIO(
        pd.DataFrame(
            [{"original_title": "Up", "popularity": 92, "revenue": 735099082, "genres": _genres_json("Animation")}]
        )
        .to_csv(index=False)
        .encode("utf-8")
    )
    genres = load_genres(buf)
    assert list(genres) == ["Animation"]


def test_missing_file_raises(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        load_records(tmp_path / "nope.csv")


def test_numeric_and_na_like_titles_are_kept() -> None:
    action = '"[{""id"": 28, ""name"": ""Action""}]"'
    data = "\n".join(
        [
            "original_title,popularity,revenue,genres",
            f"2012,10,5,{action}",
            f"300,20,6,{action}",
            f"NA,30,7,{action}",
            f"N/A,40,8,{action}",
            f"Null,50,9,{action}",
            f",60,10,{action}",
        ]
    )
    genres = load_genres(io.StringIO(data))

    titles = [m.title for m in genres["Action"].movies]
    assert titles == ["2012", "300", "NA", "N/A", "Null", "Unknown"]
    assert genres["Action"].movies[0].popularity == 10.0


def test_empty_file_raises_movie_data_error(tmp_path) -> None:
    path = tmp_path / "empty.csv"
    path.write_text("", encoding="utf-8")
    with pytest.raises(MovieDataError):
        load_records(path)
