from __future__ import annotations

import pytest

from genresky.config import DEFAULT_CONFIG, ConfigError, LayoutConfig, data_path, load_config


def test_empty_environment_gives_defaults() -> None:
    assert load_config({}) == DEFAULT_CONFIG
    assert DEFAULT_CONFIG.mode == "grid"
    assert DEFAULT_CONFIG.revenue_max == 500_000_000


def test_environment_overrides_are_typed() -> None:
    config = load_config(
        {
            "GENRESKY_MODE": "simple",
            "GENRESKY_WIDTH": "800",
            "GENRESKY_REVENUE_MAX": "1e9",
            "GENRESKY_LANG": "ko",
            "GENRESKY_SHRINK": "",
        }
    )
    assert config.mode == "simple"
    assert config.width == 800 and isinstance(config.width, int)
    assert config.revenue_max == 1e9
    assert config.lang == "ko"
    assert config.shrink == DEFAULT_CONFIG.shrink


def test_unparseable_value_names_the_variable() -> None:
    with pytest.raises(ConfigError, match="GENRESKY_WIDTH"):
        load_config({"GENRESKY_WIDTH": "wide"})


def test_invalid_values_are_rejected() -> None:
    with pytest.raises(ConfigError):
        load_config({"GENRESKY_MODE": "spiral"})
    with pytest.raises(ConfigError):
        LayoutConfig(width=0)
    with pytest.raises(ConfigError):
        LayoutConfig(columns=0)


def test_data_path() -> None:
    assert data_path({}) is None
    assert data_path({"GENRESKY_DATA": "movies.csv"}) == "movies.csv"


@pytest.mark.parametrize(
    "overrides",
    [
        {"popularity_divisor": 0.0},
        {"fps": 0},
        {"shrink": -0.1},
        {"shrink": 0.0},
        {"min_star_size": -1},
        {"tooltip_smoothing": 1.5},
        {"tooltip_smoothing": -0.1},
        {"size_scale_min": 3.0, "size_scale_max": 2.0},
        {"label_min": 40.0, "label_max": 34.0},
    ],
)
def test_out_of_range_values_are_rejected(overrides) -> None:
    with pytest.raises(ConfigError):
        LayoutConfig(**overrides)


def test_zero_divisor_from_environment_is_rejected() -> None:
    with pytest.raises(ConfigError, match="popularity_divisor"):
        load_config({"GENRESKY_POPULARITY_DIVISOR": "0"})
