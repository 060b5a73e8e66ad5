"""Layout configuration and environment loading."""

import os
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from typing import Literal

LayoutMode = Literal["simple", "grid"]

_MODES: tuple[str, ...] = ("simple", "grid")
_ENV_PREFIX = "GENRESKY_"


class ConfigError(ValueError):
    """Invalid configuration value."""


@dataclass(frozen=True)
class LayoutConfig:
    """Every tunable of the scene in one place.

    ``mode`` selects between the two layout variants:
      - "simple": fixed column count, no margins, star size from popularity only.
      - "grid": near-square grid with margins, star size scaled by row height.
    """

    mode: LayoutMode = "grid"
    width: int = 1600
    height: int = 1200
    columns: int = 3
    margin: float = 40.0
    shrink: float = 0.4
    revenue_max: float = 500_000_000.0
    popularity_divisor: float = 5.0
    min_star_size: int = 2
    size_reference_row_height: float = 300.0
    size_scale_min: float = 0.5
    size_scale_max: float = 2.0
    label_min: float = 16.0
    label_max: float = 34.0
    hover_min_radius: float = 8.0
    hover_scale: float = 0.9
    tooltip_smoothing: float = 0.2
    tooltip_threshold: float = 0.05
    fps: int = 30
    lang: str = "en"

    def __post_init__(self) -> None:
        if self.mode not in _MODES:
            raise ConfigError(f"Unknown layout mode: {self.mode!r} (expected one of {_MODES})")
        if self.width <= 0 or self.height <= 0:
            raise ConfigError(f"Canvas size must be positive: {self.width}x{self.height}")
        if self.columns < 1:
            raise ConfigError(f"columns must be >= 1: {self.columns}")
        for name in ("revenue_max", "popularity_divisor", "shrink", "size_reference_row_height", "fps"):
            if getattr(self, name) <= 0:
                raise ConfigError(f"{name} must be positive: {getattr(self, name)}")
        if self.min_star_size < 0:
            raise ConfigError(f"min_star_size must be >= 0: {self.min_star_size}")
        if not 0 <= self.tooltip_smoothing <= 1:
            raise ConfigError(f"tooltip_smoothing must be in [0, 1]: {self.tooltip_smoothing}")
        if not 0 < self.size_scale_min <= self.size_scale_max:
            raise ConfigError(
                f"size scale range is invalid: [{self.size_scale_min}, {self.size_scale_max}]"
            )
        if not 0 < self.label_min <= self.label_max:
            raise ConfigError(f"label size range is invalid: [{self.label_min}, {self.label_max}]")


DEFAULT_CONFIG = LayoutConfig()


def _coerce(name: str, raw: str, current: object) -> object:
    """Convert an env string to the type of the field's default value."""
    try:
        if isinstance(current, int):
            return int(raw)
        if isinstance(current, float):
            return float(raw)
    except ValueError as e:
        raise ConfigError(f"{_ENV_PREFIX}{name.upper()}: cannot parse {raw!r}") from e
    return raw.strip()


def load_config(
    environ: Mapping[str, str] | None = None,
    base: LayoutConfig = DEFAULT_CONFIG,
) -> LayoutConfig:
    """Build a LayoutConfig from ``GENRESKY_*`` environment variables.

    Every LayoutConfig field can be overridden by the upper-cased field name,
    e.g. ``GENRESKY_MODE=simple`` or ``GENRESKY_REVENUE_MAX=1e9``.

    Args:
        environ: Mapping to read from. Defaults to os.environ.
        base: Config whose values are used for unset variables.

    Returns:
        A new LayoutConfig.

    Raises:
        ConfigError: On an unparseable or out-of-range value.
    """
    env = os.environ if environ is None else environ
    overrides: dict[str, object] = {}
    for f in fields(LayoutConfig):
        raw = env.get(_ENV_PREFIX + f.name.upper())
        if raw is None or raw == "":
            continue
        overrides[f.name] = _coerce(f.name, raw, getattr(base, f.name))
    return replace(base, **overrides)


def data_path(environ: Mapping[str, str] | None = None) -> str | None:
    """Return the default dataset path from ``GENRESKY_DATA``, if set."""
    env = os.environ if environ is None else environ
    return env.get(_ENV_PREFIX + "DATA") or None
