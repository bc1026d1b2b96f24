from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, cast

if TYPE_CHECKING:
    from collections.abc import Iterable

from config import ConfigurationSet, config_from_dict, config_from_env, config_from_yaml

from juiced_ball.domain.errors import ConfigError

DEFAULT_EVENT_TYPES: tuple[str, ...] = ("home_run", "single", "double", "triple", "field_out")

_DEFAULTS: dict[str, object] = {
    "analysis": {
        "target_year": 2016,
        "day_offset": 50,
        "alpha": 0.05,
        "min_expected": 5.0,
        "yates_correction": False,
        "event_types": list(DEFAULT_EVENT_TYPES),
        "distance_event": "home_run",
        "quantile_resolution": "",
    },
}


@dataclass(frozen=True)
class AnalysisSettings:
    target_year: int = 2016
    day_offset: int = 50
    alpha: float = 0.05
    min_expected: float = 5.0
    yates_correction: bool = False
    event_types: tuple[str, ...] = DEFAULT_EVENT_TYPES
    distance_event: str | None = "home_run"
    quantile_resolution: int | None = None

    def __post_init__(self) -> None:
        if not 0.0 < self.alpha < 1.0:
            raise ConfigError(f"alpha must be between 0 and 1, got {self.alpha}")
        if self.min_expected < 0:
            raise ConfigError(f"min_expected must be >= 0, got {self.min_expected}")
        if len(self.event_types) < 2:
            raise ConfigError(f"event_types needs at least 2 entries, got {list(self.event_types)}")
        if self.quantile_resolution is not None and self.quantile_resolution < 2:
            raise ConfigError(f"quantile_resolution must be >= 2, got {self.quantile_resolution}")


def create_config(
    yaml_path: str = "juiced.yaml",
    env_prefix: str = "JUICED",
    defaults: dict[str, object] | None = None,
    *,
    overrides: dict[str, object] | None = None,
) -> ConfigurationSet:
    """Create a layered configuration.

    Priority (highest to lowest): explicit overrides > env vars > YAML file > defaults dict.
    """
    if defaults is None:
        defaults = _DEFAULTS

    layers = [
        config_from_env(env_prefix, separator="__", lowercase_keys=True),
        config_from_yaml(yaml_path, read_from_file=True, ignore_missing_paths=True),
        config_from_dict(defaults),
    ]
    explicit = {k: v for k, v in (overrides or {}).items() if v is not None}
    if explicit:
        layers.insert(0, config_from_dict({"analysis": explicit}))

    return ConfigurationSet(*layers)


def _is_unset(value: object) -> bool:
    return value is None or (isinstance(value, str) and value.strip().lower() in ("", "none", "null"))


def _to_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("1", "true", "yes", "on"):
        return True
    if text in ("0", "false", "no", "off"):
        return False
    raise ConfigError(f"Cannot interpret {value!r} as a boolean")


def _to_list(value: object) -> tuple[str, ...]:
    # Environment variables arrive as a single comma-separated string.
    if isinstance(value, str):
        return tuple(item.strip() for item in value.split(",") if item.strip())
    return tuple(str(item) for item in cast("Iterable[object]", value))


def load_analysis_settings(cfg: ConfigurationSet | None = None) -> AnalysisSettings:
    if cfg is None:
        cfg = create_config()
    try:
        resolution = cfg["analysis.quantile_resolution"]
        distance_event = cfg["analysis.distance_event"]
        return AnalysisSettings(
            target_year=int(str(cfg["analysis.target_year"])),
            day_offset=int(str(cfg["analysis.day_offset"])),
            alpha=float(str(cfg["analysis.alpha"])),
            min_expected=float(str(cfg["analysis.min_expected"])),
            yates_correction=_to_bool(cfg["analysis.yates_correction"]),
            event_types=_to_list(cfg["analysis.event_types"]),
            distance_event=None if _is_unset(distance_event) else str(distance_event),
            quantile_resolution=None if _is_unset(resolution) else int(str(resolution)),
        )
    except (KeyError, ValueError) as exc:
        raise ConfigError(f"Invalid analysis configuration: {exc}") from exc
