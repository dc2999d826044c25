from __future__ import annotations

from copy import deepcopy
from pathlib import Path
from typing import Any

from jsonschema import ValidationError, validate

from sensor_trends.core.series.timeparse import epoch_to_wall_clock
from sensor_trends.core.utils import default_timezone, read_json

SETTINGS_SCHEMA_PATH = Path(__file__).resolve().parents[1] / "schemas" / "settings.schema.json"

CHANNELS = ("temperature", "humidity")

DEFAULT_CONFIG: dict[str, Any] = {
    # None means: SENSOR_TRENDS_TIMEZONE if set, else the system local time.
    "timezone": None,
    # Reject clock labels with hour >= 24 or minute >= 60.
    "strict_clock": True,
    "channels": list(CHANNELS),
    "units": {"temperature": "°C", "humidity": "%"},
    "trend": {
        "ordering": "input",
        "headline_offset": 60,
    },
    "forecast": {
        "offsets": [10, 20, 30, 40, 50],
    },
    "exceedance": {
        "threshold": 25.0,
        "alpha": 0.05,
    },
}


class SettingsError(ValueError):
    pass


def merge_config(config: dict[str, Any] | None) -> dict[str, Any]:
    if config is None:
        return deepcopy(DEFAULT_CONFIG)
    merged = deepcopy(DEFAULT_CONFIG)
    _deep_merge(merged, config)
    return merged


def _deep_merge(target: dict[str, Any], incoming: dict[str, Any]) -> None:
    for key, value in incoming.items():
        if isinstance(value, dict) and isinstance(target.get(key), dict):
            _deep_merge(target[key], value)
        else:
            target[key] = value


_schema_cache: dict[str, Any] = {}


def settings_schema() -> dict[str, Any]:
    if "settings" not in _schema_cache:
        _schema_cache["settings"] = read_json(SETTINGS_SCHEMA_PATH)
    return _schema_cache["settings"]


def resolve_settings(settings: dict[str, Any] | None = None) -> dict[str, Any]:
    if settings is not None and not isinstance(settings, dict):
        raise SettingsError(f"Settings must be a mapping, got {type(settings).__name__}")
    resolved = merge_config(settings)
    if resolved.get("timezone") is None:
        resolved["timezone"] = default_timezone()
    try:
        validate(instance=resolved, schema=settings_schema())
    except ValidationError as exc:
        location = "/".join(str(part) for part in exc.absolute_path) or "<root>"
        raise SettingsError(f"Invalid settings at {location}: {exc.message}") from exc
    tz = resolved.get("timezone")
    if tz is not None:
        try:
            epoch_to_wall_clock(0, tz)
        except (KeyError, ValueError) as exc:
            raise SettingsError(f"Unknown timezone: {tz}") from exc
    return resolved
