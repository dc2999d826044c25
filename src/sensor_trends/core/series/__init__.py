from .channels import channel_values, clean_values, coerce_number, paired_series
from .config import (
    CHANNELS,
    DEFAULT_CONFIG,
    SettingsError,
    merge_config,
    resolve_settings,
)
from .exceedance import estimate_exceedance, shapiro_normality
from .forecast import build_forecast_series
from .stats import summarize
from .timeparse import minutes_to_hhmm, normalize_minutes, parse_hhmm_to_minutes
from .trend import fit_and_forecast, fit_line, predict

__all__ = [
    "CHANNELS",
    "DEFAULT_CONFIG",
    "SettingsError",
    "build_forecast_series",
    "channel_values",
    "clean_values",
    "coerce_number",
    "estimate_exceedance",
    "fit_and_forecast",
    "fit_line",
    "merge_config",
    "minutes_to_hhmm",
    "normalize_minutes",
    "paired_series",
    "parse_hhmm_to_minutes",
    "predict",
    "resolve_settings",
    "shapiro_normality",
    "summarize",
]
