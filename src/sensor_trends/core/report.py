from __future__ import annotations

import math
from dataclasses import asdict
from pathlib import Path
from typing import Any

from jsonschema import validate

from .types import ChannelReport, SensorReport
from .utils import json_ready, read_json

REPORT_SCHEMA_PATH = Path(__file__).resolve().parent / "schemas" / "report.schema.json"
PLACEHOLDER = "--"
NOT_NORMAL = "distribution not normal"

CHANNEL_TITLES = {"temperature": "Temperature", "humidity": "Humidity"}


def _missing(value: float | None) -> bool:
    return value is None or not math.isfinite(value)


def format_stat(value: float | None, unit: str = "") -> str:
    if _missing(value):
        return PLACEHOLDER
    return f"{value:.2f}{unit}"


def format_percent(fraction: float | None) -> str:
    if _missing(fraction):
        return PLACEHOLDER
    return f"{fraction * 100:.2f}%"


def _offset_label(minutes: int) -> str:
    if minutes % 60 == 0:
        return f"{minutes // 60} h"
    return f"{minutes} min"


def build_legend(channel: ChannelReport, headline_offset: int = 60) -> list[str]:
    """Legend lines shown under a channel's chart, in display order."""

    stats = channel.stats
    unit = channel.unit
    headline = channel.trend.headline
    label = headline.label if headline else PLACEHOLDER
    forecast_value = headline.value if headline else None
    exceedance = channel.exceedance
    if exceedance.normal_probability is None:
        normal_txt = NOT_NORMAL
    else:
        normal_txt = f"normal {format_percent(exceedance.normal_probability)}"
    threshold = format_stat(exceedance.threshold, unit)
    return [
        f"Mean: {format_stat(stats.mean, unit)}",
        f"Median: {format_stat(stats.median, unit)}",
        f"Mode: {format_stat(stats.mode, unit)}",
        f"Std dev: {format_stat(stats.std_dev)}",
        f"Skewness: {format_stat(stats.skewness)}",
        f"Regression: {format_percent(channel.trend.regression.r_squared)}",
        f"Forecast ({_offset_label(headline_offset)} - {label}): {format_stat(forecast_value, unit)}",
        f"P(> {threshold}): empirical {format_percent(exceedance.empirical_probability)}, {normal_txt}",
    ]


def channel_payload(channel: ChannelReport) -> dict[str, Any]:
    headline = channel.trend.headline
    return {
        "name": channel.name,
        "unit": channel.unit,
        "stats": asdict(channel.stats),
        "regression": asdict(channel.trend.regression),
        "forecast": asdict(headline) if headline else None,
        "exceedance": asdict(channel.exceedance),
        "forecast_series": asdict(channel.forecast_series),
        "pair_count": channel.pair_count,
    }


_schema_cache: dict[str, Any] = {}


def report_schema() -> dict[str, Any]:
    if "report" not in _schema_cache:
        _schema_cache["report"] = read_json(REPORT_SCHEMA_PATH)
    return _schema_cache["report"]


def report_payload(report: SensorReport) -> dict[str, Any]:
    payload = {
        "sample_count": report.sample_count,
        "parsed_timestamps": report.parsed_timestamps,
        "channels": {name: channel_payload(ch) for name, ch in report.channels.items()},
        "settings": report.settings,
    }
    payload = json_ready(payload)
    validate(instance=payload, schema=report_schema())
    return payload


def render_text(report: SensorReport) -> str:
    headline_offset = int(report.settings.get("trend", {}).get("headline_offset", 60))
    lines: list[str] = []
    lines.append("# Sensor Summary")
    lines.append("")
    lines.append(
        f"Samples: {report.sample_count} (timestamps parsed: {report.parsed_timestamps})"
    )
    for name, channel in report.channels.items():
        lines.append("")
        lines.append(f"## {CHANNEL_TITLES.get(name, name)}")
        for line in build_legend(channel, headline_offset):
            lines.append(f"- {line}")
        points = channel.forecast_series.points
        if points:
            series = ", ".join(f"{p.label} {format_stat(p.value, channel.unit)}" for p in points)
            lines.append(f"- Next: {series}")
    return "\n".join(lines) + "\n"
