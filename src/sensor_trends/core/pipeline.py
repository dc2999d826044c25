from __future__ import annotations

import time
from typing import Any, Callable, Iterable, Mapping

import pandas as pd

from sensor_trends.core.series import (
    build_forecast_series,
    channel_values,
    estimate_exceedance,
    fit_and_forecast,
    normalize_minutes,
    paired_series,
    resolve_settings,
    summarize,
)
from sensor_trends.core.types import ChannelReport, Sample, SensorReport
from sensor_trends.core.utils import null_logger


def coerce_samples(samples: Iterable[Any] | pd.DataFrame) -> list[Sample]:
    if isinstance(samples, pd.DataFrame):
        samples = samples.to_dict(orient="records")
    coerced: list[Sample] = []
    for item in samples:
        if isinstance(item, Sample):
            coerced.append(item)
        elif isinstance(item, Mapping):
            coerced.append(Sample.from_record(item))
        else:
            coerced.append(Sample(timestamp=None))
    return coerced


def analyze_channel(
    samples: list[Sample],
    minutes: list[int | None],
    name: str,
    config: dict[str, Any],
) -> ChannelReport:
    values = channel_values(samples, name)
    pairs = paired_series(samples, name, minutes)
    trend_cfg = config["trend"]
    exceedance_cfg = config["exceedance"]
    trend = fit_and_forecast(
        pairs,
        [int(trend_cfg["headline_offset"])],
        ordering=str(trend_cfg["ordering"]),
    )
    series = build_forecast_series(
        trend.regression,
        trend.regression.last_minute,
        [int(offset) for offset in config["forecast"]["offsets"]],
    )
    return ChannelReport(
        name=name,
        unit=str(config["units"].get(name, "")),
        stats=summarize(values),
        trend=trend,
        exceedance=estimate_exceedance(
            values,
            float(exceedance_cfg["threshold"]),
            alpha=float(exceedance_cfg["alpha"]),
        ),
        forecast_series=series,
        pair_count=len(pairs),
    )


def analyze_samples(
    samples: Iterable[Any] | pd.DataFrame,
    settings: dict[str, Any] | None = None,
    logger: Callable[[str], None] | None = None,
) -> SensorReport:
    """Summarize, fit and forecast every configured channel of a sample snapshot.

    Malformed samples are skipped and statistics that cannot be computed come
    back as NaN / None. Only invalid `settings` raise (`SettingsError`).
    """

    log = logger or null_logger
    config = resolve_settings(settings)
    started = time.perf_counter()
    rows = coerce_samples(samples)
    tz = config.get("timezone")
    strict = bool(config["strict_clock"])
    minutes = [normalize_minutes(row.timestamp, strict=strict, tz=tz) for row in rows]
    parsed = sum(1 for minute in minutes if minute is not None)
    log(f"START samples={len(rows)} parsed_timestamps={parsed} tz={tz or 'local'}")

    report = SensorReport(sample_count=len(rows), parsed_timestamps=parsed, settings=config)
    if parsed < len(rows):
        log(f"SKIP reason=unparseable_timestamp count={len(rows) - parsed}")
    for name in config["channels"]:
        channel = analyze_channel(rows, minutes, name, config)
        regression = channel.trend.regression
        if not regression.ordered:
            log(f"WARN channel={name} reason=unordered_minutes ordering={config['trend']['ordering']}")
        if regression.count < 2:
            log(f"SKIP channel={name} reason=insufficient_pairs pairs={regression.count}")
        report.channels[name] = channel
        report.debug[name] = {
            "clean_values": channel.stats.count,
            "pairs": channel.pair_count,
            "ordered": regression.ordered,
        }
    runtime_ms = int((time.perf_counter() - started) * 1000)
    report.debug["runtime_ms"] = runtime_ms
    log(f"END runtime_ms={runtime_ms} channels={len(report.channels)}")
    return report
