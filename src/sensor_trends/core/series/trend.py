from __future__ import annotations

import math
from typing import Iterable, Sequence

import numpy as np

from sensor_trends.core.series.timeparse import MINUTES_PER_DAY, minutes_to_hhmm
from sensor_trends.core.types import ForecastPoint, RegressionResult, TrendResult

ORDERINGS = ("input", "sorted")


def _is_non_decreasing(minutes: Sequence[int]) -> bool:
    return all(a <= b for a, b in zip(minutes, minutes[1:]))


def _unwrap_days(items: list[tuple[int, float]]) -> list[tuple[int, float]]:
    """Carry minute-of-day forward a day each time the clock goes backwards."""

    unwrapped: list[tuple[int, float]] = []
    day = 0
    previous: int | None = None
    for minute, value in items:
        if previous is not None and minute < previous:
            day += 1
        previous = minute
        unwrapped.append((minute + day * MINUTES_PER_DAY, value))
    return unwrapped


def fit_line(pairs: Iterable[tuple[int, float]], ordering: str = "input") -> RegressionResult:
    if ordering not in ORDERINGS:
        raise ValueError(f"Unknown ordering: {ordering}")
    items = list(pairs)
    ordered = _is_non_decreasing([minute for minute, _ in items])
    if ordering == "sorted":
        if not ordered:
            items = sorted(items, key=lambda item: item[0])
    else:
        items = _unwrap_days(items)
    if len(items) < 2:
        return RegressionResult(
            count=len(items),
            last_minute=items[-1][0] if items else None,
            ordered=ordered,
        )

    x = np.asarray([minute for minute, _ in items], dtype=float)
    y = np.asarray([value for _, value in items], dtype=float)
    x_mean = float(x.mean())
    y_mean = float(y.mean())
    dx = x - x_mean
    sxx = float(np.dot(dx, dx))
    slope = math.nan
    intercept = math.nan
    r_squared = math.nan
    if sxx > 0:
        slope = float(np.dot(dx, y - y_mean)) / sxx
        intercept = y_mean - slope * x_mean
        with np.errstate(over="ignore", invalid="ignore"):
            residuals = y - (slope * x + intercept)
            ss_res = float(np.dot(residuals, residuals))
            ss_tot = float(np.dot(y - y_mean, y - y_mean))
        if ss_tot > 0:
            r_squared = 1.0 - ss_res / ss_tot
        elif ss_res == 0:
            r_squared = 1.0
    return RegressionResult(
        slope=slope,
        intercept=intercept,
        r_squared=r_squared,
        count=len(items),
        last_minute=int(items[-1][0]),
        ordered=ordered,
    )


def predict(regression: RegressionResult, minute: float) -> float:
    with np.errstate(over="ignore", invalid="ignore"):
        value = float(np.float64(regression.slope) * minute + regression.intercept)
    return value


def forecast_points(
    regression: RegressionResult, last_minute: int | None, offsets: Iterable[int]
) -> list[ForecastPoint]:
    if last_minute is None:
        return []
    points: list[ForecastPoint] = []
    for offset in offsets:
        minute = int(last_minute) + int(offset)
        value = predict(regression, minute)
        if not math.isfinite(value):
            continue
        points.append(ForecastPoint(minute=minute, label=minutes_to_hhmm(minute), value=value))
    return points


def fit_and_forecast(
    pairs: Iterable[tuple[int, float]],
    horizons: Sequence[int] = (60,),
    *,
    ordering: str = "input",
) -> TrendResult:
    regression = fit_line(pairs, ordering=ordering)
    if regression.count < 2:
        return TrendResult(regression=regression)
    return TrendResult(
        regression=regression,
        forecasts=forecast_points(regression, regression.last_minute, horizons),
    )
