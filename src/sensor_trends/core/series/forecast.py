from __future__ import annotations

from typing import Iterable

from sensor_trends.core.series.trend import forecast_points
from sensor_trends.core.types import ForecastSeries, RegressionResult

DEFAULT_OFFSETS = (10, 20, 30, 40, 50)
FLAT_PADDING = 1.0


def build_forecast_series(
    regression: RegressionResult,
    last_minute: int | None,
    offsets: Iterable[int] = DEFAULT_OFFSETS,
) -> ForecastSeries:
    if regression.count < 2:
        return ForecastSeries()
    points = forecast_points(regression, last_minute, offsets)
    if not points:
        return ForecastSeries()
    values = [point.value for point in points]
    y_min = min(values)
    y_max = max(values)
    if y_min == y_max:
        # A flat forecast still needs vertical extent on a chart axis.
        y_min -= FLAT_PADDING
        y_max += FLAT_PADDING
    return ForecastSeries(points=points, y_min=y_min, y_max=y_max)
