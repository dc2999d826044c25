from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

NAN = float("nan")

TIMESTAMP_KEYS = ("timestamp", "timestamp_TTL")


@dataclass(frozen=True)
class Sample:
    timestamp: Any = None
    temperature: Any = None
    humidity: Any = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Sample:
        timestamp = None
        for key in TIMESTAMP_KEYS:
            if key in record:
                timestamp = record[key]
                break
        return cls(
            timestamp=timestamp,
            temperature=record.get("temperature"),
            humidity=record.get("humidity"),
        )

    def value_of(self, name: str) -> Any:
        return getattr(self, name, None)


@dataclass
class StatsSummary:
    mean: float = NAN
    median: float = NAN
    mode: float = NAN
    std_dev: float = NAN
    skewness: float = NAN
    count: int = 0


@dataclass
class ForecastPoint:
    minute: int
    label: str
    value: float


@dataclass
class RegressionResult:
    slope: float = NAN
    intercept: float = NAN
    r_squared: float = NAN
    count: int = 0
    last_minute: int | None = None
    ordered: bool = True


@dataclass
class TrendResult:
    regression: RegressionResult
    forecasts: list[ForecastPoint] = field(default_factory=list)

    @property
    def headline(self) -> ForecastPoint | None:
        return self.forecasts[0] if self.forecasts else None


@dataclass
class NormalityResult:
    statistic: float = NAN
    p_value: float = NAN
    is_normal: bool = False
    sample_size: int = 0


@dataclass
class ExceedanceEstimate:
    threshold: float
    empirical_probability: float
    normal_probability: float | None
    normality: NormalityResult


@dataclass
class ForecastSeries:
    points: list[ForecastPoint] = field(default_factory=list)
    y_min: float | None = None
    y_max: float | None = None


@dataclass
class ChannelReport:
    name: str
    unit: str
    stats: StatsSummary
    trend: TrendResult
    exceedance: ExceedanceEstimate
    forecast_series: ForecastSeries
    pair_count: int = 0


@dataclass
class SensorReport:
    sample_count: int
    parsed_timestamps: int
    channels: dict[str, ChannelReport] = field(default_factory=dict)
    settings: dict[str, Any] = field(default_factory=dict)
    debug: dict[str, Any] = field(default_factory=dict)
