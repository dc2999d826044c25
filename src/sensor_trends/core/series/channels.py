from __future__ import annotations

import math
import numbers
from typing import Any, Iterable, Sequence

import numpy as np

from sensor_trends.core.types import Sample


def coerce_number(value: Any) -> float:
    """Return `value` as a finite float, or NaN when it is not a clean value."""

    if value is None or isinstance(value, bool):
        return math.nan
    if isinstance(value, numbers.Real):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return math.nan
        try:
            number = float(text)
        except ValueError:
            return math.nan
    else:
        return math.nan
    return number if math.isfinite(number) else math.nan


def clean_values(values: Iterable[Any]) -> np.ndarray:
    arr = np.asarray([coerce_number(value) for value in values], dtype=float)
    return arr[np.isfinite(arr)]


def channel_values(samples: Sequence[Sample], name: str) -> np.ndarray:
    return clean_values(sample.value_of(name) for sample in samples)


def paired_series(
    samples: Sequence[Sample], name: str, minutes: Sequence[int | None]
) -> list[tuple[int, float]]:
    """Index-aligned (minute, value) pairs keeping only rows where both parsed."""

    pairs: list[tuple[int, float]] = []
    for sample, minute in zip(samples, minutes):
        if minute is None:
            continue
        value = coerce_number(sample.value_of(name))
        if math.isnan(value):
            continue
        pairs.append((minute, value))
    return pairs
