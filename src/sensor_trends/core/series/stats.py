from __future__ import annotations

import math
from typing import Any, Iterable

import numpy as np
import pandas as pd
from scipy import stats as sp_stats

from sensor_trends.core.series.channels import clean_values
from sensor_trends.core.types import StatsSummary


def smallest_mode(arr: np.ndarray) -> float:
    if arr.size == 0:
        return math.nan
    # Series.mode returns every modal value in sorted order.
    modes = pd.Series(arr).mode()
    return float(modes.iloc[0])


def sample_std(arr: np.ndarray) -> float:
    if arr.size < 2:
        return math.nan
    return float(np.std(arr, ddof=1))


def sample_skewness(arr: np.ndarray) -> float:
    if arr.size < 3:
        return math.nan
    if np.ptp(arr) == 0:
        return math.nan
    return float(sp_stats.skew(arr, bias=False))


def summarize(values: Iterable[Any]) -> StatsSummary:
    arr = clean_values(values)
    if arr.size == 0:
        return StatsSummary()
    return StatsSummary(
        mean=float(np.mean(arr)),
        median=float(np.median(arr)),
        mode=smallest_mode(arr),
        std_dev=sample_std(arr),
        skewness=sample_skewness(arr),
        count=int(arr.size),
    )
