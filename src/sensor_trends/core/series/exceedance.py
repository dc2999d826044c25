from __future__ import annotations

import math
import warnings
from typing import Any, Callable, Iterable

import numpy as np
from scipy import stats as sp_stats

from sensor_trends.core.series.channels import clean_values
from sensor_trends.core.series.stats import sample_std
from sensor_trends.core.types import ExceedanceEstimate, NormalityResult

DEFAULT_THRESHOLD = 25.0
DEFAULT_ALPHA = 0.05
MIN_NORMALITY_SAMPLES = 3

NormalCdf = Callable[[float], float]


def empirical_exceedance(arr: np.ndarray, threshold: float) -> float:
    if arr.size == 0:
        return 0.0
    return float(np.count_nonzero(arr > threshold)) / float(arr.size)


def shapiro_normality(arr: np.ndarray, alpha: float = DEFAULT_ALPHA) -> NormalityResult:
    n = int(arr.size)
    if n < MIN_NORMALITY_SAMPLES or np.ptp(arr) == 0:
        return NormalityResult(sample_size=n)
    with warnings.catch_warnings():
        # scipy warns that p-values lose accuracy above 5000 samples.
        warnings.simplefilter("ignore", UserWarning)
        result = sp_stats.shapiro(arr)
    statistic = float(result[0])
    p_value = float(result[1])
    return NormalityResult(
        statistic=statistic,
        p_value=p_value,
        is_normal=bool(p_value > alpha),
        sample_size=n,
    )


def normal_exceedance(
    mean: float, std: float, threshold: float, normal_cdf: NormalCdf
) -> float | None:
    if not (math.isfinite(mean) and math.isfinite(std)) or std <= 0:
        return None
    probability = 1.0 - float(normal_cdf((threshold - mean) / std))
    if not math.isfinite(probability):
        return None
    return min(1.0, max(0.0, probability))


def estimate_exceedance(
    values: Iterable[Any],
    threshold: float = DEFAULT_THRESHOLD,
    *,
    alpha: float = DEFAULT_ALPHA,
    normal_cdf: NormalCdf | None = None,
) -> ExceedanceEstimate:
    if normal_cdf is None:
        normal_cdf = sp_stats.norm.cdf
    arr = clean_values(values)
    normality = shapiro_normality(arr, alpha=alpha)
    normal_probability = None
    if normality.is_normal:
        normal_probability = normal_exceedance(
            float(np.mean(arr)), sample_std(arr), threshold, normal_cdf
        )
    return ExceedanceEstimate(
        threshold=float(threshold),
        empirical_probability=empirical_exceedance(arr, threshold),
        normal_probability=normal_probability,
        normality=normality,
    )
