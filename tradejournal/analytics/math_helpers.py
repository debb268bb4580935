"""Shared numeric primitives.

Population and sample deviation are kept as separate functions: TQI measures
R-multiple stability with the population form, Sharpe uses the sample form.
"""

import numpy as np


def percentage(part: float, whole: float) -> float:
    """part / whole * 100, or 0 when whole is 0."""
    return part / whole * 100 if whole > 0 else 0.0


def safe_ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator > 0 else 0.0


def population_std(values) -> float:
    """Standard deviation dividing by n. 0 for an empty input."""
    if len(values) == 0:
        return 0.0
    return float(np.std(np.asarray(values, dtype=float), ddof=0))


def sample_variance(values) -> float:
    """Variance dividing by n - 1. 0 for fewer than two points."""
    if len(values) < 2:
        return 0.0
    return float(np.var(np.asarray(values, dtype=float), ddof=1))


def sample_sharpe(returns) -> float:
    """Mean over sample standard deviation; 0 when n < 2 or variance is 0."""
    if len(returns) < 2:
        return 0.0
    variance = sample_variance(returns)
    if variance <= 0:
        return 0.0
    return float(np.mean(np.asarray(returns, dtype=float)) / np.sqrt(variance))
