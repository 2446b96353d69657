"""
Least-squares helpers for log-linear curve fitting.
"""
from dataclasses import dataclass

import numpy as np


@dataclass
class LinearFit:
    """Ordinary least-squares line y = intercept + slope * x."""
    slope: float
    intercept: float
    r_squared: float


def least_squares_line(x: np.ndarray, y: np.ndarray) -> LinearFit:
    """
    Fit a straight line by ordinary least squares.

    When every x is identical the slope is 0 and the intercept is the mean
    of y. When every y is identical the coefficient of determination is
    reported as 0 (there is no variance to explain).

    Both cases are detected by an exact-zero sum of squares and also by
    comparing the raw values: the mean of identical floats can be off by an
    ulp, which would leave a tiny non-zero sum of squares and a spurious
    slope or R².

    Args:
        x: Predictor values
        y: Response values, same length as x

    Returns:
        LinearFit with slope, intercept and R²
    """
    x_mean = float(np.mean(x))
    y_mean = float(np.mean(y))
    dx = x - x_mean
    dy = y - y_mean

    denominator = float(np.sum(dx * dx))
    if denominator == 0 or np.all(x == x[0]):
        slope = 0.0
        intercept = y_mean
    else:
        slope = float(np.sum(dx * dy)) / denominator
        intercept = y_mean - slope * x_mean

    ss_tot = float(np.sum(dy * dy))
    if ss_tot == 0 or np.all(y == y[0]):
        r_squared = 0.0
    else:
        residuals = y - (intercept + slope * x)
        ss_res = float(np.sum(residuals * residuals))
        r_squared = 1.0 - ss_res / ss_tot

    return LinearFit(slope=slope, intercept=intercept, r_squared=r_squared)
