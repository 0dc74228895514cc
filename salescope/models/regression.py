from typing import Sequence, Tuple

import numpy as np
import statsmodels.api as sm

def fit_simple_ols(x: Sequence[float], y: Sequence[float]) -> Tuple[float, float]:
    """Fit y = intercept + slope * x and return (intercept, slope).

    With no spread in x the fit degenerates to a flat line at mean(y).
    """
    x_arr = np.asarray(x, dtype=float)
    y_arr = np.asarray(y, dtype=float)
    if x_arr.size == 0:
        raise ValueError("Cannot fit a regression on an empty series")
    if x_arr.size < 2 or np.ptp(x_arr) == 0:
        return float(np.mean(y_arr)), 0.0

    X = sm.add_constant(x_arr, has_constant="add")
    model = sm.OLS(y_arr, X).fit()
    intercept, slope = model.params
    return float(intercept), float(slope)

def sum_of_squares(y: np.ndarray, y_pred: np.ndarray) -> Tuple[float, float]:
    """Return (SSres, SStot)."""
    ss_res = float(np.sum((y - y_pred) ** 2))
    ss_tot = float(np.sum((y - np.mean(y)) ** 2))
    return ss_res, ss_tot
