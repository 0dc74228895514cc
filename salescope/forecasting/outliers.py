import math
from typing import List, Sequence

import numpy as np

MIN_POINTS = 4
IQR_MULTIPLIER = 1.5
NEIGHBOR_SPAN = 3

def iqr_bounds(values: np.ndarray):
    ordered = np.sort(values)
    n = ordered.size
    q1 = ordered[math.floor(n * 0.25)]
    q3 = ordered[math.floor(n * 0.75)]
    iqr = q3 - q1
    return q1 - IQR_MULTIPLIER * iqr, q3 + IQR_MULTIPLIER * iqr

def clean_outliers(series: Sequence[float]) -> List[float]:
    """Replace IQR outliers with the mean of their in-bounds neighbours.

    Each flagged value looks at up to three neighbours on either side; if none
    of them is within bounds the value is left as is. Length and order are
    always preserved.
    """
    values = np.asarray(series, dtype=float)
    if values.size < MIN_POINTS:
        return values.tolist()

    lower, upper = iqr_bounds(values)
    in_bounds = (values >= lower) & (values <= upper)

    cleaned = values.copy()
    for i in np.flatnonzero(~in_bounds):
        start = max(0, i - NEIGHBOR_SPAN)
        end = min(values.size, i + NEIGHBOR_SPAN + 1)
        window = values[start:end][in_bounds[start:end]]
        if window.size:
            cleaned[i] = float(np.mean(window))
    return cleaned.tolist()
