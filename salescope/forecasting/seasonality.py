from typing import Sequence

import numpy as np
import pandas as pd

from salescope.models.schemas import SeasonalityFactors

DAYS_IN_WEEK = 7
MONTHS_IN_YEAR = 12

def _bucket_factors(values: pd.Series, buckets: pd.Index, size: int, overall: float) -> list:
    means = values.groupby(np.asarray(buckets)).mean()
    factors = (means / overall).reindex(range(size), fill_value=1.0)
    return [float(f) for f in factors]

def analyze_seasonality(series: Sequence[float], dates: Sequence) -> SeasonalityFactors:
    """Calendar factors: average per weekday (Monday=0) and per month (January=0)
    divided by the overall average. Buckets with no observations stay at 1.
    """
    values = pd.Series(np.asarray(series, dtype=float))
    index = pd.DatetimeIndex(pd.to_datetime(list(dates)))

    overall = float(values.mean()) if len(values) else 0.0
    if overall == 0 or not np.isfinite(overall):
        return SeasonalityFactors(daily=[1.0] * DAYS_IN_WEEK, monthly=[1.0] * MONTHS_IN_YEAR)

    weekdays = pd.Index(index.dayofweek)
    months = pd.Index(index.month - 1)
    return SeasonalityFactors(
        daily=_bucket_factors(values, weekdays, DAYS_IN_WEEK, overall),
        monthly=_bucket_factors(values, months, MONTHS_IN_YEAR, overall),
    )

def seasonal_multiplier(factors: SeasonalityFactors, day) -> float:
    ts = pd.Timestamp(day)
    return factors.daily[ts.dayofweek] * factors.monthly[ts.month - 1]
