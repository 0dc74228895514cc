from datetime import timedelta
from typing import Sequence

import numpy as np
import pandas as pd
from sklearn.metrics import mean_absolute_error

from salescope.models.regression import sum_of_squares
from salescope.models.schemas import SeasonalityFactors
from salescope.models.trend_model import LinearTrendModel
from salescope.utils.logging_utils import get_logger
from salescope.utils.math_utils import clamp, round_half_up

logger = get_logger(__name__)

FALLBACK_CONFIDENCE = 50
FALLBACK_SEASONALITY = 0.8
FALLBACK_CONSISTENCY = 0.5

R2_WEIGHT = 0.4
DATA_POINTS_WEIGHT = 30
ERROR_WEIGHT = 30
FULL_DATA_POINTS = 30
FULL_HISTORY_DAYS = 60

def series_confidence(model: LinearTrendModel) -> int:
    """Fit quality of one trend model on a 0-100 scale."""
    y = model.y
    if y.size == 0:
        return FALLBACK_CONFIDENCE

    predictions = model.fitted
    ss_res, ss_tot = sum_of_squares(y, predictions)
    if ss_tot == 0:
        logger.debug("Total sum of squares is 0, using fallback confidence")
        return FALLBACK_CONFIDENCE

    r_squared = clamp(1 - ss_res / ss_tot, 0.0, 1.0)
    data_points_score = min(1.0, y.size / FULL_DATA_POINTS)

    mean_y = float(np.mean(y))
    if mean_y > 0:
        error_score = max(0.0, 1 - mean_absolute_error(y, predictions) / mean_y)
    else:
        error_score = 0.0

    final = round_half_up(
        r_squared * 100 * R2_WEIGHT
        + data_points_score * DATA_POINTS_WEIGHT
        + error_score * ERROR_WEIGHT
    )
    logger.debug(
        f"Series confidence: r2={r_squared:.3f} data_points={data_points_score:.2f} "
        f"error={error_score:.3f} final={final}"
    )
    return int(clamp(final, 0, 100))

def _variation(factors: Sequence[float]) -> float:
    return float(np.std(np.asarray(factors, dtype=float)))

def seasonality_strength(sales: SeasonalityFactors, orders: SeasonalityFactors) -> float:
    """Score in [0.8, 1.0]; stronger calendar swings raise it."""
    sales_factors = list(sales.daily) + list(sales.monthly)
    orders_factors = list(orders.daily) + list(orders.monthly)
    if not sales_factors or not orders_factors:
        return FALLBACK_SEASONALITY

    sales_var = _variation(sales_factors)
    orders_var = _variation(orders_factors)
    if not (np.isfinite(sales_var) and np.isfinite(orders_var)):
        return FALLBACK_SEASONALITY

    combined = min(1.0, sales_var) + min(1.0, orders_var)
    return FALLBACK_SEASONALITY + min(0.2, combined / 4)

def data_consistency(dates: Sequence) -> float:
    """Share of consecutive observations no more than a day apart, floored at 0.5."""
    if len(dates) < 2:
        return FALLBACK_CONSISTENCY

    index = pd.DatetimeIndex(pd.to_datetime(list(dates)))
    gaps = int((np.diff(index.values) > np.timedelta64(timedelta(days=1))).sum())
    return max(FALLBACK_CONSISTENCY, 1 - gaps / len(index))

def data_quality(history_length: int) -> float:
    return min(1.0, history_length / FULL_HISTORY_DAYS)

def overall_confidence(
    sales_model: LinearTrendModel,
    orders_model: LinearTrendModel,
    sales_seasonality: SeasonalityFactors,
    orders_seasonality: SeasonalityFactors,
    dates: Sequence,
    history_length: int,
) -> int:
    sales_conf = series_confidence(sales_model)
    orders_conf = series_confidence(orders_model)
    quality = data_quality(history_length)
    seasonality = seasonality_strength(sales_seasonality, orders_seasonality)
    consistency = data_consistency(dates)

    score = round_half_up((sales_conf + orders_conf) / 2 * quality * seasonality * consistency)
    logger.debug(
        f"Forecast confidence: sales={sales_conf} orders={orders_conf} quality={quality:.2f} "
        f"seasonality={seasonality:.3f} consistency={consistency:.2f} score={score}"
    )
    return int(clamp(score, 0, 100))
