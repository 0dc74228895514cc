from datetime import date, datetime, timedelta
from typing import Any, Dict, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from salescope.forecasting.confidence import overall_confidence
from salescope.forecasting.outliers import clean_outliers
from salescope.forecasting.seasonality import analyze_seasonality, seasonal_multiplier
from salescope.models.schemas import (
    ForecastOutcome,
    ForecastPoint,
    ForecastRange,
    Observation,
    SeasonalityFactors,
    parse_timestamp,
)
from salescope.models.trend_model import LinearTrendModel
from salescope.utils.logging_utils import get_logger
from salescope.utils.math_utils import round_half_up
from salescope.utils.time_utils import days_between, local_today

logger = get_logger(__name__)

MIN_HISTORY_POINTS = 7
SMALL_HISTORY_CONFIDENCE_PER_POINT = 7
SMALL_HISTORY_MAX_CONFIDENCE = 50

HistoryRow = Union[Observation, Dict[str, Any]]

def _history_frame(history: Sequence[HistoryRow]) -> pd.DataFrame:
    rows = [h if isinstance(h, Observation) else Observation.from_dict(h) for h in history]
    df = pd.DataFrame(
        {
            "timestamp": [parse_timestamp(r.timestamp) for r in rows],
            "sales": [float(r.sales or 0) for r in rows],
            "orders": [float(r.orders or 0) for r in rows],
        }
    )
    # Stable sort keeps same-day rows in caller order
    return df.sort_values("timestamp", kind="mergesort").reset_index(drop=True)

def _scaled_bounds(
    model: LinearTrendModel, x0: float, factor: float
) -> Tuple[int, int, int]:
    predicted = max(0, round_half_up(float(model.predict(x0)) * factor))
    lower_raw, upper_raw = model.prediction_interval(x0)
    lower = max(0, round_half_up(lower_raw * factor))
    upper = max(0, round_half_up(upper_raw * factor))
    return predicted, min(lower, predicted), max(upper, predicted)

def generate_forecast(
    history: Sequence[HistoryRow],
    forecast_range: Union[ForecastRange, str, None] = ForecastRange.MONTH,
    today: Optional[date] = None,
) -> ForecastOutcome:
    """Trend + seasonality forecast of daily sales and orders.

    Forecast days start at `today` (local date by default). Insufficient or
    all-zero history yields an empty forecast with a reduced confidence
    instead of an error.
    """
    horizon = ForecastRange.parse(forecast_range).days

    if not history:
        logger.warning("No historical data provided for forecast")
        return ForecastOutcome(points=[], confidence=0)

    if len(history) < MIN_HISTORY_POINTS:
        logger.warning(f"Insufficient historical data for reliable forecast: {len(history)} points")
        return ForecastOutcome(
            points=[],
            confidence=min(SMALL_HISTORY_MAX_CONFIDENCE, len(history) * SMALL_HISTORY_CONFIDENCE_PER_POINT),
        )

    df = _history_frame(history)
    if (df["sales"] == 0).all() or (df["orders"] == 0).all():
        logger.warning("No non-zero values found in historical data")
        return ForecastOutcome(points=[], confidence=0)

    first = df["timestamp"].iloc[0]
    x = np.array([days_between(first, ts) for ts in df["timestamp"]])
    dates = list(df["timestamp"])

    sales = clean_outliers(df["sales"].tolist())
    orders = clean_outliers(df["orders"].tolist())

    sales_model = LinearTrendModel.fit(x, sales)
    orders_model = LinearTrendModel.fit(x, orders)

    sales_seasonality = analyze_seasonality(sales, dates)
    orders_seasonality = analyze_seasonality(orders, dates)

    if isinstance(today, datetime):
        today = today.date()
    start = today if today is not None else local_today()
    points = [
        _forecast_point(
            start + timedelta(days=i),
            first,
            sales_model,
            orders_model,
            sales_seasonality,
            orders_seasonality,
        )
        for i in range(horizon)
    ]

    confidence = overall_confidence(
        sales_model,
        orders_model,
        sales_seasonality,
        orders_seasonality,
        dates,
        len(history),
    )
    logger.info(f"Generated {len(points)} forecast points from {len(history)} observations, confidence={confidence}")
    return ForecastOutcome(points=points, confidence=confidence)

def _forecast_point(
    day: date,
    first: pd.Timestamp,
    sales_model: LinearTrendModel,
    orders_model: LinearTrendModel,
    sales_seasonality: SeasonalityFactors,
    orders_seasonality: SeasonalityFactors,
) -> ForecastPoint:
    x0 = days_between(first, pd.Timestamp(day))
    sales, sales_lower, sales_upper = _scaled_bounds(
        sales_model, x0, seasonal_multiplier(sales_seasonality, day)
    )
    orders, orders_lower, orders_upper = _scaled_bounds(
        orders_model, x0, seasonal_multiplier(orders_seasonality, day)
    )
    return ForecastPoint(
        date=day,
        sales=sales,
        orders=orders,
        sales_lower=sales_lower,
        sales_upper=sales_upper,
        orders_lower=orders_lower,
        orders_upper=orders_upper,
    )
