from datetime import date
from typing import Any, Dict, List, Optional, Sequence, Union

import pandas as pd

from salescope.models.schemas import Observation, SalesObservation, parse_timestamp
from salescope.utils.logging_utils import get_logger
from salescope.utils.math_utils import round_half_up_array
from salescope.utils.time_utils import local_today

logger = get_logger(__name__)

MetricRows = Union[pd.DataFrame, Sequence[Dict[str, Any]]]

def _to_frame(rows: MetricRows) -> pd.DataFrame:
    if isinstance(rows, pd.DataFrame):
        return rows.copy()
    return pd.DataFrame(list(rows))

def _numeric(df: pd.DataFrame, col: str) -> pd.Series:
    if col not in df.columns:
        return pd.Series(0.0, index=df.index)
    return pd.to_numeric(df[col], errors="coerce").fillna(0.0)

def aggregate_daily_metrics(rows: MetricRows, as_of: Optional[date] = None) -> List[Observation]:
    """Roll raw metric rows (timestamp, sales, quantity) up to one Observation per day.

    Each row's sales and quantity are rounded to whole units before summing;
    quantity becomes the day's order count. Days after `as_of` (today by
    default) are dropped.
    """
    df = _to_frame(rows)
    if df.empty or "timestamp" not in df.columns:
        logger.warning("No metric rows to aggregate")
        return []

    as_of = as_of or local_today()
    df["date"] = pd.to_datetime(df["timestamp"]).dt.date
    df["sales"] = round_half_up_array(_numeric(df, "sales"))
    df["orders"] = round_half_up_array(_numeric(df, "quantity"))

    daily = (
        df.groupby("date")
        .agg(sales=("sales", "sum"), orders=("orders", "sum"))
        .reset_index()
        .sort_values("date")
    )
    daily = daily[daily["date"] <= as_of]

    logger.info(f"Aggregated {len(df)} metric rows into {len(daily)} daily observations")
    return [
        Observation(timestamp=r.date, sales=float(r.sales), orders=float(r.orders))
        for r in daily.itertuples(index=False)
    ]

def build_sales_history(rows: MetricRows, item_id: str) -> List[SalesObservation]:
    """Price/quantity history for one item, matched on `item_id` or `product_id`."""
    df = _to_frame(rows)
    if df.empty:
        return []

    mask = pd.Series(False, index=df.index)
    for col in ("product_id", "item_id"):
        if col in df.columns:
            mask |= df[col].astype(str) == str(item_id)
    df = df[mask].copy()

    df["price"] = _numeric(df, "price")
    df["quantity"] = _numeric(df, "quantity")
    skipped = int((df["price"] <= 0).sum())
    if skipped:
        logger.warning(f"Skipping {skipped} rows without a positive price for item={item_id}")
    df = df[df["price"] > 0]
    df["ts"] = pd.to_datetime(df["timestamp"])
    df = df.sort_values("ts", kind="mergesort")

    return [
        SalesObservation(price=float(r.price), quantity=max(0.0, float(r.quantity)), timestamp=r.timestamp)
        for r in df.itertuples(index=False)
    ]

def current_price_from_history(history: Sequence[SalesObservation]) -> Optional[float]:
    """Price of the most recent observation; ties go to the later row."""
    if not history:
        return None
    latest = max(reversed(history), key=lambda o: parse_timestamp(o.timestamp))
    return float(latest.price)
