from typing import Sequence

import pandas as pd

from salescope.models.schemas import SalesObservation
from salescope.utils.logging_utils import get_logger

logger = get_logger(__name__)

DEFAULT_ELASTICITY = 1.0

# (upper bound, label); the last bucket is open-ended
ELASTICITY_BUCKETS = [
    (0.5, "Inelastic - Demand is not very sensitive to price changes"),
    (1.0, "Moderately elastic - Demand shows some response to price changes"),
    (2.0, "Elastic - Demand is sensitive to price changes"),
]
HIGHLY_ELASTIC = "Highly elastic - Demand is very sensitive to price changes"

def observations_to_frame(observations: Sequence[SalesObservation]) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "price": [float(o.price) for o in observations],
            "quantity": [float(o.quantity) for o in observations],
        }
    )

def estimate_elasticity(observations: Sequence[SalesObservation]) -> float:
    """Arc elasticity magnitude between the cheapest and the most expensive price points.

    Quantities are averaged over every observation sharing the exact price.
    Returns DEFAULT_ELASTICITY when there is no usable price variation.
    """
    if len(observations) < 2:
        return DEFAULT_ELASTICITY

    df = observations_to_frame(observations)
    by_price = df.groupby("price")["quantity"].mean().sort_index()
    if len(by_price) < 2:
        logger.info("Single price point in history, using default elasticity")
        return DEFAULT_ELASTICITY

    p1, q1 = float(by_price.index[0]), float(by_price.iloc[0])
    p2, q2 = float(by_price.index[-1]), float(by_price.iloc[-1])
    if q1 == 0:
        logger.info(f"No demand observed at lowest price {p1}, using default elasticity")
        return DEFAULT_ELASTICITY

    pct_price_change = (p2 - p1) / p1
    pct_quantity_change = (q2 - q1) / q1
    return abs(pct_quantity_change / pct_price_change)

def interpret_elasticity(elasticity: float) -> str:
    for upper, label in ELASTICITY_BUCKETS:
        if elasticity < upper:
            return label
    return HIGHLY_ELASTIC
