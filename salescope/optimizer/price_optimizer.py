from typing import Any, Dict, List, Optional, Sequence, Union

import numpy as np

from salescope.errors import InvalidArgumentError
from salescope.models.demand_model import LinearDemandModel
from salescope.models.elasticity import estimate_elasticity, interpret_elasticity
from salescope.models.schemas import (
    CampaignWindow,
    ExpectedQuantity,
    OptimizationGoal,
    OptimizationOutcome,
    PriceElasticity,
    SalesObservation,
)
from salescope.optimizer.campaign import campaign_pressure, campaign_seasonality
from salescope.utils.logging_utils import get_logger
from salescope.utils.math_utils import round_half_up, round_half_up_array, round_half_up_to

logger = get_logger(__name__)

PRICE_GRID_STEPS = 50
QUANTITY_WEIGHT = 0.6
MARGIN_WEIGHT = 0.4

SalesRow = Union[SalesObservation, Dict[str, Any]]

def _validate(current_price: float, cost: float, min_discount: float, max_discount: float):
    if current_price <= 0:
        raise InvalidArgumentError(f"current_price must be positive, got {current_price}")
    if cost <= 0:
        raise InvalidArgumentError(f"cost must be positive, got {cost}")
    if min_discount > max_discount:
        raise InvalidArgumentError(
            f"min_discount ({min_discount}) must not exceed max_discount ({max_discount})"
        )
    if max_discount >= 100:
        raise InvalidArgumentError(f"max_discount must be below 100, got {max_discount}")

def candidate_prices(current_price: float, min_discount: float, max_discount: float) -> np.ndarray:
    """Evenly spaced whole-unit prices over the allowed discount range, ascending."""
    min_price = current_price * (1 - max_discount / 100)
    max_price = current_price * (1 - min_discount / 100)
    return round_half_up_array(np.linspace(min_price, max_price, PRICE_GRID_STEPS))

def projected_quantities(model: LinearDemandModel, prices: np.ndarray, seasonality: List[float]):
    """Return (base daily quantity, total campaign quantity, daily quantity) per price."""
    base = np.maximum(0.0, round_half_up_array(model.predict(prices)))
    total = round_half_up_array(np.outer(base, np.asarray(seasonality, dtype=float)).sum(axis=1))
    daily = round_half_up_array(total / len(seasonality))
    return base, total, daily

def objective_values(
    goal: OptimizationGoal,
    prices: np.ndarray,
    cost: float,
    total: np.ndarray,
    daily: np.ndarray,
    avg_daily_quantity: float,
    pressure: float,
) -> np.ndarray:
    if goal is OptimizationGoal.PROFIT:
        return (prices - cost) * total
    if goal is OptimizationGoal.SALES:
        return prices * total

    # inventory clearance: volume uplift under time pressure, balanced against margin
    safe_prices = np.where(prices > 0, prices, 1.0)
    margin = np.where(prices > 0, (prices - cost) / safe_prices, 0.0)
    if avg_daily_quantity > 0:
        improvement = daily / avg_daily_quantity
    else:
        improvement = np.zeros_like(daily)
    return (improvement * QUANTITY_WEIGHT * pressure + margin * MARGIN_WEIGHT) * total

def optimize_price(
    current_price: float,
    cost: float,
    history: Sequence[SalesRow],
    goal: Union[OptimizationGoal, str] = OptimizationGoal.PROFIT,
    min_discount: float = 0.0,
    max_discount: float = 50.0,
    campaign: Optional[CampaignWindow] = None,
) -> OptimizationOutcome:
    """Grid-search the discount range for the price that maximises `goal`.

    Demand comes from a linear quantity-vs-price fit over `history`; with a
    campaign window the daily demand is spread over each campaign day with a
    weekday factor. If no candidate yields a positive objective the current
    price is kept and the outcome is flagged as not viable.
    """
    goal = OptimizationGoal.parse(goal)
    _validate(current_price, cost, min_discount, max_discount)
    if not history:
        raise InvalidArgumentError("history must contain at least one sales observation")

    observations = [h if isinstance(h, SalesObservation) else SalesObservation.from_dict(h) for h in history]

    elasticity = estimate_elasticity(observations)
    model = LinearDemandModel.from_observations(observations)
    r_squared = model.r_squared()

    seasonality = campaign_seasonality(campaign)
    pressure = campaign_pressure(campaign)
    campaign_days = len(seasonality)

    prices = candidate_prices(current_price, min_discount, max_discount)
    _, total, daily = projected_quantities(model, prices, seasonality)
    objectives = objective_values(
        goal, prices, cost, total, daily, model.average_quantity, pressure
    )

    # argmax keeps the first (lowest) price among equal objectives
    best_idx = int(np.argmax(objectives))
    viable = bool(objectives[best_idx] > 0)
    optimal_price = float(prices[best_idx]) if viable else float(current_price)
    if not viable:
        logger.warning(
            f"No price in discount range [{min_discount}, {max_discount}] yields a positive "
            f"{goal.value} objective, keeping current price {current_price}"
        )

    _, opt_total, opt_daily = projected_quantities(model, np.array([optimal_price]), seasonality)
    total_quantity = float(opt_total[0])
    daily_revenue = round_half_up(optimal_price * total_quantity / campaign_days)
    daily_profit = round_half_up((optimal_price - cost) * total_quantity / campaign_days)

    outcome = OptimizationOutcome(
        optimal_discount=round_half_up((current_price - optimal_price) / current_price * 100),
        optimal_price=round_half_up(optimal_price),
        original_price=round_half_up(current_price),
        expected_revenue=max(0, daily_revenue * campaign_days),
        expected_profit=max(0, daily_profit * campaign_days),
        daily_revenue=max(0, daily_revenue),
        daily_profit=max(0, daily_profit),
        campaign_days=campaign_days,
        confidence=round_half_up(r_squared * 100),
        expected_quantity=ExpectedQuantity(
            daily=int(opt_daily[0]),
            total=int(total_quantity),
        ),
        price_elasticity=PriceElasticity(
            value=round_half_up_to(elasticity, 2),
            interpretation=interpret_elasticity(elasticity),
        ),
        viable=viable,
    )
    logger.info(
        f"Optimized price for goal={goal.value}: {outcome.original_price} -> {outcome.optimal_price} "
        f"({outcome.optimal_discount}% discount) over {campaign_days} day(s)"
    )
    return outcome
