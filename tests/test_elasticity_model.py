from datetime import date

import pytest

from salescope.models.elasticity import estimate_elasticity, interpret_elasticity
from salescope.models.schemas import SalesObservation

def _obs(price, quantity):
    return SalesObservation(price=price, quantity=quantity, timestamp=date(2025, 1, 1))

def test_single_observation_defaults_to_one():
    assert estimate_elasticity([_obs(10, 100)]) == 1

def test_empty_history_defaults_to_one():
    assert estimate_elasticity([]) == 1

def test_extreme_prices_averaged():
    # lowest price averages to 90 units, highest to 45: -50% quantity over +100% price
    observations = [_obs(10, 100), _obs(10, 80), _obs(15, 60), _obs(20, 45)]
    assert estimate_elasticity(observations) == pytest.approx(0.5)

def test_magnitude_is_positive():
    prices = [10, 12, 14, 16, 18, 20]
    units = [100, 80, 65, 55, 45, 40]
    elasticity = estimate_elasticity([_obs(p, q) for p, q in zip(prices, units)])
    assert elasticity == pytest.approx(0.6)

def test_no_price_variation_defaults_to_one():
    assert estimate_elasticity([_obs(10, 5), _obs(10, 7)]) == 1

def test_no_demand_at_lowest_price_defaults_to_one():
    assert estimate_elasticity([_obs(10, 0), _obs(20, 7)]) == 1

@pytest.mark.parametrize(
    "value,prefix",
    [
        (0.3, "Inelastic"),
        (0.5, "Moderately elastic"),
        (0.99, "Moderately elastic"),
        (1.0, "Elastic"),
        (1.9, "Elastic"),
        (2.0, "Highly elastic"),
    ],
)
def test_interpretation_buckets(value, prefix):
    assert interpret_elasticity(value).startswith(prefix)
