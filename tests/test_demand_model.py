from datetime import date

import pytest

from salescope.models.demand_model import LinearDemandModel
from salescope.models.schemas import SalesObservation

def _history(pairs):
    return [SalesObservation(price=p, quantity=q, timestamp=date(2025, 1, 1)) for p, q in pairs]

def test_linear_demand_fit():
    model = LinearDemandModel.from_observations(_history([(10, 30), (20, 20), (30, 10)]))
    assert model.intercept == pytest.approx(40)
    assert model.slope == pytest.approx(-1)
    assert float(model.predict(25)) == pytest.approx(15)
    assert model.r_squared() == pytest.approx(1.0)

def test_constant_demand_has_zero_fit():
    model = LinearDemandModel.from_observations(_history([(10, 5), (20, 5), (30, 5)]))
    assert model.r_squared() == 0.0

def test_single_price_is_flat_at_mean():
    model = LinearDemandModel.from_observations(_history([(10, 4), (10, 8)]))
    assert model.slope == 0
    assert float(model.predict(99)) == pytest.approx(6)
    assert model.average_quantity == pytest.approx(6)

def test_r_squared_within_unit_interval():
    model = LinearDemandModel.from_observations(
        _history([(10, 12), (12, 30), (14, 3), (16, 25), (18, 9)])
    )
    assert 0.0 <= model.r_squared() <= 1.0
