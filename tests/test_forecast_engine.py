from datetime import date, datetime, timedelta

import pytest

from salescope.errors import InvalidArgumentError
from salescope.forecasting.engine import generate_forecast
from salescope.models.schemas import Observation

TODAY = date(2025, 2, 1)

def _history(n, sales, orders, start=date(2025, 1, 1)):
    return [
        Observation(timestamp=start + timedelta(days=i), sales=sales(i), orders=orders(i))
        for i in range(n)
    ]

def test_empty_history():
    outcome = generate_forecast([], "7d", today=TODAY)
    assert outcome.points == []
    assert outcome.confidence == 0

def test_minimum_data_gate():
    outcome = generate_forecast(_history(6, lambda i: 100, lambda i: 10), today=TODAY)
    assert outcome.points == []
    assert outcome.confidence == 42

def test_zero_sales_gate():
    outcome = generate_forecast(_history(10, lambda i: 0, lambda i: 10), today=TODAY)
    assert outcome.points == []
    assert outcome.confidence == 0

def test_zero_orders_gate():
    outcome = generate_forecast(_history(10, lambda i: 50, lambda i: 0), today=TODAY)
    assert outcome.confidence == 0

def test_constant_history_forecasts_flat_line():
    outcome = generate_forecast(_history(10, lambda i: 100, lambda i: 10), "7d", today=TODAY)

    assert len(outcome.points) == 7
    assert [p.date for p in outcome.points] == [TODAY + timedelta(days=i) for i in range(7)]
    for p in outcome.points:
        assert p.sales == 100
        assert p.orders == 10
        assert p.sales_lower <= p.sales <= p.sales_upper
        assert p.sales_upper - p.sales_lower <= 2
        assert p.is_forecast
    # 50 * (10 / 60) * 0.8 * 1.0
    assert outcome.confidence == 7

@pytest.mark.parametrize("forecast_range,days", [("7d", 7), ("14d", 14), ("1month", 30), ("3months", 90), ("6months", 180)])
def test_range_controls_horizon(forecast_range, days):
    outcome = generate_forecast(_history(10, lambda i: 100, lambda i: 10), forecast_range, today=TODAY)
    assert len(outcome.points) == days

def test_default_range_is_one_month():
    outcome = generate_forecast(_history(10, lambda i: 100, lambda i: 10), today=TODAY)
    assert len(outcome.points) == 30

def test_unknown_range_rejected():
    with pytest.raises(InvalidArgumentError):
        generate_forecast(_history(10, lambda i: 100, lambda i: 10), "2years", today=TODAY)

def test_bounds_ordered_and_non_negative():
    history = _history(
        45,
        lambda i: 50 + 3 * i + (i * 7 % 11) - 5,
        lambda i: 5 + i // 3 + (i * 5 % 4),
    )
    outcome = generate_forecast(history, "3months", today=date(2025, 3, 1))

    assert 0 <= outcome.confidence <= 100
    for p in outcome.points:
        assert 0 <= p.sales_lower <= p.sales <= p.sales_upper
        assert 0 <= p.orders_lower <= p.orders <= p.orders_upper

def test_declining_history_floors_at_zero():
    history = _history(20, lambda i: max(1, 200 - 10 * i), lambda i: max(1, 20 - i))
    outcome = generate_forecast(history, "1month", today=date(2025, 6, 1))

    assert all(p.sales == 0 and p.orders == 0 for p in outcome.points)
    for p in outcome.points:
        assert 0 <= p.sales_lower <= p.sales <= p.sales_upper
        assert 0 <= p.orders_lower <= p.orders <= p.orders_upper

def test_idempotent_and_input_untouched():
    history = list(reversed(_history(30, lambda i: 80 + (i % 7) * 5, lambda i: 8 + i % 3)))
    snapshot = list(history)

    first = generate_forecast(history, "14d", today=TODAY)
    second = generate_forecast(history, "14d", today=TODAY)

    assert first == second
    assert history == snapshot

def test_order_of_history_does_not_matter():
    history = _history(30, lambda i: 80 + (i % 7) * 5, lambda i: 8 + i % 3)
    assert generate_forecast(history, "7d", today=TODAY) == generate_forecast(
        list(reversed(history)), "7d", today=TODAY
    )

def test_accepts_dict_rows_and_datetime_today():
    rows = [
        {"timestamp": (date(2025, 1, 1) + timedelta(days=i)).isoformat(), "sales": 100, "orders": 10}
        for i in range(10)
    ]
    outcome = generate_forecast(rows, "7d", today=datetime(2025, 2, 1, 15, 30))
    assert outcome.points[0].date == TODAY
    assert outcome.points[0].sales == 100

def test_to_dict_serialises_dates():
    outcome = generate_forecast(_history(10, lambda i: 100, lambda i: 10), "7d", today=TODAY)
    data = outcome.to_dict()
    assert data["points"][0]["date"] == "2025-02-01"
    assert data["points"][0]["is_forecast"] is True

def test_malformed_rows_rejected():
    good = [{"timestamp": f"2025-01-{i + 1:02d}", "sales": 100, "orders": 10} for i in range(9)]

    with pytest.raises(InvalidArgumentError):
        generate_forecast(good + [{"timestamp": "not-a-date", "sales": 1, "orders": 1}], "7d", today=TODAY)
    with pytest.raises(InvalidArgumentError):
        generate_forecast(good + [42], "7d", today=TODAY)
    with pytest.raises(InvalidArgumentError):
        generate_forecast(_history(9, lambda i: 10, lambda i: 1) + [Observation(timestamp="bogus", sales=1)], "7d")
