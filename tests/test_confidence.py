from datetime import date, timedelta

import numpy as np
import pytest

from salescope.forecasting.confidence import (
    data_consistency,
    data_quality,
    seasonality_strength,
    series_confidence,
)
from salescope.models.schemas import SeasonalityFactors
from salescope.models.trend_model import LinearTrendModel

def _neutral():
    return SeasonalityFactors(daily=[1.0] * 7, monthly=[1.0] * 12)

def test_constant_series_uses_fallback():
    model = LinearTrendModel.fit(np.arange(10), [7.0] * 10)
    assert series_confidence(model) == 50

def test_perfect_fit_with_enough_points():
    x = np.arange(30, dtype=float)
    model = LinearTrendModel.fit(x, 2 * x + 5)
    assert series_confidence(model) == 100

def test_noisy_series_within_bounds():
    x = np.arange(12, dtype=float)
    y = np.array([5, 40, 3, 38, 6, 41, 2, 39, 4, 42, 1, 37], dtype=float)
    score = series_confidence(LinearTrendModel.fit(x, y))
    assert 0 <= score <= 100
    assert score < 50

def test_data_quality_caps_at_one():
    assert data_quality(30) == pytest.approx(0.5)
    assert data_quality(120) == 1.0

def test_consistency_counts_gaps():
    start = date(2025, 1, 1)
    consecutive = [start + timedelta(days=i) for i in range(10)]
    assert data_consistency(consecutive) == 1.0

    one_gap = consecutive[:5] + [d + timedelta(days=1) for d in consecutive[5:]]
    assert data_consistency(one_gap) == pytest.approx(0.9)

    sparse = [start + timedelta(days=2 * i) for i in range(4)]
    assert data_consistency(sparse) == 0.5

def test_consistency_with_single_date():
    assert data_consistency([date(2025, 1, 1)]) == 0.5

def test_seasonality_strength_range():
    assert seasonality_strength(_neutral(), _neutral()) == pytest.approx(0.8)

    swinging = SeasonalityFactors(daily=[0.0, 3.0] * 3 + [0.0], monthly=[0.0, 3.0] * 6)
    assert seasonality_strength(swinging, swinging) == pytest.approx(1.0)
