import math
from dataclasses import dataclass, field
from typing import Sequence, Tuple

import numpy as np

from salescope.models.regression import fit_simple_ols

Z_95 = 1.96

@dataclass(eq=False)
class LinearTrendModel:
    """OLS trend of a daily metric against days since the first observation."""

    x: np.ndarray
    y: np.ndarray
    intercept: float = field(init=False)
    slope: float = field(init=False)

    def __post_init__(self):
        self.x = np.asarray(self.x, dtype=float)
        self.y = np.asarray(self.y, dtype=float)
        self.intercept, self.slope = fit_simple_ols(self.x, self.y)

    @classmethod
    def fit(cls, x: Sequence[float], y: Sequence[float]) -> "LinearTrendModel":
        return cls(x=np.asarray(x, dtype=float), y=np.asarray(y, dtype=float))

    def predict(self, x):
        return self.intercept + self.slope * np.asarray(x, dtype=float)

    @property
    def fitted(self) -> np.ndarray:
        return self.predict(self.x)

    @property
    def residuals(self) -> np.ndarray:
        return self.y - self.fitted

    def prediction_interval(self, x0: float) -> Tuple[float, float]:
        """95% prediction interval at x0, lower bound clamped at 0."""
        n = self.y.size
        predicted = float(self.predict(x0))
        if n <= 2:
            return max(0.0, predicted), predicted

        std_error = math.sqrt(float(np.sum(self.residuals ** 2)) / (n - 2))
        x_mean = float(np.mean(self.x))
        sxx = float(np.sum((self.x - x_mean) ** 2))
        leverage = (x0 - x_mean) ** 2 / sxx if sxx > 0 else 0.0
        half_width = std_error * math.sqrt(1 + 1 / n + leverage)

        return max(0.0, predicted - Z_95 * half_width), predicted + Z_95 * half_width
