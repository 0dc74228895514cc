from dataclasses import dataclass, field
from typing import Sequence

import numpy as np
from sklearn.metrics import r2_score

from salescope.models.regression import fit_simple_ols, sum_of_squares
from salescope.models.schemas import SalesObservation
from salescope.utils.math_utils import clamp

@dataclass(eq=False)
class LinearDemandModel:
    prices: np.ndarray
    quantities: np.ndarray
    intercept: float = field(init=False)
    slope: float = field(init=False)

    def __post_init__(self):
        self.prices = np.asarray(self.prices, dtype=float)
        self.quantities = np.asarray(self.quantities, dtype=float)
        self.intercept, self.slope = fit_simple_ols(self.prices, self.quantities)

    @classmethod
    def from_observations(cls, observations: Sequence[SalesObservation]) -> "LinearDemandModel":
        prices = [o.price for o in observations]
        quantities = [o.quantity for o in observations]
        return cls(prices=np.asarray(prices, dtype=float), quantities=np.asarray(quantities, dtype=float))

    def predict(self, price):
        return self.intercept + self.slope * np.asarray(price, dtype=float)

    def r_squared(self) -> float:
        # Constant demand carries no price signal: report zero fit.
        _, ss_tot = sum_of_squares(self.quantities, self.predict(self.prices))
        if ss_tot == 0:
            return 0.0
        r2 = float(r2_score(self.quantities, self.predict(self.prices)))
        return clamp(r2, 0.0, 1.0)

    @property
    def average_quantity(self) -> float:
        return float(np.mean(self.quantities))
