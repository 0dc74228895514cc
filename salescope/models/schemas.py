from dataclasses import asdict, dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any, Dict, List, Mapping, Union

import pandas as pd

from salescope.errors import InvalidArgumentError
from salescope.utils.time_utils import to_timestamp

TimestampLike = Union[date, datetime, str]

def parse_number(value: Any, name: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise InvalidArgumentError(f"{name} must be a number, got {value!r}")

def parse_timestamp(value: Any, name: str = "timestamp") -> pd.Timestamp:
    try:
        ts = to_timestamp(value)
    except (TypeError, ValueError):
        raise InvalidArgumentError(f"{name} must be a date or ISO timestamp, got {value!r}")
    if pd.isna(ts):
        raise InvalidArgumentError(f"{name} must be a date or ISO timestamp, got {value!r}")
    return ts

def _require_mapping(data: Any, kind: str) -> None:
    if not isinstance(data, Mapping):
        raise InvalidArgumentError(f"{kind} must be an object, got {data!r}")

class ForecastRange(str, Enum):
    WEEK = "7d"
    TWO_WEEKS = "14d"
    MONTH = "1month"
    QUARTER = "3months"
    HALF_YEAR = "6months"

    @property
    def days(self) -> int:
        return _RANGE_DAYS[self]

    @classmethod
    def parse(cls, value: Union["ForecastRange", str, None]) -> "ForecastRange":
        if value is None:
            return cls.MONTH
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(r.value for r in cls)
            raise InvalidArgumentError(f"Unknown forecast range {value!r}, expected one of: {allowed}")

_RANGE_DAYS = {
    ForecastRange.WEEK: 7,
    ForecastRange.TWO_WEEKS: 14,
    ForecastRange.MONTH: 30,
    ForecastRange.QUARTER: 90,
    ForecastRange.HALF_YEAR: 180,
}

class OptimizationGoal(str, Enum):
    PROFIT = "profit"
    SALES = "sales"
    INVENTORY = "inventory"

    @classmethod
    def parse(cls, value: Union["OptimizationGoal", str]) -> "OptimizationGoal":
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(g.value for g in cls)
            raise InvalidArgumentError(f"Unknown optimization goal {value!r}, expected one of: {allowed}")

@dataclass(frozen=True)
class Observation:
    timestamp: TimestampLike
    sales: float = 0.0
    orders: float = 0.0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Observation":
        _require_mapping(data, "Observation")
        if "timestamp" not in data:
            raise InvalidArgumentError("Observation is missing 'timestamp'")
        parse_timestamp(data["timestamp"])
        sales = parse_number(data.get("sales") or 0, "sales")
        orders = parse_number(data.get("orders") or 0, "orders")
        if sales < 0 or orders < 0:
            raise InvalidArgumentError(f"Negative sales/orders at {data['timestamp']}")
        return cls(timestamp=data["timestamp"], sales=sales, orders=orders)

@dataclass(frozen=True)
class SalesObservation:
    price: float
    quantity: float
    timestamp: TimestampLike

    def __post_init__(self):
        if self.price <= 0:
            raise InvalidArgumentError(f"Observed price must be positive, got {self.price}")
        if self.quantity < 0:
            raise InvalidArgumentError(f"Observed quantity must be non-negative, got {self.quantity}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SalesObservation":
        _require_mapping(data, "Sales observation")
        missing = [f for f in ("price", "quantity", "timestamp") if f not in data]
        if missing:
            raise InvalidArgumentError(f"Sales observation is missing fields: {','.join(missing)}")
        parse_timestamp(data["timestamp"])
        return cls(
            price=parse_number(data["price"], "price"),
            quantity=parse_number(data["quantity"], "quantity"),
            timestamp=data["timestamp"],
        )

@dataclass(frozen=True)
class CampaignWindow:
    start_date: date
    end_date: date

    def __post_init__(self):
        if self.end_date < self.start_date:
            raise InvalidArgumentError(
                f"Campaign end date {self.end_date} is before start date {self.start_date}"
            )

    @property
    def days(self) -> int:
        return (self.end_date - self.start_date).days + 1

    def dates(self) -> List[date]:
        return [self.start_date + timedelta(days=i) for i in range(self.days)]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CampaignWindow":
        _require_mapping(data, "Campaign window")
        try:
            start = date.fromisoformat(str(data["start_date"]))
            end = date.fromisoformat(str(data["end_date"]))
        except KeyError as e:
            raise InvalidArgumentError(f"Campaign window is missing {e.args[0]!r}")
        except ValueError as e:
            raise InvalidArgumentError(f"Invalid campaign date: {e}")
        return cls(start_date=start, end_date=end)

@dataclass
class ForecastPoint:
    date: date
    sales: int
    orders: int
    sales_lower: int
    sales_upper: int
    orders_lower: int
    orders_upper: int
    is_forecast: bool = True

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["date"] = self.date.isoformat()
        return data

@dataclass
class ForecastOutcome:
    points: List[ForecastPoint] = field(default_factory=list)
    confidence: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "points": [p.to_dict() for p in self.points],
            "confidence": self.confidence,
        }

@dataclass
class ExpectedQuantity:
    daily: int
    total: int

@dataclass
class PriceElasticity:
    value: float
    interpretation: str

@dataclass
class OptimizationOutcome:
    optimal_discount: int
    optimal_price: int
    original_price: int
    expected_revenue: int
    expected_profit: int
    daily_revenue: int
    daily_profit: int
    campaign_days: int
    confidence: int
    expected_quantity: ExpectedQuantity
    price_elasticity: PriceElasticity
    # False when no candidate beat a zero objective and the current price was kept
    viable: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

@dataclass
class SeasonalityFactors:
    daily: List[float]
    monthly: List[float]

    @property
    def weekly(self) -> List[float]:
        # Same day-of-week buckets as `daily`.
        return self.daily
