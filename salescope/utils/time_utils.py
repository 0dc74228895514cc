from datetime import date, datetime, timezone

import pandas as pd

def utcnow():
    return datetime.now(timezone.utc)

def utcnow_str() -> str:
    return utcnow().strftime("%Y-%m-%dT%H:%M:%SZ")

def local_today() -> date:
    return date.today()

def to_timestamp(value) -> pd.Timestamp:
    """Naive pandas Timestamp for a date, datetime or ISO string (aware values are moved to UTC)."""
    ts = pd.Timestamp(value)
    if ts.tzinfo is not None:
        ts = ts.tz_convert("UTC").tz_localize(None)
    return ts

def days_between(start: pd.Timestamp, end: pd.Timestamp) -> float:
    return (end - start).total_seconds() / 86400.0
