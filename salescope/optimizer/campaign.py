from datetime import date
from typing import List, Optional

from salescope.models.schemas import CampaignWindow

WEEKEND_PEAK_FACTOR = 1.3  # Friday and Saturday
SUNDAY_FACTOR = 1.1
WEEKDAY_FACTOR = 0.9

MAX_PRESSURE = 1.5
MIN_PRESSURE = 1.0
SHORT_CAMPAIGN_DAYS = 7
LONG_CAMPAIGN_DAYS = 30

def day_seasonality_factor(day: date) -> float:
    weekday = day.weekday()
    if weekday in (4, 5):
        return WEEKEND_PEAK_FACTOR
    if weekday == 6:
        return SUNDAY_FACTOR
    return WEEKDAY_FACTOR

def time_pressure_factor(campaign_days: int) -> float:
    """1.5 for campaigns of a week or less, 1.0 from 30 days, linear in between."""
    if campaign_days <= SHORT_CAMPAIGN_DAYS:
        return MAX_PRESSURE
    if campaign_days >= LONG_CAMPAIGN_DAYS:
        return MIN_PRESSURE

    pressure_range = MAX_PRESSURE - MIN_PRESSURE
    days_range = LONG_CAMPAIGN_DAYS - SHORT_CAMPAIGN_DAYS
    return MAX_PRESSURE - pressure_range * (campaign_days - SHORT_CAMPAIGN_DAYS) / days_range

def campaign_seasonality(campaign: Optional[CampaignWindow]) -> List[float]:
    if campaign is None:
        return [1.0]
    return [day_seasonality_factor(d) for d in campaign.dates()]

def campaign_pressure(campaign: Optional[CampaignWindow]) -> float:
    if campaign is None:
        return MIN_PRESSURE
    return time_pressure_factor(campaign.days)
