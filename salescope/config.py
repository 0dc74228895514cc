import os
from dotenv import load_dotenv

load_dotenv()

class Config:
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    API_HOST = os.getenv("API_HOST", "0.0.0.0")
    API_PORT = int(os.getenv("API_PORT", "8000"))

    DEFAULT_FORECAST_RANGE = os.getenv("DEFAULT_FORECAST_RANGE", "1month")
    DEFAULT_MIN_DISCOUNT_PCT = float(os.getenv("DEFAULT_MIN_DISCOUNT_PCT", "0"))
    DEFAULT_MAX_DISCOUNT_PCT = float(os.getenv("DEFAULT_MAX_DISCOUNT_PCT", "50"))
