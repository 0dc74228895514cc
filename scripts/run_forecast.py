import argparse
import json

import pandas as pd

from salescope.config import Config
from salescope.features.etl import aggregate_daily_metrics
from salescope.forecasting.engine import generate_forecast
from salescope.utils.logging_utils import get_logger

logger = get_logger(__name__)

def main(argv=None):
    parser = argparse.ArgumentParser(description="Forecast daily sales and orders from a metrics CSV")
    parser.add_argument("metrics_csv", help="CSV with timestamp, sales and quantity columns")
    parser.add_argument("--range", dest="forecast_range", default=Config.DEFAULT_FORECAST_RANGE)
    args = parser.parse_args(argv)

    logger.info(f"Loading metrics from {args.metrics_csv}")
    rows = pd.read_csv(args.metrics_csv)
    history = aggregate_daily_metrics(rows)
    outcome = generate_forecast(history, args.forecast_range)
    print(json.dumps(outcome.to_dict(), indent=2))
    logger.info("Forecast completed")

if __name__ == "__main__":
    main()
