import argparse
import json
from datetime import date

import pandas as pd

from salescope.config import Config
from salescope.features.etl import build_sales_history, current_price_from_history
from salescope.models.schemas import CampaignWindow
from salescope.optimizer.price_optimizer import optimize_price
from salescope.utils.logging_utils import get_logger

logger = get_logger(__name__)

def main(argv=None):
    parser = argparse.ArgumentParser(description="Suggest a campaign price for one item from a metrics CSV")
    parser.add_argument("metrics_csv", help="CSV with timestamp, item_id/product_id, price and quantity columns")
    parser.add_argument("--item-id", required=True)
    parser.add_argument("--cost", type=float, required=True)
    parser.add_argument("--goal", default="profit", choices=["profit", "sales", "inventory"])
    parser.add_argument("--min-discount", type=float, default=Config.DEFAULT_MIN_DISCOUNT_PCT)
    parser.add_argument("--max-discount", type=float, default=Config.DEFAULT_MAX_DISCOUNT_PCT)
    parser.add_argument("--start-date", type=date.fromisoformat)
    parser.add_argument("--end-date", type=date.fromisoformat)
    args = parser.parse_args(argv)

    rows = pd.read_csv(args.metrics_csv)
    history = build_sales_history(rows, args.item_id)
    if not history:
        logger.warning(f"No historical sales data for item={args.item_id}")
        return 1

    campaign = None
    if args.start_date and args.end_date:
        campaign = CampaignWindow(start_date=args.start_date, end_date=args.end_date)

    outcome = optimize_price(
        current_price_from_history(history),
        args.cost,
        history,
        args.goal,
        args.min_discount,
        args.max_discount,
        campaign,
    )
    print(json.dumps(outcome.to_dict(), indent=2))
    logger.info(f"Suggested price {outcome.optimal_price} for item={args.item_id}")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
