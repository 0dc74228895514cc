from datetime import date

from flask import Flask, jsonify, request

from salescope.config import Config
from salescope.errors import InvalidArgumentError
from salescope.features.etl import current_price_from_history
from salescope.forecasting.engine import generate_forecast
from salescope.models.schemas import CampaignWindow, Observation, SalesObservation, parse_number
from salescope.optimizer.price_optimizer import optimize_price
from salescope.utils.logging_utils import get_logger
from salescope.utils.time_utils import utcnow_str

logger = get_logger(__name__)

def _parse_date(value, field: str) -> date:
    try:
        return date.fromisoformat(str(value))
    except ValueError:
        raise InvalidArgumentError(f"{field} must be an ISO date (YYYY-MM-DD), got {value!r}")

def create_app() -> Flask:
    app = Flask(__name__)

    @app.errorhandler(InvalidArgumentError)
    def invalid_argument(e):
        logger.warning(f"Rejected {request.path}: {e}")
        return jsonify({"error": str(e)}), 400

    @app.route("/health", methods=["GET"])
    def health():
        return jsonify({"status": "ok", "time": utcnow_str()}), 200

    @app.route("/forecast", methods=["POST"])
    def forecast():
        data = request.get_json(force=True, silent=True) or {}
        if not isinstance(data, dict) or not isinstance(data.get("history"), list):
            return jsonify({"error": "history must be a list of observations"}), 400

        history = [Observation.from_dict(row) for row in data["history"]]
        today = _parse_date(data["today"], "today") if data.get("today") else None
        outcome = generate_forecast(
            history,
            data.get("range") or Config.DEFAULT_FORECAST_RANGE,
            today=today,
        )
        return jsonify(outcome.to_dict()), 200

    @app.route("/price-optimization", methods=["POST"])
    def price_optimization():
        data = request.get_json(force=True, silent=True) or {}
        if not isinstance(data, dict):
            return jsonify({"error": "Request body must be a JSON object"}), 400
        required = ["cost", "history"]
        missing = [f for f in required if f not in data]
        if missing:
            return jsonify({"error": f"Missing fields: {','.join(missing)}"}), 400

        if not isinstance(data["history"], list):
            return jsonify({"error": "history must be a list of sales observations"}), 400

        history = [SalesObservation.from_dict(row) for row in data["history"]]
        if not history:
            return jsonify({"error": "No historical sales data available"}), 400

        current_price = data.get("current_price")
        if current_price is None:
            current_price = current_price_from_history(history)

        campaign = CampaignWindow.from_dict(data["campaign"]) if data.get("campaign") else None

        outcome = optimize_price(
            parse_number(current_price, "current_price"),
            parse_number(data["cost"], "cost"),
            history,
            data.get("goal", "profit"),
            parse_number(data.get("min_discount", Config.DEFAULT_MIN_DISCOUNT_PCT), "min_discount"),
            parse_number(data.get("max_discount", Config.DEFAULT_MAX_DISCOUNT_PCT), "max_discount"),
            campaign,
        )

        return jsonify(outcome.to_dict()), 200

    return app

if __name__ == "__main__":
    create_app().run(host=Config.API_HOST, port=Config.API_PORT)
