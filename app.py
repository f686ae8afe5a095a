"""Caffeine Curve Flask app.

Run from project root:
    python app.py
"""

import logging
import os
from typing import Any

from flask import Flask, jsonify, request

from caffeine_app.drinks import DrinkEvent
from caffeine_app.errors import CurveInvariantError, ValidationError
from caffeine_app.format import format_time_label
from caffeine_app.session import (
    DEFAULT_WEIGHT_LBS,
    MAX_SENSITIVITY,
    MIN_SENSITIVITY,
    SENSITIVITY_LABELS,
    CaffeineSession,
    half_life_from_sensitivity,
    sensitivity_from_half_life,
)
from caffeine_app.sleep import get_sleep_advice

app = Flask(__name__)

MIN_WEIGHT_LBS = 100.0
MAX_WEIGHT_LBS = 300.0
DEFAULT_SENSITIVITY = 3
MAX_DRINKS = 50


def _clamp_float(value: Any, default: float, min_value: float, max_value: float) -> float:
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        parsed = default
    if parsed != parsed:  # NaN
        parsed = default
    return max(min_value, min(max_value, parsed))


def _json_body() -> dict[str, Any]:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def _half_life(data: dict[str, Any]) -> float:
    """Explicit half_life_hrs wins; otherwise map the 1-5 sensitivity level."""
    if data.get("half_life_hrs") is not None:
        try:
            return float(data["half_life_hrs"])
        except (TypeError, ValueError):
            raise ValidationError("half_life_hrs must be a number") from None
    level = int(_clamp_float(data.get("sensitivity"), DEFAULT_SENSITIVITY, MIN_SENSITIVITY, MAX_SENSITIVITY))
    return half_life_from_sensitivity(level)


def _session_from_body(data: dict[str, Any]) -> CaffeineSession:
    weight = _clamp_float(data.get("weight_lbs"), DEFAULT_WEIGHT_LBS, MIN_WEIGHT_LBS, MAX_WEIGHT_LBS)
    model = CaffeineSession(weight_lbs=weight, half_life_hrs=_half_life(data))

    raw = data.get("drinks", [])
    if not isinstance(raw, list):
        raise ValidationError("drinks must be a list")
    if len(raw) > MAX_DRINKS:
        raise ValidationError(f"At most {MAX_DRINKS} drinks are supported")
    for item in raw:
        model.add_event(DrinkEvent.from_dict(item))
    return model


def _profile_payload(model: CaffeineSession) -> dict[str, Any]:
    return {
        "weight_lbs": model.weight_lbs,
        "half_life_hrs": model.half_life_hrs,
        "sensitivity": sensitivity_from_half_life(model.half_life_hrs),
    }


@app.errorhandler(ValidationError)
def handle_validation_error(exc: ValidationError):
    return jsonify({"error": str(exc)}), 400


@app.errorhandler(CurveInvariantError)
def handle_curve_error(exc: CurveInvariantError):
    app.logger.exception("curve sampling failed")
    return jsonify({"error": "Could not compute a caffeine curve for these inputs"}), 500


@app.route("/healthz")
def healthz():
    return jsonify({"ok": True})


@app.route("/api/sensitivity")
def api_sensitivity():
    levels = [
        {"level": level, "label": SENSITIVITY_LABELS[level - 1], "half_life_hrs": half_life_from_sensitivity(level)}
        for level in range(MIN_SENSITIVITY, MAX_SENSITIVITY + 1)
    ]
    return jsonify({"levels": levels, "default": DEFAULT_SENSITIVITY})


@app.route("/api/concentration", methods=["POST"])
def api_concentration():
    data = _json_body()
    time = data.get("time")
    if not time:
        return jsonify({"error": "time is required (HH:mm)"}), 400
    model = _session_from_body(data)
    total = model.concentration_at(str(time))
    return jsonify({
        "time": time,
        "total_mg": round(total, 2),
        **_profile_payload(model),
    })


@app.route("/api/curve", methods=["POST"])
def api_curve():
    model = _session_from_body(_json_body())
    result = model.curve()
    peak = result.peak

    return jsonify({
        **result.to_dict(),
        "safe_time_label": format_time_label(result.safe_time) if result.safe_time is not None else None,
        "peak_mg": round(peak.total_mg, 2) if peak else 0,
        "peak_time": peak.time_hrs if peak else None,
        "drink_count": len(model.drinks),
        **_profile_payload(model),
        "sleep_advice": get_sleep_advice(result),
    })


if __name__ == "__main__":
    logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO").upper())
    port = int(os.environ.get("PORT", 5000))
    app.run(host="0.0.0.0", port=port, debug=os.environ.get("FLASK_DEBUG", "0") == "1")
