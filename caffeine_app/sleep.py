"""Sleep advisory helpers.

Turns a sampled caffeine curve into a short message about when caffeine is
unlikely to affect sleep. Educational only; it is not medical advice.
"""

from caffeine_app.curve import CAFFEINE_SLEEP_THRESHOLD_MG, CurveResult
from caffeine_app.format import format_time_label


def get_sleep_advice(result: CurveResult, threshold_mg: float = CAFFEINE_SLEEP_THRESHOLD_MG) -> dict:
    """Return sleep guidance for a curve."""
    if not result.samples:
        return {
            "status": "no_drinks",
            "title": "No caffeine logged",
            "message": "Add at least one drink to see your curve.",
            "safe_time": None,
            "threshold_mg": threshold_mg,
        }

    if result.safe_time is None:
        return {
            "status": "unknown",
            "title": "No clear drop-off",
            "message": f"Caffeine never clearly fell below {threshold_mg:.0f} mg on this curve.",
            "safe_time": None,
            "threshold_mg": threshold_mg,
        }

    label = format_time_label(result.safe_time)
    return {
        "status": "ok",
        "title": f"Low caffeine by {label}",
        "message": f"By {label}, your caffeine levels should be low enough that it's unlikely to affect your sleep.",
        "safe_time": result.safe_time,
        "threshold_mg": threshold_mg,
    }
