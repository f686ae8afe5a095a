"""
Caffeine curve: one-compartment caffeine model, drink log, curve sampling
and the safe-to-sleep estimate.
Use from project root: python -m caffeine_app.main
"""

from caffeine_app.errors import (
    CaffeineError,
    CurveInvariantError,
    TimeFormatError,
    ValidationError,
)
from caffeine_app.clock import clock_to_hours, hours_to_clock
from caffeine_app.drinks import DrinkEvent
from caffeine_app.calculations import (
    DEFAULT_MODEL,
    ModelConstants,
    compute_concentration,
    single_dose_concentration,
)
from caffeine_app.curve import (
    CAFFEINE_SLEEP_THRESHOLD_MG,
    ConcentrationSample,
    CurveResult,
    SamplerSettings,
    find_safe_time,
    generate_curve,
)
from caffeine_app.session import CaffeineSession, half_life_from_sensitivity
from caffeine_app.sleep import get_sleep_advice

__all__ = [
    "CaffeineSession",
    "DrinkEvent",
    "compute_concentration",
    "single_dose_concentration",
    "generate_curve",
    "find_safe_time",
    "get_sleep_advice",
    "half_life_from_sensitivity",
    "clock_to_hours",
    "hours_to_clock",
    "ModelConstants",
    "DEFAULT_MODEL",
    "SamplerSettings",
    "ConcentrationSample",
    "CurveResult",
    "CAFFEINE_SLEEP_THRESHOLD_MG",
    "CaffeineError",
    "ValidationError",
    "TimeFormatError",
    "CurveInvariantError",
]
