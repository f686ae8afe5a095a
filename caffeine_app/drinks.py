"""Drink events for caffeine tracking.

A drink is logged with the wall-clock time it was started, its caffeine
content and how long it took to finish. Drinking is treated as a constant
rate infusion over that duration.
"""

import math
from dataclasses import dataclass
from typing import Any, Mapping

from caffeine_app.clock import clock_to_hours
from caffeine_app.errors import ValidationError


def require_positive(name: str, value: Any) -> float:
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be a positive number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be a positive number") from None
    # NaN fails every comparison, so "not > 0" rejects it too.
    if not number > 0 or math.isinf(number):
        raise ValidationError(f"{name} must be positive")
    return number


@dataclass(frozen=True)
class DrinkEvent:
    """One caffeinated drink."""

    start_time: str  # "HH:mm", 24-hour
    dose_mg: float
    duration_hrs: float

    @property
    def start_hours(self) -> float:
        return clock_to_hours(self.start_time)

    def validate(self) -> None:
        """Raise ValidationError unless every field is usable by the model."""
        clock_to_hours(self.start_time)
        require_positive("dose_mg", self.dose_mg)
        require_positive("duration_hrs", self.duration_hrs)

    @classmethod
    def from_minutes(cls, start_time: str, dose_mg: float, duration_min: float) -> "DrinkEvent":
        return cls(
            start_time=start_time,
            dose_mg=dose_mg,
            duration_hrs=require_positive("duration_min", duration_min) / 60.0,
        )

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "DrinkEvent":
        """Build a drink from a JSON object: {"time", "caffeine_mg", "duration_min"}."""
        if not isinstance(payload, Mapping):
            raise ValidationError("Each drink must be an object")
        missing = [key for key in ("time", "caffeine_mg", "duration_min") if payload.get(key) is None]
        if missing:
            raise ValidationError(f"Drink is missing {', '.join(missing)}")
        drink = cls.from_minutes(
            str(payload["time"]),
            require_positive("caffeine_mg", payload["caffeine_mg"]),
            payload["duration_min"],
        )
        drink.validate()
        return drink
