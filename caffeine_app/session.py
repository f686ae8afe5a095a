"""
Caffeine day: profile (weight, sensitivity), drink log, curve helpers.
Times are 24-hour "HH:mm" strings for a single day.
"""

import math
from dataclasses import dataclass, field
from typing import List, Optional

from caffeine_app import calculations, curve
from caffeine_app.drinks import DrinkEvent

DEFAULT_WEIGHT_LBS = 155.0
DEFAULT_HALF_LIFE_HRS = 5.0

MIN_SENSITIVITY = 1
MAX_SENSITIVITY = 5

SENSITIVITY_LABELS = [
    "Very Tolerant",
    "Somewhat Tolerant",
    "Average",
    "Somewhat Sensitive",
    "Very Sensitive",
]


def half_life_from_sensitivity(level: int) -> float:
    """Sensitivity 1-5 -> caffeine half-life 3-7 h."""
    return float(level + 2)


def sensitivity_from_half_life(half_life_hrs: float) -> Optional[int]:
    """Nearest sensitivity level for a half-life, or None outside 3-7 h."""
    if not math.isfinite(half_life_hrs):
        return None
    level = int(round(half_life_hrs)) - 2
    if level < MIN_SENSITIVITY or level > MAX_SENSITIVITY:
        return None
    return level


def sensitivity_label(level: int) -> str:
    if level < MIN_SENSITIVITY or level > MAX_SENSITIVITY:
        raise ValueError(f"sensitivity must be between {MIN_SENSITIVITY} and {MAX_SENSITIVITY}")
    return SENSITIVITY_LABELS[level - 1]


@dataclass
class CaffeineSession:
    weight_lbs: float = DEFAULT_WEIGHT_LBS
    half_life_hrs: float = DEFAULT_HALF_LIFE_HRS
    _drinks: List[DrinkEvent] = field(default_factory=list)

    @classmethod
    def from_sensitivity(cls, level: int, weight_lbs: float = DEFAULT_WEIGHT_LBS) -> "CaffeineSession":
        return cls(weight_lbs=weight_lbs, half_life_hrs=half_life_from_sensitivity(level))

    def add_drink(self, start_time: str, dose_mg: float, duration_min: float = 15.0) -> DrinkEvent:
        drink = DrinkEvent.from_minutes(start_time, dose_mg, duration_min)
        drink.validate()
        self._drinks.append(drink)
        return drink

    def add_event(self, drink: DrinkEvent) -> None:
        drink.validate()
        self._drinks.append(drink)

    def remove_drink(self, index: int) -> DrinkEvent:
        return self._drinks.pop(index)

    @property
    def drinks(self) -> List[DrinkEvent]:
        return sorted(self._drinks, key=lambda d: d.start_hours)

    @property
    def total_caffeine_mg(self) -> float:
        return sum(d.dose_mg for d in self._drinks)

    def concentration_at(self, time: str) -> float:
        """Caffeine in the body (mg) at "HH:mm"."""
        return calculations.compute_concentration(time, self._drinks, self.half_life_hrs, self.weight_lbs)

    def curve(self, settings: Optional[curve.SamplerSettings] = None) -> curve.CurveResult:
        return curve.generate_curve(
            self.drinks,
            self.half_life_hrs,
            self.weight_lbs,
            settings=settings or curve.DEFAULT_SAMPLER,
        )

    def safe_time(self) -> Optional[float]:
        return self.curve().safe_time
