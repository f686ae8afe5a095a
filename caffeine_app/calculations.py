"""Caffeine concentration using a one-compartment model.

Model (per drink):
- Absorption lag: nothing reaches plasma for the first 0.1 h.
- Infusion: the dose D is drunk at a constant rate over T hours.
  C(e) = D / (T * Vd * k) * (1 - exp(-k * e)),  e = t - lag
- Elimination: after the drink is finished the full dose decays
  exponentially, C(e) = D / Vd * exp(-k * e),  e = t - lag - T
- k = ln(2) / half_life, Vd = 0.6 L/kg * body weight (kg)

Concentrations are mg/L. Multiply by Vd for the total mg in the body.
"""

import math
from dataclasses import dataclass
from typing import Iterable, List

from caffeine_app.clock import clock_to_hours
from caffeine_app.drinks import DrinkEvent, require_positive
from caffeine_app.errors import ValidationError


@dataclass(frozen=True)
class ModelConstants:
    absorption_delay_hrs: float = 0.1
    vd_l_per_kg: float = 0.6
    kg_per_lb: float = 0.453592


DEFAULT_MODEL = ModelConstants()


def elimination_rate(half_life_hrs: float) -> float:
    """First-order elimination constant k (1/h)."""
    return math.log(2) / require_positive("half_life_hrs", half_life_hrs)


def volume_of_distribution(weight_lbs: float, constants: ModelConstants = DEFAULT_MODEL) -> float:
    """Vd in litres for a body weight in pounds."""
    weight_kg = require_positive("weight_lbs", weight_lbs) * constants.kg_per_lb
    return constants.vd_l_per_kg * weight_kg


def _infusion_level(elapsed: float, dose_mg: float, duration_hrs: float, vd: float, k: float) -> float:
    # -expm1(-x) == 1 - exp(-x) without cancellation for short drinks.
    return dose_mg / (duration_hrs * vd * k) * -math.expm1(-k * elapsed)


def _contribution(
    elapsed_hrs: float,
    dose_mg: float,
    duration_hrs: float,
    k: float,
    vd: float,
    constants: ModelConstants,
) -> float:
    delay = constants.absorption_delay_hrs
    if elapsed_hrs < delay:
        return 0.0
    if elapsed_hrs < delay + duration_hrs:
        return _infusion_level(elapsed_hrs - delay, dose_mg, duration_hrs, vd, k)
    return dose_mg / vd * math.exp(-k * (elapsed_hrs - delay - duration_hrs))


def single_dose_concentration(
    elapsed_hrs: float,
    dose_mg: float,
    duration_hrs: float,
    half_life_hrs: float,
    weight_lbs: float,
    constants: ModelConstants = DEFAULT_MODEL,
) -> float:
    """Plasma concentration (mg/L) from one drink, elapsed_hrs after it was started."""
    dose_mg = require_positive("dose_mg", dose_mg)
    duration_hrs = require_positive("duration_hrs", duration_hrs)
    k = elimination_rate(half_life_hrs)
    vd = volume_of_distribution(weight_lbs, constants)
    return _contribution(elapsed_hrs, dose_mg, duration_hrs, k, vd, constants)


def _validated(drinks: Iterable[DrinkEvent]) -> List[DrinkEvent]:
    checked = []
    for drink in drinks:
        if not isinstance(drink, DrinkEvent):
            raise ValidationError(f"Expected a DrinkEvent, got {type(drink).__name__}")
        drink.validate()
        checked.append(drink)
    return checked


def concentration_density(
    observation_hours: float,
    drinks: Iterable[DrinkEvent],
    half_life_hrs: float,
    weight_lbs: float,
    constants: ModelConstants = DEFAULT_MODEL,
) -> float:
    """Summed plasma concentration (mg/L) of all drinks at a decimal-hour instant."""
    k = elimination_rate(half_life_hrs)
    vd = volume_of_distribution(weight_lbs, constants)
    total = 0.0
    for drink in _validated(drinks):
        elapsed = observation_hours - drink.start_hours
        total += _contribution(elapsed, float(drink.dose_mg), float(drink.duration_hrs), k, vd, constants)
    return total


def total_mg_at(
    observation_hours: float,
    drinks: Iterable[DrinkEvent],
    half_life_hrs: float,
    weight_lbs: float,
    constants: ModelConstants = DEFAULT_MODEL,
) -> float:
    """Caffeine in the body (mg) at a decimal-hour instant."""
    density = concentration_density(observation_hours, drinks, half_life_hrs, weight_lbs, constants)
    return density * volume_of_distribution(weight_lbs, constants)


def compute_concentration(
    observation_time: str,
    drinks: Iterable[DrinkEvent],
    half_life_hrs: float,
    weight_lbs: float,
    constants: ModelConstants = DEFAULT_MODEL,
) -> float:
    """Caffeine in the body (mg) at an "HH:mm" instant."""
    return total_mg_at(clock_to_hours(observation_time), drinks, half_life_hrs, weight_lbs, constants)
