"""Caffeine-over-time curve and the "safe to sleep" crossing.

The curve starts half an hour before the first drink and steps forward in
15 minute increments until the level has stayed under the sleep threshold
for four samples in a row.
"""

import logging
from dataclasses import dataclass
from typing import Iterator, List, NamedTuple, Optional, Sequence, Tuple

from caffeine_app import calculations
from caffeine_app.calculations import DEFAULT_MODEL, ModelConstants
from caffeine_app.drinks import DrinkEvent, require_positive
from caffeine_app.errors import CurveInvariantError

logger = logging.getLogger(__name__)

# Below this much caffeine in the body, sleep is unlikely to be affected.
CAFFEINE_SLEEP_THRESHOLD_MG = 30.0


@dataclass(frozen=True)
class SamplerSettings:
    step_hrs: float = 0.25
    lead_in_hrs: float = 0.5
    threshold_mg: float = CAFFEINE_SLEEP_THRESHOLD_MG
    low_samples_to_stop: int = 4
    # Hours past the last drink after which sampling gives up.
    max_horizon_hrs: float = 48.0


DEFAULT_SAMPLER = SamplerSettings()


class ConcentrationSample(NamedTuple):
    time_hrs: float
    total_mg: float


@dataclass(frozen=True)
class CurveResult:
    samples: Tuple[ConcentrationSample, ...] = ()
    safe_time: Optional[float] = None

    @property
    def peak(self) -> Optional[ConcentrationSample]:
        if not self.samples:
            return None
        return max(self.samples, key=lambda s: s.total_mg)

    def to_dict(self) -> dict:
        return {
            "curve": [{"t": s.time_hrs, "mg": round(s.total_mg, 2)} for s in self.samples],
            "safe_time": self.safe_time,
        }


def iter_samples(
    drinks: Sequence[DrinkEvent],
    half_life_hrs: float,
    weight_lbs: float,
    settings: SamplerSettings = DEFAULT_SAMPLER,
    constants: ModelConstants = DEFAULT_MODEL,
) -> Iterator[ConcentrationSample]:
    """Yield samples until the level has settled below the threshold."""
    if not drinks:
        return
    require_positive("step_hrs", settings.step_hrs)
    # Validates half-life, weight and every drink before the first sample.
    calculations.concentration_density(0.0, drinks, half_life_hrs, weight_lbs, constants)

    starts = [d.start_hours for d in drinks]
    start = max(0.0, min(starts) - settings.lead_in_hrs)
    give_up_after = max(starts) + settings.max_horizon_hrs

    low_run = 0
    i = 0
    while low_run < settings.low_samples_to_stop:
        t = start + i * settings.step_hrs
        if t > give_up_after:
            raise CurveInvariantError(
                f"Caffeine level did not settle below {settings.threshold_mg} mg within "
                f"{settings.max_horizon_hrs} h of the last drink"
            )
        total = calculations.total_mg_at(t, drinks, half_life_hrs, weight_lbs, constants)
        yield ConcentrationSample(t, total)
        if total < settings.threshold_mg:
            low_run += 1
        else:
            low_run = 0
        i += 1


def find_safe_time(
    samples: Sequence[ConcentrationSample],
    threshold_mg: float = CAFFEINE_SLEEP_THRESHOLD_MG,
) -> Optional[float]:
    """Time of the first sample that drops below threshold on a falling slope."""
    for prev, current in zip(samples, samples[1:]):
        if current.total_mg < threshold_mg and current.total_mg < prev.total_mg:
            return current.time_hrs
    return None


def generate_curve(
    drinks: Sequence[DrinkEvent],
    half_life_hrs: float,
    weight_lbs: float,
    settings: SamplerSettings = DEFAULT_SAMPLER,
    constants: ModelConstants = DEFAULT_MODEL,
) -> CurveResult:
    """Sampled curve for plotting plus the safe-to-sleep time (None if not reached)."""
    drinks = list(drinks)
    if not drinks:
        return CurveResult()
    samples: List[ConcentrationSample] = list(
        iter_samples(drinks, half_life_hrs, weight_lbs, settings, constants)
    )
    safe_time = find_safe_time(samples, settings.threshold_mg)
    logger.debug(
        "curve: %d drinks, %d samples from %.2fh, safe_time=%s",
        len(drinks),
        len(samples),
        samples[0].time_hrs,
        safe_time,
    )
    return CurveResult(samples=tuple(samples), safe_time=safe_time)
