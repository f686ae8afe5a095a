"""Wall-clock <-> decimal-hour conversion.

Drinks are logged as 24-hour "HH:mm" strings. The model works on a decimal
hour timeline (09:30 -> 9.5) that is allowed to run past 24 when a curve
continues into the next day.
"""

import math
import re

from caffeine_app.errors import TimeFormatError

_CLOCK_RE = re.compile(r"(-?\d{2,}):(-?\d{2})")


def clock_to_hours(value: str) -> float:
    """Convert "HH:mm" to decimal hours ("09:30" -> 9.5)."""
    if not isinstance(value, str):
        raise TimeFormatError(f"Time must be a string in 24-hour HH:mm format, got {value!r}")
    match = _CLOCK_RE.fullmatch(value)
    if match is None:
        raise TimeFormatError(f"Time must be in 24-hour HH:mm format, got {value!r}")
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours < 0 or minutes < 0 or minutes >= 60:
        raise TimeFormatError(f"Time must be in valid 24-hour HH:mm format, got {value!r}")
    return hours + minutes / 60.0


def hours_to_clock(hours: float, wrap: bool = False) -> str:
    """Convert decimal hours back to "HH:mm".

    Minutes are rounded to the nearest whole minute. With wrap=True the hour
    is folded into 0-23 for display; otherwise 25.5 stays "25:30".
    """
    if not math.isfinite(hours) or hours < 0:
        raise TimeFormatError(f"Decimal hours must be a non-negative number, got {hours!r}")
    whole = math.floor(hours)
    minutes = int(round((hours - whole) * 60))
    if minutes == 60:
        whole += 1
        minutes = 0
    if wrap:
        whole %= 24
    return f"{whole:02d}:{minutes:02d}"
