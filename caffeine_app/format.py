"""Display helpers: 12-hour clock labels and drink durations."""

from caffeine_app.clock import clock_to_hours, hours_to_clock


def format_duration(minutes: float) -> str:
    """30 -> "30 min", 0.5 -> "0.5 min", 90 -> "1h 30m", 120 -> "2h"."""
    minutes = round(float(minutes), 1)
    if minutes < 60:
        return f"{minutes:g} min"
    hours, mins = divmod(minutes, 60)
    return f"{int(hours)}h {round(mins, 1):g}m" if mins else f"{int(hours)}h"


def format_clock_12h(time: str) -> str:
    """"14:15" -> "2:15 PM"."""
    hours = int(clock_to_hours(time))
    minutes = time[-2:]
    period = "PM" if hours % 24 >= 12 else "AM"
    display_hours = hours % 12 or 12
    return f"{display_hours}:{minutes} {period}"


def format_time_label(hours: float) -> str:
    """Decimal hours on the curve timeline -> "4:45 PM", with "(next day)" past midnight."""
    unwrapped = hours_to_clock(hours)
    label = format_clock_12h(hours_to_clock(hours, wrap=True))
    if clock_to_hours(unwrapped) >= 24:
        return f"{label} (next day)"
    return label
