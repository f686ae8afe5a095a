"""Error types raised by the caffeine model and curve sampler."""


class CaffeineError(Exception):
    """Base class for every error raised by caffeine_app."""


class ValidationError(CaffeineError, ValueError):
    """An input (dose, duration, half-life, weight, time) is invalid."""


class TimeFormatError(ValidationError):
    """A wall-clock string is not a valid "HH:mm" value."""


class CurveInvariantError(CaffeineError, RuntimeError):
    """The curve sampler ran past its horizon without the signal settling."""
