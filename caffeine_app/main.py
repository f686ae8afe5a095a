"""
Caffeine curve CLI. Run from project root: python -m caffeine_app.main
Logs drinks, prints the caffeine level at a given time, the curve, and when
caffeine should be low enough for sleep.
"""

import argparse
import logging
import sys

from caffeine_app.errors import CaffeineError
from caffeine_app.format import format_duration, format_time_label
from caffeine_app.session import (
    DEFAULT_WEIGHT_LBS,
    MAX_SENSITIVITY,
    MIN_SENSITIVITY,
    CaffeineSession,
    half_life_from_sensitivity,
    sensitivity_from_half_life,
    sensitivity_label,
)
from caffeine_app.sleep import get_sleep_advice

logger = logging.getLogger(__name__)


def _parse_drink(raw: str):
    """"08:00,95,15" -> ("08:00", 95.0, 15.0). Minutes default to 15."""
    parts = [p.strip() for p in raw.split(",")]
    if len(parts) not in (2, 3):
        raise argparse.ArgumentTypeError(f"drink must be HH:mm,MG[,MINUTES], got {raw!r}")
    try:
        dose = float(parts[1])
        minutes = float(parts[2]) if len(parts) == 3 else 15.0
    except ValueError:
        raise argparse.ArgumentTypeError(f"drink dose and minutes must be numbers, got {raw!r}") from None
    return parts[0], dose, minutes


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Caffeine curve: log drinks and see when caffeine wears off")
    parser.add_argument("--weight", type=float, default=DEFAULT_WEIGHT_LBS, help="Body weight (lb)")
    parser.add_argument(
        "--sensitivity",
        type=int,
        default=3,
        choices=range(MIN_SENSITIVITY, MAX_SENSITIVITY + 1),
        help="Caffeine sensitivity 1 (very tolerant) to 5 (very sensitive)",
    )
    parser.add_argument("--half-life", type=float, help="Caffeine half-life in hours (overrides --sensitivity)")
    parser.add_argument(
        "--drink",
        type=_parse_drink,
        action="append",
        default=[],
        metavar="HH:mm,MG[,MIN]",
        help="Add a drink: start time, caffeine mg, minutes to finish (repeatable)",
    )
    parser.add_argument(
        "--demo",
        action="store_true",
        help="Run with demo drinks (coffee at 08:00, tea at 13:00); used when no --drink is given",
    )
    parser.add_argument("--at", metavar="HH:mm", help="Print caffeine level at this time")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, ...)")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.demo and args.drink:
        parser.error("--demo cannot be combined with --drink")
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    if args.half_life is not None:
        session = CaffeineSession(weight_lbs=args.weight, half_life_hrs=args.half_life)
        level = sensitivity_from_half_life(session.half_life_hrs)
        closest = f" (closest sensitivity: {sensitivity_label(level)})" if level is not None else ""
        print(f"Weight: {session.weight_lbs:g} lb, half-life: {session.half_life_hrs:g}h{closest}")
    else:
        session = CaffeineSession(weight_lbs=args.weight, half_life_hrs=half_life_from_sensitivity(args.sensitivity))
        print(
            f"Weight: {session.weight_lbs:g} lb, sensitivity: {sensitivity_label(args.sensitivity)} "
            f"(half-life {session.half_life_hrs:g}h)"
        )

    try:
        drinks = args.drink
        if not drinks:
            drinks = [("08:00", 95.0, 15.0), ("13:00", 47.0, 30.0)]
            print("Demo day: drip coffee at 08:00, black tea at 13:00")
        for start_time, dose, minutes in drinks:
            session.add_drink(start_time, dose, minutes)
            print(f"  {start_time}  {dose:g} mg over {format_duration(minutes)}")

        if args.at:
            print(f"Caffeine at {args.at}: {session.concentration_at(args.at):.0f} mg")

        result = session.curve()
    except CaffeineError as exc:
        logger.debug("rejected input", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 2

    peak = result.peak
    print(f"Curve points: {len(result.samples)} from {format_time_label(result.samples[0].time_hrs)}")
    print(f"Peak: {peak.total_mg:.0f} mg at {format_time_label(peak.time_hrs)}")
    print(get_sleep_advice(result)["message"])
    return 0


if __name__ == "__main__":
    sys.exit(main() or 0)
