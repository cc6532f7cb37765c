"""
Raw value handling: what gets fed to the scoring provider, and how a raw
value is shown to people.

Raw values are kilograms for WEIGHT activities, seconds for TIME
activities and meters for DISTANCE activities.
"""

import math
import re
from typing import Optional, Union

from .activities import DISTANCE, TIME, WEIGHT, get_activity

TIME_PATTERN = re.compile(r"^\s*(?:(\d+):)?(\d+(?:\.\d+)?)\s*$")


def round_half_up(value: float) -> int:
    """Round .5 away from zero for non-negative values (Python's round() is banker's)."""
    return int(math.floor(value + 0.5))


def epley_one_rep_max(weight: float, reps: int) -> float:
    """Estimated 1RM from a multi-rep set."""
    if reps == 1:
        return weight
    return weight * (1 + reps / 30)


def normalize_raw_value(activity_id: str, raw_value: float, reps: Optional[int] = None) -> float:
    """
    Value handed to the scoring provider.

    Rep-based lifts are converted to an estimated 1RM; everything else (and
    any activity id we don't know) passes straight through.
    """
    activity = get_activity(activity_id)
    if not activity:
        return raw_value

    if activity.input_type == WEIGHT and activity.supports_reps:
        reps = reps or 1
        if reps > 1:
            return epley_one_rep_max(raw_value, reps)

    return raw_value


def parse_time(value: Union[str, int, float]) -> float:
    """
    Seconds from "m:ss[.f]" or a plain seconds string.

      "1:26.3" -> 86.3
      "95"     -> 95.0
    """
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)

    match = TIME_PATTERN.match(value or "")
    if not match:
        raise ValueError(f"Invalid time format: {value!r}")

    minutes, seconds = match.groups()
    if minutes is None:
        return float(seconds)

    return round(int(minutes) * 60 + float(seconds), 3)


def format_time(seconds: float) -> str:
    # work in whole tenths so 59.96 becomes 1:00.0 rather than 0:60.0
    tenths = round_half_up(seconds * 10)
    minutes, rem = divmod(tenths, 600)
    whole, tenth = divmod(rem, 10)

    if minutes > 0:
        return f"{minutes}:{whole:02d}.{tenth} (mm:ss.ms)"
    return f"{whole}.{tenth} (ss.ms)"


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return ("%f" % value).rstrip("0").rstrip(".")


def format_raw_value(activity_id: str, raw_value: float, reps: Optional[int] = None) -> str:
    """Human-readable raw value; unknown activities degrade to the bare number."""
    activity = get_activity(activity_id)
    if not activity:
        return str(raw_value)

    if activity.input_type == WEIGHT:
        return f"{_format_number(raw_value)}{activity.unit} × {reps or 1}"

    if activity.input_type == TIME:
        return format_time(raw_value)

    if activity.input_type == DISTANCE:
        return f"{round_half_up(raw_value)}{activity.unit}"

    return str(raw_value)
