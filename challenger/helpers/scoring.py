import math
from typing import Optional

from challenger.scoring.activities import TIME, ActivityDefinition
from challenger.scoring.normalize import parse_time

# --- Submission parsing (validation boundary) ---

def parse_raw_value(activity: ActivityDefinition, raw) -> float:
    """
    Turn a submitted raw value into a float for this activity.

    Timed activities also accept "m:ss.f". Anything non-numeric, non-finite
    or not strictly positive is rejected with ValueError.
    """
    if raw is None or isinstance(raw, bool):
        raise ValueError("raw_value required")

    if activity.input_type == TIME and isinstance(raw, str):
        value = parse_time(raw)
    else:
        try:
            value = float(raw)
        except (TypeError, ValueError):
            raise ValueError(f"Invalid raw_value: {raw!r}") from None

    if not math.isfinite(value) or value <= 0:
        raise ValueError(f"Invalid raw_value: {raw!r}")

    return value


def parse_reps(activity: ActivityDefinition, raw) -> Optional[int]:
    """Reps for rep-based lifts (default from the catalog); None for everything else."""
    if not activity.supports_reps:
        return None

    if raw is None or raw == "":
        return activity.default_reps or 1

    try:
        reps = int(raw)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid reps: {raw!r}") from None

    lo = activity.min_reps or 1
    hi = activity.max_reps or reps
    if reps < lo or reps > hi:
        raise ValueError(f"reps must be between {lo} and {hi}")

    return reps
