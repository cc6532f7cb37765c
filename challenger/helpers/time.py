from collections.abc import Mapping
from datetime import date, datetime, timezone
from typing import Any, Optional

# epoch values above this are taken to be milliseconds
_EPOCH_MS_CUTOFF = 100_000_000_000


def _from_epoch(value: float) -> datetime:
    if abs(value) > _EPOCH_MS_CUTOFF:
        value = value / 1000.0
    return datetime.fromtimestamp(value, tz=timezone.utc).replace(tzinfo=None)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Single storage-boundary adapter for timestamp-like values.

    Accepts datetime, date, epoch seconds or milliseconds, ISO-8601 strings,
    objects carrying `seconds` (+ `nanos`/`nanoseconds`), and mappings with
    `seconds`/`_seconds`. Returns a naive UTC datetime, or None for None.
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        # Treat naive DB values as UTC
        if value.tzinfo is None:
            return value
        return value.astimezone(timezone.utc).replace(tzinfo=None)

    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)

    if isinstance(value, bool):
        raise TypeError(f"Not a timestamp: {value!r}")

    if isinstance(value, (int, float)):
        return _from_epoch(value)

    if isinstance(value, str):
        raw = value.strip()
        if not raw:
            return None
        try:
            return _from_epoch(float(raw))
        except ValueError:
            pass
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        return parse_timestamp(datetime.fromisoformat(raw))

    if isinstance(value, Mapping):
        seconds = value.get("seconds", value.get("_seconds"))
        if seconds is None:
            raise TypeError(f"Not a timestamp: {value!r}")
        nanos = value.get("nanoseconds", value.get("_nanoseconds", 0)) or 0
        return _from_epoch(float(seconds) + nanos / 1e9)

    seconds = getattr(value, "seconds", None)
    if seconds is not None:
        nanos = getattr(value, "nanos", None) or getattr(value, "nanoseconds", 0) or 0
        return _from_epoch(float(seconds) + nanos / 1e9)

    raise TypeError(f"Not a timestamp: {value!r}")


def age_on(date_of_birth: date, today: Optional[date] = None) -> int:
    """Whole years, minus one if this year's birthday hasn't happened yet."""
    today = today or datetime.utcnow().date()
    if isinstance(today, datetime):
        today = today.date()

    age = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        age -= 1
    return age
