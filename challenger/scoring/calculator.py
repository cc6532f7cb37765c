"""
Bridge to the external scoring provider.

The provider is a mapping of activity id -> scoring function with the
signature `(value, sex, age, bodyweight) -> {"score": .., "percentile": ..}`,
where sex is "male" or "female". It is injected, never constructed here.
"""

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from challenger.helpers.time import age_on
from .activities import ACTIVITIES_BY_ID
from .errors import UnknownActivityError
from .normalize import normalize_raw_value

logger = logging.getLogger(__name__)

SEX_LABELS = {"M": "male", "F": "female"}
DEGRADED_PERCENTILE = 50


@dataclass(frozen=True)
class CalculatedScore:
    score: float
    percentile: float
    degraded: bool = False

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "percentile": self.percentile,
            "degraded": self.degraded,
        }


def convert_sex(sex: str) -> str:
    """'M'/'F' (profile encoding) -> 'male'/'female' (provider encoding)."""
    key = (sex or "").strip()
    if key.lower() in ("male", "female"):
        return key.lower()
    try:
        return SEX_LABELS[key.upper()]
    except KeyError:
        raise ValueError(f"Unknown sex: {sex!r}") from None


def is_scoreable(profile) -> bool:
    """A profile can be scored only with sex, date of birth and bodyweight all present."""
    if profile is None:
        return False
    sex = (getattr(profile, "sex", None) or "").strip().upper()
    if sex not in SEX_LABELS:
        return False
    if getattr(profile, "date_of_birth", None) is None:
        return False
    bodyweight = getattr(profile, "bodyweight", None)
    return bodyweight is not None and bodyweight > 0


def _unpack(result: Any) -> tuple:
    if isinstance(result, Mapping):
        return float(result["score"]), float(result["percentile"])
    return float(result.score), float(result.percentile)


class ScoreCalculator:
    def __init__(self, provider: Mapping, activities: Optional[Mapping] = None):
        self.provider = provider
        self.activities = ACTIVITIES_BY_ID if activities is None else activities

    def scoring_function(self, activity_id: str):
        if activity_id not in self.activities:
            raise UnknownActivityError(activity_id)
        fn = self.provider.get(activity_id)
        if fn is None:
            raise UnknownActivityError(activity_id)
        return fn

    def compute_score(
        self,
        activity_id: str,
        value: float,
        sex: str,
        age: int,
        bodyweight: float,
    ) -> CalculatedScore:
        """
        Score an already-normalized value.

        Provider failures (exceptions, non-finite output) and an unrecognised
        sex are logged and replaced with a degraded result; only an unknown
        activity raises.
        """
        fn = self.scoring_function(activity_id)
        sex_label = sex

        try:
            sex_label = convert_sex(sex)
            score, percentile = _unpack(fn(value, sex_label, age, bodyweight))
        except Exception:
            logger.warning(
                "Scoring failed for %s (value=%s, sex=%s, age=%s, bodyweight=%s)",
                activity_id, value, sex_label, age, bodyweight,
                exc_info=True,
            )
            return CalculatedScore(value, DEGRADED_PERCENTILE, degraded=True)

        if not (math.isfinite(score) and math.isfinite(percentile)):
            logger.warning(
                "Scoring provider returned non-finite result for %s: score=%s percentile=%s",
                activity_id, score, percentile,
            )
            return CalculatedScore(value, DEGRADED_PERCENTILE, degraded=True)

        return CalculatedScore(score, percentile)

    def score_record(self, record, profile, today: Optional[date] = None) -> Optional[CalculatedScore]:
        """
        Score one submitted result for its owner.

        Returns None when the profile is missing sex, date of birth or
        bodyweight; such records are unscoreable, not defaulted.
        """
        if not is_scoreable(profile):
            return None

        value = normalize_raw_value(record.activity_id, record.raw_value, record.reps)
        age = age_on(profile.date_of_birth, today)
        return self.compute_score(record.activity_id, value, profile.sex, age, profile.bodyweight)

    def pace_to_watts(self, pace: float) -> float:
        return pace_to_watts(pace, self.provider)


def pace_to_watts(pace: float, provider=None) -> float:
    """Rowing power for a 500m split in seconds."""
    fn = getattr(provider, "pace_to_watts", None)
    if fn is not None:
        try:
            return float(fn(pace))
        except Exception:
            logger.warning("Provider pace_to_watts failed for pace=%s", pace, exc_info=True)

    # Concept2: watts = 2.80 / (seconds per meter)^3
    return 2.8 / math.pow(pace / 500, 3)
