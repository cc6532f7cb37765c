"""
Per-user reduction: best score per activity, and the zero-filled averages
that make up a user's overall totals.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable, Mapping, Optional

from challenger.helpers.time import parse_timestamp
from .activities import NON_CANONICAL_ACTIVITY_IDS, canonical_activity_ids
from .normalize import round_half_up

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoreSnapshot:
    """One submitted result as read from storage."""
    id: object
    user_id: object
    activity_id: str
    raw_value: float
    reps: Optional[int] = None
    event_id: object = None
    verified: bool = False
    submitted_at: Optional[datetime] = None
    notes: Optional[str] = None

    @classmethod
    def from_row(cls, row) -> "ScoreSnapshot":
        return cls(
            id=row.id,
            user_id=row.user_id,
            activity_id=row.activity_id,
            raw_value=float(row.raw_value),
            reps=row.reps,
            event_id=row.event_id,
            verified=bool(row.verified),
            submitted_at=parse_timestamp(row.submitted_at),
            notes=getattr(row, "notes", None),
        )


@dataclass(frozen=True)
class ProfileSnapshot:
    id: object
    sex: Optional[str]
    date_of_birth: Optional[date]
    bodyweight: Optional[float]
    name: str = ""
    email: Optional[str] = None

    @classmethod
    def from_row(cls, row) -> "ProfileSnapshot":
        dob = parse_timestamp(row.date_of_birth)
        return cls(
            id=row.id,
            sex=row.sex,
            date_of_birth=dob.date() if dob else None,
            bodyweight=row.bodyweight,
            name=row.name or "",
            email=row.email,
        )


def is_effectively_verified(record) -> bool:
    """Admin-verified, or submitted inside an event (event results are trusted)."""
    return bool(record.verified) or record.event_id is not None


@dataclass(frozen=True)
class ScoredResult:
    record_id: object
    user_id: object
    activity_id: str
    raw_value: float
    reps: Optional[int]
    event_id: object
    verified: bool
    submitted_at: Optional[datetime]
    score: float
    percentile: float
    degraded: bool = False

    def to_dict(self) -> dict:
        return {
            "id": self.record_id,
            "user_id": self.user_id,
            "activity_id": self.activity_id,
            "raw_value": self.raw_value,
            "reps": self.reps,
            "event_id": self.event_id,
            "verified": self.verified,
            "submitted_at": self.submitted_at.isoformat() if self.submitted_at else None,
            "score": self.score,
            "percentile": self.percentile,
            "degraded": self.degraded,
        }


def ingest(records: Iterable, profiles: Mapping, calculator, today: Optional[date] = None):
    """
    Score every record against its owner's profile.

    Returns (results, unscoreable). Records whose owner is missing sex, date
    of birth or bodyweight land in `unscoreable` and are left out of every
    aggregate.
    """
    results = []
    unscoreable = []

    for record in records:
        calculated = calculator.score_record(record, profiles.get(record.user_id), today)
        if calculated is None:
            unscoreable.append(record)
            continue

        results.append(
            ScoredResult(
                record_id=record.id,
                user_id=record.user_id,
                activity_id=record.activity_id,
                raw_value=record.raw_value,
                reps=record.reps,
                event_id=record.event_id,
                verified=is_effectively_verified(record),
                submitted_at=record.submitted_at,
                score=calculated.score,
                percentile=calculated.percentile,
                degraded=calculated.degraded,
            )
        )

    if unscoreable:
        logger.info("%d record(s) unscoreable (incomplete profile)", len(unscoreable))

    return results, unscoreable


def _beats(candidate: ScoredResult, best: Optional[ScoredResult]) -> bool:
    if best is None or candidate.score > best.score:
        return True
    if candidate.score < best.score:
        return False
    # equal score: the earlier submission holds the best
    if candidate.submitted_at is None:
        return False
    return best.submitted_at is None or candidate.submitted_at < best.submitted_at


def best_by_activity(
    results: Iterable[ScoredResult],
    activity_ids: Iterable[str],
    verified_only: bool = False,
) -> dict:
    """activity id -> highest-scoring result (None where there isn't one)."""
    best = {aid: None for aid in activity_ids}

    for r in results:
        if r.activity_id not in best:
            continue
        if verified_only and not r.verified:
            continue
        if _beats(r, best[r.activity_id]):
            best[r.activity_id] = r

    return best


def average_of_bests(
    results: Iterable[ScoredResult],
    activity_ids: Iterable[str],
    verified_only: bool = False,
) -> int:
    """
    Mean of the best score per activity over the FULL activity set.

    Activities without a result count as 0, so gaps pull the average down.
    """
    activity_ids = list(activity_ids)
    if not activity_ids:
        return 0

    best = best_by_activity(results, activity_ids, verified_only)
    total = sum(r.score if r else 0 for r in best.values())
    return round_half_up(total / len(activity_ids))


def category_average(
    results: Iterable[ScoredResult],
    category: str,
    excluded: Iterable[str] = NON_CANONICAL_ACTIVITY_IDS,
) -> int:
    """Verified-only average across one category's canonical activities."""
    return average_of_bests(results, canonical_activity_ids(excluded, category), verified_only=True)


@dataclass
class UserTotals:
    user_id: object
    total: int
    verified_total: int
    per_activity_best: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "total": self.total,
            "verified_total": self.verified_total,
            "per_activity_best": {
                aid: (r.to_dict() if r else None)
                for aid, r in self.per_activity_best.items()
            },
        }


def _activity_ids(activities) -> list:
    return [getattr(a, "id", a) for a in activities]


def compute_user_totals(user_id, results: Iterable[ScoredResult], canonical_activities=None) -> UserTotals:
    """
    Overall totals for one user.

    `total` takes the best of each canonical activity regardless of
    verification; `verified_total` only counts effectively verified results.
    `canonical_activities` may hold ActivityDefinitions or plain ids.
    """
    if canonical_activities is None:
        activity_ids = canonical_activity_ids()
    else:
        activity_ids = _activity_ids(canonical_activities)

    mine = [r for r in results if r.user_id == user_id]

    return UserTotals(
        user_id=user_id,
        total=average_of_bests(mine, activity_ids),
        verified_total=average_of_bests(mine, activity_ids, verified_only=True),
        per_activity_best=best_by_activity(mine, activity_ids),
    )
