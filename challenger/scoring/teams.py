"""Team aggregation under the event's team scoring method."""

from dataclasses import dataclass
from typing import Iterable, Mapping, Optional

SUM = "SUM"
AVERAGE = "AVERAGE"
BEST = "BEST"
TEAM_SCORING_METHODS = (SUM, AVERAGE, BEST)

DEFAULT_MEMBER_DISPLAY_LIMIT = 3


@dataclass(frozen=True)
class TeamSnapshot:
    id: object
    name: str
    member_ids: tuple = ()


def aggregate(member_scores: Iterable[float], method: str = SUM) -> float:
    """
    Combine member scores for a single activity.

    AVERAGE divides by the number of members that have a score, not by the
    roster size.
    """
    scores = list(member_scores)
    if not scores:
        return 0

    if method == SUM:
        return sum(scores)
    if method == AVERAGE:
        return sum(scores) / len(scores)
    if method == BEST:
        return max(scores)

    raise ValueError(f"Unknown team scoring method: {method!r}")


def member_display(members: list, limit: int = DEFAULT_MEMBER_DISPLAY_LIMIT) -> tuple:
    """Top `limit` members plus how many were cut ("+K more"). Display only."""
    if limit is None or limit < 0 or len(members) <= limit:
        return list(members), 0
    return list(members[:limit]), len(members) - limit


def compute_team_totals(
    team,
    member_ids: Iterable,
    member_bests: Mapping,
    activity_ids: Iterable[str],
    method: str = SUM,
    names: Optional[Mapping] = None,
    display_limit: int = DEFAULT_MEMBER_DISPLAY_LIMIT,
    counted_ids: Optional[Iterable[str]] = None,
) -> Optional[dict]:
    """
    Team totals from each member's best result per activity.

    - team: object with `id` and `name`
    - member_bests: user_id -> {activity_id: ScoredResult | None}
    - names: optional user_id -> display name

    The team total is the sum of the per-activity team scores, restricted to
    `counted_ids` when given. Returns None when no member has a result for
    any of the activities.
    """
    names = names or {}
    member_ids = list(member_ids)
    if counted_ids is not None:
        counted_ids = set(counted_ids)

    workout_scores = {}
    total = 0
    latest = None

    for aid in activity_ids:
        contributions = []
        for uid in member_ids:
            best = (member_bests.get(uid) or {}).get(aid)
            if best is None:
                continue
            contributions.append(best)

        if not contributions:
            continue

        contributions.sort(key=lambda r: -r.score)
        team_score = aggregate((r.score for r in contributions), method)

        members = [
            {
                "user_id": r.user_id,
                "name": names.get(r.user_id, ""),
                "score": r.score,
            }
            for r in contributions
        ]
        shown, more = member_display(members, display_limit)

        workout_scores[aid] = {
            "score": team_score,
            # averages are for display only
            "raw_value": sum(r.raw_value for r in contributions) / len(contributions),
            "reps": sum((r.reps or 1) for r in contributions) / len(contributions),
            "rank": 0,
            "members": members,
            "shown": shown,
            "more": more,
        }
        if counted_ids is None or aid in counted_ids:
            total += team_score

        for r in contributions:
            if r.submitted_at and (latest is None or r.submitted_at > latest):
                latest = r.submitted_at

    if not workout_scores:
        return None

    return {
        "team_id": team.id,
        "name": team.name,
        "total_score": total,
        "workout_scores": workout_scores,
        "reached_at": latest,
        "rank": 0,
    }
