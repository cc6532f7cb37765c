"""
Ranking shared by every leaderboard view.

Equal scores share a rank and the next distinct score resumes at
previous rank + number tied (50, 50, 30 -> 1, 1, 3). Within a tie, rows
are listed by earliest `reached_at`, then name, then id, so identical input
always renders identically.
"""

from datetime import datetime
from typing import Callable, Iterable

from .teams import SUM, compute_team_totals, DEFAULT_MEMBER_DISPLAY_LIMIT

ID_FIELDS = ("user_id", "team_id", "name", "team_name")

# scores equal to this many decimals are ties (float sums drift)
SCORE_PRECISION = 6


def _total_score(row: dict) -> float:
    return row["total_score"]


def _comparable(row: dict, score: Callable) -> float:
    return round(score(row), SCORE_PRECISION)


def _order_key(row: dict, score: Callable) -> tuple:
    reached = row.get("reached_at")
    entity_id = row.get("user_id", row.get("team_id", ""))
    return (
        -_comparable(row, score),
        reached is None,
        reached or datetime.min,
        str(row.get("name") or ""),
        str(entity_id),
    )


def assign_ranks(rows: Iterable[dict], score: Callable = _total_score) -> list[dict]:
    """Return copies of `rows` sorted best first, each with a 1-based "rank"."""
    rows = [dict(r) for r in rows]
    rows.sort(key=lambda r: _order_key(r, score))

    rank = 0
    prev = None
    for position, row in enumerate(rows, start=1):
        current = _comparable(row, score)
        if current != prev:
            rank = position
        prev = current
        row["rank"] = rank

    return rows


def compute_leaderboard(entries: Iterable[dict], scope: str = "overall") -> list[dict]:
    """
    Rank leaderboard entries (individual or team).

    scope "overall" ranks `total_score`; any other scope is an activity id,
    ranking only entries with a result for it by that result's score.
    """
    if scope == "overall":
        return assign_ranks(entries)

    rows = []
    for entry in entries:
        workout = (entry.get("workout_scores") or {}).get(scope)
        if not workout:
            continue
        row = {k: entry[k] for k in ID_FIELDS if k in entry}
        row.update(
            {
                "activity_id": scope,
                "score": workout["score"],
                "raw_value": workout.get("raw_value"),
                "reps": workout.get("reps"),
                "reached_at": workout.get("submitted_at", entry.get("reached_at")),
            }
        )
        if "members" in workout:
            row["members"] = workout["members"]
            row["shown"] = workout["shown"]
            row["more"] = workout["more"]
        rows.append(row)

    return assign_ranks(rows, score=lambda r: r["score"])


def compute_team_leaderboard(
    teams: Iterable,
    member_bests: dict,
    method: str = SUM,
    activity_ids: Iterable[str] = (),
    names: dict = None,
    display_limit: int = DEFAULT_MEMBER_DISPLAY_LIMIT,
    counted_ids: Iterable[str] = None,
) -> list[dict]:
    """
    Overall team standings.

    - teams: objects with `id`, `name` and `member_ids`
    - member_bests: user_id -> {activity_id: ScoredResult | None}

    Teams without a single scored member are left off the board.
    """
    activity_ids = list(activity_ids)
    entries = []
    for team in teams:
        entry = compute_team_totals(
            team,
            team.member_ids,
            member_bests,
            activity_ids,
            method,
            names=names,
            display_limit=display_limit,
            counted_ids=counted_ids,
        )
        if entry is not None:
            entries.append(entry)

    return compute_leaderboard(entries, "overall")
