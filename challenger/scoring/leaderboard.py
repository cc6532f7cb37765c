"""
Event leaderboard assembly: individual entries, per-activity boards and,
for team events, the team views. Pure; the caller supplies snapshots.
"""

from typing import Iterable, Mapping, Optional

from .activities import ACTIVITIES, NON_CANONICAL_ACTIVITY_IDS, get_activity
from .ranking import compute_leaderboard, compute_team_leaderboard
from .teams import DEFAULT_MEMBER_DISPLAY_LIMIT, SUM, TeamSnapshot
from .totals import best_by_activity

NOT_SET = "Not set"


def _activity_name(activity_id: str) -> str:
    activity = get_activity(activity_id)
    return activity.name if activity else activity_id


def build_leaderboard_entries(
    participants: Iterable,
    results: Iterable,
    activity_ids: Iterable[str],
    canonical_ids: Iterable[str],
    team_of: Optional[Mapping] = None,
    team_names: Optional[Mapping] = None,
    unscoreable_ids: Iterable = (),
) -> list[dict]:
    """
    One unranked entry per participant.

    total_score is the sum of the participant's best score on each canonical
    activity; workout_scores also covers non-canonical activities. Users in
    `unscoreable_ids` get scoreable False and total_score "Not set".
    """
    team_of = team_of or {}
    unscoreable_ids = set(unscoreable_ids)
    team_names = team_names or {}
    activity_ids = list(activity_ids)
    canonical_ids = set(canonical_ids)

    by_user = {}
    for r in results:
        by_user.setdefault(r.user_id, []).append(r)

    entries = []
    for p in participants:
        bests = best_by_activity(by_user.get(p.id, []), activity_ids)

        workout_scores = {}
        total = 0
        reached_at = None
        for aid, r in bests.items():
            if r is None:
                continue
            workout_scores[aid] = {
                "score": r.score,
                "raw_value": r.raw_value,
                "reps": r.reps,
                "percentile": r.percentile,
                "degraded": r.degraded,
                "submitted_at": r.submitted_at,
                "rank": 0,
            }
            if aid in canonical_ids:
                total += r.score
                if r.submitted_at and (reached_at is None or r.submitted_at > reached_at):
                    reached_at = r.submitted_at

        scoreable = p.id not in unscoreable_ids
        team_id = team_of.get(p.id)
        entries.append(
            {
                "user_id": p.id,
                "name": getattr(p, "name", "") or "",
                "total_score": total if scoreable else NOT_SET,
                "scoreable": scoreable,
                "workout_scores": workout_scores,
                "reached_at": reached_at,
                "team_id": team_id,
                "team_name": team_names.get(team_id) if team_id is not None else None,
                "rank": 0,
            }
        )

    return entries


def _workout_boards(entries: list[dict], activity_ids: Iterable[str]) -> list[dict]:
    """Per-activity boards; writes each activity rank back into the entries."""
    by_key = {(e.get("user_id"), e.get("team_id")): e for e in entries}

    boards = []
    for aid in activity_ids:
        rows = compute_leaderboard(entries, aid)
        for row in rows:
            entry = by_key.get((row.get("user_id"), row.get("team_id")))
            if entry is not None:
                entry["workout_scores"][aid]["rank"] = row["rank"]
        boards.append(
            {
                "activity_id": aid,
                "activity_name": _activity_name(aid),
                "entries": rows,
            }
        )
    return boards


def build_event_leaderboard(
    event,
    participants: Iterable,
    results: Iterable,
    teams: Iterable = (),
    team_of: Optional[Mapping] = None,
    canonical_excluded: Iterable[str] = NON_CANONICAL_ACTIVITY_IDS,
    display_limit: int = DEFAULT_MEMBER_DISPLAY_LIMIT,
    unscoreable_ids: Iterable = (),
) -> dict:
    """
    Full leaderboard for one event.

    - event: object with `id`, `is_team_event`, `team_scoring_method`
    - participants: objects with `id` and `name`
    - results: ScoredResults for this event
    - teams: objects with `id` and `name`
    - team_of: user_id -> team_id for this event (at most one team each)
    - unscoreable_ids: users whose profile can't be scored; they are listed
      after the ranked rows with rank None

    Per-activity boards cover every catalog activity with at least one
    result; overall totals only count canonical activities.
    """
    results = list(results)
    participants = list(participants)
    team_of = team_of or {}
    canonical_excluded = frozenset(canonical_excluded)

    # participants who only show up through their results still get a row
    known = {p.id for p in participants}
    for r in results:
        if r.user_id not in known:
            known.add(r.user_id)
            participants.append(_Anonymous(r.user_id))

    present = {r.activity_id for r in results}
    activity_ids = [a.id for a in ACTIVITIES if a.id in present]
    canonical_ids = [a.id for a in ACTIVITIES if a.id not in canonical_excluded]

    teams = list(teams)
    team_names = {t.id: t.name for t in teams}

    entries = build_leaderboard_entries(
        participants, results, activity_ids, canonical_ids, team_of, team_names, unscoreable_ids
    )
    workouts = _workout_boards(entries, activity_ids)

    unranked = sorted(
        (e for e in entries if not e["scoreable"]),
        key=lambda e: (e["name"], str(e["user_id"])),
    )
    for e in unranked:
        e["rank"] = None
    overall = compute_leaderboard([e for e in entries if e["scoreable"]], "overall") + unranked

    method = getattr(event, "team_scoring_method", None) or SUM
    data = {
        "event_id": event.id,
        "is_team_event": bool(event.is_team_event),
        "team_scoring_method": method if event.is_team_event else None,
        "overall": overall,
        "workouts": workouts,
        "team_overall": None,
        "team_workouts": None,
    }

    if not event.is_team_event:
        return data

    members = {}
    for uid, tid in team_of.items():
        members.setdefault(tid, []).append(uid)

    team_snapshots = [
        TeamSnapshot(t.id, t.name, tuple(members.get(t.id, ()))) for t in teams
    ]

    member_bests = {}
    names = {}
    by_user = {}
    for r in results:
        by_user.setdefault(r.user_id, []).append(r)
    for p in participants:
        names[p.id] = getattr(p, "name", "") or ""
        member_bests[p.id] = best_by_activity(by_user.get(p.id, []), activity_ids)

    # team totals count the canonical activities, same as individual totals
    team_entries = compute_team_leaderboard(
        team_snapshots,
        member_bests,
        method,
        activity_ids,
        names=names,
        display_limit=display_limit,
        counted_ids=canonical_ids,
    )
    data["team_workouts"] = _workout_boards(team_entries, activity_ids)
    data["team_overall"] = compute_leaderboard(team_entries, "overall")
    return data


class _Anonymous:
    def __init__(self, user_id):
        self.id = user_id
        self.name = "Unknown User"
