from datetime import date, datetime
from typing import Optional

from flask import current_app

from challenger.models import Event, EventParticipant, ScoreRecord, Team, TeamMembership, UserProfile
from challenger.helpers.leaderboard_cache import get_cached_leaderboard, set_cached_leaderboard
from challenger.scoring import (
    ProfileSnapshot,
    ScoreSnapshot,
    build_event_leaderboard,
    canonical_activities,
    compute_user_totals,
    ingest,
)
from challenger.scoring.calculator import is_scoreable


def get_calculator():
    return current_app.extensions["score_calculator"]


def non_canonical_activities() -> frozenset:
    return frozenset(current_app.config.get("NON_CANONICAL_ACTIVITIES") or ())


def jsonable(value):
    """Recursively convert datetimes so engine output can go through jsonify."""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [jsonable(v) for v in value]
    return value


def load_user_results(user: UserProfile, today: Optional[date] = None):
    """
    Score every record a user has ever submitted (personal + event).

    Returns (results, unscoreable) straight from the engine.
    """
    rows = (
        ScoreRecord.query
        .filter_by(user_id=user.id)
        .order_by(ScoreRecord.submitted_at.asc(), ScoreRecord.id.asc())
        .all()
    )
    records = [ScoreSnapshot.from_row(r) for r in rows]
    profiles = {user.id: ProfileSnapshot.from_row(user)}
    return ingest(records, profiles, get_calculator(), today)


def user_totals(user: UserProfile, results) -> dict:
    canonical = canonical_activities(non_canonical_activities())
    return compute_user_totals(user.id, results, canonical).to_dict()


def event_team_attribution(event: Event, user_ids) -> tuple:
    """
    Resolve (team_of, teams) for an event.

    The participation row's team wins. A participant without one falls back
    to their team membership, but only when they belong to exactly one team.
    """
    participations = EventParticipant.query.filter_by(event_id=event.id).all()
    team_of = {p.user_id: p.team_id for p in participations if p.team_id is not None}

    missing = [uid for uid in user_ids if uid not in team_of]
    if missing:
        memberships = TeamMembership.query.filter(TeamMembership.user_id.in_(missing)).all()
        by_user = {}
        for m in memberships:
            by_user.setdefault(m.user_id, []).append(m.team_id)
        for uid, team_ids in by_user.items():
            if len(team_ids) == 1:
                team_of[uid] = team_ids[0]

    team_ids = sorted(set(team_of.values()))
    teams = Team.query.filter(Team.id.in_(team_ids)).all() if team_ids else []
    return team_of, teams


def build_leaderboard(event_id: int, today: Optional[date] = None) -> Optional[dict]:
    """
    Build (or return the cached) leaderboard for one event.

    Participants are everyone with a participation row plus anyone who has
    submitted a result in the event. Results from users with incomplete
    profiles are skipped and reported in "unscoreable".
    """
    cached = get_cached_leaderboard(event_id)
    if cached is not None:
        return cached

    event = Event.query.get(event_id)
    if not event:
        return None

    rows = ScoreRecord.query.filter_by(event_id=event.id).all()

    participant_ids = {p.user_id for p in EventParticipant.query.filter_by(event_id=event.id).all()}
    participant_ids.update(r.user_id for r in rows)

    users = (
        UserProfile.query.filter(UserProfile.id.in_(participant_ids)).all()
        if participant_ids else []
    )
    profiles = {u.id: ProfileSnapshot.from_row(u) for u in users}

    records = [ScoreSnapshot.from_row(r) for r in rows]
    results, unscoreable = ingest(records, profiles, get_calculator(), today)

    # incomplete profiles never rank, with or without results
    unscoreable_ids = {r.user_id for r in unscoreable}
    unscoreable_ids.update(uid for uid, p in profiles.items() if not is_scoreable(p))

    team_of, teams = ({}, [])
    if event.is_team_event:
        team_of, teams = event_team_attribution(event, participant_ids)

    data = build_event_leaderboard(
        event,
        sorted(profiles.values(), key=lambda p: p.id),
        results,
        teams=teams,
        team_of=team_of,
        canonical_excluded=non_canonical_activities(),
        display_limit=current_app.config.get("TEAM_MEMBER_DISPLAY_LIMIT", 3),
        unscoreable_ids=unscoreable_ids,
    )
    data["event_name"] = event.name
    data["status"] = event.status
    data["unscoreable"] = sorted(unscoreable_ids)

    data = jsonable(data)
    set_cached_leaderboard(event_id, data)
    return data
