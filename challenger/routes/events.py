from flask import Blueprint, request, session, jsonify, current_app

from challenger.extensions import db
from challenger.models import Event, EventParticipant, Team, TeamMembership, UserProfile
from challenger.helpers.leaderboard import build_leaderboard
from challenger.helpers.leaderboard_cache import invalidate_leaderboard_cache
from challenger.scoring import get_activity

events_bp = Blueprint("events", __name__)


def event_payload(event: Event) -> dict:
    return {
        "id": event.id,
        "name": event.name,
        "code": event.code,
        "status": event.status,
        "is_team_event": bool(event.is_team_event),
        "team_scoring_method": event.team_scoring_method if event.is_team_event else None,
        "participant_count": len(event.participants),
        "created_at": event.created_at.isoformat() if event.created_at else None,
    }


@events_bp.route("/api/events/<int:event_id>")
def api_event(event_id):
    event = Event.query.get_or_404(event_id)
    return jsonify(event_payload(event))


@events_bp.route("/api/events/<int:event_id>/join", methods=["POST"])
def api_join_event(event_id):
    """
    Register a competitor for an event.

    Payload: {"user_id": 12, "team_id": 4}. team_id is only accepted on team
    events, and only for a team the user is a member of. Joining again just
    updates the team.
    """
    data = request.get_json(force=True, silent=True) or {}

    try:
        user_id = int(data.get("user_id", 0))
    except (TypeError, ValueError):
        return "Invalid user_id", 400

    if session.get("user_id") != user_id and not session.get("admin_ok"):
        return "Not allowed", 403

    event = Event.query.get_or_404(event_id)
    user = UserProfile.query.get_or_404(user_id)

    if event.status in ("COMPLETED", "CANCELLED"):
        return "Event closed", 403

    team_id = data.get("team_id")
    if team_id is not None:
        if not event.is_team_event:
            return "Not a team event", 400
        try:
            team_id = int(team_id)
        except (TypeError, ValueError):
            return "Invalid team_id", 400
        if not Team.query.get(team_id):
            return "Unknown team_id", 400
        if not TeamMembership.query.filter_by(team_id=team_id, user_id=user.id).first():
            return "User is not on that team", 400

    participation = EventParticipant.query.filter_by(event_id=event.id, user_id=user.id).first()
    if participation:
        participation.team_id = team_id
    else:
        participation = EventParticipant(event_id=event.id, user_id=user.id, team_id=team_id)
        db.session.add(participation)

    db.session.commit()
    invalidate_leaderboard_cache()

    current_app.logger.info("User %s joined event %s (team %s)", user.id, event.id, team_id)

    return jsonify({"ok": True, "event_id": event.id, "user_id": user.id, "team_id": team_id})


@events_bp.route("/api/events/<int:event_id>/leaderboard")
def api_event_leaderboard(event_id):
    """
    JSON leaderboard for one event.

    Query params:
    - scope: "overall" (default) or an activity id for a single board
    - view: "individual" (default) or "team" (team events only)
    """
    scope = (request.args.get("scope") or "overall").strip()
    view = (request.args.get("view") or "individual").strip()

    if scope != "overall" and not get_activity(scope):
        return "Unknown scope", 400
    if view not in ("individual", "team"):
        return "Unknown view", 400

    data = build_leaderboard(event_id)
    if data is None:
        return "Event not found", 404

    if view == "team" and not data["is_team_event"]:
        return "Not a team event", 400

    if scope == "overall" and view == "individual":
        return jsonify(data)

    if scope == "overall":
        rows = data["team_overall"]
    else:
        boards = data["team_workouts"] if view == "team" else data["workouts"]
        board = next((b for b in boards if b["activity_id"] == scope), None)
        rows = board["entries"] if board else []

    return jsonify(
        {
            "event_id": data["event_id"],
            "event_name": data["event_name"],
            "scope": scope,
            "view": view,
            "rows": rows,
        }
    )
