from flask import (
    Blueprint,
    request,
    session,
    jsonify,
    current_app,
)

from challenger.extensions import db
from challenger.models import Event, EventParticipant, ScoreRecord, UserProfile
from challenger.helpers.email import send_achievements_via_email
from challenger.helpers.leaderboard import jsonable, load_user_results, non_canonical_activities, user_totals
from challenger.helpers.leaderboard_cache import invalidate_leaderboard_cache
from challenger.helpers.scoring import parse_raw_value, parse_reps
from challenger.scoring import evaluate_achievements, format_raw_value, get_activity
from challenger.scoring.achievements import highest_score_achievement, newly_earned, specialist_achievements
from challenger.scoring.leaderboard import NOT_SET
from challenger.scoring.normalize import round_half_up

scores_bp = Blueprint("scores", __name__)


def _viewer_can_edit(user_id: int) -> bool:
    """Competitor themself or an admin (session is populated by the identity provider)."""
    return session.get("user_id") == user_id or bool(session.get("admin_ok"))


def evaluate_for(user: UserProfile):
    results, _ = load_user_results(user)
    return evaluate_achievements(results, non_canonical_activities())


def notify_new_achievements(user: UserProfile, before) -> list:
    """
    Re-evaluate after a change and email anything newly unlocked.

    Earned state is never stored; `before` is the evaluation taken just
    ahead of the change.
    """
    after = evaluate_for(user)
    unlocked = newly_earned(before, after)
    if unlocked:
        current_app.logger.info(
            "User %s unlocked %s", user.id, ", ".join(a.id for a in unlocked)
        )
        send_achievements_via_email(user.email, user.name, unlocked)
    return unlocked


def score_payload(record, result=None) -> dict:
    return {
        "id": record.id,
        "user_id": record.user_id,
        "activity_id": record.activity_id,
        "raw_value": record.raw_value,
        "reps": record.reps,
        "event_id": record.event_id,
        "verified": record.verified,
        "effectively_verified": bool(record.verified) or record.event_id is not None,
        "notes": record.notes,
        "submitted_at": record.submitted_at.isoformat() if record.submitted_at else None,
        "formatted": format_raw_value(record.activity_id, record.raw_value, record.reps),
        "score": result.score if result else None,
        "percentile": result.percentile if result else None,
        "degraded": result.degraded if result else False,
        "display_score": round_half_up(result.score) if result else NOT_SET,
    }


@scores_bp.route("/api/scores", methods=["POST"])
def api_submit_score():
    """
    Store a new result.

    Payload:
      {
        "user_id": 12,
        "activity_id": "rowing_500m",
        "raw_value": "1:32.4",     # seconds, or m:ss.f for timed activities
        "reps": null,
        "event_id": 3,             # optional
        "notes": "PB"
      }

    Results are never edited; a new attempt is a new record.
    """
    data = request.get_json(force=True, silent=True) or {}

    # ---- parse basics ----
    try:
        user_id = int(data.get("user_id", 0))
    except (TypeError, ValueError):
        return "Invalid user_id", 400

    if user_id <= 0:
        return "Invalid user_id", 400

    activity = get_activity(data.get("activity_id"))
    if not activity:
        return "Unknown activity_id", 400

    try:
        raw_value = parse_raw_value(activity, data.get("raw_value"))
        reps = parse_reps(activity, data.get("reps"))
    except ValueError as e:
        return str(e), 400

    event_id = None
    event_id_raw = data.get("event_id", None)
    if event_id_raw is not None:
        try:
            event_id = int(event_id_raw)
        except (TypeError, ValueError):
            return "Invalid event_id", 400

    # ---- Auth: competitor themself or admin ----
    if not _viewer_can_edit(user_id):
        return "Not allowed", 403

    user = UserProfile.query.get(user_id)
    if not user:
        return "User not found", 404

    # ---- event context ----
    if event_id is not None:
        event = Event.query.get(event_id)
        if not event:
            return "Unknown event_id", 400
        if event.status != "ACTIVE":
            return "Event not active, scoring locked", 403

        participation = EventParticipant.query.filter_by(event_id=event.id, user_id=user.id).first()
        if not participation:
            db.session.add(EventParticipant(event_id=event.id, user_id=user.id))

    before = evaluate_for(user)

    record = ScoreRecord(
        user_id=user.id,
        activity_id=activity.id,
        raw_value=raw_value,
        reps=reps,
        event_id=event_id,
        verified=False,
        notes=(data.get("notes") or None),
    )
    db.session.add(record)
    db.session.commit()
    invalidate_leaderboard_cache()

    results, _ = load_user_results(user)
    result = next((r for r in results if r.record_id == record.id), None)
    if result is None:
        current_app.logger.info("Score %s stored unscored: profile incomplete for user %s", record.id, user.id)

    unlocked = notify_new_achievements(user, before)

    return jsonify(
        {
            "ok": True,
            "score": score_payload(record, result),
            "new_achievements": [a.to_dict() for a in unlocked],
        }
    )


@scores_bp.route("/api/users/<int:user_id>/scores")
def api_user_scores(user_id):
    """
    Every result a user has submitted, newest first.

    Results that can't be scored yet (incomplete profile) come back with
    score null and display_score "Not set".
    """
    user = UserProfile.query.get_or_404(user_id)

    rows = (
        ScoreRecord.query
        .filter_by(user_id=user.id)
        .order_by(ScoreRecord.submitted_at.desc(), ScoreRecord.id.desc())
        .all()
    )
    results, _ = load_user_results(user)
    by_id = {r.record_id: r for r in results}

    return jsonify([score_payload(r, by_id.get(r.id)) for r in rows])


@scores_bp.route("/api/users/<int:user_id>/totals")
def api_user_totals(user_id):
    user = UserProfile.query.get_or_404(user_id)
    results, unscoreable = load_user_results(user)

    out = user_totals(user, results)
    out["scoreable"] = not unscoreable
    return jsonify(jsonable(out))


@scores_bp.route("/api/users/<int:user_id>/achievements")
def api_user_achievements(user_id):
    user = UserProfile.query.get_or_404(user_id)
    results, _ = load_user_results(user)

    evaluated = evaluate_achievements(results, non_canonical_activities())
    highest = highest_score_achievement(evaluated)

    return jsonify(
        {
            "user_id": user.id,
            "achievements": [r.to_dict() for r in evaluated],
            "highest_score_achievement": highest.to_dict() if highest else None,
            "specialist": [r.to_dict() for r in specialist_achievements(evaluated)],
        }
    )
