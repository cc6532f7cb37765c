from functools import wraps

from flask import Blueprint, request, session, jsonify, current_app

from challenger.extensions import db
from challenger.models import ScoreRecord, UserProfile
from challenger.helpers.leaderboard import load_user_results
from challenger.helpers.leaderboard_cache import invalidate_leaderboard_cache
from challenger.routes.scores import evaluate_for, notify_new_achievements, score_payload

admin_bp = Blueprint("admin", __name__)


def admin_required(view):
    """
    Block the route unless the session carries admin_ok.

    The flag itself is set upstream by the identity provider integration.
    """
    @wraps(view)
    def wrapped(*args, **kwargs):
        if not session.get("admin_ok"):
            return "Admin only", 403
        return view(*args, **kwargs)
    return wrapped


@admin_bp.route("/api/admin/scores/<int:score_id>/verify", methods=["POST"])
@admin_required
def admin_verify_score(score_id):
    """
    Change a result's verification status.

    Payload: {"verified": true}. This is the only mutation a stored result
    ever sees.
    """
    data = request.get_json(force=True, silent=True) or {}
    if "verified" not in data or not isinstance(data["verified"], bool):
        return "verified (bool) required", 400

    record = ScoreRecord.query.get_or_404(score_id)
    user = UserProfile.query.get_or_404(record.user_id)

    before = evaluate_for(user)

    record.verified = data["verified"]
    db.session.commit()
    invalidate_leaderboard_cache()

    current_app.logger.info(
        "Score %s marked %s", record.id, "verified" if record.verified else "unverified"
    )

    unlocked = notify_new_achievements(user, before)

    results, _ = load_user_results(user)
    result = next((r for r in results if r.record_id == record.id), None)

    return jsonify(
        {
            "ok": True,
            "score": score_payload(record, result),
            "new_achievements": [a.to_dict() for a in unlocked],
        }
    )


@admin_bp.route("/api/admin/verification-queue")
@admin_required
def admin_verification_queue():
    """Personal (non-event) results still waiting on an admin."""
    rows = (
        ScoreRecord.query
        .filter(ScoreRecord.verified == False, ScoreRecord.event_id == None)
        .order_by(ScoreRecord.submitted_at.asc(), ScoreRecord.id.asc())
        .all()
    )
    return jsonify([score_payload(r) for r in rows])
