from types import SimpleNamespace

from flask import Blueprint, request, jsonify, current_app

from challenger.helpers.leaderboard import get_calculator, non_canonical_activities
from challenger.helpers.scoring import parse_raw_value, parse_reps
from challenger.helpers.time import parse_timestamp
from challenger.scoring import ACTIVITIES, UnknownActivityError, get_activity, format_raw_value, normalize_raw_value


api_bp = Blueprint("api", __name__)

@api_bp.route("/api/activities")
def api_activities():
    """Activity catalog, flagged with whether each counts toward overall totals."""
    excluded = non_canonical_activities()
    out = []
    for a in ACTIVITIES:
        row = a.to_dict()
        row["canonical"] = a.id not in excluded
        out.append(row)
    return jsonify(out)


@api_bp.route("/api/calculate-score", methods=["POST"])
def api_calculate_score():
    """
    Preview a score without storing anything.

    Payload:
      {
        "activity_id": "squat",
        "value": 140,            # or "1:32.4" for timed activities
        "reps": 3,
        "sex": "M",
        "date_of_birth": "1990-04-02",
        "bodyweight": 82.5
      }
    """
    data = request.get_json(force=True, silent=True) or {}

    activity = get_activity(data.get("activity_id"))
    if not activity:
        return "Unknown activity_id", 400

    try:
        value = parse_raw_value(activity, data.get("value"))
        reps = parse_reps(activity, data.get("reps"))
    except ValueError as e:
        return str(e), 400

    try:
        dob = parse_timestamp(data.get("date_of_birth"))
        bodyweight = float(data["bodyweight"]) if data.get("bodyweight") is not None else None
    except (TypeError, ValueError):
        return "Invalid date_of_birth or bodyweight", 400

    profile = SimpleNamespace(
        sex=data.get("sex"),
        date_of_birth=dob.date() if dob else None,
        bodyweight=bodyweight,
    )
    record = SimpleNamespace(activity_id=activity.id, raw_value=value, reps=reps)

    try:
        calculated = get_calculator().score_record(record, profile)
    except UnknownActivityError:
        current_app.logger.error("No scoring function configured for %s", activity.id)
        return "Activity cannot be scored", 400

    if calculated is None:
        return "sex, date_of_birth and bodyweight are required", 400

    return jsonify(
        {
            "activity": {"id": activity.id, "name": activity.name, "category": activity.category},
            "normalized_value": normalize_raw_value(activity.id, value, reps),
            "formatted": format_raw_value(activity.id, value, reps),
            **calculated.to_dict(),
        }
    )


@api_bp.route("/api/pace-to-watts")
def api_pace_to_watts():
    """Rowing split (seconds per 500m, or "m:ss.f") -> watts."""
    raw = (request.args.get("pace") or "").strip()
    rowing = get_activity("rowing_500m")
    try:
        pace = parse_raw_value(rowing, raw)
    except ValueError:
        return "Invalid pace", 400

    watts = get_calculator().pace_to_watts(pace)
    return jsonify({"pace": pace, "watts": round(watts, 1)})
