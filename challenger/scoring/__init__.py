"""
Score aggregation and leaderboard ranking.

Everything in this package is pure: callers pass immutable snapshots in and
get plain data back. The external scoring provider is injected through
ScoreCalculator.
"""

from .activities import (
    ACTIVITIES,
    ACTIVITIES_BY_ID,
    NON_CANONICAL_ACTIVITY_IDS,
    ActivityDefinition,
    canonical_activities,
    canonical_activity_ids,
    get_activity,
)
from .achievements import ALL_ACHIEVEMENTS, AchievementResult, evaluate_achievements
from .calculator import CalculatedScore, ScoreCalculator, pace_to_watts
from .errors import ScoringError, UnknownActivityError
from .leaderboard import build_event_leaderboard
from .normalize import format_raw_value, format_time, normalize_raw_value, parse_time
from .ranking import assign_ranks, compute_leaderboard, compute_team_leaderboard
from .teams import AVERAGE, BEST, SUM, TEAM_SCORING_METHODS, TeamSnapshot
from .totals import (
    ProfileSnapshot,
    ScoredResult,
    ScoreSnapshot,
    UserTotals,
    compute_user_totals,
    ingest,
    is_effectively_verified,
)

__all__ = [
    "ACTIVITIES",
    "ACTIVITIES_BY_ID",
    "NON_CANONICAL_ACTIVITY_IDS",
    "ActivityDefinition",
    "canonical_activities",
    "canonical_activity_ids",
    "get_activity",
    "ALL_ACHIEVEMENTS",
    "AchievementResult",
    "evaluate_achievements",
    "CalculatedScore",
    "ScoreCalculator",
    "pace_to_watts",
    "ScoringError",
    "UnknownActivityError",
    "build_event_leaderboard",
    "format_raw_value",
    "format_time",
    "normalize_raw_value",
    "parse_time",
    "assign_ranks",
    "compute_leaderboard",
    "compute_team_leaderboard",
    "AVERAGE",
    "BEST",
    "SUM",
    "TEAM_SCORING_METHODS",
    "TeamSnapshot",
    "ProfileSnapshot",
    "ScoredResult",
    "ScoreSnapshot",
    "UserTotals",
    "compute_user_totals",
    "ingest",
    "is_effectively_verified",
]
