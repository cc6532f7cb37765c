"""
Stand-in scoring provider for local development.

The real percentile tables live in an external package; point
SCORING_PROVIDER at its factory in production. This one scores like the
"custom" scoring systems: weight and distance score as their raw value,
time scores as 1000 / seconds (faster is better), percentile is always 50.
"""

from .activities import ACTIVITIES, TIME


class ProviderTable(dict):
    """activity id -> scoring function, plus the optional pace_to_watts utility."""

    @staticmethod
    def pace_to_watts(pace: float) -> float:
        return 2.8 / (pace / 500) ** 3


def _value_score(value, sex, age, bodyweight):
    return {"score": value, "percentile": 50}


def _inverse_time_score(value, sex, age, bodyweight):
    return {"score": 1000 / value, "percentile": 50}


def raw_value_provider() -> ProviderTable:
    table = ProviderTable()
    for activity in ACTIVITIES:
        table[activity.id] = _inverse_time_score if activity.input_type == TIME else _value_score
    return table
