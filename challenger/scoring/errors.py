class ScoringError(Exception):
    """Base class for scoring engine failures."""


class UnknownActivityError(ScoringError, KeyError):
    """Scoring was requested for an activity id outside the closed catalog."""

    def __init__(self, activity_id):
        super().__init__(activity_id)
        self.activity_id = activity_id

    def __str__(self):
        return f"Unknown activity: {self.activity_id!r}"
