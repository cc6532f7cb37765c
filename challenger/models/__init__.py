from .user_profile import UserProfile
from .score import ScoreRecord
from .event import Event, EventParticipant
from .team import Team, TeamMembership

__all__ = [
    "UserProfile",
    "ScoreRecord",
    "Event",
    "EventParticipant",
    "Team",
    "TeamMembership",
]
