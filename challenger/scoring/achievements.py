"""
Achievement catalog and evaluation.

Evaluation is recomputed from a user's full score history every time and
never stores earned state; callers decide what to persist or notify.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from .activities import ENDURANCE, NON_CANONICAL_ACTIVITY_IDS, STRENGTH, canonical_activity_ids
from .totals import average_of_bests, category_average

VERIFIED_SCORE_MIN = "VERIFIED_SCORE_MIN"
STRENGTH_AVERAGE = "STRENGTH_AVERAGE"
ENDURANCE_AVERAGE = "ENDURANCE_AVERAGE"
HYBRID_AVERAGE = "HYBRID_AVERAGE"

SCORE_THRESHOLD = "SCORE_THRESHOLD"
SPECIALIST = "SPECIALIST"
PARTICIPATION = "PARTICIPATION"

SPECIALIST_THRESHOLD = 500


@dataclass(frozen=True)
class Achievement:
    id: str
    name: str
    description: str
    category: str
    requirement_type: str
    threshold: int
    image: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "image": self.image,
            "requirement": {"type": self.requirement_type, "threshold": self.threshold},
        }


@dataclass(frozen=True)
class AchievementResult:
    achievement: Achievement
    earned: bool
    score: float

    def to_dict(self) -> dict:
        return {
            "achievement": self.achievement.to_dict(),
            "earned": self.earned,
            "score": self.score,
        }


COMPETITOR_ACHIEVEMENT = Achievement(
    id="competitor",
    name="Competitor",
    description="Participated in and achieved verified scores from events",
    category=PARTICIPATION,
    requirement_type=VERIFIED_SCORE_MIN,
    threshold=1,
    image="/achievement-images/competitor.png",
)

SCORE_THRESHOLD_ACHIEVEMENTS = tuple(
    Achievement(
        id=f"score_{t}",
        name=f"{t}+ Club",
        description=f"Achieved a verified score of {t} or higher on any individual event",
        category=SCORE_THRESHOLD,
        requirement_type=VERIFIED_SCORE_MIN,
        threshold=t,
        image=f"/achievement-images/{t}.png",
    )
    for t in range(100, 1000, 100)
)

SPECIALIST_ACHIEVEMENTS = (
    Achievement(
        id="strength_specialist",
        name="Strength Specialist",
        description="Achieved an average verified score of 500+ across all strength events "
                    "(Back Squat, Bench Press, Deadlift)",
        category=SPECIALIST,
        requirement_type=STRENGTH_AVERAGE,
        threshold=SPECIALIST_THRESHOLD,
        image="/achievement-images/strength_spec.png",
    ),
    Achievement(
        id="endurance_specialist",
        name="Endurance Specialist",
        description="Achieved an average verified score of 500+ across all endurance events",
        category=SPECIALIST,
        requirement_type=ENDURANCE_AVERAGE,
        threshold=SPECIALIST_THRESHOLD,
        image="/achievement-images/endurance_spec.png",
    ),
    Achievement(
        id="hybrid_specialist",
        name="Hybrid Specialist",
        description="Achieved an average verified score of 500+ across all canonical events",
        category=SPECIALIST,
        requirement_type=HYBRID_AVERAGE,
        threshold=SPECIALIST_THRESHOLD,
        image="/achievement-images/hybrid_spec.png",
    ),
)

ALL_ACHIEVEMENTS = (COMPETITOR_ACHIEVEMENT,) + SCORE_THRESHOLD_ACHIEVEMENTS + SPECIALIST_ACHIEVEMENTS


def get_achievement(achievement_id: str) -> Optional[Achievement]:
    for a in ALL_ACHIEVEMENTS:
        if a.id == achievement_id:
            return a
    return None


def highest_verified_score(results: Iterable, excluded: Iterable[str] = NON_CANONICAL_ACTIVITY_IDS) -> float:
    """Best single verified score on any canonical activity (0 when there is none)."""
    canonical = set(canonical_activity_ids(excluded))
    scores = [r.score for r in results if r.verified and r.activity_id in canonical]
    return max(scores) if scores else 0


def evaluate_achievements(
    results: Iterable,
    excluded: Iterable[str] = NON_CANONICAL_ACTIVITY_IDS,
) -> list[AchievementResult]:
    """
    Evaluate every achievement against one user's scored history.

    Thresholds are inclusive. Averages zero-fill missing activities, so a
    specialist badge needs strong results on every activity in the group.
    """
    results = list(results)
    excluded = frozenset(excluded)

    highest = highest_verified_score(results, excluded)
    by_type = {
        STRENGTH_AVERAGE: category_average(results, STRENGTH, excluded),
        ENDURANCE_AVERAGE: category_average(results, ENDURANCE, excluded),
        HYBRID_AVERAGE: average_of_bests(results, canonical_activity_ids(excluded), verified_only=True),
    }

    out = []
    for achievement in ALL_ACHIEVEMENTS:
        if achievement.requirement_type == VERIFIED_SCORE_MIN:
            score = highest
        else:
            score = by_type[achievement.requirement_type]
        out.append(AchievementResult(achievement, score >= achievement.threshold, score))

    return out


def highest_score_achievement(evaluated: Iterable[AchievementResult]) -> Optional[AchievementResult]:
    """The top earned "N+ Club" badge, if any."""
    earned = [
        r for r in evaluated
        if r.earned and r.achievement.category == SCORE_THRESHOLD
    ]
    if not earned:
        return None
    return max(earned, key=lambda r: r.achievement.threshold)


def specialist_achievements(evaluated: Iterable[AchievementResult]) -> list[AchievementResult]:
    return [r for r in evaluated if r.earned and r.achievement.category == SPECIALIST]


def newly_earned(before: Iterable[AchievementResult], after: Iterable[AchievementResult]) -> list[Achievement]:
    """Achievements earned in `after` that were not earned in `before`."""
    had = {r.achievement.id for r in before if r.earned}
    return [r.achievement for r in after if r.earned and r.achievement.id not in had]
