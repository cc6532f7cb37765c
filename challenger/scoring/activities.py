"""Static activity catalog and the canonical subset used for overall averaging."""

from dataclasses import dataclass
from typing import Iterable, Optional

STRENGTH = "STRENGTH"
ENDURANCE = "ENDURANCE"
CATEGORIES = (STRENGTH, ENDURANCE)

WEIGHT = "WEIGHT"
TIME = "TIME"
DISTANCE = "DISTANCE"


@dataclass(frozen=True)
class ActivityDefinition:
    id: str
    name: str
    category: str       # STRENGTH | ENDURANCE
    input_type: str     # WEIGHT | TIME | DISTANCE
    unit: str           # "kg", "seconds", "m"
    supports_reps: bool = False
    min_reps: Optional[int] = None
    max_reps: Optional[int] = None
    default_reps: Optional[int] = None
    description: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "input_type": self.input_type,
            "unit": self.unit,
            "supports_reps": self.supports_reps,
            "min_reps": self.min_reps,
            "max_reps": self.max_reps,
            "default_reps": self.default_reps,
            "description": self.description,
        }


def _lift(activity_id: str, name: str) -> ActivityDefinition:
    return ActivityDefinition(
        id=activity_id,
        name=name,
        category=STRENGTH,
        input_type=WEIGHT,
        unit="kg",
        supports_reps=True,
        min_reps=1,
        max_reps=10,
        default_reps=1,
        description=f"{name} with scoring based on bodyweight, age, and sex",
    )


ACTIVITIES = (
    _lift("squat", "Back Squat"),
    _lift("bench", "Bench Press"),
    _lift("deadlift", "Deadlift"),
    ActivityDefinition(
        id="rowing_500m",
        name="500m Row",
        category=ENDURANCE,
        input_type=TIME,
        unit="seconds",
        description="500m rowing with scoring based on time, age, and sex",
    ),
    ActivityDefinition(
        id="rowing_4min",
        name="4-Minute Row",
        category=ENDURANCE,
        input_type=DISTANCE,
        unit="m",
        description="4-minute rowing with scoring based on distance, age, and sex",
    ),
    ActivityDefinition(
        id="bike_4km",
        name="4km Bike",
        category=ENDURANCE,
        input_type=TIME,
        unit="seconds",
        description="4km bike with scoring based on time, age, and sex",
    ),
    ActivityDefinition(
        id="ski_500m",
        name="500m Ski",
        category=ENDURANCE,
        input_type=TIME,
        unit="seconds",
        description="500m ski with scoring based on time, age, and sex",
    ),
    ActivityDefinition(
        id="bike_500m",
        name="500m Bike",
        category=ENDURANCE,
        input_type=TIME,
        unit="seconds",
        description="500m bike with scoring based on time, age, and sex",
    ),
)

ACTIVITIES_BY_ID = {a.id: a for a in ACTIVITIES}

# Product decision: the 4-minute row is scored but not part of overall averages
NON_CANONICAL_ACTIVITY_IDS = frozenset({"rowing_4min"})


def get_activity(activity_id: Optional[str]) -> Optional[ActivityDefinition]:
    if not activity_id:
        return None
    return ACTIVITIES_BY_ID.get(activity_id)


def canonical_activities(
    excluded: Iterable[str] = NON_CANONICAL_ACTIVITY_IDS,
    category: Optional[str] = None,
) -> list[ActivityDefinition]:
    """
    Catalog activities that count toward overall averages, in catalog order.

    `category` narrows to STRENGTH or ENDURANCE.
    """
    excluded = frozenset(excluded)
    return [
        a
        for a in ACTIVITIES
        if a.id not in excluded and (category is None or a.category == category)
    ]


def canonical_activity_ids(
    excluded: Iterable[str] = NON_CANONICAL_ACTIVITY_IDS,
    category: Optional[str] = None,
) -> list[str]:
    return [a.id for a in canonical_activities(excluded, category)]
