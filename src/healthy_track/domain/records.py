"""Domain models for health records."""

from dataclasses import dataclass, fields
from datetime import datetime

FOOD_TYPES = (
    "balanced",
    "vegetarian",
    "vegan",
    "low-carb",
    "high-protein",
    "junk-food",
)

SCALE_MIN = 1
SCALE_MAX = 100


@dataclass(frozen=True)
class RecordInput:
    """Values of one logged day, before the store assigns an id."""

    date: str
    weight: float
    sleep: float
    sport: float | None
    water: float | None
    food_type: str
    energy: int
    mood: int
    stress: int


@dataclass(frozen=True)
class HealthRecord:
    """One persisted daily log entry."""

    id: str
    date: str
    weight: float
    sleep: float
    sport: float | None
    water: float | None
    food_type: str
    energy: int
    mood: int
    stress: int
    user_id: str | None = None
    created_at: datetime | None = None

    @classmethod
    def from_input(
        cls,
        record_id: str,
        values: RecordInput,
        user_id: str | None = None,
        created_at: datetime | None = None,
    ) -> "HealthRecord":
        """Build a stored record from validated input."""
        return cls(
            id=record_id,
            user_id=user_id,
            created_at=created_at,
            **{field.name: getattr(values, field.name) for field in fields(RecordInput)},
        )

    def to_input(self) -> RecordInput:
        """Return the editable values of this record."""
        return RecordInput(
            **{field.name: getattr(self, field.name) for field in fields(RecordInput)}
        )
