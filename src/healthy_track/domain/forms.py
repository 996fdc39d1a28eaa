"""Domain models for the record draft."""

from dataclasses import dataclass
from datetime import date
from enum import StrEnum

DEFAULT_FOOD_TYPE = "balanced"
DEFAULT_SCALE_VALUE = 50


class FormField(StrEnum):
    """Fields a user can edit on the draft."""

    DATE = "date"
    WEIGHT = "weight"
    SLEEP = "sleep"
    SPORT = "sport"
    WATER = "water"
    FOOD_TYPE = "food_type"
    ENERGY = "energy"
    MOOD = "mood"
    STRESS = "stress"


DECIMAL_FIELDS = frozenset(
    {FormField.WEIGHT, FormField.SLEEP, FormField.SPORT, FormField.WATER}
)
SCALE_FIELDS = frozenset({FormField.ENERGY, FormField.MOOD, FormField.STRESS})
REQUIRED_FIELDS = (FormField.DATE, FormField.WEIGHT, FormField.SLEEP)


@dataclass(frozen=True)
class FormState:
    """The record a user is composing or editing.

    Numeric fields hold ``None`` while the input is empty.
    """

    date: str
    weight: float | None = None
    sleep: float | None = None
    sport: float | None = None
    water: float | None = None
    food_type: str = DEFAULT_FOOD_TYPE
    energy: int | None = DEFAULT_SCALE_VALUE
    mood: int | None = DEFAULT_SCALE_VALUE
    stress: int | None = DEFAULT_SCALE_VALUE
    editing_id: str | None = None

    @classmethod
    def default(cls, today: date) -> "FormState":
        """Return the blank draft for a given day."""
        return cls(date=today.isoformat())
