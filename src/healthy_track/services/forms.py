"""Draft state for the record form."""

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import date, datetime

from healthy_track.domain.errors import ValidationError
from healthy_track.domain.forms import (
    DECIMAL_FIELDS,
    REQUIRED_FIELDS,
    SCALE_FIELDS,
    FormField,
    FormState,
)
from healthy_track.domain.records import (
    FOOD_TYPES,
    SCALE_MAX,
    SCALE_MIN,
    HealthRecord,
    RecordInput,
)

logger = logging.getLogger(__name__)

_MAX_SLEEP_HOURS = 24


@dataclass
class FormStateManager:
    """Holds the single in-progress record and turns it into validated input."""

    today: Callable[[], date] = date.today
    _state: FormState = field(init=False)

    def __post_init__(self) -> None:
        self._state = FormState.default(self.today())

    @property
    def state(self) -> FormState:
        """Return the current draft snapshot."""
        return self._state

    def set_field(self, name: FormField | str, value: object) -> FormState:
        """Replace one field of the draft, parsing numeric input."""
        form_field = _resolve_field(name)
        parsed = _parse_value(form_field, value)
        self._state = replace(self._state, **{form_field.value: parsed})
        return self._state

    def load_for_edit(self, record: HealthRecord) -> FormState:
        """Copy an existing record into the draft and mark it as being edited."""
        self._state = FormState(
            date=record.date,
            weight=record.weight,
            sleep=record.sleep,
            sport=record.sport,
            water=record.water,
            food_type=record.food_type,
            energy=record.energy,
            mood=record.mood,
            stress=record.stress,
            editing_id=record.id,
        )
        return self._state

    def reset(self) -> FormState:
        """Restore the blank draft and clear the editing marker."""
        self._state = FormState.default(self.today())
        return self._state

    def validate_required(self) -> None:
        """Raise ValidationError when a required field is empty."""
        missing = tuple(
            form_field.value
            for form_field in REQUIRED_FIELDS
            if getattr(self._state, form_field.value) in (None, "")
        )
        if missing:
            raise ValidationError(
                f"Please fill in: {', '.join(missing)}.", fields=missing
            )

    def build_record(self) -> RecordInput:
        """Validate the draft and return the values to persist.

        The draft is never modified here, so a rejected submission keeps
        whatever the user entered.
        """
        self.validate_required()
        state = self._state
        problems: dict[str, str] = {}
        if not _is_iso_date(state.date):
            problems["date"] = "date must be YYYY-MM-DD"
        if state.weight is not None and state.weight <= 0:
            problems["weight"] = "weight must be positive"
        if state.sleep is not None and not 0 <= state.sleep <= _MAX_SLEEP_HOURS:
            problems["sleep"] = "sleep must be between 0 and 24 hours"
        for form_field in (FormField.SPORT, FormField.WATER):
            value = getattr(state, form_field.value)
            if value is not None and value < 0:
                problems[form_field.value] = f"{form_field.value} cannot be negative"
        if state.food_type not in FOOD_TYPES:
            problems["food_type"] = f"food type must be one of {', '.join(FOOD_TYPES)}"
        for form_field in sorted(SCALE_FIELDS):
            value = getattr(state, form_field.value)
            if value is None or not SCALE_MIN <= value <= SCALE_MAX:
                problems[form_field.value] = (
                    f"{form_field.value} must be between {SCALE_MIN} and {SCALE_MAX}"
                )
        if problems:
            logger.info("Rejected draft record", extra={"fields": sorted(problems)})
            message = "; ".join(problems.values())
            raise ValidationError(
                f"{message[0].upper()}{message[1:]}.", fields=tuple(problems)
            )
        return RecordInput(
            date=state.date,
            weight=float(state.weight),
            sleep=float(state.sleep),
            sport=state.sport,
            water=state.water,
            food_type=state.food_type,
            energy=int(state.energy),
            mood=int(state.mood),
            stress=int(state.stress),
        )


def _resolve_field(name: FormField | str) -> FormField:
    try:
        return FormField(name)
    except ValueError:
        raise ValidationError(f"Unknown field: {name}.", fields=(str(name),)) from None


def _parse_value(form_field: FormField, value: object) -> object:
    if form_field in DECIMAL_FIELDS:
        return _parse_number(form_field, value)
    if form_field in SCALE_FIELDS:
        number = _parse_number(form_field, value)
        if number is None:
            return None
        if not number.is_integer():
            raise ValidationError(
                f"{form_field.value} must be a whole number.", fields=(form_field.value,)
            )
        return int(number)
    if not isinstance(value, str):
        raise ValidationError(
            f"{form_field.value} must be text.", fields=(form_field.value,)
        )
    return value


def _parse_number(form_field: FormField, value: object) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValidationError(
            f"{form_field.value} must be a number.", fields=(form_field.value,)
        )
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        cleaned = value.strip()
        if not cleaned:
            return None
        try:
            number = float(cleaned)
        except ValueError:
            raise ValidationError(
                f"{form_field.value} must be a number.", fields=(form_field.value,)
            ) from None
    else:
        raise ValidationError(
            f"{form_field.value} must be a number.", fields=(form_field.value,)
        )
    if not math.isfinite(number):
        raise ValidationError(
            f"{form_field.value} must be a number.", fields=(form_field.value,)
        )
    return number


def _is_iso_date(value: str) -> bool:
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        return False
    return True
