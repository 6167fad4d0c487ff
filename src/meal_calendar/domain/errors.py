"""Error taxonomy for the meal calendar core."""

from datetime import date

from meal_calendar.domain.meals import MealType


class MealCalendarError(Exception):
    """Base class for every failure raised by the core."""


class NotFoundError(MealCalendarError):
    """Raised when an id is absent from a repository."""

    def __init__(self, entity: str, entity_id: str) -> None:
        super().__init__(f"{entity} not found: {entity_id}")
        self.entity = entity
        self.entity_id = entity_id


class InsufficientMaterialsError(MealCalendarError):
    """Raised when generation has no available materials to work with."""

    def __init__(self, meal_type: MealType | None = None, day: date | None = None):
        message = "No available materials, add some first"
        if meal_type is not None:
            message += f" (meal type: {meal_type.value.lower()}"
            message += f", date: {day.isoformat()})" if day else ")"
        super().__init__(message)
        self.meal_type = meal_type
        self.day = day


class NoValidCombinationError(MealCalendarError):
    """Raised when materials exist but none combine into a valid meal."""

    def __init__(
        self,
        meal_type: MealType,
        day: date | None = None,
        reason: str = "no combination satisfies the meal type rules",
    ) -> None:
        where = f" on {day.isoformat()}" if day else ""
        super().__init__(
            f"Cannot build a {meal_type.value.lower()} meal{where}: {reason}"
        )
        self.meal_type = meal_type
        self.day = day
        self.reason = reason


class InvalidDateRangeError(MealCalendarError):
    """Raised for a malformed start/end pair."""

    def __init__(self, start: object, end: object) -> None:
        super().__init__(f"Invalid date range: {start} .. {end}")
        self.start = start
        self.end = end


class PersistenceError(MealCalendarError):
    """Wraps failures of the underlying storage backend."""


class UnknownEnumValueError(MealCalendarError):
    """Raised when a stored enum code has no mapping."""

    def __init__(self, enum_name: str, value: object) -> None:
        super().__init__(f"Unknown {enum_name} value: {value!r}")
        self.enum_name = enum_name
        self.value = value


class DuplicatePlanError(MealCalendarError):
    """Raised when a date already holds a different meal plan."""

    def __init__(self, day: date, existing_id: str) -> None:
        super().__init__(
            f"A meal plan already exists for {day.isoformat()} (id: {existing_id})"
        )
        self.day = day
        self.existing_id = existing_id
