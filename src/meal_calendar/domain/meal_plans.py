"""Domain models for calendar meal plans."""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from types import MappingProxyType

from meal_calendar.domain.meals import Meal, MealType


@dataclass(frozen=True, eq=False)
class MealPlan:
    """Meals assigned to a single calendar date, one slot per meal type."""

    id: str
    date: date
    created_at: datetime
    updated_at: datetime
    meals: Mapping[MealType, Meal | None] = field(default_factory=dict)
    notes: str | None = None
    is_completed: bool = False

    def __post_init__(self) -> None:
        unknown = [key for key in self.meals if not isinstance(key, MealType)]
        if unknown:
            raise ValueError(f"Unknown meal slots: {unknown}")
        slots = {meal_type: self.meals.get(meal_type) for meal_type in MealType}
        object.__setattr__(self, "meals", MappingProxyType(slots))
        if isinstance(self.date, datetime):
            object.__setattr__(self, "date", self.date.date())

    @classmethod
    def empty(cls, plan_id: str, day: date, now: datetime) -> "MealPlan":
        """Return a plan for the date with every slot empty."""
        return cls(id=plan_id, date=day, created_at=now, updated_at=now)

    def meal_for(self, meal_type: MealType) -> Meal | None:
        """Return the meal in a slot, if any."""
        return self.meals[meal_type]

    def with_meal(
        self, meal_type: MealType, meal: Meal | None, updated_at: datetime
    ) -> "MealPlan":
        """Return a copy with one slot replaced."""
        slots = dict(self.meals)
        slots[meal_type] = meal
        return replace(self, meals=slots, updated_at=updated_at)

    def without_meal(self, meal_type: MealType, updated_at: datetime) -> "MealPlan":
        """Return a copy with one slot cleared."""
        return self.with_meal(meal_type, None, updated_at)

    @property
    def all_meals(self) -> list[Meal]:
        return [meal for meal in self.meals.values() if meal is not None]

    @property
    def has_any_meals(self) -> bool:
        return any(meal is not None for meal in self.meals.values())

    @property
    def total_preparation_time(self) -> int:
        return sum(meal.preparation_time for meal in self.all_meals)

    @property
    def total_calories(self) -> int | None:
        """Sum calories over meals that have them, None if none do."""
        known = [meal.calories for meal in self.all_meals if meal.calories is not None]
        if not known:
            return None
        return sum(known)

    def is_today(self, today: date | None = None) -> bool:
        return self.date == _resolve_today(today)

    def is_past(self, today: date | None = None) -> bool:
        return self.date < _resolve_today(today)

    def is_future(self, today: date | None = None) -> bool:
        return self.date > _resolve_today(today)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MealPlan):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


def _resolve_today(today: date | datetime | None) -> date:
    if today is None:
        return date.today()
    if isinstance(today, datetime):
        return today.date()
    return today
