"""Domain models for meals."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from meal_calendar.domain.materials import Material


class MealType(Enum):
    """Calendar slots, in display order."""

    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    DINNER = "Dinner"
    SNACK = "Snack"


@dataclass(frozen=True, eq=False)
class Meal:
    """A named dish composed of materials."""

    id: str
    name: str
    description: str
    materials: tuple[Material, ...]
    meal_type: MealType
    created_at: datetime
    preparation_time: int = 0
    instructions: str = ""
    calories: int | None = None
    tags: frozenset[str] = field(default_factory=frozenset)
    image_url: str | None = None

    @property
    def material_ids(self) -> frozenset[str]:
        """Return the set of material ids used by the meal."""
        return frozenset(material.id for material in self.materials)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Meal):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
