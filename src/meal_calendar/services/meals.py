"""Meal library service."""

import logging
from dataclasses import dataclass
from typing import Protocol

from meal_calendar.domain.errors import NotFoundError
from meal_calendar.domain.meals import Meal, MealType
from meal_calendar.services.catalog import MaterialCatalogService
from meal_calendar.services.clock import Clock
from meal_calendar.services.meal_plans import MealPlanRepository

_logger = logging.getLogger(__name__)


class MealRepository(Protocol):
    """Persistence interface for meals."""

    def list_meals(self) -> list[Meal]:
        """Return every stored meal."""

    def get_meal(self, meal_id: str) -> Meal | None:
        """Return a meal by id, if present."""

    def add_meal(self, meal: Meal) -> None:
        """Store a new meal."""

    def update_meal(self, meal: Meal) -> bool:
        """Replace a stored meal, returning False when it is absent."""

    def delete_meal(self, meal_id: str) -> bool:
        """Delete a meal, returning False when it is absent."""


@dataclass
class MealService:
    """Service for the stored meal library.

    Deleting a meal clears every plan slot that references it before the meal
    itself is removed, so plans never point at a missing meal.
    """

    repository: MealRepository
    catalog: MaterialCatalogService
    plan_repository: MealPlanRepository
    clock: Clock

    def get_all_meals(self) -> list[Meal]:
        return self.repository.list_meals()

    def get_meal(self, meal_id: str) -> Meal:
        meal = self.repository.get_meal(meal_id)
        if meal is None:
            raise NotFoundError("Meal", meal_id)
        return meal

    def get_meals_by_type(self, meal_type: MealType) -> list[Meal]:
        return [meal for meal in self.get_all_meals() if meal.meal_type == meal_type]

    def search_meals(self, query: str | None) -> list[Meal]:
        """Match name or description, case-insensitively."""
        if not query or not query.strip():
            return self.get_all_meals()
        needle = query.strip().lower()
        return [
            meal
            for meal in self.get_all_meals()
            if needle in meal.name.lower() or needle in meal.description.lower()
        ]

    def get_meals_usable_with_available_materials(self) -> list[Meal]:
        """Return meals whose full material set is currently available."""
        available_ids = {material.id for material in self.catalog.list_available()}
        return [
            meal for meal in self.get_all_meals() if meal.material_ids <= available_ids
        ]

    def add_meal(self, meal: Meal) -> Meal:
        self.repository.add_meal(meal)
        return meal

    def update_meal(self, meal: Meal) -> Meal:
        if not self.repository.update_meal(meal):
            raise NotFoundError("Meal", meal.id)
        return meal

    def delete_meal(self, meal_id: str) -> None:
        """Delete a meal, clearing the plan slots that hold it."""
        if self.repository.get_meal(meal_id) is None:
            raise NotFoundError("Meal", meal_id)
        for plan in self.plan_repository.find_by_meal(meal_id):
            cleared = plan
            for meal_type, meal in plan.meals.items():
                if meal is not None and meal.id == meal_id:
                    cleared = cleared.without_meal(meal_type, self.clock.now())
            self.plan_repository.save_plan(cleared)
            _logger.info(
                "Cleared deleted meal from plan: meal_id=%s plan_date=%s",
                meal_id,
                plan.date,
            )
        if not self.repository.delete_meal(meal_id):
            raise NotFoundError("Meal", meal_id)

    def count_by_type(self) -> dict[MealType, int]:
        counts = {meal_type: 0 for meal_type in MealType}
        for meal in self.get_all_meals():
            counts[meal.meal_type] += 1
        return counts
