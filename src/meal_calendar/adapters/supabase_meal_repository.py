"""Supabase repository for meals."""

from dataclasses import dataclass

from supabase import Client

from meal_calendar.adapters.records import meal_from_record, meal_to_record
from meal_calendar.adapters.supabase_query import execute
from meal_calendar.domain.errors import PersistenceError
from meal_calendar.domain.meals import Meal
from meal_calendar.services.meals import MealRepository


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase-backed repository for meals.

    Materials are stored as a JSON snapshot on the meal row.
    """

    client: Client

    def list_meals(self) -> list[Meal]:
        response = execute(
            self.client.table("meals").select("*").order("created_at", desc=False),
            "list meals",
        )
        return [meal_from_record(row) for row in response.data or []]

    def get_meal(self, meal_id: str) -> Meal | None:
        response = execute(
            self.client.table("meals").select("*").eq("id", meal_id).limit(1),
            "get meal",
        )
        if not response.data:
            return None
        return meal_from_record(response.data[0])

    def get_meals(self, meal_ids: list[str]) -> dict[str, Meal]:
        """Return meals by id for the given ids."""
        if not meal_ids:
            return {}
        response = execute(
            self.client.table("meals").select("*").in_("id", meal_ids),
            "get meals",
        )
        meals = [meal_from_record(row) for row in response.data or []]
        return {meal.id: meal for meal in meals}

    def add_meal(self, meal: Meal) -> None:
        response = execute(
            self.client.table("meals").insert(meal_to_record(meal)), "add meal"
        )
        if not response.data:
            raise PersistenceError(f"Failed to add meal: {meal.id}")

    def update_meal(self, meal: Meal) -> bool:
        record = meal_to_record(meal)
        record.pop("id")
        response = execute(
            self.client.table("meals").update(record).eq("id", meal.id),
            "update meal",
        )
        return bool(response.data)

    def delete_meal(self, meal_id: str) -> bool:
        response = execute(
            self.client.table("meals").delete().eq("id", meal_id), "delete meal"
        )
        return bool(response.data)
