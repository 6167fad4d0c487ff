"""Supabase repository for calendar meal plans."""

from dataclasses import dataclass
from datetime import date

from supabase import Client

from meal_calendar.adapters.records import (
    meal_plan_from_row,
    meal_plan_to_row,
    slot_meal_ids,
)
from meal_calendar.adapters.supabase_meal_repository import SupabaseMealRepository
from meal_calendar.adapters.supabase_query import execute
from meal_calendar.domain.codes import MEAL_TYPE_CODES
from meal_calendar.domain.meal_plans import MealPlan
from meal_calendar.services.meal_plans import MealPlanRepository


@dataclass
class SupabaseMealPlanRepository(MealPlanRepository):
    """Supabase-backed repository storing one row per plan.

    Slots are meal id columns; rows are hydrated through the meal repository.
    """

    client: Client
    meal_repository: SupabaseMealRepository

    def get_plan(self, plan_id: str) -> MealPlan | None:
        response = execute(
            self.client.table("meal_plans").select("*").eq("id", plan_id).limit(1),
            "get meal plan",
        )
        plans = self._hydrate(response.data or [])
        return plans[0] if plans else None

    def get_by_date(self, day: date) -> MealPlan | None:
        response = execute(
            self.client.table("meal_plans")
            .select("*")
            .eq("plan_date", day.isoformat())
            .limit(1),
            "get meal plan by date",
        )
        plans = self._hydrate(response.data or [])
        return plans[0] if plans else None

    def list_range(self, start: date, end: date) -> list[MealPlan]:
        response = execute(
            self.client.table("meal_plans")
            .select("*")
            .gte("plan_date", start.isoformat())
            .lte("plan_date", end.isoformat())
            .order("plan_date", desc=False),
            "list meal plans",
        )
        return self._hydrate(response.data or [])

    def list_plans(self) -> list[MealPlan]:
        response = execute(
            self.client.table("meal_plans").select("*").order("plan_date", desc=False),
            "list meal plans",
        )
        return self._hydrate(response.data or [])

    def find_by_meal(self, meal_id: str) -> list[MealPlan]:
        filters = ",".join(
            f"{code}_meal_id.eq.{meal_id}" for code in MEAL_TYPE_CODES.values()
        )
        response = execute(
            self.client.table("meal_plans").select("*").or_(filters),
            "find meal plans by meal",
        )
        return self._hydrate(response.data or [])

    def save_plan(self, plan: MealPlan) -> None:
        execute(
            self.client.table("meal_plans").upsert(meal_plan_to_row(plan)),
            "save meal plan",
        )

    def delete_plan(self, plan_id: str) -> bool:
        response = execute(
            self.client.table("meal_plans").delete().eq("id", plan_id),
            "delete meal plan",
        )
        return bool(response.data)

    def _hydrate(self, rows: list[dict[str, object]]) -> list[MealPlan]:
        meal_ids: set[str] = set()
        for row in rows:
            meal_ids |= slot_meal_ids(row)
        meals_by_id = self.meal_repository.get_meals(sorted(meal_ids))
        return [meal_plan_from_row(row, meals_by_id) for row in rows]
