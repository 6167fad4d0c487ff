"""Calendar meal plan service."""

import logging
from dataclasses import dataclass, field, replace
from datetime import date, timedelta
from typing import Protocol

from meal_calendar.domain.errors import InvalidDateRangeError, NotFoundError
from meal_calendar.domain.meal_plans import MealPlan
from meal_calendar.domain.meals import Meal, MealType
from meal_calendar.services.clock import Clock
from meal_calendar.services.ids import IdFactory, new_id

DECEMBER = 12

_logger = logging.getLogger(__name__)


class MealPlanRepository(Protocol):
    """Persistence interface for meal plans."""

    def get_plan(self, plan_id: str) -> MealPlan | None:
        """Return a plan by id, if present."""

    def get_by_date(self, day: date) -> MealPlan | None:
        """Return the plan stored for a date, if present."""

    def list_range(self, start: date, end: date) -> list[MealPlan]:
        """Return plans with start <= date <= end, ordered by date."""

    def list_plans(self) -> list[MealPlan]:
        """Return every stored plan ordered by date."""

    def find_by_meal(self, meal_id: str) -> list[MealPlan]:
        """Return plans with at least one slot holding the meal."""

    def save_plan(self, plan: MealPlan) -> None:
        """Insert or replace a plan with all of its slots."""

    def delete_plan(self, plan_id: str) -> bool:
        """Delete a plan, returning False when it is absent."""


@dataclass(frozen=True)
class PlanStatistics:
    """Counts shown on the calendar overview."""

    total_plans: int
    completed_plans: int
    this_week_plans: int


@dataclass
class MealPlanService:
    """Application service for calendar reads and plan edits."""

    repository: MealPlanRepository
    clock: Clock
    id_factory: IdFactory = field(default=new_id)

    def get_by_date(self, day: date) -> MealPlan | None:
        return self.repository.get_by_date(day)

    def get(self, plan_id: str) -> MealPlan:
        plan = self.repository.get_plan(plan_id)
        if plan is None:
            raise NotFoundError("MealPlan", plan_id)
        return plan

    def get_range(self, start: date, end: date) -> list[MealPlan]:
        """Return plans for an inclusive date range."""
        if end < start:
            raise InvalidDateRangeError(start, end)
        return self.repository.list_range(start, end)

    def get_week(self, start: date | None = None) -> list[MealPlan]:
        """Return plans for the week starting at start, or the current week."""
        first = start or start_of_week(self.clock.today())
        return self.get_range(first, first + timedelta(days=6))

    def get_month(self, year: int, month: int) -> list[MealPlan]:
        first, last = month_bounds(year, month)
        return self.get_range(first, last)

    def save(self, plan: MealPlan) -> MealPlan:
        self.repository.save_plan(plan)
        return plan

    def delete(self, plan_id: str) -> None:
        if not self.repository.delete_plan(plan_id):
            raise NotFoundError("MealPlan", plan_id)

    def update_meal_in_plan(
        self, plan_id: str, meal_type: MealType, meal: Meal | None
    ) -> MealPlan:
        """Replace or clear one slot of a stored plan."""
        updated = self.get(plan_id).with_meal(meal_type, meal, self.clock.now())
        return self.save(updated)

    def mark_completed(self, plan_id: str, is_completed: bool) -> MealPlan:
        updated = replace(
            self.get(plan_id), is_completed=is_completed, updated_at=self.clock.now()
        )
        return self.save(updated)

    def set_notes(self, plan_id: str, notes: str | None) -> MealPlan:
        updated = replace(self.get(plan_id), notes=notes, updated_at=self.clock.now())
        return self.save(updated)

    def copy_plan(self, source_date: date, target_date: date) -> MealPlan:
        """Copy the slots of one date onto another, replacing the target plan."""
        source = self.repository.get_by_date(source_date)
        if source is None:
            raise NotFoundError("MealPlan", source_date.isoformat())
        existing = self.repository.get_by_date(target_date)
        now = self.clock.now()
        copied = MealPlan(
            id=existing.id if existing else self.id_factory(),
            date=target_date,
            meals=dict(source.meals),
            created_at=existing.created_at if existing else now,
            updated_at=now,
            notes=source.notes,
        )
        _logger.info(
            "Meal plan copied: source=%s target=%s", source_date, target_date
        )
        return self.save(copied)

    def statistics(self) -> PlanStatistics:
        plans = self.repository.list_plans()
        week_start = start_of_week(self.clock.today())
        week_end = week_start + timedelta(days=6)
        return PlanStatistics(
            total_plans=len(plans),
            completed_plans=sum(1 for plan in plans if plan.is_completed),
            this_week_plans=sum(
                1 for plan in plans if week_start <= plan.date <= week_end
            ),
        )


def start_of_week(day: date) -> date:
    """Return the Monday of the week containing day."""
    return day - timedelta(days=day.weekday())


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """Return the first and last dates of a month."""
    if not 1 <= month <= DECEMBER:
        raise InvalidDateRangeError(f"{year}-{month}", f"{year}-{month}")
    try:
        first = date(year, month, 1)
        if month == DECEMBER:
            last = date(year, month, 31)
        else:
            last = date(year, month + 1, 1) - timedelta(days=1)
    except ValueError as exc:
        raise InvalidDateRangeError(f"{year}-{month}", f"{year}-{month}") from exc
    return first, last
