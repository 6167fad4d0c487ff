"""Plan assembly: reconcile generated meals with stored plans and persist them."""

import logging
from collections.abc import Collection, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date

from meal_calendar.domain.errors import DuplicatePlanError, MealCalendarError
from meal_calendar.domain.materials import Material
from meal_calendar.domain.meal_plans import MealPlan
from meal_calendar.domain.meals import Meal, MealType
from meal_calendar.services.clock import Clock
from meal_calendar.services.generator import MealGenerator
from meal_calendar.services.ids import IdFactory, new_id
from meal_calendar.services.meal_plans import MealPlanRepository
from meal_calendar.services.meals import MealRepository

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlanSaveFailure:
    """A date that could not be saved and the reason."""

    date: date
    error: MealCalendarError

    @property
    def message(self) -> str:
        return str(self.error)


@dataclass
class SaveRangeResult:
    """Outcome of saving several plans; failures are reported per date."""

    saved: list[MealPlan] = field(default_factory=list)
    failures: list[PlanSaveFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def failed_dates(self) -> list[date]:
        return [failure.date for failure in self.failures]


@dataclass
class PlanAssembler:
    """Orchestrates generation over dates and writes the results."""

    generator: MealGenerator
    meal_repository: MealRepository
    plan_repository: MealPlanRepository
    clock: Clock
    id_factory: IdFactory = field(default=new_id)

    def get_or_create(self, day: date) -> MealPlan:
        """Return the stored plan for the date or a new, unsaved empty one."""
        existing = self.plan_repository.get_by_date(day)
        if existing is not None:
            return existing
        return MealPlan.empty(self.id_factory(), day, self.clock.now())

    def apply_generated(
        self,
        day: date,
        generated: Mapping[MealType, Meal | None],
        overwrite: bool = False,
    ) -> MealPlan:
        """Merge generated meals into the plan for the date.

        Filled slots are kept unless overwrite is set. The result is not saved.
        """
        plan = self.get_or_create(day)
        slots = dict(plan.meals)
        for meal_type, meal in generated.items():
            if meal is None:
                continue
            if slots[meal_type] is not None and not overwrite:
                continue
            slots[meal_type] = meal
        return MealPlan(
            id=plan.id,
            date=plan.date,
            meals=slots,
            created_at=plan.created_at,
            updated_at=self.clock.now(),
            notes=plan.notes,
            is_completed=plan.is_completed,
        )

    async def save_range(self, plans: Sequence[MealPlan]) -> SaveRangeResult:
        """Persist plans one date at a time.

        Each plan's meals are written before the plan row. A failed date does
        not undo dates already written.
        """
        result = SaveRangeResult()
        claimed: dict[date, str] = {}
        for plan in plans:
            try:
                self._check_unique(plan, claimed)
                self._save_meals(plan)
                self.plan_repository.save_plan(plan)
            except MealCalendarError as exc:
                _logger.warning(
                    "Failed to save meal plan: date=%s error=%s", plan.date, exc
                )
                result.failures.append(PlanSaveFailure(date=plan.date, error=exc))
                continue
            claimed[plan.date] = plan.id
            result.saved.append(plan)
        _logger.info(
            "Saved meal plans: saved=%s failed=%s",
            len(result.saved),
            len(result.failures),
        )
        return result

    async def generate_day(  # noqa: PLR0913
        self,
        day: date,
        materials: Sequence[Material],
        overwrite: bool = False,
        meal_types: Sequence[MealType] | None = None,
        dietary_restrictions: Collection[str] | None = None,
    ) -> SaveRangeResult:
        plan = self.generator.generate_daily_plan(
            day, materials, meal_types, dietary_restrictions
        )
        return await self._apply_and_save([plan], overwrite)

    async def generate_week(  # noqa: PLR0913
        self,
        start_date: date,
        materials: Sequence[Material],
        overwrite: bool = False,
        meal_types: Sequence[MealType] | None = None,
        dietary_restrictions: Collection[str] | None = None,
    ) -> SaveRangeResult:
        plans = self.generator.generate_weekly_plan(
            start_date, materials, meal_types, dietary_restrictions
        )
        return await self._apply_and_save(plans, overwrite)

    async def generate_month(  # noqa: PLR0913
        self,
        year: int,
        month: int,
        materials: Sequence[Material],
        overwrite: bool = False,
        meal_types: Sequence[MealType] | None = None,
        dietary_restrictions: Collection[str] | None = None,
    ) -> SaveRangeResult:
        plans = self.generator.generate_monthly_plan(
            year, month, materials, meal_types, dietary_restrictions
        )
        return await self._apply_and_save(plans, overwrite)

    async def assign_meal(
        self, day: date, meal: Meal, meal_type: MealType | None = None
    ) -> MealPlan:
        """Put a meal into a slot on a date, creating the plan if needed.

        The slot defaults to the meal's own type.
        """
        slot = meal_type or meal.meal_type
        plan = self.apply_generated(day, {slot: meal}, overwrite=True)
        result = await self.save_range([plan])
        if result.failures:
            raise result.failures[0].error
        return plan

    async def _apply_and_save(
        self, generated: Sequence[MealPlan], overwrite: bool
    ) -> SaveRangeResult:
        merged = [
            self.apply_generated(plan.date, plan.meals, overwrite) for plan in generated
        ]
        return await self.save_range(merged)

    def _check_unique(self, plan: MealPlan, claimed: dict[date, str]) -> None:
        holder = claimed.get(plan.date)
        if holder is None:
            stored = self.plan_repository.get_by_date(plan.date)
            holder = stored.id if stored else None
        if holder is not None and holder != plan.id:
            raise DuplicatePlanError(plan.date, holder)

    def _save_meals(self, plan: MealPlan) -> None:
        for meal in plan.all_meals:
            if self.meal_repository.get_meal(meal.id) is None:
                self.meal_repository.add_meal(meal)
