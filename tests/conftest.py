"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime

import pytest

from meal_calendar.adapters.memory_repositories import (
    InMemoryMaterialRepository,
    InMemoryMealPlanRepository,
    InMemoryMealRepository,
)
from meal_calendar.config import Settings
from meal_calendar.containers import AppContainer, build_container
from meal_calendar.domain.errors import PersistenceError
from meal_calendar.domain.materials import Material, MaterialCategory
from meal_calendar.domain.meal_plans import MealPlan
from meal_calendar.domain.meals import Meal, MealType
from meal_calendar.services.assembler import PlanAssembler
from meal_calendar.services.catalog import MaterialCatalogService
from meal_calendar.services.clock import Clock
from meal_calendar.services.generator import MealGenerator
from meal_calendar.services.meal_plans import MealPlanService
from meal_calendar.services.meals import MealService

FIXED_NOW = datetime(2026, 1, 7, 9, 30, tzinfo=UTC)


@dataclass
class FixedClock(Clock):
    """Clock frozen at a given instant; advance() moves it forward."""

    current: datetime = FIXED_NOW

    def now(self) -> datetime:
        return self.current

    def today(self) -> date:
        return self.current.date()

    def advance(self, value: datetime) -> None:
        self.current = value


@dataclass
class SequentialIds:
    """Id factory returning id-1, id-2, ..."""

    prefix: str = "id"
    issued: int = 0

    def __call__(self) -> str:
        self.issued += 1
        return f"{self.prefix}-{self.issued}"


@dataclass
class FailingMealPlanRepository(InMemoryMealPlanRepository):
    """Plan repository that fails to save the given dates."""

    failing_dates: set[date] = field(default_factory=set)

    def save_plan(self, plan: MealPlan) -> None:
        if plan.date in self.failing_dates:
            raise PersistenceError(f"Failed to save meal plan: {plan.date}")
        super().save_plan(plan)


def make_material(
    material_id: str,
    category: MaterialCategory,
    name: str | None = None,
    is_available: bool = True,
) -> Material:
    return Material(
        id=material_id,
        name=name or material_id.replace("_", " ").title(),
        category=category,
        is_available=is_available,
    )


def make_meal(
    meal_id: str,
    meal_type: MealType = MealType.LUNCH,
    materials: tuple[Material, ...] = (),
    name: str | None = None,
    preparation_time: int = 20,
    calories: int | None = 400,
) -> Meal:
    return Meal(
        id=meal_id,
        name=name or meal_id.replace("_", " ").title(),
        description=f"{meal_id} description",
        materials=materials,
        meal_type=meal_type,
        created_at=FIXED_NOW,
        preparation_time=preparation_time,
        calories=calories,
    )


def pantry() -> list[Material]:
    """A small catalog covering every category."""
    return [
        make_material("chicken", MaterialCategory.POULTRY, "Chicken Breast"),
        make_material("salmon", MaterialCategory.SEAFOOD, "Salmon"),
        make_material("beef", MaterialCategory.MEAT, "Ground Beef"),
        make_material("broccoli", MaterialCategory.VEGETABLES, "Broccoli"),
        make_material("spinach", MaterialCategory.VEGETABLES, "Spinach"),
        make_material("tomato", MaterialCategory.VEGETABLES, "Tomato"),
        make_material("rice", MaterialCategory.GRAINS, "Rice"),
        make_material("bread", MaterialCategory.GRAINS, "Whole Wheat Bread"),
        make_material("milk", MaterialCategory.DAIRY, "Milk"),
        make_material("yogurt", MaterialCategory.DAIRY, "Greek Yogurt"),
        make_material("salt", MaterialCategory.SPICES, "Salt"),
    ]


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def ids() -> SequentialIds:
    return SequentialIds()


@pytest.fixture
def materials() -> list[Material]:
    return pantry()


@pytest.fixture
def material_repository() -> InMemoryMaterialRepository:
    return InMemoryMaterialRepository()


@pytest.fixture
def meal_repository() -> InMemoryMealRepository:
    return InMemoryMealRepository()


@pytest.fixture
def plan_repository() -> FailingMealPlanRepository:
    return FailingMealPlanRepository()


@pytest.fixture
def catalog(material_repository) -> MaterialCatalogService:
    return MaterialCatalogService(material_repository)


@pytest.fixture
def meal_service(meal_repository, catalog, plan_repository, clock) -> MealService:
    return MealService(
        repository=meal_repository,
        catalog=catalog,
        plan_repository=plan_repository,
        clock=clock,
    )


@pytest.fixture
def plan_service(plan_repository, clock, ids) -> MealPlanService:
    return MealPlanService(repository=plan_repository, clock=clock, id_factory=ids)


@pytest.fixture
def generator(clock, ids) -> MealGenerator:
    return MealGenerator(clock=clock, id_factory=ids)


@pytest.fixture
def assembler(
    generator, meal_repository, plan_repository, clock, ids
) -> PlanAssembler:
    return PlanAssembler(
        generator=generator,
        meal_repository=meal_repository,
        plan_repository=plan_repository,
        clock=clock,
        id_factory=ids,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        storage_backend="memory",
        timezone="UTC",
        seed_on_startup=True,
    )


@pytest.fixture
def container(settings, clock, ids) -> AppContainer:
    return build_container(settings, clock=clock, id_factory=ids)
