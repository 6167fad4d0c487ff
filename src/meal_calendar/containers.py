"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from meal_calendar.adapters.memory_repositories import (
    InMemoryMaterialRepository,
    InMemoryMealPlanRepository,
    InMemoryMealRepository,
)
from meal_calendar.adapters.supabase_material_repository import (
    SupabaseMaterialRepository,
)
from meal_calendar.adapters.supabase_meal_plan_repository import (
    SupabaseMealPlanRepository,
)
from meal_calendar.adapters.supabase_meal_repository import SupabaseMealRepository
from meal_calendar.config import (
    MEMORY_BACKEND,
    SUPABASE_BACKEND,
    Settings,
    parse_meal_types,
)
from meal_calendar.domain.meals import MealType
from meal_calendar.services.assembler import PlanAssembler
from meal_calendar.services.catalog import MaterialCatalogService, MaterialRepository
from meal_calendar.services.clock import Clock, SystemClock
from meal_calendar.services.generator import MealGenerator
from meal_calendar.services.ids import IdFactory, new_id
from meal_calendar.services.meal_plans import MealPlanRepository, MealPlanService
from meal_calendar.services.meals import MealRepository, MealService
from meal_calendar.services.seed import SeedDataService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    clock: Clock
    meal_types: list[MealType] | None
    catalog_service: MaterialCatalogService
    meal_service: MealService
    meal_plan_service: MealPlanService
    generator: MealGenerator
    assembler: PlanAssembler
    seed_service: SeedDataService


def build_container(
    settings: Settings | None = None,
    clock: Clock | None = None,
    id_factory: IdFactory = new_id,
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    resolved_clock = clock or SystemClock.for_timezone(resolved_settings.timezone)
    material_repository, meal_repository, plan_repository = _build_repositories(
        resolved_settings
    )
    catalog_service = MaterialCatalogService(material_repository)
    meal_service = MealService(
        repository=meal_repository,
        catalog=catalog_service,
        plan_repository=plan_repository,
        clock=resolved_clock,
    )
    meal_plan_service = MealPlanService(
        repository=plan_repository,
        clock=resolved_clock,
        id_factory=id_factory,
    )
    generator = MealGenerator(
        clock=resolved_clock,
        id_factory=id_factory,
        pool_size=resolved_settings.generator_pool_size,
        candidate_limit=resolved_settings.generator_candidate_limit,
        default_count=resolved_settings.default_meal_count,
    )
    assembler = PlanAssembler(
        generator=generator,
        meal_repository=meal_repository,
        plan_repository=plan_repository,
        clock=resolved_clock,
        id_factory=id_factory,
    )
    seed_service = SeedDataService(
        catalog=catalog_service,
        meal_service=meal_service,
        clock=resolved_clock,
    )
    return AppContainer(
        settings=resolved_settings,
        clock=resolved_clock,
        meal_types=parse_meal_types(resolved_settings.included_meal_types),
        catalog_service=catalog_service,
        meal_service=meal_service,
        meal_plan_service=meal_plan_service,
        generator=generator,
        assembler=assembler,
        seed_service=seed_service,
    )


def _build_repositories(
    settings: Settings,
) -> tuple[MaterialRepository, MealRepository, MealPlanRepository]:
    backend = settings.storage_backend.strip().lower()
    if backend == MEMORY_BACKEND:
        return (
            InMemoryMaterialRepository(),
            InMemoryMealRepository(),
            InMemoryMealPlanRepository(),
        )
    if backend == SUPABASE_BACKEND:
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError(
                "SUPABASE_URL and SUPABASE_SERVICE_KEY are required "
                "for the supabase storage backend"
            )
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        meal_repository = SupabaseMealRepository(client)
        return (
            SupabaseMaterialRepository(client),
            meal_repository,
            SupabaseMealPlanRepository(client, meal_repository),
        )
    raise ValueError(f"Unknown storage backend: {settings.storage_backend}")
