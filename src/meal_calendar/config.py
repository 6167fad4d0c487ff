"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from meal_calendar.domain.codes import parse_meal_type
from meal_calendar.domain.meals import MealType

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

MEMORY_BACKEND = "memory"
SUPABASE_BACKEND = "supabase"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    storage_backend: str = MEMORY_BACKEND
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    timezone: str = "UTC"
    generator_pool_size: int = 4
    generator_candidate_limit: int = 2000
    default_meal_count: int = 3
    included_meal_types: str | None = None
    seed_on_startup: bool = True
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_meal_types(raw: str | None) -> list[MealType] | None:
    """Parse the included meal types from env; None means every type."""
    if raw is None:
        return None
    cleaned = raw.strip()
    if cleaned in {"", "*"}:
        return None
    meal_types: list[MealType] = []
    for chunk in cleaned.split(","):
        value = chunk.strip()
        if not value:
            continue
        meal_type = parse_meal_type(value.lower())
        if meal_type not in meal_types:
            meal_types.append(meal_type)
    return meal_types or None
