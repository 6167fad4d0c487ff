"""Meal library endpoints."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, status

from meal_calendar.adapters.records import meal_to_record
from meal_calendar.api.schemas import MealCreate
from meal_calendar.domain.codes import meal_type_code, parse_meal_type
from meal_calendar.domain.meals import Meal
from meal_calendar.services.ids import new_id

if TYPE_CHECKING:
    from meal_calendar.containers import AppContainer

router = APIRouter(prefix="/meals", tags=["meals"])


@router.get("")
async def list_meals(
    request: Request, meal_type: str | None = None, q: str | None = None
) -> dict[str, object]:
    """Return stored meals, optionally filtered by type or text."""
    container: AppContainer = request.app.state.container
    meals = container.meal_service.search_meals(q)
    if meal_type is not None:
        wanted = parse_meal_type(meal_type.lower())
        meals = [meal for meal in meals if meal.meal_type == wanted]
    return {"meals": [meal_to_record(meal) for meal in meals]}


@router.get("/usable")
async def usable_meals(request: Request) -> dict[str, object]:
    """Return meals that can be cooked with the available materials."""
    container: AppContainer = request.app.state.container
    meals = container.meal_service.get_meals_usable_with_available_materials()
    return {"meals": [meal_to_record(meal) for meal in meals]}


@router.get("/stats")
async def meal_stats(request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    by_type = container.meal_service.count_by_type()
    return {
        "total": sum(by_type.values()),
        "by_type": {
            meal_type_code(meal_type): count for meal_type, count in by_type.items()
        },
    }


@router.get("/{meal_id}")
async def get_meal(meal_id: str, request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return meal_to_record(container.meal_service.get_meal(meal_id))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_meal(payload: MealCreate, request: Request) -> dict[str, object]:
    """Store a meal built from catalog materials."""
    container: AppContainer = request.app.state.container
    meal = _meal_from_payload(
        container, payload, payload.id or new_id(), container.clock.now()
    )
    return meal_to_record(container.meal_service.add_meal(meal))


@router.put("/{meal_id}")
async def update_meal(
    meal_id: str, payload: MealCreate, request: Request
) -> dict[str, object]:
    """Replace a stored meal, keeping its creation time."""
    container: AppContainer = request.app.state.container
    existing = container.meal_service.get_meal(meal_id)
    meal = _meal_from_payload(container, payload, meal_id, existing.created_at)
    return meal_to_record(container.meal_service.update_meal(meal))


@router.delete("/{meal_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_meal(meal_id: str, request: Request) -> None:
    """Delete a meal and clear the plan slots that hold it."""
    container: AppContainer = request.app.state.container
    container.meal_service.delete_meal(meal_id)


def _meal_from_payload(
    container: AppContainer,
    payload: MealCreate,
    meal_id: str,
    created_at: datetime,
) -> Meal:
    materials = tuple(
        container.catalog_service.get(material_id)
        for material_id in payload.material_ids
    )
    return Meal(
        id=meal_id,
        name=payload.name,
        description=payload.description,
        materials=materials,
        meal_type=parse_meal_type(payload.meal_type.lower()),
        created_at=created_at,
        preparation_time=payload.preparation_time,
        instructions=payload.instructions,
        calories=payload.calories,
        tags=frozenset(payload.tags),
        image_url=payload.image_url,
    )
