"""Meal generation endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from meal_calendar.adapters.records import meal_to_record
from meal_calendar.api.schemas import CustomMealRequest, GenerateMealsRequest
from meal_calendar.domain.codes import parse_meal_type
from meal_calendar.domain.materials import Material

if TYPE_CHECKING:
    from meal_calendar.containers import AppContainer

router = APIRouter(prefix="/generate", tags=["generation"])


@router.post("/meals")
async def generate_meals(
    payload: GenerateMealsRequest, request: Request
) -> dict[str, object]:
    """Return ranked candidate meals; save stores them in the meal library."""
    container: AppContainer = request.app.state.container
    meals = container.generator.generate_meals(
        _resolve_materials(container, payload.material_ids),
        parse_meal_type(payload.meal_type.lower()),
        count=payload.count,
        dietary_restrictions=payload.dietary_restrictions,
    )
    if payload.save:
        for meal in meals:
            container.meal_service.add_meal(meal)
    return {"meals": [meal_to_record(meal) for meal in meals]}


@router.post("/custom")
async def generate_custom_meal(
    payload: CustomMealRequest, request: Request
) -> dict[str, object]:
    """Build the best meal around the required materials."""
    container: AppContainer = request.app.state.container
    meal = container.generator.generate_custom_meal(
        _resolve_materials(container, payload.required_material_ids),
        parse_meal_type(payload.meal_type.lower()),
        dietary_restrictions=payload.dietary_restrictions,
        additional_materials=_resolve_materials(
            container, payload.additional_material_ids
        ),
    )
    if payload.save:
        container.meal_service.add_meal(meal)
    return meal_to_record(meal)


def _resolve_materials(
    container: AppContainer, material_ids: list[str] | None
) -> list[Material]:
    if material_ids is None:
        return container.catalog_service.list()
    return [container.catalog_service.get(material_id) for material_id in material_ids]
