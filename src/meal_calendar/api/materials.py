"""Material catalog endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, status

from meal_calendar.adapters.records import material_to_record
from meal_calendar.api.schemas import AvailabilityUpdate, MaterialCreate
from meal_calendar.domain.codes import category_code, parse_category
from meal_calendar.domain.materials import Material
from meal_calendar.services.ids import new_id

if TYPE_CHECKING:
    from meal_calendar.containers import AppContainer

router = APIRouter(prefix="/materials", tags=["materials"])


@router.get("")
async def list_materials(
    request: Request,
    category: str | None = None,
    available: bool | None = None,
    q: str | None = None,
) -> dict[str, object]:
    """Return materials, optionally filtered by category, availability or text."""
    container: AppContainer = request.app.state.container
    materials = container.catalog_service.search(q)
    if category is not None:
        wanted = parse_category(category.lower())
        materials = [material for material in materials if material.category == wanted]
    if available is not None:
        materials = [
            material for material in materials if material.is_available == available
        ]
    return {"materials": [material_to_record(material) for material in materials]}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_material(
    payload: MaterialCreate, request: Request
) -> dict[str, object]:
    """Add a material to the catalog."""
    container: AppContainer = request.app.state.container
    material = Material(
        id=payload.id or new_id(),
        name=payload.name,
        category=parse_category(payload.category.lower()),
        nutritional_info=tuple(payload.nutritional_info),
        is_available=payload.is_available,
        description=payload.description,
        image_url=payload.image_url,
    )
    return material_to_record(container.catalog_service.add(material))


@router.get("/stats")
async def material_stats(request: Request) -> dict[str, object]:
    """Return catalog counts."""
    container: AppContainer = request.app.state.container
    catalog = container.catalog_service
    by_category = catalog.count_by_category()
    return {
        "total": sum(by_category.values()),
        "available": catalog.available_count(),
        "by_category": {
            category_code(category): count for category, count in by_category.items()
        },
    }


@router.get("/{material_id}")
async def get_material(material_id: str, request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return material_to_record(container.catalog_service.get(material_id))


@router.patch("/{material_id}/availability")
async def update_availability(
    material_id: str, payload: AvailabilityUpdate, request: Request
) -> dict[str, object]:
    """Set or toggle a material's availability."""
    container: AppContainer = request.app.state.container
    catalog = container.catalog_service
    if payload.is_available is None:
        material = catalog.toggle_availability(material_id)
    else:
        material = catalog.set_availability(material_id, payload.is_available)
    return material_to_record(material)


@router.delete("/{material_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_material(material_id: str, request: Request) -> None:
    container: AppContainer = request.app.state.container
    container.catalog_service.delete(material_id)
