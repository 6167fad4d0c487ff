"""Meal plan calendar endpoints."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING, Literal

from fastapi import APIRouter, Request, status
from fastapi.responses import PlainTextResponse

from meal_calendar.adapters.records import meal_plan_to_record
from meal_calendar.api.schemas import (
    CompletedUpdate,
    CopyPlanRequest,
    GenerateMonthRequest,
    GeneratePlanRequest,
    GenerateWeekRequest,
    NotesUpdate,
    SlotUpdate,
)
from meal_calendar.domain.codes import parse_meal_type
from meal_calendar.domain.errors import NotFoundError
from meal_calendar.domain.meals import MealType
from meal_calendar.services.meal_plans import start_of_week
from meal_calendar.services.sharing import render_meal_plan

if TYPE_CHECKING:
    from meal_calendar.containers import AppContainer
    from meal_calendar.services.assembler import SaveRangeResult

router = APIRouter(prefix="/plans", tags=["plans"])


@router.get("")
async def list_plans(
    request: Request, start: date | None = None, end: date | None = None
) -> dict[str, object]:
    """Return plans for a date range, or the week starting at start."""
    container: AppContainer = request.app.state.container
    service = container.meal_plan_service
    if start is not None and end is not None:
        plans = service.get_range(start, end)
    else:
        plans = service.get_week(start)
    return {"plans": [meal_plan_to_record(plan) for plan in plans]}


@router.get("/stats")
async def plan_stats(request: Request) -> dict[str, int]:
    container: AppContainer = request.app.state.container
    stats = container.meal_plan_service.statistics()
    return {
        "total_plans": stats.total_plans,
        "completed_plans": stats.completed_plans,
        "this_week_plans": stats.this_week_plans,
    }


@router.post("/week/generate")
async def generate_week(
    payload: GenerateWeekRequest, request: Request
) -> dict[str, object]:
    """Generate and save seven consecutive plans."""
    container: AppContainer = request.app.state.container
    start = payload.start_date or start_of_week(container.clock.today())
    result = await container.assembler.generate_week(
        start,
        container.catalog_service.list(),
        overwrite=payload.overwrite,
        meal_types=_meal_types(container, payload.meal_types),
        dietary_restrictions=payload.dietary_restrictions,
    )
    return _save_result(result)


@router.post("/month/generate")
async def generate_month(
    payload: GenerateMonthRequest, request: Request
) -> dict[str, object]:
    """Generate and save a plan for every date of a month."""
    container: AppContainer = request.app.state.container
    result = await container.assembler.generate_month(
        payload.year,
        payload.month,
        container.catalog_service.list(),
        overwrite=payload.overwrite,
        meal_types=_meal_types(container, payload.meal_types),
        dietary_restrictions=payload.dietary_restrictions,
    )
    return _save_result(result)


@router.get("/{day}")
async def get_plan(day: date, request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    plan = container.meal_plan_service.get_by_date(day)
    if plan is None:
        raise NotFoundError("MealPlan", day.isoformat())
    return meal_plan_to_record(plan)


@router.post("/{day}/generate")
async def generate_day(
    day: date, payload: GeneratePlanRequest, request: Request
) -> dict[str, object]:
    """Generate and save the plan for one date."""
    container: AppContainer = request.app.state.container
    result = await container.assembler.generate_day(
        day,
        container.catalog_service.list(),
        overwrite=payload.overwrite,
        meal_types=_meal_types(container, payload.meal_types),
        dietary_restrictions=payload.dietary_restrictions,
    )
    return _save_result(result)


@router.put("/{day}/slots/{meal_type}")
async def update_slot(
    day: date, meal_type: str, payload: SlotUpdate, request: Request
) -> dict[str, object]:
    """Put a stored meal into a slot, or clear the slot."""
    container: AppContainer = request.app.state.container
    slot = parse_meal_type(meal_type.lower())
    if payload.meal_id is None:
        plan = container.meal_plan_service.get_by_date(day)
        if plan is None:
            raise NotFoundError("MealPlan", day.isoformat())
        updated = container.meal_plan_service.update_meal_in_plan(plan.id, slot, None)
        return meal_plan_to_record(updated)
    meal = container.meal_service.get_meal(payload.meal_id)
    plan = await container.assembler.assign_meal(day, meal, slot)
    return meal_plan_to_record(plan)


@router.post("/{day}/copy")
async def copy_plan(
    day: date, payload: CopyPlanRequest, request: Request
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    plan = container.meal_plan_service.copy_plan(day, payload.target_date)
    return meal_plan_to_record(plan)


@router.get("/{day}/share", response_class=PlainTextResponse)
async def share_plan(  # noqa: PLR0913
    day: date,
    request: Request,
    style: Literal["text", "formatted"] = "text",
    include_materials: bool = True,
    include_instructions: bool = False,
    include_nutrition: bool = True,
) -> PlainTextResponse:
    """Return the plan as shareable text."""
    container: AppContainer = request.app.state.container
    plan = container.meal_plan_service.get_by_date(day)
    if plan is None:
        raise NotFoundError("MealPlan", day.isoformat())
    return PlainTextResponse(
        render_meal_plan(
            plan,
            style=style,
            include_materials=include_materials,
            include_instructions=include_instructions,
            include_nutrition=include_nutrition,
        )
    )


@router.post("/{plan_id}/completed")
async def mark_completed(
    plan_id: str, payload: CompletedUpdate, request: Request
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    plan = container.meal_plan_service.mark_completed(plan_id, payload.is_completed)
    return meal_plan_to_record(plan)


@router.put("/{plan_id}/notes")
async def set_notes(
    plan_id: str, payload: NotesUpdate, request: Request
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    plan = container.meal_plan_service.set_notes(plan_id, payload.notes)
    return meal_plan_to_record(plan)


@router.delete("/{plan_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_plan(plan_id: str, request: Request) -> None:
    container: AppContainer = request.app.state.container
    container.meal_plan_service.delete(plan_id)


def _meal_types(
    container: AppContainer, raw: list[str] | None
) -> list[MealType] | None:
    if raw is None:
        return container.meal_types
    return [parse_meal_type(value.lower()) for value in raw]


def _save_result(result: SaveRangeResult) -> dict[str, object]:
    return {
        "saved": [meal_plan_to_record(plan) for plan in result.saved],
        "failures": [
            {"date": failure.date.isoformat(), "error": failure.message}
            for failure in result.failures
        ],
    }
