"""Conversion between domain models and stored records."""

from collections.abc import Mapping
from datetime import date, datetime

from meal_calendar.domain.codes import (
    category_code,
    meal_type_code,
    parse_category,
    parse_meal_type,
)
from meal_calendar.domain.errors import PersistenceError
from meal_calendar.domain.materials import Material
from meal_calendar.domain.meal_plans import MealPlan
from meal_calendar.domain.meals import Meal, MealType


def material_to_record(material: Material) -> dict[str, object]:
    return {
        "id": material.id,
        "name": material.name,
        "category": category_code(material.category),
        "nutritional_info": list(material.nutritional_info),
        "is_available": material.is_available,
        "description": material.description,
        "image_url": material.image_url,
    }


def material_from_record(record: Mapping[str, object]) -> Material:
    return Material(
        id=str(_require(record, "id")),
        name=str(_require(record, "name")),
        category=parse_category(record.get("category")),
        nutritional_info=tuple(str(item) for item in record.get("nutritional_info") or ()),
        is_available=bool(record.get("is_available", True)),
        description=_optional_str(record.get("description")),
        image_url=_optional_str(record.get("image_url")),
    )


def meal_to_record(meal: Meal) -> dict[str, object]:
    return {
        "id": meal.id,
        "name": meal.name,
        "description": meal.description,
        "materials": [material_to_record(material) for material in meal.materials],
        "meal_type": meal_type_code(meal.meal_type),
        "preparation_time": meal.preparation_time,
        "instructions": meal.instructions,
        "created_at": meal.created_at.isoformat(),
        "image_url": meal.image_url,
        "calories": meal.calories,
        "tags": sorted(meal.tags),
    }


def meal_from_record(record: Mapping[str, object]) -> Meal:
    calories = record.get("calories")
    return Meal(
        id=str(_require(record, "id")),
        name=str(_require(record, "name")),
        description=str(record.get("description") or ""),
        materials=tuple(
            material_from_record(item) for item in record.get("materials") or ()
        ),
        meal_type=parse_meal_type(record.get("meal_type")),
        created_at=_parse_datetime(_require(record, "created_at")),
        preparation_time=int(record.get("preparation_time") or 0),
        instructions=str(record.get("instructions") or ""),
        calories=int(calories) if calories is not None else None,
        tags=frozenset(str(tag) for tag in record.get("tags") or ()),
        image_url=_optional_str(record.get("image_url")),
    )


def meal_plan_to_record(plan: MealPlan) -> dict[str, object]:
    """Return the document form with each slot embedding its meal."""
    record = _plan_header(plan)
    for meal_type, meal in plan.meals.items():
        record[f"{meal_type_code(meal_type)}_meal"] = (
            meal_to_record(meal) if meal is not None else None
        )
    return record


def meal_plan_from_record(record: Mapping[str, object]) -> MealPlan:
    slots: dict[MealType, Meal | None] = {}
    for meal_type in MealType:
        raw = record.get(f"{meal_type_code(meal_type)}_meal")
        slots[meal_type] = meal_from_record(raw) if raw else None
    return _plan_from_header(record, slots)


def meal_plan_to_row(plan: MealPlan) -> dict[str, object]:
    """Return the relational form with meal id columns per slot."""
    row = _plan_header(plan)
    for meal_type, meal in plan.meals.items():
        row[f"{meal_type_code(meal_type)}_meal_id"] = meal.id if meal else None
    return row


def meal_plan_from_row(
    row: Mapping[str, object], meals_by_id: Mapping[str, Meal]
) -> MealPlan:
    """Hydrate a plan row; ids missing from meals_by_id become empty slots."""
    slots: dict[MealType, Meal | None] = {}
    for meal_type in MealType:
        meal_id = row.get(f"{meal_type_code(meal_type)}_meal_id")
        slots[meal_type] = meals_by_id.get(str(meal_id)) if meal_id else None
    return _plan_from_header(row, slots)


def slot_meal_ids(row: Mapping[str, object]) -> set[str]:
    """Return the meal ids referenced by a plan row."""
    ids = set()
    for meal_type in MealType:
        meal_id = row.get(f"{meal_type_code(meal_type)}_meal_id")
        if meal_id:
            ids.add(str(meal_id))
    return ids


def _plan_header(plan: MealPlan) -> dict[str, object]:
    return {
        "id": plan.id,
        "plan_date": plan.date.isoformat(),
        "created_at": plan.created_at.isoformat(),
        "updated_at": plan.updated_at.isoformat(),
        "notes": plan.notes,
        "is_completed": plan.is_completed,
    }


def _plan_from_header(
    record: Mapping[str, object], slots: dict[MealType, Meal | None]
) -> MealPlan:
    return MealPlan(
        id=str(_require(record, "id")),
        date=_parse_date(_require(record, "plan_date")),
        meals=slots,
        created_at=_parse_datetime(_require(record, "created_at")),
        updated_at=_parse_datetime(_require(record, "updated_at")),
        notes=_optional_str(record.get("notes")),
        is_completed=bool(record.get("is_completed", False)),
    )


def _require(record: Mapping[str, object], key: str) -> object:
    value = record.get(key)
    if value is None:
        raise PersistenceError(f"Stored record is missing '{key}'")
    return value


def _parse_datetime(value: object) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


def _parse_date(value: object) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def _optional_str(value: object) -> str | None:
    return str(value) if value is not None else None
