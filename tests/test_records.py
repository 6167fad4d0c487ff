"""Tests for record conversion."""

from datetime import date

import pytest

from meal_calendar.adapters.records import (
    material_from_record,
    material_to_record,
    meal_from_record,
    meal_plan_from_record,
    meal_plan_from_row,
    meal_plan_to_record,
    meal_plan_to_row,
    meal_to_record,
    slot_meal_ids,
)
from meal_calendar.domain.errors import PersistenceError, UnknownEnumValueError
from meal_calendar.domain.materials import MaterialCategory
from meal_calendar.domain.meal_plans import MealPlan
from meal_calendar.domain.meals import MealType
from tests.conftest import FIXED_NOW, make_material, make_meal


def _plan() -> MealPlan:
    rice = make_material("rice", MaterialCategory.GRAINS)
    chicken = make_material("chicken", MaterialCategory.POULTRY)
    return MealPlan(
        id="plan-1",
        date=date(2026, 1, 5),
        created_at=FIXED_NOW,
        updated_at=FIXED_NOW,
        meals={
            MealType.LUNCH: make_meal("bowl", MealType.LUNCH, (rice, chicken)),
            MealType.SNACK: make_meal("yogurt", MealType.SNACK),
        },
        notes="prep on sunday",
    )


def test_material_record_uses_category_code() -> None:
    material = make_material("salmon", MaterialCategory.SEAFOOD, "Salmon")

    record = material_to_record(material)

    assert record["category"] == "seafood"
    restored = material_from_record(record)
    assert restored.category is MaterialCategory.SEAFOOD
    assert restored.name == "Salmon"


def test_material_record_with_unknown_category() -> None:
    with pytest.raises(UnknownEnumValueError):
        material_from_record({"id": "x", "name": "X", "category": "fruit"})


def test_meal_record_keeps_tags_and_timestamps() -> None:
    meal = make_meal("bowl")
    record = meal_to_record(meal)

    assert record["meal_type"] == "lunch"
    restored = meal_from_record(record)
    assert restored.created_at == FIXED_NOW
    assert restored.calories == meal.calories


def test_meal_plan_document_round_trip() -> None:
    plan = _plan()

    restored = meal_plan_from_record(meal_plan_to_record(plan))

    assert restored.id == plan.id
    assert restored.date == plan.date
    assert restored.meals == plan.meals
    assert restored.notes == "prep on sunday"
    lunch = restored.meal_for(MealType.LUNCH)
    assert lunch is not None
    assert lunch.material_ids == frozenset({"rice", "chicken"})


def test_meal_plan_row_round_trip() -> None:
    plan = _plan()
    row = meal_plan_to_row(plan)

    assert row["lunch_meal_id"] == "bowl"
    assert row["breakfast_meal_id"] is None
    assert slot_meal_ids(row) == {"bowl", "yogurt"}

    restored = meal_plan_from_row(row, {meal.id: meal for meal in plan.all_meals})
    assert restored.meals == plan.meals


def test_meal_plan_row_with_dangling_meal_id() -> None:
    row = meal_plan_to_row(_plan())

    restored = meal_plan_from_row(row, {})

    assert not restored.has_any_meals


def test_missing_required_field_raises_persistence_error() -> None:
    record = meal_plan_to_record(_plan())
    del record["plan_date"]

    with pytest.raises(PersistenceError, match="plan_date"):
        meal_plan_from_record(record)
