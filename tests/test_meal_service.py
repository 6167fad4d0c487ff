"""Tests for the meal service."""

from datetime import UTC, date, datetime

import pytest

from meal_calendar.domain.errors import NotFoundError
from meal_calendar.domain.materials import MaterialCategory
from meal_calendar.domain.meal_plans import MealPlan
from meal_calendar.domain.meals import MealType
from tests.conftest import FIXED_NOW, make_material, make_meal


def test_filters_meals_by_type_and_text(meal_service) -> None:
    meal_service.add_meal(make_meal("oats", MealType.BREAKFAST, name="Oat Porridge"))
    meal_service.add_meal(make_meal("bowl", MealType.LUNCH, name="Rice Bowl"))

    assert [meal.id for meal in meal_service.get_meals_by_type(MealType.LUNCH)] == [
        "bowl"
    ]
    assert [meal.id for meal in meal_service.search_meals("porridge")] == ["oats"]
    assert [meal.id for meal in meal_service.search_meals("description")] == [
        "oats",
        "bowl",
    ]
    assert meal_service.count_by_type()[MealType.DINNER] == 0


def test_usable_meals_need_every_material_available(meal_service, catalog) -> None:
    rice = make_material("rice", MaterialCategory.GRAINS)
    milk = make_material("milk", MaterialCategory.DAIRY, is_available=False)
    catalog.add_many([rice, milk])
    meal_service.add_meal(make_meal("plain_rice", materials=(rice,)))
    meal_service.add_meal(make_meal("rice_pudding", materials=(rice, milk)))

    usable = meal_service.get_meals_usable_with_available_materials()

    assert [meal.id for meal in usable] == ["plain_rice"]


def test_update_unknown_meal_raises(meal_service) -> None:
    with pytest.raises(NotFoundError, match="Meal not found: ghost"):
        meal_service.update_meal(make_meal("ghost"))
    with pytest.raises(NotFoundError):
        meal_service.get_meal("ghost")


def test_delete_unreferenced_meal(meal_service, meal_repository) -> None:
    meal_service.add_meal(make_meal("bowl"))

    meal_service.delete_meal("bowl")

    assert meal_repository.get_meal("bowl") is None


def test_delete_referenced_meal_clears_plan_slots(
    meal_service, plan_repository, clock
) -> None:
    bowl = make_meal("bowl", MealType.LUNCH)
    soup = make_meal("soup", MealType.DINNER)
    meal_service.add_meal(bowl)
    meal_service.add_meal(soup)
    plan = MealPlan(
        id="plan-1",
        date=date(2026, 1, 5),
        created_at=FIXED_NOW,
        updated_at=FIXED_NOW,
        meals={MealType.LUNCH: bowl, MealType.DINNER: soup},
    )
    plan_repository.save_plan(plan)
    later = datetime(2026, 1, 8, 12, 0, tzinfo=UTC)
    clock.advance(later)

    meal_service.delete_meal("bowl")

    stored = plan_repository.get_plan("plan-1")
    assert stored.meal_for(MealType.LUNCH) is None
    assert stored.meal_for(MealType.DINNER) == soup
    assert stored.updated_at == later
    assert plan_repository.find_by_meal("bowl") == []


def test_delete_unknown_meal_raises(meal_service) -> None:
    with pytest.raises(NotFoundError):
        meal_service.delete_meal("ghost")
