"""Tests for domain models and code tables."""

from datetime import UTC, date, datetime

import pytest

from meal_calendar.domain.codes import (
    category_code,
    meal_type_code,
    parse_category,
    parse_meal_type,
)
from meal_calendar.domain.errors import UnknownEnumValueError
from meal_calendar.domain.materials import MaterialCategory
from meal_calendar.domain.meal_plans import MealPlan
from meal_calendar.domain.meals import MealType
from tests.conftest import FIXED_NOW, make_material, make_meal


def test_material_equality_is_by_id() -> None:
    first = make_material("rice", MaterialCategory.GRAINS, "Rice")
    renamed = make_material("rice", MaterialCategory.GRAINS, "Basmati Rice")

    assert first == renamed
    assert len({first, renamed}) == 1
    assert not first.is_protein
    assert make_material("beef", MaterialCategory.MEAT).is_protein


def test_meal_material_ids() -> None:
    rice = make_material("rice", MaterialCategory.GRAINS)
    chicken = make_material("chicken", MaterialCategory.POULTRY)
    meal = make_meal("bowl", materials=(rice, chicken))

    assert meal.material_ids == frozenset({"rice", "chicken"})


def test_meal_plan_has_every_slot() -> None:
    plan = MealPlan.empty("plan-1", date(2026, 1, 5), FIXED_NOW)

    assert set(plan.meals) == set(MealType)
    assert not plan.has_any_meals
    assert plan.total_calories is None


def test_meal_plan_rejects_unknown_slot() -> None:
    with pytest.raises(ValueError, match="Unknown meal slots"):
        MealPlan(
            id="plan-1",
            date=date(2026, 1, 5),
            created_at=FIXED_NOW,
            updated_at=FIXED_NOW,
            meals={"brunch": None},  # type: ignore[dict-item]
        )


def test_with_meal_returns_updated_copy() -> None:
    plan = MealPlan.empty("plan-1", date(2026, 1, 5), FIXED_NOW)
    later = datetime(2026, 1, 8, tzinfo=UTC)
    meal = make_meal("soup", MealType.DINNER, preparation_time=30, calories=250)

    updated = plan.with_meal(MealType.DINNER, meal, later)

    assert plan.meal_for(MealType.DINNER) is None
    assert updated.meal_for(MealType.DINNER) == meal
    assert updated.updated_at == later
    assert updated.total_preparation_time == 30
    assert updated.total_calories == 250
    assert updated.without_meal(MealType.DINNER, later).all_meals == []


def test_totals_skip_unknown_calories() -> None:
    plan = MealPlan(
        id="plan-1",
        date=date(2026, 1, 5),
        created_at=FIXED_NOW,
        updated_at=FIXED_NOW,
        meals={
            MealType.BREAKFAST: make_meal("oats", MealType.BREAKFAST, calories=None),
            MealType.LUNCH: make_meal("bowl", MealType.LUNCH, calories=500),
        },
    )

    assert plan.total_calories == 500
    assert plan.total_preparation_time == 40


def test_is_today_compares_date_components_only() -> None:
    plan = MealPlan.empty("plan-1", date(2026, 1, 5), FIXED_NOW)

    assert plan.is_today(datetime(2026, 1, 5, 23, 59, tzinfo=UTC))
    assert plan.is_today(date(2026, 1, 5))
    assert plan.is_past(date(2026, 1, 6))
    assert plan.is_future(date(2026, 1, 4))
    assert not plan.is_today(date(2026, 1, 6))


def test_plan_date_drops_time_of_day() -> None:
    plan = MealPlan.empty("plan-1", datetime(2026, 1, 5, 8, 0, tzinfo=UTC), FIXED_NOW)

    assert plan.date == date(2026, 1, 5)
    assert type(plan.date) is date
    assert plan.is_today(date(2026, 1, 5))
    assert plan.is_today(datetime(2026, 1, 5, 21, 0, tzinfo=UTC))
    assert plan.is_past(date(2026, 1, 6))
    assert plan.is_future(date(2026, 1, 4))


def test_plan_slots_are_read_only() -> None:
    plan = MealPlan.empty("plan-1", date(2026, 1, 5), FIXED_NOW)

    with pytest.raises(TypeError):
        plan.meals[MealType.LUNCH] = make_meal("bowl", MealType.LUNCH)

    assert plan.meal_for(MealType.LUNCH) is None


def test_code_tables_are_bidirectional() -> None:
    for category in MaterialCategory:
        assert parse_category(category_code(category)) is category
    for meal_type in MealType:
        assert parse_meal_type(meal_type_code(meal_type)) is meal_type


@pytest.mark.parametrize("raw", ["brunch", "", None, 3])
def test_unknown_meal_type_code(raw) -> None:
    with pytest.raises(UnknownEnumValueError):
        parse_meal_type(raw)


def test_unknown_category_code() -> None:
    with pytest.raises(UnknownEnumValueError, match="MaterialCategory"):
        parse_category("fruit")
