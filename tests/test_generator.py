"""Tests for meal generation."""

from datetime import date, timedelta

import pytest

from meal_calendar.domain.errors import (
    InsufficientMaterialsError,
    InvalidDateRangeError,
    NoValidCombinationError,
)
from meal_calendar.domain.materials import PROTEIN_CATEGORIES, MaterialCategory
from meal_calendar.domain.meals import MealType
from meal_calendar.services.generator import (
    MEAL_TYPE_RULES,
    MealGenerator,
    estimate_preparation_time,
    score_combination,
)
from tests.conftest import FIXED_NOW, FixedClock, SequentialIds, make_material, pantry

CHICKEN = make_material("chicken", MaterialCategory.POULTRY, "Chicken Breast")
RICE = make_material("rice", MaterialCategory.GRAINS, "Rice")


def test_no_materials_raises_insufficient(generator) -> None:
    with pytest.raises(InsufficientMaterialsError):
        generator.generate_meals([], MealType.LUNCH)


def test_only_unavailable_materials_raises_insufficient(generator) -> None:
    sold_out = make_material("rice", MaterialCategory.GRAINS, is_available=False)

    with pytest.raises(InsufficientMaterialsError):
        generator.generate_meals([sold_out], MealType.LUNCH)


def test_chicken_and_rice_lunch(generator) -> None:
    meals = generator.generate_meals([CHICKEN, RICE], MealType.LUNCH, count=1)

    assert len(meals) == 1
    meal = meals[0]
    assert meal.material_ids
    assert meal.material_ids <= {"chicken", "rice"}
    assert meal.meal_type is MealType.LUNCH
    assert meal.name == "Midday Chicken Breast"
    assert meal.preparation_time == 50
    assert meal.calories == 350
    assert meal.created_at == FIXED_NOW
    assert {"lunch", "poultry", "grains"} <= meal.tags
    assert "vegetarian" not in meal.tags


def test_fewer_candidates_than_requested_is_partial_success(generator) -> None:
    meals = generator.generate_meals([CHICKEN, RICE], MealType.LUNCH, count=3)

    assert len(meals) == 1


@pytest.mark.parametrize("count", [0, -1])
def test_non_positive_count_is_rejected(generator, count) -> None:
    with pytest.raises(ValueError, match="count must be at least 1"):
        generator.generate_meals([CHICKEN, RICE], MealType.LUNCH, count=count)


def test_avoided_combinations_are_skipped(generator) -> None:
    with pytest.raises(NoValidCombinationError):
        generator.generate_meals(
            [CHICKEN, RICE],
            MealType.LUNCH,
            avoid={frozenset({"chicken", "rice"})},
        )


def test_generated_materials_are_available_inputs(generator) -> None:
    materials = pantry()
    materials[0] = make_material(
        "chicken", MaterialCategory.POULTRY, is_available=False
    )
    input_ids = {material.id for material in materials if material.is_available}

    for meal_type in MealType:
        for meal in generator.generate_meals(materials, meal_type, count=5):
            assert meal.materials
            assert meal.material_ids <= input_ids
            assert all(material.is_available for material in meal.materials)


def test_results_are_distinct_and_ranked(generator) -> None:
    meals = generator.generate_meals(pantry(), MealType.LUNCH, count=5)
    rule = MEAL_TYPE_RULES[MealType.LUNCH]
    scores = [score_combination(meal.materials, rule) for meal in meals]

    assert len({meal.material_ids for meal in meals}) == 5
    assert scores == sorted(scores, reverse=True)
    assert meals[0].material_ids == {"salmon", "broccoli", "spinach", "rice", "salt"}
    assert meals[0].name == "Midday Salmon and Broccoli"


def test_generation_is_deterministic() -> None:
    first = MealGenerator(clock=FixedClock(), id_factory=SequentialIds())
    second = MealGenerator(clock=FixedClock(), id_factory=SequentialIds())

    left = first.generate_meals(pantry(), MealType.DINNER, count=4)
    right = second.generate_meals(pantry(), MealType.DINNER, count=4)

    assert [meal.name for meal in left] == [meal.name for meal in right]
    assert [meal.material_ids for meal in left] == [
        meal.material_ids for meal in right
    ]
    assert [meal.id for meal in left] == ["id-1", "id-2", "id-3", "id-4"]


def test_breakfast_rules_exclude_protein(generator) -> None:
    for meal in generator.generate_meals(pantry(), MealType.BREAKFAST, count=10):
        assert not any(material.is_protein for material in meal.materials)
        assert 1 <= len(meal.materials) <= 5


def test_snack_stays_small(generator) -> None:
    for meal in generator.generate_meals(pantry(), MealType.SNACK, count=10):
        assert len(meal.materials) <= 3


def test_protein_only_breakfast_has_no_valid_combination(generator) -> None:
    with pytest.raises(NoValidCombinationError, match="breakfast"):
        generator.generate_meals([CHICKEN], MealType.BREAKFAST)


@pytest.mark.parametrize(
    ("restriction", "excluded"),
    [
        ("vegetarian", PROTEIN_CATEGORIES),
        ("vegan", PROTEIN_CATEGORIES | {MaterialCategory.DAIRY}),
        ("pescatarian", {MaterialCategory.MEAT, MaterialCategory.POULTRY}),
    ],
)
def test_dietary_restrictions_exclude_categories(
    generator, restriction, excluded
) -> None:
    for meal_type in (MealType.LUNCH, MealType.SNACK):
        meals = generator.generate_meals(
            pantry(), meal_type, count=5, dietary_restrictions=[restriction]
        )
        for meal in meals:
            assert not {material.category for material in meal.materials} & excluded


def test_gluten_free_excludes_wheat(generator) -> None:
    meals = generator.generate_meals(
        pantry(), MealType.BREAKFAST, count=20, dietary_restrictions=["Gluten-Free"]
    )

    assert all("bread" not in meal.material_ids for meal in meals)


def test_everything_excluded_raises(generator) -> None:
    with pytest.raises(NoValidCombinationError, match="restrictions"):
        generator.generate_meals(
            [CHICKEN], MealType.LUNCH, dietary_restrictions=["vegetarian"]
        )


def test_custom_meal_contains_required_materials(generator) -> None:
    salmon = make_material("salmon", MaterialCategory.SEAFOOD, "Salmon")

    meal = generator.generate_custom_meal(
        [salmon], MealType.DINNER, additional_materials=pantry()
    )

    assert "salmon" in meal.material_ids
    proteins = [material for material in meal.materials if material.is_protein]
    assert proteins == [salmon]


def test_custom_meal_without_required_materials(generator) -> None:
    with pytest.raises(InsufficientMaterialsError):
        generator.generate_custom_meal([], MealType.LUNCH)


def test_custom_meal_with_unavailable_required_material(generator) -> None:
    sold_out = make_material("rice", MaterialCategory.GRAINS, is_available=False)

    with pytest.raises(NoValidCombinationError, match="unavailable"):
        generator.generate_custom_meal([sold_out], MealType.LUNCH)


def test_custom_meal_with_restricted_required_material(generator) -> None:
    with pytest.raises(NoValidCombinationError, match="restrictions"):
        generator.generate_custom_meal(
            [CHICKEN], MealType.LUNCH, dietary_restrictions=["vegan"]
        )


def test_custom_meal_that_breaks_size_rules(generator) -> None:
    required = [
        CHICKEN,
        RICE,
        make_material("salmon", MaterialCategory.SEAFOOD),
        make_material("beef", MaterialCategory.MEAT),
    ]

    with pytest.raises(NoValidCombinationError):
        generator.generate_custom_meal(required, MealType.SNACK)


def test_daily_plan_fills_requested_slots(generator) -> None:
    plan = generator.generate_daily_plan(
        date(2026, 1, 5), pantry(), meal_types=[MealType.LUNCH, MealType.DINNER]
    )

    assert plan.date == date(2026, 1, 5)
    assert plan.meal_for(MealType.BREAKFAST) is None
    lunch = plan.meal_for(MealType.LUNCH)
    dinner = plan.meal_for(MealType.DINNER)
    assert lunch is not None
    assert dinner is not None
    assert lunch.material_ids != dinner.material_ids


def test_weekly_plan_covers_seven_days(generator) -> None:
    start = date(2026, 1, 5)

    plans = generator.generate_weekly_plan(start, pantry())

    assert [plan.date for plan in plans] == [
        start + timedelta(days=offset) for offset in range(7)
    ]
    for plan in plans:
        assert all(plan.meal_for(meal_type) is not None for meal_type in MealType)
    lunches = {plan.meal_for(MealType.LUNCH).material_ids for plan in plans}
    assert len(lunches) == 7


def test_weekly_plan_reuses_combinations_once_exhausted(generator) -> None:
    plans = generator.generate_weekly_plan(
        date(2026, 1, 5), [CHICKEN, RICE], meal_types=[MealType.LUNCH]
    )

    assert len(plans) == 7
    for plan in plans:
        assert plan.meal_for(MealType.LUNCH).material_ids == {"chicken", "rice"}
        assert plan.meal_for(MealType.DINNER) is None


def test_monthly_plan_covers_every_date(generator) -> None:
    plans = generator.generate_monthly_plan(
        2026, 2, pantry(), meal_types=[MealType.SNACK]
    )

    assert len(plans) == 28
    assert plans[0].date == date(2026, 2, 1)
    assert plans[-1].date == date(2026, 2, 28)


def test_invalid_ranges(generator) -> None:
    with pytest.raises(InvalidDateRangeError):
        generator.generate_monthly_plan(2026, 13, pantry())
    with pytest.raises(InvalidDateRangeError):
        generator.generate_range(date(2026, 1, 9), date(2026, 1, 5), pantry())


def test_plan_generation_error_names_the_date(generator) -> None:
    with pytest.raises(NoValidCombinationError) as error:
        generator.generate_daily_plan(
            date(2026, 1, 5), [CHICKEN], meal_types=[MealType.BREAKFAST]
        )

    assert error.value.day == date(2026, 1, 5)
    assert error.value.meal_type is MealType.BREAKFAST


def test_preparation_estimate_rounds_half_up() -> None:
    carrot = make_material("carrot", MaterialCategory.VEGETABLES)

    assert estimate_preparation_time([carrot], MEAL_TYPE_RULES[MealType.SNACK]) == 13
