"""Bidirectional tables between domain enums and their stored codes."""

from meal_calendar.domain.errors import UnknownEnumValueError
from meal_calendar.domain.materials import MaterialCategory
from meal_calendar.domain.meals import MealType

CATEGORY_CODES: dict[MaterialCategory, str] = {
    MaterialCategory.MEAT: "meat",
    MaterialCategory.SEAFOOD: "seafood",
    MaterialCategory.POULTRY: "poultry",
    MaterialCategory.VEGETABLES: "vegetables",
    MaterialCategory.GRAINS: "grains",
    MaterialCategory.DAIRY: "dairy",
    MaterialCategory.SPICES: "spices",
}
_CATEGORIES_BY_CODE = {code: category for category, code in CATEGORY_CODES.items()}

MEAL_TYPE_CODES: dict[MealType, str] = {
    MealType.BREAKFAST: "breakfast",
    MealType.LUNCH: "lunch",
    MealType.DINNER: "dinner",
    MealType.SNACK: "snack",
}
_MEAL_TYPES_BY_CODE = {code: meal_type for meal_type, code in MEAL_TYPE_CODES.items()}


def category_code(category: MaterialCategory) -> str:
    """Return the stored code for a material category."""
    return CATEGORY_CODES[category]


def parse_category(raw: object) -> MaterialCategory:
    """Return the category for a stored code."""
    category = _CATEGORIES_BY_CODE.get(raw) if isinstance(raw, str) else None
    if category is None:
        raise UnknownEnumValueError("MaterialCategory", raw)
    return category


def meal_type_code(meal_type: MealType) -> str:
    """Return the stored code for a meal type."""
    return MEAL_TYPE_CODES[meal_type]


def parse_meal_type(raw: object) -> MealType:
    """Return the meal type for a stored code."""
    meal_type = _MEAL_TYPES_BY_CODE.get(raw) if isinstance(raw, str) else None
    if meal_type is None:
        raise UnknownEnumValueError("MealType", raw)
    return meal_type
