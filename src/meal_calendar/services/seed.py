"""Default catalog and sample meals for a fresh store."""

import logging
from dataclasses import dataclass

from meal_calendar.domain.materials import Material, MaterialCategory
from meal_calendar.domain.meals import Meal, MealType
from meal_calendar.services.catalog import MaterialCatalogService
from meal_calendar.services.clock import Clock
from meal_calendar.services.meals import MealService

_logger = logging.getLogger(__name__)

_DEFAULT_MATERIALS: tuple[tuple[str, str, MaterialCategory, str, tuple[str, ...]], ...] = (
    (
        "mat_chicken_breast",
        "Chicken Breast",
        MaterialCategory.POULTRY,
        "Boneless, skinless chicken breast",
        ("High protein", "Low carb", "165 calories per 100g"),
    ),
    (
        "mat_salmon",
        "Salmon Fillet",
        MaterialCategory.SEAFOOD,
        "Fresh Atlantic salmon fillet",
        ("Rich in omega-3", "High protein", "208 calories per 100g"),
    ),
    (
        "mat_ground_beef",
        "Ground Beef",
        MaterialCategory.MEAT,
        "Lean ground beef (85/15)",
        ("High protein", "Rich in iron", "250 calories per 100g"),
    ),
    (
        "mat_eggs",
        "Eggs",
        MaterialCategory.DAIRY,
        "Large eggs",
        ("Complete protein", "Rich in vitamins", "155 calories per 100g"),
    ),
    (
        "mat_broccoli",
        "Broccoli",
        MaterialCategory.VEGETABLES,
        "Fresh broccoli crowns",
        ("High in vitamin C", "Rich in fiber", "34 calories per 100g"),
    ),
    (
        "mat_carrots",
        "Carrots",
        MaterialCategory.VEGETABLES,
        "Baby carrots",
        ("Rich in beta-carotene", "Good fiber source", "41 calories per 100g"),
    ),
    (
        "mat_spinach",
        "Spinach",
        MaterialCategory.VEGETABLES,
        "Fresh baby spinach",
        ("Rich in iron", "High in vitamins", "23 calories per 100g"),
    ),
    (
        "mat_bell_peppers",
        "Bell Peppers",
        MaterialCategory.VEGETABLES,
        "Mixed color bell peppers",
        ("High vitamin C", "Antioxidants", "31 calories per 100g"),
    ),
    (
        "mat_onions",
        "Yellow Onions",
        MaterialCategory.VEGETABLES,
        "Fresh yellow onions",
        ("Low calorie", "Rich in flavonoids", "40 calories per 100g"),
    ),
    (
        "mat_tomatoes",
        "Tomatoes",
        MaterialCategory.VEGETABLES,
        "Ripe vine tomatoes",
        ("Rich in lycopene", "Vitamin C", "18 calories per 100g"),
    ),
    (
        "mat_garlic",
        "Garlic",
        MaterialCategory.VEGETABLES,
        "Fresh garlic bulbs",
        ("Immune support", "Antioxidants", "149 calories per 100g"),
    ),
    (
        "mat_rice",
        "White Rice",
        MaterialCategory.GRAINS,
        "Long grain white rice",
        ("Energy source", "Low fat", "130 calories per 100g"),
    ),
    (
        "mat_pasta",
        "Spaghetti Pasta",
        MaterialCategory.GRAINS,
        "Dried spaghetti",
        ("Energy source", "Low fat", "131 calories per 100g"),
    ),
    (
        "mat_quinoa",
        "Quinoa",
        MaterialCategory.GRAINS,
        "White quinoa",
        ("Complete protein", "High fiber", "120 calories per 100g"),
    ),
    (
        "mat_bread",
        "Whole Wheat Bread",
        MaterialCategory.GRAINS,
        "Sliced whole wheat bread",
        ("Whole grain", "Fiber", "247 calories per 100g"),
    ),
    (
        "mat_milk",
        "Milk",
        MaterialCategory.DAIRY,
        "Whole milk",
        ("Calcium", "Vitamin D", "61 calories per 100g"),
    ),
    (
        "mat_cheese",
        "Cheddar Cheese",
        MaterialCategory.DAIRY,
        "Sharp cheddar cheese",
        ("High calcium", "Protein", "403 calories per 100g"),
    ),
    (
        "mat_greek_yogurt",
        "Greek Yogurt",
        MaterialCategory.DAIRY,
        "Plain greek yogurt",
        ("High protein", "Probiotics", "59 calories per 100g"),
    ),
    (
        "mat_salt",
        "Salt",
        MaterialCategory.SPICES,
        "Sea salt",
        ("Sodium",),
    ),
    (
        "mat_pepper",
        "Black Pepper",
        MaterialCategory.SPICES,
        "Ground black pepper",
        ("Antioxidants",),
    ),
    (
        "mat_olive_oil",
        "Olive Oil",
        MaterialCategory.SPICES,
        "Extra virgin olive oil",
        ("Healthy fats", "884 calories per 100g"),
    ),
)


@dataclass(frozen=True)
class _SampleMeal:
    id: str
    name: str
    description: str
    material_ids: tuple[str, ...]
    meal_type: MealType
    preparation_time: int
    instructions: str
    calories: int
    tags: tuple[str, ...]


_SAMPLE_MEALS = (
    _SampleMeal(
        id="meal_scrambled_eggs",
        name="Scrambled Eggs with Cheese",
        description="Fluffy scrambled eggs with melted cheddar cheese",
        material_ids=("mat_eggs", "mat_milk", "mat_cheese", "mat_salt", "mat_pepper"),
        meal_type=MealType.BREAKFAST,
        preparation_time=15,
        instructions=(
            "Beat 3 eggs with a splash of milk. Heat pan over medium heat. "
            "Add eggs and gently scramble. Add cheese just before eggs are set. "
            "Season with salt and pepper."
        ),
        calories=320,
        tags=("breakfast", "protein", "quick"),
    ),
    _SampleMeal(
        id="meal_chicken_rice_bowl",
        name="Chicken and Rice Bowl",
        description="Grilled chicken breast with steamed rice and broccoli",
        material_ids=(
            "mat_chicken_breast",
            "mat_rice",
            "mat_broccoli",
            "mat_garlic",
            "mat_olive_oil",
            "mat_salt",
            "mat_pepper",
        ),
        meal_type=MealType.LUNCH,
        preparation_time=40,
        instructions=(
            "Season chicken breast with salt, pepper, and garlic. "
            "Grill chicken for 6-7 minutes per side. Cook rice. "
            "Steam broccoli until tender. Slice chicken and serve over rice."
        ),
        calories=450,
        tags=("lunch", "protein", "healthy"),
    ),
    _SampleMeal(
        id="meal_salmon_quinoa",
        name="Herb-Crusted Salmon with Quinoa",
        description="Pan-seared salmon with quinoa and fresh vegetables",
        material_ids=(
            "mat_salmon",
            "mat_quinoa",
            "mat_spinach",
            "mat_tomatoes",
            "mat_olive_oil",
            "mat_salt",
            "mat_pepper",
        ),
        meal_type=MealType.DINNER,
        preparation_time=40,
        instructions=(
            "Cook quinoa. Season salmon with herbs, salt, and pepper. "
            "Cook salmon 4-5 minutes per side in olive oil. "
            "Saute spinach until wilted. Serve over quinoa with tomatoes."
        ),
        calories=520,
        tags=("dinner", "seafood", "healthy"),
    ),
    _SampleMeal(
        id="meal_beef_pasta",
        name="Classic Beef Pasta",
        description="Spaghetti with ground beef and tomato sauce",
        material_ids=(
            "mat_pasta",
            "mat_ground_beef",
            "mat_tomatoes",
            "mat_onions",
            "mat_garlic",
            "mat_cheese",
            "mat_olive_oil",
            "mat_salt",
            "mat_pepper",
        ),
        meal_type=MealType.DINNER,
        preparation_time=45,
        instructions=(
            "Cook pasta. Brown ground beef. Add onions and garlic until soft. "
            "Add tomatoes and simmer 15 minutes. Serve over pasta with cheese."
        ),
        calories=480,
        tags=("dinner", "pasta", "comfort"),
    ),
    _SampleMeal(
        id="meal_yogurt_snack",
        name="Greek Yogurt with Carrots",
        description="Healthy snack with protein and vegetables",
        material_ids=("mat_greek_yogurt", "mat_carrots"),
        meal_type=MealType.SNACK,
        preparation_time=5,
        instructions="Serve greek yogurt in a bowl. Cut carrots into sticks.",
        calories=150,
        tags=("snack", "healthy", "quick"),
    ),
)


def default_materials() -> list[Material]:
    """Return the default ingredient catalog."""
    return [
        Material(
            id=material_id,
            name=name,
            category=category,
            description=description,
            nutritional_info=nutritional_info,
        )
        for material_id, name, category, description, nutritional_info in (
            _DEFAULT_MATERIALS
        )
    ]


@dataclass
class SeedDataService:
    """Populates an empty store with the default catalog and sample meals."""

    catalog: MaterialCatalogService
    meal_service: MealService
    clock: Clock

    def initialize(self) -> bool:
        """Seed the store when the catalog is empty; return whether it did."""
        if self.catalog.list():
            return False
        materials = self.catalog.add_many(default_materials())
        for meal in sample_meals(materials, self.clock):
            self.meal_service.add_meal(meal)
        _logger.info("Seed data initialized: materials=%s", len(materials))
        return True


def sample_meals(materials: list[Material], clock: Clock) -> list[Meal]:
    """Return the sample meals whose materials exist in the given list."""
    by_id = {material.id: material for material in materials}
    meals = []
    for sample in _SAMPLE_MEALS:
        used = tuple(
            by_id[material_id]
            for material_id in sample.material_ids
            if material_id in by_id
        )
        if not used:
            continue
        meals.append(
            Meal(
                id=sample.id,
                name=sample.name,
                description=sample.description,
                materials=used,
                meal_type=sample.meal_type,
                created_at=clock.now(),
                preparation_time=sample.preparation_time,
                instructions=sample.instructions,
                calories=sample.calories,
                tags=frozenset(sample.tags),
            )
        )
    return meals
