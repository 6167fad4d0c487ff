"""In-process repositories used as the local storage backend."""

from dataclasses import dataclass, field
from datetime import date

from meal_calendar.domain.materials import Material
from meal_calendar.domain.meal_plans import MealPlan
from meal_calendar.domain.meals import Meal
from meal_calendar.services.catalog import MaterialRepository
from meal_calendar.services.meal_plans import MealPlanRepository
from meal_calendar.services.meals import MealRepository


@dataclass
class InMemoryMaterialRepository(MaterialRepository):
    """Materials kept in insertion order."""

    materials: dict[str, Material] = field(default_factory=dict)

    def list_materials(self) -> list[Material]:
        return list(self.materials.values())

    def get_material(self, material_id: str) -> Material | None:
        return self.materials.get(material_id)

    def add_material(self, material: Material) -> None:
        self.materials[material.id] = material

    def update_material(self, material: Material) -> bool:
        if material.id not in self.materials:
            return False
        self.materials[material.id] = material
        return True

    def delete_material(self, material_id: str) -> bool:
        return self.materials.pop(material_id, None) is not None


@dataclass
class InMemoryMealRepository(MealRepository):
    """Meals kept in insertion order."""

    meals: dict[str, Meal] = field(default_factory=dict)

    def list_meals(self) -> list[Meal]:
        return list(self.meals.values())

    def get_meal(self, meal_id: str) -> Meal | None:
        return self.meals.get(meal_id)

    def add_meal(self, meal: Meal) -> None:
        self.meals[meal.id] = meal

    def update_meal(self, meal: Meal) -> bool:
        if meal.id not in self.meals:
            return False
        self.meals[meal.id] = meal
        return True

    def delete_meal(self, meal_id: str) -> bool:
        return self.meals.pop(meal_id, None) is not None


@dataclass
class InMemoryMealPlanRepository(MealPlanRepository):
    """Meal plans keyed by id; each save replaces the whole plan."""

    plans: dict[str, MealPlan] = field(default_factory=dict)

    def get_plan(self, plan_id: str) -> MealPlan | None:
        return self.plans.get(plan_id)

    def get_by_date(self, day: date) -> MealPlan | None:
        for plan in self.plans.values():
            if plan.date == day:
                return plan
        return None

    def list_range(self, start: date, end: date) -> list[MealPlan]:
        return [plan for plan in self.list_plans() if start <= plan.date <= end]

    def list_plans(self) -> list[MealPlan]:
        return sorted(self.plans.values(), key=lambda plan: plan.date)

    def find_by_meal(self, meal_id: str) -> list[MealPlan]:
        return [
            plan
            for plan in self.list_plans()
            if any(meal is not None and meal.id == meal_id for meal in plan.meals.values())
        ]

    def save_plan(self, plan: MealPlan) -> None:
        self.plans[plan.id] = plan

    def delete_plan(self, plan_id: str) -> bool:
        return self.plans.pop(plan_id, None) is not None
