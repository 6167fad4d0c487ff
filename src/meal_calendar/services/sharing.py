"""Text rendering of a meal plan for sharing."""

from meal_calendar.domain.meal_plans import MealPlan
from meal_calendar.domain.meals import MealType

TEXT = "text"
FORMATTED = "formatted"

_MEAL_TYPE_EMOJI = {
    MealType.BREAKFAST: "\N{SUNRISE}",
    MealType.LUNCH: "\N{BLACK SUN WITH RAYS}",
    MealType.DINNER: "\N{CRESCENT MOON}",
    MealType.SNACK: "\N{POPCORN}",
}


def render_meal_plan(
    plan: MealPlan,
    style: str = TEXT,
    include_materials: bool = True,
    include_instructions: bool = False,
    include_nutrition: bool = True,
) -> str:
    """Return a plain or formatted text summary of a plan."""
    if style not in {TEXT, FORMATTED}:
        raise ValueError(f"Unknown share style: {style}")
    formatted = style == FORMATTED
    lines = []
    if formatted:
        lines += [
            "\N{FORK AND KNIFE WITH PLATE} MEAL PLAN",
            "\N{BOX DRAWINGS DOUBLE HORIZONTAL}" * 20,
        ]
    else:
        lines += ["MEAL PLAN", "=" * 20]
    lines += [f"Date: {format_long_date(plan)}", ""]

    for meal_type in MealType:
        meal = plan.meal_for(meal_type)
        if meal is None:
            continue
        heading = meal_type.value.upper()
        lines.append(f"{_MEAL_TYPE_EMOJI[meal_type]} {heading}" if formatted else heading)
        lines.append(f"- {meal.name}")
        lines.append(f"  {meal.description}")
        if include_nutrition:
            facts = []
            if meal.preparation_time > 0:
                facts.append(f"Prep: {meal.preparation_time} min")
            if meal.calories is not None:
                facts.append(f"{meal.calories} cal")
            if facts:
                lines.append("  " + " | ".join(facts))
        if include_materials and meal.materials:
            names = ", ".join(material.name for material in meal.materials)
            lines.append(f"  Materials: {names}")
        if include_instructions:
            lines.extend(
                f"  {step.strip()}"
                for step in meal.instructions.splitlines()
                if step.strip()
            )
        lines.append("")

    if formatted:
        lines += ["\N{BAR CHART} SUMMARY", "\N{BOX DRAWINGS LIGHT HORIZONTAL}" * 20]
    else:
        lines += ["SUMMARY", "-" * 20]
    lines.append(f"Total meals: {len(plan.all_meals)}")
    lines.append(f"Total prep time: {plan.total_preparation_time} minutes")
    if plan.total_calories is not None:
        lines.append(f"Total calories: {plan.total_calories}")
    return "\n".join(lines) + "\n"


def format_long_date(plan: MealPlan) -> str:
    """Format the plan date like 'Monday, January 5, 2026'."""
    day = plan.date
    return f"{day.strftime('%A')}, {day.strftime('%B')} {day.day}, {day.year}"
