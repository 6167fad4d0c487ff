"""Meal generation from available materials.

Candidates are built by enumerating combinations over per-category component
pools, filtered by the meal type rules, scored and ranked. Enumeration follows
input order and is capped, so the same inputs always produce the same meals.
"""

import itertools
import logging
import math
from collections.abc import Collection, Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date, timedelta

from meal_calendar.domain.errors import (
    InsufficientMaterialsError,
    InvalidDateRangeError,
    NoValidCombinationError,
)
from meal_calendar.domain.materials import (
    PROTEIN_CATEGORIES,
    Material,
    MaterialCategory,
)
from meal_calendar.domain.meal_plans import MealPlan
from meal_calendar.domain.meals import Meal, MealType
from meal_calendar.services.clock import Clock
from meal_calendar.services.ids import IdFactory, new_id
from meal_calendar.services.meal_plans import month_bounds

_logger = logging.getLogger(__name__)

PROTEIN = "protein"
VEGETABLES = "vegetables"
GRAINS = "grains"
DAIRY = "dairy"
SPICES = "spices"

POOL_ORDER = (PROTEIN, VEGETABLES, GRAINS, DAIRY, SPICES)

POOL_CATEGORIES: dict[str, frozenset[MaterialCategory]] = {
    PROTEIN: PROTEIN_CATEGORIES,
    VEGETABLES: frozenset({MaterialCategory.VEGETABLES}),
    GRAINS: frozenset({MaterialCategory.GRAINS}),
    DAIRY: frozenset({MaterialCategory.DAIRY}),
    SPICES: frozenset({MaterialCategory.SPICES}),
}

MAX_COMFORTABLE_MATERIALS = 7


@dataclass(frozen=True)
class MealTypeRule:
    """Category mix and estimates for one meal type."""

    pick_counts: Mapping[str, tuple[int, ...]]
    anchors: frozenset[MaterialCategory]
    min_materials: int
    max_materials: int
    name_prefix: str
    bonuses: tuple[tuple[frozenset[MaterialCategory], int], ...] = ()
    compact_bonus: int = 0
    compact_size: int = 0
    preparation_factor: float = 1.0
    calorie_factor: float = 1.0


MEAL_TYPE_RULES: dict[MealType, MealTypeRule] = {
    MealType.BREAKFAST: MealTypeRule(
        pick_counts={
            PROTEIN: (0,),
            VEGETABLES: (0, 1),
            GRAINS: (0, 1),
            DAIRY: (0, 1, 2),
            SPICES: (0, 1),
        },
        anchors=frozenset({MaterialCategory.DAIRY, MaterialCategory.GRAINS}),
        min_materials=1,
        max_materials=5,
        name_prefix="Morning",
        bonuses=(
            (POOL_CATEGORIES[DAIRY], 20),
            (POOL_CATEGORIES[GRAINS], 15),
        ),
        preparation_factor=0.8,
        calorie_factor=0.8,
    ),
    MealType.LUNCH: MealTypeRule(
        pick_counts={
            PROTEIN: (0, 1),
            VEGETABLES: (0, 1, 2),
            GRAINS: (0, 1),
            DAIRY: (0,),
            SPICES: (0, 1),
        },
        anchors=PROTEIN_CATEGORIES
        | {MaterialCategory.VEGETABLES, MaterialCategory.GRAINS},
        min_materials=2,
        max_materials=7,
        name_prefix="Midday",
        bonuses=(
            (PROTEIN_CATEGORIES, 25),
            (POOL_CATEGORIES[VEGETABLES], 20),
            (POOL_CATEGORIES[GRAINS], 10),
        ),
    ),
    MealType.DINNER: MealTypeRule(
        pick_counts={
            PROTEIN: (0, 1),
            VEGETABLES: (0, 1, 2),
            GRAINS: (0, 1),
            DAIRY: (0,),
            SPICES: (0, 1),
        },
        anchors=PROTEIN_CATEGORIES
        | {MaterialCategory.VEGETABLES, MaterialCategory.GRAINS},
        min_materials=2,
        max_materials=7,
        name_prefix="Evening",
        bonuses=(
            (PROTEIN_CATEGORIES, 25),
            (POOL_CATEGORIES[VEGETABLES], 20),
            (POOL_CATEGORIES[GRAINS], 10),
        ),
    ),
    MealType.SNACK: MealTypeRule(
        pick_counts={
            PROTEIN: (0,),
            VEGETABLES: (0, 1),
            GRAINS: (0, 1),
            DAIRY: (0, 1),
            SPICES: (0,),
        },
        anchors=frozenset(
            {
                MaterialCategory.DAIRY,
                MaterialCategory.VEGETABLES,
                MaterialCategory.GRAINS,
            }
        ),
        min_materials=1,
        max_materials=3,
        name_prefix="Quick",
        compact_bonus=10,
        compact_size=3,
        preparation_factor=0.5,
        calorie_factor=0.4,
    ),
}

RESTRICTION_EXCLUSIONS: dict[str, frozenset[MaterialCategory]] = {
    "vegetarian": PROTEIN_CATEGORIES,
    "vegan": PROTEIN_CATEGORIES | {MaterialCategory.DAIRY},
    "pescatarian": frozenset({MaterialCategory.MEAT, MaterialCategory.POULTRY}),
}
GLUTEN_FREE = "gluten-free"

PREPARATION_MINUTES: dict[MaterialCategory, int] = {
    MaterialCategory.MEAT: 20,
    MaterialCategory.POULTRY: 20,
    MaterialCategory.SEAFOOD: 15,
    MaterialCategory.VEGETABLES: 10,
    MaterialCategory.GRAINS: 15,
}
BASE_PREPARATION_MINUTES = 15
DEFAULT_PREPARATION_MINUTES = 5

CALORIES: dict[MaterialCategory, int] = {
    MaterialCategory.MEAT: 200,
    MaterialCategory.POULTRY: 200,
    MaterialCategory.SEAFOOD: 150,
    MaterialCategory.DAIRY: 100,
    MaterialCategory.GRAINS: 150,
    MaterialCategory.VEGETABLES: 30,
}
DEFAULT_CALORIES = 10


@dataclass(frozen=True)
class _Candidate:
    materials: tuple[Material, ...]
    score: float
    position: int


@dataclass
class MealGenerator:
    """Turns available materials into candidate meals and day plans."""

    clock: Clock
    id_factory: IdFactory = field(default=new_id)
    pool_size: int = 4
    candidate_limit: int = 2000
    default_count: int = 3
    rules: Mapping[MealType, MealTypeRule] = field(
        default_factory=lambda: MEAL_TYPE_RULES
    )

    def generate_meals(  # noqa: PLR0913
        self,
        materials: Sequence[Material],
        meal_type: MealType,
        count: int | None = None,
        dietary_restrictions: Collection[str] | None = None,
        avoid: Collection[frozenset[str]] = (),
        day: date | None = None,
    ) -> list[Meal]:
        """Return up to count distinct meals, best score first.

        Fewer meals than requested is a valid result; no meal at all raises
        NoValidCombinationError.
        """
        wanted = self.default_count if count is None else count
        if wanted < 1:
            raise ValueError(f"count must be at least 1, got {wanted}")
        available = _available(materials)
        if not available:
            raise InsufficientMaterialsError(meal_type, day)
        allowed = _apply_restrictions(available, dietary_restrictions)
        if not allowed:
            raise NoValidCombinationError(
                meal_type, day, "every available material is excluded by restrictions"
            )
        ranked = self._rank(allowed, meal_type, (), avoid)
        if not ranked:
            raise NoValidCombinationError(meal_type, day)
        meals = [self._materialize(item.materials, meal_type) for item in ranked[:wanted]]
        _logger.info(
            "Generated meals: meal_type=%s requested=%s produced=%s",
            meal_type.name.lower(),
            wanted,
            len(meals),
        )
        return meals

    def generate_custom_meal(
        self,
        required_materials: Sequence[Material],
        meal_type: MealType,
        dietary_restrictions: Collection[str] | None = None,
        additional_materials: Sequence[Material] | None = None,
    ) -> Meal:
        """Build the best meal that contains every required material."""
        required = tuple(_unique(required_materials))
        if not required:
            raise InsufficientMaterialsError(meal_type)
        unavailable = [material.name for material in required if not material.is_available]
        if unavailable:
            raise NoValidCombinationError(
                meal_type, reason=f"unavailable: {', '.join(unavailable)}"
            )
        excluded = [
            material.name
            for material in required
            if not _is_allowed(material, dietary_restrictions)
        ]
        if excluded:
            raise NoValidCombinationError(
                meal_type, reason=f"excluded by restrictions: {', '.join(excluded)}"
            )
        fillers = _apply_restrictions(
            _available(additional_materials or ()), dietary_restrictions
        )
        ranked = self._rank(fillers, meal_type, required, ())
        if not ranked:
            raise NoValidCombinationError(
                meal_type, reason="required materials do not fit the meal type rules"
            )
        return self._materialize(ranked[0].materials, meal_type)

    def generate_daily_plan(
        self,
        day: date,
        materials: Sequence[Material],
        meal_types: Sequence[MealType] | None = None,
        dietary_restrictions: Collection[str] | None = None,
    ) -> MealPlan:
        """Generate one meal per meal type for a single date."""
        return self.generate_range(
            day, day, materials, meal_types, dietary_restrictions
        )[0]

    def generate_weekly_plan(
        self,
        start_date: date,
        materials: Sequence[Material],
        meal_types: Sequence[MealType] | None = None,
        dietary_restrictions: Collection[str] | None = None,
    ) -> list[MealPlan]:
        """Generate plans for seven consecutive dates starting at start_date."""
        return self.generate_range(
            start_date,
            start_date + timedelta(days=6),
            materials,
            meal_types,
            dietary_restrictions,
        )

    def generate_monthly_plan(
        self,
        year: int,
        month: int,
        materials: Sequence[Material],
        meal_types: Sequence[MealType] | None = None,
        dietary_restrictions: Collection[str] | None = None,
    ) -> list[MealPlan]:
        """Generate plans for every date of a month."""
        first, last = month_bounds(year, month)
        return self.generate_range(
            first, last, materials, meal_types, dietary_restrictions
        )

    def generate_range(
        self,
        start: date,
        end: date,
        materials: Sequence[Material],
        meal_types: Sequence[MealType] | None = None,
        dietary_restrictions: Collection[str] | None = None,
    ) -> list[MealPlan]:
        """Generate plans for an inclusive date range.

        Each meal type avoids combinations it already used earlier in the range
        and on the same date; once every combination is used it starts over.
        """
        if end < start:
            raise InvalidDateRangeError(start, end)
        types = list(meal_types) if meal_types else list(MealType)
        used: dict[MealType, set[frozenset[str]]] = {kind: set() for kind in types}
        plans = []
        for offset in range((end - start).days + 1):
            day = start + timedelta(days=offset)
            day_combinations: set[frozenset[str]] = set()
            slots: dict[MealType, Meal | None] = {}
            for meal_type in types:
                meal = self._pick_for_day(
                    materials,
                    meal_type,
                    dietary_restrictions,
                    used[meal_type],
                    day_combinations,
                    day,
                )
                used[meal_type].add(meal.material_ids)
                day_combinations.add(meal.material_ids)
                slots[meal_type] = meal
            now = self.clock.now()
            plans.append(
                MealPlan(
                    id=self.id_factory(),
                    date=day,
                    meals=slots,
                    created_at=now,
                    updated_at=now,
                )
            )
        _logger.info(
            "Generated plans: start=%s end=%s days=%s", start, end, len(plans)
        )
        return plans

    def _pick_for_day(  # noqa: PLR0913
        self,
        materials: Sequence[Material],
        meal_type: MealType,
        dietary_restrictions: Collection[str] | None,
        used: set[frozenset[str]],
        day_combinations: set[frozenset[str]],
        day: date,
    ) -> Meal:
        attempts = [used | day_combinations, day_combinations, set()]
        for position, avoid in enumerate(attempts):
            try:
                return self.generate_meals(
                    materials,
                    meal_type,
                    count=1,
                    dietary_restrictions=dietary_restrictions,
                    avoid=avoid,
                    day=day,
                )[0]
            except NoValidCombinationError:
                if not avoid or position == len(attempts) - 1:
                    raise
                if position == 0:
                    used.clear()
        raise NoValidCombinationError(meal_type, day)

    def _rank(
        self,
        materials: Sequence[Material],
        meal_type: MealType,
        required: tuple[Material, ...],
        avoid: Collection[frozenset[str]],
    ) -> list[_Candidate]:
        rule = self.rules[meal_type]
        pools = self._build_pools(materials, required)
        seen: set[frozenset[str]] = set()
        candidates = []
        combinations = self._enumerate(pools, rule, required)
        for position, combination in enumerate(combinations):
            if not _is_valid(combination, rule):
                continue
            key = frozenset(material.id for material in combination)
            if key in seen or key in avoid:
                continue
            seen.add(key)
            candidates.append(
                _Candidate(
                    materials=combination,
                    score=score_combination(combination, rule),
                    position=position,
                )
            )
        return sorted(candidates, key=lambda item: (-item.score, item.position))

    def _build_pools(
        self, materials: Sequence[Material], required: tuple[Material, ...]
    ) -> dict[str, list[Material]]:
        required_ids = {material.id for material in required}
        pools: dict[str, list[Material]] = {pool: [] for pool in POOL_ORDER}
        for material in materials:
            if material.id in required_ids:
                continue
            pool = _pool_for(material.category)
            if len(pools[pool]) < self.pool_size:
                pools[pool].append(material)
        return pools

    def _enumerate(
        self,
        pools: Mapping[str, list[Material]],
        rule: MealTypeRule,
        required: tuple[Material, ...],
    ) -> Iterator[tuple[Material, ...]]:
        covered = {_pool_for(material.category) for material in required}
        choices = []
        for pool in POOL_ORDER:
            counts = (0,) if pool in covered else rule.pick_counts[pool]
            options: list[tuple[Material, ...]] = []
            for size in counts:
                options.extend(itertools.combinations(pools[pool], size))
            choices.append(options or [()])
        products = itertools.islice(itertools.product(*choices), self.candidate_limit)
        for picks in products:
            yield required + tuple(itertools.chain.from_iterable(picks))

    def _materialize(self, materials: tuple[Material, ...], meal_type: MealType) -> Meal:
        rule = self.rules[meal_type]
        return Meal(
            id=self.id_factory(),
            name=meal_name(materials, meal_type, rule),
            description=_description(materials, meal_type),
            materials=materials,
            meal_type=meal_type,
            created_at=self.clock.now(),
            preparation_time=estimate_preparation_time(materials, rule),
            instructions=_instructions(materials),
            calories=estimate_calories(materials, rule),
            tags=meal_tags(materials, meal_type),
        )


def score_combination(materials: Sequence[Material], rule: MealTypeRule) -> float:
    """Score a combination; higher is better.

    10 per material, 15 per distinct category, the meal type bonuses for
    categories present, minus 5 per material beyond seven and a tenth of the
    estimated preparation minutes.
    """
    size = len(materials)
    categories = {material.category for material in materials}
    score = 10.0 * size + 15.0 * len(categories)
    for bonus_categories, bonus in rule.bonuses:
        if categories & bonus_categories:
            score += bonus
    if rule.compact_bonus and size <= rule.compact_size:
        score += rule.compact_bonus
    if size > MAX_COMFORTABLE_MATERIALS:
        score -= 5.0 * (size - MAX_COMFORTABLE_MATERIALS)
    score -= estimate_preparation_time(materials, rule) / 10
    return score


def estimate_preparation_time(
    materials: Sequence[Material], rule: MealTypeRule
) -> int:
    minutes = BASE_PREPARATION_MINUTES + sum(
        PREPARATION_MINUTES.get(material.category, DEFAULT_PREPARATION_MINUTES)
        for material in materials
    )
    return _clamp(_round_half_up(minutes * rule.preparation_factor), 10, 120)


def estimate_calories(materials: Sequence[Material], rule: MealTypeRule) -> int:
    calories = sum(
        CALORIES.get(material.category, DEFAULT_CALORIES) for material in materials
    )
    return _clamp(_round_half_up(calories * rule.calorie_factor), 100, 1000)


def meal_name(
    materials: Sequence[Material], meal_type: MealType, rule: MealTypeRule
) -> str:
    main = [
        material.name
        for material in materials
        if material.is_protein or material.category == MaterialCategory.VEGETABLES
    ][:2]
    if not main:
        return f"{meal_type.value} Bowl"
    return f"{rule.name_prefix} {' and '.join(main)}"


def meal_tags(materials: Sequence[Material], meal_type: MealType) -> frozenset[str]:
    categories = {material.category for material in materials}
    tags = {meal_type.value.lower()}
    tags.update(category.value.lower() for category in categories)
    if not categories & RESTRICTION_EXCLUSIONS["vegetarian"]:
        tags.add("vegetarian")
    if not categories & RESTRICTION_EXCLUSIONS["vegan"]:
        tags.add("vegan")
    return frozenset(tags)


def _description(materials: Sequence[Material], meal_type: MealType) -> str:
    names = ", ".join(material.name.lower() for material in materials)
    return f"A delicious {meal_type.value.lower()} featuring {names}."


def _instructions(materials: Sequence[Material]) -> str:
    steps = []
    if any(material.is_protein for material in materials):
        steps.append("Season and cook the protein until done.")
    if any(material.category == MaterialCategory.VEGETABLES for material in materials):
        steps.append("Prepare and cook the vegetables.")
    steps.append("Combine all ingredients and season to taste.")
    steps.append("Serve hot and enjoy!")
    return "\n".join(f"{number}. {step}" for number, step in enumerate(steps, 1))


def _is_valid(materials: tuple[Material, ...], rule: MealTypeRule) -> bool:
    if not rule.min_materials <= len(materials) <= rule.max_materials:
        return False
    return any(material.category in rule.anchors for material in materials)


def _available(materials: Iterable[Material]) -> list[Material]:
    return [material for material in _unique(materials) if material.is_available]


def _unique(materials: Iterable[Material]) -> Iterator[Material]:
    seen: set[str] = set()
    for material in materials:
        if material.id in seen:
            continue
        seen.add(material.id)
        yield material


def _apply_restrictions(
    materials: Sequence[Material], restrictions: Collection[str] | None
) -> list[Material]:
    return [material for material in materials if _is_allowed(material, restrictions)]


def _is_allowed(material: Material, restrictions: Collection[str] | None) -> bool:
    for raw in restrictions or ():
        restriction = raw.strip().lower()
        if restriction == GLUTEN_FREE:
            if (
                material.category == MaterialCategory.GRAINS
                and "wheat" in material.name.lower()
            ):
                return False
            continue
        excluded = RESTRICTION_EXCLUSIONS.get(restriction)
        if excluded is None:
            _logger.debug("Ignoring unknown dietary restriction: %s", raw)
            continue
        if material.category in excluded:
            return False
    return True


def _pool_for(category: MaterialCategory) -> str:
    for pool in POOL_ORDER:
        if category in POOL_CATEGORIES[pool]:
            return pool
    raise ValueError(f"No component pool for {category}")


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)
