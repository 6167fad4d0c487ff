"""Domain models for ingredients."""

from dataclasses import dataclass, field
from enum import Enum


class MaterialCategory(Enum):
    """Ingredient categories."""

    MEAT = "Meat"
    SEAFOOD = "Seafood"
    POULTRY = "Poultry"
    VEGETABLES = "Vegetables"
    GRAINS = "Grains"
    DAIRY = "Dairy"
    SPICES = "Spices"


PROTEIN_CATEGORIES = frozenset(
    {MaterialCategory.MEAT, MaterialCategory.SEAFOOD, MaterialCategory.POULTRY}
)


@dataclass(frozen=True, eq=False)
class Material:
    """An ingredient that can be combined into meals."""

    id: str
    name: str
    category: MaterialCategory
    nutritional_info: tuple[str, ...] = field(default_factory=tuple)
    is_available: bool = True
    description: str | None = None
    image_url: str | None = None

    @property
    def is_protein(self) -> bool:
        """Return whether the material belongs to a protein category."""
        return self.category in PROTEIN_CATEGORIES

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Material):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
