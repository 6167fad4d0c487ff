"""Services for the material catalog."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Protocol

from meal_calendar.domain.errors import NotFoundError
from meal_calendar.domain.materials import Material, MaterialCategory

_logger = logging.getLogger(__name__)


class MaterialRepository(Protocol):
    """Persistence interface for materials."""

    def list_materials(self) -> list[Material]:
        """Return every stored material."""

    def get_material(self, material_id: str) -> Material | None:
        """Return a material by id, if present."""

    def add_material(self, material: Material) -> None:
        """Store a new material."""

    def update_material(self, material: Material) -> bool:
        """Replace a stored material, returning False when it is absent."""

    def delete_material(self, material_id: str) -> bool:
        """Delete a material, returning False when it is absent."""


@dataclass
class MaterialCatalogService:
    """Application service for browsing and editing ingredients."""

    repository: MaterialRepository

    def list(self) -> list[Material]:
        return self.repository.list_materials()

    def list_by_category(self, category: MaterialCategory) -> list[Material]:
        return [material for material in self.list() if material.category == category]

    def list_available(self) -> list[Material]:
        return [material for material in self.list() if material.is_available]

    def search(self, query: str | None) -> list[Material]:
        """Match name or description, case-insensitively."""
        if not query or not query.strip():
            return self.list()
        needle = query.strip().lower()
        return [
            material
            for material in self.list()
            if needle in material.name.lower()
            or needle in (material.description or "").lower()
        ]

    def get(self, material_id: str) -> Material:
        material = self.repository.get_material(material_id)
        if material is None:
            raise NotFoundError("Material", material_id)
        return material

    def add(self, material: Material) -> Material:
        self.repository.add_material(material)
        return material

    def add_many(self, materials: list[Material]) -> list[Material]:
        for material in materials:
            self.repository.add_material(material)
        return materials

    def update(self, material: Material) -> Material:
        if not self.repository.update_material(material):
            raise NotFoundError("Material", material.id)
        return material

    def delete(self, material_id: str) -> None:
        if not self.repository.delete_material(material_id):
            raise NotFoundError("Material", material_id)
        _logger.info("Material deleted: id=%s", material_id)

    def set_availability(self, material_id: str, is_available: bool) -> Material:
        """Persist the availability flag and return the updated material."""
        updated = replace(self.get(material_id), is_available=is_available)
        return self.update(updated)

    def toggle_availability(self, material_id: str) -> Material:
        current = self.get(material_id)
        return self.set_availability(material_id, not current.is_available)

    def count_by_category(self) -> dict[MaterialCategory, int]:
        counts = {category: 0 for category in MaterialCategory}
        for material in self.list():
            counts[material.category] += 1
        return counts

    def available_count(self) -> int:
        return len(self.list_available())
