"""Supabase repository for the material catalog."""

from dataclasses import dataclass

from supabase import Client

from meal_calendar.adapters.records import material_from_record, material_to_record
from meal_calendar.adapters.supabase_query import execute
from meal_calendar.domain.errors import PersistenceError
from meal_calendar.domain.materials import Material
from meal_calendar.services.catalog import MaterialRepository


@dataclass
class SupabaseMaterialRepository(MaterialRepository):
    """Supabase-backed repository for materials."""

    client: Client

    def list_materials(self) -> list[Material]:
        response = execute(
            self.client.table("materials").select("*").order("name", desc=False),
            "list materials",
        )
        return [material_from_record(row) for row in response.data or []]

    def get_material(self, material_id: str) -> Material | None:
        response = execute(
            self.client.table("materials")
            .select("*")
            .eq("id", material_id)
            .limit(1),
            "get material",
        )
        if not response.data:
            return None
        return material_from_record(response.data[0])

    def add_material(self, material: Material) -> None:
        response = execute(
            self.client.table("materials").insert(material_to_record(material)),
            "add material",
        )
        if not response.data:
            raise PersistenceError(f"Failed to add material: {material.id}")

    def update_material(self, material: Material) -> bool:
        record = material_to_record(material)
        record.pop("id")
        response = execute(
            self.client.table("materials").update(record).eq("id", material.id),
            "update material",
        )
        return bool(response.data)

    def delete_material(self, material_id: str) -> bool:
        response = execute(
            self.client.table("materials").delete().eq("id", material_id),
            "delete material",
        )
        return bool(response.data)
