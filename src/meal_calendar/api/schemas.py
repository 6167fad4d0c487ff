"""Pydantic models for API request payloads."""

from datetime import date

from pydantic import BaseModel, Field


class MaterialCreate(BaseModel):
    """New material payload; category is a stored code such as "poultry"."""

    id: str | None = None
    name: str = Field(min_length=1)
    category: str
    nutritional_info: list[str] = Field(default_factory=list)
    is_available: bool = True
    description: str | None = None
    image_url: str | None = None


class AvailabilityUpdate(BaseModel):
    """Availability change; omitting the flag toggles it."""

    is_available: bool | None = None


class MealCreate(BaseModel):
    """Meal payload referencing catalog materials by id."""

    id: str | None = None
    name: str = Field(min_length=1)
    description: str = ""
    material_ids: list[str] = Field(default_factory=list)
    meal_type: str
    preparation_time: int = Field(default=0, ge=0)
    instructions: str = ""
    calories: int | None = Field(default=None, ge=0)
    tags: list[str] = Field(default_factory=list)
    image_url: str | None = None


class GenerateMealsRequest(BaseModel):
    """Candidate generation; material_ids defaults to the whole catalog."""

    meal_type: str
    count: int | None = Field(default=None, ge=1, le=20)
    material_ids: list[str] | None = None
    dietary_restrictions: list[str] = Field(default_factory=list)
    save: bool = False


class CustomMealRequest(BaseModel):
    """Custom meal built around required materials."""

    meal_type: str
    required_material_ids: list[str]
    additional_material_ids: list[str] | None = None
    dietary_restrictions: list[str] = Field(default_factory=list)
    save: bool = False


class GeneratePlanRequest(BaseModel):
    """Options shared by the plan generation endpoints."""

    overwrite: bool = False
    meal_types: list[str] | None = None
    dietary_restrictions: list[str] = Field(default_factory=list)


class GenerateWeekRequest(GeneratePlanRequest):
    start_date: date | None = None


class GenerateMonthRequest(GeneratePlanRequest):
    year: int
    month: int


class SlotUpdate(BaseModel):
    """Meal to place in a slot; null clears the slot."""

    meal_id: str | None = None


class CompletedUpdate(BaseModel):
    is_completed: bool = True


class NotesUpdate(BaseModel):
    notes: str | None = None


class CopyPlanRequest(BaseModel):
    target_date: date
