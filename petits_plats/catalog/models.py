from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Ingredient(BaseModel):
    model_config = ConfigDict(frozen=True)

    ingredient: str = Field(..., min_length=1)
    quantity: int | float | None = None
    unit: str | None = None


class Recipe(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    servings: int | None = None
    time: int = Field(..., ge=0, description="Preparation time in minutes")
    ingredients: list[Ingredient]
    appliance: str
    ustensils: list[str]
    description: str
