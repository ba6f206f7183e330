"""Pydantic schemas for normalized ingredients and their diagnostics."""

import math
import uuid
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

DiagnosticReason = Literal[
    "normalized",
    "split",
    "synonym-split",
    "bare-name",
    "unparsed",
    "empty",
    "empty-name",
    "no-name",
    "duplicate",
]


def format_quantity(quantity: float) -> str:
    """Format a quantity without trailing zeros ("100", "0.3", "0.333")."""
    if float(quantity).is_integer():
        return str(int(quantity))
    return f"{quantity:.3f}".rstrip("0").rstrip(".")


class CanonicalIngredient(BaseModel):
    """One ingredient in canonical units, ready for a nutrition lookup."""

    model_config = ConfigDict(frozen=True)

    quantity: float = Field(ge=0, allow_inf_nan=False)
    unit: str = ""
    name: str = Field(min_length=1)

    @property
    def food_entry(self) -> str:
        """Render as the free-text entry nutrition providers accept."""
        parts = [format_quantity(self.quantity), self.unit, self.name]
        return " ".join(part for part in parts if part)

    @property
    def dedup_key(self) -> str:
        """Case-insensitive identity used to drop repeated ingredients."""
        return self.food_entry.lower()

    def __str__(self) -> str:
        return self.food_entry


class Diagnostic(BaseModel):
    """What happened to one input line (or one record produced from it)."""

    original: str
    normalized: str | None = None
    reason: DiagnosticReason


class NormalizationResult(BaseModel):
    """Normalized ingredients plus a per-line account of the work done."""

    ingredients: list[CanonicalIngredient] = Field(default_factory=list)
    diagnostics: list[Diagnostic] = Field(default_factory=list)

    @property
    def food_entries(self) -> list[str]:
        """Ingredients rendered as provider food entries."""
        return [ingredient.food_entry for ingredient in self.ingredients]

    @property
    def dropped(self) -> list[Diagnostic]:
        """Diagnostics for input lines that produced no ingredient."""
        return [d for d in self.diagnostics if d.normalized is None]


class NutritionRequest(BaseModel):
    """Normalized ingredients and serving count handed to a nutrition client."""

    ingredients: list[str] = Field(description="Food entries such as '100 g soy milk'")
    servings: float = Field(default=1.0, gt=0)

    @field_validator("servings", mode="before")
    @classmethod
    def coerce_servings(cls, v: Any) -> float:
        """Fall back to a single serving for missing or unusable counts."""
        if v is None or v == "":
            return 1.0
        try:
            value = float(v)
        except (ValueError, TypeError):
            return 1.0
        if not math.isfinite(value) or value <= 0:
            return 1.0
        return value

    def to_payload(self) -> dict[str, Any]:
        """Build the recipe nutrition payload, one entry per ingredient."""
        return {
            "method": "recipe.get_nutrition",
            "format": "json",
            "meal_id": str(uuid.uuid4()),
            "ingredients": [
                {"ingredient_id": str(uuid.uuid4()), "food_entry": entry}
                for entry in self.ingredients
            ],
        }
