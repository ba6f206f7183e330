"""Ingredient normalization for nutrition lookups."""

__version__ = "0.1.0"

from nutrinorm.normalize import IngredientNormalizer, build_nutrition_request, normalize_ingredients
from nutrinorm.schemas import CanonicalIngredient, Diagnostic, NormalizationResult, NutritionRequest

__all__ = [
    "CanonicalIngredient",
    "Diagnostic",
    "IngredientNormalizer",
    "NormalizationResult",
    "NutritionRequest",
    "build_nutrition_request",
    "normalize_ingredients",
]
