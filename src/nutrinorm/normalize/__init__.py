"""Normalize free-form ingredient lines into canonical records."""

from nutrinorm.normalize.names import clean_name
from nutrinorm.normalize.parser import ParsedIngredient, ParseFailure, parse
from nutrinorm.normalize.pipeline import (
    IngredientNormalizer,
    build_nutrition_request,
    normalize_ingredients,
)
from nutrinorm.normalize.splitter import SplitPart, split
from nutrinorm.normalize.tables import DEFAULT_TABLES, NormalizerTables
from nutrinorm.normalize.units import CanonicalUnit, canonicalize

__all__ = [
    "DEFAULT_TABLES",
    "CanonicalUnit",
    "IngredientNormalizer",
    "NormalizerTables",
    "ParseFailure",
    "ParsedIngredient",
    "SplitPart",
    "build_nutrition_request",
    "canonicalize",
    "clean_name",
    "normalize_ingredients",
    "parse",
    "split",
]
