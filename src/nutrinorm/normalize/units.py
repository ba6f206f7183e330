"""Unit canonicalization and approximate mass conversion."""

from dataclasses import dataclass

from nutrinorm.logging_config import get_logger
from nutrinorm.normalize.tables import (
    DEFAULT_TABLES,
    GRAM,
    MILLILITER,
    PINCH,
    NormalizerTables,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class CanonicalUnit:
    """A quantity expressed in its canonical unit."""

    unit: str
    quantity: float


def canonical_unit_name(unit: str, tables: NormalizerTables = DEFAULT_TABLES) -> str:
    """
    Map a raw unit spelling to its canonical name.

    Unknown units are returned unchanged (apart from trimming), so a caller
    still sees what the recipe said.

    Examples:
        "Tbsp" -> "tablespoon"
        "grams" -> "g"
        "clove" -> "clove"
    """
    key = unit.strip().lower().rstrip(".")
    if not key:
        return ""
    canonical = tables.unit_map.get(key)
    if canonical is None:
        logger.debug(f"Unknown unit {unit!r}, passing through")
        return unit.strip()
    return canonical


def is_liquid(name: str, tables: NormalizerTables = DEFAULT_TABLES) -> bool:
    """Check whether an ingredient name mentions a water-like liquid."""
    lowered = name.lower()
    return any(keyword in lowered for keyword in tables.liquid_keywords)


def canonicalize(
    unit: str,
    quantity: float,
    name: str,
    tables: NormalizerTables = DEFAULT_TABLES,
) -> CanonicalUnit:
    """
    Canonicalize a unit and convert approximate measures to grams.

    - pinch: replaced by grams at ``tables.pinch_in_grams`` per pinch
    - ml: converted 1:1 to grams for liquids (density ~1 g/ml). Other names
      keep ml unless ``tables.ml_conversion`` is "always".
    """
    canonical = canonical_unit_name(unit, tables)

    if canonical == PINCH:
        return CanonicalUnit(unit=GRAM, quantity=quantity * tables.pinch_in_grams)

    if canonical == MILLILITER:
        if tables.ml_conversion == "always" or is_liquid(name, tables):
            return CanonicalUnit(unit=GRAM, quantity=quantity)
        return CanonicalUnit(unit=MILLILITER, quantity=quantity)

    return CanonicalUnit(unit=canonical, quantity=quantity)
