"""Lookup tables driving ingredient normalization.

All tables are bundled into one frozen ``NormalizerTables`` value that the
pipeline stages receive explicitly. The module-level constants are only the
defaults; callers can build their own tables (e.g. a larger stoplist) without
touching shared state.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TYPE_CHECKING

from nutrinorm.exceptions import ConfigurationError

if TYPE_CHECKING:
    from nutrinorm.config import Settings


# =============================================================================
# Units
# =============================================================================

TABLESPOON = "tablespoon"
TEASPOON = "teaspoon"
GRAM = "g"
MILLILITER = "ml"
CUP = "cup"
PINCH = "pinch"
HANDFUL = "handful"

# Units a record may carry after canonicalization. Pinch is resolved to grams.
CANONICAL_UNITS: frozenset[str] = frozenset({TABLESPOON, TEASPOON, GRAM, MILLILITER, CUP, HANDFUL})

UNIT_MAP: dict[str, str] = {
    # Tablespoon
    "tbsp": TABLESPOON,
    "tbs": TABLESPOON,
    "tbspn": TABLESPOON,
    "tablespoon": TABLESPOON,
    "tablespoons": TABLESPOON,
    # Teaspoon
    "tsp": TEASPOON,
    "tsps": TEASPOON,
    "teaspoon": TEASPOON,
    "teaspoons": TEASPOON,
    # Weight
    "g": GRAM,
    "gram": GRAM,
    "grams": GRAM,
    # Volume
    "ml": MILLILITER,
    "milliliter": MILLILITER,
    "milliliters": MILLILITER,
    "millilitre": MILLILITER,
    "millilitres": MILLILITER,
    "cup": CUP,
    "cups": CUP,
    # Approximate measures
    "pinch": PINCH,
    "pinches": PINCH,
    "handful": HANDFUL,
    "handfuls": HANDFUL,
}

# 1 pinch = ~0.3 g, a nutritional approximation rather than a physical one
PINCH_IN_GRAMS = 0.3

# Names containing any of these are treated as water-like (1 ml ~ 1 g)
LIQUID_KEYWORDS: tuple[str, ...] = ("milk", "soy milk", "vinegar", "oil", "sauce", "water")


# =============================================================================
# Names
# =============================================================================

ADJECTIVES: tuple[str, ...] = (
    "fresh",
    "raw",
    "organic",
    "smoked",
    "thick",
    "thin",
    "large",
    "small",
    "extra",
    "extra virgin",
    "virgin",
    "plain",
    "unsweetened",
    "chopped",
    "sliced",
    "diced",
    "minced",
    "shredded",
    "grated",
)

# Ordered: the first key found in the cleaned name wins. A tuple value fans
# the name out into several ingredients.
SYNONYMS: tuple[tuple[str, str | tuple[str, ...]], ...] = (
    ("soy milk", "soy milk"),
    ("soya milk", "soy milk"),
    ("apple cider vinegar", "vinegar"),
    ("acv", "vinegar"),
    ("balsamic", "balsamic vinegar"),
    ("smoked tofu", "tofu"),
    ("olive oil extra virgin", "olive oil"),
    ("extra virgin olive oil", "olive oil"),
    ("maple syrup", "maple syrup"),
    ("nutritional yeast", "nutritional yeast"),
    ("brussels sprouts", "brussels sprouts"),
    ("salt and pepper", ("salt", "pepper")),
)

# Units guessed for the later parts of a composite line under the "infer" policy
UNIT_HEURISTICS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("salt", "pepper", "spice"), TEASPOON),
    (("oil", "vinegar", "sauce"), TABLESPOON),
    (("milk", "water", "juice"), CUP),
)
DEFAULT_INFERRED_UNIT = TEASPOON

ML_CONVERSIONS = ("liquids", "always")


def compile_word_alternation(words: tuple[str, ...]) -> re.Pattern[str]:
    """Build one case-insensitive whole-word pattern matching any of ``words``.

    Longer entries come first so multi-word phrases ("extra virgin") win over
    their prefixes ("extra").
    """
    ordered = sorted({w.strip().lower() for w in words if w.strip()}, key=len, reverse=True)
    if not ordered:
        return re.compile(r"(?!x)x")  # matches nothing
    alternation = "|".join(r"\s+".join(re.escape(part) for part in w.split()) for w in ordered)
    return re.compile(rf"\b(?:{alternation})\b", re.IGNORECASE)


@dataclass(frozen=True)
class NormalizerTables:
    """Immutable bundle of every table the normalization stages consult."""

    unit_map: Mapping[str, str] = field(default_factory=lambda: MappingProxyType(dict(UNIT_MAP)))
    adjectives: tuple[str, ...] = ADJECTIVES
    synonyms: tuple[tuple[str, str | tuple[str, ...]], ...] = SYNONYMS
    liquid_keywords: tuple[str, ...] = LIQUID_KEYWORDS
    unit_heuristics: tuple[tuple[tuple[str, ...], str], ...] = UNIT_HEURISTICS
    default_inferred_unit: str = DEFAULT_INFERRED_UNIT
    pinch_in_grams: float = PINCH_IN_GRAMS
    ml_conversion: str = "liquids"

    adjective_pattern: re.Pattern[str] = field(init=False, repr=False, compare=False)
    synonym_patterns: tuple[tuple[re.Pattern[str], str | tuple[str, ...]], ...] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        if not isinstance(self.unit_map, MappingProxyType):
            object.__setattr__(
                self,
                "unit_map",
                MappingProxyType({k.lower(): v for k, v in self.unit_map.items()}),
            )

        if self.pinch_in_grams < 0:
            raise ConfigurationError(f"pinch_in_grams must be >= 0, got {self.pinch_in_grams}")
        if self.ml_conversion not in ML_CONVERSIONS:
            raise ConfigurationError(
                f"ml_conversion must be one of {ML_CONVERSIONS}, got {self.ml_conversion!r}"
            )

        allowed = CANONICAL_UNITS | {PINCH}
        bad_units = sorted(set(self.unit_map.values()) - allowed)
        if bad_units:
            raise ConfigurationError(f"Unit map targets non-canonical units: {bad_units}")
        heuristic_units = {unit for _, unit in self.unit_heuristics} | {self.default_inferred_unit}
        if not heuristic_units <= CANONICAL_UNITS:
            raise ConfigurationError(
                f"Unit heuristics use non-canonical units: {sorted(heuristic_units - CANONICAL_UNITS)}"
            )

        object.__setattr__(self, "adjective_pattern", compile_word_alternation(self.adjectives))
        # Left word boundary only, so "soy milks" still hits "soy milk" but
        # "lacv" does not hit "acv"
        object.__setattr__(
            self,
            "synonym_patterns",
            tuple((re.compile(rf"\b{re.escape(key)}"), value) for key, value in self.synonyms),
        )

    @classmethod
    def from_settings(cls, settings: "Settings") -> "NormalizerTables":
        """Default tables with the conversion knobs taken from settings."""
        return cls(pinch_in_grams=settings.pinch_in_grams, ml_conversion=settings.ml_conversion)

    def with_overrides(self, **changes) -> "NormalizerTables":
        """Copy of these tables with some fields replaced."""
        return replace(self, **changes)


DEFAULT_TABLES = NormalizerTables()
