"""Expansion of composite lines ("salt and pepper") into separate ingredients."""

from dataclasses import dataclass

from nutrinorm.config import CompositePolicy
from nutrinorm.normalize.names import clean_name
from nutrinorm.normalize.tables import DEFAULT_TABLES, NormalizerTables

COMPOSITE_SEPARATOR = " and "


@dataclass(frozen=True)
class SplitPart:
    """One ingredient produced from a (possibly composite) line."""

    quantity: float
    unit: str
    name: str
    reason: str  # "normalized", "split" or "synonym-split"


def infer_unit(name: str, tables: NormalizerTables = DEFAULT_TABLES) -> str:
    """Guess a sensible measuring unit from an ingredient name."""
    lowered = name.lower()
    for keywords, unit in tables.unit_heuristics:
        if any(keyword in lowered for keyword in keywords):
            return unit
    return tables.default_inferred_unit


def _assign_amounts(
    names: list[str],
    quantity: float,
    unit: str,
    reason: str,
    policy: CompositePolicy,
    tables: NormalizerTables,
) -> list[SplitPart]:
    parts = []
    for index, name in enumerate(names):
        if policy == "infer" and index > 0:
            parts.append(SplitPart(1.0, infer_unit(name, tables), name, reason))
        else:
            parts.append(SplitPart(quantity, unit, name, reason))
    return parts


def _clean_all(names: list[str], tables: NormalizerTables) -> tuple[list[str], bool]:
    """Clean every name, flattening synonym fan-outs. Empty names are dropped."""
    cleaned_names = []
    fanned_out = False
    for name in names:
        cleaned = clean_name(name, tables)
        if isinstance(cleaned, tuple):
            fanned_out = True
            cleaned_names.extend(cleaned)
        elif cleaned:
            cleaned_names.append(cleaned)
    return cleaned_names, fanned_out


def split(
    quantity: float,
    unit: str,
    name: str,
    tables: NormalizerTables = DEFAULT_TABLES,
    policy: CompositePolicy = "inherit",
) -> list[SplitPart]:
    """
    Split a name on a literal " and " and clean each part.

    Under the "inherit" policy every part gets the line's quantity and unit.
    Under "infer" the first part keeps them and later parts get 1 of a unit
    guessed from their name. A part whose name resolves to a fan-out synonym
    expands in place under the same policy.

    Returns an empty list when nothing nameable is left after cleaning.
    """
    if COMPOSITE_SEPARATOR in name:
        raw_parts = [part.strip() for part in name.split(COMPOSITE_SEPARATOR)]
        names, _ = _clean_all([part for part in raw_parts if part], tables)
        return _assign_amounts(names, quantity, unit, "split", policy, tables)

    names, fanned_out = _clean_all([name], tables)
    reason = "synonym-split" if fanned_out else "normalized"
    return _assign_amounts(names, quantity, unit, reason, policy, tables)
