"""Ingredient name cleaning."""

import re

from nutrinorm.normalize.tables import DEFAULT_TABLES, NormalizerTables

WHITESPACE = re.compile(r"\s+")

# Left behind when an adjective is cut out of "extra-virgin" or "fresh, diced"
STRAY_PUNCTUATION = " ,;-"


def strip_adjectives(name: str, tables: NormalizerTables = DEFAULT_TABLES) -> str:
    """Lower-case ``name`` and remove stoplist adjectives as whole words."""
    cleaned = name.lower().strip()
    cleaned = tables.adjective_pattern.sub(" ", cleaned)
    cleaned = WHITESPACE.sub(" ", cleaned)
    cleaned = re.sub(r"\s+([,;])", r"\1", cleaned)
    return cleaned.strip(STRAY_PUNCTUATION)


def resolve_synonym(
    name: str, tables: NormalizerTables = DEFAULT_TABLES
) -> str | tuple[str, ...] | None:
    """Return the first synonym entry found in ``name``, or None."""
    for pattern, canonical in tables.synonym_patterns:
        if pattern.search(name):
            return canonical
    return None


def clean_name(name: str, tables: NormalizerTables = DEFAULT_TABLES) -> str | tuple[str, ...]:
    """
    Clean an ingredient name for nutrition lookup.

    - Lowercase and trim
    - Remove stoplist adjectives (fresh, organic, extra virgin, ...) as whole words
    - Collapse whitespace
    - Resolve synonyms, first match wins

    A tuple result means the name stands for several ingredients
    ("salt and pepper" -> ("salt", "pepper")).
    """
    if not name:
        return ""

    cleaned = strip_adjectives(name, tables)
    synonym = resolve_synonym(cleaned, tables)
    if synonym is not None:
        return synonym
    return cleaned
