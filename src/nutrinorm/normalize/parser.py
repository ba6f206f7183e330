"""Split a raw ingredient line into quantity, unit token and name text."""

import math
import re
from dataclasses import dataclass

from nutrinorm.normalize.tables import DEFAULT_TABLES, NormalizerTables

# Leading quantity: mixed number, fraction, decimal or integer, optionally
# glued to the unit ("500g").
QUANTITY_PATTERN = re.compile(
    r"""^(?:
        (?P<whole>\d+)\s+(?P<mixed_num>\d+)/(?P<mixed_den>\d+)
        |(?P<num>\d+)/(?P<den>\d+)
        |(?P<decimal>\d+(?:\.\d+)?|\.\d+)
    )(?=\s|[^\W\d_]|$)""",
    re.VERBOSE,
)

# Trailing punctuation dropped from unit tokens ("tbsp.", "cups,")
UNIT_PUNCTUATION = ".,;:"


@dataclass(frozen=True)
class ParsedIngredient:
    """A line split into its three positional parts."""

    quantity: float
    unit_token: str
    name_text: str


@dataclass(frozen=True)
class ParseFailure:
    """A line that could not be read as ``<quantity> [unit] <name>``."""

    original: str
    reason: str = "unparsed"


def parse_leading_quantity(text: str) -> tuple[float, str] | None:
    """
    Read the quantity at the start of ``text``.

    Handles formats like:
    - "2"
    - "1.5" and ".5"
    - "1/2"
    - "1 1/2" (one and a half)

    Returns:
        Tuple of (quantity, remaining text), or None when the text does not
        start with a usable number.
    """
    match = QUANTITY_PATTERN.match(text)
    if not match:
        return None

    try:
        if match.group("whole") is not None:
            denominator = int(match.group("mixed_den"))
            if denominator == 0:
                return None
            quantity = int(match.group("whole")) + int(match.group("mixed_num")) / denominator
        elif match.group("num") is not None:
            denominator = int(match.group("den"))
            if denominator == 0:
                return None
            quantity = int(match.group("num")) / denominator
        else:
            quantity = float(match.group("decimal"))
    except (OverflowError, ValueError):
        # Digit strings too long for int() or too large for a float
        return None

    if not math.isfinite(quantity):
        return None

    return quantity, text[match.end() :].strip()


def parse(raw: str, tables: NormalizerTables = DEFAULT_TABLES) -> ParsedIngredient | ParseFailure:
    """
    Parse ``"<quantity> [unit] <name>"``.

    The unit is always a single word. With only one word after the quantity
    that word is the name and the unit is empty ("2 eggs"). A stoplist
    adjective in unit position is treated as part of the name ("2 large eggs").

    Examples:
        "100 ml Soy milk" -> ParsedIngredient(100.0, "ml", "Soy milk")
        "500g chicken" -> ParsedIngredient(500.0, "g", "chicken")
        "salt" -> ParseFailure("salt", "unparsed")
    """
    text = (raw or "").strip()
    if not text:
        return ParseFailure(original=raw or "", reason="empty")

    leading = parse_leading_quantity(text)
    if leading is None:
        return ParseFailure(original=raw)
    quantity, rest = leading

    words = rest.split()
    if not words:
        return ParseFailure(original=raw, reason="no-name")

    if len(words) == 1:
        if words[0].lower().rstrip(UNIT_PUNCTUATION) in tables.unit_map:
            # "2 tbsp" has a unit but nothing to measure
            return ParseFailure(original=raw, reason="no-name")
        return ParsedIngredient(quantity=quantity, unit_token="", name_text=words[0])

    candidate = words[0].lower().rstrip(UNIT_PUNCTUATION)
    if not candidate:
        return ParsedIngredient(quantity=quantity, unit_token="", name_text=" ".join(words[1:]))
    if tables.adjective_pattern.fullmatch(candidate):
        return ParsedIngredient(quantity=quantity, unit_token="", name_text=" ".join(words))

    return ParsedIngredient(quantity=quantity, unit_token=candidate, name_text=" ".join(words[1:]))
