"""End-to-end normalization of raw ingredient lines."""

from collections.abc import Iterable
from functools import lru_cache
from typing import Any

from nutrinorm.config import CompositePolicy, Settings, UnparsedPolicy, get_settings
from nutrinorm.logging_config import get_logger
from nutrinorm.normalize.parser import ParsedIngredient, ParseFailure, parse
from nutrinorm.normalize.splitter import split
from nutrinorm.normalize.tables import DEFAULT_TABLES, NormalizerTables
from nutrinorm.normalize.units import canonicalize
from nutrinorm.schemas import (
    CanonicalIngredient,
    Diagnostic,
    NormalizationResult,
    NutritionRequest,
)

logger = get_logger(__name__)


class IngredientNormalizer:
    """
    Turns free-form ingredient lines into canonical ingredient records.

    Each line goes through parse -> unit canonicalization -> composite split
    -> name cleaning. The normalizer holds no mutable state, so one instance
    can be shared between threads and requests.
    """

    def __init__(
        self,
        tables: NormalizerTables = DEFAULT_TABLES,
        composite_policy: CompositePolicy = "inherit",
        unparsed_policy: UnparsedPolicy = "skip",
    ):
        self.tables = tables
        self.composite_policy = composite_policy
        self.unparsed_policy = unparsed_policy

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "IngredientNormalizer":
        """Create a normalizer configured from application settings."""
        settings = settings or get_settings()
        return cls(
            tables=NormalizerTables.from_settings(settings),
            composite_policy=settings.composite_policy,
            unparsed_policy=settings.unparsed_policy,
        )

    def normalize_line(self, raw: str) -> list[CanonicalIngredient]:
        """Normalize a single line. Returns an empty list if nothing usable is found."""
        records, _ = self._process_line(raw)
        return records

    def normalize(self, raw_lines: Iterable[Any]) -> NormalizationResult:
        """
        Normalize a batch of lines.

        Output order follows input order. Records whose food entry matches an
        earlier one case-insensitively are dropped (first occurrence wins).
        Malformed lines never raise; they show up in the diagnostics.
        """
        result = NormalizationResult()
        seen: set[str] = set()
        line_count = 0

        for raw in raw_lines:
            line_count += 1
            if raw is None:
                result.diagnostics.append(Diagnostic(original="", reason="unparsed"))
                continue

            text = raw if isinstance(raw, str) else str(raw)
            records, diagnostics = self._process_line(text)

            if not records:
                result.diagnostics.extend(diagnostics)
                continue

            for record, diagnostic in zip(records, diagnostics):
                if record.dedup_key in seen:
                    logger.debug(f"Dropping duplicate ingredient {record.food_entry!r}")
                    result.diagnostics.append(
                        Diagnostic(original=text, normalized=record.food_entry, reason="duplicate")
                    )
                    continue
                seen.add(record.dedup_key)
                result.ingredients.append(record)
                result.diagnostics.append(diagnostic)

        logger.info(
            f"Normalized {line_count} lines into {len(result.ingredients)} ingredients "
            f"({len(result.dropped)} dropped)"
        )
        return result

    def _process_line(self, raw: str) -> tuple[list[CanonicalIngredient], list[Diagnostic]]:
        parsed = parse(raw, self.tables)
        bare_name = False

        if isinstance(parsed, ParseFailure):
            if parsed.reason == "unparsed" and self.unparsed_policy == "bare_name":
                parsed = ParsedIngredient(quantity=1.0, unit_token="", name_text=raw.strip())
                bare_name = True
            else:
                logger.debug(f"Skipping line {raw!r}: {parsed.reason}")
                return [], [Diagnostic(original=raw, reason=parsed.reason)]

        amount = canonicalize(parsed.unit_token, parsed.quantity, parsed.name_text, self.tables)
        parts = split(
            amount.quantity,
            amount.unit,
            parsed.name_text,
            tables=self.tables,
            policy=self.composite_policy,
        )
        if not parts:
            logger.debug(f"Skipping line {raw!r}: name is empty after cleaning")
            return [], [Diagnostic(original=raw, reason="empty-name")]

        if len(parts) > 1:
            logger.debug(f"Split {raw!r} into {len(parts)} ingredients")

        records = []
        diagnostics = []
        for part in parts:
            record = CanonicalIngredient(quantity=part.quantity, unit=part.unit, name=part.name)
            reason = "bare-name" if bare_name and part.reason == "normalized" else part.reason
            records.append(record)
            diagnostics.append(Diagnostic(original=raw, normalized=record.food_entry, reason=reason))
        return records, diagnostics


@lru_cache
def get_default_normalizer() -> IngredientNormalizer:
    """Get a normalizer built from the cached application settings."""
    return IngredientNormalizer.from_settings(get_settings())


def _resolve(settings: Settings | None) -> IngredientNormalizer:
    if settings is None:
        return get_default_normalizer()
    return IngredientNormalizer.from_settings(settings)


def normalize_ingredients(
    raw_lines: Iterable[Any], *, settings: Settings | None = None
) -> list[CanonicalIngredient]:
    """
    Normalize raw ingredient lines into a de-duplicated list of records.

    Examples:
        ["1 pinch salt and pepper"] -> [0.3 g salt, 0.3 g pepper]
        ["100 ml soy milk", "100 ML Soy Milk "] -> [100 g soy milk]
        [] -> []
    """
    return _resolve(settings).normalize(raw_lines).ingredients


def build_nutrition_request(
    raw_lines: Iterable[Any],
    servings: Any = None,
    *,
    settings: Settings | None = None,
) -> NutritionRequest:
    """Normalize lines and package them with a serving count for a nutrition client."""
    result = _resolve(settings).normalize(raw_lines)
    return NutritionRequest(ingredients=result.food_entries, servings=servings)
