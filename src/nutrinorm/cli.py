"""Command line entry point: normalize ingredient lines from files or stdin.

Usage:
    nutrinorm recipe.txt
    echo "1 pinch salt and pepper" | nutrinorm --format text
    nutrinorm recipe.txt --servings 4 --diagnostics
"""

import argparse
import json
import sys
from collections.abc import Iterator, Sequence

from pydantic import ValidationError

from nutrinorm.config import Settings
from nutrinorm.logging_config import LoggingContext, configure_logging, get_logger
from nutrinorm.normalize.pipeline import IngredientNormalizer
from nutrinorm.schemas import NutritionRequest

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nutrinorm",
        description="Normalize recipe ingredient lines into canonical quantity/unit/name records",
    )
    parser.add_argument(
        "files", nargs="*", help="Files with one ingredient per line (default: stdin)"
    )
    parser.add_argument(
        "--format", "-f", choices=["json", "text"], default="json", help="Output format"
    )
    parser.add_argument(
        "--diagnostics", "-d", action="store_true", help="Include per-line diagnostics (json only)"
    )
    parser.add_argument(
        "--servings", "-s", type=str, help="Wrap output in a nutrition request for N servings"
    )
    parser.add_argument("--composite-policy", choices=["inherit", "infer"])
    parser.add_argument("--unparsed-policy", choices=["skip", "bare_name"])
    parser.add_argument("--ml-conversion", choices=["liquids", "always"])
    parser.add_argument("--pinch-grams", type=float, help="Grams per pinch")
    parser.add_argument("--log-level", default=None, help="Log level (default from settings)")
    return parser


def read_lines(paths: Sequence[str]) -> Iterator[str]:
    """Yield non-blank lines from the given files, or stdin when none are given."""
    if not paths:
        yield from (line.rstrip("\n") for line in sys.stdin if line.strip())
        return
    for path in paths:
        with open(path, encoding="utf-8") as handle:
            yield from (line.rstrip("\n") for line in handle if line.strip())


def settings_from_args(args: argparse.Namespace) -> Settings:
    overrides = {
        "composite_policy": args.composite_policy,
        "unparsed_policy": args.unparsed_policy,
        "ml_conversion": args.ml_conversion,
        "pinch_in_grams": args.pinch_grams,
        "log_level": args.log_level,
    }
    return Settings(**{key: value for key, value in overrides.items() if value is not None})


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = settings_from_args(args)
    except ValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err["loc"])
        parser.error(f"invalid settings: {fields or e}")
    configure_logging(settings.log_level, json_format=settings.json_logs)

    normalizer = IngredientNormalizer.from_settings(settings)
    try:
        lines = list(read_lines(args.files))
    except OSError as e:
        logger.error(f"Cannot read input: {e}")
        return 1

    with LoggingContext(batch_id=",".join(args.files) or "stdin"):
        result = normalizer.normalize(lines)

    if args.format == "text":
        for entry in result.food_entries:
            print(entry)
        return 0

    if args.servings is not None:
        output = NutritionRequest(ingredients=result.food_entries, servings=args.servings).model_dump()
    else:
        output = {"ingredients": [i.model_dump() for i in result.ingredients]}
    if args.diagnostics:
        output["diagnostics"] = [d.model_dump() for d in result.diagnostics]

    print(json.dumps(output, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
