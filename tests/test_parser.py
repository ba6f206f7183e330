"""Unit tests for ingredient line parsing."""

import pytest

from nutrinorm.normalize.parser import (
    ParsedIngredient,
    ParseFailure,
    parse,
    parse_leading_quantity,
)


class TestParseLeadingQuantity:
    """Tests for parse_leading_quantity function."""

    def test_parse_integer(self):
        """Test parsing simple integers."""
        assert parse_leading_quantity("2 eggs") == (2.0, "eggs")
        assert parse_leading_quantity("10 g sugar") == (10.0, "g sugar")

    def test_parse_decimal(self):
        """Test parsing decimal numbers."""
        assert parse_leading_quantity("1.5 cup flour") == (1.5, "cup flour")
        assert parse_leading_quantity(".5 tsp salt") == (0.5, "tsp salt")

    def test_parse_fraction(self):
        """Test parsing simple fractions."""
        assert parse_leading_quantity("1/2 cup rice") == (0.5, "cup rice")
        assert parse_leading_quantity("3/4 tsp salt") == (0.75, "tsp salt")

    def test_parse_mixed_fraction(self):
        """Test parsing mixed fractions like '1 1/2'."""
        assert parse_leading_quantity("1 1/2 cup oats") == (1.5, "cup oats")
        assert parse_leading_quantity("2 1/4 tbsp oil") == (2.25, "tbsp oil")

    def test_number_glued_to_unit(self):
        """Test a quantity written directly against its unit."""
        assert parse_leading_quantity("500g chicken") == (500.0, "g chicken")

    def test_zero_denominator(self):
        """Test that x/0 is not a quantity."""
        assert parse_leading_quantity("1/0 cup rice") is None
        assert parse_leading_quantity("1 1/0 cup rice") is None

    def test_no_leading_number(self):
        """Test text that does not start with a number."""
        assert parse_leading_quantity("salt") is None
        assert parse_leading_quantity("a pinch of salt") is None

    def test_oversized_numbers(self):
        """Test digit strings too large for a finite float."""
        assert parse_leading_quantity("9" * 400 + " g sugar") is None
        assert parse_leading_quantity("9" * 400 + "/1 g sugar") is None
        assert parse_leading_quantity("1 " + "9" * 400 + "/1 g sugar") is None
        assert parse_leading_quantity("9" * 5000 + "/3 g sugar") is None

    def test_range_is_not_a_quantity(self):
        """Test that ranges are rejected rather than half-read."""
        assert parse_leading_quantity("2-3 cups water") is None


class TestParse:
    """Tests for parse function."""

    def test_quantity_unit_name(self):
        """Test the standard three-part shape."""
        assert parse("100 ml Soy milk") == ParsedIngredient(100.0, "ml", "Soy milk")

    def test_unit_token_is_lowercased(self):
        """Test unit tokens are lower-cased and lose a trailing period."""
        assert parse("2 Tbsp. balsamic glaze") == ParsedIngredient(2.0, "tbsp", "balsamic glaze")

    def test_unknown_unit_is_kept(self):
        """Test that any single word after the quantity counts as the unit."""
        assert parse("2 cloves garlic") == ParsedIngredient(2.0, "cloves", "garlic")

    def test_missing_unit(self):
        """Test a single word after the quantity is the name."""
        assert parse("2 eggs") == ParsedIngredient(2.0, "", "eggs")

    def test_adjective_is_not_a_unit(self):
        """Test a stoplist adjective in unit position stays in the name."""
        assert parse("2 large eggs") == ParsedIngredient(2.0, "", "large eggs")

    def test_surrounding_whitespace(self):
        """Test leading and trailing whitespace is ignored."""
        assert parse("   1 cup   rice  ") == ParsedIngredient(1.0, "cup", "rice")

    def test_bare_name_fails(self):
        """Test a line without a quantity."""
        assert parse("salt") == ParseFailure("salt", "unparsed")

    def test_unit_without_name_fails(self):
        """Test a measurement with nothing to measure."""
        assert parse("2 tbsp") == ParseFailure("2 tbsp", "no-name")
        assert parse("3") == ParseFailure("3", "no-name")

    def test_punctuation_after_unit(self):
        """Test commas and semicolons stuck to the unit are dropped."""
        assert parse("2 cups, rice") == ParsedIngredient(2.0, "cups", "rice")
        assert parse("1 tsp; salt") == ParsedIngredient(1.0, "tsp", "salt")
        assert parse("2 tbsp,") == ParseFailure("2 tbsp,", "no-name")

    @pytest.mark.parametrize(
        "raw",
        [
            "9" * 400 + " g sugar",
            "9" * 400 + "/1 g sugar",
            "1 " + "9" * 400 + "/1 g sugar",
            "9" * 5000 + "/3 g sugar",
        ],
    )
    def test_oversized_quantity(self, raw):
        """Test numbers that do not fit a finite float are not quantities."""
        assert parse(raw) == ParseFailure(raw, "unparsed")

    @pytest.mark.parametrize("raw", ["", "   ", None])
    def test_empty_line(self, raw):
        """Test empty input is reported as such."""
        result = parse(raw)
        assert isinstance(result, ParseFailure)
        assert result.reason == "empty"
