"""Pytest configuration and shared fixtures."""

import logging

import pytest

from nutrinorm.config import get_settings
from nutrinorm.normalize.pipeline import IngredientNormalizer, get_default_normalizer
from nutrinorm.normalize.tables import DEFAULT_TABLES

# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "cli: marks tests that drive the command line entry point")


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch, tmp_path):
    """Isolate every test from NUTRINORM_* variables, .env files and cached settings."""
    for name in [
        "NUTRINORM_PINCH_IN_GRAMS",
        "NUTRINORM_ML_CONVERSION",
        "NUTRINORM_COMPOSITE_POLICY",
        "NUTRINORM_UNPARSED_POLICY",
        "NUTRINORM_LOG_LEVEL",
        "NUTRINORM_LOG_FORMAT",
        "NUTRINORM_ENVIRONMENT",
    ]:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    get_default_normalizer.cache_clear()
    yield
    get_settings.cache_clear()
    get_default_normalizer.cache_clear()


# =============================================================================
# Normalizer Fixtures
# =============================================================================


@pytest.fixture
def tables():
    """Default lookup tables."""
    return DEFAULT_TABLES


@pytest.fixture
def normalizer():
    """Normalizer with default tables and policies."""
    return IngredientNormalizer()


@pytest.fixture
def sample_recipe_lines():
    """A vegan pancake recipe as typed by a user."""
    return [
        "100 ml Soy milk",
        "1 pinch salt and pepper",
        "2 tbsp balsamic glaze",
        "1 tbspn extra virgin olive oil",
        "200 g smoked tofu",
        "1 handful fresh spinach",
        "salt",
        "100 ML soy milk ",
    ]


@pytest.fixture
def restore_root_logger():
    """configure_logging replaces root handlers; put the originals back."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
