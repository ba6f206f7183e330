"""Exceptions raised by nutrinorm.

Malformed ingredient lines never raise; they are reported as diagnostics.
Only invalid configuration is an error.
"""


class NutrinormError(Exception):
    """Base class for nutrinorm errors."""


class ConfigurationError(NutrinormError, ValueError):
    """Raised when normalizer tables or settings hold invalid values."""
