"""Whisker error hierarchy.

All whisker-specific errors inherit from WhiskerError for easy catching.

Resolution misses and store conflicts are *not* errors: they are reported as
return values (``None``, ``AlreadyExists``, ``KeyNotFound``).
"""


class WhiskerError(Exception):
    """Base error for all whisker operations."""


class ConfigError(WhiskerError):
    """Invalid or missing configuration."""


class LoadError(WhiskerError):
    """A located file could not be executed or parsed."""
