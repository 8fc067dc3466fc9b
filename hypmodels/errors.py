"""
Exception classes for hypmodels.

Validity checks return these errors instead of raising them so callers can
decide how to react; operations that combine incompatible values raise them.
"""

from typing import Any


class HyperbolicError(Exception):
    """Base exception for all hypmodels errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class DomainError(HyperbolicError, ValueError):
    """Coordinates are well-formed but violate a model's geometric constraint.

    Attributes:
        value: The offending quantity, e.g. the Euclidean norm of the point.
    """

    def __init__(self, value: Any, message: str, details: dict | None = None):
        self.value = value
        super().__init__(message, details)


class DimensionMismatchError(HyperbolicError, ValueError):
    """Coordinates do not form a real vector of the expected length."""

    def __init__(self, expected: Any, actual: Any, message: str | None = None):
        self.expected = expected
        self.actual = actual
        if message is None:
            message = f"Expected coordinates of shape {expected}, got {actual}"
        super().__init__(message, {"expected": expected, "actual": actual})


class ModelMismatchError(HyperbolicError, ValueError):
    """Values from different models were combined in one operation."""


class UnsupportedConversionError(HyperbolicError, NotImplementedError):
    """No conversion is registered for the requested input or target."""
