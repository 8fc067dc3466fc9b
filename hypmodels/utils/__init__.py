"""Numerical helpers for hypmodels."""

from .math_utils import acosh

__all__ = [
    "acosh",
]
