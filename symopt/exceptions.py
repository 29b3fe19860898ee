"""Exception types raised by symopt."""

from __future__ import annotations

from typing import Optional


class SymoptError(Exception):
    """Base class for all symopt errors."""


class UnsupportedOperatorError(SymoptError):
    """Raised when an operator has no differentiation rule."""

    def __init__(self, operator: str) -> None:
        super().__init__(f"No differentiation rule for operator '{operator}'.")
        self.operator = operator


class NumericalFailureError(SymoptError):
    """Raised when an optimization step cannot produce a finite candidate.

    Attributes:
        iteration: One-based iteration at which the failure occurred, or
            ``None`` if the starting point itself was invalid.
    """

    def __init__(self, message: str, iteration: Optional[int] = None) -> None:
        super().__init__(message)
        self.iteration = iteration


__all__ = ["SymoptError", "UnsupportedOperatorError", "NumericalFailureError"]
