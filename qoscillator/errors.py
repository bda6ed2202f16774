"""Exception types raised by qoscillator.

Each error also derives from the builtin exception that best describes it,
so callers that only catch ``ValueError`` or ``RuntimeError`` keep working.
"""

from __future__ import annotations


class QOscillatorError(Exception):
    """Base class for all qoscillator errors."""


class AllocationError(QOscillatorError, MemoryError):
    """A matrix or vector could not be allocated."""


class SizeMismatchError(QOscillatorError, ValueError):
    """A flat input list does not have the length the dimension requires."""


class DimensionError(QOscillatorError, ValueError):
    """A dimension is non-positive or two shapes are inconsistent."""


class NotReadyError(QOscillatorError, RuntimeError):
    """An operation was invoked before the state it needs exists."""


class ConvergenceError(QOscillatorError, RuntimeError):
    """An iterative eigenvalue refinement exceeded its iteration budget."""

    def __init__(self, message: str, index: int | None = None, iterations: int | None = None) -> None:
        super().__init__(message)
        self.index = index
        self.iterations = iterations


__all__ = [
    "QOscillatorError",
    "AllocationError",
    "SizeMismatchError",
    "DimensionError",
    "NotReadyError",
    "ConvergenceError",
]
