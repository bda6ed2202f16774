"""Tests for the exception hierarchy."""

import pytest

from qoscillator.errors import (
    AllocationError,
    ConvergenceError,
    DimensionError,
    NotReadyError,
    QOscillatorError,
    SizeMismatchError,
)


@pytest.mark.parametrize(
    "error_type, builtin",
    [
        (AllocationError, MemoryError),
        (SizeMismatchError, ValueError),
        (DimensionError, ValueError),
        (NotReadyError, RuntimeError),
        (ConvergenceError, RuntimeError),
    ],
)
def test_errors_share_base_and_builtin(error_type, builtin) -> None:
    """Each error is a QOscillatorError and its matching builtin."""
    assert issubclass(error_type, QOscillatorError)
    assert issubclass(error_type, builtin)


def test_convergence_error_carries_context() -> None:
    """ConvergenceError records the failing index and iteration count."""
    err = ConvergenceError("no luck", index=3, iterations=30)
    assert str(err) == "no luck"
    assert err.index == 3
    assert err.iterations == 30
