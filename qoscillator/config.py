"""Configuration objects for Hamiltonian construction and eigen-decomposition."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .errors import DimensionError


@dataclass(frozen=True)
class HamiltonianConfig:
    """
    Parameters of the discretized harmonic-oscillator model.

    Args:
        n: Matrix dimension (number of grid points). Must be >= 1.
        a: Potential parameter scaling the position grid. Must be finite.
        decimals: Number of decimal digits kept when rounding the precise
            Hamiltonian. Must be >= 0.
    """

    n: int = 8
    a: float = 1.0
    decimals: int = 5

    def __post_init__(self) -> None:
        """Validate configuration invariants."""
        if self.n < 1:
            raise DimensionError(f"n must be >= 1, got {self.n}")
        if not math.isfinite(self.a):
            raise ValueError(f"a must be finite, got {self.a}")
        if self.decimals < 0:
            raise ValueError(f"decimals must be >= 0, got {self.decimals}")


@dataclass(frozen=True)
class EigensolverConfig:
    """
    Configuration for Hermitian eigensolvers.

    Args:
        max_iterations: Iteration budget of the implicit QL sweep, per
            eigenvalue. Exceeding it raises ConvergenceError. Must be >= 1.
        check_hermitian: If True, inputs are checked for Hermiticity before
            solving and rejected with ValueError otherwise. By default only
            the upper triangle is read and the lower one is trusted.
        hermitian_atol: Absolute tolerance used by the Hermiticity check.
    """

    max_iterations: int = 30
    check_hermitian: bool = False
    hermitian_atol: float = 1e-8

    def __post_init__(self) -> None:
        """Validate configuration invariants."""
        if self.max_iterations < 1:
            raise ValueError(
                f"max_iterations must be >= 1, got {self.max_iterations}"
            )
        if self.hermitian_atol < 0.0:
            raise ValueError(
                f"hermitian_atol must be non-negative, got {self.hermitian_atol}"
            )


__all__ = ["HamiltonianConfig", "EigensolverConfig"]
