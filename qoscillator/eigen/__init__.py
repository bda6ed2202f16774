"""Dense Hermitian eigen-decomposition."""

from .base import EigenResult, HermitianEigensolver, hermitian_from_upper
from .householder import (
    HouseholderEigensolver,
    householder_tridiagonalize,
    tridiagonal_ql,
)
from .torch_solver import TorchEigensolver


def default_solver() -> HermitianEigensolver:
    """Return the solver used when none is specified."""
    return HouseholderEigensolver()


__all__ = [
    "EigenResult",
    "HermitianEigensolver",
    "HouseholderEigensolver",
    "TorchEigensolver",
    "default_solver",
    "hermitian_from_upper",
    "householder_tridiagonalize",
    "tridiagonal_ql",
]
