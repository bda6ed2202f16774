"""Harmonic-oscillator Hamiltonians on a discrete grid."""

from .builder import (
    HamiltonianBuilder,
    build_hamiltonian,
    build_simple_hamiltonian,
    momentum_operator,
    position_diagonal,
)

__all__ = [
    "HamiltonianBuilder",
    "build_hamiltonian",
    "build_simple_hamiltonian",
    "momentum_operator",
    "position_diagonal",
]
