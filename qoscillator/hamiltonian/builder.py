"""Discretized harmonic-oscillator Hamiltonians built in a Fourier basis.

The model is ``H = (P^2 + Q^2) / 2`` on an n-point grid:

* the momentum operator P is diagonal in frequency space with entries
  0, 1, ..., n-1 and is brought back to position space with the unitary
  DFT matrix F;
* the position operator Q is diagonal with a grid of n points centred on 0.

Two variants are provided. :func:`build_hamiltonian` is the precise model
(``P = F diag(k) F^H``, grid spacing ``a``, entries rounded to a fixed number
of decimals). :func:`build_simple_hamiltonian` is the earlier simplified model
(``P = F^H diag(k) F``, only the grid offset scaled by ``a``, no rounding).
"""

from __future__ import annotations

from typing import Optional

import torch

from ..config import HamiltonianConfig
from ..diagnostics import assert_hermitian, is_debug_enabled
from ..errors import DimensionError
from ..fourier import FourierBasis
from ..linalg.layout import COMPLEX_DTYPE, REAL_DTYPE
from ..linalg.matrix import ComplexMatrix, diag_multiply_left, multiply
from ..logging import get_logger
from ..utils import check_finite, round_complex

logger = get_logger(__name__)


def _check_dimension(n: int) -> None:
    if n < 1:
        raise DimensionError(f"n must be >= 1, got {n}")


def momentum_operator(n: int, basis: Optional[FourierBasis] = None) -> ComplexMatrix:
    """
    Return ``P = F · diag(0, 1, ..., n-1) · F^H``.

    P is Hermitian because F is unitary and the diagonal is real.

    Parameters
    ----------
    n:
        Dimension (>= 1).
    basis:
        Optional precomputed FourierBasis of dimension n.

    Raises
    ------
    DimensionError
        If n < 1 or the basis dimension differs from n.
    """
    _check_dimension(n)
    if basis is None:
        basis = FourierBasis(n)
    elif basis.n != n:
        raise DimensionError(f"basis has dimension {basis.n}, expected {n}")

    impulse = torch.arange(n, dtype=REAL_DTYPE)
    p_temp = diag_multiply_left(impulse, basis.inverse)
    return multiply(basis.forward, p_temp)


def position_diagonal(n: int, a: float) -> torch.Tensor:
    """
    Return the position grid ``Q[i] = a · (-(n-1)/2 + i)``.

    The grid is symmetric about zero; ``a = 0`` collapses it to zeros.
    """
    _check_dimension(n)
    a = check_finite(a, "a")
    i = torch.arange(n, dtype=REAL_DTYPE)
    return a * (-(n - 1) / 2.0 + i)


def _assemble(p: ComplexMatrix, q: torch.Tensor) -> torch.Tensor:
    """Return ``0.5 · (P·P + diag(q²))`` as a dense tensor."""
    p2 = multiply(p, p).to_tensor()
    q2 = torch.diag(q * q).to(COMPLEX_DTYPE)
    return 0.5 * (p2 + q2)


def build_hamiltonian(n: int, a: float = 1.0, decimals: int = 5) -> ComplexMatrix:
    """
    Build the precise harmonic-oscillator Hamiltonian.

    ``H[i, j] = 0.5 · (P²[i, j] + δ_ij · Q[i]²)`` with both real and imaginary
    parts rounded to `decimals` digits, ties away from zero.

    Parameters
    ----------
    n:
        Dimension (>= 1).
    a:
        Potential parameter (finite).
    decimals:
        Digits kept after rounding (>= 0).

    Returns
    -------
    ComplexMatrix
        Row-major Hermitian matrix (within the rounding tolerance).

    Raises
    ------
    DimensionError
        If n < 1.
    ValueError
        If a is not finite or decimals is negative.

    Example
    -------
    >>> h = build_hamiltonian(2, 1.0)
    >>> h[0, 0].real, h[0, 1].real
    (0.375, -0.25)
    """
    _check_dimension(n)
    if decimals < 0:
        raise ValueError(f"decimals must be >= 0, got {decimals}")

    p = momentum_operator(n)
    q = position_diagonal(n, a)
    h = round_complex(_assemble(p, q), decimals)
    hamiltonian = ComplexMatrix.from_tensor(h)

    logger.debug("Built Hamiltonian n=%d a=%g decimals=%d", n, a, decimals)

    if is_debug_enabled():
        # Rounding can split mirror entries across a rounding boundary.
        assert_hermitian(hamiltonian, atol=1.5 * 10.0**-decimals)

    return hamiltonian


def build_simple_hamiltonian(n: int, a: float = 1.0) -> ComplexMatrix:
    """
    Build the simplified harmonic-oscillator Hamiltonian.

    Differs from :func:`build_hamiltonian` in three ways: the momentum operator
    is ``F^H · diag(0, ..., n-1) · F``, the grid is ``Q[i] = -(n-1)·a/2 + i``
    (unit spacing, only the offset scales with a), and no rounding is applied.

    Raises
    ------
    DimensionError
        If n < 1.
    ValueError
        If a is not finite.
    """
    _check_dimension(n)
    a = check_finite(a, "a")

    basis = FourierBasis(n)
    impulse = torch.arange(n, dtype=REAL_DTYPE)
    p = multiply(basis.inverse, diag_multiply_left(impulse, basis.forward))

    q = -((n - 1) * a / 2.0) + torch.arange(n, dtype=REAL_DTYPE)
    hamiltonian = ComplexMatrix.from_tensor(_assemble(p, q))

    logger.debug("Built simplified Hamiltonian n=%d a=%g", n, a)

    if is_debug_enabled():
        assert_hermitian(hamiltonian, atol=1e-9)

    return hamiltonian


class HamiltonianBuilder:
    """
    Builds Hamiltonians for a fixed HamiltonianConfig.

    Args:
        config: Model parameters. Defaults to ``HamiltonianConfig()``
            (n=8, a=1.0, decimals=5).

    Example:
        >>> builder = HamiltonianBuilder(HamiltonianConfig(n=4, a=0.5))
        >>> builder.build().n
        4
    """

    def __init__(self, config: Optional[HamiltonianConfig] = None) -> None:
        self.config = config if config is not None else HamiltonianConfig()

    def build(self) -> ComplexMatrix:
        """Return the precise Hamiltonian for the configured (n, a)."""
        return build_hamiltonian(self.config.n, self.config.a, self.config.decimals)

    def build_simple(self) -> ComplexMatrix:
        """Return the simplified Hamiltonian for the configured (n, a)."""
        return build_simple_hamiltonian(self.config.n, self.config.a)

    def __repr__(self) -> str:
        return f"HamiltonianBuilder({self.config!r})"


__all__ = [
    "momentum_operator",
    "position_diagonal",
    "build_hamiltonian",
    "build_simple_hamiltonian",
    "HamiltonianBuilder",
]
