"""Unitary discrete-Fourier matrices."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import torch

from ..errors import DimensionError
from ..linalg.layout import REAL_DTYPE
from ..linalg.matrix import ComplexMatrix, conjugate_transpose


def fourier_matrix(n: int) -> ComplexMatrix:
    """
    Build the unitary DFT matrix ``F[k, l] = exp(2πi·k·l/n) / sqrt(n)``.

    The phase index ``k * l`` is reduced modulo n before the angle is formed,
    which keeps the angles in [0, 2π) and the entries accurate for large n.

    Parameters
    ----------
    n:
        Matrix dimension (must be >= 1).

    Returns
    -------
    ComplexMatrix
        Row-major unitary matrix.

    Raises
    ------
    DimensionError
        If n < 1.
    """
    if n < 1:
        raise DimensionError(f"n must be >= 1, got {n}")

    idx = torch.arange(n, dtype=torch.int64)
    phase_index = torch.remainder(torch.outer(idx, idx), n).to(REAL_DTYPE)
    angle = 2.0 * math.pi * phase_index / n
    norm = 1.0 / math.sqrt(n)
    f = torch.polar(torch.full_like(angle, norm), angle)
    return ComplexMatrix.from_tensor(f)


def inverse_fourier_matrix(n: int) -> ComplexMatrix:
    """Return ``F^{-1} = F^H`` (valid because F is unitary)."""
    return conjugate_transpose(fourier_matrix(n))


@dataclass(frozen=True)
class FourierBasis:
    """
    The DFT matrix of dimension n together with its inverse.

    Attributes:
        n: Dimension.
        forward: F.
        inverse: F^H.
    """

    n: int
    forward: ComplexMatrix = field(init=False, repr=False)
    inverse: ComplexMatrix = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Compute the forward and inverse matrices."""
        forward = fourier_matrix(self.n)
        object.__setattr__(self, "forward", forward)
        object.__setattr__(self, "inverse", conjugate_transpose(forward))


__all__ = ["fourier_matrix", "inverse_fourier_matrix", "FourierBasis"]
