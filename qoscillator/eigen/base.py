"""Interface shared by all Hermitian eigensolvers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Union

import torch

from ..config import EigensolverConfig
from ..diagnostics import assert_hermitian, assert_orthonormal_columns, is_debug_enabled
from ..errors import DimensionError
from ..linalg.layout import COMPLEX_DTYPE, interleave
from ..linalg.matrix import ComplexMatrix
from ..logging import get_logger

logger = get_logger(__name__)

MatrixLike = Union[ComplexMatrix, torch.Tensor]


@dataclass(frozen=True)
class EigenResult:
    """
    Eigen-decomposition of an ``n x n`` Hermitian matrix.

    Attributes:
        eigenvalues: float64 tensor of shape (n,), ascending.
        eigenvectors: complex128 tensor of shape (n, n). Column k is the
            unit-norm eigenvector for ``eigenvalues[k]``.
        iterations: Number of QL sweeps spent (0 for library solvers).
    """

    eigenvalues: torch.Tensor
    eigenvectors: torch.Tensor
    iterations: int = 0

    @property
    def n(self) -> int:
        """Matrix dimension."""
        return int(self.eigenvalues.shape[0])

    def eigenvalue_list(self) -> List[float]:
        """Eigenvalues as a list of Python floats."""
        return self.eigenvalues.tolist()

    def eigenvectors_flat(self) -> List[float]:
        """
        Eigenvectors as ``2 * n * n`` reals, column-major, (real, imag) pairs.

        Entries ``2 * (j * n + i)`` and ``2 * (j * n + i) + 1`` hold the real
        and imaginary part of component i of eigenvector j.
        """
        # Column-major order of V is the row-major order of V^T.
        return interleave(self.eigenvectors.transpose(0, 1).contiguous().reshape(-1))


def hermitian_from_upper(a: torch.Tensor) -> torch.Tensor:
    """
    Rebuild a full Hermitian matrix from the upper triangle of `a`.

    The strictly lower triangle is ignored and the imaginary part of the
    diagonal is dropped.
    """
    upper = torch.triu(a, diagonal=1)
    diag = torch.diag(a.diagonal().real.to(a.dtype))
    return upper + upper.conj().transpose(0, 1) + diag


class HermitianEigensolver(ABC):
    """
    Computes all eigenvalues and eigenvectors of a Hermitian matrix.

    Only the upper triangle of the input (and the real part of its diagonal)
    is read. Subclasses implement :meth:`_solve` on the reconstructed full
    matrix; validation, optional Hermiticity checks and debug assertions are
    handled here.

    Args:
        config: Solver configuration. Defaults to ``EigensolverConfig()``.
    """

    def __init__(self, config: Optional[EigensolverConfig] = None) -> None:
        self.config = config if config is not None else EigensolverConfig()

    def solve(self, matrix: MatrixLike, n: Optional[int] = None) -> EigenResult:
        """
        Decompose `matrix`.

        Parameters
        ----------
        matrix:
            ComplexMatrix or square 2D tensor.
        n:
            Optional declared dimension; must match the matrix size.

        Returns
        -------
        EigenResult
            Ascending eigenvalues with index-aligned unit eigenvectors.

        Raises
        ------
        DimensionError
            If the matrix is not square, is empty, or does not match `n`.
        ValueError
            If ``config.check_hermitian`` is set and the matrix is not
            Hermitian within ``config.hermitian_atol``.
        ConvergenceError
            If the iterative refinement exceeds its budget.
        """
        a = matrix.to_tensor() if isinstance(matrix, ComplexMatrix) else matrix
        if a.ndim != 2 or a.shape[0] != a.shape[1]:
            raise DimensionError(f"Expected a square matrix, got shape {tuple(a.shape)}")
        size = a.shape[0]
        if size < 1:
            raise DimensionError("Cannot decompose an empty matrix")
        if n is not None and n != size:
            raise DimensionError(f"Declared dimension {n} does not match matrix size {size}")

        a = a.to(COMPLEX_DTYPE).resolve_conj()
        if self.config.check_hermitian:
            assert_hermitian(a, atol=self.config.hermitian_atol)

        result = self._solve(hermitian_from_upper(a))
        logger.debug(
            "%s solved n=%d in %d iterations", type(self).__name__, size, result.iterations
        )

        if is_debug_enabled():
            assert_orthonormal_columns(result.eigenvectors, atol=1e-8)

        return result

    @abstractmethod
    def _solve(self, a: torch.Tensor) -> EigenResult:
        """Decompose a full Hermitian complex128 matrix."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.config!r})"


__all__ = ["EigenResult", "HermitianEigensolver", "hermitian_from_upper"]
