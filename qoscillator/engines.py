"""Stateful engines exposing the numeric core to a flat-list message host.

A host environment talks to the core with flat lists of reals and "compute"
triggers. Each engine below owns the state one host object needs (dimension,
potential parameter, stored matrix) and converts between flat lists and
:class:`~qoscillator.linalg.ComplexMatrix` explicitly.

Engines are not thread-safe; a caller sharing one engine between threads must
serialize access.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from .config import EigensolverConfig, HamiltonianConfig
from .eigen import HermitianEigensolver, HouseholderEigensolver
from .errors import DimensionError, NotReadyError, QOscillatorError
from .hamiltonian import build_hamiltonian, build_simple_hamiltonian
from .linalg.layout import deinterleave
from .linalg.matrix import ComplexMatrix
from .logging import get_logger
from .utils import check_finite

logger = get_logger(__name__)


def _validated_dimension(n: int) -> int:
    if isinstance(n, bool) or int(n) != n:
        raise TypeError(f"dimension must be an integer, got {n!r}")
    n = int(n)
    if n < 1:
        raise DimensionError(f"dimension must be > 0, got {n}")
    return n


class EigenCalculator:
    """
    Holds one Hermitian matrix and decomposes it on demand.

    Args:
        n: Initial dimension (default 3).
        solver: Eigensolver to use. Defaults to a HouseholderEigensolver
            built from `config`.
        config: Solver configuration used when `solver` is None.

    Example:
        >>> calc = EigenCalculator(2)
        >>> calc.load_matrix([2.0, 0.0, 0.0, 0.0, 0.0, 0.0, 3.0, 0.0])
        >>> values, vectors = calc.compute()
        >>> values
        [2.0, 3.0]
    """

    def __init__(
        self,
        n: int = 3,
        solver: Optional[HermitianEigensolver] = None,
        config: Optional[EigensolverConfig] = None,
    ) -> None:
        self._n = _validated_dimension(n)
        if solver is None:
            solver = HouseholderEigensolver(config)
        self.solver = solver
        self._matrix: Optional[ComplexMatrix] = None

    @property
    def n(self) -> int:
        """Current dimension."""
        return self._n

    @property
    def has_matrix(self) -> bool:
        """Whether a matrix is stored and ready for :meth:`compute`."""
        return self._matrix is not None

    @property
    def matrix(self) -> Optional[ComplexMatrix]:
        """The stored matrix in row-major layout, or None."""
        return self._matrix

    def set_dimension(self, n: int) -> None:
        """
        Change the dimension. A different n discards the stored matrix.

        Raises:
            DimensionError: If n <= 0. State is left unchanged.
        """
        try:
            n = _validated_dimension(n)
        except DimensionError:
            logger.error("dim must be > 0, got %s", n)
            raise
        if n == self._n:
            return
        self._n = n
        self._matrix = None
        logger.info("Dimension set to %d", n)

    def clear(self) -> None:
        """Discard the stored matrix."""
        self._matrix = None

    def load_matrix(self, values: Sequence[float]) -> None:
        """
        Store a matrix given as ``2 * n * n`` reals.

        `values` is row-major with each entry as a consecutive (real, imag)
        pair. Only the upper triangle is used by :meth:`compute`.

        Raises:
            SizeMismatchError: If the length is not ``2 * n * n``. Any
                previously stored matrix is kept.
        """
        try:
            buffer = deinterleave(values, self._n)
        except QOscillatorError as exc:
            logger.error("%s", exc)
            raise
        self._matrix = ComplexMatrix(self._n, buffer, layout="row")
        logger.info("Complex matrix stored (dimension %d).", self._n)

    def compute(self) -> Tuple[List[float], List[float]]:
        """
        Decompose the stored matrix.

        The row-major input is converted to column-major storage before it is
        handed to the solver.

        Returns:
            ``(eigenvalues, eigenvectors)``: n ascending reals, and ``2 * n * n``
            reals holding the eigenvectors column by column as (real, imag)
            pairs.

        Raises:
            NotReadyError: If no matrix has been loaded.
            ConvergenceError: If the solver does not converge.
        """
        if self._matrix is None:
            logger.error("No matrix stored. Use load_matrix first.")
            raise NotReadyError("No matrix stored. Use load_matrix first.")

        column_major = self._matrix.to_column_major()
        try:
            result = self.solver.solve(column_major, n=self._n)
        except QOscillatorError as exc:
            logger.error("Eigen-decomposition failed: %s", exc)
            raise

        logger.info("Eigen-decomposition completed successfully.")
        return result.eigenvalue_list(), result.eigenvectors_flat()

    def __repr__(self) -> str:
        return f"EigenCalculator(n={self._n}, has_matrix={self.has_matrix})"


class HamiltonianEngine:
    """
    Computes the precise Hamiltonian for the current (n, a).

    Args:
        n: Dimension (default 8).
        a: Potential parameter (default 1.0).
        decimals: Rounding digits (default 5).
    """

    def __init__(self, n: int = 8, a: float = 1.0, decimals: int = 5) -> None:
        self.config = HamiltonianConfig(n=_validated_dimension(n), a=a, decimals=decimals)

    @property
    def n(self) -> int:
        return self.config.n

    @property
    def a(self) -> float:
        return self.config.a

    def set_dimension(self, n: int) -> None:
        """
        Change the dimension.

        Raises:
            DimensionError: If n <= 0. State is left unchanged.
        """
        try:
            n = _validated_dimension(n)
        except DimensionError:
            logger.error("dim must be > 0, got %s", n)
            raise
        self.config = HamiltonianConfig(n=n, a=self.config.a, decimals=self.config.decimals)
        logger.info("Dimension set to %d", n)

    def set_potential(self, a: float) -> None:
        """
        Change the potential parameter.

        Raises:
            ValueError: If a is not finite. State is left unchanged.
        """
        try:
            a = check_finite(a, "a")
        except ValueError as exc:
            logger.error("%s", exc)
            raise
        self.config = HamiltonianConfig(n=self.config.n, a=a, decimals=self.config.decimals)
        logger.info("Potential parameter set to %g", a)

    def compute_matrix(self) -> ComplexMatrix:
        """Return the Hamiltonian as a ComplexMatrix."""
        return build_hamiltonian(self.config.n, self.config.a, self.config.decimals)

    def compute(self) -> List[float]:
        """Return the Hamiltonian as ``2 * n * n`` row-major reals, (real, imag) pairs."""
        return self.compute_matrix().to_flat()

    def __repr__(self) -> str:
        return f"HamiltonianEngine(n={self.n}, a={self.a})"


class SimpleHamiltonianEngine(HamiltonianEngine):
    """
    Computes the simplified Hamiltonian and emits only its real parts.

    Args:
        n: Dimension (default 8).
        a: Potential parameter (default 1.0).
    """

    def __init__(self, n: int = 8, a: float = 1.0) -> None:
        super().__init__(n=n, a=a)

    def compute_matrix(self) -> ComplexMatrix:
        """Return the simplified Hamiltonian as a ComplexMatrix."""
        return build_simple_hamiltonian(self.config.n, self.config.a)

    def compute(self) -> List[float]:
        """Return the real parts of the Hamiltonian as ``n * n`` row-major reals."""
        return self.compute_matrix().to_row_major().buffer.real.tolist()

    def __repr__(self) -> str:
        return f"SimpleHamiltonianEngine(n={self.n}, a={self.a})"


__all__ = ["EigenCalculator", "HamiltonianEngine", "SimpleHamiltonianEngine"]
