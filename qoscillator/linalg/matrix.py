"""Dense complex matrices backed by a single contiguous buffer.

A :class:`ComplexMatrix` owns one 1D complex128 tensor of ``n * n`` entries
and addresses it through an explicit ``(row_stride, col_stride)`` pair:

* row-major: strides ``(n, 1)``
* column-major: strides ``(1, n)``

The module-level primitives (:func:`alloc`, :func:`conjugate_transpose`,
:func:`diag_multiply_left`, :func:`multiply`) are pure: they never modify
their inputs and always return a freshly allocated matrix.
"""

from __future__ import annotations

from typing import List, Literal, Sequence, Tuple, Union

import torch

from ..errors import AllocationError, DimensionError
from .layout import (
    COMPLEX_DTYPE,
    OUT_OF_MEMORY_ERRORS,
    column_to_row_major,
    interleave,
    row_to_column_major,
)

Layout = Literal["row", "column"]

_VALID_LAYOUTS = ("row", "column")


def _allocate(numel: int) -> torch.Tensor:
    """Allocate a zeroed complex buffer, mapping allocator failures to AllocationError."""
    try:
        return torch.zeros(numel, dtype=COMPLEX_DTYPE)
    except OUT_OF_MEMORY_ERRORS as exc:
        raise AllocationError(
            f"Could not allocate a complex buffer of {numel} entries"
        ) from exc


class ComplexMatrix:
    """
    An ``n x n`` complex matrix stored in one contiguous buffer.

    Args:
        n: Matrix dimension. Must be >= 1.
        buffer: Optional 1D tensor of ``n * n`` entries laid out according to
            `layout`. It is copied, so the matrix owns its storage. If None,
            a zero matrix is allocated.
        layout: ``"row"`` (default) or ``"column"``.

    Raises:
        DimensionError: If n < 1 or the buffer size does not match.
        ValueError: If layout is not recognised.
        AllocationError: If the buffer cannot be allocated.

    Example:
        >>> m = ComplexMatrix.identity(2)
        >>> m[1, 1]
        (1+0j)
    """

    def __init__(
        self,
        n: int,
        buffer: torch.Tensor | None = None,
        layout: Layout = "row",
    ) -> None:
        if n < 1:
            raise DimensionError(f"n must be >= 1, got {n}")
        if layout not in _VALID_LAYOUTS:
            raise ValueError(f"layout must be one of {_VALID_LAYOUTS}, got {layout!r}")

        if buffer is None:
            data = _allocate(n * n)
        else:
            if buffer.numel() != n * n:
                raise DimensionError(
                    f"buffer has {buffer.numel()} entries, expected {n * n} for n={n}"
                )
            try:
                data = buffer.reshape(-1).to(COMPLEX_DTYPE).resolve_conj().clone()
            except OUT_OF_MEMORY_ERRORS as exc:
                raise AllocationError(
                    f"Could not copy a complex buffer of {n * n} entries"
                ) from exc

        self._n = n
        self._layout: Layout = layout
        self._buffer = data

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def zeros(cls, n: int) -> "ComplexMatrix":
        """Return a zero-initialized row-major matrix."""
        return cls(n)

    @classmethod
    def identity(cls, n: int) -> "ComplexMatrix":
        """Return the ``n x n`` identity matrix."""
        if n < 1:
            raise DimensionError(f"n must be >= 1, got {n}")
        return cls(n, torch.eye(n, dtype=COMPLEX_DTYPE).reshape(-1))

    @classmethod
    def from_tensor(cls, tensor: torch.Tensor) -> "ComplexMatrix":
        """
        Build a row-major matrix from a square 2D tensor.

        Raises:
            DimensionError: If the tensor is not square 2D or is empty.
        """
        if tensor.ndim != 2 or tensor.shape[0] != tensor.shape[1]:
            raise DimensionError(
                f"Expected a square 2D tensor, got shape {tuple(tensor.shape)}"
            )
        n = tensor.shape[0]
        return cls(n, tensor.contiguous().reshape(-1))

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def n(self) -> int:
        """Matrix dimension."""
        return self._n

    @property
    def layout(self) -> Layout:
        """Storage order of the underlying buffer."""
        return self._layout

    @property
    def strides(self) -> Tuple[int, int]:
        """(row_stride, col_stride) into the flat buffer."""
        if self._layout == "row":
            return (self._n, 1)
        return (1, self._n)

    @property
    def buffer(self) -> torch.Tensor:
        """The owned 1D storage. Mutating it mutates the matrix."""
        return self._buffer

    def _offset(self, i: int, j: int) -> int:
        if not (0 <= i < self._n and 0 <= j < self._n):
            raise IndexError(f"index ({i}, {j}) out of range for n={self._n}")
        row_stride, col_stride = self.strides
        return i * row_stride + j * col_stride

    def __getitem__(self, index: Tuple[int, int]) -> complex:
        i, j = index
        return complex(self._buffer[self._offset(i, j)].item())

    def __setitem__(self, index: Tuple[int, int], value: complex) -> None:
        i, j = index
        self._buffer[self._offset(i, j)] = value

    def __repr__(self) -> str:
        return f"ComplexMatrix(n={self._n}, layout={self._layout!r})"

    # ------------------------------------------------------------------
    # Views and conversions
    # ------------------------------------------------------------------

    def to_tensor(self) -> torch.Tensor:
        """
        Return an ``(n, n)`` strided view of the buffer, indexed ``[row, col]``.

        The view shares storage with the matrix.
        """
        return torch.as_strided(self._buffer, (self._n, self._n), self.strides)

    def to_row_major(self) -> "ComplexMatrix":
        """Return a row-major copy."""
        if self._layout == "row":
            return ComplexMatrix(self._n, self._buffer, layout="row")
        return ComplexMatrix(
            self._n, column_to_row_major(self._buffer, self._n), layout="row"
        )

    def to_column_major(self) -> "ComplexMatrix":
        """Return a column-major copy."""
        if self._layout == "column":
            return ComplexMatrix(self._n, self._buffer, layout="column")
        return ComplexMatrix(
            self._n, row_to_column_major(self._buffer, self._n), layout="column"
        )

    def to_flat(self) -> List[float]:
        """Row-major list of ``2 * n * n`` reals as (real, imag) pairs."""
        return interleave(self.to_row_major().buffer)

    def copy(self) -> "ComplexMatrix":
        """Return an independent copy with the same layout."""
        return ComplexMatrix(self._n, self._buffer, layout=self._layout)


# ----------------------------------------------------------------------
# Primitives
# ----------------------------------------------------------------------


def alloc(n: int) -> ComplexMatrix:
    """Allocate a zero-initialized ``n x n`` complex matrix."""
    return ComplexMatrix.zeros(n)


def conjugate_transpose(matrix: ComplexMatrix) -> ComplexMatrix:
    """
    Return ``B`` with ``B[i, j] = conj(A[j, i])``.

    Transposition is done by swapping the stride convention rather than by
    moving entries: the conjugated buffer of a row-major ``A`` read in
    column-major order is exactly ``A^H``.
    """
    flipped: Layout = "column" if matrix.layout == "row" else "row"
    return ComplexMatrix(matrix.n, torch.conj_physical(matrix.buffer), layout=flipped)


def diag_multiply_left(
    diagonal: Union[Sequence[float], torch.Tensor], matrix: ComplexMatrix
) -> ComplexMatrix:
    """
    Scale the rows of `matrix`: ``result[i, j] = diagonal[i] * matrix[i, j]``.

    This is ``diag(diagonal) @ matrix`` without materializing the diagonal
    matrix.

    Raises:
        DimensionError: If ``len(diagonal) != matrix.n``.
    """
    d = torch.as_tensor(diagonal).reshape(-1).to(COMPLEX_DTYPE)
    if d.numel() != matrix.n:
        raise DimensionError(
            f"diagonal has {d.numel()} entries, expected {matrix.n}"
        )
    return ComplexMatrix.from_tensor(d.unsqueeze(1) * matrix.to_tensor())


def multiply(a: ComplexMatrix, b: ComplexMatrix) -> ComplexMatrix:
    """
    Dense complex product ``a @ b``.

    Raises:
        DimensionError: If the dimensions differ.
    """
    if a.n != b.n:
        raise DimensionError(f"Cannot multiply {a.n}x{a.n} by {b.n}x{b.n}")
    try:
        product = a.to_tensor() @ b.to_tensor()
    except OUT_OF_MEMORY_ERRORS as exc:
        raise AllocationError(
            f"Could not allocate the product of two {a.n}x{a.n} matrices"
        ) from exc
    return ComplexMatrix.from_tensor(product)


__all__ = [
    "Layout",
    "ComplexMatrix",
    "alloc",
    "conjugate_transpose",
    "diag_multiply_left",
    "multiply",
]
