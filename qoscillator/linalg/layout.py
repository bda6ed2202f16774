"""Layout conversion between flat host lists and contiguous matrix buffers.

Two conventions meet at the engine boundary:

* Flat host lists hold real numbers only. A complex entry ``z`` occupies two
  consecutive slots ``(z.real, z.imag)``.
* Matrix buffers are one-dimensional complex tensors of length ``n * n``.
  In *row-major* order element ``(i, j)`` sits at ``i * n + j``; in
  *column-major* order it sits at ``j * n + i``.

Every function here returns a new tensor or list and never mutates its input.
"""

from __future__ import annotations

from typing import List, Sequence

import torch

from ..errors import DimensionError, SizeMismatchError

COMPLEX_DTYPE = torch.complex128
REAL_DTYPE = torch.float64

# Allocator failures only; other RuntimeErrors propagate unchanged.
OUT_OF_MEMORY_ERRORS = (MemoryError, torch.cuda.OutOfMemoryError)


def _check_buffer(buffer: torch.Tensor, n: int) -> None:
    if n < 1:
        raise DimensionError(f"n must be >= 1, got {n}")
    if buffer.ndim != 1 or buffer.numel() != n * n:
        raise DimensionError(
            f"Expected a 1D buffer of {n * n} entries for n={n}, "
            f"got shape {tuple(buffer.shape)}"
        )


def row_to_column_major(buffer: torch.Tensor, n: int) -> torch.Tensor:
    """
    Reorder a row-major ``n*n`` buffer into column-major order.

    Parameters
    ----------
    buffer:
        1D tensor where element (i, j) is stored at ``i * n + j``.
    n:
        Matrix dimension.

    Returns
    -------
    torch.Tensor
        New 1D tensor where element (i, j) is stored at ``j * n + i``.

    Raises
    ------
    DimensionError
        If n < 1 or the buffer length is not ``n * n``.
    """
    _check_buffer(buffer, n)
    return buffer.reshape(n, n).transpose(0, 1).contiguous().reshape(-1)


def column_to_row_major(buffer: torch.Tensor, n: int) -> torch.Tensor:
    """
    Reorder a column-major ``n*n`` buffer into row-major order.

    Inverse of :func:`row_to_column_major`.
    """
    _check_buffer(buffer, n)
    # Reading a column-major buffer as (n, n) row-major yields the transpose.
    return buffer.reshape(n, n).transpose(0, 1).contiguous().reshape(-1)


def interleave(buffer: torch.Tensor) -> List[float]:
    """
    Flatten a complex buffer into ``[re0, im0, re1, im1, ...]``.

    The order of complex entries is preserved, so a row-major buffer gives a
    row-major flat list and a column-major buffer a column-major one.
    """
    if buffer.ndim != 1:
        raise DimensionError(f"interleave expects a 1D buffer, got shape {tuple(buffer.shape)}")
    buffer = buffer.to(COMPLEX_DTYPE).resolve_conj().contiguous()
    return torch.view_as_real(buffer).reshape(-1).tolist()


def deinterleave(values: Sequence[float], n: int) -> torch.Tensor:
    """
    Parse ``2*n*n`` reals of (real, imag) pairs into a complex buffer.

    The entry order of `values` is kept, so the layout of the result is
    whatever layout the caller used for the list.

    Parameters
    ----------
    values:
        Flat sequence of real numbers.
    n:
        Matrix dimension.

    Returns
    -------
    torch.Tensor
        1D complex128 tensor of length ``n * n``.

    Raises
    ------
    DimensionError
        If n < 1.
    SizeMismatchError
        If ``len(values) != 2 * n * n``.
    """
    if n < 1:
        raise DimensionError(f"n must be >= 1, got {n}")
    expected = 2 * n * n
    if len(values) != expected:
        raise SizeMismatchError(
            f"Expected {expected} floats for an {n}x{n} complex matrix, got {len(values)}"
        )
    pairs = torch.as_tensor(values, dtype=REAL_DTYPE).reshape(n * n, 2).contiguous()
    return torch.view_as_complex(pairs).clone()


__all__ = [
    "COMPLEX_DTYPE",
    "REAL_DTYPE",
    "OUT_OF_MEMORY_ERRORS",
    "row_to_column_major",
    "column_to_row_major",
    "interleave",
    "deinterleave",
]
