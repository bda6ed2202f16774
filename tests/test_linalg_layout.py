"""Tests for row-/column-major conversion and (real, imag) interleaving."""

import pytest
import torch

from qoscillator.errors import DimensionError, SizeMismatchError
from qoscillator.linalg.layout import (
    column_to_row_major,
    deinterleave,
    interleave,
    row_to_column_major,
)


def _row_major_2x3_labels() -> torch.Tensor:
    # Entry (i, j) holds the complex number i + j*1j for n=3.
    n = 3
    return torch.tensor(
        [complex(i, j) for i in range(n) for j in range(n)], dtype=torch.complex128
    )


def test_row_to_column_major_places_entries() -> None:
    """Element (i, j) moves from i*n + j to j*n + i."""
    n = 3
    row = _row_major_2x3_labels()
    col = row_to_column_major(row, n)
    for i in range(n):
        for j in range(n):
            assert col[j * n + i].item() == complex(i, j)


def test_column_to_row_major_inverts() -> None:
    """Converting back restores the original buffer."""
    row = _row_major_2x3_labels()
    assert torch.equal(column_to_row_major(row_to_column_major(row, 3), 3), row)


def test_conversion_does_not_mutate_input() -> None:
    """Inputs are left untouched."""
    row = _row_major_2x3_labels()
    before = row.clone()
    row_to_column_major(row, 3)
    assert torch.equal(row, before)


def test_conversion_rejects_wrong_size() -> None:
    """A buffer of the wrong length raises DimensionError."""
    with pytest.raises(DimensionError):
        row_to_column_major(torch.zeros(5, dtype=torch.complex128), 2)
    with pytest.raises(DimensionError):
        column_to_row_major(torch.zeros(4, dtype=torch.complex128), 0)


def test_interleave_pairs() -> None:
    """Complex entries become consecutive (real, imag) pairs."""
    buf = torch.tensor([1 + 2j, -3 + 0.5j], dtype=torch.complex128)
    assert interleave(buf) == [1.0, 2.0, -3.0, 0.5]


def test_interleave_resolves_conjugate_views() -> None:
    """Lazily conjugated tensors are flattened with their conjugated values."""
    buf = torch.tensor([1 + 2j], dtype=torch.complex128).conj()
    assert interleave(buf) == [1.0, -2.0]


def test_deinterleave_parses_pairs() -> None:
    """2*n*n reals become n*n complex entries in the same order."""
    values = [1.0, 0.0, 0.0, 1.0, 0.0, -1.0, 2.0, 0.0]
    buf = deinterleave(values, 2)
    assert buf.dtype == torch.complex128
    assert buf.tolist() == [1 + 0j, 1j, -1j, 2 + 0j]


def test_deinterleave_length_mismatch() -> None:
    """n=3 expects 18 values; 10 raises SizeMismatchError."""
    with pytest.raises(SizeMismatchError, match="Expected 18 floats"):
        deinterleave([0.0] * 10, 3)


def test_deinterleave_invalid_dimension() -> None:
    """Non-positive dimensions raise DimensionError."""
    with pytest.raises(DimensionError):
        deinterleave([], 0)
