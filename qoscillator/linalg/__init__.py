"""Dense complex matrices and layout conversion."""

from .layout import (
    COMPLEX_DTYPE,
    REAL_DTYPE,
    column_to_row_major,
    deinterleave,
    interleave,
    row_to_column_major,
)
from .matrix import (
    ComplexMatrix,
    alloc,
    conjugate_transpose,
    diag_multiply_left,
    multiply,
)

__all__ = [
    "COMPLEX_DTYPE",
    "REAL_DTYPE",
    "ComplexMatrix",
    "alloc",
    "conjugate_transpose",
    "diag_multiply_left",
    "multiply",
    "row_to_column_major",
    "column_to_row_major",
    "interleave",
    "deinterleave",
]
