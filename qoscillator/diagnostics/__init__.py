"""Diagnostics and debugging utilities for qoscillator."""

from .core import (
    assert_hermitian,
    assert_orthonormal_columns,
    is_hermitian,
    is_unitary,
    reconstruction_error,
)
from .debug_mode import (
    debug_context,
    is_debug_enabled,
    set_debug_enabled,
)

__all__ = [
    "is_hermitian",
    "assert_hermitian",
    "is_unitary",
    "assert_orthonormal_columns",
    "reconstruction_error",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
]
