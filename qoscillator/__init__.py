"""qoscillator - Fourier-basis harmonic-oscillator Hamiltonians and dense Hermitian eigensolvers."""

__version__ = "0.1.0"

from .config import EigensolverConfig, HamiltonianConfig

# Diagnostics
from .diagnostics import (
    assert_hermitian,
    assert_orthonormal_columns,
    debug_context,
    is_debug_enabled,
    is_hermitian,
    is_unitary,
    reconstruction_error,
    set_debug_enabled,
)

# Eigensolvers
from .eigen import (
    EigenResult,
    HermitianEigensolver,
    HouseholderEigensolver,
    TorchEigensolver,
    default_solver,
)

# Engines
from .engines import EigenCalculator, HamiltonianEngine, SimpleHamiltonianEngine

# Errors
from .errors import (
    AllocationError,
    ConvergenceError,
    DimensionError,
    NotReadyError,
    QOscillatorError,
    SizeMismatchError,
)

# Fourier basis
from .fourier import FourierBasis, fourier_matrix, inverse_fourier_matrix

# Hamiltonians
from .hamiltonian import (
    HamiltonianBuilder,
    build_hamiltonian,
    build_simple_hamiltonian,
    momentum_operator,
    position_diagonal,
)

# Matrices and layout
from .linalg import (
    ComplexMatrix,
    alloc,
    column_to_row_major,
    conjugate_transpose,
    deinterleave,
    diag_multiply_left,
    interleave,
    multiply,
    row_to_column_major,
)

__all__ = [
    # Version
    "__version__",
    # Config
    "HamiltonianConfig",
    "EigensolverConfig",
    # Errors
    "QOscillatorError",
    "AllocationError",
    "SizeMismatchError",
    "DimensionError",
    "NotReadyError",
    "ConvergenceError",
    # Matrices and layout
    "ComplexMatrix",
    "alloc",
    "conjugate_transpose",
    "diag_multiply_left",
    "multiply",
    "row_to_column_major",
    "column_to_row_major",
    "interleave",
    "deinterleave",
    # Fourier basis
    "FourierBasis",
    "fourier_matrix",
    "inverse_fourier_matrix",
    # Hamiltonians
    "HamiltonianBuilder",
    "build_hamiltonian",
    "build_simple_hamiltonian",
    "momentum_operator",
    "position_diagonal",
    # Eigensolvers
    "EigenResult",
    "HermitianEigensolver",
    "HouseholderEigensolver",
    "TorchEigensolver",
    "default_solver",
    # Engines
    "EigenCalculator",
    "HamiltonianEngine",
    "SimpleHamiltonianEngine",
    # Diagnostics
    "is_hermitian",
    "assert_hermitian",
    "is_unitary",
    "assert_orthonormal_columns",
    "reconstruction_error",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
]
