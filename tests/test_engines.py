"""Tests for the flat-list engines used by message hosts."""

import pytest
import torch

from qoscillator.config import EigensolverConfig
from qoscillator.eigen import HouseholderEigensolver, TorchEigensolver
from qoscillator.engines import EigenCalculator, HamiltonianEngine, SimpleHamiltonianEngine
from qoscillator.errors import DimensionError, NotReadyError, SizeMismatchError
from qoscillator.linalg import interleave


def _flat_row_major(a: torch.Tensor) -> list:
    return interleave(a.contiguous().reshape(-1))


# ----------------------------------------------------------------------
# EigenCalculator
# ----------------------------------------------------------------------


def test_default_dimension_is_three() -> None:
    """A fresh calculator has n=3 and no matrix."""
    calc = EigenCalculator()
    assert calc.n == 3
    assert not calc.has_matrix
    assert calc.matrix is None


def test_compute_without_matrix_raises_not_ready() -> None:
    """compute() before load_matrix() raises NotReadyError."""
    with pytest.raises(NotReadyError, match="No matrix stored"):
        EigenCalculator(2).compute()


def test_load_wrong_length_keeps_previous_matrix() -> None:
    """n=3 expects 18 values; 10 raises and leaves the stored matrix intact."""
    calc = EigenCalculator(3)
    identity = _flat_row_major(torch.eye(3, dtype=torch.complex128))
    calc.load_matrix(identity)
    before = calc.matrix.buffer.clone()

    with pytest.raises(SizeMismatchError):
        calc.load_matrix([0.0] * 10)

    assert calc.has_matrix
    assert torch.equal(calc.matrix.buffer, before)


def test_load_wrong_length_without_previous_matrix() -> None:
    """A failed first load leaves the calculator not ready."""
    calc = EigenCalculator(3)
    with pytest.raises(SizeMismatchError):
        calc.load_matrix([1.0] * 17)
    assert not calc.has_matrix


def test_compute_outputs_flat_lists(random_hermitian) -> None:
    """Eigenvalues are n floats; eigenvectors are 2n² column-major floats."""
    n = 4
    a = random_hermitian(n)
    calc = EigenCalculator(n)
    calc.load_matrix(_flat_row_major(a))
    values, vectors = calc.compute()

    assert len(values) == n
    assert all(isinstance(v, float) for v in values)
    assert values == sorted(values)
    assert len(vectors) == 2 * n * n

    # Rebuild V from the column-major flat list: pair index j*n + i is V[i, j].
    pairs = torch.tensor(vectors, dtype=torch.float64).reshape(n * n, 2)
    v = torch.view_as_complex(pairs.contiguous()).reshape(n, n).T
    w = torch.tensor(values, dtype=torch.float64).to(torch.complex128)
    assert torch.allclose((v * w.unsqueeze(0)) @ v.conj().T, a, atol=1e-10)


def test_compute_identity() -> None:
    """Identity input: eigenvalues all 1.0."""
    calc = EigenCalculator(3)
    calc.load_matrix(_flat_row_major(torch.eye(3, dtype=torch.complex128)))
    values, _ = calc.compute()
    assert values == pytest.approx([1.0, 1.0, 1.0])


def test_row_major_input_is_honoured() -> None:
    """The input list is read row by row; only the upper triangle counts."""
    # Upper entry (0, 1) = i; lower entry deliberately inconsistent.
    values = [2.0, 0.0, 0.0, 1.0, 5.0, 5.0, 2.0, 0.0]
    calc = EigenCalculator(2)
    calc.load_matrix(values)
    assert calc.matrix[0, 1] == 1j
    eigs, _ = calc.compute()
    assert eigs == pytest.approx([1.0, 3.0])


def test_compute_is_repeatable(random_hermitian) -> None:
    """The stored matrix persists across compute() calls."""
    calc = EigenCalculator(3)
    calc.load_matrix(_flat_row_major(random_hermitian(3)))
    first = calc.compute()
    second = calc.compute()
    assert first == second


def test_set_dimension_invalidates_matrix() -> None:
    """Changing n drops the stored matrix; the same n keeps it."""
    calc = EigenCalculator(2)
    calc.load_matrix([1.0, 0.0] + [0.0] * 4 + [1.0, 0.0])

    calc.set_dimension(2)
    assert calc.has_matrix

    calc.set_dimension(3)
    assert calc.n == 3
    assert not calc.has_matrix
    with pytest.raises(NotReadyError):
        calc.compute()


@pytest.mark.parametrize("n", [0, -4])
def test_set_dimension_rejects_non_positive(n) -> None:
    """Non-positive dimensions raise DimensionError and leave state alone."""
    calc = EigenCalculator(2)
    calc.load_matrix([1.0, 0.0] + [0.0] * 4 + [1.0, 0.0])
    with pytest.raises(DimensionError):
        calc.set_dimension(n)
    assert calc.n == 2
    assert calc.has_matrix


def test_constructor_rejects_bad_dimension() -> None:
    """Construction validates n like set_dimension does."""
    with pytest.raises(DimensionError):
        EigenCalculator(0)
    with pytest.raises(TypeError):
        EigenCalculator(2.5)  # type: ignore[arg-type]


def test_clear() -> None:
    """clear() discards the matrix."""
    calc = EigenCalculator(1)
    calc.load_matrix([4.0, 0.0])
    calc.clear()
    assert not calc.has_matrix


def test_solver_is_substitutable(random_hermitian) -> None:
    """Any HermitianEigensolver can back the calculator."""
    a = random_hermitian(5)
    flat = _flat_row_major(a)
    ours = EigenCalculator(5)
    ref = EigenCalculator(5, solver=TorchEigensolver())
    ours.load_matrix(flat)
    ref.load_matrix(flat)
    assert ours.compute()[0] == pytest.approx(ref.compute()[0], abs=1e-10)


def test_config_reaches_default_solver() -> None:
    """A config without a solver builds a configured HouseholderEigensolver."""
    calc = EigenCalculator(2, config=EigensolverConfig(check_hermitian=True))
    assert isinstance(calc.solver, HouseholderEigensolver)
    calc.load_matrix([1.0, 0.0, 2.0, 0.0, 0.0, 0.0, 1.0, 0.0])
    with pytest.raises(ValueError, match="not Hermitian"):
        calc.compute()


# ----------------------------------------------------------------------
# Hamiltonian engines
# ----------------------------------------------------------------------


def test_hamiltonian_engine_defaults() -> None:
    """Defaults are n=8, a=1.0 and the output has 2n² entries."""
    engine = HamiltonianEngine()
    assert engine.n == 8
    assert engine.a == 1.0
    assert len(engine.compute()) == 128


def test_hamiltonian_engine_n2_output() -> None:
    """n=2, a=1 emits the row-major interleaved fixture."""
    flat = HamiltonianEngine(2, 1.0).compute()
    assert flat == pytest.approx([0.375, 0.0, -0.25, 0.0, -0.25, 0.0, 0.375, 0.0])


def test_hamiltonian_engine_setters() -> None:
    """set_dimension / set_potential change subsequent output."""
    engine = HamiltonianEngine(2, 1.0)
    engine.set_potential(2.0)
    assert engine.compute()[0] == pytest.approx(0.75)
    engine.set_dimension(3)
    assert len(engine.compute()) == 18
    with pytest.raises(DimensionError):
        engine.set_dimension(0)
    with pytest.raises(ValueError):
        engine.set_potential(float("inf"))
    assert engine.n == 3
    assert engine.a == 2.0


def test_simple_engine_emits_real_parts() -> None:
    """The simplified engine emits n² real parts, row-major."""
    flat = SimpleHamiltonianEngine(2, 2.0).compute()
    assert flat == pytest.approx([0.75, -0.25, -0.25, 0.25])
    assert len(SimpleHamiltonianEngine().compute()) == 64


def test_hamiltonian_feeds_eigen_calculator() -> None:
    """Engine output can be loaded straight into an EigenCalculator."""
    n = 6
    flat = HamiltonianEngine(n, 1.0).compute()
    calc = EigenCalculator(n)
    calc.load_matrix(flat)
    values, vectors = calc.compute()
    assert len(values) == n
    assert len(vectors) == 2 * n * n
    assert all(v >= -1e-9 for v in values)
