"""Pytest configuration and shared fixtures for qoscillator tests.

This module provides:
- Deterministic RNG fixtures for numpy and torch
- A factory for random Hermitian test matrices
"""

import os
from typing import Callable

import numpy as np
import pytest
import torch


def _seed() -> int:
    return int(os.environ.get("TEST_RNG_SEED", "0"))


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    """
    return np.random.default_rng(_seed())


@pytest.fixture(scope="function")
def torch_rng() -> torch.Generator:
    """Provide a deterministic CPU torch RNG for tests."""
    generator = torch.Generator(device="cpu")
    generator.manual_seed(_seed())
    return generator


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Auto-use fixture to set global random seeds for reproducibility."""
    np.random.seed(_seed())
    torch.manual_seed(_seed())


@pytest.fixture(scope="function")
def random_hermitian(torch_rng: torch.Generator) -> Callable[[int], torch.Tensor]:
    """Return a factory producing random complex128 Hermitian matrices."""

    def make(n: int) -> torch.Tensor:
        real = torch.randn(n, n, dtype=torch.float64, generator=torch_rng)
        imag = torch.randn(n, n, dtype=torch.float64, generator=torch_rng)
        a = torch.complex(real, imag)
        return (a + a.conj().T) / 2.0

    return make
