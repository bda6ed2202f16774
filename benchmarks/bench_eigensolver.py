"""Benchmark Hamiltonian construction and Hermitian eigen-decomposition."""

import time
from typing import Dict

import torch

from qoscillator import (
    HouseholderEigensolver,
    TorchEigensolver,
    build_hamiltonian,
)
from qoscillator.eigen import HermitianEigensolver


def benchmark_build(n: int, repeats: int = 20) -> Dict[str, float]:
    """Benchmark precise Hamiltonian construction.

    Args:
        n: Matrix dimension.
        repeats: Number of timed builds.

    Returns:
        Dictionary with timing results.
    """
    # Warmup
    build_hamiltonian(n)

    start = time.perf_counter()
    for _ in range(repeats):
        build_hamiltonian(n)
    end = time.perf_counter()

    total_time = end - start
    return {
        "n": n,
        "total_time_sec": total_time,
        "time_per_build_sec": total_time / repeats,
    }


def benchmark_solver(
    solver: HermitianEigensolver,
    n: int,
    repeats: int = 10,
) -> Dict[str, float]:
    """Benchmark one eigensolver on a random Hermitian matrix.

    Args:
        solver: Eigensolver instance.
        n: Matrix dimension.
        repeats: Number of timed decompositions.

    Returns:
        Dictionary with timing results.
    """
    x = torch.randn(n, n, dtype=torch.complex128)
    mat = 0.5 * (x + x.conj().T)

    # Warmup
    solver.solve(mat)

    start = time.perf_counter()
    for _ in range(repeats):
        solver.solve(mat)
    end = time.perf_counter()

    total_time = end - start
    return {
        "n": n,
        "total_time_sec": total_time,
        "time_per_solve_sec": total_time / repeats,
        "solves_per_sec": repeats / total_time,
    }


if __name__ == "__main__":
    print("Benchmarking Hamiltonian construction...")
    for n in (8, 32, 128):
        results = benchmark_build(n)
        print(f"  n={n}: {results['time_per_build_sec']*1e3:.2f} ms per build")

    print("Benchmarking eigensolvers...")
    for n in (8, 32, 128):
        for name, solver in (
            ("householder", HouseholderEigensolver()),
            ("torch", TorchEigensolver()),
        ):
            results = benchmark_solver(solver, n)
            print(f"  {name} n={n}: {results['time_per_solve_sec']*1e3:.2f} ms per solve")
