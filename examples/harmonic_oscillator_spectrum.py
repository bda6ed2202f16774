"""Harmonic-oscillator spectrum in a finite Fourier basis.

Builds the Hamiltonian H = (P^2 + Q^2) / 2 for a small dimension, hands it
to an EigenCalculator through the same flat-list interface a message host
would use, and prints the spectrum next to the continuum levels k + 1/2.
"""

from __future__ import annotations

from qoscillator import EigenCalculator, HamiltonianEngine, TorchEigensolver


def main() -> None:
    n = 8
    a = 1.0

    engine = HamiltonianEngine(n=n, a=a)
    flat = engine.compute()

    calc = EigenCalculator(n)
    calc.load_matrix(flat)
    values, vectors = calc.compute()

    print(f"Hamiltonian dimension: {n}, potential parameter: {a}")
    print(f"{'k':>3} {'eigenvalue':>14} {'k + 1/2':>10}")
    for k, value in enumerate(values):
        print(f"{k:>3} {value:>14.6f} {k + 0.5:>10.1f}")

    # Cross-check against the LAPACK-backed solver
    reference = EigenCalculator(n, solver=TorchEigensolver())
    reference.load_matrix(flat)
    ref_values, _ = reference.compute()
    max_diff = max(abs(x - y) for x, y in zip(values, ref_values))
    print(f"Max deviation from torch.linalg.eigh: {max_diff:.2e}")
    print(f"Ground-state energy: {values[0]:.6f}")


if __name__ == "__main__":
    main()
