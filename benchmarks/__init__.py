"""Performance benchmarks for qoscillator.

This package contains microbenchmarks for the hot paths in the library:
Hamiltonian construction and dense Hermitian eigen-decomposition.
"""
