"""Discrete Fourier bases."""

from .basis import FourierBasis, fourier_matrix, inverse_fourier_matrix

__all__ = ["FourierBasis", "fourier_matrix", "inverse_fourier_matrix"]
