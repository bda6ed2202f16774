"""Hermitian eigensolver delegating to ``torch.linalg.eigh``."""

from __future__ import annotations

import torch

from ..errors import AllocationError, ConvergenceError
from ..linalg.layout import OUT_OF_MEMORY_ERRORS
from .base import EigenResult, HermitianEigensolver


class TorchEigensolver(HermitianEigensolver):
    """
    Library-backed solver using LAPACK through ``torch.linalg.eigh``.

    Interchangeable with :class:`HouseholderEigensolver`; eigenvectors of
    repeated eigenvalues and the phase of each eigenvector may differ between
    the two.
    """

    def _solve(self, a: torch.Tensor) -> EigenResult:
        try:
            eigenvalues, eigenvectors = torch.linalg.eigh(a, UPLO="U")
        except torch.linalg.LinAlgError as exc:
            raise ConvergenceError(f"torch.linalg.eigh failed: {exc}") from exc
        except OUT_OF_MEMORY_ERRORS as exc:
            raise AllocationError(
                f"Could not decompose a {a.shape[0]}x{a.shape[0]} matrix: {exc}"
            ) from exc

        return EigenResult(
            eigenvalues=eigenvalues.real.to(torch.float64),
            eigenvectors=eigenvectors,
        )


__all__ = ["TorchEigensolver"]
