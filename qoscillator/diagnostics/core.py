"""Numerical checks for matrices and eigen-decompositions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Union

import torch

from ..linalg.matrix import ComplexMatrix

if TYPE_CHECKING:
    from ..eigen.base import EigenResult

MatrixLike = Union[ComplexMatrix, torch.Tensor]


def _as_tensor(mat: MatrixLike) -> torch.Tensor:
    if isinstance(mat, ComplexMatrix):
        return mat.to_tensor()
    return mat


def is_hermitian(mat: MatrixLike, atol: float = 1e-6) -> bool:
    """
    Check whether a matrix is Hermitian within `atol`.

    Parameters
    ----------
    mat:
        ComplexMatrix or tensor of shape (..., n, n).
    atol:
        Absolute tolerance on ``|A - A^H|``.

    Returns
    -------
    bool
        True if Hermitian within the tolerance. Non-square or non-finite
        input gives False.
    """
    t = _as_tensor(mat)
    if t.dim() < 2 or t.shape[-1] != t.shape[-2]:
        return False

    diff = t - t.conj().transpose(-2, -1)
    if diff.numel() == 0:
        return True
    max_dev = diff.abs().max()
    if not torch.isfinite(max_dev):
        return False

    return bool(max_dev <= atol)


def assert_hermitian(mat: MatrixLike, atol: float = 1e-6) -> None:
    """
    Raise ValueError unless the matrix is Hermitian within `atol`.
    """
    if not is_hermitian(mat, atol=atol):
        raise ValueError(f"Matrix is not Hermitian within tolerance {atol}.")


def is_unitary(mat: MatrixLike, atol: float = 1e-9) -> bool:
    """Check ``U @ U^H ≈ I`` within `atol`."""
    u = _as_tensor(mat)
    if u.dim() != 2 or u.shape[0] != u.shape[1]:
        return False
    eye = torch.eye(u.shape[0], dtype=u.dtype, device=u.device)
    return bool(torch.allclose(u @ u.conj().T, eye, atol=atol, rtol=0.0))


def assert_orthonormal_columns(vectors: MatrixLike, atol: float = 1e-8) -> None:
    """
    Raise ValueError unless the columns of `vectors` are orthonormal.

    Checks ``V^H V ≈ I`` entry-wise.
    """
    v = _as_tensor(vectors)
    gram = v.conj().T @ v
    eye = torch.eye(gram.shape[0], dtype=gram.dtype, device=gram.device)
    max_dev = (gram - eye).abs().max().item()
    if not max_dev <= atol:
        raise ValueError(
            f"Columns are not orthonormal within tolerance {atol} "
            f"(max deviation {max_dev:.3e})."
        )


def reconstruction_error(mat: MatrixLike, result: "EigenResult") -> float:
    """
    Return ``max |V diag(w) V^H - A|`` for an eigen-decomposition of `mat`.
    """
    a = _as_tensor(mat).to(result.eigenvectors.dtype)
    v = result.eigenvectors
    w = result.eigenvalues.to(v.dtype)
    rebuilt = (v * w.unsqueeze(0)) @ v.conj().T
    return float((rebuilt - a).abs().max().item())


__all__ = [
    "is_hermitian",
    "assert_hermitian",
    "is_unitary",
    "assert_orthonormal_columns",
    "reconstruction_error",
]
