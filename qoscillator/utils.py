"""Numerical helpers shared by the Hamiltonian builders."""

from __future__ import annotations

import math

import torch


def round_half_away(values: torch.Tensor, decimals: int = 0) -> torch.Tensor:
    """
    Round a real tensor to `decimals` digits, resolving ties away from zero.

    The value is scaled by 10**decimals, rounded to the nearest integer and
    scaled back, matching C's ``round(x * 1e5) / 1e5`` idiom. Ties are
    decided on the scaled value: 2.5 -> 3, -2.5 -> -3.

    Note that ``torch.round`` rounds half to even, which is not the rule used
    here.

    Parameters
    ----------
    values:
        Real floating-point tensor.
    decimals:
        Number of decimal digits to keep (>= 0).

    Returns
    -------
    torch.Tensor
        Rounded tensor with the same shape and dtype.

    Raises
    ------
    ValueError
        If decimals is negative or values is complex.
    """
    if decimals < 0:
        raise ValueError(f"decimals must be >= 0, got {decimals}")
    if values.is_complex():
        raise ValueError("round_half_away expects a real tensor; use round_complex.")

    scale = 10.0**decimals
    scaled = values * scale
    magnitude = scaled.abs()
    whole = torch.floor(magnitude)
    # frac is exact for |scaled| < 2**52, so the tie test is not perturbed
    frac = magnitude - whole
    rounded = whole + (frac >= 0.5).to(values.dtype)
    return torch.copysign(rounded, scaled) / scale


def round_complex(values: torch.Tensor, decimals: int = 0) -> torch.Tensor:
    """
    Round the real and imaginary parts of a complex tensor independently.

    Parameters
    ----------
    values:
        Complex tensor.
    decimals:
        Number of decimal digits to keep (>= 0).

    Returns
    -------
    torch.Tensor
        Complex tensor of the same dtype with both components rounded by
        :func:`round_half_away`.
    """
    if not values.is_complex():
        return round_half_away(values, decimals)
    return torch.complex(
        round_half_away(values.real, decimals),
        round_half_away(values.imag, decimals),
    )


def check_finite(value: float, name: str) -> float:
    """Return `value` as float, raising ValueError if it is NaN or infinite."""
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"{name} must be finite, got {value}")
    return value


__all__ = ["round_half_away", "round_complex", "check_finite"]
