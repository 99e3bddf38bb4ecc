# moneyness.py
# Standardised log-moneyness terms d1, d2 shared by every BSM formula.
# No validation: degenerate inputs (T<=0, v<=0, S<=0, K<=0) give NaN / Inf.

from __future__ import annotations
import numpy as np

from .core import QUIET, as_arrays, unwrap

__all__ = ["d1", "d2", "d1_d2", "standardize"]


def standardize(S, K, T, r, v):
    """Return ``(d1, d2, sqrt_T)`` as float arrays.

    The array-level entry point used by the pricing engine; the public
    ``d1`` / ``d2`` wrappers below return plain floats for scalar input.
    """
    S, K, T, r, v = as_arrays(S, K, T, r, v)
    with np.errstate(**QUIET):
        sqrt_T = np.sqrt(T)
        sig_sqrt_T = v * sqrt_T
        d1 = (np.log(S / K) + (r + 0.5 * v * v) * T) / sig_sqrt_T
        d2 = d1 - sig_sqrt_T
    return d1, d2, sqrt_T


def d1_d2(S, K, T, r, v):
    """Compute ``(d1, d2)`` in one pass.  All inputs broadcast."""
    d1, d2, _ = standardize(S, K, T, r, v)
    return unwrap(d1), unwrap(d2)


def d1(S, K, T, r, v):
    """``(ln(S/K) + (r + v^2/2) T) / (v sqrt(T))``"""
    return d1_d2(S, K, T, r, v)[0]


def d2(S, K, T, r, v):
    """``d1 - v sqrt(T)``"""
    return d1_d2(S, K, T, r, v)[1]
