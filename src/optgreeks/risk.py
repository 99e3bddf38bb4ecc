"""Bump-and-reprice risk utilities.

Numerical Greeks via finite differences (central, forward for theta) on **any**
pricer callable (used to cross-check the closed forms), spot × vol
scenario grids, and position-level aggregation of the analytic Greeks.
"""

from __future__ import annotations

import numpy as np
from typing import Callable, Iterable

from .black_scholes import option_greeks, price_option
from .config import DAYS_PER_YEAR, PCT_POINT, GREEK_KEYS
from .core import OptionSpec

__all__ = [
    "numerical_greeks",
    "scenario_grid",
    "position_greeks",
]


# ---------------------------------------------------------------------------
# Numerical Greeks
# ---------------------------------------------------------------------------

def numerical_greeks(
    pricer_func: Callable[..., float],
    S: float,
    K: float,
    T: float,
    r: float,
    v: float,
    kind: str,
    *,
    bump_pct: float = 0.01,
) -> dict[str, float]:
    """Compute Greeks by bump-and-reprice on an arbitrary pricer.

    Delta, gamma, vega and rho use central differences.  Theta is a one-day
    forward difference, ``P(T - 1/365) - P(T)``, and is 0.0 when ``T`` is
    inside the last day.

    Parameters
    ----------
    pricer_func : callable
        ``pricer_func(S, K, T, r, v, kind) -> float``.
    S, K, T, r, v : float
        Market and instrument parameters.
    kind : str
        ``"call"`` or ``"put"``.
    bump_pct : float
        Relative bump size for spot and vol; absolute for rate (default 0.01).

    Returns
    -------
    dict[str, float]
        Keys: ``delta``, ``gamma``, ``vega``, ``theta``, ``rho``, in the
        same desk units as :func:`optgreeks.black_scholes.greeks`.
    """
    P0 = pricer_func(S, K, T, r, v, kind)

    # --- Delta & Gamma (spot bump) ---
    eps_S = bump_pct * S
    P_up = pricer_func(S + eps_S, K, T, r, v, kind)
    P_dn = pricer_func(S - eps_S, K, T, r, v, kind)
    delta = (P_up - P_dn) / (2.0 * eps_S)
    gamma = (P_up - 2.0 * P0 + P_dn) / (eps_S ** 2)

    # --- Vega (vol bump), per 1 pt ---
    eps_v = max(bump_pct * v, 1e-4)
    P_vup = pricer_func(S, K, T, r, v + eps_v, kind)
    P_vdn = pricer_func(S, K, T, r, max(v - eps_v, 1e-6), kind)
    vega = (P_vup - P_vdn) / (2.0 * eps_v) / PCT_POINT

    # --- Theta (one calendar day of decay) ---
    dt = 1.0 / DAYS_PER_YEAR
    if T > dt:
        theta_val = pricer_func(S, K, T - dt, r, v, kind) - P0
    else:
        theta_val = 0.0

    # --- Rho (rate bump), per 1 pt ---
    eps_r = bump_pct
    P_rup = pricer_func(S, K, T, r + eps_r, v, kind)
    P_rdn = pricer_func(S, K, T, r - eps_r, v, kind)
    rho = (P_rup - P_rdn) / (2.0 * eps_r) / PCT_POINT

    return {
        "delta": float(delta),
        "gamma": float(gamma),
        "vega": float(vega),
        "theta": float(theta_val),
        "rho": float(rho),
    }


# ---------------------------------------------------------------------------
# Scenario grid
# ---------------------------------------------------------------------------

def scenario_grid(
    pricer_func: Callable[..., float],
    S: float,
    K: float,
    T: float,
    r: float,
    v: float,
    kind: str,
    spot_range: np.ndarray,
    vol_range: np.ndarray,
) -> dict:
    """Evaluate a pricer across a 2-D (spot × vol) scenario grid.

    Returns
    -------
    dict
        ``"spot_values"``, ``"vol_values"``, ``"prices"`` (shape n_spot×n_vol)
        and ``"pnl"`` (prices minus the base price at ``S``, ``v``).
    """
    spot_range = np.asarray(spot_range, dtype=float)
    vol_range = np.asarray(vol_range, dtype=float)
    prices = np.empty((len(spot_range), len(vol_range)))

    for i, s in enumerate(spot_range):
        for j, sig in enumerate(vol_range):
            prices[i, j] = pricer_func(float(s), K, T, r, float(sig), kind)

    base = pricer_func(S, K, T, r, v, kind)
    return {
        "spot_values": spot_range.copy(),
        "vol_values": vol_range.copy(),
        "prices": prices,
        "pnl": prices - base,
    }


# ---------------------------------------------------------------------------
# Position aggregation
# ---------------------------------------------------------------------------

def position_greeks(positions: Iterable[tuple[OptionSpec, float]]) -> dict:
    """Aggregate analytic value and Greeks over signed positions.

    Parameters
    ----------
    positions : iterable of (OptionSpec, float)
        Option and signed quantity (+ long, − short).

    Returns
    -------
    dict
        ``"value"`` plus one total per Greek key.
    """
    totals = {"value": 0.0, **{k: 0.0 for k in GREEK_KEYS}}
    for opt, qty in positions:
        totals["value"] += qty * price_option(opt)
        for key, val in option_greeks(opt).items():
            totals[key] += qty * val
    return totals
