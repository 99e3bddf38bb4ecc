# black_scholes.py
# Closed-form Black-Scholes-Merton price and Greeks for European options.
# Every function accepts scalars *or* NumPy arrays and broadcasts; scalar
# input gives a Python float back.
#
# Desk units: vega and rho per 1 percentage-point move, theta per calendar day.
# Nothing here validates, raises on bad numbers, or logs: degenerate inputs
# propagate as NaN / Inf.

from __future__ import annotations

import functools

import numpy as np

from .config import DAYS_PER_YEAR, PCT_POINT, GREEK_KEYS
from .core import QUIET, CALL, OptionSpec, OptionType, as_arrays, unwrap
from .moneyness import standardize
from .normal import STANDARD_NORMAL, NormalDistribution

__all__ = [
    "price", "price_call", "price_put",
    "delta", "delta_call", "delta_put",
    "gamma", "vega",
    "theta", "theta_call", "theta_put",
    "rho", "rho_call", "rho_put",
    "greeks", "parity_residual",
    "price_option", "option_greeks",
]


def _formula(fn):
    """Run ``fn`` with float-error warnings off and unwrap 0-d results."""
    @functools.wraps(fn)
    def wrapper(*args, **kwargs):
        with np.errstate(**QUIET):
            return unwrap(fn(*args, **kwargs))
    return wrapper


# ---------------------------------------------------------------------------
# Option-type dispatch
# ---------------------------------------------------------------------------
def _is_call(kind):
    """Boolean (or boolean mask) -- True where kind is a call."""
    kind = np.asarray(kind, dtype=object)
    if kind.ndim == 0:
        return OptionType.parse(kind.item()) is CALL
    mask = [OptionType.parse(k) is CALL for k in kind.flat]
    return np.array(mask, dtype=bool).reshape(kind.shape)


def _by_kind(kind, call_fn, put_fn, args, dist):
    is_call = _is_call(kind)
    if np.ndim(is_call) == 0:
        return (call_fn if is_call else put_fn)(*args, dist=dist)
    return np.where(is_call, call_fn(*args, dist=dist), put_fn(*args, dist=dist))


# ---------------------------------------------------------------------------
# Price
# ---------------------------------------------------------------------------
@_formula
def price_call(S, K, T, r, v, *, dist: NormalDistribution = STANDARD_NORMAL):
    """``S N(d1) - K e^{-rT} N(d2)``"""
    S, K, T, r, v = as_arrays(S, K, T, r, v)
    d1, d2, _ = standardize(S, K, T, r, v)
    return S * dist.cdf(d1) - K * np.exp(-r * T) * dist.cdf(d2)


@_formula
def price_put(S, K, T, r, v, *, dist: NormalDistribution = STANDARD_NORMAL):
    """``K e^{-rT} N(-d2) - S N(-d1)``"""
    S, K, T, r, v = as_arrays(S, K, T, r, v)
    d1, d2, _ = standardize(S, K, T, r, v)
    return K * np.exp(-r * T) * dist.cdf(-d2) - S * dist.cdf(-d1)


def price(S, K, T, r, v, kind=CALL, *, dist: NormalDistribution = STANDARD_NORMAL):
    """Black-Scholes price of a European call or put.

    Parameters
    ----------
    S, K : float or array
        Spot and strike.
    T : float or array
        Time to expiry in years.
    r : float or array
        Continuously-compounded risk-free rate.
    v : float or array
        Annualised volatility.
    kind : OptionType, str, or array of them
        ``"call"`` or ``"put"``.
    dist : NormalDistribution
        Standard-normal backend (default ``scipy.stats.norm``).

    Returns
    -------
    float or np.ndarray
        Price in currency units; NaN / Inf for degenerate inputs.
    """
    return unwrap(_by_kind(kind, price_call, price_put, (S, K, T, r, v), dist))


# ---------------------------------------------------------------------------
# Delta
# ---------------------------------------------------------------------------
@_formula
def delta_call(S, K, T, r, v, *, dist: NormalDistribution = STANDARD_NORMAL):
    d1, _, _ = standardize(S, K, T, r, v)
    return dist.cdf(d1)


@_formula
def delta_put(S, K, T, r, v, *, dist: NormalDistribution = STANDARD_NORMAL):
    d1, _, _ = standardize(S, K, T, r, v)
    return dist.cdf(d1) - 1.0


def delta(S, K, T, r, v, kind=CALL, *, dist: NormalDistribution = STANDARD_NORMAL):
    """dPrice/dS -- in (0, 1) for calls, (-1, 0) for puts."""
    return unwrap(_by_kind(kind, delta_call, delta_put, (S, K, T, r, v), dist))


# ---------------------------------------------------------------------------
# Gamma & vega (identical for calls and puts)
# ---------------------------------------------------------------------------
@_formula
def gamma(S, K, T, r, v, *, dist: NormalDistribution = STANDARD_NORMAL):
    """d2Price/dS2 = ``n(d1) / (S v sqrt(T))``."""
    S, K, T, r, v = as_arrays(S, K, T, r, v)
    d1, _, sqrt_T = standardize(S, K, T, r, v)
    return dist.pdf(d1) / (S * v * sqrt_T)


@_formula
def vega(S, K, T, r, v, *, dist: NormalDistribution = STANDARD_NORMAL):
    """Price change for a 1 percentage-point move in volatility."""
    S, K, T, r, v = as_arrays(S, K, T, r, v)
    d1, _, sqrt_T = standardize(S, K, T, r, v)
    return S * dist.pdf(d1) * sqrt_T / PCT_POINT


# ---------------------------------------------------------------------------
# Theta (per calendar day)
# ---------------------------------------------------------------------------
def _theta_decay(S, v, sqrt_T, d1, dist):
    return -S * dist.pdf(d1) * v / (2.0 * sqrt_T)


@_formula
def theta_call(S, K, T, r, v, *, dist: NormalDistribution = STANDARD_NORMAL):
    S, K, T, r, v = as_arrays(S, K, T, r, v)
    d1, d2, sqrt_T = standardize(S, K, T, r, v)
    carry = r * K * np.exp(-r * T) * dist.cdf(d2)
    return (_theta_decay(S, v, sqrt_T, d1, dist) - carry) / DAYS_PER_YEAR


@_formula
def theta_put(S, K, T, r, v, *, dist: NormalDistribution = STANDARD_NORMAL):
    S, K, T, r, v = as_arrays(S, K, T, r, v)
    d1, d2, sqrt_T = standardize(S, K, T, r, v)
    carry = r * K * np.exp(-r * T) * dist.cdf(-d2)
    return (_theta_decay(S, v, sqrt_T, d1, dist) + carry) / DAYS_PER_YEAR


def theta(S, K, T, r, v, kind=CALL, *, dist: NormalDistribution = STANDARD_NORMAL):
    """Price change per calendar day of elapsed time (usually negative)."""
    return unwrap(_by_kind(kind, theta_call, theta_put, (S, K, T, r, v), dist))


# ---------------------------------------------------------------------------
# Rho (per 1 percentage-point rate move)
# ---------------------------------------------------------------------------
@_formula
def rho_call(S, K, T, r, v, *, dist: NormalDistribution = STANDARD_NORMAL):
    S, K, T, r, v = as_arrays(S, K, T, r, v)
    _, d2, _ = standardize(S, K, T, r, v)
    return K * T * np.exp(-r * T) * dist.cdf(d2) / PCT_POINT


@_formula
def rho_put(S, K, T, r, v, *, dist: NormalDistribution = STANDARD_NORMAL):
    S, K, T, r, v = as_arrays(S, K, T, r, v)
    _, d2, _ = standardize(S, K, T, r, v)
    return -K * T * np.exp(-r * T) * dist.cdf(-d2) / PCT_POINT


def rho(S, K, T, r, v, kind=CALL, *, dist: NormalDistribution = STANDARD_NORMAL):
    return unwrap(_by_kind(kind, rho_call, rho_put, (S, K, T, r, v), dist))


# ---------------------------------------------------------------------------
# Bundles
# ---------------------------------------------------------------------------
def greeks(S, K, T, r, v, kind=CALL, *,
           dist: NormalDistribution = STANDARD_NORMAL) -> dict:
    """All five Greeks in desk units.

    Returns dict with keys: delta, gamma, vega, theta, rho.
    Vega / rho are per 1 percentage point, theta per calendar day.
    """
    args = (S, K, T, r, v)
    out = {
        "delta": delta(*args, kind, dist=dist),
        "gamma": gamma(*args, dist=dist),
        "vega": vega(*args, dist=dist),
        "theta": theta(*args, kind, dist=dist),
        "rho": rho(*args, kind, dist=dist),
    }
    if np.ndim(kind) > 0:
        # gamma / vega do not depend on kind; give them the full broadcast shape
        shape = np.shape(out["delta"])
        out["gamma"] = np.broadcast_to(out["gamma"], shape).copy()
        out["vega"] = np.broadcast_to(out["vega"], shape).copy()
    return {key: out[key] for key in GREEK_KEYS}


@_formula
def parity_residual(S, K, T, r, v, *, dist: NormalDistribution = STANDARD_NORMAL):
    """``(C - P) - (S - K e^{-rT})`` -- zero up to rounding for valid inputs."""
    S, K, T, r, v = as_arrays(S, K, T, r, v)
    forward_gap = S - K * np.exp(-r * T)
    return (price_call(S, K, T, r, v, dist=dist)
            - price_put(S, K, T, r, v, dist=dist)
            - forward_gap)


def price_option(opt: OptionSpec, *, dist: NormalDistribution = STANDARD_NORMAL) -> float:
    """Price a validated :class:`OptionSpec`."""
    return price(*opt.args, opt.kind, dist=dist)


def option_greeks(opt: OptionSpec, *, dist: NormalDistribution = STANDARD_NORMAL) -> dict:
    return greeks(*opt.args, opt.kind, dist=dist)
