"""Expiry payoffs for single option legs and common multi-leg strategies.

All payoffs are net of premium and evaluated on the terminal spot ``S``,
which may be a scalar or an array (e.g. a grid for payoff diagrams).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import numpy as np

from .core import CALL, OptionType, unwrap

__all__ = [
    "long_call_payoff", "short_call_payoff",
    "long_put_payoff", "short_put_payoff",
    "long_call_spread", "short_call_spread",
    "long_put_spread", "short_put_spread",
    "long_straddle", "short_straddle",
    "long_strangle", "short_strangle",
    "Leg", "strategy_payoff", "parse_leg",
]


# ---------------------------------------------------------------------------
# Single legs
# ---------------------------------------------------------------------------
def long_call_payoff(S, K: float, premium: float):
    return unwrap(np.maximum(np.asarray(S, dtype=float) - K, 0.0) - premium)


def short_call_payoff(S, K: float, premium: float):
    return unwrap(premium - np.maximum(np.asarray(S, dtype=float) - K, 0.0))


def long_put_payoff(S, K: float, premium: float):
    return unwrap(np.maximum(K - np.asarray(S, dtype=float), 0.0) - premium)


def short_put_payoff(S, K: float, premium: float):
    return unwrap(premium - np.maximum(K - np.asarray(S, dtype=float), 0.0))


# ---------------------------------------------------------------------------
# Spreads, straddles, strangles
# ---------------------------------------------------------------------------
def long_call_spread(S, k1: float, c1: float, k2: float, c2: float):
    """Buy the ``k1`` call, sell the ``k2`` call."""
    return unwrap(long_call_payoff(S, k1, c1) + short_call_payoff(S, k2, c2))


def short_call_spread(S, k1: float, c1: float, k2: float, c2: float):
    """Sell the ``k1`` call, buy the ``k2`` call."""
    return unwrap(short_call_payoff(S, k1, c1) + long_call_payoff(S, k2, c2))


def long_put_spread(S, k1: float, p1: float, k2: float, p2: float):
    """Buy the ``k1`` put, sell the ``k2`` put."""
    return unwrap(long_put_payoff(S, k1, p1) + short_put_payoff(S, k2, p2))


def short_put_spread(S, k1: float, p1: float, k2: float, p2: float):
    """Sell the ``k1`` put, buy the ``k2`` put."""
    return unwrap(short_put_payoff(S, k1, p1) + long_put_payoff(S, k2, p2))


def long_straddle(S, k: float, c: float, p: float):
    return unwrap(long_call_payoff(S, k, c) + long_put_payoff(S, k, p))


def short_straddle(S, k: float, c: float, p: float):
    return unwrap(short_call_payoff(S, k, c) + short_put_payoff(S, k, p))


def long_strangle(S, kc: float, c: float, kp: float, p: float):
    """Buy the ``kc`` call and the ``kp`` put (usually both out of the money)."""
    return unwrap(long_call_payoff(S, kc, c) + long_put_payoff(S, kp, p))


def short_strangle(S, kc: float, c: float, kp: float, p: float):
    return unwrap(short_call_payoff(S, kc, c) + short_put_payoff(S, kp, p))


# ---------------------------------------------------------------------------
# Arbitrary strategies
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Leg:
    """One option leg of a strategy.

    Parameters
    ----------
    kind : OptionType or str
        ``"call"`` or ``"put"``.
    strike : float
    premium : float
        Premium per unit, paid when long and received when short.
    quantity : float
        Signed size: positive is long, negative is short.
    """
    kind: OptionType
    strike: float
    premium: float = 0.0
    quantity: float = 1.0

    def __post_init__(self):
        object.__setattr__(self, "kind", OptionType.parse(self.kind))
        if self.quantity == 0:
            raise ValueError("quantity must be non-zero")

    def payoff(self, S):
        """Net payoff at expiry for terminal spot ``S``."""
        if self.kind is CALL:
            unit = long_call_payoff(S, self.strike, self.premium)
        else:
            unit = long_put_payoff(S, self.strike, self.premium)
        return unwrap(self.quantity * np.asarray(unit))


def strategy_payoff(legs: Iterable[Leg], S):
    """Sum of leg payoffs at terminal spot ``S``."""
    total = np.zeros(np.shape(S), dtype=float)
    for leg in legs:
        total = total + leg.payoff(S)
    return unwrap(total)


_SIDES = {"long": 1.0, "short": -1.0}


def parse_leg(text: str) -> Leg:
    """Parse ``side:kind:strike:premium[:qty]``, e.g. ``long:call:100:5``."""
    parts = [p.strip() for p in text.split(":")]
    if len(parts) not in (4, 5):
        raise ValueError(
            f"leg must look like side:kind:strike:premium[:qty], got {text!r}"
        )
    side = parts[0].lower()
    if side not in _SIDES:
        raise ValueError(f"side must be 'long' or 'short', got {parts[0]!r}")
    qty = float(parts[4]) if len(parts) == 5 else 1.0
    if qty <= 0:
        raise ValueError(f"qty must be positive, got {qty}")
    return Leg(
        kind=parts[1],
        strike=float(parts[2]),
        premium=float(parts[3]),
        quantity=_SIDES[side] * qty,
    )
