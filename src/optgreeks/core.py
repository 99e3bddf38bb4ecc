from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

import numpy as np


class OptionType(str, Enum):
    """Closed option-type tag.  Compares equal to ``"call"`` / ``"put"``."""
    CALL = "call"
    PUT = "put"

    @classmethod
    def parse(cls, kind) -> OptionType:
        """Accept an ``OptionType`` or a case-insensitive ``"call"``/``"put"``."""
        if isinstance(kind, cls):
            return kind
        try:
            return cls(str(kind).strip().lower())
        except ValueError:
            raise ValueError(f"kind must be 'call' or 'put', got {kind!r}") from None


CALL = OptionType.CALL
PUT = OptionType.PUT


# ---------------------------------------------------------------------------
# Input validation -- for callers that want fail-fast behaviour.  The pricing
# core itself never validates.
# ---------------------------------------------------------------------------
def validate_inputs(S0: float, K: float, T: float, r: float, sigma: float) -> None:
    """Raise ``ValueError`` unless the five inputs define a valid BSM problem."""
    for name, val in (("S0", S0), ("K", K), ("T", T), ("r", r), ("sigma", sigma)):
        if not math.isfinite(val):
            raise ValueError(f"{name} must be finite, got {val}")
    if S0 <= 0:
        raise ValueError(f"S0 must be positive, got {S0}")
    if K <= 0:
        raise ValueError(f"K must be positive, got {K}")
    if T <= 0:
        raise ValueError(f"T must be positive, got {T}")
    if sigma <= 0:
        raise ValueError(f"sigma must be positive, got {sigma}")


def is_finite_result(x) -> bool:
    """True when every element of a pricing result is finite."""
    return bool(np.all(np.isfinite(x)))


@dataclass(frozen=True)
class OptionSpec:
    """Single European option: contract terms plus the market it is priced in.

    Validates on construction; use the functional API in
    :mod:`optgreeks.black_scholes` to price unvalidated inputs.
    """
    S0: float
    K: float
    T: float          # years
    r: float          # continuous risk-free
    sigma: float
    kind: OptionType = CALL

    def __post_init__(self):
        validate_inputs(self.S0, self.K, self.T, self.r, self.sigma)
        object.__setattr__(self, "kind", OptionType.parse(self.kind))

    @property
    def args(self) -> tuple[float, float, float, float, float]:
        """``(S, K, T, r, v)`` in the order the pricing functions take them."""
        return self.S0, self.K, self.T, self.r, self.sigma


# ---------------------------------------------------------------------------
# Array plumbing shared by the pricing core
# ---------------------------------------------------------------------------
# IEEE-754 results (NaN / Inf) are valid outputs of the core, not warnings.
QUIET = dict(divide="ignore", invalid="ignore", over="ignore")


def as_arrays(*xs) -> tuple[np.ndarray, ...]:
    """Coerce scalars / array-likes to float arrays (broadcasting is left to NumPy)."""
    return tuple(np.asarray(x, dtype=float) for x in xs)


def unwrap(x):
    """Return a Python float for 0-d results, the array otherwise."""
    x = np.asarray(x)
    return float(x) if x.ndim == 0 else x
