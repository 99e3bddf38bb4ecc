"""Standard normal distribution backends.

The pricing formulas only ever need two operations, the CDF and the PDF of
N(0, 1).  Anything implementing :class:`NormalDistribution` can be passed as
``dist=`` to the engine functions.  Both operations are total: they accept
any float (or array of floats), saturate for large ``|x|`` and map NaN to
NaN.
"""

from __future__ import annotations

from statistics import NormalDist
from typing import Protocol

import numpy as np
from scipy.stats import norm

__all__ = ["NormalDistribution", "ScipyNormal", "StdlibNormal", "STANDARD_NORMAL"]


class NormalDistribution(Protocol):
    def cdf(self, x): ...

    def pdf(self, x): ...


class ScipyNormal:
    """``scipy.stats.norm`` -- vectorised, the default backend."""

    def cdf(self, x):
        return norm.cdf(x)

    def pdf(self, x):
        return norm.pdf(x)

    def __repr__(self) -> str:
        return "ScipyNormal()"


class StdlibNormal:
    """``statistics.NormalDist`` broadcast over arrays with ``np.vectorize``.

    Slower than :class:`ScipyNormal`; useful as an independent cross-check.
    """

    def __init__(self):
        nd = NormalDist()
        self._cdf = np.vectorize(nd.cdf, otypes=[float])
        self._pdf = np.vectorize(nd.pdf, otypes=[float])

    def cdf(self, x):
        return self._cdf(x)

    def pdf(self, x):
        return self._pdf(x)

    def __repr__(self) -> str:
        return "StdlibNormal()"


STANDARD_NORMAL = ScipyNormal()
