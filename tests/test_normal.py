"""Tests for the standard-normal backends."""

import math

import numpy as np
import pytest
from optgreeks.normal import ScipyNormal, StdlibNormal, STANDARD_NORMAL

BACKENDS = [ScipyNormal(), StdlibNormal()]


@pytest.mark.parametrize("dist", BACKENDS, ids=repr)
class TestBackend:
    def test_reference_values(self, dist):
        assert abs(float(dist.cdf(0.0)) - 0.5) < 1e-15
        assert abs(float(dist.cdf(1.96)) - 0.9750021) < 1e-7
        assert abs(float(dist.pdf(0.0)) - 1.0 / math.sqrt(2 * math.pi)) < 1e-15

    def test_saturates(self, dist):
        assert float(dist.cdf(40.0)) == 1.0
        assert float(dist.cdf(-40.0)) == 0.0
        assert float(dist.pdf(40.0)) == 0.0
        assert float(dist.cdf(math.inf)) == 1.0
        assert float(dist.pdf(-math.inf)) == 0.0

    def test_nan_in_nan_out(self, dist):
        assert math.isnan(float(dist.cdf(math.nan)))
        assert math.isnan(float(dist.pdf(math.nan)))

    def test_arrays(self, dist):
        x = np.array([-1.0, 0.0, 1.0])
        c = dist.cdf(x)
        assert c.shape == (3,)
        assert abs(c[0] + c[2] - 1.0) < 1e-15


def test_default_backend_is_scipy():
    assert isinstance(STANDARD_NORMAL, ScipyNormal)
