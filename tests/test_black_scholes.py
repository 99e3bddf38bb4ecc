"""Tests for the closed-form Black-Scholes engine."""

import math
import warnings

import numpy as np
import pytest
from optgreeks.core import OptionSpec, CALL, PUT
from optgreeks.black_scholes import (
    price, price_call, price_put,
    delta, delta_call, delta_put,
    gamma, vega, theta, theta_call, theta_put, rho, rho_call, rho_put,
    greeks, parity_residual, price_option, option_greeks,
)
from optgreeks.normal import StdlibNormal

VALID_INPUTS = [
    (100.0, 100.0, 1.0, 0.05, 0.2),
    (105.0, 100.0, 1.0 / 12.0, 0.05, 0.30),
    (80.0, 120.0, 0.25, 0.01, 0.45),
    (300.0, 100.0, 2.0, 0.10, 0.15),
    (50.0, 55.0, 5.0, -0.01, 0.60),
    (100.0, 100.0, 0.01, 0.0, 0.05),
]


def test_bs_known_values():
    assert abs(price(100, 100, 1.0, 0.05, 0.2, CALL) - 10.4506) < 1e-3
    assert abs(price(100, 100, 1.0, 0.05, 0.2, PUT) - 5.5735) < 1e-3


# ---------------------------------------------------------------------------
# Concrete scenarios
# ---------------------------------------------------------------------------
class TestOneMonthScenario:
    ARGS = (105.0, 100.0, 1.0 / 12.0, 0.05, 0.30)

    def test_call_price(self):
        assert abs(price_call(*self.ARGS) - 6.881) < 0.01

    def test_put_price(self):
        assert abs(price_put(*self.ARGS) - 1.465) < 0.01

    def test_delta_call(self):
        assert abs(delta_call(*self.ARGS) - 0.7437) < 1e-3

    def test_vega_per_vol_point(self):
        assert abs(vega(*self.ARGS) - 0.0976) < 1e-3

    def test_theta_call_is_time_decay(self):
        th = theta_call(*self.ARGS)
        assert th < 0
        assert abs(th - (-0.0579)) < 1e-3


class TestAtTheMoneyZeroRate:
    ARGS = (100.0, 100.0, 1.0, 0.0, 0.20)

    def test_call_equals_put(self):
        assert abs(price_call(*self.ARGS) - price_put(*self.ARGS)) < 1e-10

    def test_price_level(self):
        assert abs(price_call(*self.ARGS) - 7.97) < 0.01
        assert abs(price_put(*self.ARGS) - 7.97) < 0.01


# ---------------------------------------------------------------------------
# Structural identities
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("args", VALID_INPUTS)
def test_put_call_parity(args):
    S, K, T, r, v = args
    lhs = price_call(*args) - price_put(*args)
    rhs = S - K * math.exp(-r * T)
    assert abs(lhs - rhs) <= 1e-9 * max(S, K)
    assert abs(parity_residual(*args)) <= 1e-9 * max(S, K)


@pytest.mark.parametrize("args", VALID_INPUTS)
def test_delta_put_is_delta_call_minus_one(args):
    assert abs(delta_put(*args) - (delta_call(*args) - 1.0)) < 1e-15


@pytest.mark.parametrize("args", VALID_INPUTS)
def test_gamma_same_for_call_and_put(args):
    g_call = greeks(*args, CALL)["gamma"]
    g_put = greeks(*args, PUT)["gamma"]
    assert g_call == g_put == gamma(*args)


@pytest.mark.parametrize("args", VALID_INPUTS)
def test_kind_dispatch_matches_branch_functions(args):
    assert price(*args, CALL) == price_call(*args)
    assert price(*args, PUT) == price_put(*args)
    assert delta(*args, "put") == delta_put(*args)
    assert theta(*args, "call") == theta_call(*args)
    assert theta(*args, "put") == theta_put(*args)
    assert rho(*args, CALL) == rho_call(*args)
    assert rho(*args, PUT) == rho_put(*args)


def test_sign_conventions():
    args = (100.0, 100.0, 1.0, 0.05, 0.2)
    assert 0.0 < delta_call(*args) < 1.0
    assert -1.0 < delta_put(*args) < 0.0
    assert gamma(*args) > 0
    assert vega(*args) > 0
    assert rho_call(*args) > 0
    assert rho_put(*args) < 0
    assert theta_call(*args) < 0


def test_greeks_keys():
    g = greeks(100, 100, 1.0, 0.05, 0.2, PUT)
    assert list(g) == ["delta", "gamma", "vega", "theta", "rho"]


# ---------------------------------------------------------------------------
# Limits
# ---------------------------------------------------------------------------
class TestMoneynessLimits:
    def test_deep_in_the_money_call(self):
        args = (1e4, 100.0, 1.0, 0.05, 0.2)
        assert delta_call(*args) > 1.0 - 1e-6
        assert abs(delta_put(*args)) < 1e-6

    def test_deep_out_of_the_money_call(self):
        args = (1.0, 100.0, 1.0, 0.05, 0.2)
        assert delta_call(*args) < 1e-6
        assert delta_put(*args) < -1.0 + 1e-6


class TestNearExpiry:
    T = 1e-8

    def test_call_converges_to_intrinsic(self):
        assert abs(price_call(105.0, 100.0, self.T, 0.05, 0.2) - 5.0) < 1e-6
        assert abs(price_call(95.0, 100.0, self.T, 0.05, 0.2)) < 1e-6

    def test_put_converges_to_intrinsic(self):
        assert abs(price_put(95.0, 100.0, self.T, 0.05, 0.2) - 5.0) < 1e-6
        assert abs(price_put(105.0, 100.0, self.T, 0.05, 0.2)) < 1e-6

    def test_atm_gamma_blows_up(self):
        g_short = gamma(100.0, 100.0, self.T, 0.05, 0.2)
        g_long = gamma(100.0, 100.0, 1.0, 0.05, 0.2)
        assert g_short > 1000 * g_long


# ---------------------------------------------------------------------------
# Degenerate inputs propagate as NaN / Inf, never as exceptions
# ---------------------------------------------------------------------------
class TestDegenerateInputs:
    def test_zero_expiry_at_the_money_is_nan(self):
        assert math.isnan(price_call(100.0, 100.0, 0.0, 0.05, 0.2))

    def test_zero_expiry_away_from_strike_is_intrinsic(self):
        assert price_call(105.0, 100.0, 0.0, 0.05, 0.2) == 5.0
        assert math.isnan(gamma(105.0, 100.0, 0.0, 0.05, 0.2))

    def test_zero_vol(self):
        assert vega(105.0, 100.0, 1.0, 0.05, 0.0) == 0.0
        expected = 105.0 - 100.0 * math.exp(-0.05)
        assert abs(price_call(105.0, 100.0, 1.0, 0.05, 0.0) - expected) < 1e-12

    def test_negative_spot_is_nan(self):
        g = greeks(-1.0, 100.0, 1.0, 0.05, 0.2)
        assert math.isnan(price_call(-1.0, 100.0, 1.0, 0.05, 0.2))
        assert all(math.isnan(v) for v in g.values())

    def test_no_floating_point_warnings(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            price_put(100.0, 0.0, 0.0, 0.05, 0.0)
            greeks(0.0, 100.0, -1.0, 0.05, 0.2, PUT)

    def test_unknown_kind_raises(self):
        with pytest.raises(ValueError):
            price(100, 100, 1.0, 0.05, 0.2, "straddle")


# ---------------------------------------------------------------------------
# Backends, return types and OptionSpec sugar
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("args", VALID_INPUTS)
def test_stdlib_backend_agrees(args):
    dist = StdlibNormal()
    for kind in (CALL, PUT):
        assert abs(price(*args, kind, dist=dist) - price(*args, kind)) < 1e-10
        ref = greeks(*args, kind)
        got = greeks(*args, kind, dist=dist)
        for key in ref:
            assert abs(got[key] - ref[key]) < 1e-10, key


def test_scalar_inputs_give_float():
    assert isinstance(price(100, 100, 1.0, 0.05, 0.2), float)
    assert all(isinstance(v, float) for v in greeks(100, 100, 1.0, 0.05, 0.2).values())


def test_option_spec_helpers():
    opt = OptionSpec(S0=100, K=95, T=0.5, r=0.03, sigma=0.25, kind="put")
    assert price_option(opt) == price_put(100, 95, 0.5, 0.03, 0.25)
    assert option_greeks(opt) == greeks(100, 95, 0.5, 0.03, 0.25, PUT)
