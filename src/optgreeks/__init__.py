# optgreeks: Black-Scholes-Merton price & Greeks
# Public API

# Option type & contract sugar
from .core import OptionType, OptionSpec, CALL, PUT, validate_inputs, is_finite_result

# Standard-normal backends
from .normal import NormalDistribution, ScipyNormal, StdlibNormal, STANDARD_NORMAL

# Closed-form engine
from .black_scholes import (
    price, price_call, price_put,
    delta, delta_call, delta_put,
    gamma, vega,
    theta, theta_call, theta_put,
    rho, rho_call, rho_put,
    greeks, parity_residual,
    price_option, option_greeks,
)

# Strategy payoffs
from .strategy import (
    long_call_payoff, short_call_payoff, long_put_payoff, short_put_payoff,
    long_call_spread, short_call_spread, long_put_spread, short_put_spread,
    long_straddle, short_straddle, long_strangle, short_strangle,
    Leg, strategy_payoff, parse_leg,
)

# Risk
from .risk import numerical_greeks, scenario_grid, position_greeks

__all__ = [
    # Types
    "OptionType", "OptionSpec", "CALL", "PUT",
    "validate_inputs", "is_finite_result",
    # Normal backends
    "NormalDistribution", "ScipyNormal", "StdlibNormal", "STANDARD_NORMAL",
    # Engine
    "price", "price_call", "price_put",
    "delta", "delta_call", "delta_put",
    "gamma", "vega",
    "theta", "theta_call", "theta_put",
    "rho", "rho_call", "rho_put",
    "greeks", "parity_residual",
    "price_option", "option_greeks",
    # Strategy
    "long_call_payoff", "short_call_payoff", "long_put_payoff", "short_put_payoff",
    "long_call_spread", "short_call_spread", "long_put_spread", "short_put_spread",
    "long_straddle", "short_straddle", "long_strangle", "short_strangle",
    "Leg", "strategy_payoff", "parse_leg",
    # Risk
    "numerical_greeks", "scenario_grid", "position_greeks",
]

__version__ = "0.1.0"
