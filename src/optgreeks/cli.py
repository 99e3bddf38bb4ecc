import argparse
import json
import logging
import sys

import numpy as np

from .black_scholes import greeks as bs_greeks, parity_residual, price as bs_price
from .book import json_safe, price_book, read_book, write_results
from .config import DEFAULT_LOG_LEVEL, LOG_FORMAT, LOG_LEVELS, PRECISION
from .core import CALL, PUT, is_finite_result, validate_inputs
from .strategy import parse_leg, strategy_payoff

logger = logging.getLogger(__name__)


def _kind(s: str):
    s = s.lower()
    if s in {"call", "c"}:
        return CALL
    if s in {"put", "p"}:
        return PUT
    raise argparse.ArgumentTypeError("kind must be 'call' or 'put'")


def _leg(s: str):
    try:
        return parse_leg(s)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def _fmt(x: float) -> str:
    return f"{x:.{PRECISION}f}"


def add_common(parser: argparse.ArgumentParser):
    parser.add_argument("--S0", type=float, required=True, help="spot")
    parser.add_argument("--K", type=float, required=True, help="strike")
    parser.add_argument("--T", type=float, required=True, help="years")
    parser.add_argument("--r", type=float, required=True, help="cont. risk-free")
    parser.add_argument("--sigma", type=float, required=True, help="annualised vol")
    parser.add_argument("--no-validate", dest="validate", action="store_false",
                        help="skip input checks; degenerate inputs print nan/inf")


def _market(args):
    if args.validate:
        try:
            validate_inputs(args.S0, args.K, args.T, args.r, args.sigma)
        except ValueError as e:
            args.parser.error(str(e))
    return args.S0, args.K, args.T, args.r, args.sigma


def _warn_non_finite(values):
    if not is_finite_result(values):
        logger.warning("result is not finite; check inputs")


def cmd_price(args):
    px = bs_price(*_market(args), args.kind)
    _warn_non_finite(px)
    print(_fmt(px))


def cmd_greeks(args):
    mkt = _market(args)
    out = {"price": bs_price(*mkt, args.kind), **bs_greeks(*mkt, args.kind)}
    _warn_non_finite(list(out.values()))
    if args.json:
        print(json.dumps({k: json_safe(v) for k, v in out.items()}, indent=2, allow_nan=False))
    else:
        for key, val in out.items():
            print(f"{key:<6} {_fmt(val)}")


def cmd_parity(args):
    mkt = _market(args)
    call_px = bs_price(*mkt, CALL)
    put_px = bs_price(*mkt, PUT)
    print(f"call     {_fmt(call_px)}")
    print(f"put      {_fmt(put_px)}")
    print(f"residual {parity_residual(*mkt):.3e}")


def cmd_payoff(args):
    spots = np.asarray(args.S, dtype=float)
    payoff = np.atleast_1d(strategy_payoff(args.leg, spots))
    for s, pnl in zip(spots, payoff):
        print(f"{s:.4f} {_fmt(pnl)}")


def cmd_book(args):
    rows = read_book(args.input)
    print(f"Pricing {len(rows)} positions...")
    results = price_book(rows, compute_greeks=args.greeks)
    write_results(results, args.output)
    failed = sum(1 for r in results if r["price"] is None)
    print(f"Results written to {args.output}")
    print(f"  Priced: {len(results) - failed}  |  Failed: {failed}")
    return 1 if failed else 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="optgreeks",
                                description="Black-Scholes price & Greeks CLI")
    p.add_argument("--log-level", default=DEFAULT_LOG_LEVEL,
                   choices=LOG_LEVELS, type=str.upper)
    sub = p.add_subparsers(dest="cmd", required=True)

    p_px = sub.add_parser("price", help="Black-Scholes price")
    add_common(p_px)
    p_px.add_argument("--kind", type=_kind, default=CALL, help="call|put")
    p_px.set_defaults(func=cmd_price, parser=p_px)

    p_gk = sub.add_parser("greeks", help="price and Greeks (desk units)")
    add_common(p_gk)
    p_gk.add_argument("--kind", type=_kind, default=CALL, help="call|put")
    p_gk.add_argument("--json", action="store_true")
    p_gk.set_defaults(func=cmd_greeks, parser=p_gk)

    p_par = sub.add_parser("parity", help="call, put and put-call parity residual")
    add_common(p_par)
    p_par.set_defaults(func=cmd_parity, parser=p_par)

    p_pay = sub.add_parser("payoff", help="multi-leg payoff at expiry")
    p_pay.add_argument("--S", type=float, nargs="+", required=True,
                       help="terminal spot(s)")
    p_pay.add_argument("--leg", type=_leg, action="append", required=True,
                       help="side:kind:strike:premium[:qty], repeatable")
    p_pay.set_defaults(func=cmd_payoff, parser=p_pay)

    p_book = sub.add_parser("book", help="batch-price a CSV book")
    p_book.add_argument("--input", required=True, help="Path to book CSV")
    p_book.add_argument("--output", required=True, help="Output path (.csv or .json)")
    p_book.add_argument("--greeks", action="store_true", help="Compute Greeks")
    p_book.set_defaults(func=cmd_book, parser=p_book)
    return p


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format=LOG_FORMAT, stream=sys.stderr)
    return args.func(args) or 0


if __name__ == "__main__":
    sys.exit(main())
