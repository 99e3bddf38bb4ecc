"""Batch-price a book of European options.

Input rows (CSV or dicts)
-------------------------
    id,S0,K,T,r,sigma,kind
    1,100,110,0.5,0.05,0.20,call
    2,100,95,1.0,0.05,0.25,put

Output
------
    One dict per row: id, price and, optionally, delta, gamma, vega, theta,
    rho.  Rows that fail validation carry ``price=None`` and an ``error``.
"""

from __future__ import annotations

import csv
import json
import logging
import math
from pathlib import Path
from typing import Iterable

from .black_scholes import option_greeks, price_option
from .core import OptionSpec, is_finite_result

logger = logging.getLogger(__name__)

__all__ = ["price_row", "price_book", "read_book", "write_results", "json_safe"]


def _number(row: dict, name: str) -> float:
    # csv.DictReader fills missing trailing fields with None
    val = row[name]
    if val is None or str(val).strip() == "":
        raise ValueError(f"{name} is missing")
    return float(val)


def json_safe(value):
    """Map non-finite floats to ``None`` so the output is strict JSON."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def price_row(row: dict, compute_greeks: bool = False) -> dict:
    """Price a single book row and return the result dict."""
    opt = OptionSpec(
        S0=_number(row, "S0"),
        K=_number(row, "K"),
        T=_number(row, "T"),
        r=_number(row, "r"),
        sigma=_number(row, "sigma"),
        kind=str(row.get("kind") or "call"),
    )
    result = {"id": row.get("id", ""), "price": price_option(opt)}
    if compute_greeks:
        result.update(option_greeks(opt))
    if not is_finite_result([v for k, v in result.items() if k != "id"]):
        logger.warning("Row id=%s produced non-finite output: %s", result["id"], result)
    return result


def price_book(rows: Iterable[dict], *, compute_greeks: bool = False) -> list[dict]:
    """Price every row; a bad row is recorded and logged, not fatal."""
    results = []
    for i, row in enumerate(rows):
        try:
            results.append(price_row(row, compute_greeks))
        except (KeyError, ValueError) as e:
            logger.error("Row %d (id=%s): %s", i, row.get("id", "?"), e)
            results.append({"id": row.get("id", ""), "price": None, "error": str(e)})
    logger.info("Priced %d rows (%d failed)",
                len(results), sum(1 for r in results if r["price"] is None))
    return results


def read_book(path) -> list[dict]:
    with open(path, newline="") as f:
        return list(csv.DictReader(f))


def write_results(results: list[dict], path) -> None:
    """Write to ``.json`` or, for any other suffix, CSV."""
    output_path = Path(path)
    if output_path.suffix == ".json":
        safe = [{k: json_safe(v) for k, v in r.items()} for r in results]
        with open(output_path, "w") as f:
            json.dump(safe, f, indent=2, default=str, allow_nan=False)
        return

    fieldnames: list[str] = []
    for r in results:
        for k in r:
            if k not in fieldnames:
                fieldnames.append(k)
    with open(output_path, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(results)
