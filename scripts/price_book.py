#!/usr/bin/env python3
"""Production script: batch-price an options book.

Usage
-----
    python scripts/price_book.py --input book.csv --output prices.csv
    python scripts/price_book.py --input book.csv --output prices.json --greeks

Input CSV format
----------------
    id,S0,K,T,r,sigma,kind
    1,100,110,0.5,0.05,0.20,call
    2,100,95,1.0,0.05,0.25,put

Output
------
    CSV or JSON with columns: id, price, delta, gamma, vega, theta, rho
    (vega / rho per 1 vol / rate point, theta per calendar day).
"""

from __future__ import annotations
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from optgreeks.cli import main


if __name__ == "__main__":
    sys.exit(main(["book", *sys.argv[1:]]))
