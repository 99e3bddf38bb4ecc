"""
Configuration constants for optgreeks.

Single source of truth for desk-unit scaling, output formatting and
logging defaults.
"""

import os

# ---------------------------------------------------------------------------
# Desk units
# ---------------------------------------------------------------------------
DAYS_PER_YEAR = 365.0  # theta is reported per calendar day
PCT_POINT = 100.0      # vega / rho are reported per 1 percentage-point move

GREEK_KEYS = ("delta", "gamma", "vega", "theta", "rho")

# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------
PRECISION = 10  # decimals printed by the CLI

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def resolve_log_level(value) -> str:
    """Upper-cased level name, or ``"WARNING"`` when ``value`` is not one of LOG_LEVELS."""
    level = str(value or "").strip().upper()
    return level if level in LOG_LEVELS else "WARNING"


DEFAULT_LOG_LEVEL = resolve_log_level(os.environ.get("OPTGREEKS_LOG_LEVEL"))
