"""Numeric parsing and display helpers."""

import re
from decimal import ROUND_HALF_UP, Decimal

from pricing.config import CartConfig

_NUMERIC_PREFIX = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")


def normalize_price(value) -> float:
    """Parse the leading numeric part of ``value`` as a float.

    Strings without a numeric prefix (including the empty string) parse to 0.
    Numbers pass through as floats.
    """
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float, Decimal)):
        return float(value)

    match = _NUMERIC_PREFIX.match(str(value))
    if match is None:
        return 0.0
    return float(match.group(0))


def number_format(value: float, decimals: int = 0, dec_point: str = ".", thousands_sep: str = ",") -> str:
    """Render ``value`` with grouped thousands, rounding half away from zero."""
    quantum = Decimal(1).scaleb(-decimals)
    rounded = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    if rounded == 0:
        rounded = abs(rounded)

    rendered = f"{rounded:,.{decimals}f}"
    return rendered.replace(",", "\0").replace(".", dec_point).replace("\0", thousands_sep)


def format_value(value: float, formatted: bool, config: CartConfig):
    """Format ``value`` when both the caller and the config ask for it."""
    if formatted and config.format_numbers:
        return number_format(value, config.decimals, config.dec_point, config.thousands_sep)
    return value
