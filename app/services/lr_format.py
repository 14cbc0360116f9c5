"""
Color and format helpers for Lorry Receipt rendering

Pure functions shared by every LR layout:
- hex color parsing with a black fallback
- dd/MM/yyyy date formatting
- Indian-grouped currency formatting with an ASCII "Rs." prefix
- CGST/SGST split with two-decimal truncation
"""

import re
import logging
from datetime import datetime, date
from decimal import Decimal, InvalidOperation, ROUND_DOWN, ROUND_HALF_UP
from typing import Any, NamedTuple, Optional, Tuple

from pydantic import TypeAdapter, ValidationError

logger = logging.getLogger(__name__)

DATE_FORMAT = "%d/%m/%Y"
CURRENCY_PREFIX = "Rs."
EMPTY_AMOUNT = "-"
GST_HALF_RATE = Decimal("0.025")
TWO_PLACES = Decimal("0.01")

BLACK = (0, 0, 0)

# pydantic's ISO 8601 parser takes any fraction length, unlike fromisoformat before 3.11
_DATE_PARSERS = (TypeAdapter(datetime), TypeAdapter(date))

_HEX_RE = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)


def hex_to_rgb(hex_color: Any) -> Tuple[int, int, int]:
    """Parse '#RRGGBB' (hash optional). Malformed input gives black."""
    if not isinstance(hex_color, str):
        return BLACK
    match = _HEX_RE.match(hex_color.strip())
    if not match:
        return BLACK
    return tuple(int(part, 16) for part in match.groups())


def format_date(value: Any = None) -> str:
    """Format a date as dd/MM/yyyy; absent or unreadable values give today"""
    if value is None or value == "":
        return datetime.now().strftime(DATE_FORMAT)
    if isinstance(value, (datetime, date)):
        return value.strftime(DATE_FORMAT)

    text = str(value).strip()
    for parser in _DATE_PARSERS:
        try:
            return parser.validate_python(text).strftime(DATE_FORMAT)
        except ValidationError:
            continue
    logger.debug(f"Unparseable date {text!r}, using today")
    return datetime.now().strftime(DATE_FORMAT)


def to_decimal(value: Any) -> Optional[Decimal]:
    """Parse numbers and numeric strings; anything else is None"""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)):
        amount = Decimal(str(value))
    else:
        text = str(value).strip().replace(",", "")
        if not text:
            return None
        try:
            amount = Decimal(text)
        except InvalidOperation:
            return None
    if not amount.is_finite():
        return None
    return amount


def to_amount(value: Any, default: Any) -> Decimal:
    """Numeric value of a charge, or the template's sample default when absent or zero"""
    amount = to_decimal(value)
    if amount is None or amount == 0:
        return Decimal(str(default))
    return amount


def _group_indian(digits: str) -> str:
    # 12345678 -> 1,23,45,678
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_indian_number(amount: Decimal, fraction_digits: int = 0) -> str:
    """Indian digit grouping. Integral values drop decimals unless fraction_digits forces them."""
    negative = amount < 0
    amount = abs(amount)

    if fraction_digits > 0:
        quantum = Decimal(1).scaleb(-fraction_digits)
        text = str(amount.quantize(quantum, rounding=ROUND_HALF_UP))
    elif amount == amount.to_integral_value():
        text = str(amount.quantize(Decimal(1)))
    else:
        text = str(amount.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)).rstrip("0")

    whole, _, fraction = text.partition(".")
    grouped = _group_indian(whole)
    if fraction:
        grouped = f"{grouped}.{fraction}"
    return f"-{grouped}" if negative else grouped


def format_currency(value: Any, fraction_digits: int = 0) -> str:
    """'Rs. 18,500' style amount; '-' for absent, zero or non-numeric values"""
    amount = to_decimal(value)
    if amount is None or amount == 0:
        return EMPTY_AMOUNT
    return f"{CURRENCY_PREFIX} {format_indian_number(amount, fraction_digits)}"


class GstBreakdown(NamedTuple):
    taxable: Decimal
    cgst: Decimal
    sgst: Decimal
    total: Decimal


def compute_gst(taxable: Any, half_rate: Decimal = GST_HALF_RATE) -> GstBreakdown:
    """
    Split GST into CGST and SGST at half_rate each.

    Each component is truncated to two decimals and the total is the literal
    sum of taxable + cgst + sgst; there is no separate rounding of the total.
    """
    base = to_decimal(taxable) or Decimal("0")
    cgst = (base * half_rate).quantize(TWO_PLACES, rounding=ROUND_DOWN)
    sgst = (base * half_rate).quantize(TWO_PLACES, rounding=ROUND_DOWN)
    return GstBreakdown(base, cgst, sgst, base + cgst + sgst)


def apply_text_color(surface, hex_color: Any) -> None:
    """Set the surface text color from a hex string"""
    surface.set_text_color(*hex_to_rgb(hex_color))


def reset_text_color(surface) -> None:
    surface.set_text_color(*BLACK)


def or_default(value: Any, default: str) -> str:
    """Display text for value, or default when value is None or empty"""
    if value is None:
        return default
    text = str(value)
    return text if text.strip() else default


def first_segment(location: Optional[str]) -> str:
    """'Mumbai, Maharashtra' -> 'Mumbai'"""
    if not location:
        return ""
    return location.split(",")[0].strip() or location
