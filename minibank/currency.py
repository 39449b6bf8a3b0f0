"""
Amount Handling Module

Normalises monetary amounts to Decimal with a fixed precision and parses
user-entered amounts. NEVER uses float for monetary values.
"""

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation, getcontext
from typing import Union
import re

# Set global decimal context for financial precision
getcontext().prec = 28

DEFAULT_PRECISION = 2

AmountLike = Union[Decimal, int, float, str]

CURRENCY_SYMBOLS = "$€£¥"

# Plain number, optional sign and fraction; exponent notation is not accepted
_PLAIN_NUMBER = re.compile(r'^[+-]?(?:\d+(?:\.\d*)?|\.\d+)$')
# Thousands-grouped integer part, e.g. 1,000 or -12,345,678
_GROUPED_INTEGER = re.compile(r'^[+-]?\d{1,3}(?:,\d{3})+$')


def quantize_amount(value: Decimal, precision: int = DEFAULT_PRECISION) -> Decimal:
    """
    Round a Decimal to the given number of places

    Args:
        value: Decimal to round
        precision: Number of decimal places

    Returns:
        Properly rounded Decimal

    Raises:
        ValueError: If the rounded value needs more digits than the context holds
    """
    try:
        return value.quantize(Decimal('0.1') ** precision, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValueError(f"Amount {value} is too large")


def to_amount(value: AmountLike, precision: int = DEFAULT_PRECISION) -> Decimal:
    """
    Convert an int, float, str or Decimal into a rounded Decimal amount

    Floats go through str() first so 0.1 stays 0.1.

    Raises:
        ValueError: If the value is not a finite number
    """
    if isinstance(value, bool):
        raise ValueError(f"Cannot use {value!r} as an amount")

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)):
        amount = Decimal(str(value))
    elif isinstance(value, str):
        amount = decimal_from_string(value)
    else:
        raise ValueError(f"Cannot use {value!r} as an amount")

    if not amount.is_finite():
        raise ValueError(f"Amount must be a finite number, got {value!r}")

    return quantize_amount(amount, precision)


def decimal_from_string(value: str) -> Decimal:
    """
    Safely convert string to Decimal, handling common formats

    Surrounding whitespace and one leading currency symbol are dropped.
    Commas are read as thousands separators when they group digits in
    threes, otherwise a single comma followed by one or two digits is a
    decimal separator. Anything else that is not a plain number is refused.

    Args:
        value: String representation of number

    Returns:
        Decimal value

    Raises:
        ValueError: If string cannot be converted to valid Decimal
    """
    if not value or not isinstance(value, str):
        raise ValueError("Value must be a non-empty string")

    clean_value = value.strip()
    if clean_value and clean_value[0] in CURRENCY_SYMBOLS:
        clean_value = clean_value[1:].lstrip()

    if ',' in clean_value:
        integer_part, dot, fraction = clean_value.partition('.')
        if _GROUPED_INTEGER.match(integer_part):
            clean_value = integer_part.replace(',', '') + dot + fraction
        elif not dot and clean_value.count(',') == 1 and len(clean_value.split(',')[1]) <= 2:
            clean_value = clean_value.replace(',', '.')

    if not _PLAIN_NUMBER.match(clean_value):
        raise ValueError(f"Cannot convert '{value}' to Decimal")

    try:
        return Decimal(clean_value)
    except InvalidOperation:
        raise ValueError(f"Cannot convert '{value}' to Decimal")


def format_amount(value: Decimal, precision: int = DEFAULT_PRECISION) -> str:
    """Format for display with a fixed number of places"""
    return f"{quantize_amount(value, precision):.{precision}f}"
