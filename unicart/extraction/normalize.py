"""
Amount and Currency Normalization

Turns loose price text into a float amount and an optional currency code.

Prices show up as "1.234,56" (EU) and "1,234.56" (US). Without per-locale
configuration, whichever separator appears last is taken as the decimal
separator and the other as a thousands separator.
"""

import math
import re
from typing import Optional, Union

from ..common.constants import CURRENCY_MARKERS

_NON_NUMERIC = re.compile(r'[^\d.,]')


def normalize_amount(raw: Union[str, int, float, None]) -> Optional[float]:
    """
    Parse a loose amount into a float.

    Args:
        raw: Price text ("€ 19,99"), a number, or None

    Returns:
        Non-negative finite amount, or None if nothing parseable

    Examples:
        "1.234,56" -> 1234.56
        "1,234.56" -> 1234.56
        "29,99"    -> 29.99
        "€ 19.99"  -> 19.99
    """
    if raw is None or isinstance(raw, bool):
        return None

    if isinstance(raw, (int, float)):
        try:
            value = float(raw)
        except OverflowError:
            return None
        if not math.isfinite(value) or value < 0:
            return None
        return value

    cleaned = _NON_NUMERIC.sub('', str(raw)).strip('.,')
    if not cleaned:
        return None

    last_comma = cleaned.rfind(',')
    last_dot = cleaned.rfind('.')

    if last_comma >= 0 and last_dot >= 0:
        if last_comma > last_dot:
            cleaned = cleaned.replace('.', '').replace(',', '.')
        else:
            cleaned = cleaned.replace(',', '')
    else:
        # Single separator kind: the last occurrence is the decimal point
        sep = ',' if last_comma >= 0 else '.'
        last = max(last_comma, last_dot)
        if last >= 0:
            cleaned = cleaned[:last].replace(sep, '') + '.' + cleaned[last + 1:]

    try:
        value = float(cleaned)
    except ValueError:
        return None

    return value if math.isfinite(value) else None


def extract_currency_loose(text: Optional[str]) -> Optional[str]:
    """
    Guess a currency code from symbols or codes in free text.

    Args:
        text: Any text near a price ("€ 19,99", "19.99 USD")

    Returns:
        "EUR", "USD", "GBP" or None
    """
    if not text:
        return None

    upper = str(text).upper()
    for code, markers in CURRENCY_MARKERS:
        if any(marker in upper for marker in markers):
            return code

    return None
