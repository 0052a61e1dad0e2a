"""
Price parsing for free-form form input

Users type prices the way their locale writes them: "1.234,56" (IT/EU),
"1,234.56" (US), "1234.56" or just "50". Instead of detecting the locale,
the last '.' or ',' in the string is taken as the decimal separator and every
other '.'/',' is treated as a grouping mark.

Accepted ambiguity: "1.234" has a single separator followed by three digits
and is read as 1.234 (rounded to 1.23), not as 1234.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
import locale
import re
from typing import Callable, Optional


_SEPARATORS = ('.', ',')
_INVARIANT_NUMBER = re.compile(r'[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)')
_CENTS = Decimal('0.01')


def _parse_invariant(text: str) -> Optional[Decimal]:
    if not _INVARIANT_NUMBER.fullmatch(text):
        return None
    try:
        return Decimal(text)
    except InvalidOperation:
        return None


def _parse_last_separator_as_decimal_point(text: str) -> Optional[Decimal]:
    index = max(text.rfind(sep) for sep in _SEPARATORS)
    integer_part = text[:index].replace('.', '').replace(',', '')
    fractional_part = text[index + 1 :]
    return _parse_invariant(f'{integer_part}.{fractional_part}')


def _parse_commas_as_points(text: str) -> Optional[Decimal]:
    return _parse_invariant(text.replace(',', '.'))


def _parse_host_locale(text: str) -> Optional[Decimal]:
    try:
        return _parse_invariant(locale.delocalize(text))
    except (ValueError, locale.Error):
        return None


def try_parse_price(raw: Optional[str]) -> Optional[Decimal]:
    """
    Parse a user-supplied price into a Decimal rounded to cents.

    Returns None when the input is blank or no parsing strategy accepts it.
    Rounding is half away from zero ("1.005" -> 1.01).
    """
    if raw is None or not raw.strip():
        return None

    text = ''.join(raw.split())

    strategies: tuple[Callable[[str], Optional[Decimal]], ...]
    if not any(sep in text for sep in _SEPARATORS):
        strategies = (_parse_invariant,)
    else:
        strategies = (
            _parse_last_separator_as_decimal_point,
            _parse_commas_as_points,
            _parse_host_locale,
        )

    for strategy in strategies:
        value = strategy(text)
        if value is not None:
            try:
                return value.quantize(_CENTS, rounding=ROUND_HALF_UP)
            except InvalidOperation:
                # More digits than the decimal context can hold
                return None
    return None
