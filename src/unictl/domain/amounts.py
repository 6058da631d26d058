"""Conversion between human token amounts and integer micro-units.

The ledger only ever sees integers. A token with ``decimals=6`` stores
``1.5`` tokens as ``1_500_000`` micro-units.
"""

from __future__ import annotations

from decimal import Decimal, DecimalException, Inexact, localcontext

# Significant integer digits accepted for one amount; covers 2**256 - 1.
MAX_DIGITS = 78


def parse_amount(text: str, decimals: int) -> int:
    """Parse a decimal token amount into micro-units.

    Rejects values with more fractional digits than *decimals* rather
    than rounding them away, and values too large to be an amount.

    Examples:
        >>> parse_amount("1.5", 6)
        1500000
        >>> parse_amount("42", 0)
        42

    Raises:
        ValueError: If *text* is not a finite number, carries excess
            precision, or is out of range.
    """
    try:
        value = Decimal(text.strip().replace("_", ""))
    except DecimalException as exc:
        msg = f"Not a number: {text!r}"
        raise ValueError(msg) from exc
    if not value.is_finite():
        msg = f"Not a finite number: {text!r}"
        raise ValueError(msg)
    if value and value.adjusted() + decimals >= MAX_DIGITS:
        msg = f"{text!r} is out of range"
        raise ValueError(msg)

    try:
        with localcontext() as ctx:
            ctx.prec = MAX_DIGITS
            ctx.traps[Inexact] = True
            scaled = value.scaleb(decimals)
    except Inexact as exc:
        msg = f"{text!r} has more than {decimals} decimal places"
        raise ValueError(msg) from exc
    except DecimalException as exc:
        msg = f"{text!r} is out of range"
        raise ValueError(msg) from exc
    if scaled != scaled.to_integral_value():
        msg = f"{text!r} has more than {decimals} decimal places"
        raise ValueError(msg)
    return int(scaled)


def format_amount(micro: int, decimals: int) -> str:
    """Render micro-units as a decimal string, trimming trailing zeros.

    Examples:
        >>> format_amount(1500000, 6)
        '1.5'
        >>> format_amount(100000000000, 6)
        '100000'
    """
    if decimals == 0:
        return str(micro)
    sign = "-" if micro < 0 else ""
    whole, frac = divmod(abs(micro), 10**decimals)
    frac_text = f"{frac:0{decimals}d}".rstrip("0")
    return f"{sign}{whole}.{frac_text}" if frac_text else f"{sign}{whole}"
