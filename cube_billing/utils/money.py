"""Money conversion helpers - all amounts are integer cents internally"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

CENT = Decimal("0.01")


def dollars_to_cents(value) -> int:
    """
    Convert a dollar amount (str, int, float or Decimal) to integer cents.

    Floats are routed through ``str`` so 10.1 becomes 1010, not 1009.
    Half-cent values round away from zero.

    Raises:
        ValueError: If the value is not a finite number
    """
    try:
        amount = Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"Invalid money amount: {value!r}") from exc
    if not amount.is_finite():
        raise ValueError(f"Invalid money amount: {value!r}")
    return int(amount.quantize(CENT, rounding=ROUND_HALF_UP) * 100)


def format_cents(cents: int) -> str:
    """Render cents as a dollar string (14000 -> $140.00)"""
    return f"${Decimal(cents) / 100:.2f}"
