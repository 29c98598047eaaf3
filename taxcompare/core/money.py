from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, localcontext

D = Decimal

_CENT = D("0.01")
_DOLLAR = D("1")
ZERO = D("0")


def to_decimal(value: float | int | str | Decimal) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


def _quantize(value: Decimal, exponent: Decimal) -> Decimal:
    # quantize raises once the coefficient outgrows the context precision
    with localcontext() as ctx:
        if value.is_finite():
            ctx.prec = max(ctx.prec, value.adjusted() - exponent.as_tuple().exponent + 3)
        return value.quantize(exponent, rounding=ROUND_HALF_UP)


def round_cents(value: float | Decimal) -> Decimal:
    return _quantize(to_decimal(value), _CENT)


def format_currency(amount: float | int | Decimal) -> str:
    """Whole-dollar en-CA currency text, e.g. ``$55,867`` or ``-$1,250``."""
    dollars = _quantize(to_decimal(amount), _DOLLAR)
    if dollars == 0:
        return "$0"
    if dollars < 0:
        return f"-${dollars.copy_abs():,}"
    return f"${dollars:,}"


def percentage(part: Decimal, whole: Decimal) -> str:
    """``part / whole`` as a two-decimal percentage string; ``"0.00"`` when whole is zero."""
    if whole == 0:
        return "0.00"
    return str(_quantize(part / whole * 100, _CENT))


__all__ = ["D", "ZERO", "format_currency", "percentage", "round_cents", "to_decimal"]
