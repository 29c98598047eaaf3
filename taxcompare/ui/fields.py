from __future__ import annotations

import re
from decimal import Decimal

from taxcompare.core.money import ZERO, format_currency

_NON_DIGIT_RE = re.compile(r"[^0-9]")

FIELD_METADATA: dict[str, dict[str, str]] = {
    "income": {
        "label": "Gross income",
        "help": "Professional or business income before tax.",
        "placeholder": "$200,000",
    },
    "expenses": {
        "label": "Personal expense draw",
        "help": "Salary paid out of the corporation to cover personal spending.",
        "placeholder": "$100,000",
    },
}


def digits_only(text: str | None) -> str:
    return _NON_DIGIT_RE.sub("", text or "")


def parse_currency_input(text: str | None, default: Decimal = ZERO) -> Decimal:
    """Read a currency-formatted field as a whole-dollar amount.

    Every non-digit character is ignored. A blank field gives ``default``; text
    with no digits at all gives zero.
    """
    if text is None or not text.strip():
        return default
    digits = digits_only(text)
    if not digits:
        return ZERO
    return Decimal(digits)


def format_input_currency(text: str | None) -> str:
    digits = digits_only(text)
    if not digits:
        return ""
    return format_currency(Decimal(digits))


def reformat_with_cursor(text: str, cursor: int | None = None) -> tuple[str, int]:
    """Reformat a field as the user types and keep the caret next to the same digit."""
    previous_length = len(text)
    position = previous_length if cursor is None else cursor
    formatted = format_input_currency(text)
    if not formatted:
        return "", 0
    delta = len(formatted) - previous_length
    return formatted, max(0, position + delta)


def parse_bool(text: str) -> bool:
    lowered = text.strip().lower()
    if lowered in {"y", "yes", "true", "1", "on"}:
        return True
    if lowered in {"n", "no", "false", "0", "off", ""}:
        return False
    raise ValueError("Enter yes or no.")


__all__ = [
    "FIELD_METADATA",
    "digits_only",
    "format_input_currency",
    "parse_bool",
    "parse_currency_input",
    "reformat_with_cursor",
]
