from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

from taxcompare.core.brackets import BracketDetail, LineItem
from taxcompare.core.money import ZERO

D = Decimal


def phased_amount(income: D, full: D, floor: D, start: D, end: D) -> D:
    """Credit base that falls linearly from ``full`` to ``floor`` between ``start`` and ``end``."""
    if income <= start:
        return full
    if income >= end:
        return floor
    return full - (income - start) * (full - floor) / (end - start)


@dataclass(frozen=True)
class FixedCredit:
    label: str
    amount: D
    rate: D

    def amount_for(self, reference_income: D) -> D:
        return self.amount


@dataclass(frozen=True)
class PhasedCredit:
    label: str
    full_amount: D
    floor_amount: D
    phase_start: D
    phase_end: D
    rate: D

    def amount_for(self, reference_income: D) -> D:
        return phased_amount(
            reference_income,
            self.full_amount,
            self.floor_amount,
            self.phase_start,
            self.phase_end,
        )


CreditRule = FixedCredit | PhasedCredit


def credit_line(rule: CreditRule, reference_income: D) -> LineItem:
    amount = rule.amount_for(reference_income)
    return LineItem(label=rule.label, amount=amount, tax=-(amount * rule.rate), is_credit=True)


def apply_credits(
    detail: BracketDetail,
    reference_income: D,
    rules: Sequence[CreditRule],
) -> BracketDetail:
    """Offset bracket tax with non-refundable credits, in rule order.

    Every rule contributes one credit line after the bracket lines. Credits are
    non-refundable, so the resulting total bottoms out at zero.
    """
    lines = [credit_line(rule, reference_income) for rule in rules]
    offset = sum((-line.tax for line in lines), ZERO)
    return detail.with_credits(lines, max(ZERO, detail.total - offset))


__all__ = [
    "CreditRule",
    "FixedCredit",
    "PhasedCredit",
    "apply_credits",
    "credit_line",
    "phased_amount",
]
