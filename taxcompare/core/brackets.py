from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Iterable, Iterator, Sequence

from taxcompare.core.money import ZERO, format_currency

D = Decimal


class BracketScheduleError(ValueError):
    pass


@dataclass(frozen=True)
class TaxBracket:
    lower: D
    upper: D | None
    rate: D

    def __iter__(self) -> Iterator[D | None]:
        return iter((self.lower, self.upper, self.rate))

    @property
    def span(self) -> D | None:
        if self.upper is None:
            return None
        return self.upper - self.lower


@dataclass(frozen=True)
class LineItem:
    label: str
    amount: D
    tax: D
    rate: D | None = None
    is_credit: bool = False


@dataclass(frozen=True)
class BracketDetail:
    total: D
    breakdown: tuple[LineItem, ...] = ()

    @property
    def bracket_lines(self) -> tuple[LineItem, ...]:
        return tuple(item for item in self.breakdown if not item.is_credit)

    @property
    def credit_lines(self) -> tuple[LineItem, ...]:
        return tuple(item for item in self.breakdown if item.is_credit)

    def with_credits(self, lines: Iterable[LineItem], total: D) -> "BracketDetail":
        return replace(self, total=total, breakdown=self.breakdown + tuple(lines))


def bracket_range_label(lower: D, upper: D | None) -> str:
    if upper is None:
        return f"{format_currency(lower)}+"
    return f"{format_currency(lower)} - {format_currency(upper)}"


def integrate(income: D, brackets: Sequence[TaxBracket]) -> BracketDetail:
    """Apply a marginal schedule to ``income``.

    Only the brackets the income reaches appear in the breakdown. Income at or
    below zero yields no tax and an empty breakdown.
    """
    remaining = max(ZERO, income)
    total = ZERO
    lines: list[LineItem] = []
    for bracket in brackets:
        if remaining <= 0:
            break
        span = bracket.span
        portion = remaining if span is None else max(min(remaining, span), ZERO)
        if portion > 0:
            tax = portion * bracket.rate
            total += tax
            lines.append(
                LineItem(
                    label=bracket_range_label(bracket.lower, bracket.upper),
                    amount=portion,
                    tax=tax,
                    rate=bracket.rate,
                )
            )
            remaining -= portion
    return BracketDetail(total=total, breakdown=tuple(lines))


def validate_brackets(brackets: Sequence[TaxBracket]) -> None:
    if not brackets:
        raise BracketScheduleError("Bracket schedule is empty")
    if brackets[0].lower != 0:
        raise BracketScheduleError(f"First bracket must start at 0, got {brackets[0].lower}")
    for index, bracket in enumerate(brackets):
        is_last = index == len(brackets) - 1
        if bracket.rate < 0:
            raise BracketScheduleError(f"Negative rate {bracket.rate} in bracket {index}")
        if bracket.upper is None:
            if not is_last:
                raise BracketScheduleError(f"Unbounded bracket {index} is not the top bracket")
            continue
        if is_last:
            raise BracketScheduleError("Top bracket must have no upper bound")
        if bracket.upper <= bracket.lower:
            raise BracketScheduleError(
                f"Bracket {index} upper bound {bracket.upper} is not above {bracket.lower}"
            )
        following = brackets[index + 1]
        if following.lower != bracket.upper:
            raise BracketScheduleError(
                f"Bracket {index + 1} starts at {following.lower}, expected {bracket.upper}"
            )


__all__ = [
    "BracketDetail",
    "BracketScheduleError",
    "LineItem",
    "TaxBracket",
    "bracket_range_label",
    "integrate",
    "validate_brackets",
]
