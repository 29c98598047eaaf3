from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Literal

from taxcompare.core.brackets import LineItem
from taxcompare.core.jurisdiction import MANITOBA_2024, EmploymentStatus, Jurisdiction
from taxcompare.core.money import ZERO, format_currency, to_decimal
from taxcompare.core.scenarios import ComparisonResult

D = Decimal

_TENTH = D("0.1")
NO_TAX_MESSAGE = "No tax owed in this bracket."

AdvantageKind = Literal["neutral", "corporate", "personal"]


@dataclass(frozen=True)
class Advantage:
    kind: AdvantageKind
    headline: str
    detail: str


@dataclass(frozen=True)
class ToggleCaption:
    title: str
    caption: str


def format_percent(rate: float | Decimal) -> str:
    """``0.205`` -> ``20.5%``; ``0.15`` -> ``15%``."""
    value = (to_decimal(rate) * 100).quantize(_TENTH, rounding=ROUND_HALF_UP)
    text = f"{value:f}"
    if text.endswith(".0"):
        text = text[:-2]
    return f"{text}%"


def render_line(item: LineItem) -> tuple[str, str]:
    if item.is_credit:
        detail = f" ({format_currency(item.amount)} applied)" if item.amount else ""
        return f"{item.label}{detail}", format_currency(item.tax)
    rate = format_percent(item.rate) if item.rate is not None else ""
    return item.label, f"{rate} on {format_currency(item.amount)} = {format_currency(item.tax)}"


def render_breakdown(items: Iterable[LineItem]) -> list[tuple[str, str]]:
    rows = [render_line(item) for item in items]
    if not rows:
        return [(NO_TAX_MESSAGE, "")]
    return rows


def describe_advantage(result: ComparisonResult) -> Advantage:
    if not result.has_data or result.advantage is None:
        return Advantage(
            kind="neutral",
            headline="Enter an income amount to see tax comparison",
            detail="",
        )
    amount = format_currency(abs(result.advantage))
    share_value = (result.advantage_share or D("0")).quantize(_TENTH, rounding=ROUND_HALF_UP)
    share = f"{share_value:f}%"
    if result.favours_incorporation:
        return Advantage(
            kind="corporate",
            headline=f"Corporate structure provides a tax advantage of {amount}",
            detail=f"You save {amount} by incorporating ({share} of gross income)",
        )
    return Advantage(
        kind="personal",
        headline=f"Personal income structure provides a tax advantage of {amount}",
        detail=f"You save {amount} by remaining unincorporated ({share} of gross income)",
    )


def _employee_only_credit(jurisdiction: Jurisdiction) -> D:
    """Credit base amounts employees claim and the self-employed do not."""
    shared = jurisdiction.rules_for(EmploymentStatus.SELF_EMPLOYED).federal_credits
    return sum(
        (
            rule.amount_for(ZERO)
            for rule in jurisdiction.rules_for(EmploymentStatus.EMPLOYEE).federal_credits
            if rule not in shared
        ),
        ZERO,
    )


def describe_options(
    include_insurance: bool,
    self_employed: bool,
    jurisdiction: Jurisdiction = MANITOBA_2024,
) -> dict[str, ToggleCaption]:
    if self_employed:
        ei = ToggleCaption(
            title="EI premiums included (optional)" if include_insurance else "EI premiums excluded",
            caption=(
                "Self-employed can optionally register for EI special benefits."
                if include_insurance
                else "Most self-employed professionals do not opt into EI."
            ),
        )
        status = ToggleCaption(
            title="Self-employed (unincorporated)",
            caption=(
                "Pays both employee + employer CPP "
                f"({format_currency(jurisdiction.self_employed.contribution.maximum)} max), no employment credit."
            ),
        )
    else:
        ei = ToggleCaption(
            title="EI premiums included" if include_insurance else "EI premiums excluded",
            caption=(
                "Disable if EI-exempt (e.g., incorporated owner-manager)."
                if include_insurance
                else "Enable if EI premiums should be part of the personal tax projection."
            ),
        )
        status = ToggleCaption(
            title="Employee or incorporated",
            caption=(
                f"Pays only employee CPP ({format_currency(jurisdiction.employee.contribution.maximum)} max), "
                f"gets {format_currency(_employee_only_credit(jurisdiction))} employment credit."
            ),
        )
    return {"insurance": ei, "employment": status}


__all__ = [
    "Advantage",
    "NO_TAX_MESSAGE",
    "ToggleCaption",
    "describe_advantage",
    "describe_options",
    "format_currency",
    "format_percent",
    "render_breakdown",
    "render_line",
]
