"""Personal-income vs. small-business corporation comparison.

The personal scenario taxes the whole gross income in the owner's hands under
the selected employment status. The corporate scenario taxes the income at the
small-business rate, pays the owner a salary out of what is left (capped at
the after-tax corporate income) and keeps the rest in the company. Retained
earnings are counted as available to the owner without any further personal
tax on distribution.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

from taxcompare.core.brackets import BracketDetail, LineItem, TaxBracket, integrate
from taxcompare.core.contributions import ContributionResult
from taxcompare.core.contributions import compute_contributions as _compute_contributions
from taxcompare.core.contributions import insurance_premium, taxable_income
from taxcompare.core.credits import CreditRule, apply_credits
from taxcompare.core.jurisdiction import (
    EmploymentStatus,
    Jurisdiction,
    StatusRules,
    get_jurisdiction,
)
from taxcompare.core.money import ZERO, percentage, to_decimal

D = Decimal

logger = logging.getLogger("tax_compare").getChild("engine")


@dataclass(frozen=True)
class ScenarioOptions:
    include_insurance: bool = True
    self_employed: bool = False

    @property
    def employment_status(self) -> EmploymentStatus:
        return EmploymentStatus.from_flag(self.self_employed)


@dataclass(frozen=True)
class ScenarioResult:
    gross_income: D
    taxable_income: D
    federal_tax: D
    provincial_tax: D
    contributions: ContributionResult
    insurance: D
    total_tax: D
    net_income: D
    effective_rate: str
    federal_breakdown: tuple[LineItem, ...]
    provincial_breakdown: tuple[LineItem, ...]


@dataclass(frozen=True)
class CorporateResult(ScenarioResult):
    corporate_tax: D
    after_tax_corporate_income: D
    salary: D
    salary_tax: D
    retained_earnings: D
    corporate_breakdown: tuple[LineItem, ...]


@dataclass(frozen=True)
class ComparisonResult:
    personal: ScenarioResult
    corporate: CorporateResult
    advantage: D | None

    @property
    def has_data(self) -> bool:
        return self.advantage is not None

    @property
    def favours_incorporation(self) -> bool:
        return self.advantage is not None and self.advantage > 0

    @property
    def advantage_share(self) -> D | None:
        """Absolute advantage as a percentage of gross income."""
        if self.advantage is None:
            return None
        return abs(self.advantage) / self.personal.gross_income * 100


@dataclass(frozen=True)
class _PersonalTax:
    contributions: ContributionResult
    taxable_income: D
    federal: BracketDetail
    provincial: BracketDetail
    insurance: D

    @property
    def total(self) -> D:
        return self.federal.total + self.provincial.total + self.contributions.total + self.insurance


@dataclass(frozen=True)
class TaxEngine:
    jurisdiction: Jurisdiction

    def integrate(self, income: D, brackets: Sequence[TaxBracket]) -> BracketDetail:
        return integrate(income, brackets)

    def apply_credits(
        self,
        detail: BracketDetail,
        reference_income: D,
        rules: Sequence[CreditRule],
    ) -> BracketDetail:
        return apply_credits(detail, reference_income, rules)

    def compute_contributions(self, income: D, status: EmploymentStatus) -> ContributionResult:
        return _compute_contributions(income, self.jurisdiction.rules_for(status).contribution)

    def _personal_tax(self, income: D, rules: StatusRules, include_insurance: bool) -> _PersonalTax:
        contributions = _compute_contributions(income, rules.contribution)
        taxable = taxable_income(income, contributions, rules.contribution)
        federal = apply_credits(
            integrate(taxable, self.jurisdiction.federal_brackets),
            taxable,
            rules.federal_credits,
        )
        provincial = apply_credits(
            integrate(taxable, self.jurisdiction.provincial_brackets),
            taxable,
            rules.provincial_credits,
        )
        # EI always follows employee rules; self-employed only pay it when opted in.
        insurance = insurance_premium(income, self.jurisdiction.insurance, include_insurance)
        return _PersonalTax(
            contributions=contributions,
            taxable_income=taxable,
            federal=federal,
            provincial=provincial,
            insurance=insurance,
        )

    def personal_scenario(self, gross_income: D, options: ScenarioOptions) -> ScenarioResult:
        gross = max(ZERO, to_decimal(gross_income))
        rules = self.jurisdiction.rules_for(options.employment_status)
        tax = self._personal_tax(gross, rules, options.include_insurance)
        total = tax.total
        return ScenarioResult(
            gross_income=gross,
            taxable_income=tax.taxable_income,
            federal_tax=tax.federal.total,
            provincial_tax=tax.provincial.total,
            contributions=tax.contributions,
            insurance=tax.insurance,
            total_tax=total,
            net_income=gross - total,
            effective_rate=percentage(total, gross),
            federal_breakdown=tax.federal.breakdown,
            provincial_breakdown=tax.provincial.breakdown,
        )

    def corporate_scenario(
        self,
        gross_income: D,
        personal_expense_draw: D,
        options: ScenarioOptions,
    ) -> CorporateResult:
        gross = max(ZERO, to_decimal(gross_income))
        draw = max(ZERO, to_decimal(personal_expense_draw))
        rate = self.jurisdiction.small_business_rate
        corporate_tax = gross * rate
        after_tax = gross - corporate_tax
        salary = min(draw, after_tax)

        # An owner-manager's salary is employment income, never self-employment.
        tax = self._personal_tax(
            salary,
            self.jurisdiction.rules_for(EmploymentStatus.EMPLOYEE),
            options.include_insurance,
        )
        salary_tax = tax.total
        retained = after_tax - salary
        total = corporate_tax + salary_tax
        net = salary - salary_tax + retained

        corporate_breakdown: tuple[LineItem, ...] = ()
        if gross > 0:
            corporate_breakdown = (
                LineItem(label="Active business income", amount=gross, tax=corporate_tax, rate=rate),
            )

        return CorporateResult(
            gross_income=gross,
            taxable_income=tax.taxable_income,
            federal_tax=tax.federal.total,
            provincial_tax=tax.provincial.total,
            contributions=tax.contributions,
            insurance=tax.insurance,
            total_tax=total,
            net_income=net,
            effective_rate=percentage(total, gross),
            federal_breakdown=tax.federal.breakdown,
            provincial_breakdown=tax.provincial.breakdown,
            corporate_tax=corporate_tax,
            after_tax_corporate_income=after_tax,
            salary=salary,
            salary_tax=salary_tax,
            retained_earnings=retained,
            corporate_breakdown=corporate_breakdown,
        )

    def compare(
        self,
        gross_income: D,
        personal_expense_draw: D,
        options: ScenarioOptions | None = None,
    ) -> ComparisonResult:
        opts = options or ScenarioOptions()
        personal = self.personal_scenario(gross_income, opts)
        corporate = self.corporate_scenario(gross_income, personal_expense_draw, opts)
        advantage = None
        if personal.gross_income > 0:
            advantage = corporate.net_income - personal.net_income
        logger.debug(
            "Compared %s income=%s draw=%s status=%s ei=%s advantage=%s",
            self.jurisdiction.code,
            personal.gross_income,
            personal_expense_draw,
            opts.employment_status.value,
            opts.include_insurance,
            advantage,
        )
        return ComparisonResult(personal=personal, corporate=corporate, advantage=advantage)


def build_engine(jurisdiction: Jurisdiction | str | None = None) -> TaxEngine:
    if isinstance(jurisdiction, Jurisdiction):
        return TaxEngine(jurisdiction)
    return TaxEngine(get_jurisdiction(jurisdiction))


def compare(
    gross_income: D,
    personal_expense_draw: D,
    options: ScenarioOptions | None = None,
    jurisdiction: Jurisdiction | str | None = None,
) -> ComparisonResult:
    return build_engine(jurisdiction).compare(gross_income, personal_expense_draw, options)


__all__ = [
    "ComparisonResult",
    "CorporateResult",
    "ScenarioOptions",
    "ScenarioResult",
    "TaxEngine",
    "build_engine",
    "compare",
]
