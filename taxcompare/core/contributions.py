from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from taxcompare.core.money import ZERO
from taxcompare.core.payroll import limits_2024

D = Decimal


@dataclass(frozen=True)
class ContributionTier:
    floor: D
    ceiling: D
    rate: D
    maximum: D

    def contribution(self, income: D) -> D:
        pensionable = max(ZERO, min(income, self.ceiling) - self.floor)
        return min(pensionable * self.rate, self.maximum)


@dataclass(frozen=True)
class ContributionRule:
    base: ContributionTier
    second: ContributionTier
    enhanced_deduction: D
    employer_share_deductible: bool = False

    @property
    def maximum(self) -> D:
        return self.base.maximum + self.second.maximum


@dataclass(frozen=True)
class ContributionResult:
    base_tier: D
    second_tier: D
    total: D


@dataclass(frozen=True)
class InsuranceRule:
    rate: D
    max_insurable: D
    maximum: D


def compute_contributions(income: D, rule: ContributionRule) -> ContributionResult:
    base = rule.base.contribution(income)
    second = rule.second.contribution(income)
    return ContributionResult(base_tier=base, second_tier=second, total=base + second)


def taxable_income(income: D, contributions: ContributionResult, rule: ContributionRule) -> D:
    """Income left for the bracket schedules after CPP deductions.

    May go negative at very low incomes; the bracket integrator treats that as zero.
    """
    deduction = rule.enhanced_deduction
    if rule.employer_share_deductible:
        deduction += contributions.total / 2
    return income - deduction


def insurance_premium(income: D, rule: InsuranceRule, enabled: bool = True) -> D:
    if not enabled:
        return ZERO
    insurable = max(ZERO, min(income, rule.max_insurable))
    return min(insurable * rule.rate, rule.maximum)


EMPLOYEE_CPP_2024 = ContributionRule(
    base=ContributionTier(
        floor=limits_2024.CPP_BASIC_EXEMPTION,
        ceiling=limits_2024.CPP_YMPE,
        rate=limits_2024.CPP_RATE,
        maximum=limits_2024.CPP_MAX_EMPLOYEE,
    ),
    second=ContributionTier(
        floor=limits_2024.CPP_YMPE,
        ceiling=limits_2024.CPP_YAMPE,
        rate=limits_2024.CPP2_RATE,
        maximum=limits_2024.CPP2_MAX_EMPLOYEE,
    ),
    enhanced_deduction=limits_2024.CPP_ENHANCED_DEDUCTION,
)

SELF_EMPLOYED_CPP_2024 = ContributionRule(
    base=ContributionTier(
        floor=limits_2024.CPP_BASIC_EXEMPTION,
        ceiling=limits_2024.CPP_YMPE,
        rate=limits_2024.CPP_RATE_SELF_EMPLOYED,
        maximum=limits_2024.CPP_MAX_SELF_EMPLOYED,
    ),
    second=ContributionTier(
        floor=limits_2024.CPP_YMPE,
        ceiling=limits_2024.CPP_YAMPE,
        rate=limits_2024.CPP2_RATE_SELF_EMPLOYED,
        maximum=limits_2024.CPP2_MAX_SELF_EMPLOYED,
    ),
    enhanced_deduction=limits_2024.CPP_ENHANCED_DEDUCTION,
    employer_share_deductible=True,
)

EI_2024 = InsuranceRule(
    rate=limits_2024.EI_RATE_EMP,
    max_insurable=limits_2024.EI_MIE,
    maximum=limits_2024.EI_MAX_EMPLOYEE,
)


__all__ = [
    "EI_2024",
    "EMPLOYEE_CPP_2024",
    "SELF_EMPLOYED_CPP_2024",
    "ContributionResult",
    "ContributionRule",
    "ContributionTier",
    "InsuranceRule",
    "compute_contributions",
    "insurance_premium",
    "taxable_income",
]
