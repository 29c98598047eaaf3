from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Dict, List

from taxcompare.core.brackets import TaxBracket, validate_brackets
from taxcompare.core.contributions import (
    EI_2024,
    EMPLOYEE_CPP_2024,
    SELF_EMPLOYED_CPP_2024,
    ContributionRule,
    InsuranceRule,
)
from taxcompare.core.credits import CreditRule, FixedCredit, PhasedCredit
from taxcompare.core.payroll.limits_2024 import CPP_BASE_CREDIT_AMOUNT
from taxcompare.core.provinces import mb
from taxcompare.core.tax_years.y2024 import corporate, federal

D = Decimal


class EmploymentStatus(str, Enum):
    EMPLOYEE = "employee"
    SELF_EMPLOYED = "self_employed"

    @classmethod
    def from_flag(cls, self_employed: bool) -> "EmploymentStatus":
        return cls.SELF_EMPLOYED if self_employed else cls.EMPLOYEE


class UnknownJurisdictionError(KeyError):
    pass


@dataclass(frozen=True)
class StatusRules:
    """Contribution and credit variants that apply to one employment status."""

    contribution: ContributionRule
    federal_credits: tuple[CreditRule, ...]
    provincial_credits: tuple[CreditRule, ...]


@dataclass(frozen=True)
class Jurisdiction:
    code: str
    name: str
    tax_year: int
    federal_brackets: tuple[TaxBracket, ...]
    provincial_brackets: tuple[TaxBracket, ...]
    employee: StatusRules
    self_employed: StatusRules
    insurance: InsuranceRule
    small_business_rate: D
    federal_label: str = "Federal"
    provincial_label: str = "Provincial"

    def __post_init__(self) -> None:
        validate_brackets(self.federal_brackets)
        validate_brackets(self.provincial_brackets)

    def rules_for(self, status: EmploymentStatus) -> StatusRules:
        if status is EmploymentStatus.SELF_EMPLOYED:
            return self.self_employed
        return self.employee


_FEDERAL_BPA_2024 = PhasedCredit(
    label="Federal basic personal amount credit",
    full_amount=federal.BPA_FULL_2024,
    floor_amount=federal.BPA_FLOOR_2024,
    phase_start=federal.BPA_PHASE_START_2024,
    phase_end=federal.BPA_PHASE_END_2024,
    rate=federal.NRTC_RATE_2024,
)
_FEDERAL_EMPLOYMENT_2024 = FixedCredit(
    label="Canada employment amount credit",
    amount=federal.CANADA_EMPLOYMENT_AMOUNT_2024,
    rate=federal.NRTC_RATE_2024,
)
_FEDERAL_CPP_2024 = FixedCredit(
    label="CPP base contributions credit",
    amount=CPP_BASE_CREDIT_AMOUNT,
    rate=federal.NRTC_RATE_2024,
)
_MB_BPA_2024 = FixedCredit(
    label="Manitoba basic personal amount credit",
    amount=mb.MB_BPA_2024,
    rate=mb.MB_NRTC_RATE_2024,
)
_MB_CPP_2024 = FixedCredit(
    label="CPP base contributions credit",
    amount=CPP_BASE_CREDIT_AMOUNT,
    rate=mb.MB_NRTC_RATE_2024,
)

MANITOBA_2024 = Jurisdiction(
    code="MB-2024",
    name="Manitoba",
    tax_year=2024,
    federal_brackets=federal.FEDERAL_BRACKETS_2024,
    provincial_brackets=mb.MB_BRACKETS_2024,
    employee=StatusRules(
        contribution=EMPLOYEE_CPP_2024,
        federal_credits=(_FEDERAL_BPA_2024, _FEDERAL_EMPLOYMENT_2024, _FEDERAL_CPP_2024),
        provincial_credits=(_MB_BPA_2024, _MB_CPP_2024),
    ),
    self_employed=StatusRules(
        contribution=SELF_EMPLOYED_CPP_2024,
        federal_credits=(_FEDERAL_BPA_2024, _FEDERAL_CPP_2024),
        provincial_credits=(_MB_BPA_2024, _MB_CPP_2024),
    ),
    insurance=EI_2024,
    small_business_rate=corporate.SMALL_BUSINESS_RATE_2024,
    federal_label="Federal",
    provincial_label="Manitoba",
)

DEFAULT_JURISDICTION = MANITOBA_2024.code

_REGISTRY: Dict[str, Jurisdiction] = {MANITOBA_2024.code: MANITOBA_2024}


def get_jurisdiction(code: str | None = None) -> Jurisdiction:
    key = (code or DEFAULT_JURISDICTION).upper()
    try:
        return _REGISTRY[key]
    except KeyError as exc:
        raise UnknownJurisdictionError(f"No tax tables registered for jurisdiction {key}") from exc


def list_jurisdictions() -> List[str]:
    return sorted(_REGISTRY)


__all__ = [
    "DEFAULT_JURISDICTION",
    "MANITOBA_2024",
    "EmploymentStatus",
    "Jurisdiction",
    "StatusRules",
    "UnknownJurisdictionError",
    "get_jurisdiction",
    "list_jurisdictions",
]
