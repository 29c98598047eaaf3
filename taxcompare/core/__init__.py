from __future__ import annotations

from taxcompare.core.brackets import (
    BracketDetail,
    BracketScheduleError,
    LineItem,
    TaxBracket,
    integrate,
    validate_brackets,
)
from taxcompare.core.contributions import ContributionResult, compute_contributions
from taxcompare.core.credits import FixedCredit, PhasedCredit, apply_credits
from taxcompare.core.jurisdiction import (
    DEFAULT_JURISDICTION,
    EmploymentStatus,
    Jurisdiction,
    UnknownJurisdictionError,
    get_jurisdiction,
    list_jurisdictions,
)
from taxcompare.core.scenarios import (
    ComparisonResult,
    CorporateResult,
    ScenarioOptions,
    ScenarioResult,
    TaxEngine,
    build_engine,
    compare,
)

__all__ = [
    "DEFAULT_JURISDICTION",
    "BracketDetail",
    "BracketScheduleError",
    "ComparisonResult",
    "ContributionResult",
    "CorporateResult",
    "EmploymentStatus",
    "FixedCredit",
    "Jurisdiction",
    "LineItem",
    "PhasedCredit",
    "ScenarioOptions",
    "ScenarioResult",
    "TaxBracket",
    "TaxEngine",
    "UnknownJurisdictionError",
    "apply_credits",
    "build_engine",
    "compare",
    "compute_contributions",
    "get_jurisdiction",
    "integrate",
    "list_jurisdictions",
    "validate_brackets",
]
