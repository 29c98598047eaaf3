from __future__ import annotations

from decimal import Decimal

from taxcompare.core.brackets import TaxBracket

D = Decimal

FEDERAL_BRACKETS_2024 = (
    TaxBracket(D("0"),       D("55867"),  D("0.15")),
    TaxBracket(D("55867"),   D("111733"), D("0.205")),
    TaxBracket(D("111733"),  D("173205"), D("0.26")),
    TaxBracket(D("173205"),  D("246752"), D("0.29")),
    TaxBracket(D("246752"),  None,        D("0.33")),
)

NRTC_RATE_2024 = D("0.15")

BPA_FULL_2024 = D("15705")
BPA_FLOOR_2024 = D("14156")
BPA_PHASE_START_2024 = D("173205")
BPA_PHASE_END_2024 = D("246752")

CANADA_EMPLOYMENT_AMOUNT_2024 = D("1433")
