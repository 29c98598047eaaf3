from __future__ import annotations

from decimal import Decimal

from taxcompare.core.brackets import TaxBracket

D = Decimal

# ------------------------------ 2024 ---------------------------------
MB_BRACKETS_2024 = (
    TaxBracket(D("0"),       D("47000"),  D("0.108")),
    TaxBracket(D("47000"),   D("100000"), D("0.1275")),
    TaxBracket(D("100000"),  None,        D("0.174")),
)

MB_NRTC_RATE_2024 = D("0.108")
MB_BPA_2024 = D("15000")
