from decimal import Decimal

D = Decimal

# Combined federal + Manitoba rate on active business income under the SBD limit.
SMALL_BUSINESS_RATE_2024 = D("0.11")
