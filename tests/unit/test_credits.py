from decimal import Decimal as D

import hypothesis.strategies as st
import pytest
from hypothesis import given

from taxcompare.core.brackets import integrate
from taxcompare.core.credits import FixedCredit, PhasedCredit, apply_credits, phased_amount
from taxcompare.core.jurisdiction import MANITOBA_2024, EmploymentStatus
from taxcompare.core.tax_years.y2024.federal import (
    BPA_FLOOR_2024,
    BPA_FULL_2024,
    BPA_PHASE_END_2024,
    BPA_PHASE_START_2024,
    FEDERAL_BRACKETS_2024,
)

EPSILON = D("0.01")


def _bpa(income: D) -> D:
    return phased_amount(income, BPA_FULL_2024, BPA_FLOOR_2024, BPA_PHASE_START_2024, BPA_PHASE_END_2024)


def test_bpa_full_and_floor():
    assert _bpa(D("0")) == D("15705")
    assert _bpa(BPA_PHASE_START_2024) == D("15705")
    assert _bpa(BPA_PHASE_END_2024) == D("14156")
    assert _bpa(D("1000000")) == D("14156")


def test_bpa_midpoint_is_exact():
    midpoint = (BPA_PHASE_START_2024 + BPA_PHASE_END_2024) / 2
    assert _bpa(midpoint) == D("14930.5")


def test_bpa_is_continuous_at_both_ends():
    assert abs(_bpa(BPA_PHASE_START_2024 - EPSILON) - BPA_FULL_2024) < EPSILON
    assert abs(_bpa(BPA_PHASE_START_2024 + EPSILON) - BPA_FULL_2024) < EPSILON
    assert abs(_bpa(BPA_PHASE_END_2024 - EPSILON) - BPA_FLOOR_2024) < EPSILON
    assert abs(_bpa(BPA_PHASE_END_2024 + EPSILON) - BPA_FLOOR_2024) < EPSILON


@given(st.decimals(min_value=173205, max_value=246752, places=2, allow_nan=False, allow_infinity=False))
def test_bpa_is_linear_inside_phase_out(income):
    expected = BPA_FULL_2024 - (income - BPA_PHASE_START_2024) / (BPA_PHASE_END_2024 - BPA_PHASE_START_2024) * (
        BPA_FULL_2024 - BPA_FLOOR_2024
    )
    assert abs(_bpa(income) - expected) < D("0.000001")
    assert BPA_FLOOR_2024 <= _bpa(income) <= BPA_FULL_2024


def test_phased_credit_uses_reference_income():
    rule = PhasedCredit(
        label="BPA",
        full_amount=D("1000"),
        floor_amount=D("500"),
        phase_start=D("100"),
        phase_end=D("200"),
        rate=D("0.1"),
    )
    assert rule.amount_for(D("150")) == D("750")
    assert FixedCredit(label="Flat", amount=D("42"), rate=D("0.1")).amount_for(D("1e9")) == D("42")


def test_credits_append_in_fixed_order():
    rules = MANITOBA_2024.rules_for(EmploymentStatus.EMPLOYEE).federal_credits
    detail = apply_credits(integrate(D("100000"), FEDERAL_BRACKETS_2024), D("100000"), rules)
    labels = [line.label for line in detail.breakdown]
    assert labels == [
        "$0 - $55,867",
        "$55,867 - $111,733",
        "Federal basic personal amount credit",
        "Canada employment amount credit",
        "CPP base contributions credit",
    ]
    credits = detail.credit_lines
    assert credits[0].amount == D("15705")
    assert credits[0].tax == D("-2355.75")
    assert credits[1].tax == D("-214.95")
    assert credits[2].tax == D("-482.625")
    assert all(line.is_credit for line in credits)


def test_self_employed_credits_skip_employment_amount():
    rules = MANITOBA_2024.rules_for(EmploymentStatus.SELF_EMPLOYED).federal_credits
    detail = apply_credits(integrate(D("100000"), FEDERAL_BRACKETS_2024), D("100000"), rules)
    assert [line.label for line in detail.credit_lines] == [
        "Federal basic personal amount credit",
        "CPP base contributions credit",
    ]


def test_apply_credits_reduces_total_and_leaves_input_untouched():
    before = integrate(D("100000"), FEDERAL_BRACKETS_2024)
    rules = MANITOBA_2024.rules_for(EmploymentStatus.EMPLOYEE).federal_credits
    after = apply_credits(before, D("100000"), rules)
    assert after.total == before.total - D("2355.75") - D("214.95") - D("482.625")
    assert len(before.breakdown) == 2
    assert after.bracket_lines == before.breakdown


def test_credits_never_make_tax_negative():
    rules = MANITOBA_2024.rules_for(EmploymentStatus.EMPLOYEE).federal_credits
    detail = apply_credits(integrate(D("10000"), FEDERAL_BRACKETS_2024), D("10000"), rules)
    assert detail.total == D("0")
    assert len(detail.credit_lines) == 3


@given(st.decimals(min_value=-100_000, max_value=2_000_000, places=2, allow_nan=False, allow_infinity=False))
def test_credited_total_is_never_negative(income):
    for status in EmploymentStatus:
        rules = MANITOBA_2024.rules_for(status)
        federal = apply_credits(integrate(income, MANITOBA_2024.federal_brackets), income, rules.federal_credits)
        provincial = apply_credits(
            integrate(income, MANITOBA_2024.provincial_brackets), income, rules.provincial_credits
        )
        assert federal.total >= 0
        assert provincial.total >= 0


@pytest.mark.parametrize("status", list(EmploymentStatus))
def test_provincial_credits(status):
    rules = MANITOBA_2024.rules_for(status).provincial_credits
    assert [rule.label for rule in rules] == [
        "Manitoba basic personal amount credit",
        "CPP base contributions credit",
    ]
    assert rules[0].amount_for(D("500000")) * rules[0].rate == D("1620.000")
    assert rules[1].amount_for(D("0")) * rules[1].rate == D("347.49")
