from decimal import Decimal

import pytest

from taxcompare.ui.fields import (
    FIELD_METADATA,
    digits_only,
    format_input_currency,
    parse_bool,
    parse_currency_input,
    reformat_with_cursor,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("200000", Decimal("200000")),
        ("$200,000", Decimal("200000")),
        (" 1 000 ", Decimal("1000")),
        ("abc", Decimal("0")),
        ("-500", Decimal("500")),
    ],
)
def test_parse_currency_input(text, expected):
    assert parse_currency_input(text) == expected


def test_blank_field_uses_default():
    assert parse_currency_input(None) == Decimal("0")
    assert parse_currency_input("   ", default=Decimal("100000")) == Decimal("100000")
    assert parse_currency_input("", default=None) is None


def test_digits_only():
    assert digits_only("$1,2a3") == "123"
    assert digits_only(None) == ""


def test_format_input_currency():
    assert format_input_currency("1234567") == "$1,234,567"
    assert format_input_currency("$55,867") == "$55,867"
    assert format_input_currency("no digits") == ""


def test_reformat_keeps_cursor_next_to_digit():
    assert reformat_with_cursor("12345", 5) == ("$12,345", 7)
    assert reformat_with_cursor("1000000") == ("$1,000,000", 10)
    assert reformat_with_cursor("$1,0000", 7) == ("$10,000", 7)


def test_reformat_clears_field_without_digits():
    assert reformat_with_cursor("$", 1) == ("", 0)


def test_reformat_cursor_never_negative():
    assert reformat_with_cursor("$1,,,,,,2", 0) == ("$12", 0)


@pytest.mark.parametrize("raw", ["y", "Yes", "TRUE", "1", "on"])
def test_parse_bool_true(raw):
    assert parse_bool(raw) is True


@pytest.mark.parametrize("raw", ["n", "No", "false", "0", "off", ""])
def test_parse_bool_false(raw):
    assert parse_bool(raw) is False


def test_parse_bool_rejects_other_text():
    with pytest.raises(ValueError, match="yes or no"):
        parse_bool("maybe")


def test_field_metadata_has_labels():
    assert set(FIELD_METADATA) == {"income", "expenses"}
    assert all(meta["label"] for meta in FIELD_METADATA.values())


def test_very_long_digit_strings_parse_exactly():
    digits = "1" * 5000
    assert parse_currency_input(digits) == Decimal(digits)
    assert format_input_currency("9" * 30) == "$" + ",".join(["999"] * 10)
