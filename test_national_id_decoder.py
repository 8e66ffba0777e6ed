"""
Tests for the national ID decoder and the governorate table.

Usage:
    pytest test_national_id_decoder.py
"""

from datetime import date

import pytest

from features.idcard.domain.entities import DecodedNationalId
from features.idcard.infrastructure.national_id_decoder import (
    GOVERNORATES,
    decode_national_id,
    get_all_governorates,
    get_governorate_from_code,
)


TODAY = date(2025, 6, 1)


def make_id(century_year_month_day: str, governorate: str = "01", sex: str = "5") -> str:
    """Assemble a 14-digit ID: CYYMMDD + GG + serial 234 + sex digit + check digit 7."""
    return century_year_month_day + governorate + "234" + sex + "7"


def test_decode_valid_1990s_id():
    decoded = decode_national_id("29005091234567", today=TODAY)
    assert decoded == DecodedNationalId(
        national_id="29005091234567",
        birth_date="1990-05-09",
        century="1900-1999",
        gender="female",  # digit 12 is 6
        governorate="الدقهلية",  # code 12
        is_valid=True,
    )


def test_decode_valid_2000s_id():
    decoded = decode_national_id(make_id("3050101", governorate="21"), today=TODAY)
    assert decoded.is_valid
    assert decoded.birth_date == "2005-01-01"
    assert decoded.century == "2000-2099"
    assert decoded.governorate == "الجيزة"


def test_century_one_is_always_invalid():
    # structurally fine, but 1800s years never pass the 1900 lower bound
    decoded = decode_national_id("19005091234567", today=TODAY)
    assert decoded.is_valid is False
    assert decoded.national_id == "19005091234567"
    assert decoded.birth_date is None
    assert decoded.century is None
    assert decoded.gender is None
    assert decoded.governorate is None


def test_future_birth_year_is_invalid():
    assert not decode_national_id(make_id("3990101"), today=TODAY).is_valid
    assert decode_national_id(make_id("3250101"), today=TODAY).is_valid
    assert not decode_national_id(make_id("3260101"), today=TODAY).is_valid


@pytest.mark.parametrize("national_id", [
    "49005091234567",  # century digit
    "29013091234567",  # month 13
    "29000091234567",  # month 00
    "29005001234567",  # day 00
    "29005321234567",  # day 32
])
def test_out_of_range_fields_are_invalid(national_id):
    decoded = decode_national_id(national_id, today=TODAY)
    assert decoded == DecodedNationalId(national_id=national_id)


@pytest.mark.parametrize("national_id", [
    "", "123", "2900509123456", "2900509123456a", "290050912345678",
    "29005091234567\n",  # trailing newline is not part of a 14-digit ID
])
def test_malformed_input_never_raises(national_id):
    assert decode_national_id(national_id, today=TODAY) == DecodedNationalId()


def test_governorate_lookup():
    cairo = decode_national_id(make_id("2900509", governorate="01"), today=TODAY)
    assert cairo.governorate == "القاهرة"
    assert cairo.is_valid

    unknown = decode_national_id(make_id("2900509", governorate="99"), today=TODAY)
    assert unknown.governorate is None
    assert unknown.is_valid


def test_sex_digit_parity():
    assert decode_national_id(make_id("2900509", sex="7"), today=TODAY).gender == "male"
    assert decode_national_id(make_id("2900509", sex="8"), today=TODAY).gender == "female"
    assert decode_national_id(make_id("2900509", sex="0"), today=TODAY).gender == "female"


def test_day_is_not_checked_against_month_length():
    decoded = decode_national_id(make_id("2900231"), today=TODAY)
    assert decoded.is_valid
    assert decoded.birth_date == "1990-02-31"


def test_decode_is_pure():
    first = decode_national_id("29005091234567")
    second = decode_national_id("29005091234567")
    assert first == second


def test_governorate_table():
    assert len(GOVERNORATES) == 28
    assert get_governorate_from_code("01") == "القاهرة"
    assert get_governorate_from_code("88") == "خارج مصر"
    assert get_governorate_from_code("99") is None
    assert get_all_governorates()[0] == "القاهرة"
    assert get_all_governorates()[-1] == "خارج مصر"
