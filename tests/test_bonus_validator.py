from datetime import date
from decimal import Decimal

import pytest

from services.bonus_validator import (
    MSG_AMOUNT,
    MSG_AMOUNT_RANGE,
    MSG_BONUS_TYPE,
    MSG_EMPLOYEE_EMAIL,
    MSG_EMPLOYEE_ID,
    MSG_EMPLOYEE_NAME,
    MSG_MONTH_YEAR,
    MSG_REASON,
    parse_amount,
    parse_month_year,
    validate_bonus_data,
)


def test_valid_payload_has_no_errors(valid_payload):
    assert validate_bonus_data(valid_payload) == []


@pytest.mark.parametrize("bonus_type", [
    "Performance", "Festival", "Project Completion", "Retention", "Referral",
])
def test_every_bonus_type_is_accepted(valid_payload, bonus_type):
    valid_payload["bonus_type"] = bonus_type
    assert validate_bonus_data(valid_payload) == []


def test_reason_is_optional(valid_payload):
    del valid_payload["reason"]
    assert validate_bonus_data(valid_payload) == []
    valid_payload["reason"] = None
    assert validate_bonus_data(valid_payload) == []


def test_email_domain_is_case_insensitive(valid_payload):
    valid_payload["employee_email"] = "Priya.Sharma@AstroliteTech.COM"
    assert validate_bonus_data(valid_payload) == []


def test_numeric_string_amount_is_accepted(valid_payload):
    valid_payload["amount"] = "2500.50"
    assert validate_bonus_data(valid_payload) == []


@pytest.mark.parametrize("field,value,message", [
    ("employee_id", "ATS0000", MSG_EMPLOYEE_ID),
    ("employee_id", "ATS1123", MSG_EMPLOYEE_ID),
    ("employee_id", "ATS01234", MSG_EMPLOYEE_ID),
    ("employee_id", "ats0123", MSG_EMPLOYEE_ID),
    ("employee_id", None, MSG_EMPLOYEE_ID),
    ("employee_name", "Al", MSG_EMPLOYEE_NAME),
    ("employee_name", "A" * 41, MSG_EMPLOYEE_NAME),
    ("employee_name", "Priya  Sharma", MSG_EMPLOYEE_NAME),
    ("employee_name", "Priya Sharma2", MSG_EMPLOYEE_NAME),
    ("employee_name", " Priya", MSG_EMPLOYEE_NAME),
    ("employee_email", "priya@gmail.com", MSG_EMPLOYEE_EMAIL),
    ("employee_email", "priya@astrolitetech.com.evil", MSG_EMPLOYEE_EMAIL),
    ("employee_email", "@astrolitetech.com", MSG_EMPLOYEE_EMAIL),
    ("employee_email", "a" * 30 + "@astrolitetech.com", MSG_EMPLOYEE_EMAIL),
    ("bonus_type", "performance", MSG_BONUS_TYPE),
    ("bonus_type", "Spot Award", MSG_BONUS_TYPE),
    ("amount", 0, MSG_AMOUNT),
    ("amount", -10, MSG_AMOUNT),
    ("amount", "abc", MSG_AMOUNT),
    ("amount", "", MSG_AMOUNT),
    ("amount", None, MSG_AMOUNT),
    ("amount", True, MSG_AMOUNT),
    ("amount", "NaN", MSG_AMOUNT),
    ("amount", "Infinity", MSG_AMOUNT),
    ("amount", "10.005", MSG_AMOUNT_RANGE),
    ("amount", 100000000, MSG_AMOUNT_RANGE),
    ("month_year", "", MSG_MONTH_YEAR),
    ("month_year", None, MSG_MONTH_YEAR),
    ("month_year", "Smarch 2025", MSG_MONTH_YEAR),
    ("month_year", "2025-01", MSG_MONTH_YEAR),
    ("reason", "x" * 201, MSG_REASON),
])
def test_single_violation_reports_one_message(valid_payload, field, value, message):
    valid_payload[field] = value
    assert validate_bonus_data(valid_payload) == [message]


def test_missing_fields_report_in_field_order():
    errors = validate_bonus_data({"reason": "y" * 250})
    assert errors == [
        MSG_EMPLOYEE_ID,
        MSG_EMPLOYEE_NAME,
        MSG_EMPLOYEE_EMAIL,
        MSG_BONUS_TYPE,
        MSG_AMOUNT,
        MSG_MONTH_YEAR,
        MSG_REASON,
    ]


def test_multiple_violations_all_reported(valid_payload):
    valid_payload["employee_id"] = "ATS0000"
    valid_payload["amount"] = -1
    assert validate_bonus_data(valid_payload) == [MSG_EMPLOYEE_ID, MSG_AMOUNT]


def test_reason_at_limit_is_valid(valid_payload):
    valid_payload["reason"] = "x" * 200
    assert validate_bonus_data(valid_payload) == []


@pytest.mark.parametrize("value,expected", [
    ("January 2025", date(2025, 1, 1)),
    ("Dec 2024", date(2024, 12, 1)),
    ("  march   2023 ", date(2023, 3, 1)),
])
def test_parse_month_year(value, expected):
    assert parse_month_year(value) == expected


def test_parse_month_year_rejects_non_strings():
    assert parse_month_year(202501) is None


def test_parse_amount():
    assert parse_amount(5000) == Decimal("5000")
    assert parse_amount(" 12.5 ") == Decimal("12.5")
    assert parse_amount([1]) is None
