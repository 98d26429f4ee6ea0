# services/bonus_validator.py
import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

from models.bonus_models import BONUS_TYPES

EMPLOYEE_ID_RE = re.compile(r"ATS0[0-9]{3}")
EMPLOYEE_NAME_RE = re.compile(r"[a-zA-Z]+(?:\s[a-zA-Z]+)*")
EMPLOYEE_EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+-]+@astrolitetech\.com", re.IGNORECASE)

RESERVED_EMPLOYEE_ID = "ATS0000"
NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 40
EMAIL_MAX_LENGTH = 40
REASON_MAX_LENGTH = 200

# amount is stored as NUMERIC(10, 2)
AMOUNT_MAX = Decimal("100000000")
AMOUNT_SCALE = 2

MSG_EMPLOYEE_ID = "Invalid employee ID (format: ATS0XXX)"
MSG_EMPLOYEE_NAME = "Invalid employee name (letters, spaces, 3-40 chars)"
MSG_EMPLOYEE_EMAIL = "Invalid email format (must be @astrolitetech.com)"
MSG_BONUS_TYPE = "Invalid bonus type"
MSG_AMOUNT = "Amount must be a positive number"
MSG_AMOUNT_RANGE = "Amount must be below 100000000 with at most 2 decimal places"
MSG_MONTH_YEAR = "Invalid month/year format (e.g., January 2025)"
MSG_REASON = "Reason must be 200 characters or less"


def parse_month_year(value: Any) -> Optional[date]:
    """
    Parse 'January 2025' (or 'Jan 2025') into the first day of that month.

    Returns None when the value is missing or not a month name followed by a year.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    text = " ".join(value.split())
    for fmt in ("%B %Y", "%b %Y"):
        try:
            parsed = datetime.strptime(text, fmt)
        except ValueError:
            continue
        return date(parsed.year, parsed.month, 1)
    return None


def parse_amount(value: Any) -> Optional[Decimal]:
    """Numeric value of amount (number or numeric string), None if it is not a finite number"""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    if not isinstance(value, (int, float, str, Decimal)):
        return None
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        return None
    if not amount.is_finite():
        return None
    return amount


def _amount_error(value: Any) -> Optional[str]:
    amount = parse_amount(value)
    if amount is None or amount <= 0:
        return MSG_AMOUNT
    if amount >= AMOUNT_MAX or amount.as_tuple().exponent < -AMOUNT_SCALE:
        return MSG_AMOUNT_RANGE
    return None


def validate_bonus_data(data: Dict[str, Any]) -> List[str]:
    """
    Check a raw bonus payload and return every violation message, in field order.

    An empty list means the payload is valid.
    """
    errors = []

    employee_id = data.get("employee_id")
    if (not isinstance(employee_id, str)
            or not EMPLOYEE_ID_RE.fullmatch(employee_id)
            or employee_id == RESERVED_EMPLOYEE_ID):
        errors.append(MSG_EMPLOYEE_ID)

    name = data.get("employee_name")
    if (not isinstance(name, str)
            or not EMPLOYEE_NAME_RE.fullmatch(name)
            or not NAME_MIN_LENGTH <= len(name) <= NAME_MAX_LENGTH):
        errors.append(MSG_EMPLOYEE_NAME)

    email = data.get("employee_email")
    if (not isinstance(email, str)
            or not EMPLOYEE_EMAIL_RE.fullmatch(email)
            or len(email) > EMAIL_MAX_LENGTH):
        errors.append(MSG_EMPLOYEE_EMAIL)

    if data.get("bonus_type") not in BONUS_TYPES:
        errors.append(MSG_BONUS_TYPE)

    amount_error = _amount_error(data.get("amount"))
    if amount_error:
        errors.append(amount_error)

    if parse_month_year(data.get("month_year")) is None:
        errors.append(MSG_MONTH_YEAR)

    reason = data.get("reason")
    if reason is not None and (not isinstance(reason, str) or len(reason) > REASON_MAX_LENGTH):
        errors.append(MSG_REASON)

    return errors
