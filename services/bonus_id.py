# services/bonus_id.py
from typing import Optional

from models.bonus_models import BONUS_ID_PREFIX

BONUS_ID_DIGITS = 4
BONUS_ID_MAX = 10 ** BONUS_ID_DIGITS - 1
FIRST_BONUS_ID = f"{BONUS_ID_PREFIX}{1:0{BONUS_ID_DIGITS}d}"


class BonusIdExhaustedError(RuntimeError):
    """No identifier left in the fixed-width BON0001..BON9999 range"""


def next_bonus_id(last_id: Optional[str]) -> str:
    """
    Identifier following last_id, e.g. BON0042 -> BON0043.

    last_id is the greatest stored bonus_id; the zero padding makes the
    lexicographic maximum equal the numeric one. None yields BON0001.
    """
    if not last_id:
        return FIRST_BONUS_ID

    suffix = last_id[len(BONUS_ID_PREFIX):] if last_id.startswith(BONUS_ID_PREFIX) else ""
    if not suffix.isdigit():
        raise ValueError(f"Malformed bonus ID: {last_id!r}")

    number = int(suffix) + 1
    if number > BONUS_ID_MAX:
        raise BonusIdExhaustedError(
            f"Bonus ID space exhausted: {last_id} is the last available ID"
        )
    return f"{BONUS_ID_PREFIX}{number:0{BONUS_ID_DIGITS}d}"
