import pytest

from services.bonus_id import BonusIdExhaustedError, next_bonus_id


@pytest.mark.parametrize("last_id,expected", [
    (None, "BON0001"),
    ("", "BON0001"),
    ("BON0001", "BON0002"),
    ("BON0042", "BON0043"),
    ("BON0999", "BON1000"),
    ("BON9998", "BON9999"),
])
def test_next_bonus_id(last_id, expected):
    assert next_bonus_id(last_id) == expected


def test_refuses_to_overflow_fixed_width():
    with pytest.raises(BonusIdExhaustedError):
        next_bonus_id("BON9999")


@pytest.mark.parametrize("last_id", ["XYZ0001", "BONabcd", "BON"])
def test_malformed_last_id(last_id):
    with pytest.raises(ValueError):
        next_bonus_id(last_id)
