# models/bonus_models.py
from sqlalchemy import Column, String, Date, DateTime, Numeric, CheckConstraint
from sqlalchemy.sql import func
from database import Base

BONUS_TYPES = ("Performance", "Festival", "Project Completion", "Retention", "Referral")

BONUS_ID_PREFIX = "BON"


def _bonus_type_check():
    allowed = ", ".join(f"'{t}'" for t in BONUS_TYPES)
    return CheckConstraint(f"bonus_type IN ({allowed})", name="bonuses_bonus_type_check")


class Bonus(Base):
    """One bonus award to an employee"""
    __tablename__ = "bonuses"
    __table_args__ = (_bonus_type_check(),)

    bonus_id = Column(String(10), primary_key=True, comment="BON + 4 digits, generated")
    employee_id = Column(String(7), nullable=False, comment="ATS0XXX")
    employee_name = Column(String(40), nullable=False)
    employee_email = Column(String(40), nullable=False, comment="@astrolitetech.com")
    bonus_type = Column(String(20), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    month_year = Column(Date, nullable=False, comment="First day of the bonus month")
    reason = Column(String(200), nullable=True)

    created_at = Column(DateTime, nullable=False, server_default=func.now())
