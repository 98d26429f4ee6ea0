# schemas/bonus_schemas.py
from pydantic import BaseModel, Field, validator
from typing import Optional
from datetime import date, datetime
from decimal import Decimal


class BonusResponse(BaseModel):
    """Full stored bonus row"""
    bonus_id: str
    employee_id: str
    employee_name: str
    employee_email: str
    bonus_type: str
    amount: Decimal
    month_year: date
    reason: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class BonusCreateResponse(BaseModel):
    message: str
    bonus: BonusResponse


class BonusHistoryItem(BaseModel):
    """History row, month_year rendered as 'January 2025'"""
    bonus_id: str
    employee_id: str
    employee_name: str
    employee_email: str
    bonus_type: str
    amount: Decimal
    month_year: str
    reason: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, bonus) -> "BonusHistoryItem":
        return cls(
            bonus_id=bonus.bonus_id,
            employee_id=bonus.employee_id,
            employee_name=bonus.employee_name,
            employee_email=bonus.employee_email,
            bonus_type=bonus.bonus_type,
            amount=bonus.amount,
            month_year=bonus.month_year.strftime("%B %Y"),
            reason=bonus.reason,
            created_at=bonus.created_at,
        )


class HistoryFilters(BaseModel):
    """Optional filters of GET /api/bonus/history"""
    employee_id: Optional[str] = Field(None, description="Exact employee ID")
    month: Optional[int] = Field(None, ge=1, le=12, description="Range start month")
    year: Optional[int] = Field(None, ge=1, le=9999, description="Range start year, or exact year alone")
    end_month: Optional[int] = Field(None, ge=1, le=12, description="Range end month")
    end_year: Optional[int] = Field(None, ge=1, le=9999, description="Range end year")
    search: Optional[str] = Field(None, description="Substring of employee ID or name")

    @validator('employee_id', 'month', 'year', 'end_month', 'end_year', 'search', pre=True)
    def blank_as_missing(cls, v):
        # Query strings like ?month=&year=2024 send empty values
        if isinstance(v, str) and not v.strip():
            return None
        return v


class ErrorResponse(BaseModel):
    error: str
