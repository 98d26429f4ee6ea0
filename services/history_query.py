# services/history_query.py
from typing import List

from sqlalchemy import and_, desc, extract, or_, select
from sqlalchemy.sql import Select
from sqlalchemy.sql.elements import ColumnElement

from models.bonus_models import Bonus
from schemas.bonus_schemas import HistoryFilters


def history_filters(filters: HistoryFilters) -> List[ColumnElement]:
    """
    Active WHERE predicates for a history request, values bound as parameters.

    Month and year bounds are compared field by field: month=3&year=2024 keeps
    rows with month >= 3 and year >= 2024, so February 2025 is excluded.
    A year without month is an exact year match, applied only when no end
    range is given.
    """
    month_col = extract("month", Bonus.month_year)
    year_col = extract("year", Bonus.month_year)
    clauses = []

    if filters.employee_id:
        clauses.append(Bonus.employee_id == filters.employee_id)

    if filters.month is not None and filters.year is not None:
        clauses.append(month_col >= filters.month)
        clauses.append(year_col >= filters.year)

    if filters.end_month is not None and filters.end_year is not None:
        clauses.append(month_col <= filters.end_month)
        clauses.append(year_col <= filters.end_year)
    elif filters.year is not None and filters.month is None:
        clauses.append(year_col == filters.year)

    if filters.search:
        clauses.append(or_(
            Bonus.employee_id.contains(filters.search, autoescape=True),
            Bonus.employee_name.contains(filters.search, autoescape=True),
        ))

    return clauses


def build_history_query(filters: HistoryFilters) -> Select:
    """Select matching bonuses, newest first (bonus_id breaks ties)"""
    query = select(Bonus)
    clauses = history_filters(filters)
    if clauses:
        query = query.where(and_(*clauses))
    return query.order_by(desc(Bonus.created_at), desc(Bonus.bonus_id))
