# routers/bonus.py
import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Query, status
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from database import get_db
from schemas.bonus_schemas import (
    BonusCreateResponse,
    BonusHistoryItem,
    BonusResponse,
    ErrorResponse,
    HistoryFilters,
)
from services.bonus_id import BonusIdExhaustedError
from services.bonus_repository import BonusRepository, BonusStorageError
from services.bonus_validator import validate_bonus_data
from utils.response_helper import response_error

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/bonus", tags=["Bonus"])


def get_bonus_repository(db: AsyncSession = Depends(get_db)) -> BonusRepository:
    return BonusRepository(db)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=BonusCreateResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def create_bonus(
    body: Optional[Any] = Body(None),
    repo: BonusRepository = Depends(get_bonus_repository)
):
    """Validate the payload, allocate the next BONxxxx ID and store the bonus"""
    # A missing, null or non-object body is validated as an empty payload
    payload: Dict[str, Any] = body if isinstance(body, dict) else {}
    errors = validate_bonus_data(payload)
    if errors:
        logger.info(f"Rejected bonus for {payload.get('employee_id')!r}: {errors}")
        return response_error(status.HTTP_400_BAD_REQUEST, ", ".join(errors))

    try:
        bonus = await repo.create_bonus(payload)
    except (BonusStorageError, BonusIdExhaustedError) as e:
        logger.error(f"Error creating bonus: {str(e)}")
        return response_error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            f"Failed to create bonus: {str(e)}"
        )

    return BonusCreateResponse(
        message="Bonus created successfully",
        bonus=BonusResponse.model_validate(bonus)
    )


@router.get(
    "/history",
    response_model=List[BonusHistoryItem],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def get_bonus_history(
    employee_id: Optional[str] = Query(None),
    month: Optional[str] = Query(None),
    year: Optional[str] = Query(None),
    end_month: Optional[str] = Query(None),
    end_year: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    repo: BonusRepository = Depends(get_bonus_repository)
):
    """
    Bonus history, newest first.
    - month + year: from that month and year onwards
    - end_month + end_year: up to that month and year
    - year alone: that year only
    - search: substring of employee ID or name
    """
    try:
        filters = HistoryFilters(
            employee_id=employee_id,
            month=month,
            year=year,
            end_month=end_month,
            end_year=end_year,
            search=search,
        )
    except ValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors())
        return response_error(
            status.HTTP_400_BAD_REQUEST,
            f"Invalid history filter: {fields}"
        )

    try:
        rows = await repo.get_history(filters)
    except BonusStorageError as e:
        logger.error(f"Error fetching bonus history: {str(e)}")
        return response_error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            f"Failed to fetch bonus history: {str(e)}"
        )

    logger.info(f"Retrieved {len(rows)} bonus records")
    return [BonusHistoryItem.from_row(row) for row in rows]
