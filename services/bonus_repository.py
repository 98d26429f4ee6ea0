# services/bonus_repository.py
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import desc, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from models.bonus_models import Bonus
from schemas.bonus_schemas import HistoryFilters
from services.bonus_id import next_bonus_id
from services.bonus_validator import parse_amount, parse_month_year
from services.history_query import build_history_query

logger = logging.getLogger(__name__)


class BonusStorageError(Exception):
    """Database failure while reading or writing bonuses"""


def describe_db_error(e: SQLAlchemyError) -> str:
    # DBAPIError keeps the driver exception in .orig, its text is the useful part
    orig = getattr(e, "orig", None)
    return str(orig) if orig is not None else str(e)


class BonusRepository:
    """Bonus storage on one AsyncSession"""

    # read max -> insert next can collide with a concurrent request
    max_insert_attempts = 3

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_last_bonus_id(self) -> Optional[str]:
        result = await self.db.execute(
            select(Bonus.bonus_id).order_by(desc(Bonus.bonus_id)).limit(1)
        )
        return result.scalar_one_or_none()

    async def _bonus_id_taken(self, bonus_id: str) -> bool:
        result = await self.db.execute(
            select(Bonus.bonus_id).where(Bonus.bonus_id == bonus_id)
        )
        return result.scalar_one_or_none() is not None

    async def create_bonus(self, data: Dict[str, Any]) -> Bonus:
        """
        Insert an already validated payload under the next free bonus ID.

        A primary key conflict means another request took the ID first; the
        ID is recomputed and the insert retried. Raises BonusStorageError on
        any other database failure and BonusIdExhaustedError past BON9999.
        """
        month_year = parse_month_year(data.get("month_year"))
        amount = parse_amount(data.get("amount"))

        try:
            for attempt in range(1, self.max_insert_attempts + 1):
                last_id = await self.get_last_bonus_id()
                try:
                    bonus_id = next_bonus_id(last_id)
                except ValueError as e:
                    raise BonusStorageError(str(e)) from e
                bonus = Bonus(
                    bonus_id=bonus_id,
                    employee_id=data["employee_id"],
                    employee_name=data["employee_name"],
                    employee_email=data["employee_email"],
                    bonus_type=data["bonus_type"],
                    amount=amount,
                    month_year=month_year,
                    reason=data.get("reason") or None,
                )
                self.db.add(bonus)
                try:
                    await self.db.commit()
                except IntegrityError as e:
                    await self.db.rollback()
                    if attempt < self.max_insert_attempts and await self._bonus_id_taken(bonus_id):
                        logger.warning(
                            f"Bonus ID {bonus_id} taken concurrently "
                            f"(attempt {attempt}/{self.max_insert_attempts}), retrying"
                        )
                        continue
                    raise BonusStorageError(describe_db_error(e)) from e

                await self.db.refresh(bonus)
                logger.info(f"Created bonus {bonus.bonus_id} for {bonus.employee_id}")
                return bonus
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise BonusStorageError(describe_db_error(e)) from e

        raise BonusStorageError(
            f"Could not allocate a bonus ID after {self.max_insert_attempts} attempts"
        )

    async def get_history(self, filters: HistoryFilters) -> List[Bonus]:
        try:
            result = await self.db.execute(build_history_query(filters))
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise BonusStorageError(describe_db_error(e)) from e
        return list(result.scalars().all())
