"""
Shared pytest fixtures for the bonus API.

Database-backed tests run the real SQLAlchemy statements against an
in-memory SQLite database (aiosqlite); HTTP tests drive the FastAPI app
through httpx's ASGITransport with get_db overridden to that database.
"""
import os
import tempfile
from datetime import date, datetime
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Keep test log files out of the working tree
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="bonus-logs-"))

from database import get_db, init_database  # noqa: E402
from main import app  # noqa: E402
from models.bonus_models import Bonus  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def test_engine():
    """Fresh in-memory database with the bonuses table"""
    engine = create_async_engine(TEST_DATABASE_URL, poolclass=StaticPool)
    await init_database(engine, max_retries=1, retry_delay=0)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory):
    """HTTP client against the app, backed by the test database"""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def valid_payload():
    return {
        "employee_id": "ATS0123",
        "employee_name": "Priya Sharma",
        "employee_email": "priya.sharma@astrolitetech.com",
        "bonus_type": "Performance",
        "amount": 5000,
        "month_year": "January 2025",
        "reason": "Exceeded quarterly targets",
    }


@pytest.fixture
def add_bonus(db_session):
    """Insert a stored bonus directly, with an explicit created_at"""

    async def _add(bonus_id, month_year, created_at, employee_id="ATS0101",
                   employee_name="Ravi Kumar", bonus_type="Festival"):
        bonus = Bonus(
            bonus_id=bonus_id,
            employee_id=employee_id,
            employee_name=employee_name,
            employee_email=f"{employee_id.lower()}@astrolitetech.com",
            bonus_type=bonus_type,
            amount=Decimal("1000.00"),
            month_year=month_year,
            reason=None,
            created_at=created_at,
        )
        db_session.add(bonus)
        await db_session.commit()
        return bonus

    return _add


@pytest_asyncio.fixture
async def month_fixture(add_bonus):
    """Feb/Mar/Apr 2024 and Mar 2023, created in that order"""
    await add_bonus("BON0001", date(2024, 2, 1), datetime(2025, 1, 1, 9, 0))
    await add_bonus("BON0002", date(2024, 3, 1), datetime(2025, 1, 2, 9, 0))
    await add_bonus("BON0003", date(2024, 4, 1), datetime(2025, 1, 3, 9, 0))
    await add_bonus("BON0004", date(2023, 3, 1), datetime(2025, 1, 4, 9, 0),
                    employee_id="ATS0202", employee_name="Meera Nair")
