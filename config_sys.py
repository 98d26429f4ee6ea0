import os
from dotenv import load_dotenv
from sqlalchemy.engine import URL

load_dotenv()

# HTTP server
PORT = int(os.getenv("PORT", 3062))

# PostgreSQL connection
DB_HOST = os.getenv("DB_HOST", "postgres")
DB_USER = os.getenv("DB_USER", "postgres")
DB_PASSWORD = os.getenv("DB_PASSWORD", "admin123")
DB_NAME = os.getenv("DB_NAME", "new_employee_db")
DB_PORT = int(os.getenv("DB_PORT", 5432))

DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", 5))
DB_MAX_OVERFLOW = int(os.getenv("DB_MAX_OVERFLOW", 10))
DB_ECHO = os.getenv("DB_ECHO", "false").lower() in ("1", "true", "yes")

# Startup retry: the schema must exist before the service is usable
DB_INIT_MAX_RETRIES = int(os.getenv("DB_INIT_MAX_RETRIES", 5))
DB_INIT_RETRY_DELAY = float(os.getenv("DB_INIT_RETRY_DELAY", 5))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR = os.getenv("LOG_DIR")

DB_URL = URL.create(
    "postgresql+asyncpg",
    username=DB_USER,
    password=DB_PASSWORD,
    host=DB_HOST,
    port=DB_PORT,
    database=DB_NAME,
)


def connection_summary() -> dict:
    """Connection parameters safe to log (no password)"""
    return {
        "host": DB_HOST,
        "user": DB_USER,
        "database": DB_NAME,
        "port": DB_PORT,
    }
