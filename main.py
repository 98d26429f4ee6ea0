# main.py - Employee bonus API
import asyncio
import logging
import os
import traceback
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from config_sys import PORT, connection_summary
from database import init_database, dispose_engine
from logging_config import setup_logging
from routers import bonus, status

log_file = setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Bonus API",
    description="Record and query employee bonus entries",
    version="1.0.0"
)

# ====== CORS middleware ======
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ====== Middleware to log all requests ======
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = datetime.now()
    logger.info(f"REQUEST: {request.method} {request.url}")

    try:
        response = await call_next(request)
        process_time = (datetime.now() - start_time).total_seconds()
        logger.info(f"RESPONSE: {response.status_code} - {process_time:.3f}s")
        return response
    except Exception as e:
        process_time = (datetime.now() - start_time).total_seconds()
        logger.error(f"ERROR in request {request.method} {request.url}")
        logger.error(f"Error: {str(e)}")
        logger.error(f"Traceback: {traceback.format_exc()}")
        logger.error(f"Process time: {process_time:.3f}s")
        raise


# ====== Include API routers ======
app.include_router(bonus.router)
app.include_router(status.router)


def fatal_exception_handler(loop, context):
    """Unhandled async errors leave the process in an unknown state: stop it"""
    exc = context.get("exception")
    logger.critical(
        f"Unhandled asynchronous error: {context.get('message')}",
        exc_info=(type(exc), exc, exc.__traceback__) if exc else None
    )
    logging.shutdown()
    os._exit(1)


@app.on_event("startup")
async def startup_event():
    logger.info("=" * 50)
    logger.info("APPLICATION STARTUP")
    logger.info("=" * 50)
    logger.info(f"Log file: {log_file}")
    logger.info(f"Connecting to database with: {connection_summary()}")

    asyncio.get_running_loop().set_exception_handler(fatal_exception_handler)

    # Raises DatabaseInitError when retries run out, which aborts startup
    await init_database()
    logger.info(f"Server running on http://0.0.0.0:{PORT}")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Application shutting down...")
    await dispose_engine()
    logger.info("Application shutdown complete")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=PORT)
