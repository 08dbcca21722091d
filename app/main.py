"""
Main entry point for the manager statistics API.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.routes import console, managers, records
from app.utils.db_async import dispose_engine, describe_database_url, DATABASE_URL

from app.logging_config import setup_logging
from app.config import settings

import logging
logger = logging.getLogger(__name__)

setup_logging(level=settings.log_level, access_log=settings.access_log)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # League tables are owned by the admin console; this service only reads them
    logger.info(f"DB target: {describe_database_url(DATABASE_URL)}")
    logger.info(
        f"Stats cache {'enabled' if settings.stats_cache_enabled else 'disabled'}"
    )

    yield

    try:
        logger.info("Disposing DB engine…")
        await dispose_engine()
        logger.info("DB engine disposed.")
    except Exception:
        logger.exception("Failed to dispose DB engine")

app = FastAPI(title="League Manager Stats", lifespan=lifespan)
app.include_router(managers.router)
app.include_router(records.router)
app.include_router(console.router)

@app.get("/health")
async def health_check():
    """Health Check Endpoint"""
    return {"status": "ok"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8080)
