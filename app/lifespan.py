import logging
import os
from contextlib import asynccontextmanager
from fastapi import FastAPI
from app.db.database import Base
from app.model import user, video, subscription  # noqa: F401  register tables on Base.metadata

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI):
    # Startup logic
    settings = application.state.settings
    logger.info("App starting up...")

    async with application.state.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    os.makedirs(settings.temp_dir, exist_ok=True)

    yield
    # Shutdown logic
    await application.state.engine.dispose()
    logger.info("App shutting down...")
