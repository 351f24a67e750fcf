from contextlib import asynccontextmanager
from fastapi import FastAPI
from src.core.config.settings import settings
import logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting up {settings.PROJECT_NAME}...")
    logger.info(f"Error events recorded by {type(app.state.event_sink).__name__}")

    yield

    logger.info(f"Shutting down {settings.PROJECT_NAME}...")
