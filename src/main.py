import logging

import uvicorn
from fastapi import FastAPI

from src.api.exceptions import EventSink, LoggingEventSink, global_exception_handler
from src.api.router import router as api_router
from src.core.config.settings import settings
from src.core.logging import setup_logging
from src.infra.lifecycle.app import lifespan

logger = logging.getLogger(__name__)


def create_app(sink: EventSink | None = None) -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="0.1.0",
        description="Centralized translation of handler errors into HTTP responses and log records.",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.state.event_sink = sink or LoggingEventSink()
    app.add_exception_handler(Exception, global_exception_handler)

    app.include_router(api_router)
    return app


app = create_app()


def run() -> None:
    """
    Process entry point. uvicorn exits with status 1 if the port cannot be bound.
    """
    setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)
    logger.info(f"Starting server on port {settings.PORT}...")
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_config=None)


if __name__ == "__main__":
    run()
