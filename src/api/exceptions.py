from typing import Any, Protocol, assert_never

from fastapi import Request, Response, status
import logging

from src.api.responses import (
    INTERNAL_ERROR_MSG,
    SERVICE_UNAVAILABLE_MSG,
    envelope,
    write_json,
)
from src.core.errors import ErrorKind, classify

logger = logging.getLogger(__name__)


class EventSink(Protocol):
    def record(self, event: str, **fields: Any) -> None: ...


class LoggingEventSink:
    """Records events as ERROR-level log lines, with fields in `extra`."""

    def __init__(self, log: logging.Logger | None = None):
        self._log = log or logger

    def record(self, event: str, **fields: Any) -> None:
        rendered = " ".join(f"{key}={value!r}" for key, value in fields.items())
        self._log.error(f"{event}: {rendered}", extra=fields)


def get_event_sink(request: Request) -> EventSink:
    """
    Get the event sink from app state.
    Falls back to logging when the app was built without one.
    """
    return getattr(request.app.state, "event_sink", None) or LoggingEventSink()


def respond_to_error(request: Request, exc: Exception, sink: EventSink) -> Response:
    """
    Translate an error raised by a handler into the response sent to the client.

    - BusinessError: its own status and payload, nothing logged.
    - InfrastructureError: masked 503, one record with service, detail and path.
    - Anything else: masked 500, one record with the error text and path.

    Infrastructure detail and unclassified error text never reach the body.
    """
    path = request.url.path

    kind = classify(exc)
    match kind:
        case ErrorKind.BUSINESS:
            return write_json(exc.status_code, exc.to_response())
        case ErrorKind.INFRASTRUCTURE:
            response = write_json(
                status.HTTP_503_SERVICE_UNAVAILABLE,
                envelope(status.HTTP_503_SERVICE_UNAVAILABLE, SERVICE_UNAVAILABLE_MSG),
            )
            sink.record(
                "Infrastructure error",
                service=exc.service_name,
                detail=exc.detail,
                path=path,
            )
            return response
        case ErrorKind.UNCLASSIFIED:
            response = write_json(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                envelope(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MSG),
            )
            sink.record("Unknown error", err=str(exc), path=path)
            return response
        case _:
            assert_never(kind)


async def global_exception_handler(request: Request, exc: Exception):
    """
    Safety net for errors raised outside an adapted route (plain routes,
    middleware). Applies the same translation as the route adapter.
    """
    return respond_to_error(request, exc, get_event_sink(request))
