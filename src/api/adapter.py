from functools import wraps
from typing import Any, Awaitable, Callable, Coroutine

from fastapi import Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.routing import APIRoute
from starlette.exceptions import HTTPException

from src.api.exceptions import get_event_sink, respond_to_error

Handler = Callable[[Request], Awaitable[Response]]


def adapt(handler: Handler) -> Callable[[Request], Coroutine[Any, Any, Response]]:
    """
    Wrap a handler that raises on failure into one that always returns a response.

    On success the handler's response is returned untouched. On failure the
    error goes to respond_to_error exactly once.

    HTTPException and RequestValidationError are framework control flow, not
    handler errors, and keep FastAPI's native handling.

    Precondition: a handler either returns a complete response or raises before
    producing one. Since responses are only sent after the handler returns, a
    failing handler has never committed a status.
    """

    @wraps(handler)
    async def adapted(request: Request) -> Response:
        try:
            return await handler(request)
        except (HTTPException, RequestValidationError):
            raise
        except Exception as exc:
            return respond_to_error(request, exc, get_event_sink(request))

    return adapted


class ErrorTranslatingRoute(APIRoute):
    """
    Route class for routers whose endpoints raise BusinessError /
    InfrastructureError instead of building error responses.
    Use as APIRouter(route_class=ErrorTranslatingRoute).
    """

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        return adapt(super().get_route_handler())
