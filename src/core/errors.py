import json
from enum import Enum
from typing import Any

from fastapi.encoders import jsonable_encoder

# Statuses that cannot carry the JSON envelope
_BODYLESS_STATUSES = frozenset({204, 205, 304})


class ErrorKind(str, Enum):
    """Discriminant carried by every application error."""

    BUSINESS = "business"
    INFRASTRUCTURE = "infrastructure"
    UNCLASSIFIED = "unclassified"


class AppError(Exception):
    """Base class for all application errors."""

    kind: ErrorKind = ErrorKind.UNCLASSIFIED


class BusinessError(AppError):
    """
    A condition the caller caused or can act on.
    The payload is exposed to the client verbatim, so it is converted to a
    JSON-compatible value here and checked the same way the response renders
    it (no NaN/Infinity). A bad payload or status fails at construction.
    """

    kind = ErrorKind.BUSINESS

    def __init__(self, status_code: int, payload: Any):
        status_code = int(status_code)
        if not 200 <= status_code <= 599 or status_code in _BODYLESS_STATUSES:
            raise ValueError(f"Status {status_code} cannot carry an error body.")

        payload = jsonable_encoder(payload)
        json.dumps(payload, allow_nan=False)

        super().__init__(status_code, payload)
        self._status_code = status_code
        self._payload = payload

    def __str__(self) -> str:
        return f"{self._status_code}: {self._payload}"

    @classmethod
    def from_exception(cls, status_code: int, exc: BaseException) -> "BusinessError":
        return cls(status_code, str(exc))

    @property
    def status_code(self) -> int:
        return self._status_code

    @property
    def payload(self) -> Any:
        return self._payload

    def to_response(self) -> dict[str, Any]:
        return {"statusCode": self._status_code, "msg": self._payload}


class InfrastructureError(AppError):
    """
    Failure of a dependency the caller has no visibility into.
    The detail is for server-side logs only and has no client-facing rendering.
    """

    kind = ErrorKind.INFRASTRUCTURE

    def __init__(self, service_name: str, detail: str):
        super().__init__(service_name, detail)
        self._service_name = service_name
        self._detail = detail

    def __str__(self) -> str:
        return f"infrastructure error with service {self._service_name}: {self._detail}"

    @property
    def service_name(self) -> str:
        return self._service_name

    @property
    def detail(self) -> str:
        return self._detail


_KIND_TYPES: dict[ErrorKind, type[AppError]] = {
    ErrorKind.BUSINESS: BusinessError,
    ErrorKind.INFRASTRUCTURE: InfrastructureError,
}


def classify(exc: BaseException) -> ErrorKind:
    """
    Return the kind of an error from its explicit tag.
    Objects that merely look like a BusinessError (same attribute names) are
    unclassified: exposure to the client requires the tag and the type together.
    """
    if not isinstance(exc, AppError):
        return ErrorKind.UNCLASSIFIED

    expected = _KIND_TYPES.get(exc.kind)
    if expected is None or not isinstance(exc, expected):
        return ErrorKind.UNCLASSIFIED
    return exc.kind
