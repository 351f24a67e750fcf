from typing import Any

from fastapi.responses import JSONResponse

SERVICE_UNAVAILABLE_MSG = "service temporarily unavailable"
INTERNAL_ERROR_MSG = "internal server error"


def envelope(status_code: int, msg: Any) -> dict[str, Any]:
    return {"statusCode": status_code, "msg": msg}


def write_json(status_code: int, value: Any) -> JSONResponse:
    """
    Build a JSON response with the given status.
    Nothing is sent until the response is returned to the framework, so status
    and headers are always complete before the body goes out.
    Serialization errors (TypeError, ValueError) are raised to the caller as-is.
    """
    return JSONResponse(
        content=value, status_code=status_code, media_type="application/json"
    )
