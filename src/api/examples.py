from fastapi import APIRouter, status

from src.api.adapter import ErrorTranslatingRoute
from src.api.responses import write_json
from src.core.errors import BusinessError, InfrastructureError

router = APIRouter(tags=["examples"], route_class=ErrorTranslatingRoute)


@router.get("/hello")
async def hello():
    return write_json(status.HTTP_200_OK, {"message": "Hello, World!"})


@router.get("/validationerror")
async def validation_error():
    """
    Business error: the caller sees every field message.
    """
    errors = {
        "email": "email is invalid",
        "username": "username is required",
    }
    raise BusinessError(status.HTTP_422_UNPROCESSABLE_ENTITY, errors)


@router.get("/dberror")
async def db_error():
    raise InfrastructureError("Database", "failed to connect to database")


@router.get("/cacheerror")
async def cache_error():
    raise InfrastructureError("Cache", "failed to connect to Redis")
