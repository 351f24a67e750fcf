from fastapi import APIRouter

router = APIRouter()


@router.get("/health/live")
async def health_live():
    """
    Liveness probe. Returns 200 if the app is running.
    """
    return {"status": "ok"}
