from fastapi import APIRouter
from src.api.health import router as health_router
from src.api.examples import router as examples_router

router = APIRouter()
router.include_router(health_router)
router.include_router(examples_router)
