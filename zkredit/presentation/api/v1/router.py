from fastapi import APIRouter

from .health import health_router
from .workers import workers_router

router = APIRouter()

router.include_router(health_router, tags=["Health"])
router.include_router(workers_router, tags=["Workers"])
