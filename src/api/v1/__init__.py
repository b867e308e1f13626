"""API v1 router configuration."""

from fastapi import APIRouter

from api.v1.routes.activity_logs import router as activity_logs_router
from api.v1.routes.frontend_logs import router as frontend_logs_router

router = APIRouter()
router.include_router(activity_logs_router)
router.include_router(frontend_logs_router)
