"""API route registration."""

from fastapi import APIRouter

from orgconsole.api.routes import health, auth, drive, management, periods

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(drive.router, prefix="/drive", tags=["drive"])
api_router.include_router(management.router, prefix="/management", tags=["management"])
api_router.include_router(periods.router, prefix="/periods", tags=["periods"])
