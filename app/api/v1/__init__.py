"""API v1 routes."""

from fastapi import APIRouter

from app.api.v1 import admin, applications, auth, health, profile, services, track

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(profile.router, prefix="/profile", tags=["profile"])
router.include_router(services.router, prefix="/services", tags=["services"])
router.include_router(applications.router, prefix="/applications", tags=["applications"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
router.include_router(track.router, prefix="/track", tags=["track"])
