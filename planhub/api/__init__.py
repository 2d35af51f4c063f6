"""API routes."""

from fastapi import APIRouter

from planhub.api import admin, auth, health, plans

router = APIRouter()
router.include_router(health.router, tags=["health"])
router.include_router(auth.router, tags=["auth"])
router.include_router(plans.router, tags=["plans"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
