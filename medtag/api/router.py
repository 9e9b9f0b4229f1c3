"""API router configuration."""

from fastapi import APIRouter

from medtag.api.endpoints import health, public_profile

api_router = APIRouter()

# Include routers
api_router.include_router(health.router, tags=["Health"])
api_router.include_router(public_profile.router, tags=["Public Profile"])
