"""
API v1 module initialization
"""

from fastapi import APIRouter
from .site import router as site_router

# Create v1 API router
v1_router = APIRouter(prefix="/v1")

# Include all sub-routers
v1_router.include_router(site_router, prefix="/site", tags=["Site Content"])
