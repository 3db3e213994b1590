"""
API package for the Alert Ledger server.

This package contains the API endpoints for the Alert Ledger server.
"""

from fastapi import APIRouter

from app.api import v1

# Create the main API router
api_router = APIRouter()

# Include the v1 API router
api_router.include_router(
    v1.router,
    prefix="/v1",
    tags=["API v1"]
)

# Export the API router
__all__ = ["api_router"]
