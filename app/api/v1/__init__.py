"""
API v1 package for the Alert Ledger server.

This package contains the v1 API endpoints.
"""

from fastapi import APIRouter

from app.api.v1 import alerts, machines

# Create the main v1 API router 
router = APIRouter()

# Include the various API routers with specific tags
router.include_router(alerts.router, prefix="/alerts", tags=["Alerts"])
router.include_router(machines.router, prefix="/machines", tags=["Machines"])

# Export the API router
__all__ = ["router"]
