"""
API schemas for the Alert Ledger server.

This module contains Pydantic models for API requests and responses.
"""

from app.schemas.errors import ErrorResponse, ValidationErrorItem, ErrorDetail
from app.schemas.alert import (
    Source, EventCreate, EventRead, MetaCreate, MetaRead,
    DecisionCreate, DecisionRead, AlertCreate, AlertRead, AlertDetail,
    AlertResponse, AlertDetailResponse, AlertListResponse
)
from app.schemas.machine import MachineCreate, MachineRead, MachineResponse

# Export schemas
__all__ = [
    "ErrorResponse", "ValidationErrorItem", "ErrorDetail",
    "Source", "EventCreate", "EventRead", "MetaCreate", "MetaRead",
    "DecisionCreate", "DecisionRead", "AlertCreate", "AlertRead", "AlertDetail",
    "AlertResponse", "AlertDetailResponse", "AlertListResponse",
    "MachineCreate", "MachineRead", "MachineResponse"
]
