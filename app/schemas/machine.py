"""
Machine schemas for the Alert Ledger server.
"""

from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field


class MachineCreate(BaseModel):
    """Schema for registering a machine."""

    machine_id: str = Field(..., alias="machineId", min_length=1, description="Unique name of the machine")
    ip_address: Optional[str] = Field(None, alias="ipAddress", description="Address the machine submits from")
    version: Optional[str] = Field(None, description="Version of the agent running on the machine")
    is_validated: bool = Field(False, alias="isValidated", description="Whether the machine has been approved")

    class Config:
        from_attributes = True
        populate_by_name = True


class MachineRead(MachineCreate):
    """Schema for reading a Machine."""

    id: int = Field(..., description="The ID alerts use to reference this machine")
    created_at: Optional[datetime] = Field(None, alias="createdAt", description="When the machine was registered")


class MachineResponse(BaseModel):
    """Envelope for a single machine."""

    data: MachineRead
