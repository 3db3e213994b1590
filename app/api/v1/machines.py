from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database.init_db import get_session
from app.schemas.machine import MachineCreate, MachineRead, MachineResponse
from app.schemas.errors import ErrorResponse
from app.business_logic.machines import MachineLookup
from app.business_logic.exceptions import (
    MachineNotFound,
    MachineLookupError,
    MachineAlreadyExists,
    PersistenceError
)

router = APIRouter()
machine_lookup = MachineLookup()

@router.post(
    "/",
    response_model=MachineResponse,
    responses={
        status.HTTP_409_CONFLICT: {"model": ErrorResponse, "description": "Machine already registered"},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse, "description": "Storage failure"},
    }
)
async def register_machine(
    machine_in: MachineCreate,
    session: AsyncSession = Depends(get_session)
):
    """Register a machine so it can submit alerts."""
    try:
        machine = await machine_lookup.register(machine_in, session)
    except MachineAlreadyExists as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)
    except PersistenceError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)

    return {"data": MachineRead.model_validate(machine)}

@router.get(
    "/{machine_id}",
    response_model=MachineResponse,
    responses={
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse, "description": "Machine not found"},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse, "description": "Storage failure"},
    }
)
async def get_machine(
    machine_id: int,
    session: AsyncSession = Depends(get_session)
):
    """Get a registered machine by ID."""
    try:
        machine = await machine_lookup.resolve(machine_id, session)
    except MachineNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except MachineLookupError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)

    return {"data": MachineRead.model_validate(machine)}
