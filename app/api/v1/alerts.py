from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from app.database.init_db import get_session
from app.schemas.alert import (
    AlertCreate,
    AlertRead,
    AlertDetail,
    AlertResponse,
    AlertDetailResponse,
    AlertListResponse
)
from app.schemas.errors import ErrorResponse
from app.business_logic.alert_writer import AlertWriter
from app.business_logic.alert_reader import AlertReader
from app.business_logic.exceptions import (
    InvalidRequest,
    MachineNotFound,
    OwnerResolutionFailed,
    AlertNotFound,
    PersistenceError,
    QueryError
)

router = APIRouter()
alert_writer = AlertWriter()
alert_reader = AlertReader()

ERROR_RESPONSES = {
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse, "description": "Alert not found"},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse, "description": "Storage failure"},
}

def get_alert_writer() -> AlertWriter:
    return alert_writer

def get_alert_reader() -> AlertReader:
    return alert_reader

@router.post("/", response_model=AlertResponse, responses=ERROR_RESPONSES)
async def create_alert(
    alert_in: AlertCreate,
    session: AsyncSession = Depends(get_session),
    writer: AlertWriter = Depends(get_alert_writer)
):
    """
    Store an alert with its events, metas and decisions.
    
    The whole submission is written in one transaction: either everything
    is stored or nothing is.
    """
    try:
        alert = await writer.create_alert(alert_in, session)
    except InvalidRequest as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except MachineNotFound as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"failed creating alert, {e.message}"
        )
    except OwnerResolutionFailed:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="failed creating alert, could not resolve machine"
        )
    except PersistenceError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)

    return {"data": AlertRead.model_validate(alert)}

@router.get("/", response_model=AlertListResponse, responses=ERROR_RESPONSES)
async def find_alerts(
    scenario: str = Query("", description="Keep alerts whose scenario contains this value"),
    source_scope: str = Query("", alias="sourceScope", description="Keep alerts whose source scope contains this value"),
    source_value: str = Query("", alias="sourceValue", description="Keep alerts whose source value contains this value"),
    limit: Optional[int] = Query(None, ge=1, description="Maximum number of alerts to return"),
    offset: int = Query(0, ge=0, description="Number of alerts to skip"),
    session: AsyncSession = Depends(get_session),
    reader: AlertReader = Depends(get_alert_reader)
):
    """
    Find alerts by partial match on scenario, source scope and source value.
    
    Every alert comes back with its events, metas and decisions. Empty
    filters match all alerts.
    """
    try:
        alerts = await reader.find_alerts(
            session,
            scenario=scenario,
            source_scope=source_scope,
            source_value=source_value,
            limit=limit,
            offset=offset
        )
    except QueryError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)

    return {"data": [AlertDetail.model_validate(alert) for alert in alerts]}

@router.get("/{alert_id}", response_model=AlertDetailResponse, responses=ERROR_RESPONSES)
async def get_alert(
    alert_id: int,
    session: AsyncSession = Depends(get_session),
    reader: AlertReader = Depends(get_alert_reader)
):
    """Get a single alert with its events, metas and decisions."""
    try:
        alert = await reader.get_alert(alert_id, session)
    except AlertNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except QueryError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)

    return {"data": AlertDetail.model_validate(alert)}

@router.delete("/{alert_id}", response_model=AlertResponse, responses=ERROR_RESPONSES)
async def delete_alert(
    alert_id: int,
    session: AsyncSession = Depends(get_session),
    writer: AlertWriter = Depends(get_alert_writer)
):
    """Delete an alert and everything attached to it."""
    try:
        alert = await writer.delete_alert(alert_id, session)
    except AlertNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except PersistenceError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)

    return {"data": AlertRead.model_validate(alert)}
