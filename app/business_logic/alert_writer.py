"""
Alert writer module.

This module provides the AlertWriter class that stores an alert submission,
the alert row and all of its events, metas and decisions, as a single unit
of work.
"""

from typing import Any, Dict, Optional, Union
import logging
from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.alert import Alert
from app.models.event import Event
from app.models.meta import Meta
from app.models.decision import Decision
from app.schemas.alert import AlertCreate
from app.schemas.errors import validation_errors_to_items
from app.business_logic.machines import MachineLookup
from app.business_logic.exceptions import (
    InvalidRequest,
    OwnerResolutionFailed,
    AlertNotFound,
    PersistenceError
)

# Set up logging
logger = logging.getLogger(__name__)


class AlertWriter:
    """Persists alert submissions all-or-nothing."""

    def __init__(self, machine_lookup: Optional[MachineLookup] = None):
        """Initialize the alert writer.

        Args:
            machine_lookup: Optional lookup to resolve owners with instead of the default
        """
        self.machine_lookup = machine_lookup or MachineLookup()

    @staticmethod
    def bind(submission: Union[AlertCreate, Dict[str, Any]]) -> AlertCreate:
        """Validate a raw submission against the alert shape.

        Raises:
            InvalidRequest: listing every offending field
        """
        if isinstance(submission, AlertCreate):
            return submission
        try:
            return AlertCreate.model_validate(submission)
        except ValidationError as e:
            errors = validation_errors_to_items(e.errors())
            logger.warning(f"Rejected alert submission with {len(errors)} invalid field(s)")
            raise InvalidRequest(errors=errors) from e

    async def insert(self, db_session: AsyncSession, entity) -> int:
        """Insert one row and return its generated ID.

        The row is flushed, not committed, so it stays part of the
        surrounding transaction.
        """
        db_session.add(entity)
        await db_session.flush()
        return entity.id

    async def create_alert(
        self,
        submission: Union[AlertCreate, Dict[str, Any]],
        db_session: AsyncSession
    ) -> Alert:
        """Store an alert together with its events, metas and decisions.

        Nothing is committed until every child row has been written; any
        failure rolls the whole submission back.

        Args:
            submission: The alert submission, validated or raw
            db_session: Database session for persistence

        Returns:
            The created alert, without its children loaded

        Raises:
            InvalidRequest: The submission has the wrong shape
            OwnerResolutionFailed: The owning machine could not be resolved
            PersistenceError: The alert or one of its children could not be stored
        """
        payload = self.bind(submission)

        try:
            machine = await self.machine_lookup.resolve(payload.machine_id, db_session)

            alert = Alert(
                scenario=payload.scenario,
                bucket_id=payload.bucket_id,
                message=payload.message,
                events_count=payload.events_count,
                started_at=payload.started_at,
                stopped_at=payload.stopped_at,
                source_scope=payload.source.scope,
                source_value=payload.source.value,
                source_ip=payload.source.ip,
                source_range=payload.source.range,
                source_as_number=payload.source.as_number,
                source_as_name=payload.source.as_name,
                source_country=payload.source.country,
                source_latitude=payload.source.latitude,
                source_longitude=payload.source.longitude,
                capacity=payload.capacity,
                leak_speed=payload.leak_speed,
                reprocess=payload.reprocess,
                machine_id=machine.id
            )
            alert_id = await self.insert(db_session, alert)

            for event_item in payload.events:
                await self.insert(db_session, Event(
                    alert_id=alert_id,
                    time=event_item.time,
                    serialized=event_item.serialized
                ))

            for meta_item in payload.metas:
                await self.insert(db_session, Meta(
                    alert_id=alert_id,
                    key=meta_item.key,
                    value=meta_item.value
                ))

            for decision_item in payload.decisions:
                await self.insert(db_session, Decision(
                    alert_id=alert_id,
                    until=decision_item.until,
                    scenario=decision_item.scenario,
                    decision_type=decision_item.decision_type,
                    source_ip_start=decision_item.source_ip_start,
                    source_ip_end=decision_item.source_ip_end,
                    source_value=decision_item.source_value,
                    source_scope=decision_item.source_scope
                ))

            await db_session.commit()

        except OwnerResolutionFailed:
            await db_session.rollback()
            raise
        except SQLAlchemyError as e:
            logger.error(f"Failed creating alert for scenario {payload.scenario}: {str(e)}")
            await db_session.rollback()
            raise PersistenceError() from e

        logger.info(
            f"Created alert {alert.id} ({payload.scenario}) with {len(payload.events)} events, "
            f"{len(payload.metas)} metas and {len(payload.decisions)} decisions"
        )
        return alert

    async def delete_alert(self, alert_id: int, db_session: AsyncSession) -> Alert:
        """Delete an alert along with its events, metas and decisions.

        Raises:
            AlertNotFound: No alert has this ID
            PersistenceError: The delete failed
        """
        try:
            result = await db_session.execute(
                select(Alert)
                .where(Alert.id == alert_id)
                .options(
                    selectinload(Alert.events),
                    selectinload(Alert.metas),
                    selectinload(Alert.decisions)
                )
            )
            alert = result.scalars().first()
            if alert is None:
                raise AlertNotFound(alert_id)

            await db_session.delete(alert)
            await db_session.commit()
        except AlertNotFound:
            await db_session.rollback()
            raise
        except SQLAlchemyError as e:
            logger.error(f"Failed deleting alert {alert_id}: {str(e)}")
            await db_session.rollback()
            raise PersistenceError("failed deleting alert") from e

        logger.info(f"Deleted alert {alert_id}")
        return alert
