"""
Alert reader module.

Queries stored alerts with partial-match filters and returns them hydrated
with their events, metas and decisions.
"""

from typing import List, Optional
import logging
from sqlalchemy import select, and_, or_, literal
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.alert import Alert
from app.business_logic.exceptions import AlertNotFound, QueryError

logger = logging.getLogger(__name__)


def contains_filter(column, value: str):
    """Substring predicate that matches every row when the filter is empty."""
    return or_(literal(value) == "", column.contains(value, autoescape=True))


class AlertReader:
    """Reads alerts together with their child collections."""

    @staticmethod
    def _hydrated_query():
        return select(Alert).options(
            selectinload(Alert.events),
            selectinload(Alert.metas),
            selectinload(Alert.decisions)
        )

    async def find_alerts(
        self,
        db_session: AsyncSession,
        scenario: str = "",
        source_scope: str = "",
        source_value: str = "",
        limit: Optional[int] = None,
        offset: int = 0
    ) -> List[Alert]:
        """Find alerts whose scenario, source scope and source value contain the given filters.

        Empty filters match everything. Results come back in insertion
        order (ascending alert ID).

        Raises:
            QueryError: The query failed
        """
        query = (
            self._hydrated_query()
            .where(and_(
                contains_filter(Alert.scenario, scenario or ""),
                contains_filter(Alert.source_scope, source_scope or ""),
                contains_filter(Alert.source_value, source_value or "")
            ))
            .order_by(Alert.id)
        )
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)

        logger.debug(
            f"Querying alerts scenario={scenario!r} source_scope={source_scope!r} "
            f"source_value={source_value!r} limit={limit} offset={offset}"
        )

        try:
            result = await db_session.execute(query)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Failed querying alerts: {str(e)}")
            raise QueryError() from e

    async def get_alert(self, alert_id: int, db_session: AsyncSession) -> Alert:
        """Get one alert with its events, metas and decisions.

        Raises:
            AlertNotFound: No alert has this ID
            QueryError: The query failed
        """
        try:
            result = await db_session.execute(
                self._hydrated_query().where(Alert.id == alert_id)
            )
            alert = result.scalars().first()
        except SQLAlchemyError as e:
            logger.error(f"Failed querying alert {alert_id}: {str(e)}")
            raise QueryError() from e

        if alert is None:
            raise AlertNotFound(alert_id)
        return alert
