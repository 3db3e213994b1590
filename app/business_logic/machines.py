"""
Machine lookup module.

Resolves the machine referenced by an alert submission and registers new
machines.
"""

import logging
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.machine import Machine
from app.schemas.machine import MachineCreate
from app.business_logic.exceptions import (
    MachineNotFound,
    MachineLookupError,
    MachineAlreadyExists,
    PersistenceError
)

logger = logging.getLogger(__name__)


class MachineLookup:
    """Finds and registers the machines that own alerts."""

    async def resolve(self, machine_id: int, db_session: AsyncSession) -> Machine:
        """Resolve a machine ID to its record.
        
        Args:
            machine_id: The machine ID supplied by the client
            db_session: Database session
            
        Returns:
            The matching machine
            
        Raises:
            MachineNotFound: No machine has this ID
            MachineLookupError: The lookup itself failed
        """
        try:
            machine = await db_session.get(Machine, machine_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed querying machine {machine_id}: {str(e)}")
            raise MachineLookupError() from e

        if machine is None:
            logger.warning(f"Machine {machine_id} does not exist")
            raise MachineNotFound(machine_id)

        return machine

    async def register(self, payload: MachineCreate, db_session: AsyncSession) -> Machine:
        """Register a new machine.
        
        Raises:
            MachineAlreadyExists: The machine name is taken
            PersistenceError: The machine could not be stored
        """
        try:
            result = await db_session.execute(
                select(Machine).where(Machine.machine_id == payload.machine_id)
            )
            if result.scalars().first() is not None:
                raise MachineAlreadyExists(payload.machine_id)

            machine = Machine(
                machine_id=payload.machine_id,
                ip_address=payload.ip_address,
                version=payload.version,
                is_validated=payload.is_validated
            )
            db_session.add(machine)
            await db_session.commit()
        except MachineAlreadyExists:
            await db_session.rollback()
            raise
        except SQLAlchemyError as e:
            logger.error(f"Failed creating machine {payload.machine_id}: {str(e)}")
            await db_session.rollback()
            raise PersistenceError("failed creating machine") from e

        logger.info(f"Registered machine {machine.machine_id} with ID {machine.id}")
        return machine
