"""
Business logic module for storing and querying alerts.

This module provides the machine lookup, the transactional alert writer
and the hydrating alert reader.
"""

from app.business_logic.exceptions import (
    AlertLedgerError,
    InvalidRequest,
    OwnerResolutionFailed,
    MachineNotFound,
    MachineLookupError,
    MachineAlreadyExists,
    AlertNotFound,
    PersistenceError,
    QueryError
)
from app.business_logic.machines import MachineLookup
from app.business_logic.alert_writer import AlertWriter
from app.business_logic.alert_reader import AlertReader

__all__ = [
    "AlertLedgerError", "InvalidRequest", "OwnerResolutionFailed",
    "MachineNotFound", "MachineLookupError", "MachineAlreadyExists",
    "AlertNotFound", "PersistenceError", "QueryError",
    "MachineLookup", "AlertWriter", "AlertReader"
]
