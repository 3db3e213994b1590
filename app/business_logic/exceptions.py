"""
Errors raised by the business logic layer.

Every failure of an alert or machine operation is one of these. The API
layer maps them onto HTTP status codes and the ``{"error": ...}`` envelope.
"""

from typing import List, Optional


class AlertLedgerError(Exception):
    """Base class for all business logic errors."""

    default_message = "alert ledger error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidRequest(AlertLedgerError):
    """The submitted payload does not match the expected shape."""

    default_message = "Validation error"

    def __init__(self, message: Optional[str] = None, errors: Optional[List] = None):
        super().__init__(message)
        self.errors = errors or []


class OwnerResolutionFailed(AlertLedgerError):
    """The owning machine of an alert could not be resolved."""

    default_message = "failed resolving machine"


class MachineNotFound(OwnerResolutionFailed):
    """No machine is registered under the given ID."""

    def __init__(self, machine_id: int):
        self.machine_id = machine_id
        super().__init__(f"machine {machine_id} does not exist")


class MachineLookupError(OwnerResolutionFailed):
    """The machine store could not be queried."""

    default_message = "failed querying machine"


class MachineAlreadyExists(AlertLedgerError):
    """A machine with the same name is already registered."""

    def __init__(self, machine_id: str):
        self.machine_id = machine_id
        super().__init__(f"machine {machine_id} already exists")


class AlertNotFound(AlertLedgerError):
    """No alert is stored under the given ID."""

    def __init__(self, alert_id: int):
        self.alert_id = alert_id
        super().__init__(f"alert {alert_id} does not exist")


class PersistenceError(AlertLedgerError):
    """Writing an alert, one of its children or a machine failed."""

    default_message = "failed creating alert"


class QueryError(AlertLedgerError):
    """Reading alerts failed."""

    default_message = "failed querying alert"
