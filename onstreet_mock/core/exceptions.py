"""Errors raised by the zone catalog and the ticket ledger."""


class OnstreetError(Exception):
    """Base exception for the service."""


class TicketValidationError(OnstreetError):
    """Raised when a pay request carries no usable plate."""


class DuplicateTicketError(OnstreetError):
    """Raised when a plate already has a paid ticket."""

    def __init__(self, plate: str, message: str = "Ticket ya existe"):
        super().__init__(message)
        self.plate = plate
        self.message = message


class ZoneConfigError(OnstreetError):
    """Raised when a zone definition file cannot be loaded."""
