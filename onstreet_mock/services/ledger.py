"""In-memory registry of paid tickets"""
import logging
import threading
from typing import Dict, Iterable, List, Optional

from onstreet_mock.core.exceptions import DuplicateTicketError, TicketValidationError
from onstreet_mock.models.ticket import PaidTicket
from onstreet_mock.schemas.ticket import ValidateTicketOut

logger = logging.getLogger(__name__)

MISSING_PLATE_MESSAGE = "Falta matrícula"
NOT_FOUND_MESSAGE = "Ticket no encontrado"


class TicketLedger:
    """Plates move from unpaid (absent) to paid (present) and never back.

    Ticket ids come from a counter that starts after the seed and is only
    advanced under the same lock as the duplicate check and the insert.
    """

    def __init__(self, seed_plates: Iterable[str] = ()):
        self._lock = threading.Lock()
        self._tickets: Dict[str, PaidTicket] = {}
        for plate in seed_plates:
            if plate in self._tickets:
                continue
            self._tickets[plate] = PaidTicket(plate=plate, ticket_id=len(self._tickets) + 1)
        self._next_id = len(self._tickets) + 1

    def __len__(self) -> int:
        with self._lock:
            return len(self._tickets)

    def tickets(self) -> List[PaidTicket]:
        with self._lock:
            return list(self._tickets.values())

    def get(self, plate: str) -> Optional[PaidTicket]:
        with self._lock:
            return self._tickets.get(plate)

    def pay(self, plate: Optional[str]) -> PaidTicket:
        if not plate or not plate.strip():
            raise TicketValidationError(MISSING_PLATE_MESSAGE)

        with self._lock:
            if plate in self._tickets:
                raise DuplicateTicketError(plate)
            ticket = PaidTicket(plate=plate, ticket_id=self._next_id)
            self._tickets[plate] = ticket
            self._next_id += 1

        logger.info(f"Ticket {ticket.ticket_id} recorded for plate {plate}")
        return ticket

    def validate(self, plate: str) -> ValidateTicketOut:
        ticket = self.get(plate)
        if ticket is None:
            return ValidateTicketOut(valid=False, message=NOT_FOUND_MESSAGE)
        return ValidateTicketOut(valid=True, ticket_id=ticket.ticket_id)
