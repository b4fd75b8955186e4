from dataclasses import dataclass


@dataclass(frozen=True)
class PaidTicket:
    plate: str
    ticket_id: int
