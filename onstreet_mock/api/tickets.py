"""Mock payment and ticket validation"""
import logging
from typing import Optional
from fastapi import APIRouter, BackgroundTasks, Body, Depends

from onstreet_mock.api.deps import get_ledger
from onstreet_mock.core.config import settings
from onstreet_mock.core.exceptions import DuplicateTicketError, TicketValidationError
from onstreet_mock.core.metrics import tickets_paid, ticket_validations
from onstreet_mock.core.rate_limit import rate_limit_by_client
from onstreet_mock.schemas.ticket import ErrorOut, PayTicketIn, PayTicketOut, ValidateTicketOut
from onstreet_mock.services.ledger import TicketLedger
from onstreet_mock.services.notifier import build_ticket_payload, send_ticket_notification

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/v1/onstreet-service", tags=["tickets"])

SAVED_MESSAGE = "Ticket guardado"
PAY_TICKET_PATH = f"{router.prefix}/pay-ticket"


@router.post(
    "/pay-ticket",
    response_model=PayTicketOut,
    responses={400: {"model": ErrorOut}, 429: {"model": ErrorOut}},
    dependencies=[Depends(rate_limit_by_client)],
)
async def pay_ticket(
    background_tasks: BackgroundTasks,
    payload: Optional[PayTicketIn] = Body(None),
    ledger: TicketLedger = Depends(get_ledger),
):
    plate = payload.plate if payload else None

    try:
        ticket = ledger.pay(plate)
    except TicketValidationError:
        tickets_paid.labels(outcome="invalid").inc()
        raise
    except DuplicateTicketError as e:
        tickets_paid.labels(outcome="duplicate").inc()
        logger.info(f"Rejected duplicate payment for plate {e.plate}")
        return PayTicketOut(success=False, message=e.message)

    tickets_paid.labels(outcome="success").inc()

    # the ledger entry is committed; delivery runs after the response
    if settings.NOTIFY_WEBHOOK_URL:
        background_tasks.add_task(send_ticket_notification, build_ticket_payload(ticket))

    return PayTicketOut(success=True, message=SAVED_MESSAGE)


@router.get(
    "/validate-ticket/{plate}",
    response_model=ValidateTicketOut,
    response_model_exclude_none=True,
)
async def validate_ticket(plate: str, ledger: TicketLedger = Depends(get_ledger)):
    result = ledger.validate(plate)
    ticket_validations.labels(valid=str(result.valid).lower()).inc()
    return result
