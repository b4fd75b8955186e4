import httpx
import asyncio
import logging
import time
from typing import Optional
from onstreet_mock.core.config import settings
from onstreet_mock.core.enums import TicketEvent
from onstreet_mock.core.metrics import webhook_deliveries, webhook_duration
from onstreet_mock.models.ticket import PaidTicket

logger = logging.getLogger(__name__)


def build_ticket_payload(ticket: PaidTicket) -> dict:
    return {
        "event": str(TicketEvent.PAID),
        "plate": ticket.plate,
        "ticketId": ticket.ticket_id,
    }


async def send_ticket_notification(
    payload: dict,
    url: Optional[str] = None,
    retries: Optional[int] = None,
    backoff: Optional[float] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> bool:
    """POST a ticket event to the messaging gateway.

    Never raises: the ticket is already in the ledger when this runs, so a
    failed delivery is only logged and counted.
    """
    url = url or settings.NOTIFY_WEBHOOK_URL
    if not url:
        return False

    if retries is None:
        retries = settings.WEBHOOK_RETRIES
    if backoff is None:
        backoff = settings.WEBHOOK_BACKOFF

    plate = payload.get("plate")

    for attempt in range(1, retries + 1):
        start_time = time.time()
        try:
            async with httpx.AsyncClient(timeout=settings.WEBHOOK_TIMEOUT, transport=transport) as client:
                response = await client.post(url, json=payload)

            if 200 <= response.status_code < 300:
                webhook_deliveries.labels(status="success", retry_count=attempt - 1).inc()
                webhook_duration.labels(status="success").observe(time.time() - start_time)
                logger.info(f"Ticket notification delivered for plate {plate}")
                return True

            logger.warning(
                f"Ticket notification failed (attempt {attempt}/{retries}): "
                f"Status {response.status_code} for plate {plate}"
            )
        except httpx.TimeoutException:
            logger.warning(
                f"Ticket notification timeout (attempt {attempt}/{retries}) for plate {plate}"
            )
        except httpx.HTTPError as e:
            logger.warning(
                f"Ticket notification error (attempt {attempt}/{retries}): {e} "
                f"for plate {plate}"
            )

        webhook_deliveries.labels(status="failure", retry_count=attempt - 1).inc()
        webhook_duration.labels(status="failure").observe(time.time() - start_time)

        if attempt < retries:
            await asyncio.sleep(backoff)
            backoff *= 2.0

    logger.error(f"Ticket notification failed after {retries} attempts for plate {plate}")
    return False
