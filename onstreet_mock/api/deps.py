from datetime import datetime
from typing import Optional
from fastapi import Request

from onstreet_mock.core.config import settings
from onstreet_mock.services.catalog import ZoneCatalog
from onstreet_mock.services.ledger import TicketLedger
from onstreet_mock.services.quote_cache import QuoteCache
from onstreet_mock.utils.timefmt import utc_now


def get_catalog(request: Request) -> ZoneCatalog:
    return request.app.state.catalog


def get_ledger(request: Request) -> TicketLedger:
    return request.app.state.ledger


def get_quote_cache(request: Request) -> Optional[QuoteCache]:
    if not settings.QUOTE_CACHE_ENABLED:
        return None
    return request.app.state.quote_cache


def get_now() -> datetime:
    return utc_now()
