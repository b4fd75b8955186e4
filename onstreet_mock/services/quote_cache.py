"""Per-zone memo of assembled rate quotes"""
import logging
import threading
from datetime import datetime
from typing import Dict

from onstreet_mock.core.metrics import cache_hits, cache_misses
from onstreet_mock.models.zone import Zone
from onstreet_mock.schemas.rate import RateQuoteOut
from onstreet_mock.services.pricing import build_rate_quote
from onstreet_mock.utils.timefmt import iso_after, to_iso

logger = logging.getLogger(__name__)


class QuoteCache:
    """Keeps the time-independent part of each zone's quote for the process lifetime.

    Only endDateTime, firstStepStartsAt and priceRequestedAt are refreshed on
    a hit. There is no eviction since zones never change after startup.
    """

    def __init__(self):
        self._base: Dict[str, RateQuoteOut] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._base)

    def get(self, zone: Zone, reference_instant: datetime) -> RateQuoteOut:
        with self._lock:
            base = self._base.get(zone.id)
            if base is None:
                cache_misses.labels(zone_id=zone.id).inc()
                logger.info(f"Quote cache miss for zone {zone.id}")
                base = build_rate_quote(zone, reference_instant)
                self._base[zone.id] = base
            else:
                cache_hits.labels(zone_id=zone.id).inc()

        return _restamp(base, reference_instant)

    def clear(self):
        with self._lock:
            self._base.clear()


def _restamp(base: RateQuoteOut, reference_instant: datetime) -> RateQuoteOut:
    stamp = to_iso(reference_instant)
    steps = [
        step.model_copy(update={"end_date_time": iso_after(reference_instant, step.time_in_seconds)})
        for step in base.rate_steps.steps
    ]
    rate_steps = base.rate_steps.model_copy(update={
        "steps": steps,
        "first_step_starts_at": stamp,
        "price_requested_at": stamp,
    })
    return base.model_copy(update={"rate_steps": rate_steps})
