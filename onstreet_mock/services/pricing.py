from datetime import datetime
from typing import List, Optional

from onstreet_mock.core.config import settings
from onstreet_mock.models.zone import Zone
from onstreet_mock.schemas.rate import RateQuoteOut, RateStepOut, RateStepsOut
from onstreet_mock.services.catalog import ZoneCatalog
from onstreet_mock.utils.timefmt import iso_after, to_iso

PLACEHOLDER_TICKET_ID = 1


def generate_steps(zone: Zone, reference_instant: datetime) -> List[RateStepOut]:
    """One step per tariff block, in block order.

    Every step ends at reference_instant + its own duration; steps are
    alternative offers, not a cumulative schedule.
    """
    return [
        RateStepOut(
            minutes=block.minutes,
            time_in_seconds=block.duration_seconds,
            price_in_cents=block.price_in_cents,
            commission_price_in_cents=block.commission_price_in_cents,
            end_date_time=iso_after(reference_instant, block.duration_seconds),
        )
        for block in zone.blocks
    ]


def min_end_time(zone: Zone) -> Optional[int]:
    if not zone.blocks:
        return None
    return min(block.duration_seconds for block in zone.blocks)


def build_rate_quote(zone: Zone, reference_instant: datetime) -> RateQuoteOut:
    stamp = to_iso(reference_instant)
    return RateQuoteOut(
        id=zone.id,
        name=zone.name,
        color=zone.color,
        description=f"{zone.name} - Tarifa por bloques",
        rate_steps=RateStepsOut(
            steps=generate_steps(zone, reference_instant),
            first_step_starts_at=stamp,
            start_time_in_seconds=0,
            min_end_time_in_seconds=min_end_time(zone),
            ticket_id=PLACEHOLDER_TICKET_ID,
            price_requested_at=stamp,
            time_zone=settings.TIME_ZONE,
            currency=settings.CURRENCY,
            error_msg_list=[],
            payment_methods=[str(m) for m in settings.PAYMENT_METHODS],
            max_duration_seconds=zone.max_duration_seconds,
        ),
    )


def get_rate(catalog: ZoneCatalog, zone_id: str, reference_instant: datetime, cache=None) -> List[RateQuoteOut]:
    # unknown zone is an empty answer, not an error
    zone = catalog.get(zone_id)
    if zone is None:
        return []
    if cache is not None:
        return [cache.get(zone, reference_instant)]
    return [build_rate_quote(zone, reference_instant)]
