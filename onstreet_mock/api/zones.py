"""Zone list and per-zone rate quotes"""
from datetime import datetime
from typing import List, Optional
from fastapi import APIRouter, Depends, Query

from onstreet_mock.api.deps import get_catalog, get_now, get_quote_cache
from onstreet_mock.schemas.rate import RateQuoteOut
from onstreet_mock.schemas.zone import ZoneOut
from onstreet_mock.services.catalog import ZoneCatalog
from onstreet_mock.services.pricing import get_rate
from onstreet_mock.services.quote_cache import QuoteCache

router = APIRouter(prefix="/v1/onstreet-service", tags=["zones"])

PLATE_SEPARATOR = "&plate="


@router.get("/zones", response_model=List[ZoneOut])
async def list_zones(catalog: ZoneCatalog = Depends(get_catalog)):
    return catalog.list_zones()


# The kiosk app puts the plate in the path itself ("blue&plate=1234ABC"),
# so this route has to be registered before the query-string variant.
@router.get("/product/by-zone/{zone_id}&plate={plate}", response_model=List[RateQuoteOut])
async def product_by_zone_and_plate(
    zone_id: str,
    plate: str,
    catalog: ZoneCatalog = Depends(get_catalog),
    cache: Optional[QuoteCache] = Depends(get_quote_cache),
    now: datetime = Depends(get_now),
):
    return get_rate(catalog, zone_id, now, cache=cache)


@router.get("/product/by-zone/{zone_id}", response_model=List[RateQuoteOut])
async def product_by_zone(
    zone_id: str,
    plate: Optional[str] = Query(None),
    catalog: ZoneCatalog = Depends(get_catalog),
    cache: Optional[QuoteCache] = Depends(get_quote_cache),
    now: datetime = Depends(get_now),
):
    # "blue&plate=" (empty plate) misses the route above and lands here
    zone_id = zone_id.split(PLATE_SEPARATOR, 1)[0]
    return get_rate(catalog, zone_id, now, cache=cache)
