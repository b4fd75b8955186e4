"""Static zone catalog seeded once at startup"""
import json
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from pydantic import TypeAdapter, ValidationError

from onstreet_mock.core.exceptions import ZoneConfigError
from onstreet_mock.models.zone import TariffBlock, Zone
from onstreet_mock.schemas.zone import ZoneIn, ZoneOut

logger = logging.getLogger(__name__)

DEFAULT_ZONES = (
    Zone(
        id="blue",
        name="Zona rosa",
        color="#FF0080",
        blocks=(
            TariffBlock(minutes=3, duration_seconds=180, price_in_cents=80),
            TariffBlock(minutes=10, duration_seconds=600, price_in_cents=90),
            TariffBlock(minutes=25, duration_seconds=1500, price_in_cents=65),
            TariffBlock(minutes=120, duration_seconds=7200, price_in_cents=90),
            TariffBlock(minutes=180, duration_seconds=10800, price_in_cents=250),
        ),
        max_duration_seconds=3600,  # 1 h
    ),
    Zone(
        id="green",
        name="Zona verde",
        color="#01AE00",
        blocks=(
            TariffBlock(minutes=5, duration_seconds=300, price_in_cents=25),
            TariffBlock(minutes=10, duration_seconds=600, price_in_cents=40),
            TariffBlock(minutes=15, duration_seconds=900, price_in_cents=60),
            TariffBlock(minutes=30, duration_seconds=1800, price_in_cents=100),
            TariffBlock(minutes=60, duration_seconds=3600, price_in_cents=180),
        ),
        max_duration_seconds=5400,  # 1 h 30
    ),
)

_zones_adapter = TypeAdapter(List[ZoneIn])


class ZoneCatalog:
    """Read-only zone table, kept in declaration order."""

    def __init__(self, zones: Iterable[Zone] = DEFAULT_ZONES):
        self._zones: Dict[str, Zone] = {}
        for zone in zones:
            if zone.id in self._zones:
                raise ZoneConfigError(f"Duplicate zone id: {zone.id}")
            self._zones[zone.id] = zone

    def __len__(self) -> int:
        return len(self._zones)

    def __contains__(self, zone_id: str) -> bool:
        return zone_id in self._zones

    def get(self, zone_id: str) -> Optional[Zone]:
        return self._zones.get(zone_id)

    def zones(self) -> List[Zone]:
        return list(self._zones.values())

    def list_zones(self) -> List[ZoneOut]:
        return [ZoneOut(id=z.id, name=z.name, color=z.color) for z in self._zones.values()]


def zone_from_schema(data: ZoneIn) -> Zone:
    return Zone(
        id=data.id,
        name=data.name,
        color=data.color,
        blocks=tuple(
            TariffBlock(
                minutes=b.minutes,
                duration_seconds=b.duration_seconds,
                price_in_cents=b.price_in_cents,
                commission_price_in_cents=b.commission_price_in_cents,
            )
            for b in data.blocks
        ),
        max_duration_seconds=data.max_duration_seconds,
    )


def load_catalog(path: str) -> ZoneCatalog:
    """Build a catalog from a JSON list of zone definitions."""
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
        parsed = _zones_adapter.validate_python(raw)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        raise ZoneConfigError(f"Cannot load zones from {path}: {e}") from e

    catalog = ZoneCatalog(zone_from_schema(z) for z in parsed)
    logger.info(f"Loaded {len(catalog)} zones from {path}")
    return catalog


def build_catalog(zones_file: Optional[str] = None) -> ZoneCatalog:
    if zones_file:
        return load_catalog(zones_file)
    return ZoneCatalog()
