from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class TariffBlock:
    minutes: int
    duration_seconds: int
    price_in_cents: int
    commission_price_in_cents: Optional[int] = None


@dataclass(frozen=True)
class Zone:
    id: str
    name: str
    color: str
    blocks: Tuple[TariffBlock, ...] = field(default_factory=tuple)
    max_duration_seconds: int = 0
