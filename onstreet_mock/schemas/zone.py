from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class ZoneOut(BaseModel):
    id: str
    name: str
    color: str


class TariffBlockIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    minutes: int = Field(alias="minutos", ge=0)
    duration_seconds: int = Field(alias="timeInSeconds", ge=0)
    price_in_cents: int = Field(alias="priceInCents", ge=0)
    commission_price_in_cents: Optional[int] = Field(default=None, alias="commissionPriceInCents", ge=0)


class ZoneIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(min_length=1)
    name: str
    color: str
    max_duration_seconds: int = Field(alias="maxDurationSeconds", ge=0)
    blocks: List[TariffBlockIn] = Field(default_factory=list)
