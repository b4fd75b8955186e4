from pydantic import BaseModel, ConfigDict, Field, model_serializer
from pydantic.alias_generators import to_camel
from typing import List, Optional
from onstreet_mock.core.enums import VehicleType, ProductType


class RateStepOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    minutes: int = Field(alias="minutos")
    time_in_seconds: int = Field(alias="timeInSeconds")
    price_in_cents: int = Field(alias="priceInCents")
    commission_price_in_cents: Optional[int] = Field(default=None, alias="commissionPriceInCents")
    end_date_time: str = Field(alias="endDateTime")

    @model_serializer(mode="wrap")
    def _omit_missing_commission(self, handler):
        # zones without a commission carry no key at all, not a null
        data = handler(self)
        if self.commission_price_in_cents is None:
            data.pop("commissionPriceInCents", None)
            data.pop("commission_price_in_cents", None)
        return data


class RateStepsOut(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    steps: List[RateStepOut]
    first_step_starts_at: str
    start_time_in_seconds: int = 0
    min_end_time_in_seconds: Optional[int] = None
    ticket_id: int = 1
    price_requested_at: str
    time_zone: str
    currency: str
    error_msg_list: List[str] = Field(default_factory=list)
    payment_methods: List[str]
    max_duration_seconds: int


class RateQuoteOut(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    vehicle_type: VehicleType = VehicleType.CAR
    product_type: ProductType = ProductType.STANDARD
    average_stay_duration: int = 30
    can_drive_off: bool = True
    extensible: bool = True
    cold_down_time: int = 120
    name: str
    color: str
    description: str
    rate_steps: RateStepsOut
