from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional


class PayTicketIn(BaseModel):
    plate: Optional[str] = None

    @field_validator("plate", mode="before")
    @classmethod
    def _numeric_plate_as_text(cls, value):
        # kiosk keyboards may send digit-only plates as JSON numbers; 0 counts as missing
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value) if value else None
        return value


class PayTicketOut(BaseModel):
    success: bool
    message: str


class ValidateTicketOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    valid: bool
    ticket_id: Optional[int] = Field(default=None, alias="ticketId")
    message: Optional[str] = None


class ErrorOut(BaseModel):
    error: str
