from __future__ import annotations

import uuid
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.dates import as_utc_midnight

# prices are stored in a 32-bit INTEGER column
MAX_PRICE = 2**31 - 1


class CreateSubscriptionRequest(BaseModel):
    service_name: str = Field(min_length=1, examples=["Yandex Plus"])
    price: int = Field(ge=0, le=MAX_PRICE, examples=[400])
    user_id: str = Field(examples=["60601fee-2bf1-4721-ae6f-7636e79a0cba"])
    start_date: str = Field(examples=["07-2025"])
    end_date: str | None = Field(default=None, examples=["12-2025"])


class UpdateSubscriptionRequest(BaseModel):
    """Partial update.

    Text fields are applied only when non-empty, ``price`` whenever it is
    present (0 is a valid price). ``end_date`` sent as "" or null clears the
    stored end date; leaving the key out keeps it.
    """

    service_name: str | None = Field(default=None, examples=["Yandex Plus"])
    price: int | None = Field(default=None, ge=0, le=MAX_PRICE, examples=[400])
    user_id: str | None = Field(default=None, examples=["60601fee-2bf1-4721-ae6f-7636e79a0cba"])
    start_date: str | None = Field(default=None, examples=["07-2025"])
    end_date: str | None = Field(default=None, examples=["12-2025"])


class SubscriptionOut(BaseModel):
    id: uuid.UUID
    service_name: str
    price: int
    user_id: uuid.UUID
    start_date: datetime
    end_date: datetime | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("start_date", "end_date", "created_at", "updated_at", mode="before")
    @classmethod
    def _to_utc(cls, value):
        if isinstance(value, date):
            return as_utc_midnight(value)
        return value


class PaginationOut(BaseModel):
    page: int
    limit: int
    total: int


class SubscriptionListOut(BaseModel):
    data: list[SubscriptionOut]
    pagination: PaginationOut


class TotalCostFiltersOut(BaseModel):
    start_date: str = ""
    end_date: str = ""
    user_id: str = ""
    service_name: str = ""


class TotalCostOut(BaseModel):
    total_cost: int
    filters: TotalCostFiltersOut
