"""
Subscription Schemas
Pydantic models for Subscription API request/response validation.

Dates travel as "MM-YYYY" strings in both directions. Request schemas only
check types; the business rules (positive price, month format, ordered
ranges) live in services.validation so they run the same way for HTTP and
direct service calls.
"""

from datetime import date
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from subs_api.core.month import format_month


class SubscriptionCreate(BaseModel):
    """
    Schema for creating a subscription.

    Used by:
        POST /api/v1/subscriptions

    Request body example:
    {
        "service_name": "Yandex Plus",
        "price": 400,
        "user_id": "60601fee-2bf1-4721-ae6f-7636e79a0cba",
        "start_date": "07-2025"
    }
    """
    user_id: UUID = Field(..., description="Owner of the subscription")
    service_name: str = Field(..., description="Service label, e.g. 'Netflix'")
    price: int = Field(..., description="Monthly price, must be greater than 0")
    start_date: str = Field(..., description="First paid month, MM-YYYY")
    end_date: Optional[str] = Field(None, description="Last paid month, MM-YYYY (optional)")


class SubscriptionUpdate(BaseModel):
    """
    Schema for a partial subscription update.

    Used by:
        PUT /api/v1/subscriptions/{id}

    All fields are optional. Fields that are missing or null keep their
    stored value.
    """
    service_name: Optional[str] = Field(None, description="New service label")
    price: Optional[int] = Field(None, description="New price, must be greater than 0")
    start_date: Optional[str] = Field(None, description="New first month, MM-YYYY")
    end_date: Optional[str] = Field(None, description="New last month, MM-YYYY")


class SubscriptionListQuery(BaseModel):
    """
    Filters and pagination for listing subscriptions.

    Every filter is optional and filters combine with AND. ``from`` and
    ``to`` bound start_date by month, both inclusive.
    """
    user_id: Optional[UUID] = None
    service_name: Optional[str] = None
    from_: Optional[str] = Field(None, alias="from")
    to: Optional[str] = None
    limit: Optional[int] = None
    offset: Optional[int] = None

    model_config = ConfigDict(populate_by_name=True)


class SubscriptionTotalQuery(BaseModel):
    """Filters for the price total. ``from`` and ``to`` are required."""
    user_id: Optional[UUID] = None
    service_name: Optional[str] = None
    from_: Optional[str] = Field(None, alias="from")
    to: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class SubscriptionResponse(BaseModel):
    """
    Complete Subscription response schema.

    Returned by:
        - GET /api/v1/subscriptions/{id}
        - GET /api/v1/subscriptions (inside SubscriptionListResponse)
    """
    id: UUID
    user_id: UUID
    service_name: str
    price: int
    start_date: str
    end_date: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def render_month(cls, v):
        """Stored dates are rendered back to MM-YYYY."""
        if isinstance(v, date):
            return format_month(v)
        return v


class SubscriptionListResponse(BaseModel):
    """Page of subscriptions ordered by start_date, with the pagination used."""
    subscriptions: list[SubscriptionResponse]
    limit: int
    offset: int


class SubscriptionCreated(BaseModel):
    id: UUID


class SubscriptionUpdated(BaseModel):
    updated: bool


class SubscriptionDeleted(BaseModel):
    deleted: bool = True


class SubscriptionTotal(BaseModel):
    total: int
