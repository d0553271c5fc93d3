"""
Pydantic Schemas Module
Contains request/response schemas for API validation and serialization.
"""

from subs_api.schemas.subscription import (
    SubscriptionCreate,
    SubscriptionUpdate,
    SubscriptionListQuery,
    SubscriptionTotalQuery,
    SubscriptionResponse,
    SubscriptionListResponse,
    SubscriptionCreated,
    SubscriptionUpdated,
    SubscriptionDeleted,
    SubscriptionTotal,
)

__all__ = [
    "SubscriptionCreate",
    "SubscriptionUpdate",
    "SubscriptionListQuery",
    "SubscriptionTotalQuery",
    "SubscriptionResponse",
    "SubscriptionListResponse",
    "SubscriptionCreated",
    "SubscriptionUpdated",
    "SubscriptionDeleted",
    "SubscriptionTotal",
]
