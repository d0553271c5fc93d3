"""
Subscriptions API Endpoints
CRUD and aggregation over users' recurring service subscriptions.

Endpoints:
    - POST   /subscriptions - Create subscription
    - GET    /subscriptions - List subscriptions with filters and pagination
    - GET    /subscriptions/total - Sum prices over a month range
    - GET    /subscriptions/{id} - Get single subscription
    - PUT    /subscriptions/{id} - Partially update subscription
    - DELETE /subscriptions/{id} - Delete subscription

Months travel as MM-YYYY strings. Validation failures answer 400, store
failures a generic 500 (see middleware.error_handler).
"""

from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException, Query, status

from subs_api.api.v1.deps import get_subscription_service
from subs_api.schemas.subscription import (
    SubscriptionCreate,
    SubscriptionCreated,
    SubscriptionDeleted,
    SubscriptionListQuery,
    SubscriptionListResponse,
    SubscriptionResponse,
    SubscriptionTotal,
    SubscriptionTotalQuery,
    SubscriptionUpdate,
    SubscriptionUpdated,
)
from subs_api.services.subscription_service import SubscriptionService


router = APIRouter(prefix="/subscriptions", tags=["Subscriptions"])


@router.post("", response_model=SubscriptionCreated, status_code=status.HTTP_201_CREATED)
def create_subscription(
    data: SubscriptionCreate,
    service: SubscriptionService = Depends(get_subscription_service)
):
    """
    Create a new subscription.

    end_date is optional; when given it must not precede start_date.
    """
    return service.create(data)


@router.get("", response_model=SubscriptionListResponse)
def list_subscriptions(
    user_id: Optional[UUID] = Query(None, description="Only this user's subscriptions"),
    service_name: Optional[str] = Query(None, description="Case-insensitive substring of the service name"),
    from_: Optional[str] = Query(None, alias="from", description="Earliest start month, MM-YYYY"),
    to: Optional[str] = Query(None, description="Latest start month, MM-YYYY"),
    limit: Optional[int] = Query(None, description="Page size, defaults to 50"),
    offset: Optional[int] = Query(None, description="Rows to skip, defaults to 0"),
    service: SubscriptionService = Depends(get_subscription_service)
):
    """
    List subscriptions ordered by start month.
    """
    query = SubscriptionListQuery(
        user_id=user_id,
        service_name=service_name,
        from_=from_,
        to=to,
        limit=limit,
        offset=offset,
    )
    return service.list_subscriptions(query)


# Declared before /{subscription_id} so "total" is not parsed as an id
@router.get("/total", response_model=SubscriptionTotal)
def total_subscriptions_price(
    user_id: Optional[UUID] = Query(None, description="Only this user's subscriptions"),
    service_name: Optional[str] = Query(None, description="Case-insensitive substring of the service name"),
    from_: Optional[str] = Query(None, alias="from", description="First month of the range, MM-YYYY (required)"),
    to: Optional[str] = Query(None, description="Last month of the range, MM-YYYY (required)"),
    service: SubscriptionService = Depends(get_subscription_service)
):
    """
    Sum of prices of subscriptions whose start month falls in [from, to].
    """
    query = SubscriptionTotalQuery(
        user_id=user_id,
        service_name=service_name,
        from_=from_,
        to=to,
    )
    return service.total_price(query)


@router.get("/{subscription_id}", response_model=SubscriptionResponse)
def get_subscription(
    subscription_id: UUID,
    service: SubscriptionService = Depends(get_subscription_service)
):
    """
    Get a subscription by ID.
    """
    subscription = service.get_info(subscription_id)
    if subscription is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"subscription with id {subscription_id} not found"
        )
    return subscription


@router.put("/{subscription_id}", response_model=SubscriptionUpdated)
def update_subscription(
    subscription_id: UUID,
    data: SubscriptionUpdate,
    service: SubscriptionService = Depends(get_subscription_service)
):
    """
    Partially update a subscription.

    Only supplied fields change. Answers {"updated": false} when the id
    does not exist.
    """
    return service.update(subscription_id, data)


@router.delete("/{subscription_id}", response_model=SubscriptionDeleted)
def delete_subscription(
    subscription_id: UUID,
    service: SubscriptionService = Depends(get_subscription_service)
):
    """
    Delete a subscription. 404 when the id does not exist.
    """
    return service.delete(subscription_id)
