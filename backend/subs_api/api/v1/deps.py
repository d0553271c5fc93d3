"""
API Dependencies
Common dependencies used across API endpoints.

The Database and SubscriptionService are built once on startup and kept
on ``app.state``; these dependencies hand them to the endpoints. Tests
swap them out through ``app.dependency_overrides``.
"""

from fastapi import HTTPException, Request, status

from subs_api.db.session import Database
from subs_api.services.subscription_service import SubscriptionService


def get_database(request: Request) -> Database:
    """
    Database owned by the running application.

    Raises:
        HTTPException 503: If startup has not initialised the database
    """
    database = getattr(request.app.state, "database", None)
    if database is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="database is not initialised"
        )
    return database


def get_subscription_service(request: Request) -> SubscriptionService:
    """
    Subscription service bound to the application's database.

    Usage in endpoint:
        @router.get("/{subscription_id}")
        def get_subscription(service: SubscriptionService = Depends(get_subscription_service)):
            ...
    """
    service = getattr(request.app.state, "subscription_service", None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="subscription service is not initialised"
        )
    return service
