"""
Subscription Service - Business Logic Layer
Create, read, list, update, delete and total subscription records.

Every public method validates its input first (services.validation), then
acquires one session from the Database it was constructed with, runs a
single statement and releases the session. Store failures are logged and
re-raised as PersistenceError; nothing is retried.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from subs_api.core.exceptions import (
    DateRangeInvalid,
    PersistenceError,
    SubscriptionNotFound,
    ValidationError,
)
from subs_api.db.session import Database
from subs_api.models.subscription import Subscription
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
from subs_api.services.validation import (
    SubscriptionFilter,
    validate_create,
    validate_id,
    validate_list,
    validate_total,
    validate_update,
)


logger = logging.getLogger(__name__)


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so user input matches literally."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def filter_conditions(filters: SubscriptionFilter) -> list:
    """
    Translate a normalized filter into SQLAlchemy conditions.

    Only the filters that are set produce a condition; all values are
    bound parameters.
    """
    conditions = []
    if filters.user_id is not None:
        conditions.append(Subscription.user_id == filters.user_id)
    if filters.service_name is not None:
        conditions.append(
            Subscription.service_name.ilike(f"%{escape_like(filters.service_name)}%", escape="\\")
        )
    if filters.from_date is not None:
        conditions.append(Subscription.start_date >= filters.from_date)
    if filters.to_date is not None:
        conditions.append(Subscription.start_date <= filters.to_date)
    return conditions


class SubscriptionService:
    """
    Record service for subscriptions.

    Args:
        database: Initialised Database owning the connection pool
    """

    def __init__(self, database: Database):
        self.database = database

    @contextmanager
    def _validating(self, operation: str) -> Iterator[None]:
        try:
            yield
        except ValidationError as e:
            logger.warning(f"[Subscriptions] Rejected {operation}: {e}")
            raise

    @contextmanager
    def _unit_of_work(self, operation: str) -> Iterator[Session]:
        try:
            with self.database.session() as db:
                yield db
        except SQLAlchemyError as e:
            logger.error(f"[Subscriptions] Failed to {operation}: {e}")
            raise PersistenceError(operation) from e

    def create(self, request: SubscriptionCreate) -> SubscriptionCreated:
        """
        Insert a new subscription.

        Returns:
            SubscriptionCreated with the generated id

        Raises:
            ValidationError: bad input, nothing was written
            PersistenceError: the insert failed
        """
        with self._validating("create"):
            values = validate_create(request)

        with self._unit_of_work("create subscription") as db:
            subscription = Subscription(**values)
            db.add(subscription)
            db.flush()
            subscription_id = subscription.id

        logger.info(
            f"[Subscriptions] Created {subscription_id} "
            f"(user {values['user_id']}, service '{values['service_name']}')"
        )
        return SubscriptionCreated(id=subscription_id)

    def get_info(self, subscription_id: UUID) -> Optional[SubscriptionResponse]:
        """
        Fetch one subscription.

        Returns:
            SubscriptionResponse, or None when no row has this id
        """
        with self._validating("get"):
            validate_id(subscription_id)

        with self._unit_of_work("get subscription") as db:
            subscription = db.get(Subscription, subscription_id)
            if subscription is None:
                logger.warning(f"[Subscriptions] {subscription_id} not found")
                return None
            return SubscriptionResponse.model_validate(subscription)

    def list_subscriptions(self, request: SubscriptionListQuery) -> SubscriptionListResponse:
        """
        List subscriptions matching the optional filters.

        Results are ordered by start_date ascending and paginated with
        limit (default 50) and offset (default 0).
        """
        with self._validating("list"):
            filters, page = validate_list(request)

        with self._unit_of_work("list subscriptions") as db:
            rows = (
                db.query(Subscription)
                .filter(*filter_conditions(filters))
                .order_by(Subscription.start_date.asc())
                .limit(page.limit)
                .offset(page.offset)
                .all()
            )
            subscriptions = [SubscriptionResponse.model_validate(row) for row in rows]

        return SubscriptionListResponse(
            subscriptions=subscriptions,
            limit=page.limit,
            offset=page.offset,
        )

    def update(self, subscription_id: UUID, request: SubscriptionUpdate) -> SubscriptionUpdated:
        """
        Apply a partial update.

        Supplied fields overwrite, everything else keeps its stored value.

        Returns:
            SubscriptionUpdated(updated=False) when no row has this id

        Raises:
            ValidationError: bad input, or the new end_date would precede
                the stored start_date (or the reverse)
            PersistenceError: the update failed
        """
        with self._validating("update"):
            validate_id(subscription_id)
            values = validate_update(request)
        values["updated_at"] = func.now()

        try:
            with self._unit_of_work("update subscription") as db:
                matched = (
                    db.query(Subscription)
                    .filter(Subscription.id == subscription_id)
                    .update(values, synchronize_session=False)
                )
        except PersistenceError as e:
            if isinstance(e.__cause__, IntegrityError):
                # only the date order check can fail here, price was validated
                raise DateRangeInvalid() from e
            raise

        if matched == 0:
            logger.warning(f"[Subscriptions] Update skipped, {subscription_id} not found")
        else:
            logger.info(f"[Subscriptions] Updated {subscription_id}: {sorted(k for k in values if k != 'updated_at')}")
        return SubscriptionUpdated(updated=matched > 0)

    def delete(self, subscription_id: UUID) -> SubscriptionDeleted:
        """
        Hard-delete a subscription.

        Raises:
            SubscriptionNotFound: no row has this id
            PersistenceError: the delete failed
        """
        with self._validating("delete"):
            validate_id(subscription_id)

        with self._unit_of_work("delete subscription") as db:
            deleted = (
                db.query(Subscription)
                .filter(Subscription.id == subscription_id)
                .delete(synchronize_session=False)
            )

        if deleted == 0:
            logger.warning(f"[Subscriptions] Delete failed, {subscription_id} not found")
            raise SubscriptionNotFound(subscription_id)

        logger.info(f"[Subscriptions] Deleted {subscription_id}")
        return SubscriptionDeleted(deleted=True)

    def total_price(self, request: SubscriptionTotalQuery) -> SubscriptionTotal:
        """
        Sum prices of subscriptions starting within [from, to].

        user_id and service_name narrow the sum when given. Returns 0 when
        nothing matches.
        """
        with self._validating("total"):
            filters = validate_total(request)

        with self._unit_of_work("total subscriptions price") as db:
            total = (
                db.query(func.coalesce(func.sum(Subscription.price), 0))
                .filter(*filter_conditions(filters))
                .scalar()
            )

        return SubscriptionTotal(total=int(total or 0))
