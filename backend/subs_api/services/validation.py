"""
Subscription Request Validation
Pure checks over request schemas, run before any database access.

Each validate_* function either raises a ValidationError subclass or
returns the request normalized for the query layer: months parsed to
dates, empty strings turned into "absent", pagination defaults applied.
The first failing check wins.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Optional
from uuid import UUID

from subs_api.core.constants import DEFAULT_LIST_LIMIT, DEFAULT_LIST_OFFSET, NIL_UUID
from subs_api.core.exceptions import DateRangeInvalid, ValidationError
from subs_api.core.month import end_of_month, parse_month
from subs_api.schemas.subscription import (
    SubscriptionCreate,
    SubscriptionListQuery,
    SubscriptionTotalQuery,
    SubscriptionUpdate,
)


@dataclass(frozen=True)
class SubscriptionFilter:
    """
    Normalized filter for listing and totals.

    from_date is the first day of the "from" month and to_date the last
    day of the "to" month, so both bounds are inclusive on start_date.
    """
    user_id: Optional[UUID] = None
    service_name: Optional[str] = None
    from_date: Optional[date] = None
    to_date: Optional[date] = None


@dataclass(frozen=True)
class Page:
    limit: int = DEFAULT_LIST_LIMIT
    offset: int = DEFAULT_LIST_OFFSET


def blank_to_none(value: Optional[str]) -> Optional[str]:
    """Empty strings count as "not supplied"."""
    if value is None or value == "":
        return None
    return value


def validate_id(value: Optional[UUID], field: str = "id") -> UUID:
    if value is None or value == NIL_UUID:
        raise ValidationError(f"{field} is required")
    return value


def validate_date_range(
    start: Optional[str],
    end: Optional[str],
    start_field: str = "start_date",
    end_field: str = "end_date",
) -> tuple[Optional[date], Optional[date]]:
    """
    Parse the present bounds of a month range and check their order.

    Returns:
        (start, end) as first-of-month dates, None for absent bounds

    Raises:
        InvalidMonthFormat: a present bound is not MM-YYYY
        DateRangeInvalid: both present and end precedes start
    """
    start_date = parse_month(start, start_field) if start is not None else None
    end_date = parse_month(end, end_field) if end is not None else None

    if start_date is not None and end_date is not None and end_date < start_date:
        raise DateRangeInvalid(start_field, end_field)

    return start_date, end_date


def validate_price(price: Optional[int]) -> None:
    if price is not None and price <= 0:
        raise ValidationError("price must be greater than 0")


def validate_create(request: SubscriptionCreate) -> dict[str, Any]:
    """
    Check a create request.

    Returns:
        Column values for the new row
    """
    validate_id(request.user_id, "user_id")
    if not request.service_name:
        raise ValidationError("service_name is required")
    if request.price is None:
        raise ValidationError("price is required")
    validate_price(request.price)

    start = blank_to_none(request.start_date)
    if start is None:
        raise ValidationError("start_date is required")
    start_date, end_date = validate_date_range(start, blank_to_none(request.end_date))

    return {
        "user_id": request.user_id,
        "service_name": request.service_name,
        "price": request.price,
        "start_date": start_date,
        "end_date": end_date,
    }


def validate_update(request: SubscriptionUpdate) -> dict[str, Any]:
    """
    Check a partial update.

    Only fields that were supplied with a non-null, non-empty value are
    returned; everything else keeps its stored value. An empty result is
    valid and updates nothing but the timestamp.
    """
    supplied = {
        field: value
        for field, value in request.model_dump(exclude_unset=True).items()
        if value is not None and value != ""
    }

    validate_price(supplied.get("price"))

    start = supplied.pop("start_date", None)
    end = supplied.pop("end_date", None)
    start_date, end_date = validate_date_range(start, end)
    if start_date is not None:
        supplied["start_date"] = start_date
    if end_date is not None:
        supplied["end_date"] = end_date

    return supplied


def validate_list(request: SubscriptionListQuery) -> tuple[SubscriptionFilter, Page]:
    """
    Check list filters and resolve pagination.

    limit falls back to the default when absent or not positive; a
    negative offset is rejected rather than clamped.
    """
    if request.offset is not None and request.offset < 0:
        raise ValidationError("offset cannot be negative")

    filters = _build_filter(
        request.user_id,
        request.service_name,
        blank_to_none(request.from_),
        blank_to_none(request.to),
    )

    limit = request.limit if request.limit is not None and request.limit > 0 else DEFAULT_LIST_LIMIT
    offset = request.offset if request.offset is not None else DEFAULT_LIST_OFFSET
    return filters, Page(limit=limit, offset=offset)


def validate_total(request: SubscriptionTotalQuery) -> SubscriptionFilter:
    """Check total filters. Both range bounds are mandatory here."""
    from_ = blank_to_none(request.from_)
    to = blank_to_none(request.to)
    if from_ is None:
        raise ValidationError("from is required")
    if to is None:
        raise ValidationError("to is required")

    return _build_filter(request.user_id, request.service_name, from_, to)


def _build_filter(
    user_id: Optional[UUID],
    service_name: Optional[str],
    from_: Optional[str],
    to: Optional[str],
) -> SubscriptionFilter:
    from_date, _ = validate_date_range(from_, to, "from", "to")
    to_date = end_of_month(to, "to") if to is not None else None

    return SubscriptionFilter(
        user_id=user_id if user_id != NIL_UUID else None,
        service_name=blank_to_none(service_name),
        from_date=from_date,
        to_date=to_date,
    )
