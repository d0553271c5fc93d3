"""
Tests for request validation, run without any database.
"""

from datetime import date
from uuid import UUID

import pytest

from subs_api.core.constants import NIL_UUID
from subs_api.core.exceptions import DateRangeInvalid, InvalidMonthFormat, ValidationError
from subs_api.schemas.subscription import (
    SubscriptionCreate,
    SubscriptionListQuery,
    SubscriptionTotalQuery,
    SubscriptionUpdate,
)
from subs_api.services.validation import (
    Page,
    SubscriptionFilter,
    blank_to_none,
    validate_create,
    validate_date_range,
    validate_id,
    validate_list,
    validate_total,
    validate_update,
)


USER_ID = UUID("60601fee-2bf1-4721-ae6f-7636e79a0cba")


def _create(**overrides) -> SubscriptionCreate:
    data = {
        "user_id": USER_ID,
        "service_name": "Yandex Plus",
        "price": 400,
        "start_date": "07-2025",
    }
    data.update(overrides)
    return SubscriptionCreate(**data)


class TestHelpers:
    """Test the small shared checks."""

    def test_blank_to_none(self):
        assert blank_to_none(None) is None
        assert blank_to_none("") is None
        assert blank_to_none("x") == "x"

    def test_validate_id_rejects_nil(self):
        with pytest.raises(ValidationError, match="id is required"):
            validate_id(NIL_UUID)
        with pytest.raises(ValidationError, match="user_id is required"):
            validate_id(None, "user_id")

    def test_validate_id_returns_value(self):
        assert validate_id(USER_ID) == USER_ID

    def test_date_range_allows_same_month(self):
        assert validate_date_range("07-2025", "07-2025") == (date(2025, 7, 1), date(2025, 7, 1))

    def test_date_range_rejects_reversed(self):
        with pytest.raises(DateRangeInvalid, match="end_date cannot be before start_date"):
            validate_date_range("08-2025", "07-2025")

    def test_date_range_with_one_bound(self):
        assert validate_date_range(None, "07-2025") == (None, date(2025, 7, 1))
        assert validate_date_range("07-2025", None) == (date(2025, 7, 1), None)


class TestValidateCreate:
    """Test validate_create."""

    def test_returns_column_values(self):
        values = validate_create(_create(end_date="12-2025"))

        assert values == {
            "user_id": USER_ID,
            "service_name": "Yandex Plus",
            "price": 400,
            "start_date": date(2025, 7, 1),
            "end_date": date(2025, 12, 1),
        }

    def test_end_date_optional(self):
        assert validate_create(_create())["end_date"] is None
        assert validate_create(_create(end_date=""))["end_date"] is None

    def test_nil_user_id(self):
        with pytest.raises(ValidationError, match="user_id is required"):
            validate_create(_create(user_id=NIL_UUID))

    def test_empty_service_name(self):
        with pytest.raises(ValidationError, match="service_name is required"):
            validate_create(_create(service_name=""))

    @pytest.mark.parametrize("price", [0, -1])
    def test_non_positive_price(self, price):
        with pytest.raises(ValidationError, match="price must be greater than 0"):
            validate_create(_create(price=price))

    def test_empty_start_date(self):
        with pytest.raises(ValidationError, match="start_date is required"):
            validate_create(_create(start_date=""))

    def test_bad_start_date_format(self):
        with pytest.raises(InvalidMonthFormat, match="invalid start_date format"):
            validate_create(_create(start_date="2025-07"))

    def test_bad_end_date_format(self):
        with pytest.raises(InvalidMonthFormat, match="invalid end_date format"):
            validate_create(_create(end_date="7-2025"))

    def test_end_before_start(self):
        with pytest.raises(DateRangeInvalid):
            validate_create(_create(start_date="07-2025", end_date="06-2025"))

    def test_first_failing_check_wins(self):
        with pytest.raises(ValidationError, match="user_id is required"):
            validate_create(_create(user_id=NIL_UUID, service_name="", price=0))


class TestValidateUpdate:
    """Test validate_update."""

    def test_only_supplied_fields(self):
        assert validate_update(SubscriptionUpdate(price=500)) == {"price": 500}

    def test_nulls_are_ignored(self):
        assert validate_update(SubscriptionUpdate(price=None, service_name=None)) == {}

    def test_empty_request(self):
        assert validate_update(SubscriptionUpdate()) == {}

    def test_dates_are_parsed(self):
        values = validate_update(SubscriptionUpdate(start_date="01-2026", end_date="03-2026"))

        assert values == {"start_date": date(2026, 1, 1), "end_date": date(2026, 3, 1)}

    def test_empty_date_strings_are_ignored(self):
        assert validate_update(SubscriptionUpdate(start_date="", end_date="")) == {}

    def test_empty_service_name_is_ignored(self):
        assert validate_update(SubscriptionUpdate(service_name="", price=300)) == {"price": 300}

    def test_non_positive_price_rejected(self):
        with pytest.raises(ValidationError):
            validate_update(SubscriptionUpdate(price=0))

    def test_reversed_range_rejected(self):
        with pytest.raises(DateRangeInvalid):
            validate_update(SubscriptionUpdate(start_date="05-2026", end_date="04-2026"))

    def test_bad_month_rejected(self):
        with pytest.raises(InvalidMonthFormat):
            validate_update(SubscriptionUpdate(end_date="2026-04"))


class TestValidateList:
    """Test validate_list."""

    def test_defaults(self):
        filters, page = validate_list(SubscriptionListQuery())

        assert filters == SubscriptionFilter()
        assert page == Page(limit=50, offset=0)

    @pytest.mark.parametrize("limit", [0, -5])
    def test_non_positive_limit_falls_back(self, limit):
        _, page = validate_list(SubscriptionListQuery(limit=limit))

        assert page.limit == 50

    def test_explicit_pagination(self):
        _, page = validate_list(SubscriptionListQuery(limit=10, offset=20))

        assert page == Page(limit=10, offset=20)

    def test_negative_offset_rejected(self):
        with pytest.raises(ValidationError, match="offset cannot be negative"):
            validate_list(SubscriptionListQuery(offset=-1))

    def test_month_bounds(self):
        filters, _ = validate_list(SubscriptionListQuery(from_="01-2025", to="02-2025"))

        assert filters.from_date == date(2025, 1, 1)
        assert filters.to_date == date(2025, 2, 28)

    def test_from_alias(self):
        query = SubscriptionListQuery.model_validate({"from": "03-2025"})
        filters, _ = validate_list(query)

        assert filters.from_date == date(2025, 3, 1)

    def test_reversed_bounds_rejected(self):
        with pytest.raises(DateRangeInvalid, match="to cannot be before from"):
            validate_list(SubscriptionListQuery(from_="05-2025", to="04-2025"))

    def test_blank_and_nil_filters_are_absent(self):
        filters, _ = validate_list(
            SubscriptionListQuery(user_id=NIL_UUID, service_name="", from_="", to="")
        )

        assert filters == SubscriptionFilter()


class TestValidateTotal:
    """Test validate_total."""

    def test_requires_from(self):
        with pytest.raises(ValidationError, match="from is required"):
            validate_total(SubscriptionTotalQuery(to="12-2025"))

    def test_requires_to(self):
        with pytest.raises(ValidationError, match="to is required"):
            validate_total(SubscriptionTotalQuery(from_="01-2025"))

    def test_builds_filter(self):
        filters = validate_total(
            SubscriptionTotalQuery(user_id=USER_ID, service_name="plus", from_="01-2025", to="12-2025")
        )

        assert filters == SubscriptionFilter(
            user_id=USER_ID,
            service_name="plus",
            from_date=date(2025, 1, 1),
            to_date=date(2025, 12, 31),
        )

    def test_bad_month(self):
        with pytest.raises(InvalidMonthFormat, match="invalid from format"):
            validate_total(SubscriptionTotalQuery(from_="2025-01", to="12-2025"))
