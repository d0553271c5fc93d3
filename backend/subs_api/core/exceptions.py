"""Exception types raised by the subscription domain and mapped to HTTP responses."""


class AppError(Exception):
    """Base app exception."""


class ValidationError(AppError):
    """Caller-fixable input error. Raised before anything touches the store."""


class InvalidMonthFormat(ValidationError):
    """A month value is not in MM-YYYY form."""

    def __init__(self, field: str, value: str):
        self.field = field
        self.value = value
        super().__init__(f"invalid {field} format, expected MM-YYYY")


class DateRangeInvalid(ValidationError):
    """The end of a month range precedes its start."""

    def __init__(self, start_field: str = "start_date", end_field: str = "end_date"):
        self.start_field = start_field
        self.end_field = end_field
        super().__init__(f"{end_field} cannot be before {start_field}")


class SubscriptionNotFound(AppError):
    """No subscription row matched the given id."""

    def __init__(self, subscription_id):
        self.subscription_id = subscription_id
        super().__init__(f"subscription with id {subscription_id} not found")


class PersistenceError(AppError):
    """
    The store was unavailable or a statement failed.

    Carries the name of the operation that failed; the original driver
    error is chained as ``__cause__``.
    """

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"{operation} failed")
