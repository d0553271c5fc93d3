"""
Subscription Model
Stores one paid subscription (e.g. "Netflix") belonging to a user.

Months are stored as DATE columns holding the first day of the month:
"09-2025" on the wire is 2025-09-01 in the table. A row without end_date
is open-ended.
"""

from sqlalchemy import CheckConstraint, Column, Date, Integer, String, Uuid

from subs_api.models.base import BaseModel


class Subscription(BaseModel):
    """
    Subscription record.

    Rows are independent and keyed by user_id; there is no users table
    in this service, so user_id is not a foreign key.

    Example:
        - user_id: 60601fee-2bf1-4721-ae6f-7636e79a0cba
        - service_name: "Yandex Plus"
        - price: 400
        - start_date: 2025-07-01 (wire: "07-2025")
        - end_date: NULL (open-ended)
    """

    __tablename__ = "subscriptions"
    __table_args__ = (
        CheckConstraint("price > 0", name="ck_subscriptions_price_positive"),
        CheckConstraint(
            "end_date IS NULL OR end_date >= start_date",
            name="ck_subscriptions_end_after_start",
        ),
    )

    user_id = Column(
        Uuid(as_uuid=True),
        nullable=False,
        index=True,  # Index for per-user listing and totals
        comment="Owner of the subscription"
    )

    service_name = Column(
        String(255),
        nullable=False,
        comment="Free-text service label, e.g. 'Netflix'"
    )

    price = Column(
        Integer,
        nullable=False,
        comment="Monthly price in whole currency units"
    )

    start_date = Column(
        Date,
        nullable=False,
        index=True,  # Index for ordering and month range filters
        comment="First day of the first paid month"
    )

    end_date = Column(
        Date,
        nullable=True,
        comment="First day of the last paid month, NULL when open-ended"
    )

    def __repr__(self):
        return (
            f"<Subscription(id={self.id}, service_name='{self.service_name}', "
            f"price={self.price}, start_date={self.start_date})>"
        )
