"""
Base Model Class
Provides common fields and functionality for all database models.

All application models should inherit from BaseModel instead of Base directly.
This ensures consistent ID format (UUID) and automatic timestamp tracking.
"""

from sqlalchemy import Column, DateTime, Uuid, func
import uuid

from subs_api.db.base import Base


class BaseModel(Base):
    """
    Abstract base model with common fields for all tables.

    Provides:
    - UUID primary key, generated on insert and never changed afterwards
    - created_at timestamp (automatically set on insert)
    - updated_at timestamp (automatically updated on modification)

    Example:
        class Subscription(BaseModel):
            __tablename__ = "subscriptions"
            service_name = Column(String, nullable=False)
            # id, created_at, updated_at are inherited automatically
    """

    # Make this an abstract base class (no table created for BaseModel itself)
    __abstract__ = True

    # Primary Key: UUID
    # Generated application-side so the id is known right after flush().
    id = Column(
        Uuid(as_uuid=True),  # Native UUID in PostgreSQL, CHAR(32) elsewhere
        primary_key=True,
        default=uuid.uuid4,  # Auto-generate UUID v4 on insert
        nullable=False
    )

    # Timestamp: Record Creation
    # server_default ensures the database sets this value even if not provided.
    created_at = Column(
        DateTime(timezone=True),  # Store with timezone info
        server_default=func.now(),
        nullable=False
    )

    # Timestamp: Last Update
    # onupdate refreshes this field on every UPDATE statement, including the
    # bulk UPDATE issued by partial subscription updates.
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),  # Initial value on insert
        onupdate=func.now(),  # Update on every modification
        nullable=False
    )

    def __repr__(self):
        return f"<{self.__class__.__name__}(id={self.id})>"
