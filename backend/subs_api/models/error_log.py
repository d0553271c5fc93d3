"""
Error Log Model
Stores unexpected application errors for debugging and monitoring.

Captures:
- Timestamp and severity
- Request details
- Full error traceback
- Additional context data (sanitised)
"""

from sqlalchemy import Column, String, Text, JSON, DateTime
from datetime import datetime, timezone

from subs_api.models.base import BaseModel


class ErrorLog(BaseModel):
    """
    Error Log Model

    One row per logged failure. The row id is returned to clients as
    ``error_id`` in generic 500 responses so a report can be matched to
    its log record.
    """
    __tablename__ = "error_logs"

    # Timestamp when error occurred
    timestamp = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
        index=True
    )

    # Error classification
    error_type = Column(String(255), nullable=False, index=True)  # e.g., "PersistenceError"
    severity = Column(String(20), default="error", nullable=False)  # warning, error, critical
    operation = Column(String(100), nullable=True)  # e.g., "create subscription"

    # Location info
    module = Column(String(255), nullable=True)
    function = Column(String(255), nullable=True)
    line_number = Column(String(20), nullable=True)

    # Request context
    request_method = Column(String(10), nullable=True)
    request_path = Column(String(500), nullable=True)
    request_query = Column(Text, nullable=True)
    client_ip = Column(String(50), nullable=True)

    # Error details
    message = Column(Text, nullable=False)
    stack_trace = Column(Text, nullable=True)
    context_data = Column(JSON, nullable=True)

    def __repr__(self):
        return f"<ErrorLog(id={self.id}, type={self.error_type}, message={self.message[:50]}...)>"
