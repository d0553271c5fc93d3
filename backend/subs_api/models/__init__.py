"""
Database Models Module
Contains SQLAlchemy ORM models for all database tables.

All models must be imported here to be registered with SQLAlchemy
and created during Base.metadata.create_all().
"""

from subs_api.db.base import Base
from subs_api.models.base import BaseModel
from subs_api.models.subscription import Subscription
from subs_api.models.error_log import ErrorLog

__all__ = [
    "Base",
    "BaseModel",
    "Subscription",
    "ErrorLog",
]
