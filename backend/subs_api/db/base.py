"""
SQLAlchemy Declarative Base
Defines the base class for all SQLAlchemy models.

All database models should inherit from the Base class defined here.
Base.metadata is what Database.create_schema() and the migrate CLI
commands operate on.
"""

from sqlalchemy.orm import declarative_base

# Declarative base class for all models
# Subscription and ErrorLog inherit from this base (through models.base.BaseModel).
Base = declarative_base()
