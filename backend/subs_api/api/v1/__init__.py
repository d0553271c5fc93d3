"""
API v1 Module
Contains all version 1 API endpoints.
"""

from subs_api.api.v1 import subscriptions

__all__ = ["subscriptions"]
