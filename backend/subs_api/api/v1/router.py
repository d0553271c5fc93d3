"""
API v1 Main Router
Aggregates all v1 API endpoints into a single router.

Structure:
- /subscriptions/* - Subscription CRUD and price totals
"""

from fastapi import APIRouter

from subs_api.api.v1 import subscriptions


# Create main v1 router
# This router will be included in main.py with prefix /api/v1
api_router = APIRouter()


# Include subscription endpoints
# Endpoints: POST/GET /subscriptions, GET /subscriptions/total,
# GET/PUT/DELETE /subscriptions/{id}
api_router.include_router(subscriptions.router)
