"""
CORS Middleware Configuration
Enables Cross-Origin Resource Sharing for browser clients of the API.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from subs_api.core.config import settings


def setup_cors(app: FastAPI, origins: list[str] = None) -> None:
    """
    Configure CORS middleware for the FastAPI application.

    Args:
        app: FastAPI application instance
        origins: Allowed origin URLs; defaults to the comma-separated
            CORS_ORIGINS setting
    """
    if origins is None:
        origins = settings.cors_origins

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
