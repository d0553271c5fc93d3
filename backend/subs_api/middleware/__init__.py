"""
Middleware Module
CORS setup and error handling shared by every endpoint.
"""

from subs_api.middleware.cors import setup_cors
from subs_api.middleware.error_handler import ErrorHandlerMiddleware, register_exception_handlers

__all__ = ["setup_cors", "ErrorHandlerMiddleware", "register_exception_handlers"]
