"""
Main FastAPI Application
Entry point for the Subscriptions API.

This module creates and configures the FastAPI application instance,
sets up middleware, and defines the health check endpoint.
"""

import logging

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse

from subs_api.api.v1.deps import get_database
from subs_api.api.v1.router import api_router
from subs_api.core.config import settings
from subs_api.db.session import Database
from subs_api.middleware.cors import setup_cors
from subs_api.middleware.error_handler import ErrorHandlerMiddleware, register_exception_handlers
from subs_api.services.error_logging import configure_error_logging, configure_logging
from subs_api.services.subscription_service import SubscriptionService


logger = logging.getLogger(__name__)

APP_VERSION = "1.0.0"


# Create FastAPI application instance
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    description="""
    Subscriptions API - record users' recurring online subscriptions.

    Features:
    - Create, read, update and delete subscription records
    - Filtered, paginated listing
    - Total subscription cost over a month range
    """
)


# Setup CORS middleware
setup_cors(app)

# Setup error handling
# Domain exceptions map to 400/404/500; anything else is caught and logged
register_exception_handlers(app)
app.add_middleware(ErrorHandlerMiddleware)


@app.on_event("startup")
def startup_event():
    """
    Application startup handler.

    Tasks performed:
    - Configure console and file logging
    - Build the connection pool and create missing tables
    - Configure the error logging system
    - Expose the database and subscription service on app.state
    """
    file_logging = configure_logging(settings.LOG_LEVEL, settings.LOG_DIR)
    if not file_logging:
        logger.warning("File logging disabled, logging to console only")

    database = Database.from_settings(settings)
    database.init()
    database.create_schema()
    logger.info("Database tables created/verified")

    configure_error_logging(database.session_factory)

    app.state.database = database
    app.state.subscription_service = SubscriptionService(database)
    logger.info(f"API documentation available at http://{settings.APP_HOST}:{settings.APP_PORT}/docs")


@app.on_event("shutdown")
def shutdown_event():
    """
    Application shutdown handler.

    Closes every pooled connection.
    """
    configure_error_logging(None)
    database = getattr(app.state, "database", None)
    if database is not None:
        database.close()
        app.state.database = None
    logger.info("Application shutdown complete")


@app.get(
    "/health",
    tags=["Health"],
    summary="Health Check",
    description="Verify the API is running and the database answers"
)
def health_check(database: Database = Depends(get_database)):
    """
    Health check endpoint.

    Returns:
        200 when the database answers a trivial query, 503 otherwise

    Example Response:
        {
            "status": "ok",
            "database": "ok",
            "version": "1.0.0",
            "api": "Subscriptions API"
        }
    """
    database_ok = database.ping()
    return JSONResponse(
        status_code=200 if database_ok else 503,
        content={
            "status": "ok" if database_ok else "degraded",
            "database": "ok" if database_ok else "unavailable",
            "version": APP_VERSION,
            "api": settings.PROJECT_NAME
        }
    )


@app.get(
    "/",
    tags=["Root"],
    summary="API Root",
    description="Root endpoint with API information"
)
async def root():
    """
    API root endpoint.

    Provides basic information about the API and links to documentation.
    """
    return {
        "message": f"Welcome to {settings.PROJECT_NAME}",
        "version": APP_VERSION,
        "docs": "/docs",
        "redoc": "/redoc",
        "health": "/health"
    }


# Include API v1 router
# All v1 endpoints are prefixed with /api/v1
app.include_router(
    api_router,
    prefix=f"/api/{settings.API_VERSION}",
)
