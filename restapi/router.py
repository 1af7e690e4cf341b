"""Application configuration and router setup."""

from contextlib import asynccontextmanager

import fastapi
from fastapi.middleware import cors
from fastapi.openapi.utils import get_openapi

from components.core import init_db
from components.core.config import get_settings
from components.core.utils import get_logger
from restapi.endpoints import (
    account,
    audit,
    auth,
    budget,
    card,
    category,
    health_check,
    report,
    transaction,
    upload,
    user,
)

logger = get_logger("api")

TITLE = "Household Budget API"
DESCRIPTION = "Monthly budget planning, transaction review and planned-vs-actual reports for couples"


@asynccontextmanager
async def lifespan(app: fastapi.FastAPI):
    if get_settings().CREATE_TABLES_ON_STARTUP:
        logger.info("Creating database tables")
        await init_db.db_manager.create_tables()
    yield


def create_app() -> fastapi.FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    app = fastapi.FastAPI(
        title=TITLE,
        description=DESCRIPTION,
        version=settings.API_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        cors.CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(health_check.router)
    app.include_router(auth.router)
    app.include_router(user.router)
    app.include_router(category.router)
    app.include_router(card.router)
    app.include_router(account.router)
    app.include_router(budget.router)
    app.include_router(transaction.router)
    app.include_router(report.router)
    app.include_router(upload.router)
    app.include_router(audit.router)

    def custom_openapi():
        if app.openapi_schema:
            return app.openapi_schema
        openapi_schema = get_openapi(
            title=TITLE,
            version=settings.API_VERSION,
            description=DESCRIPTION,
            routes=app.routes,
        )
        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi

    return app
