"""
FastAPI application for the Tax Genius Pro access and attribution core.

Routes:
- GET    /api/me/access            : effective role and permissions
- POST   /api/admin/view-as        : preview the app as another role
- DELETE /api/admin/view-as        : stop previewing
- GET    /api/admin/permissions/{role}/editable : permission manager data
- GET/POST /api/admin/route-restrictions : manage route restrictions
- GET    /api/admin/route-restrictions/check : preview a restriction decision
- DELETE /api/admin/route-restrictions/{id} : delete a restriction
- GET    /api/attribution          : resolve referral attribution
- GET    /api/tracking-codes/validate : check a custom tracking code
- GET    /ref/{code}               : referral link
- GET    /dashboard, /dashboard/*, /admin/* : gated pages
- GET    /health                   : health check
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from starlette.middleware.httpsredirect import HTTPSRedirectMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from config.settings import Settings, get_settings, validate_startup_security
from database.connection import close_engine, init_db
from middleware.correlation import CorrelationIdMiddleware, configure_logging, get_correlation_id
from web.dependencies import AccessRedirect
from web.routers import access_router, attribution_router, health_router, pages_router, restrictions_router

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, exit_on_insecure: bool = True) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Settings to use; loaded from the environment when None
        exit_on_insecure: Exit the process (rather than raise) on insecure production config
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    validate_startup_security(settings, exit_on_failure=exit_on_insecure)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_db(settings)
        logger.info(f"{settings.name} {settings.version} started ({settings.environment})")
        yield
        close_engine()

    app = FastAPI(
        title=settings.name,
        version=settings.version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(CorrelationIdMiddleware)
    if settings.enforce_https:
        app.add_middleware(HTTPSRedirectMiddleware)

    # =========================================================================
    # EXCEPTION HANDLERS
    # =========================================================================

    @app.exception_handler(AccessRedirect)
    async def access_redirect_handler(request: Request, exc: AccessRedirect):
        return RedirectResponse(exc.url, status_code=303)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Catch-all handler for unexpected exceptions."""
        logger.exception(f"Unexpected error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_error",
                "message": "Something went wrong. Please try again.",
                "correlation_id": get_correlation_id() or getattr(request.state, "correlation_id", None),
            },
        )

    # =========================================================================
    # ROUTERS
    # =========================================================================

    app.include_router(health_router)
    app.include_router(access_router)
    app.include_router(restrictions_router)
    app.include_router(attribution_router)
    app.include_router(pages_router)

    return app
