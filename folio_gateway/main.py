"""
Application entry point.

Creates the FastAPI application and wires together:
- Routers (health, portfolio)
- Error handlers (always-200 ``{"error": ...}`` contract)
- Middleware (CORS, response headers)
- Logging configuration
- The provider container backing the aggregation service

No business logic belongs here.
"""

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from folio_gateway.core.config import settings
from folio_gateway.interfaces.health import router as health_router
from folio_gateway.interfaces.portfolio.dependencies import (
    ProviderContainer,
    build_db_engine,
    build_sql_providers,
)
from folio_gateway.interfaces.portfolio.router import router as portfolio_router
from folio_gateway.shared.errors.handlers import register_error_handlers
from folio_gateway.shared.logging import announce_server, configure_logging
from folio_gateway.shared.security.headers import ResponseHeadersMiddleware


def create_app(providers: ProviderContainer | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    This is the composition root of the application.

    Args:
        providers: Provider handles to serve from. Defaults to the SQL
            adapters over ``settings.database_url``.

    Returns:
        A fully configured FastAPI application instance.
    """
    configure_logging(level=settings.log_level)

    app = FastAPI(
        title=settings.project_name,
        version=settings.version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    if providers is None:
        providers = build_sql_providers(build_db_engine(settings.database_url))
    app.state.providers = providers

    # --- Middleware ---
    app.add_middleware(ResponseHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    # --- Error Handlers ---
    register_error_handlers(app)

    # --- Routers ---
    app.include_router(health_router)
    app.include_router(portfolio_router)

    return app


app = create_app()


def run() -> None:
    """Serve the application with uvicorn on the configured host and port."""
    announce_server(settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
