"""
Centralized error handlers for FastAPI.

Keeps the external API contract: every failure is answered with
HTTP 200 and a JSON body of the form ``{"error": "..."}``.
Consumers detect failures by the presence of the ``error`` key.
No stack traces or internal details are exposed to clients.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from folio_gateway.domain.portfolio.errors import PortfolioDomainError
from folio_gateway.shared.security.headers import RESPONSE_HEADERS

logger = logging.getLogger(__name__)

HTTP_200 = 200
INTERNAL_ERROR_MESSAGE = "Internal server error"


def error_response(error: str) -> JSONResponse:
    """Build the JSON error body used by every endpoint.

    Carries the fixed response headers itself: the catch-all handler
    answers from outside the middleware stack.
    """
    return JSONResponse(
        status_code=HTTP_200,
        content={"error": error},
        headers=RESPONSE_HEADERS,
    )


def _describe_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        location = ".".join(str(item) for item in err.get("loc", ()))
        parts.append(f"{location}: {err.get('msg', 'invalid')}")
    return "; ".join(parts)


def register_error_handlers(app: FastAPI) -> None:
    """Register all error handlers on the FastAPI application.

    Args:
        app: The FastAPI application instance.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_validation(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle malformed query or path parameters."""
        detail = _describe_validation_errors(exc)
        logger.warning("Invalid request: %s", detail)
        return error_response(f"Invalid request: {detail}")

    @app.exception_handler(PortfolioDomainError)
    async def handle_portfolio_domain(
        _request: Request, exc: PortfolioDomainError
    ) -> JSONResponse:
        """Catch-all for domain errors that escaped the aggregation service."""
        logger.error("Unhandled portfolio domain error: %s", exc.message)
        return error_response(exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception) -> JSONResponse:
        """Catch-all for unexpected errors. Never exposes internals."""
        logger.exception("Unexpected error: %s", type(exc).__name__)
        return error_response(INTERNAL_ERROR_MESSAGE)
