"""
Error Handler Middleware

Maps every failure to the portfolio error envelope:

    {"error": {"code": "NOT_FOUND", "message": "Category with id '...' not found", "details": {}}}

Mapping:
========
    PortfolioException           → its own status and code
    RequestValidationError       → 400 VALIDATION_ERROR, field errors in details
    pydantic ValidationError     → same as above (raised while building bodies)
    anything else                → 500 INTERNAL_ERROR, nothing leaked to the client
"""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

from portfolio.shared.core.exceptions import PortfolioException, ValidationError
from portfolio.shared.core.logging import logger


def _render(exc: PortfolioException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def _invalid_request(request: Request, errors: Any) -> JSONResponse:
    errors = jsonable_encoder(errors)
    logger.warning("Request validation failed", path=request.url.path, errors=errors)
    return _render(ValidationError("Request validation failed", {"errors": errors}))


def setup_exception_handlers(app: FastAPI) -> None:
    """Register the handlers on ``app``."""

    @app.exception_handler(PortfolioException)
    async def portfolio_exception_handler(request: Request, exc: PortfolioException) -> JSONResponse:
        log = logger.error if exc.status_code >= 500 else logger.warning
        log(
            "Request failed",
            path=request.url.path,
            method=request.method,
            status_code=exc.status_code,
            error_code=exc.error_code,
            message=exc.message,
        )
        return _render(exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _invalid_request(request, exc.errors())

    @app.exception_handler(PydanticValidationError)
    async def model_validation_handler(request: Request, exc: PydanticValidationError) -> JSONResponse:
        return _invalid_request(request, exc.errors())

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "Unhandled error",
            path=request.url.path,
            method=request.method,
            error_type=type(exc).__name__,
            error=str(exc),
            exc_info=True,
        )
        return _render(PortfolioException("An unexpected error occurred"))
