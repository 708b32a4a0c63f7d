#!/usr/bin/env python3
"""
Custom exceptions and error handlers for the web application.

Every handler answers with the same envelope:

    {"success": false, "error": "<message>", "type": "<kind>"}
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import Request, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ServiceException(Exception):
    """Base exception for service layer errors."""
    status_code = 500


class NotAuthenticatedException(ServiceException):
    """Raised when a gated view is requested without a valid session."""
    status_code = 401


class InvalidFilterException(ServiceException):
    """Raised when trending filter criteria are invalid."""
    status_code = 400


def _error_response(
    status_code: int,
    error: Any,
    error_type: str,
    extra: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None
) -> JSONResponse:
    content = {"success": False, "error": error, "type": error_type}
    if extra:
        content.update(extra)
    return JSONResponse(status_code=status_code, content=content, headers=headers)


async def service_exception_handler(
    request: Request,
    exc: ServiceException
) -> JSONResponse:
    """
    Handle service layer exceptions.

    Client errors are logged at INFO, everything else with a traceback.
    """
    if exc.status_code >= 500:
        logger.error(f"Service error in {request.url.path}: {exc}", exc_info=True)
    else:
        logger.info(f"Rejected {request.url.path}: {exc}")

    return _error_response(exc.status_code, str(exc), exc.__class__.__name__)


async def http_exception_handler(
    request: Request,
    exc: HTTPException
) -> JSONResponse:
    """Handle FastAPI HTTP exceptions with consistent format."""
    return _error_response(
        exc.status_code,
        exc.detail,
        "HTTPException",
        headers=getattr(exc, "headers", None)
    )


def _validation_details(exc: RequestValidationError) -> List[Dict[str, Any]]:
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
        for err in exc.errors()
    ]


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    return _error_response(
        422,
        "Invalid request",
        "ValidationError",
        extra={"details": _validation_details(exc)}
    )


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle unexpected exceptions.

    Args:
        request: The FastAPI request.
        exc: The exception.

    Returns:
        JSONResponse with a generic message; details go to the log only.
    """
    logger.exception(f"Unexpected error in {request.url.path}")
    return _error_response(500, "Internal server error", "InternalError")
