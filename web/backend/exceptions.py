#!/usr/bin/env python3
"""
Custom exceptions and error handlers for the web application.
"""

import logging
from fastapi import Request, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from pipeline.errors import PipelineError

logger = logging.getLogger(__name__)


class ServiceException(Exception):
    """Base exception for service layer errors."""
    pass


class RequestNotFoundException(ServiceException):
    """Raised when a coordination request is not found."""
    pass


class InvalidRequestStatusException(ServiceException):
    """Raised when a coordination request can no longer be matched."""
    pass


class CollaboratorFailureException(ServiceException):
    """Raised when search or verification infrastructure fails."""
    pass


PIPELINE_ERROR_MAP = {
    "NOT_FOUND": RequestNotFoundException,
    "INVALID_STATUS": InvalidRequestStatusException,
    "SEARCH_FAILED": CollaboratorFailureException,
    "VERIFY_FAILED": CollaboratorFailureException,
}


def translate_pipeline_error(exc: PipelineError) -> ServiceException:
    exception_class = PIPELINE_ERROR_MAP.get(exc.code, ServiceException)
    return exception_class(exc.message)


async def service_exception_handler(
    request: Request,
    exc: ServiceException
) -> JSONResponse:
    """
    Handle service layer exceptions.

    Args:
        request: The FastAPI request.
        exc: The service exception.

    Returns:
        JSONResponse with error details.
    """
    status_code = 500
    if isinstance(exc, RequestNotFoundException):
        status_code = 404
    elif isinstance(exc, InvalidRequestStatusException):
        status_code = 409
    elif isinstance(exc, CollaboratorFailureException):
        status_code = 502

    if status_code >= 500:
        logger.error(f"Service error in {request.url.path}: {exc}", exc_info=True)
    else:
        logger.warning(f"Service error in {request.url.path}: {exc}")

    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": str(exc),
            "type": exc.__class__.__name__
        }
    )


async def http_exception_handler(
    request: Request,
    exc: HTTPException
) -> JSONResponse:
    """Handle FastAPI HTTP exceptions with consistent format."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": exc.detail,
            "type": "HTTPException"
        }
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={
            "success": False,
            "error": "Invalid request body",
            "type": "ValidationError",
            "details": jsonable_errors(exc),
        }
    )


def jsonable_errors(exc: RequestValidationError):
    return [
        {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg", "")}
        for err in exc.errors()
    ]


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
        JSONResponse with error details.
    """
    logger.exception(f"Unexpected error in {request.url.path}")

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal server error",
            "type": "InternalError"
        }
    )
