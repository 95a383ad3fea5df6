# foodshare/core/exception_handlers.py
"""Map request-schema failures and escaped domain errors to JSON responses"""
import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from foodshare.core.errors import FoodshareError

logger = logging.getLogger(__name__)

GENERIC_MESSAGES = {
    400: "Invalid request data",
    404: "Resource not found",
    500: "Internal server error",
}


async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Schema violations are a plain 400 with no field-level detail"""
    logger.warning(f"Rejected invalid payload on {request.method} {request.url.path}: {len(exc.errors())} error(s)")
    return JSONResponse(status_code=400, content={"detail": GENERIC_MESSAGES[400]})


async def domain_error_handler(request: Request, exc: FoodshareError):
    status_code = exc.status_code
    if status_code >= 500:
        logger.error(f"Unhandled {type(exc).__name__} on {request.url.path}: {exc.message}", exc_info=exc)
    return JSONResponse(
        status_code=status_code,
        content={"detail": GENERIC_MESSAGES.get(status_code, GENERIC_MESSAGES[500])},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(FoodshareError, domain_error_handler)
