"""
Error taxonomy and its mapping to HTTP responses
"""
import logging
from enum import Enum

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class StorefrontError(Exception):
    """Base exception for all storefront errors"""
    pass


class ValidationError(StorefrontError):
    """Missing or malformed input"""
    pass


class InvalidTransitionError(ValidationError):
    """Order is not in a state that allows the requested transition"""
    
    def __init__(self, current: str, target: str, message: str = None):
        self.current = current
        self.target = target
        super().__init__(message or f"Cannot change order status from {current} to {target}")


class NotFoundError(StorefrontError):
    """Referenced entity does not exist"""
    
    def __init__(self, entity: str, entity_id=None):
        self.entity = entity
        self.entity_id = entity_id
        msg = f"{entity} not found"
        if entity_id is not None:
            msg = f"{entity} with id={entity_id} not found"
        super().__init__(msg)


class AuthError(StorefrontError):
    """Missing, invalid or expired credential"""
    pass


class ForbiddenError(StorefrontError):
    """Authenticated but not allowed to touch this resource"""
    pass


class ConflictError(StorefrontError):
    """Duplicate unique key"""
    pass


class InternalError(StorefrontError):
    """Unexpected failure; details stay in the server log"""
    pass


class DiscountRejection(str, Enum):
    """Why a discount code was refused"""
    NOT_FOUND = "NotFound"
    DISABLED = "Disabled"
    BELOW_MINIMUM = "BelowMinimum"
    GLOBAL_LIMIT_REACHED = "GlobalLimitReached"
    PER_USER_LIMIT_REACHED = "PerUserLimitReached"
    NOT_YET_ACTIVE = "NotYetActive"
    EXPIRED = "Expired"


class DiscountRejectedError(ValidationError):
    """Discount code failed one of the validation checks"""
    
    def __init__(self, reason: DiscountRejection, message: str):
        self.reason = reason
        super().__init__(message)


ERROR_STATUS_CODES = {
    ValidationError: 400,
    InvalidTransitionError: 400,
    DiscountRejectedError: 400,
    NotFoundError: 404,
    AuthError: 401,
    ForbiddenError: 403,
    ConflictError: 409,
    InternalError: 500,
}

GENERIC_ERROR_MESSAGE = "Something went wrong, please try again later"


def status_code_for(exc: StorefrontError) -> int:
    """Resolve the HTTP status for an error, walking up its class hierarchy"""
    if isinstance(exc, DiscountRejectedError) and exc.reason == DiscountRejection.NOT_FOUND:
        return 404
    for cls in type(exc).__mro__:
        if cls in ERROR_STATUS_CODES:
            return ERROR_STATUS_CODES[cls]
    return 500


def error_body(exc: StorefrontError) -> dict:
    body = {"error": str(exc), "errorType": type(exc).__name__}
    if isinstance(exc, DiscountRejectedError):
        body["reason"] = exc.reason.value
    return body


async def storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
    """Map StorefrontError subclasses to JSON error responses"""
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc)
        return JSONResponse(
            status_code=status_code,
            content={"error": GENERIC_ERROR_MESSAGE, "errorType": "InternalError"},
        )
    return JSONResponse(status_code=status_code, content=error_body(exc))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies and query strings are plain validation errors (400)"""
    details = [
        {"field": ".".join(str(part) for part in err.get("loc", ())), "message": err.get("msg")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request", "errorType": "ValidationError", "details": details},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler: log the traceback, hide it from the caller"""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"error": GENERIC_ERROR_MESSAGE, "errorType": "InternalError"},
    )


def register_error_handlers(app: FastAPI):
    app.add_exception_handler(StorefrontError, storefront_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
