"""
Map the error taxonomy onto JSON responses.

Every failure body has an `error` key: a message string, or the list of
field issues for validation failures. Domain and auth failures also carry
the machine-readable `reason`.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from campus_events.core.errors import AuthFailure, DomainRejection, StoreUnavailable, ValidationFailed
from campus_events.core.logging import get_logger
from campus_events.schemas.validation import FieldIssue, field_path

logger = get_logger(__name__)


async def validation_failed_handler(request: Request, exc: ValidationFailed) -> JSONResponse:
    logger.info("validation_failed", issues=len(exc.issues))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": [issue.to_dict() for issue in exc.issues]},
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed JSON, bad path or query parameters: same shape as ValidationFailed."""
    issues = []
    for error in exc.errors():
        loc = tuple(error.get("loc", ()))
        if loc and loc[0] in ("body", "query", "path"):
            loc = loc[1:]
        issues.append(FieldIssue(field_path=field_path(loc), message=error["msg"]))
    return await validation_failed_handler(request, ValidationFailed(issues))


async def auth_failure_handler(request: Request, exc: AuthFailure) -> JSONResponse:
    logger.warning("auth_denied", reason=exc.reason)
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message, "reason": exc.reason},
        headers=headers,
    )


async def domain_rejection_handler(request: Request, exc: DomainRejection) -> JSONResponse:
    logger.info("request_rejected", reason=exc.reason.value)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message, "reason": exc.reason.value},
    )


async def store_unavailable_handler(request: Request, exc: StoreUnavailable) -> JSONResponse:
    # Full detail stays in the logs
    logger.error("store_unavailable_response", operation=exc.operation, detail=exc.detail)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "The service is temporarily unable to complete the request"},
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationFailed, validation_failed_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(AuthFailure, auth_failure_handler)
    app.add_exception_handler(DomainRejection, domain_rejection_handler)
    app.add_exception_handler(StoreUnavailable, store_unavailable_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
