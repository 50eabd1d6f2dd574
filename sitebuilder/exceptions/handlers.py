import logging
import traceback

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from sitebuilder.config import DEBUG
from sitebuilder.responses.error import error_response
from .custom import AppError

logger = logging.getLogger(__name__)

SERVER_ERROR_MESSAGE = "Internal server error"


async def app_error_handler(_request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s: %s", exc.code, exc.message)
    return error_response(exc.status_code, exc.message, exc.code, exc.details)


async def request_validation_error_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = []
    for err in exc.errors():
        # Drop the leading "body"/"query"/"path" segment
        location = [str(part) for part in err.get("loc", ())[1:]]
        errors.append({"field": ".".join(location), "message": err.get("msg")})
    return error_response(400, "Validation failed", "VALIDATION_ERROR", {"errors": errors})


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning("Integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
    return error_response(409, "Resource already exists", "DUPLICATE_ENTRY")


async def http_exception_handler(
    _request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    code = "ROUTE_NOT_FOUND" if exc.status_code == 404 else "HTTP_ERROR"
    return error_response(exc.status_code, str(exc.detail), code)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    details = None
    if DEBUG:
        details = {
            "stack": traceback.format_exception(type(exc), exc, exc.__traceback__),
        }
    return error_response(500, SERVER_ERROR_MESSAGE, "INTERNAL_ERROR", details)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
