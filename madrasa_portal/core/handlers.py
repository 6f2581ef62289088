# madrasa_portal/core/handlers.py
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from madrasa_portal.core import messages
from madrasa_portal.core.exceptions import BaseAPIException
from madrasa_portal.core.logging import logger


def error_envelope(message: str, code: str, details=None) -> dict:
    content = {"success": False, "error": message, "code": code}
    if details is not None:
        content["details"] = details
    return content

# 1. Custom errors raised by the services
async def custom_api_exception_handler(request: Request, exc: BaseAPIException):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_envelope(exc.message, exc.code, exc.details),
    )

# 2. Request validation errors (query/path/body shape rejected by Pydantic)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    details = {}
    for error in exc.errors():
        # e.g. "body.marks" -> "marks", "query.page" -> "query.page"
        field = ".".join(str(x) for x in error["loc"] if x != "body")
        details[field] = error["msg"]

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_envelope(messages.INVALID_INPUT, "VALIDATION_ERROR", details),
    )

# 3. Standard HTTP errors (unknown URL, wrong method, ...)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_envelope(str(exc.detail), "HTTP_ERROR"),
    )

# 4. Store failures outside a commit (reads)
async def store_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"❌ Store failure on {request.method} {request.url.path}: {exc}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_envelope(messages.STORE_FAILURE, "STORE_ERROR"),
    )

# 5. Anything else
async def general_exception_handler(request: Request, exc: Exception):
    logger.critical(f"Unhandled Exception: {exc}", exc_info=True)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_envelope(messages.SERVER_ERROR, "INTERNAL_SERVER_ERROR"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BaseAPIException, custom_api_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(SQLAlchemyError, store_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
