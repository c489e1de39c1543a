# expohub/core/errors.py
"""
Error envelope and exception handlers.

Every error leaves the API in the same shape:
    {"success": false, "message": ..., "timestamp": ..., "error_code": ..., "details": ...}
"""
import datetime as dt
import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger("uvicorn.error")


class ApiError(Exception):
    """
    Terminal error raised by handlers and dependencies.
    Rendered by `api_error_handler` as the standard error envelope.
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        error_code: str | None = None,
        details: Any = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.error_code = error_code
        self.details = details


def error_body(message: str, error_code: str | None = None, details: Any = None) -> dict:
    body = {
        "success": False,
        "message": message,
        "timestamp": dt.datetime.now(dt.timezone.utc).isoformat().replace("+00:00", "Z"),
    }
    if error_code:
        body["error_code"] = error_code
    if details is not None:
        body["details"] = details
    return body


def validation_error(details: Any = None) -> ApiError:
    return ApiError(status.HTTP_400_BAD_REQUEST, "Invalid input data", "VALIDATION_ERROR", details)


def parse_body(model: type[BaseModel], data: Any) -> BaseModel:
    """
    Validate a raw request body against a schema.
    Used where authorization has to run before payload validation.
    """
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise validation_error(jsonable_encoder(exc.errors(include_url=False, include_context=False)))


async def api_error_handler(request: Request, exc: ApiError):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.message, exc.error_code, exc.details),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError):
    # ctx may carry exception instances that do not serialize
    details = jsonable_encoder([{k: v for k, v in e.items() if k != "ctx"} for e in exc.errors()])
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("Invalid input data", "VALIDATION_ERROR", details),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(message),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    # Internal details stay in the server log
    logger.exception("[error] unhandled exception on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Internal server error", "INTERNAL_SERVER_ERROR"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
