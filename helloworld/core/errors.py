"""
Error shaping for the HTTP layer.

Every failure leaves the API as
``{"status": "error", "message": str, "error": optional}``.
"""

import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


def server_error(message: str, exc: Exception) -> HTTPException:
    """Log an unexpected failure and build the generic 500 for it"""
    logger.exception("%s: %s", message, exc)
    return HTTPException(status_code=500, detail={"message": message, "error": str(exc)})


def _error_body(detail) -> dict:
    if isinstance(detail, dict):
        body = {"status": "error", "message": detail.get("message", "Request failed")}
        if detail.get("error") is not None:
            body["error"] = detail["error"]
        return body
    return {"status": "error", "message": str(detail)}


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={
            "status": "error",
            "message": "Invalid request",
            "error": jsonable_encoder(exc.errors(), custom_encoder={Exception: str}),
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"status": "error", "message": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
