# Exception handlers rendering the uniform error envelope
# myflix/api/errors.py

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from myflix.core.exceptions import ApiError
from myflix.models.common import ErrorResponse

logger = logging.getLogger(__name__)

_HTTP_KINDS = {
    status.HTTP_404_NOT_FOUND: "not_found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "method_not_allowed",
}


def error_response(status_code: int, kind: str, message: str, detail=None) -> JSONResponse:
    body = ErrorResponse(kind=kind, message=message, detail=detail)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return error_response(exc.status_code, exc.kind, exc.message, exc.detail)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Submitted values are dropped; they may include passwords
    errors = [{k: v for k, v in err.items() if k != "input"} for err in exc.errors()]
    logger.warning(f"Validation failed for {request.method} {request.url.path}: {errors}")
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        "validation_error",
        "Request validation failed.",
        jsonable_encoder(errors),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    kind = _HTTP_KINDS.get(exc.status_code, "http_error")
    response = error_response(exc.status_code, kind, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        ApiError.kind,
        ApiError.default_message,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
