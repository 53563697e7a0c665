"""
Error boundary: the one place where an error kind becomes an HTTP response.

Routers and use cases raise AppError; they never build error bodies.
"""
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .kinds import AppError, ErrorKind, to_http

_STATUS_TO_KIND = {
    status.HTTP_400_BAD_REQUEST: ErrorKind.VALIDATION_ERROR,
    status.HTTP_401_UNAUTHORIZED: ErrorKind.NOT_AUTHENTICATED,
    status.HTTP_403_FORBIDDEN: ErrorKind.NOT_AUTHORIZED,
    status.HTTP_404_NOT_FOUND: ErrorKind.NOT_FOUND,
}


def error_response(kind: ErrorKind) -> JSONResponse:
    status_code, message = to_http(kind)
    headers = {"WWW-Authenticate": "Bearer"} if kind is ErrorKind.NOT_AUTHENTICATED else None
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def _logger(request: Request):
    return request.app.state.logger


async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
    log = _logger(request).bind(
        kind=exc.kind.value, detail=exc.detail, method=request.method, path=request.url.path
    )
    if exc.status_code >= 500:
        log.error("request failed")
    else:
        log.warning("request rejected")
    return error_response(exc.kind)


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    _logger(request).warning(
        "request validation failed", path=request.url.path, errors=exc.errors()
    )
    return error_response(ErrorKind.VALIDATION_ERROR)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    _logger(request).exception(
        "unhandled error", method=request.method, path=request.url.path, error=repr(exc)
    )
    return error_response(ErrorKind.UNKNOWN_ERROR)


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    kind = _STATUS_TO_KIND.get(exc.status_code)
    if kind is not None:
        return error_response(kind)
    return JSONResponse(
        status_code=exc.status_code, content={"error": str(exc.detail).lower()}
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, handle_app_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    # Anything unclassified is UnknownError on the wire
    app.add_exception_handler(Exception, handle_unexpected_error)
