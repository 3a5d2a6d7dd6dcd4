from typing import Any, Callable, Coroutine

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.responses import Response

from src.platform.exception.exceptions import CustomBaseError
from src.platform.logging.loguru_io import Logger


ExceptionHandler = Callable[[Request, Exception], Coroutine[Any, Any, Response]]

# Seconds a client should wait before retrying when a trip is busy
RETRY_AFTER_SECONDS = '1'


def _validation_messages(error: RequestValidationError) -> list[str]:
    """Flatten pydantic errors into `location: message` strings"""
    messages = []
    for item in error.errors():
        location = '.'.join(str(part) for part in item.get('loc', ()) if part != 'body')
        messages.append(f'{location}: {item.get("msg")}' if location else str(item.get('msg')))
    return messages


async def custom_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = exc if isinstance(exc, CustomBaseError) else CustomBaseError(str(exc))
    headers = None
    if error.status_code == status.HTTP_503_SERVICE_UNAVAILABLE:
        headers = {'Retry-After': RETRY_AFTER_SECONDS}
    if error.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        Logger.base.warning(f'[HTTP] {request.method} {request.url.path} -> {error.status_code}: {error.message}')
    return JSONResponse(
        status_code=error.status_code,
        content={'detail': error.message, **error.context},
        headers=headers,
    )


async def value_error_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={'detail': str(exc)})


async def validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = exc if isinstance(exc, RequestValidationError) else RequestValidationError([])
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={'detail': _validation_messages(error)},
    )


async def general_500_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    Logger.base.exception(f'[HTTP] Unhandled {type(exc).__name__} on {request.url.path}: {exc}')
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={'detail': 'Internal server error'},
    )


EXCEPTION_HANDLERS: dict[type[Exception], ExceptionHandler] = {
    CustomBaseError: custom_error_handler,
    ValueError: value_error_handler,
    RequestValidationError: validation_error_handler,
    Exception: general_500_exception_handler,
}


def register_exception_handlers(app: FastAPI) -> None:
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)
