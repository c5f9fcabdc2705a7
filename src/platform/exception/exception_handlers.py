from typing import Any, Callable, Coroutine

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.responses import Response

from src.platform.exception.exceptions import CustomBaseError, StorageUnavailable
from src.platform.logging.loguru_io import Logger

# Type alias for exception handlers (compatible with Starlette's expected signature)
ExceptionHandler = Callable[[Request, Exception], Coroutine[Any, Any, Response]]

RETRY_AFTER_SECONDS = 2


def _error_body(error: CustomBaseError) -> dict[str, Any]:
    return {'detail': error.message} | error.context


async def custom_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = exc if isinstance(exc, CustomBaseError) else CustomBaseError(str(exc))
    return JSONResponse(status_code=error.status_code, content=_error_body(error))


async def storage_unavailable_handler(request: Request, exc: Exception) -> JSONResponse:
    error = exc if isinstance(exc, StorageUnavailable) else StorageUnavailable(str(exc))
    Logger.base.warning(f'⚠️ [STORAGE] {request.method} {request.url.path}: {error.message}')
    return JSONResponse(
        status_code=error.status_code,
        content=_error_body(error) | {'retryable': True},
        headers={'Retry-After': str(RETRY_AFTER_SECONDS)},
    )


async def value_error_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={'detail': str(exc)})


async def validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    errors = exc.errors() if isinstance(exc, RequestValidationError) else []
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            'detail': [
                {
                    'field': '.'.join(str(part) for part in error.get('loc', ())[1:]),
                    'message': error.get('msg', ''),
                }
                for error in errors
            ]
        },
    )


async def general_500_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    Logger.base.exception(f'💥 [UNHANDLED] {request.method} {request.url.path}: {exc}')
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={'detail': 'Internal server error'},
    )


# Most specific first; Starlette walks the MRO of the raised exception
EXCEPTION_HANDLERS: dict[type[Exception], ExceptionHandler] = {
    StorageUnavailable: storage_unavailable_handler,
    CustomBaseError: custom_error_handler,
    RequestValidationError: validation_error_handler,
    ValueError: value_error_handler,
    Exception: general_500_exception_handler,
}


def register_exception_handlers(app: FastAPI) -> None:
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)
