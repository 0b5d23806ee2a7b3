import logging
import traceback
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str, errors=None, exc: Exception = None,
                   show_stack: bool = False, headers=None) -> JSONResponse:
    content = {
        "statusCode": status_code,
        "message": message,
        "errors": jsonable_encoder(errors or []),
        "data": None,
        "success": False,
    }
    if show_stack and exc is not None:
        content["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))

    return JSONResponse(status_code=status_code, content=content, headers=headers)


def add_error_handlers(application, show_stack: bool):
    @application.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return error_response(
            exc.status_code,
            getattr(exc, "message", None) or str(exc.detail),
            errors=getattr(exc, "errors", None),
            exc=exc,
            show_stack=show_stack,
            headers=getattr(exc, "headers", None),
        )

    @application.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            "Invalid request",
            errors=exc.errors(),
        )

    @application.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {str(exc)}", exc_info=exc)
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Internal server error",
            exc=exc,
            show_stack=show_stack,
        )
