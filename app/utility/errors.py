from typing import List, Optional
from fastapi import HTTPException, status


class ApiError(HTTPException):
    """HTTPException carrying the message and error list rendered in the error envelope."""

    status_code_default = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = "Something went wrong", errors: Optional[List] = None,
                 status_code: Optional[int] = None, headers: Optional[dict] = None):
        super().__init__(
            status_code=status_code or self.status_code_default,
            detail=message,
            headers=headers,
        )
        self.message = message
        self.errors = errors or []


class ValidationError(ApiError):
    status_code_default = status.HTTP_400_BAD_REQUEST


class AuthenticationError(ApiError):
    status_code_default = status.HTTP_401_UNAUTHORIZED


class NotFoundError(ApiError):
    status_code_default = status.HTTP_404_NOT_FOUND


class ConflictError(ApiError):
    status_code_default = status.HTTP_409_CONFLICT


class PayloadTooLargeError(ApiError):
    status_code_default = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE


class ServerError(ApiError):
    status_code_default = status.HTTP_500_INTERNAL_SERVER_ERROR
