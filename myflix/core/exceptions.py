# Domain exceptions rendered as the uniform error envelope
# myflix/core/exceptions.py

from typing import Any, Optional

from fastapi import status


class ApiError(Exception):
    """
    Base error for every failure that reaches the client.

    Rendered by the exception handlers in ``myflix.api.errors`` as
    ``{"kind": ..., "message": ..., "detail": ...}`` with ``status_code``.
    """
    kind: str = "internal_error"
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "An internal error occurred."

    def __init__(
        self,
        message: Optional[str] = None,
        detail: Any = None,
        status_code: Optional[int] = None,
    ):
        self.message = message or self.default_message
        self.detail = detail
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(ApiError):
    kind = "validation_error"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Request validation failed."


class UploadInputError(ApiError):
    kind = "upload_input_error"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid image data."


class InvalidCredentialsError(ApiError):
    # Same response for an unknown user and a wrong password
    kind = "invalid_credentials"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid username or password."


class StorageError(ApiError):
    kind = "storage_error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Storage operation failed."


class ServiceUnavailableError(ApiError):
    kind = "service_unavailable"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = "Service not available."


class PayloadTooLargeError(ApiError):
    kind = "payload_too_large"
    status_code = 413  # Content Too Large
    default_message = "Request body exceeds the allowed size."
