from typing import Any, Dict, Optional, Union
from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

from centerdesk.core.config import settings
from centerdesk.core.i18n import get_translation


class BaseAPIError(Exception):
    """Base exception class for API errors"""
    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details or {}
        # Format arguments for the translated message
        self.params = params or {}
        super().__init__(message.format(**self.params) if self.params else message)

class ValidationError(BaseAPIError):
    """Raised when input validation fails; details map field -> message"""
    def __init__(
        self,
        message: str = "Please correct the errors in the form.",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            error_code="VALIDATION_ERROR",
            details=details
        )

class StoreUnavailable(BaseAPIError):
    """Raised when the document store has not been initialized"""
    def __init__(
        self,
        message: str = "Database is not initialized.",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            error_code="STORE_UNAVAILABLE",
            details=details
        )

class WriteFailure(BaseAPIError):
    """Raised when the store rejects an add, update or delete"""
    def __init__(
        self,
        collection: str,
        message: str = "Failed to save {collection}.",
        details: Optional[Dict[str, Any]] = None
    ):
        self.collection = collection
        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_code="WRITE_FAILURE",
            details=details,
            params={"collection": collection}
        )

class ReadFailure(BaseAPIError):
    """Raised when the store fails to load records"""
    def __init__(
        self,
        collection: str,
        message: str = "Failed to load {collection}.",
        details: Optional[Dict[str, Any]] = None
    ):
        self.collection = collection
        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_code="READ_FAILURE",
            details=details,
            params={"collection": collection}
        )

class PermissionDenied(BaseAPIError):
    """Raised when the current role cannot access a section"""
    def __init__(
        self,
        message: str = "Permission denied",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_403_FORBIDDEN,
            error_code="PERMISSION_DENIED",
            details=details
        )

class NotFoundError(BaseAPIError):
    """Raised when a requested record is not found"""
    def __init__(
        self,
        message: str = "Resource not found",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            error_code="NOT_FOUND",
            details=details
        )


def get_error_message(
    error: Union[Exception, HTTPException, str],
    language: str = 'en',
    default_message: str = "An unexpected error occurred",
    include_details: bool = True
) -> Dict[str, Any]:
    """
    Formats error messages with proper translation and structure.

    Args:
        error: The exception that was raised or error message string
        language: Language code for translation
        default_message: Fallback message if error type is not recognized
        include_details: Whether to include error details in response

    Returns:
        Dict with message, code, optional details and an error notice
    """
    translate = get_translation(language)

    error_response = {
        "success": False,
        "error_code": "INTERNAL_ERROR",
        "message": translate(default_message),
        "status_code": 500
    }

    if isinstance(error, str):
        error_response.update({
            "message": translate(error),
            "error_code": "GENERAL_ERROR"
        })

    elif isinstance(error, BaseAPIError):
        error_response.update({
            "error_code": error.error_code,
            "message": translate(error.message, **error.params),
            "status_code": error.status_code
        })

        if include_details and error.details:
            error_response["details"] = {
                field: translate(str(message)) for field, message in error.details.items()
            }

    elif isinstance(error, HTTPException):
        error_response.update({
            "error_code": "HTTP_ERROR",
            "message": translate(str(error.detail)),
            "status_code": error.status_code
        })

    elif isinstance(error, SQLAlchemyError):
        error_response.update({
            "error_code": "DB_ERROR",
            "status_code": 500
        })

    if include_details and not isinstance(error, str) and settings.DEBUG:
        error_response["error_type"] = error.__class__.__name__

    error_response["notice"] = {"type": "error", "message": error_response["message"]}
    return error_response
