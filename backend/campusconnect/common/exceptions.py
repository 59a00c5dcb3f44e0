# campusconnect/common/exceptions.py
import logging

from rest_framework import status
from rest_framework.exceptions import (
    APIException,
    AuthenticationFailed,
    MethodNotAllowed,
    NotAuthenticated,
    NotFound,
    ParseError,
    PermissionDenied,
    ValidationError,
)
from rest_framework.response import Response
from rest_framework.views import exception_handler, set_rollback
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError

logger = logging.getLogger(__name__)


class ServiceError(APIException):
    """Domain error raised by service functions and rendered by the exception handler."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, code: str, message: str, http_status: int = 400):
        super().__init__(detail=message, code=code)
        self.code = code
        self.message = message
        self.status_code = http_status

    def __str__(self):
        return f"{self.code}: {self.message}"


def _envelope(code: str, message: str, details=None):
    error = {"code": code, "message": message}
    if details is not None:
        error["details"] = details
    return {"success": False, "data": None, "error": error}


def _first_message(detail) -> str:
    if isinstance(detail, dict):
        for key, value in detail.items():
            msg = _first_message(value)
            return msg if key == "non_field_errors" else f"{key}: {msg}"
    if isinstance(detail, (list, tuple)) and detail:
        return _first_message(detail[0])
    return str(detail)


def custom_exception_handler(exc, context):
    response = exception_handler(exc, context)

    if response is None:
        # anything DRF does not know about is a server error
        view = context.get("view")
        logger.exception(
            "unhandled error in %s", view.__class__.__name__ if view else "view"
        )
        set_rollback()
        return Response(
            _envelope("SERVER_ERROR", "server error"),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, ServiceError):
        response.data = _envelope(exc.code, exc.message)
    elif isinstance(exc, (InvalidToken, TokenError)):
        response.data = _envelope("INVALID_TOKEN", "Invalid token")
    elif isinstance(exc, NotAuthenticated):
        response.data = _envelope("UNAUTHORIZED", "Authorization header missing")
    elif isinstance(exc, AuthenticationFailed):
        response.data = _envelope("UNAUTHORIZED", _first_message(exc.detail))
    elif isinstance(exc, PermissionDenied):
        response.data = _envelope("FORBIDDEN", "Permission denied")
    elif isinstance(exc, ValidationError):
        response.data = _envelope(
            "VALIDATION_ERROR", _first_message(exc.detail), details=exc.detail
        )
    elif isinstance(exc, NotFound):
        response.data = _envelope("NOT_FOUND", "not found")
    elif isinstance(exc, ParseError):
        response.data = _envelope("PARSE_ERROR", _first_message(exc.detail))
    elif isinstance(exc, MethodNotAllowed):
        response.data = _envelope("METHOD_NOT_ALLOWED", _first_message(exc.detail))
    else:
        response.data = _envelope("ERROR", _first_message(exc.detail))

    return response
