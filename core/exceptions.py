# core/exceptions.py
import logging
import uuid

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from django.core.exceptions import ValidationError
from django.http import Http404
from django.utils import timezone

logger = logging.getLogger(__name__)


class APIError(Exception):
    """
    Base exception for business logic errors surfaced through the API
    """

    def __init__(
        self, message, code=None, status_code=status.HTTP_400_BAD_REQUEST, details=None
    ):
        super().__init__(message)
        self.message = message
        self.code = code or "API_ERROR"
        self.status_code = status_code
        self.details = details


def _envelope(code, message, details, error_id):
    return {
        "error": True,
        "code": code,
        "message": message,
        "details": details,
        "error_id": error_id,
        "timestamp": timezone.now().isoformat(),
    }


def custom_exception_handler(exc, context):
    """
    Custom exception handler that returns consistent error format
    """
    response = exception_handler(exc, context)

    # Unique error ID for tracking
    error_id = str(uuid.uuid4())[:8]

    request = context.get("request")
    user_id = getattr(getattr(request, "user", None), "pk", None)
    path = getattr(request, "path", "unknown")
    method = getattr(request, "method", "unknown")

    if response is not None:
        response.data = _envelope(
            get_error_code(exc),
            get_error_message(response.data),
            format_error_details(response.data),
            error_id,
        )
        logger.warning(
            f"API Error [{error_id}]: {exc.__class__.__name__} - "
            f"{method} {path} - Status: {response.status_code}",
            extra={"user_id": user_id, "action": "api_error"},
        )
        return response

    if isinstance(exc, APIError):
        response = Response(
            _envelope(exc.code, exc.message, exc.details, error_id),
            status=exc.status_code,
        )
        logger.warning(
            f"Business Error [{error_id}]: {exc.__class__.__name__} ({exc.code}) - "
            f"{method} {path}",
            extra={"user_id": user_id, "action": "business_error"},
        )
        return response

    if isinstance(exc, Http404):
        response = Response(
            _envelope(
                "RESOURCE_NOT_FOUND",
                "The requested resource was not found.",
                None,
                error_id,
            ),
            status=status.HTTP_404_NOT_FOUND,
        )
    elif isinstance(exc, ValidationError):
        response = Response(
            _envelope(
                "VALIDATION_ERROR",
                "Validation failed.",
                exc.message_dict if hasattr(exc, "message_dict") else exc.messages,
                error_id,
            ),
            status=status.HTTP_400_BAD_REQUEST,
        )
    else:
        response = Response(
            _envelope(
                "INTERNAL_SERVER_ERROR",
                "An internal server error occurred.",
                None,
                error_id,
            ),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    logger.error(
        f"Unhandled Exception [{error_id}]: {exc.__class__.__name__} - {method} {path}",
        extra={"user_id": user_id, "action": "unhandled_exception"},
        exc_info=True,
    )
    return response


def get_error_code(exc):
    """
    Generate appropriate error code based on exception type
    """
    error_codes = {
        "ValidationError": "VALIDATION_ERROR",
        "PermissionDenied": "PERMISSION_DENIED",
        "NotAuthenticated": "AUTHENTICATION_REQUIRED",
        "AuthenticationFailed": "AUTHENTICATION_FAILED",
        "NotFound": "RESOURCE_NOT_FOUND",
        "Http404": "RESOURCE_NOT_FOUND",
        "MethodNotAllowed": "METHOD_NOT_ALLOWED",
        "ParseError": "PARSE_ERROR",
        "UnsupportedMediaType": "UNSUPPORTED_MEDIA_TYPE",
        "Throttled": "RATE_LIMIT_EXCEEDED",
    }

    return error_codes.get(exc.__class__.__name__, "UNKNOWN_ERROR")


def get_error_message(data):
    """
    Extract human-readable error message from DRF error data
    """
    if isinstance(data, dict):
        if "detail" in data:
            return str(data["detail"])
        if "non_field_errors" in data:
            return (
                str(data["non_field_errors"][0])
                if data["non_field_errors"]
                else "Validation error"
            )
        for value in data.values():
            if isinstance(value, list) and value:
                return str(value[0])
            if isinstance(value, str):
                return value
        return "Validation error"
    if isinstance(data, list) and data:
        return str(data[0])
    return str(data)


def format_error_details(data):
    """
    Format error details for consistent structure
    """
    if isinstance(data, dict):
        # 'detail' is already carried in message
        details = {k: v for k, v in data.items() if k != "detail"}
        return details or None
    if isinstance(data, list):
        return data
    return None
