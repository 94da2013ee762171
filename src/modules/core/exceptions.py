"""API exception handling.

Every error leaving the API has the same JSON body::

    {"message": ..., "error": ..., "status": ..., "timestamp": ..., "path": ...}

Validation failures add an ``errors`` object mapping field name to message.
``custom_exception_handler`` is registered as DRF's ``EXCEPTION_HANDLER``;
``not_found_view`` and ``server_error_view`` cover requests that never
reach a DRF view.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.http import Http404, HttpRequest, JsonResponse
from django.utils import timezone
from rest_framework import exceptions, status
from rest_framework.response import Response

from modules.core.result import Err, ErrorKind

logger = structlog.get_logger(__name__)

_KIND_STATUS = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
    ErrorKind.BAD_PARAMETER: status.HTTP_400_BAD_REQUEST,
    ErrorKind.UNEXPECTED: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

_KIND_MESSAGE = {
    ErrorKind.NOT_FOUND: "Product not found",
    ErrorKind.VALIDATION_FAILED: "Validation failed",
    ErrorKind.BAD_PARAMETER: "Invalid parameter",
    ErrorKind.UNEXPECTED: "An unexpected error occurred",
}

UNEXPECTED_ERROR = "The server encountered an unexpected error"


class ApiError(exceptions.APIException):
    """API exception carrying one of the domain ``ErrorKind`` values."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "An error occurred"
    default_code = "api_error"

    def __init__(
        self,
        kind: ErrorKind,
        detail: str,
        errors: Optional[Dict[str, str]] = None,
    ) -> None:
        self.kind = kind
        self.status_code = _KIND_STATUS[kind]
        self.message = _KIND_MESSAGE[kind]
        self.errors = errors or {}
        super().__init__(detail, code=kind.value)

    @classmethod
    def from_err(cls, err: Err) -> ApiError:
        return cls(err.kind, err.message, err.errors)

    @classmethod
    def bad_parameter(cls, detail: str) -> ApiError:
        return cls(ErrorKind.BAD_PARAMETER, detail)


def error_body(
    message: str,
    error: str,
    status_code: int,
    path: str,
    errors: Optional[Dict[str, str]] = None,
) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "message": message,
        "error": error,
        "status": status_code,
        "timestamp": timezone.now().isoformat(),
        "path": path,
    }
    if errors:
        body["errors"] = errors
    return body


def custom_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Render any exception raised inside a DRF view as the standard body."""
    request = context.get("request")
    path = request.path if request is not None else ""

    if isinstance(exc, ApiError):
        logger.warning(
            "api.error",
            kind=exc.kind.value,
            detail=str(exc.detail),
            errors=exc.errors or None,
            path=path,
        )
        body = error_body(exc.message, str(exc.detail), exc.status_code, path, exc.errors)
        return Response(body, status=exc.status_code)

    if isinstance(exc, Http404):
        exc = exceptions.NotFound()

    if isinstance(exc, exceptions.APIException):
        message = _api_exception_message(exc)
        logger.warning(
            "api.client_error",
            status_code=exc.status_code,
            detail=str(exc.detail),
            path=path,
        )
        response = Response(
            error_body(message, str(exc.detail), exc.status_code, path),
            status=exc.status_code,
        )
        if getattr(exc, "wait", None):
            response["Retry-After"] = str(int(exc.wait))
        return response

    logger.error("api.unexpected_error", path=path, exc_info=exc)
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return Response(
        error_body(_KIND_MESSAGE[ErrorKind.UNEXPECTED], UNEXPECTED_ERROR, status_code, path),
        status=status_code,
    )


def _api_exception_message(exc: exceptions.APIException) -> str:
    if isinstance(exc, exceptions.ParseError):
        return "Malformed request body"
    if isinstance(exc, exceptions.MethodNotAllowed):
        return "Method not allowed"
    if isinstance(exc, exceptions.UnsupportedMediaType):
        return "Unsupported media type"
    if isinstance(exc, exceptions.NotFound):
        return "Endpoint not found"
    if isinstance(exc, exceptions.ValidationError):
        return _KIND_MESSAGE[ErrorKind.VALIDATION_FAILED]
    return "Request failed"


# ---------------------------------------------------------------------------
# Django-level handlers (requests that never reach a DRF view)
# ---------------------------------------------------------------------------


def not_found_view(request: HttpRequest, exception: Exception) -> JsonResponse:
    logger.warning("api.endpoint_not_found", method=request.method, path=request.path)
    return JsonResponse(
        error_body(
            "Endpoint not found",
            "The requested endpoint does not exist",
            status.HTTP_404_NOT_FOUND,
            request.path,
        ),
        status=status.HTTP_404_NOT_FOUND,
    )


def server_error_view(request: HttpRequest) -> JsonResponse:
    return JsonResponse(
        error_body(
            _KIND_MESSAGE[ErrorKind.UNEXPECTED],
            UNEXPECTED_ERROR,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            request.path,
        ),
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
