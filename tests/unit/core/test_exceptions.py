"""Unit tests for ApiError and the exception handler."""

from __future__ import annotations

import pytest
from django.http import Http404
from rest_framework import exceptions
from rest_framework.test import APIRequestFactory

from modules.core.exceptions import ApiError, custom_exception_handler, error_body
from modules.core.result import Err, ErrorKind, not_found

pytestmark = pytest.mark.unit


def _context(path: str = "/products/1"):
    return {"request": APIRequestFactory().get(path)}


class TestApiError:
    @pytest.mark.parametrize(
        "kind, status_code, message",
        [
            (ErrorKind.NOT_FOUND, 404, "Product not found"),
            (ErrorKind.VALIDATION_FAILED, 400, "Validation failed"),
            (ErrorKind.BAD_PARAMETER, 400, "Invalid parameter"),
            (ErrorKind.UNEXPECTED, 500, "An unexpected error occurred"),
        ],
    )
    def test_kind_mapping(self, kind, status_code, message):
        error = ApiError(kind, "detail")
        assert error.status_code == status_code
        assert error.message == message

    def test_from_err_keeps_field_errors(self):
        err = Err(ErrorKind.VALIDATION_FAILED, "bad", {"price": "Price is required"})
        error = ApiError.from_err(err)
        assert error.kind is ErrorKind.VALIDATION_FAILED
        assert str(error.detail) == "bad"
        assert error.errors == {"price": "Price is required"}


class TestErrorBody:
    def test_omits_empty_errors(self):
        body = error_body("m", "e", 404, "/x")
        assert set(body) == {"message", "error", "status", "timestamp", "path"}

    def test_includes_errors(self):
        body = error_body("m", "e", 400, "/x", {"brand": "Brand is required"})
        assert body["errors"] == {"brand": "Brand is required"}


class TestCustomExceptionHandler:
    def test_api_error(self):
        response = custom_exception_handler(
            ApiError.from_err(not_found("Product not found with key: 1")), _context()
        )
        assert response.status_code == 404
        assert response.data["error"] == "Product not found with key: 1"
        assert response.data["path"] == "/products/1"

    def test_http404(self):
        response = custom_exception_handler(Http404(), _context())
        assert response.status_code == 404
        assert response.data["message"] == "Endpoint not found"

    def test_method_not_allowed(self):
        response = custom_exception_handler(exceptions.MethodNotAllowed("PATCH"), _context())
        assert response.status_code == 405
        assert response.data["message"] == "Method not allowed"

    def test_unexpected(self):
        response = custom_exception_handler(ValueError("secret internals"), _context())
        assert response.status_code == 500
        assert response.data["error"] == "The server encountered an unexpected error"
        assert "secret internals" not in str(response.data)
