import pytest

from modules.core.result import Err, ErrorKind, Ok, not_found

pytestmark = pytest.mark.unit


class TestResult:
    def test_ok(self):
        result = Ok(5)
        assert result.is_ok
        assert result.value == 5

    def test_err_defaults_to_no_field_errors(self):
        result = Err(ErrorKind.BAD_PARAMETER, "bad")
        assert not result.is_ok
        assert result.errors == {}

    def test_not_found(self):
        result = not_found("Product not found with key: 9")
        assert result.kind is ErrorKind.NOT_FOUND
        assert result.message == "Product not found with key: 9"
