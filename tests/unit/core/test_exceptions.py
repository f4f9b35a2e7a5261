"""Unit tests for the operational error hierarchy."""

import pytest
import pytest_check

from api_boilerplate.core.exceptions import (
    AppError,
    BadRequestError,
    ConflictError,
    NotFoundError,
    ValidationFailedError,
)
from api_boilerplate.core.validation import ValidationErrorDetail


@pytest.mark.unit
class TestAppError:
    """Test cases for AppError."""

    def test_defaults(self) -> None:
        error = AppError("Something broke")

        with pytest_check.check:
            assert error.message == "Something broke"
        with pytest_check.check:
            assert error.status_code == 500
        with pytest_check.check:
            assert error.is_operational is True
        with pytest_check.check:
            assert error.validation_errors is None

    def test_str_includes_status_code(self) -> None:
        assert str(AppError("Nope", 418)) == "[418] Nope"

    def test_repr_counts_validation_errors(self) -> None:
        details = [ValidationErrorDetail(field="a", message="a is required")]
        error = AppError("Validation failed", 400, validation_errors=details)

        assert "validation_errors=1" in repr(error)
        assert "status_code=400" in repr(error)

    def test_validation_errors_are_copied(self) -> None:
        details = [ValidationErrorDetail(field="a", message="a is required")]
        error = AppError("Validation failed", 400, validation_errors=details)
        details.clear()

        assert error.validation_errors is not None
        assert len(error.validation_errors) == 1

    def test_can_be_raised_and_caught(self) -> None:
        with pytest.raises(AppError) as exc_info:
            raise AppError("Not operational", is_operational=False)

        assert exc_info.value.is_operational is False


@pytest.mark.unit
class TestSpecializedErrors:
    """Status-specific shortcuts."""

    @pytest.mark.parametrize(
        ("error_class", "status_code"),
        [(BadRequestError, 400), (NotFoundError, 404), (ConflictError, 409)],
    )
    def test_status_codes(self, error_class: type[AppError], status_code: int) -> None:
        error = error_class("message")  # type: ignore[call-arg]

        assert isinstance(error, AppError)
        assert error.status_code == status_code
        assert error.message == "message"
        assert error.is_operational is True

    def test_validation_failed_error(self) -> None:
        details = [
            ValidationErrorDetail(field="email", message="email is required"),
            ValidationErrorDetail(
                field="age", message="age must be a number", value="x"
            ),
        ]

        error = ValidationFailedError(details)

        assert error.status_code == 400
        assert error.message == "Validation failed"
        assert error.validation_errors == details
