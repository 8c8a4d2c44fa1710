from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence

from fast_constraints.exceptions.http_exceptions import HttpException
from fast_constraints.utils.serialisation import describe_callable, get_exception_error_type

if TYPE_CHECKING:
    from fast_constraints.contracts.callback import Callback
    from fast_constraints.core.validation_result import ValidationResult
    from fast_constraints.exceptions.resolution_exceptions import ResolutionError


class AppException(Exception):
    def __init__(self,
        message: str,
        *,
        http_status_code: Optional[int] = None,
        error_type: Optional[str] = None,
        data: Optional[dict | list] = None
    ):
        """
        Universal exception, which can be converted to a HTTP response, if caught by the HandleExceptionsMiddleware.

        Args:
            message: The error message.
            http_status_code: The HTTP status code to return.
            error_type: The error type to return (if not provided, it will be inferred from the exception class name).
            data: The data to return.
        """
        self.message = message
        self.http_status_code = http_status_code
        self.error_type = error_type or get_exception_error_type(self)
        self.data = data
        super().__init__(message)

    def to_http_exception(self):
        return HttpException(status_code=self.http_status_code, error_type=self.error_type, message=self.message, data=self.data)

    def to_response(self):
        return self.to_http_exception().to_response()


class ValidationFailedException(AppException):
    """
    Raised when a validated object produced at least one violation and the
    caller asked for failure instead of a result.

    The `data` attribute mirrors pydantic's error list format so HTTP clients
    see one shape for both parsing and callback errors.
    """

    def __init__(self, result: ValidationResult, *, message: str = "Validation failed.", error_type: str = "invalid_request"):
        super().__init__(
            message,
            http_status_code=422,
            error_type=error_type,
            data=result.to_errors(),
        )
        self.result = result


class CallbackFaultException(AppException):
    """A callback raised instead of reporting violations. The validation run is aborted."""

    def __init__(self, declaration: Callback, target_type: type, original: BaseException):
        super().__init__(
            f"Callback `{describe_callable(declaration.callback)}` failed while validating "
            f"`{target_type.__qualname__}`: {original!r}",
            http_status_code=500,
        )
        self.declaration = declaration
        self.target_type = target_type
        self.original = original


class ConstraintConfigurationException(AppException):
    """One or more callback declarations could not be resolved."""

    def __init__(self, errors: Sequence[ResolutionError], *, result: Optional[ValidationResult] = None):
        lines = [f"{len(errors)} callback declaration(s) could not be resolved:"]
        lines.extend(f" - {error.message}" for error in errors)
        super().__init__("\n".join(lines), http_status_code=500)
        self.errors = list(errors)
        self.result = result
