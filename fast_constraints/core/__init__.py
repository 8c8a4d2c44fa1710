"""Core runtime: resolving, invoking and collecting callback constraints."""

from .api import validate_query, validate_request
from .execution_context import ExecutionContext, ViolationBuilder
from .localization import __, set_locale, get_locale, trans, trans_choice
from .metadata import ClassMetadataProvider
from .middlewares import HandleExceptionsMiddleware
from .resolver import CallbackResolver, InvocableKind, ResolvedInvocable
from .validation_result import ValidationResult
from .validator import Validator, get_validator, set_validator, validate

__all__ = [
    "validate_query",
    "validate_request",
    "ExecutionContext",
    "ViolationBuilder",
    "__",
    "set_locale",
    "get_locale",
    "trans",
    "trans_choice",
    "ClassMetadataProvider",
    "HandleExceptionsMiddleware",
    "CallbackResolver",
    "InvocableKind",
    "ResolvedInvocable",
    "ValidationResult",
    "Validator",
    "get_validator",
    "set_validator",
    "validate",
]
