"""Exceptions raised while declaring, resolving and running callback constraints."""

from .common_exceptions import (
    AppException,
    ValidationFailedException,
    CallbackFaultException,
    ConstraintConfigurationException,
)
from .http_exceptions import (
    HttpException,
    ServerErrorException,
    UnprocessableEntityException,
)
from .resolution_exceptions import (
    ResolutionError,
    CallbackNotFoundError,
    UnsupportedCallableKindError,
    AmbiguousCallbackSpecError,
    FieldNotFoundError,
)


__all__ = [
    # common
    "AppException",
    "ValidationFailedException",
    "CallbackFaultException",
    "ConstraintConfigurationException",
    # http
    "HttpException",
    "ServerErrorException",
    "UnprocessableEntityException",
    # resolution
    "ResolutionError",
    "CallbackNotFoundError",
    "UnsupportedCallableKindError",
    "AmbiguousCallbackSpecError",
    "FieldNotFoundError",
]
