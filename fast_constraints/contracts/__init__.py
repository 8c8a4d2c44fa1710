"""Declarations and data shapes shared by the validator and its callers."""

from .callback import Callback
from .metadata_provider import MetadataProvider
from .schema import Schema
from .violation import Violation

__all__ = [
    "Callback",
    "MetadataProvider",
    "Schema",
    "Violation",
]
