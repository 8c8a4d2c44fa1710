import re
from datetime import datetime
from typing import Any

from bson import ObjectId
from pydantic import BaseModel


def serialise(val):
    if isinstance(val, ObjectId):
        return str(val)
    if isinstance(val, datetime):
        return val.isoformat()
    if isinstance(val, BaseModel):
        return serialise(val.model_dump())
    elif isinstance(val, (list, tuple)):
        return [serialise(item) for item in val]
    elif isinstance(val, dict):
        return {key: serialise(value) for key, value in val.items()}

    return val


def pascal_case_to_snake_case(pascal: type | str) -> str:
    """
    Convert a class name (CamelCase or PascalCase) to snake_case.

    Args:
        pascal: The class or class name as a string.

    Returns:
        str: The snake_case version of the class name.
    """
    if not isinstance(pascal, str):
        pascal = pascal.__name__
    # Insert underscores before capital letters, except at the start
    s1 = re.sub('(.)([A-Z][a-z]+)', r'\1_\2', pascal)
    snake = re.sub('([a-z0-9])([A-Z])', r'\1_\2', s1).lower()
    return snake


def get_exception_error_type(exception: Exception) -> str:
    name = exception.__class__.__name__
    for suffix in ("Exception", "Error"):
        name = remove_suffix(name, suffix)
    return pascal_case_to_snake_case(name)


def remove_suffix(text: str, suffix: str) -> str:
    """
    Remove an exact suffix from the given text if present.

    Unlike str.rstrip, this removes only the provided suffix once,
    not any combination of its characters.
    """
    if text.endswith(suffix):
        return text[: -len(suffix)]
    return text


def describe_callable(value: Any) -> str:
    """Human readable name of a callback spec, used in error messages and logs."""
    if isinstance(value, str):
        return value
    if isinstance(value, tuple):
        return "::".join(part.__qualname__ if isinstance(part, type) else str(part) for part in value)
    qualname = getattr(value, "__qualname__", None)
    if qualname:
        return qualname
    func = getattr(value, "func", None)  # functools.partial
    if func is not None:
        return f"partial({describe_callable(func)})"
    return repr(value)
