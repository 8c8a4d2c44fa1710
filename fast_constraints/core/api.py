from typing import TYPE_CHECKING, Optional, Sequence

from pydantic import BaseModel, ValidationError
from quart import g, request

from fast_constraints.contracts.schema import Schema
from fast_constraints.core.validator import get_validator
from fast_constraints.exceptions.common_exceptions import ValidationFailedException
from fast_constraints.exceptions.http_exceptions import UnprocessableEntityException

if TYPE_CHECKING:
    from fast_constraints.core.validator import Validator


async def _parse_and_validate(
    schema: type[BaseModel],
    payload: dict,
    *,
    error_type: str,
    groups: Optional[Sequence[str] | str],
    validator: Optional['Validator'],
) -> BaseModel:
    try:
        instance = schema(**payload)
    except ValidationError as e:
        raise UnprocessableEntityException(error_type=error_type, data=e.errors(include_url=False, include_context=False))

    validator = validator or get_validator()
    try:
        if isinstance(instance, Schema):
            await instance.avalidate(groups=groups, validator=validator)
        else:
            await validator.validate_or_fail(instance, groups=groups)
    except ValidationFailedException as e:
        raise UnprocessableEntityException(error_type=error_type, message=e.message, data=e.data)

    return instance


async def validate_request(
    schema: type[BaseModel],
    *,
    exclude_unset: bool = False,
    groups: Optional[Sequence[str] | str] = None,
    validator: Optional['Validator'] = None,
) -> BaseModel:
    """Validate the request body against the schema, then run its callbacks.

    Args:
        schema: The schema to validate the request body against.
        exclude_unset: Whether to exclude unset fields from the validated data.
        groups: Callback groups to run (defaults to the default group).
        validator: Validator to use instead of the process-wide one.

    Returns:
        The validated schema instance. Its dump is stored in `g.validated`.

    Raises:
        UnprocessableEntityException: If parsing fails or a callback recorded a violation.
    """
    json_data = await request.get_json(silent=True) or {}
    instance = await _parse_and_validate(
        schema, json_data, error_type="invalid_request", groups=groups, validator=validator
    )
    g.validated = instance.model_dump(exclude_unset=exclude_unset)
    return instance


async def validate_query(
    schema: type[BaseModel],
    *,
    exclude_unset: bool = False,
    groups: Optional[Sequence[str] | str] = None,
    validator: Optional['Validator'] = None,
) -> BaseModel:
    """Validate the request query parameters against the schema, then run its callbacks.

    Stores the validated dictionary in `g.validated_query`.
    """
    # Convert MultiDict to a plain dict (first value wins per key)
    query_data = dict(request.args)
    instance = await _parse_and_validate(
        schema, query_data, error_type="invalid_query", groups=groups, validator=validator
    )
    g.validated_query = instance.model_dump(exclude_unset=exclude_unset)
    return instance
