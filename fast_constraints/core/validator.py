from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Iterable, Optional, Sequence

from fast_constraints import config
from fast_constraints.contracts.callback import Callback
from fast_constraints.contracts.metadata_provider import MetadataProvider
from fast_constraints.core.execution_context import ExecutionContext
from fast_constraints.core.metadata import ClassMetadataProvider
from fast_constraints.core.resolver import CallbackResolver, ResolvedInvocable
from fast_constraints.core.validation_result import ValidationResult
from fast_constraints.exceptions.common_exceptions import (
    CallbackFaultException,
    ConstraintConfigurationException,
    ValidationFailedException,
)
from fast_constraints.exceptions.resolution_exceptions import FieldNotFoundError, ResolutionError
from fast_constraints.utils.path_resolver import read_path


class Validator:
    """
    Runs callback constraints against objects.

    For every declaration of the validated type (in declaration order) the
    callback is resolved, invoked with a fresh `ExecutionContext`, and the
    violations it emitted are appended to the result, tagged with the
    declaration's payload.

    A callback that raises aborts the run with `CallbackFaultException`.
    Declarations that cannot be resolved are logged and skipped; strict
    validators raise `ConstraintConfigurationException` once the remaining
    declarations ran.
    """

    def __init__(
        self,
        metadata_provider: Optional[MetadataProvider] = None,
        resolver: Optional[CallbackResolver] = None,
        *,
        strict: Optional[bool] = None,
    ) -> None:
        self.metadata_provider = metadata_provider or ClassMetadataProvider()
        self.resolver = resolver or CallbackResolver()
        self.strict = config.STRICT_RESOLUTION if strict is None else strict

    async def validate(
        self,
        obj: Any,
        declarations: Optional[Sequence[Callback]] = None,
        *,
        groups: Optional[Sequence[str] | str] = None,
    ) -> ValidationResult:
        target_type = type(obj)
        if declarations is None:
            declarations = self.metadata_provider.get_declarations(target_type)

        groups = self._normalise_groups(groups)
        result = ValidationResult()

        for declaration in declarations:
            if not declaration.in_groups(groups):
                continue

            try:
                invocable = self.resolver.resolve(declaration, target_type)
                value = self._read_field(obj, declaration)
            except ResolutionError as e:
                logging.error(f"Skipping callback constraint: {e.message}")
                result.resolution_errors.append(e)
                continue

            group = next(group for group in groups if group in declaration.groups)
            context = await self._invoke(invocable, declaration, obj, value, group)

            violations = context.violations
            if declaration.payload is not None:
                violations = [violation.model_copy(update={"payload": declaration.payload}) for violation in violations]
            result.extend(violations)

        if result.resolution_errors and self.strict:
            raise ConstraintConfigurationException(result.resolution_errors, result=result)

        return result

    async def validate_or_fail(
        self,
        obj: Any,
        declarations: Optional[Sequence[Callback]] = None,
        *,
        groups: Optional[Sequence[str] | str] = None,
        error_type: str = "invalid_request",
    ) -> ValidationResult:
        """Validate and raise `ValidationFailedException` if any violation was recorded."""
        result = await self.validate(obj, declarations, groups=groups)
        if not result.is_valid:
            raise ValidationFailedException(result, error_type=error_type)
        return result

    async def validate_all(
        self,
        objects: Iterable[Any],
        *,
        groups: Optional[Sequence[str] | str] = None,
    ) -> list[ValidationResult]:
        """
        Validate sibling objects concurrently. Results keep the input order.

        The first failing run cancels its still running siblings before the
        error propagates.
        """
        tasks = [asyncio.ensure_future(self.validate(obj, groups=groups)) for obj in objects]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    async def _invoke(
        self,
        invocable: ResolvedInvocable,
        declaration: Callback,
        obj: Any,
        value: Any,
        group: str,
    ) -> ExecutionContext:
        if declaration.field is None:
            context = ExecutionContext(obj, group=group)
            arguments = {}
        else:
            context = ExecutionContext(obj, value=value, path=declaration.field, group=group)
            arguments = {"value": value}

        try:
            outcome = invocable.invoke(obj, context, **arguments)
            if inspect.isawaitable(outcome):
                await outcome
        except Exception as e:
            logging.exception(f"Callback `{invocable.name}` raised while validating {type(obj).__qualname__}", exc_info=e)
            raise CallbackFaultException(declaration, type(obj), e) from e

        return context

    @staticmethod
    def _read_field(obj: Any, declaration: Callback) -> Any:
        """Value of the declared field ('address.street', 'tags[0]'); None for object-level declarations."""
        if declaration.field is None:
            return None
        try:
            return read_path(obj, declaration.field)
        except LookupError as e:
            error = FieldNotFoundError(
                declaration.callback, type(obj), detail=f"field `{declaration.field}` does not exist"
            )
            error.declaration = declaration
            raise error from e

    @staticmethod
    def _normalise_groups(groups: Optional[Sequence[str] | str]) -> tuple[str, ...]:
        if groups is None:
            return (config.DEFAULT_GROUP,)
        if isinstance(groups, str):
            return (groups,)
        return tuple(groups) or (config.DEFAULT_GROUP,)


_VALIDATOR: Optional[Validator] = None


def get_validator() -> Validator:
    """Return the process-wide validator, creating it on first use."""
    global _VALIDATOR
    if _VALIDATOR is None:
        _VALIDATOR = Validator()
    return _VALIDATOR


def set_validator(validator: Optional[Validator]) -> None:
    """Replace the process-wide validator (None resets to a fresh default on next use)."""
    global _VALIDATOR
    _VALIDATOR = validator


async def validate(
    obj: Any,
    declarations: Optional[Sequence[Callback]] = None,
    *,
    groups: Optional[Sequence[str] | str] = None,
) -> ValidationResult:
    """Validate `obj` with the process-wide validator."""
    return await get_validator().validate(obj, declarations, groups=groups)
