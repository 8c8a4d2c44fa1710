from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, Mapping, Optional

from fast_constraints import config
from fast_constraints.contracts.violation import Violation
from fast_constraints.core.localization import __, trans_choice
from fast_constraints.utils.path_resolver import append_path

_UNSET = object()


class ViolationBuilder:
    """
    Fluent builder returned by `ExecutionContext.build_violation`.

    Nothing is recorded until `add_violation()` is called:

        context.build_violation("This name sounds totally fake!") \\
            .at_path("first_name") \\
            .add_violation()
    """

    def __init__(self, context: ExecutionContext, message: str, parameters: Optional[Mapping[str, Any]] = None) -> None:
        self._context = context
        self._message = message
        self._parameters: dict[str, Any] = dict(parameters or {})
        self._path = ""
        self._invalid_value: Any = _UNSET
        self._code: Optional[str] = None
        self._plural: Optional[int] = None

    def at_path(self, path: str | int) -> ViolationBuilder:
        """Target a property relative to the context's current path."""
        self._path = append_path("", path)
        return self

    def set_parameter(self, key: str, value: Any) -> ViolationBuilder:
        self._parameters[key] = value
        return self

    def set_parameters(self, parameters: Mapping[str, Any]) -> ViolationBuilder:
        self._parameters = dict(parameters)
        return self

    def set_invalid_value(self, value: Any) -> ViolationBuilder:
        self._invalid_value = value
        return self

    def set_code(self, code: str) -> ViolationBuilder:
        self._code = code
        return self

    def set_plural(self, count: int) -> ViolationBuilder:
        """Render the message with `trans_choice` using `count`."""
        self._plural = count
        return self

    def add_violation(self) -> None:
        self._context._record(
            self._message,
            self._parameters,
            sub_path=self._path,
            invalid_value=self._invalid_value,
            code=self._code,
            plural=self._plural,
        )


class ExecutionContext:
    """
    Collects the violations of one callback invocation.

    Violations can only be appended. The driver reads them once the callback
    returned; callbacks never see violations of other declarations.
    """

    def __init__(self, obj: Any, *, value: Any = _UNSET, path: str = "", group: Optional[str] = None) -> None:
        self._object = obj
        self._value = obj if value is _UNSET else value
        self._paths: list[str] = [path]
        self._group = group or config.DEFAULT_GROUP
        self._violations: list[Violation] = []

    @property
    def object(self) -> Any:
        """The object being validated."""
        return self._object

    @property
    def value(self) -> Any:
        """The value under validation: the object itself or the declared field's value."""
        return self._value

    @property
    def property_path(self) -> str:
        return self._paths[-1]

    @property
    def group(self) -> str:
        return self._group

    @property
    def violations(self) -> tuple[Violation, ...]:
        return tuple(self._violations)

    def __len__(self) -> int:
        return len(self._violations)

    def add_violation(self, message: str, parameters: Optional[Mapping[str, Any]] = None) -> None:
        """Record a violation at the current path."""
        self._record(message, parameters or {})

    def build_violation(self, message: str, parameters: Optional[Mapping[str, Any]] = None) -> ViolationBuilder:
        return ViolationBuilder(self, message, parameters)

    @contextmanager
    def at_path(self, path: str | int) -> Iterator[ExecutionContext]:
        """
        Scope the current path for the duration of the block.

            with context.at_path("address"):
                context.add_violation("Invalid address.")  # path "address"
        """
        self._paths.append(append_path(self.property_path, path))
        try:
            yield self
        finally:
            self._paths.pop()

    def _record(
        self,
        template: str,
        parameters: Mapping[str, Any],
        *,
        sub_path: str = "",
        invalid_value: Any = _UNSET,
        code: Optional[str] = None,
        plural: Optional[int] = None,
    ) -> None:
        parameters = dict(parameters)
        if plural is None:
            message = __(template, parameters)
        else:
            message = trans_choice(template, plural, parameters)

        self._violations.append(Violation(
            message=message,
            message_template=template,
            path=append_path(self.property_path, sub_path),
            parameters=parameters,
            invalid_value=self._value if invalid_value is _UNSET else invalid_value,
            code=code,
            plural=plural,
        ))
