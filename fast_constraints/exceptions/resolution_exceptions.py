from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

from fast_constraints.utils.serialisation import describe_callable

if TYPE_CHECKING:
    from fast_constraints.contracts.callback import Callback


class ResolutionError(Exception):
    """
    A callback declaration could not be bound to something invocable.

    These are configuration errors meant for developers. They are never
    converted to violations.
    """

    reason = "unresolvable callback"

    def __init__(self, spec: Any, target_type: Optional[type] = None, *, detail: Optional[str] = None):
        self.spec = spec
        self.target_type = target_type
        self.declaration: Optional[Callback] = None
        target = f" on `{target_type.__qualname__}`" if target_type is not None else ""
        self.message = f"Cannot resolve callback `{describe_callable(spec)}`{target}: {detail or self.reason}."
        super().__init__(self.message)


class CallbackNotFoundError(ResolutionError):
    reason = "method or function does not exist"


class UnsupportedCallableKindError(ResolutionError):
    reason = "only instance methods, static or class methods and closures are supported"


class AmbiguousCallbackSpecError(ResolutionError):
    reason = "expected a method name, a (type, method) pair, 'module.Type::method' or a closure"


class FieldNotFoundError(ResolutionError):
    reason = "the declared field does not exist on the validated object"
