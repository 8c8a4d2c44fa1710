import inspect
from typing import Any, Callable, Optional, TypeVar

from fast_constraints.contracts.callback import Callback

T = TypeVar('T')

CALLBACK_MARKER = "__constraint_callback__"
DECLARATIONS_ATTR = "__constraints__"


def callback(
    func: Optional[Callable] = None,
    *,
    groups: tuple[str, ...] | str = (),
    payload: Any = None,
    field: Optional[str] = None,
):
    """
    Mark a method as a callback constraint of its class.

    Works bare or with options, on instance, static and class methods:

        class Author:
            @callback
            def validate(self, context): ...

            @callback(groups=("strict",), payload={"severity": "error"})
            @staticmethod
            def check(author, context): ...
    """
    def decorator(target):
        function = target.__func__ if isinstance(target, (staticmethod, classmethod)) else target
        setattr(function, CALLBACK_MARKER, {"groups": groups, "payload": payload, "field": field})
        return target

    if func is not None:
        return decorator(func)
    return decorator


def get_callback_options(attribute: Any) -> Optional[dict]:
    """Options stored by `@callback` on a class attribute, or None if it is not marked."""
    function = attribute.__func__ if isinstance(attribute, (staticmethod, classmethod)) else attribute
    if not inspect.isfunction(function):
        return None
    return getattr(function, CALLBACK_MARKER, None)


def constrained(*declarations: Callback):
    """Class decorator attaching callback declarations to the decorated class."""
    def decorator(cls: type[T]) -> type[T]:
        own = list(cls.__dict__.get(DECLARATIONS_ATTR, ()))
        own.extend(declarations)
        setattr(cls, DECLARATIONS_ATTR, tuple(own))
        return cls
    return decorator
