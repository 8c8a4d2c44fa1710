from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from fast_constraints import config


@dataclass(frozen=True, eq=False)
class Callback:
    """
    Declares a callback constraint on a class or on one of its fields.

    `callback` accepts:
      - a method name on the validated class: ``Callback("validate")``
      - an external static or class method: ``Callback((AuthorValidator, "validate"))``,
        ``Callback(("app.validators.AuthorValidator", "validate"))`` or
        ``Callback("app.validators.AuthorValidator::validate")``
      - a closure captured at configuration time: ``Callback(lambda obj, context: ...)``

    Instance methods receive only the execution context. Every other kind
    receives the validated value first and the context second.

    Declarations compare and hash by identity.
    """

    callback: Any
    field: Optional[str] = None
    groups: tuple[str, ...] = ()
    payload: Any = None

    def __post_init__(self) -> None:
        groups = self.groups
        if isinstance(groups, str):
            groups = (groups,)
        object.__setattr__(self, "groups", tuple(groups) or (config.DEFAULT_GROUP,))

    def in_groups(self, groups: tuple[str, ...] | list[str]) -> bool:
        return any(group in self.groups for group in groups)
