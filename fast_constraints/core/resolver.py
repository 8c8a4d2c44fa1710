from __future__ import annotations

import importlib
import inspect
import logging
import sys
import threading
from dataclasses import dataclass
from enum import Enum
from types import ModuleType
from typing import Any, Callable, Optional

from fast_constraints import config
from fast_constraints.contracts.callback import Callback
from fast_constraints.exceptions.resolution_exceptions import (
    AmbiguousCallbackSpecError,
    CallbackNotFoundError,
    ResolutionError,
    UnsupportedCallableKindError,
)
from fast_constraints.utils.serialisation import describe_callable

QUALIFIED_SEPARATOR = "::"

_UNSET = object()


class InvocableKind(str, Enum):
    INSTANCE_METHOD = "instance_method"
    STATIC_FUNCTION = "static_function"
    EXTERNAL_FUNCTION = "external_function"
    CLOSURE = "closure"


@dataclass(frozen=True)
class ResolvedInvocable:
    """
    A callback bound to its calling convention.

    `INSTANCE_METHOD` holds the unbound function and is bound to the
    validated object on every call: ``method(context)``.
    Every other kind is called as ``function(value, context)``.
    """

    kind: InvocableKind
    function: Callable[..., Any]
    name: str

    @property
    def is_instance_bound(self) -> bool:
        return self.kind is InvocableKind.INSTANCE_METHOD

    def invoke(self, obj: Any, context: Any, *, value: Any = _UNSET) -> Any:
        """
        Call the callback for `obj`.

        `value` is what static, external and closure callbacks receive first.
        It defaults to `obj`; field-level declarations pass the field value.
        """
        if self.is_instance_bound:
            return self.function.__get__(obj, type(obj))(context)
        return self.function(obj if value is _UNSET else value, context)


class CallbackResolver:
    """
    Turns callback declarations into `ResolvedInvocable`s.

    Resolution only depends on the declaration and the validated type, so
    results are cached per (declaration, type) pair. Failed resolutions are
    not cached.
    """

    def __init__(self, *, cache: Optional[bool] = None) -> None:
        self._cache_enabled = config.CACHE_RESOLUTION if cache is None else cache
        self._cache: dict[tuple[Callback, type], ResolvedInvocable] = {}
        self._lock = threading.Lock()

    def resolve(self, declaration: Callback, target_type: type) -> ResolvedInvocable:
        key = (declaration, target_type)
        if self._cache_enabled:
            cached = self._cache.get(key)
            if cached is not None:
                return cached

        try:
            resolved = self.resolve_spec(declaration.callback, target_type)
        except ResolutionError as exc:
            exc.declaration = declaration
            raise

        if not self._cache_enabled:
            return resolved
        with self._lock:
            return self._cache.setdefault(key, resolved)

    def resolve_spec(self, spec: Any, target_type: type) -> ResolvedInvocable:
        if isinstance(spec, str):
            return self._resolve_string(spec, target_type)
        if isinstance(spec, tuple):
            return self._resolve_pair(spec, target_type)
        if isinstance(spec, (staticmethod, classmethod)):
            return self._resolve_callable(spec.__func__, target_type, spec=spec)
        if callable(spec) and not isinstance(spec, type):
            return self._resolve_callable(spec, target_type, spec=spec)
        raise AmbiguousCallbackSpecError(spec, target_type)

    def clear_cache(self) -> None:
        with self._lock:
            self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)

    # --------------- string specs ---------------
    def _resolve_string(self, spec: str, target_type: type) -> ResolvedInvocable:
        if QUALIFIED_SEPARATOR in spec:
            type_name, _, method_name = spec.rpartition(QUALIFIED_SEPARATOR)
            return self._resolve_pair((type_name, method_name), target_type, spec=spec)

        if not spec.isidentifier():
            raise AmbiguousCallbackSpecError(spec, target_type)
        return self._resolve_member(target_type, spec, target_type, spec=spec)

    def _resolve_pair(self, pair: tuple, target_type: type, *, spec: Any = None) -> ResolvedInvocable:
        spec = pair if spec is None else spec
        if len(pair) != 2:
            raise AmbiguousCallbackSpecError(spec, target_type, detail="a qualified reference needs exactly (type, method)")

        owner_ref, method_name = pair
        if not isinstance(method_name, str) or not method_name.isidentifier():
            raise AmbiguousCallbackSpecError(spec, target_type, detail="method name must be an identifier")
        if isinstance(owner_ref, str):
            if not owner_ref:
                raise AmbiguousCallbackSpecError(spec, target_type, detail="type name is empty")
            owner = self._import_owner(owner_ref, target_type, spec=spec)
        elif isinstance(owner_ref, (type, ModuleType)):
            owner = owner_ref
        else:
            raise AmbiguousCallbackSpecError(spec, target_type, detail="type must be a class or a dotted class name")

        if isinstance(owner, ModuleType):
            if hasattr(owner, method_name):
                raise UnsupportedCallableKindError(
                    spec, target_type, detail=f"`{method_name}` is a module level function of `{owner.__name__}`"
                )
            raise CallbackNotFoundError(spec, target_type)

        return self._resolve_member(owner, method_name, target_type, spec=spec)

    def _import_owner(self, name: str, target_type: type, *, spec: Any) -> type | ModuleType:
        """Resolve 'package.module.Type', a bare name from the target's own hierarchy, or a top level module."""
        if "." not in name:
            for cls in target_type.__mro__:
                if cls.__name__ == name:
                    return cls
            # Top level modules ('json::dumps') name global functions
            try:
                return sys.modules.get(name) or importlib.import_module(name)
            except ImportError:
                logging.debug(f"`{name}` is neither in the hierarchy of {target_type.__qualname__} nor a module")
            raise AmbiguousCallbackSpecError(
                spec, target_type, detail=f"`{name}` is not part of the validated type hierarchy; use 'module.{name}'"
            )

        parts = name.split(".")
        last_error: Optional[Exception] = None
        # Longest importable module prefix wins; the rest is an attribute chain (nested classes)
        for index in range(len(parts), 0, -1):
            module_name = ".".join(parts[:index])
            try:
                current: Any = sys.modules.get(module_name) or importlib.import_module(module_name)
            except ImportError as exc:
                last_error = exc
                continue
            for attribute in parts[index:]:
                current = getattr(current, attribute, None)
                if current is None:
                    break
            if isinstance(current, (type, ModuleType)):
                return current
            break

        raise CallbackNotFoundError(spec, target_type, detail=f"type `{name}` cannot be imported") from last_error

    # --------------- member lookup ---------------
    def _resolve_member(self, owner: type, name: str, target_type: type, *, spec: Any) -> ResolvedInvocable:
        try:
            attribute = inspect.getattr_static(owner, name)
        except AttributeError:
            raise CallbackNotFoundError(spec, target_type) from None

        own_hierarchy = issubclass(target_type, owner)
        label = f"{owner.__qualname__}.{name}"

        if isinstance(attribute, (staticmethod, classmethod)):
            kind = InvocableKind.STATIC_FUNCTION if own_hierarchy else InvocableKind.EXTERNAL_FUNCTION
            # staticmethod unwraps, classmethod binds to the validated type (or the external owner)
            function = attribute.__get__(None, target_type if own_hierarchy else owner)
            return ResolvedInvocable(kind, function, label)

        if inspect.isfunction(attribute):
            if own_hierarchy:
                return ResolvedInvocable(InvocableKind.INSTANCE_METHOD, attribute, label)
            raise UnsupportedCallableKindError(
                spec, target_type, detail=f"`{label}` is an instance method of another type; make it static"
            )

        raise UnsupportedCallableKindError(spec, target_type, detail=f"`{label}` is not a method")

    # --------------- callable specs ---------------
    def _resolve_callable(self, fn: Callable[..., Any], target_type: type, *, spec: Any) -> ResolvedInvocable:
        name = describe_callable(fn)

        if inspect.isbuiltin(fn):
            raise UnsupportedCallableKindError(spec, target_type, detail=f"builtin `{name}` cannot be a callback")

        if inspect.ismethod(fn):
            owner = fn.__self__
            if isinstance(owner, type):
                kind = InvocableKind.STATIC_FUNCTION if issubclass(target_type, owner) else InvocableKind.EXTERNAL_FUNCTION
                return ResolvedInvocable(kind, fn, name)
            # Bound to an instance captured at configuration time
            return ResolvedInvocable(InvocableKind.CLOSURE, fn, name)

        if not inspect.isfunction(fn):
            return ResolvedInvocable(InvocableKind.CLOSURE, fn, name)

        if fn.__name__ == "<lambda>":
            return ResolvedInvocable(InvocableKind.CLOSURE, fn, name)

        owner = self._find_owner_in_hierarchy(fn, target_type)
        if owner is not None:
            return self._resolve_member(owner, fn.__name__, target_type, spec=spec)

        scopes = fn.__qualname__.split(".")
        if len(scopes) > 1 and scopes[-2] != "<locals>":
            owner = self._find_owner_in_module(fn)
            if owner is not None:
                return self._resolve_member(owner, fn.__name__, target_type, spec=spec)
            if "<locals>" not in scopes:
                raise CallbackNotFoundError(spec, target_type, detail=f"owner of `{fn.__qualname__}` cannot be found")

        if "<locals>" in scopes:
            return ResolvedInvocable(InvocableKind.CLOSURE, fn, name)

        raise UnsupportedCallableKindError(
            spec, target_type, detail=f"`{name}` is a module level function; pass a closure or a static method"
        )

    @staticmethod
    def _find_owner_in_hierarchy(fn: Callable[..., Any], target_type: type) -> Optional[type]:
        for cls in target_type.__mro__:
            attribute = cls.__dict__.get(fn.__name__)
            if attribute is fn or getattr(attribute, "__func__", None) is fn:
                return cls
        return None

    @staticmethod
    def _find_owner_in_module(fn: Callable[..., Any]) -> Optional[type]:
        current: Any = sys.modules.get(fn.__module__)
        for part in fn.__qualname__.split(".")[:-1]:
            current = getattr(current, part, None)
            if current is None:
                logging.debug(f"Cannot walk `{fn.__qualname__}` in module `{fn.__module__}`")
                return None
        return current if isinstance(current, type) else None
