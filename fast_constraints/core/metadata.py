from __future__ import annotations

import threading
from typing import Iterable

from fast_constraints.contracts.callback import Callback
from fast_constraints.contracts.metadata_provider import MetadataProvider
from fast_constraints.decorators.callback_decorator import DECLARATIONS_ATTR, get_callback_options


class ClassMetadataProvider(MetadataProvider):
    """
    Reads callback declarations from the classes themselves.

    For every class of the MRO, most basic first, declarations are taken from:
      1. ``Meta.constraints`` declared on that class
      2. ``@constrained(...)`` and ``register(cls, ...)``
      3. methods marked with ``@callback``, in class-body order

    A marked method overridden in a subclass is declared once and resolves
    to the override.
    """

    def __init__(self) -> None:
        self._registered: dict[type, list[Callback]] = {}
        self._cache: dict[type, tuple[Callback, ...]] = {}
        self._lock = threading.Lock()

    def register(self, cls: type, *declarations: Callback) -> None:
        with self._lock:
            self._registered.setdefault(cls, []).extend(declarations)
            self._cache.clear()

    def get_declarations(self, cls: type) -> tuple[Callback, ...]:
        cached = self._cache.get(cls)
        if cached is not None:
            return cached

        declarations = tuple(self._collect(cls))
        with self._lock:
            return self._cache.setdefault(cls, declarations)

    def clear_cache(self) -> None:
        with self._lock:
            self._cache.clear()

    def _collect(self, cls: type) -> Iterable[Callback]:
        declared_methods: set[str] = set()

        for klass in reversed(cls.__mro__):
            if klass is object:
                continue

            meta = klass.__dict__.get("Meta")
            yield from (getattr(meta, "constraints", None) or ())
            yield from klass.__dict__.get(DECLARATIONS_ATTR, ())
            yield from self._registered.get(klass, ())

            for name, attribute in list(klass.__dict__.items()):
                options = get_callback_options(attribute)
                if options is None or name in declared_methods:
                    continue
                declared_methods.add(name)
                yield Callback(name, **options)
