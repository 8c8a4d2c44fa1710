from __future__ import annotations

import functools
import os

import pytest

from fast_constraints import Callback
from fast_constraints.core.execution_context import ExecutionContext
from fast_constraints.core.resolver import CallbackResolver, InvocableKind
from fast_constraints.exceptions import (
    AmbiguousCallbackSpecError,
    CallbackNotFoundError,
    UnsupportedCallableKindError,
)


class Author:
    nickname = "anonymous"

    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def validate(self, *args):
        self.calls.append(args)

    @staticmethod
    def check(*args):
        STATIC_CALLS.append(args)

    @classmethod
    def check_class(cls, *args):
        STATIC_CALLS.append((cls,) + args)


class Editor(Author):
    def validate(self, *args):
        self.calls.append(("editor",) + args)


class NameChecker:
    @staticmethod
    def check(*args):
        STATIC_CALLS.append(args)

    def inspect(self, author, context):
        pass


def global_check(author, context):
    pass


STATIC_CALLS: list[tuple] = []


@pytest.fixture(autouse=True)
def clear_static_calls():
    STATIC_CALLS.clear()


@pytest.fixture
def resolver():
    return CallbackResolver(cache=True)


def test_method_name_resolves_to_late_bound_instance_method(resolver):
    invocable = resolver.resolve(Callback("validate"), Author)
    assert invocable.kind is InvocableKind.INSTANCE_METHOD

    author = Author()
    context = ExecutionContext(author)
    invocable.invoke(author, context)

    # Instance methods only receive the context
    assert author.calls == [(context,)]


def test_instance_method_resolution_follows_overrides(resolver):
    invocable = resolver.resolve(Callback("validate"), Editor)
    editor = Editor()
    invocable.invoke(editor, "ctx")
    assert editor.calls == [("editor", "ctx")]


def test_static_and_class_methods_receive_object_then_context(resolver):
    author = Author()
    static = resolver.resolve(Callback("check"), Author)
    class_bound = resolver.resolve(Callback("check_class"), Author)

    assert static.kind is InvocableKind.STATIC_FUNCTION
    assert class_bound.kind is InvocableKind.STATIC_FUNCTION

    static.invoke(author, "ctx")
    class_bound.invoke(author, "ctx")
    assert STATIC_CALLS == [(author, "ctx"), (Author, author, "ctx")]


@pytest.mark.parametrize("spec", [
    (NameChecker, "check"),
    (f"{NameChecker.__module__}.NameChecker", "check"),
    f"{NameChecker.__module__}.NameChecker::check",
    NameChecker.check,
])
def test_external_static_method_forms(resolver, spec):
    invocable = resolver.resolve(Callback(spec), Author)
    assert invocable.kind is InvocableKind.EXTERNAL_FUNCTION

    author = Author()
    invocable.invoke(author, "ctx")
    assert STATIC_CALLS == [(author, "ctx")]


def test_function_taken_from_own_class_body(resolver):
    assert resolver.resolve(Callback(Author.validate), Author).kind is InvocableKind.INSTANCE_METHOD
    assert resolver.resolve(Callback(Author.check), Author).kind is InvocableKind.STATIC_FUNCTION
    assert resolver.resolve(Callback(Author.check_class), Author).kind is InvocableKind.STATIC_FUNCTION


def test_closures(resolver):
    seen = []

    def nested(obj, context):
        seen.append((obj, context))

    checker = NameChecker()
    specs = [
        lambda obj, context: seen.append((obj, context)),
        nested,
        functools.partial(nested),
        functools.partial(global_check),
        checker.inspect,
    ]
    for spec in specs:
        assert resolver.resolve(Callback(spec), Author).kind is InvocableKind.CLOSURE

    author = Author()
    resolver.resolve(Callback(nested), Author).invoke(author, "ctx")
    assert seen == [(author, "ctx")]


@pytest.mark.parametrize("spec", [
    global_check,
    len,
    (NameChecker, "inspect"),
    "nickname",
    "fast_constraints.utils.path_resolver::append_path",
    (os.path, "join"),
    "json::dumps",
    ("json", "dumps"),
])
def test_unsupported_callable_kinds(resolver, spec):
    with pytest.raises(UnsupportedCallableKindError):
        resolver.resolve(Callback(spec), Author)


@pytest.mark.parametrize("spec", [
    "missing",
    (NameChecker, "missing"),
    "nonexistent_package.validators.Checker::check",
])
def test_not_found(resolver, spec):
    with pytest.raises(CallbackNotFoundError):
        resolver.resolve(Callback(spec), Author)


@pytest.mark.parametrize("spec", [
    "",
    "a.b",
    "not an identifier",
    ("only_one",),
    (NameChecker, "check", "extra"),
    (42, "check"),
    (NameChecker, "not valid"),
    ("Unknown", "check"),
    None,
    42,
    Author,
])
def test_ambiguous_specs(resolver, spec):
    with pytest.raises(AmbiguousCallbackSpecError):
        resolver.resolve(Callback(spec), Author)


def test_bare_type_name_from_own_hierarchy(resolver):
    invocable = resolver.resolve(Callback("Author::check"), Editor)
    assert invocable.kind is InvocableKind.STATIC_FUNCTION


def test_resolution_error_carries_declaration(resolver):
    declaration = Callback("missing")
    with pytest.raises(CallbackNotFoundError) as exc_info:
        resolver.resolve(declaration, Author)

    assert exc_info.value.declaration is declaration
    assert exc_info.value.target_type is Author
    assert "missing" in exc_info.value.message


def test_resolution_is_cached_per_declaration_and_type(resolver):
    declaration = Callback("validate")
    first = resolver.resolve(declaration, Author)
    assert resolver.resolve(declaration, Author) is first

    resolver.resolve(declaration, Editor)
    assert len(resolver) == 2

    resolver.clear_cache()
    assert len(resolver) == 0


def test_failed_resolutions_are_not_cached(resolver):
    with pytest.raises(CallbackNotFoundError):
        resolver.resolve(Callback("missing"), Author)
    assert len(resolver) == 0


def test_cache_can_be_disabled():
    resolver = CallbackResolver(cache=False)
    declaration = Callback("validate")

    first = resolver.resolve(declaration, Author)
    second = resolver.resolve(declaration, Author)
    assert first == second
    assert first is not second
    assert len(resolver) == 0
