from __future__ import annotations

import pytest

from fast_constraints import Callback, ClassMetadataProvider, Validator, callback, constrained


def root_level(obj, context):
    pass


class Publication:
    class Meta:
        constraints = [Callback("check_title")]

    title = ""

    def check_title(self, context):
        if not self.title:
            context.build_violation("Title is required.").at_path("title").add_violation()

    @callback
    def check_base(self, context):
        context.add_violation("base")


@constrained(Callback(lambda obj, context: context.add_violation("decorated")))
class Book(Publication):
    @callback
    def check_base(self, context):
        context.add_violation("overridden base")

    @callback(groups=("strict",), payload={"severity": "warning"})
    @staticmethod
    def check_isbn(book, context):
        context.build_violation("ISBN is missing.").at_path("isbn").add_violation()

    @callback(field="title")
    @classmethod
    def check_title_length(cls, title, context):
        if len(title) > 5:
            context.add_violation("Title is too long.")


@pytest.fixture
def provider():
    return ClassMetadataProvider()


def test_declaration_sources_and_order(provider):
    declarations = provider.get_declarations(Book)
    specs = [d.callback for d in declarations]

    assert specs[0] == "check_title"  # Publication.Meta
    assert specs[1] == "check_base"  # Publication @callback, overridden in Book
    assert callable(specs[2])  # @constrained on Book
    assert specs[3:] == ["check_isbn", "check_title_length"]


def test_decorator_options_become_declaration_attributes(provider):
    by_name = {d.callback: d for d in provider.get_declarations(Book) if isinstance(d.callback, str)}

    assert by_name["check_isbn"].groups == ("strict",)
    assert by_name["check_isbn"].payload == {"severity": "warning"}
    assert by_name["check_title_length"].field == "title"
    assert by_name["check_base"].groups == ("Default",)


def test_declarations_are_cached_per_class(provider):
    assert provider.get_declarations(Book) is provider.get_declarations(Book)
    assert len(provider.get_declarations(Publication)) == 2


def test_programmatic_registration_invalidates_cache(provider):
    before = provider.get_declarations(Publication)
    extra = Callback(lambda obj, context: None)
    provider.register(Publication, extra)

    after = provider.get_declarations(Publication)
    assert after is not before
    assert after[1] is extra  # registered after Meta, before @callback methods
    # Subclasses inherit registered declarations
    assert extra in provider.get_declarations(Book)


def test_constrained_does_not_leak_to_parent(provider):
    assert all(not callable(d.callback) for d in provider.get_declarations(Publication))


@pytest.mark.asyncio
async def test_inherited_callbacks_run_parent_first():
    book = Book()
    book.title = "A very long title"

    result = await Validator(strict=True).validate(book)
    assert result.messages() == ["overridden base", "decorated", "Title is too long."]

    strict = await Validator(strict=True).validate(book, groups="strict")
    assert strict.messages() == ["ISBN is missing."]
    assert strict[0].payload == {"severity": "warning"}


@pytest.mark.asyncio
async def test_meta_constraints_on_empty_title():
    result = await Validator(strict=True).validate(Publication())
    assert result.paths() == ["title", ""]
