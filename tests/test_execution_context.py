from __future__ import annotations

import pytest

from fast_constraints.core.execution_context import ExecutionContext


class Address:
    street = ""


@pytest.fixture
def context():
    return ExecutionContext(Address())


def test_add_violation_defaults_to_object_root(context):
    context.add_violation("Address is incomplete.")

    (violation,) = context.violations
    assert violation.path == ""
    assert violation.loc == ()
    assert violation.message == "Address is incomplete."


def test_built_violation_is_recorded_at_path(context):
    context.build_violation("This name sounds totally fake!").at_path("first_name").add_violation()

    (violation,) = context.violations
    assert violation.message == "This name sounds totally fake!"
    assert violation.path == "first_name"


def test_uncommitted_builder_records_nothing(context):
    builder = context.build_violation("Never committed").at_path("street")
    builder.set_parameter("value", "x")

    assert len(context) == 0
    assert context.violations == ()


def test_each_commit_records_one_violation(context):
    builder = context.build_violation("Duplicate").at_path("street")
    builder.add_violation()
    builder.add_violation()
    assert len(context) == 2


def test_path_scoping_nests_dots_and_brackets(context):
    with context.at_path("address"):
        context.build_violation("Street is required.").at_path("street").add_violation()
        assert context.property_path == "address"
    with context.at_path("tags"):
        with context.at_path(0):
            context.add_violation("Unknown tag.")
        context.build_violation("Unknown tag.").at_path("[1]").add_violation()

    assert [v.path for v in context.violations] == ["address.street", "tags[0]", "tags[1]"]
    assert context.violations[1].loc == ("tags", "0")
    assert context.property_path == ""


def test_path_scope_is_restored_when_callback_raises(context):
    with pytest.raises(RuntimeError):
        with context.at_path("address"):
            raise RuntimeError("boom")
    assert context.property_path == ""


def test_parameters_are_interpolated(context):
    context.add_violation("{value} is on the blocklist.", {"value": "FakeName"})
    context.build_violation("At most {limit} tags.").set_parameter("limit", 3).at_path("tags").add_violation()

    first, second = context.violations
    assert first.message == "FakeName is on the blocklist."
    assert first.message_template == "{value} is on the blocklist."
    assert first.parameters == {"value": "FakeName"}
    assert second.message == "At most 3 tags."


def test_missing_parameters_leave_template_untouched(context):
    context.add_violation("{value} is on the blocklist.", {"other": 1})
    assert context.violations[0].message == "{value} is on the blocklist."


@pytest.mark.parametrize("template, parameters", [
    ("{value.length} is too long.", {"value": "abc"}),
    ("{value[0]} is not a tag.", {"value": 5}),
])
def test_unrenderable_templates_fall_back_to_raw_template(context, template, parameters):
    context.add_violation(template, parameters)

    (violation,) = context.violations
    assert violation.message == template
    assert violation.parameters == parameters


def test_invalid_value_code_and_error_shape(context):
    context.build_violation("Too long.") \
        .at_path("street") \
        .set_invalid_value("x" * 300) \
        .set_code("too_long") \
        .set_parameters({"max": 255}) \
        .add_violation()

    violation = context.violations[0]
    assert violation.invalid_value == "x" * 300
    assert violation.to_error() == {
        "loc": ("street",),
        "msg": "Too long.",
        "type": "too_long",
        "ctx": {"max": 255},
    }


def test_invalid_value_defaults_to_value_under_validation():
    context = ExecutionContext(Address(), value="Main St", path="street")
    context.add_violation("Street is blocked.")

    violation = context.violations[0]
    assert violation.invalid_value == "Main St"
    assert violation.path == "street"
    assert violation.to_error()["type"] == "callback_error"


def test_context_exposes_object_value_and_group():
    address = Address()
    context = ExecutionContext(address, group="strict")
    assert context.object is address
    assert context.value is address
    assert context.group == "strict"
    assert ExecutionContext(address).group == "Default"


def test_context_is_append_only(context):
    context.add_violation("First.")
    snapshot = context.violations

    assert isinstance(snapshot, tuple)
    assert not hasattr(context, "remove_violation")

    context.add_violation("Second.")
    assert len(snapshot) == 1
    assert len(context.violations) == 2
