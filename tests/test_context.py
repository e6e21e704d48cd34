import pytest

from codecschema.context import Context, escape_pointer_segment, identity


def test_defaults():
    ctx = Context.with_defaults()
    assert ctx.codec_path == ()
    assert ctx.schema_path == ()
    assert dict(ctx.definitions) == {}
    assert ctx.customizer is identity
    assert ctx.materialize_schema_path() == "#/"


def test_with_customizer():
    def custom(schema, codec, context):
        return schema

    assert Context.with_defaults(customizer=custom).customizer is custom


def test_extend_is_copy_on_write():
    root = Context.with_defaults()
    child = root.extend_schema_path(["properties", "foo"]).extend_codec_path("Foo")

    assert root.schema_path == ()
    assert root.codec_path == ()
    assert child.schema_path == ("properties", "foo")
    assert child.codec_path == ("Foo",)
    assert child.materialize_schema_path() == "#/properties/foo"


def test_extend_paths():
    ctx = Context.with_defaults().extend_paths(codec="string", schema=["anyOf", 0])
    assert ctx.codec_path == ("string",)
    assert ctx.schema_path == ("anyOf", "0")


def test_register_definition_does_not_leak():
    root = Context.with_defaults()
    left = root.register_definition("Foo", "#/$defs/Foo")
    right = root.extend_schema_path(["items"])

    assert left.definitions == {"Foo": "#/$defs/Foo"}
    assert "Foo" not in root.definitions
    assert "Foo" not in right.definitions
    # carried forward into descendants
    assert left.extend_schema_path(["items"]).definitions["Foo"] == "#/$defs/Foo"


def test_definitions_are_read_only():
    ctx = Context.with_defaults().register_definition("Foo", "#/$defs/Foo")
    with pytest.raises(TypeError):
        ctx.definitions["Bar"] = "#/$defs/Bar"


def test_context_is_frozen():
    ctx = Context.with_defaults()
    with pytest.raises(AttributeError):
        ctx.schema_path = ("x",)


@pytest.mark.parametrize(
    "segment, expected",
    [("plain", "plain"), ("a/b", "a~1b"), ("a~b", "a~0b"), ("~/", "~0~1"), (3, "3")],
)
def test_escape_pointer_segment(segment, expected):
    assert escape_pointer_segment(segment) == expected
