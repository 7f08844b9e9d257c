"""End-to-end tests for jsonshape.generator."""

from __future__ import annotations

import pytest

from jsonshape import generate, generate_from_shape
from jsonshape.analyzer import analyze
from jsonshape.errors import ConfigError, NestingDepthError
from jsonshape.generator import resolve_root_name
from jsonshape.options import GenerateOptions


def test_array_of_objects() -> None:
    result = generate([{"id": 1, "val": 100}, {"id": 2, "val": 380}])

    assert result == (
        "type rootType = rootTypeItem[];\n"
        "\n"
        "type rootTypeItem = {\n"
        "  id: number;\n"
        "  val: number;\n"
        "};"
    )


def test_field_missing_from_some_items_is_optional() -> None:
    result = generate([{"a": 1, "b": 2}, {"a": 1}])

    assert "  a: number;\n  b?: number;" in result


def test_object_root_declares_root_type() -> None:
    assert generate({"name": "x", "active": True}) == (
        "type rootType = {\n"
        "  active: boolean;\n"
        "  name: string;\n"
        "};"
    )


def test_scalar_and_empty_roots() -> None:
    assert generate("hello") == "type rootType = string;"
    assert generate(None) == "type rootType = null;"
    assert generate([]) == "type rootType = string[];"
    assert generate({}) == "type rootType = {};"


def test_structurally_equal_objects_are_declared_once() -> None:
    value = {"home": {"street": "a", "city": "b"}, "work": {"city": "c", "street": "d"}}

    assert generate(value) == (
        "type rootType = {\n"
        "  home: homeType;\n"
        "  work: homeType;\n"
        "};\n"
        "\n"
        "type homeType = {\n"
        "  city: string;\n"
        "  street: string;\n"
        "};"
    )


def test_name_collisions_are_numbered() -> None:
    result = generate({"a": {"item": {"x": 1}}, "b": {"item": {"y": "s"}}})

    assert "type itemType = {\n  x: number;\n};" in result
    assert "type itemType2 = {\n  y: string;\n};" in result
    assert "  item: itemType2;" in result


def test_mixed_arrays_render_parenthesized_unions() -> None:
    assert generate([1, "a", None]) == "type rootType = (null | number | string)[];"
    assert generate([{"a": 1}, "x"]) == (
        "type rootType = (rootTypeItemUnion1 | string)[];\n"
        "\n"
        "type rootTypeItemUnion1 = {\n"
        "  a: number;\n"
        "};"
    )


def test_nested_arrays() -> None:
    assert generate([[1, 2], [3]]) == "type rootType = number[][];"


def test_plural_fields_get_singular_item_names() -> None:
    value = {"addresses": [{"city": "x"}]}

    assert generate(value) == (
        "type rootType = {\n"
        "  addresses: addressTypeItem[];\n"
        "};\n"
        "\n"
        "type addressTypeItem = {\n"
        "  city: string;\n"
        "};"
    )
    assert "addressesTypeItem" in generate(value, singularize=False)


def test_literal_threshold() -> None:
    assert generate("hello", literal_threshold=1) == "type rootType = 'hello';"
    assert generate("hello", literal_threshold=1, quote="double") == 'type rootType = "hello";'
    assert generate([True, False], literal_threshold=2) == "type rootType = (false | true)[];"
    assert generate(1.0, literal_threshold=1) == "type rootType = 1;"

    two = generate([{"kind": "a"}, {"kind": "b"}], literal_threshold=2)
    three = generate([{"kind": "a"}, {"kind": "b"}, {"kind": "c"}], literal_threshold=2)
    assert "  kind: 'a' | 'b';" in two
    assert "  kind: string;" in three


def test_null_as_optional() -> None:
    value = [{"name": "a"}, {"name": None}]

    assert "  name: null | string;" in generate(value)
    assert "  name?: string;" in generate(value, null_as_optional=True)
    assert "  v: null;" in generate({"v": None}, null_as_optional=True)
    assert "  a?: number;" in generate([{"a": 1}, {"a": None}, {}], null_as_optional=True)
    assert "  a?: null | number;" in generate([{"a": 1}, {"a": None}, {}])


def test_null_only_field_missing_from_some_items_stays_optional() -> None:
    value = [{"x": None, "a": 1}, {"a": 2}]

    assert "  x?: null;" in generate(value, null_as_optional=True)
    assert "  x?: null;" in generate(value)


def test_null_as_optional_keeps_nulls_inside_arrays() -> None:
    missing = [{"tags": ["a", None]}, {}]
    nulled = [{"tags": ["a", None]}, {"tags": None}]

    assert "  tags?: (null | string)[];" in generate(missing, null_as_optional=True)
    assert "  tags: (null | string)[] | null;" in generate(nulled)
    assert "  tags?: (null | string)[];" in generate(nulled, null_as_optional=True)


def test_generation_is_deterministic() -> None:
    value = {
        "a": {"item": {"kind": "x", "tags": ["t", 1, None]}},
        "b": {"item": {"kind": "y", "extra": [[1], ["s"]]}},
        "records": [{"id": 1, "state": "on"}, {"id": 2.0, "state": "off", "note": None}],
    }
    options = GenerateOptions(literal_threshold=2, null_as_optional=True, declaration_order="dependency")

    first = generate(value, options)
    second = generate(value, options)

    assert first == second
    assert first == generate(value, GenerateOptions(literal_threshold=2, null_as_optional=True,
                                                    declaration_order="dependency"))
    assert "itemType2" in first


def test_inline_objects() -> None:
    assert generate({"a": 1}, extract_objects=False) == "type rootType = { a: number };"
    assert generate({"point": {"x": 1, "y": 2}}, extract_objects=False) == (
        "type rootType = {\n"
        "  point: { x: number; y: number };\n"
        "};"
    )


def test_keys_that_are_not_identifiers_are_quoted() -> None:
    assert "  'first-name': string;" in generate({"first-name": "a"})
    assert '  "first-name": string;' in generate({"first-name": "a"}, quote="double")
    assert "  'class': string;" in generate({"class": "a"})


def test_indent_width() -> None:
    assert generate({"a": 1}, indent=4) == "type rootType = {\n    a: number;\n};"


def test_root_name() -> None:
    assert generate({"a": 1}, root_name="user").startswith("type userType = {")
    assert generate({"a": 1}, root_name="UserType").startswith("type UserType = {")
    assert resolve_root_name("api response") == "apiResponseType"


def test_declaration_order() -> None:
    value = {"first": {"x": 1}, "second": {"inner": {"x": 1}}}

    discovery = generate(value)
    dependency = generate(value, declaration_order="dependency")

    assert discovery.index("type firstType") < discovery.index("type secondType")
    assert dependency.index("type secondType") < dependency.index("type firstType")
    assert dependency.startswith("type rootType = {")


def test_generate_from_shape_reuses_analysis() -> None:
    shape = analyze([{"id": 1}])

    assert generate_from_shape(shape, root_name="order").startswith("type orderType = orderTypeItem[];")
    assert generate_from_shape(shape) == generate([{"id": 1}])


def test_output_has_no_trailing_newline() -> None:
    assert not generate({"a": {"b": 1}}).endswith("\n")


def test_options_object_and_overrides_combine() -> None:
    options = GenerateOptions(root_name="user")

    assert generate({"a": 1}, options, indent=1) == "type userType = {\n a: number;\n};"
    assert options.indent == 2


def test_invalid_override_raises_config_error() -> None:
    with pytest.raises(ConfigError):
        generate({}, quote="backtick")
    with pytest.raises(ConfigError):
        generate({}, not_an_option=True)


def test_depth_limit() -> None:
    with pytest.raises(NestingDepthError):
        generate({"a": {"b": {"c": 1}}}, max_depth=2)
