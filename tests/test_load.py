"""Loader and type expression parser tests."""

import json

import pytest

from tsgen.frontend import LoadError, TypeSyntaxError, load_container, load_containers, parse_type_expr
from tsgen.ir import (
    Array,
    Container,
    ContainerAttributes,
    Enum,
    LifetimeArgument,
    LifetimeParameter,
    Named,
    NamedField,
    NamedFields,
    Newtype,
    Path,
    PathSegment,
    Reference,
    Slice,
    Struct,
    TypeArgument,
    TypeParameter,
    TypePath,
    UnnamedField,
    Unnamed,
    Variant,
    VariantAttributes,
    generic_type,
    path_type,
)
from tsgen.serialize import serialize


# ── Type expressions ─────────────────────────────────────────


@pytest.mark.parametrize(
    "src,expected",
    [
        ("u8", path_type("u8")),
        ("Vec<u8>", generic_type("Vec", path_type("u8"))),
        ("Vec<Vec<u8>>", generic_type("Vec", generic_type("Vec", path_type("u8")))),
        ("&str", Reference(None, path_type("str"))),
        ("&'a mut T", Reference("a", path_type("T"))),
        ("[u8]", Slice(path_type("u8"))),
        ("[u8; 32]", Array(path_type("u8"))),
        ("[u8; N]", Array(path_type("u8"))),
        ("::std::string::String", path_type("std", "string", "String")),
        ("Vec::<u8>", generic_type("Vec", path_type("u8"))),
        (" Option < T > ", generic_type("Option", path_type("T"))),
        ("Foo<T,>", generic_type("Foo", path_type("T"))),
    ],
)
def test_parse_type_expr(src: str, expected: object) -> None:
    assert parse_type_expr(src) == expected


def test_parse_lifetime_arguments() -> None:
    ty = parse_type_expr("Cow<'a, str>")
    assert ty == Path(
        TypePath(
            (PathSegment("Cow", (LifetimeArgument("a"), TypeArgument(path_type("str")))),)
        )
    )


@pytest.mark.parametrize(
    "src,msg,col",
    [
        ("", "expected type, got end of input", 1),
        ("Vec<u8", "expected '>', got end of input", 7),
        ("Vec<u8>>", "unexpected '>' after type", 8),
        ("(u8, u8)", "unexpected character '('", 1),
        ("[u8; ]", "expected array length, got ']'", 6),
        ("&' str", "expected lifetime name after '", 2),
        ("Foo<'a 'b>", "expected '>', got lifetime 'b", 8),
    ],
)
def test_type_syntax_errors(src: str, msg: str, col: int) -> None:
    with pytest.raises(TypeSyntaxError) as exc:
        parse_type_expr(src)
    assert exc.value.msg == msg
    assert exc.value.col == col
    assert str(exc.value) == msg + " at col " + str(col)


# ── Loader ───────────────────────────────────────────────────


def test_load_struct_with_shorthands() -> None:
    doc = {
        "_type": "Container",
        "attributes": {"rename_all": "camelCase"},
        "item": {
            "_type": "Struct",
            "visibility": "pub",
            "name": "Foo",
            "parameters": ["'a", "T"],
            "content": {
                "_type": "NamedFields",
                "fields": [{"name": "one_two", "ty": "&'a T"}],
            },
        },
    }
    assert load_container(doc) == Container(
        Struct(
            "pub",
            "Foo",
            (LifetimeParameter("a"), TypeParameter("T")),
            NamedFields((NamedField("one_two", Reference("a", path_type("T"))),)),
        ),
        ContainerAttributes(rename_all="camelCase"),
    )


def test_load_enum() -> None:
    doc = {
        "_type": "Enum",
        "name": "E",
        "variants": [
            "A",
            {"_type": "Variant", "name": "B", "content": {"_type": "Unnamed", "ty": "bool"}},
            {
                "_type": "Variant",
                "name": "C",
                "attributes": {"rename_all": "snake_case"},
                "content": {"_type": "Named", "fields": [{"name": "x", "ty": "u8"}]},
            },
        ],
    }
    assert load_container(doc) == Container(
        Enum(
            "none",
            "E",
            (),
            (
                Variant("A"),
                Variant("B", Unnamed(path_type("bool"))),
                Variant(
                    "C",
                    Named((NamedField("x", path_type("u8")),)),
                    VariantAttributes(rename_all="snake_case"),
                ),
            ),
        )
    )


def test_load_error_carries_path() -> None:
    doc = {
        "_type": "Enum",
        "name": "E",
        "variants": [{"_type": "Variant", "name": "A", "content": {"_type": "Tuple"}}],
    }
    with pytest.raises(LoadError) as exc:
        load_container(doc)
    assert exc.value.msg == "unknown variant content 'Tuple'"
    assert exc.value.path == "$.variants[0].content"


def test_load_error_wraps_type_syntax_error() -> None:
    doc = {"_type": "Struct", "name": "S", "content": {"_type": "UnnamedField", "ty": "Vec<"}}
    with pytest.raises(LoadError) as exc:
        load_container(doc)
    assert exc.value.path == "$.content.ty"
    assert isinstance(exc.value.__cause__, TypeSyntaxError)


def test_wrong_value_kind() -> None:
    with pytest.raises(LoadError) as exc:
        load_container({"_type": "Struct", "name": 3})
    assert str(exc.value) == "expected string, got number at $.name"


def test_load_containers_accepts_array_and_single() -> None:
    one = {"_type": "Struct", "name": "A", "content": {"_type": "UnnamedField", "ty": "u8"}}
    assert len(load_containers(json.dumps(one))) == 1
    assert len(load_containers(json.dumps([one, one, one]))) == 3
    assert load_containers("[]") == []


def test_serialized_ir_loads_back() -> None:
    container = Container(
        Enum(
            "pub",
            "Msg",
            (TypeParameter("T"), LifetimeParameter("a")),
            (
                Variant("Ping"),
                Variant("Data", Unnamed(generic_type("Vec", path_type("T")))),
                Variant(
                    "Text",
                    Named((NamedField("body", Reference("a", path_type("str"))),)),
                    VariantAttributes(rename="snake_case", rename_all="camelCase"),
                ),
                Variant("Raw", Unnamed(Slice(Array(path_type("u8"))))),
            ),
        ),
        ContainerAttributes("UPPERCASE", "kebab-case", "type", "value"),
    )
    newtype = Container(Struct("none", "Id", (), Newtype(UnnamedField(path_type("u64")))))
    text = json.dumps(serialize([container, newtype]))
    assert load_containers(text) == [container, newtype]


def test_deep_type_expression_is_a_load_error() -> None:
    ty = "Vec<" * 3000 + "u8" + ">" * 3000
    doc = {"_type": "Struct", "name": "S", "content": {"_type": "UnnamedField", "ty": ty}}
    with pytest.raises(LoadError) as exc:
        load_containers(json.dumps(doc))
    assert str(exc.value) == "type nesting too deep at $"


def test_deep_json_is_a_load_error() -> None:
    with pytest.raises(LoadError) as exc:
        load_containers("[" * 100000 + "]" * 100000)
    assert exc.value.msg == "type nesting too deep"
    assert exc.value.path == "$"
