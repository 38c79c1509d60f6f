"""Serialized IR -> Container.

Reads the JSON form written by serialize.py, plus two shorthands for
hand-written input: type uses and generic parameters may be strings in
source syntax ("Vec<u8>", "'a"), and a unit variant may be just its name.
A top-level Struct or Enum object is accepted as a container with no
attributes.

Shapes the engine does not support are rejected here, so that
everything reaching the backend is well-formed.
"""

from __future__ import annotations

import json
import logging

from ..ir import (
    RENAME_RULES,
    Array,
    Container,
    ContainerAttributes,
    Enum,
    GenericArgument,
    GenericParameter,
    Item,
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
    StructContent,
    Type,
    TypeArgument,
    TypeParameter,
    TypePath,
    Unit,
    UnnamedField,
    Unnamed,
    Variant,
    VariantAttributes,
    VariantContent,
    Visibility,
)
from .types import TypeSyntaxError, parse_type_expr

logger = logging.getLogger(__name__)


class LoadError(Exception):
    """Invalid serialized IR, with the location of the offending value."""

    def __init__(self, msg: str, path: str):
        self.msg: str = msg
        self.path: str = path
        super().__init__(msg + " at " + path)


# ── Primitive readers ────────────────────────────────────────


def _expect_dict(obj: object, path: str) -> dict[str, object]:
    if not isinstance(obj, dict):
        raise LoadError("expected object, got " + _kind(obj), path)
    return obj


def _expect_list(obj: object, path: str) -> list[object]:
    if not isinstance(obj, list):
        raise LoadError("expected array, got " + _kind(obj), path)
    return obj


def _kind(obj: object) -> str:
    if obj is None:
        return "null"
    if isinstance(obj, bool):
        return "boolean"
    if isinstance(obj, (int, float)):
        return "number"
    if isinstance(obj, str):
        return "string"
    if isinstance(obj, list):
        return "array"
    return "object"


def _require(obj: dict[str, object], key: str, path: str) -> object:
    if key not in obj:
        raise LoadError("missing key '" + key + "'", path)
    return obj[key]


def _string(obj: dict[str, object], key: str, path: str) -> str:
    value = _require(obj, key, path)
    if not isinstance(value, str):
        raise LoadError("expected string, got " + _kind(value), path + "." + key)
    return value


def _optional_string(obj: dict[str, object], key: str, path: str) -> str | None:
    value = obj.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise LoadError("expected string, got " + _kind(value), path + "." + key)
    return value


def _node_type(obj: dict[str, object], path: str) -> str:
    return _string(obj, "_type", path)


def _rename_rule(obj: dict[str, object], key: str, path: str) -> str | None:
    rule = _optional_string(obj, key, path)
    if rule is not None and rule not in RENAME_RULES:
        raise LoadError("invalid rename rule '" + rule + "'", path + "." + key)
    return rule


# ── Types ────────────────────────────────────────────────────


def load_type(obj: object, path: str) -> Type:
    """Decode a type use from a node object or a type expression string."""
    if isinstance(obj, str):
        try:
            return parse_type_expr(obj)
        except TypeSyntaxError as e:
            raise LoadError("invalid type '" + obj + "': " + str(e), path) from e
    d = _expect_dict(obj, path)
    kind = _node_type(d, path)
    if kind == "Path":
        segments = _expect_list(_require(d, "segments", path), path + ".segments")
        if len(segments) == 0:
            raise LoadError("path has no segments", path + ".segments")
        loaded = [
            _load_segment(s, path + ".segments[" + str(i) + "]") for i, s in enumerate(segments)
        ]
        return Path(TypePath(tuple(loaded)))
    if kind == "Reference":
        lifetime = _optional_string(d, "lifetime", path)
        if lifetime is not None:
            lifetime = lifetime.lstrip("'")
        return Reference(lifetime, load_type(_require(d, "ty", path), path + ".ty"))
    if kind == "Slice":
        return Slice(load_type(_require(d, "element", path), path + ".element"))
    if kind == "Array":
        return Array(load_type(_require(d, "element", path), path + ".element"))
    raise LoadError("does not support type '" + kind + "'", path)


def _load_segment(obj: object, path: str) -> PathSegment:
    d = _expect_dict(obj, path)
    name = _string(d, "name", path)
    arguments: list[GenericArgument] = []
    raw = _expect_list(d.get("arguments", []), path + ".arguments")
    for i, arg in enumerate(raw):
        arguments.append(_load_argument(arg, path + ".arguments[" + str(i) + "]"))
    return PathSegment(name, tuple(arguments))


def _load_argument(obj: object, path: str) -> GenericArgument:
    if isinstance(obj, str) and obj.startswith("'"):
        return LifetimeArgument(obj[1:])
    if isinstance(obj, str):
        return TypeArgument(load_type(obj, path))
    d = _expect_dict(obj, path)
    kind = _node_type(d, path)
    if kind == "Lifetime":
        return LifetimeArgument(_string(d, "name", path).lstrip("'"))
    if kind == "Type":
        return TypeArgument(load_type(_require(d, "ty", path), path + ".ty"))
    raise LoadError("does not support this generic argument", path)


def _load_parameter(obj: object, path: str) -> GenericParameter:
    if isinstance(obj, str):
        if obj.startswith("'"):
            return LifetimeParameter(obj[1:])
        return TypeParameter(obj)
    d = _expect_dict(obj, path)
    kind = _node_type(d, path)
    name = _string(d, "name", path)
    if kind == "Type":
        return TypeParameter(name)
    if kind == "Lifetime":
        return LifetimeParameter(name.lstrip("'"))
    if kind == "Const":
        raise LoadError("does not support const generics", path)
    raise LoadError("does not support generic parameter '" + kind + "'", path)


# ── Fields ───────────────────────────────────────────────────


def _load_fields(obj: object, path: str) -> tuple[NamedField, ...]:
    fields: list[NamedField] = []
    for i, raw in enumerate(_expect_list(obj, path)):
        fpath = path + "[" + str(i) + "]"
        d = _expect_dict(raw, fpath)
        name = _string(d, "name", fpath)
        fields.append(NamedField(name, load_type(_require(d, "ty", fpath), fpath + ".ty")))
    return tuple(fields)


def _load_unnamed(d: dict[str, object], path: str, where: str) -> Type:
    """The single type of an unnamed field; a one-element list is also accepted."""
    raw = _require(d, "ty", path)
    if isinstance(raw, list):
        if len(raw) > 1:
            raise LoadError("does not support multiple unnamed fields in " + where, path + ".ty")
        if len(raw) == 0:
            raise LoadError("does not support empty unnamed fields in " + where, path + ".ty")
        return load_type(raw[0], path + ".ty[0]")
    return load_type(raw, path + ".ty")


# ── Items ────────────────────────────────────────────────────


def _visibility(d: dict[str, object], path: str) -> Visibility:
    value = _optional_string(d, "visibility", path)
    if value is None or value == "none":
        return "none"
    if value == "pub":
        return "pub"
    raise LoadError("does not support restricted visibility '" + value + "'", path + ".visibility")


def _parameters(d: dict[str, object], path: str) -> tuple[GenericParameter, ...]:
    raw = _expect_list(d.get("parameters", []), path + ".parameters")
    return tuple(_load_parameter(p, path + ".parameters[" + str(i) + "]") for i, p in enumerate(raw))


def _load_struct_content(d: dict[str, object], path: str) -> StructContent:
    if "content" not in d or d["content"] is None:
        raise LoadError("does not support unit structs", path)
    cpath = path + ".content"
    content = _expect_dict(d["content"], cpath)
    kind = _node_type(content, cpath)
    if kind == "NamedFields":
        return NamedFields(_load_fields(_require(content, "fields", cpath), cpath + ".fields"))
    if kind == "UnnamedField":
        return Newtype(UnnamedField(_load_unnamed(content, cpath, "structs")))
    raise LoadError("unknown struct content '" + kind + "'", cpath)


def _load_variant_content(obj: object, path: str) -> VariantContent:
    if obj is None:
        return Unit()
    d = _expect_dict(obj, path)
    kind = _node_type(d, path)
    if kind == "Unit":
        return Unit()
    if kind == "Unnamed":
        return Unnamed(_load_unnamed(d, path, "enums"))
    if kind == "Named":
        return Named(_load_fields(_require(d, "fields", path), path + ".fields"))
    raise LoadError("unknown variant content '" + kind + "'", path)


def _load_variant(obj: object, path: str) -> Variant:
    if isinstance(obj, str):
        return Variant(obj)
    d = _expect_dict(obj, path)
    if "discriminant" in d:
        raise LoadError("does not support explicit discriminants", path)
    attrs = VariantAttributes()
    if d.get("attributes") is not None:
        apath = path + ".attributes"
        a = _expect_dict(d["attributes"], apath)
        attrs = VariantAttributes(
            _rename_rule(a, "rename", apath), _rename_rule(a, "rename_all", apath)
        )
    return Variant(
        _string(d, "name", path),
        _load_variant_content(d.get("content"), path + ".content"),
        attrs,
    )


def load_item(obj: object, path: str) -> Item:
    d = _expect_dict(obj, path)
    kind = _node_type(d, path)
    if kind == "Struct":
        return Struct(
            _visibility(d, path),
            _string(d, "name", path),
            _parameters(d, path),
            _load_struct_content(d, path),
        )
    if kind == "Enum":
        raw = _expect_list(d.get("variants", []), path + ".variants")
        variants = tuple(
            _load_variant(v, path + ".variants[" + str(i) + "]") for i, v in enumerate(raw)
        )
        return Enum(_visibility(d, path), _string(d, "name", path), _parameters(d, path), variants)
    if kind == "Union":
        raise LoadError("does not support unions", path)
    raise LoadError("unknown item '" + kind + "'", path)


def _load_attributes(obj: object, path: str) -> ContainerAttributes:
    if obj is None:
        return ContainerAttributes()
    d = _expect_dict(obj, path)
    tag = _optional_string(d, "tag", path)
    content = _optional_string(d, "content", path)
    if content is not None and tag is None:
        raise LoadError("'content' requires 'tag'", path + ".content")
    return ContainerAttributes(
        _rename_rule(d, "rename", path),
        _rename_rule(d, "rename_all", path),
        tag,
        content,
    )


def load_container(obj: object, path: str = "$") -> Container:
    """Decode one container, or a bare Struct/Enum with default attributes."""
    d = _expect_dict(obj, path)
    kind = _node_type(d, path)
    if kind != "Container":
        return Container(load_item(d, path))
    return Container(
        load_item(_require(d, "item", path), path + ".item"),
        _load_attributes(d.get("attributes"), path + ".attributes"),
    )


def load_containers(text: str) -> list[Container]:
    """Parse a JSON document holding one container or an array of them.

    Nesting deeper than the interpreter's recursion limit, in the JSON
    itself or in a type expression string, is reported as a LoadError.
    """
    try:
        doc = json.loads(text)
    except json.JSONDecodeError as e:
        raise LoadError(
            "invalid JSON: " + e.msg + " (line " + str(e.lineno) + " col " + str(e.colno) + ")",
            "$",
        ) from e
    except RecursionError as e:
        raise LoadError("type nesting too deep", "$") from e
    try:
        if isinstance(doc, list):
            containers = [load_container(c, "$[" + str(i) + "]") for i, c in enumerate(doc)]
        else:
            containers = [load_container(doc)]
    except RecursionError as e:
        raise LoadError("type nesting too deep", "$") from e
    logger.debug("loaded %d container(s)", len(containers))
    return containers
