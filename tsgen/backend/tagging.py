"""Enum tagging: IR enums -> TypeScript union members.

Reproduces the three wire representations of the serialization
convention:

| Strategy   | Attributes      | Unit        | Unnamed(T)             | Named{..}                   |
|------------|-----------------|-------------|------------------------|-----------------------------|
| external   | (none)          | "V"         | { V: T }               | { V: { .. } }               |
| adjacent   | tag + content   | { t: "V" }  | { t: "V"; c: T }       | { t: "V"; c: { .. } }       |
| internal   | tag only        | { t: "V" }  | { t: "V" } & T         | { t: "V" } & { .. }         |

Variant names are renamed by the variant's own `rename`, falling back
to the container's `rename_all`. Variant fields are renamed only by the
variant's own `rename_all`; the container rule never reaches them.
"""

from __future__ import annotations

import logging
from typing import Literal

from ..ir import (
    Enum,
    Named,
    NamedField,
    RenameRule,
    Unit,
    Unnamed,
    Variant,
)
from ..tsast import (
    TsArray,
    TsBuiltin,
    TsField,
    TsIntersection,
    TsLiteral,
    TsObject,
    TsType,
    TsUnion,
)
from .types import map_type
from .util import rename_field, rename_type

logger = logging.getLogger(__name__)

TaggingErrorKind = Literal["NonObjectPayload"]

Strategy = Literal["external", "internal", "adjacent"]


class TaggingError(Exception):
    """A variant that cannot be represented under the chosen strategy."""

    def __init__(self, kind: TaggingErrorKind, variant: str, msg: str):
        self.kind: TaggingErrorKind = kind
        self.variant: str = variant
        self.msg: str = msg
        super().__init__(msg)


def strategy_for(tag: str | None, content: str | None) -> Strategy:
    """Select the tagging strategy from the container's tag/content attributes."""
    if tag is None:
        return "external"
    if content is None:
        return "internal"
    return "adjacent"


def _variant_name(container_rename_all: RenameRule | None, variant: Variant) -> str:
    rule = variant.attributes.rename
    if rule is None:
        rule = container_rename_all
    return rename_type(rule, variant.name)


def _fields_object(variant: Variant, fields: tuple[NamedField, ...]) -> TsObject:
    rule = variant.attributes.rename_all
    return TsObject(tuple(TsField(rename_field(rule, f.name), map_type(f.ty)) for f in fields))


def _tag_object(tag: str, name: str) -> TsObject:
    return TsObject((TsField(tag, TsLiteral(name)),))


def externally_tagged(container_rename_all: RenameRule | None, variant: Variant) -> TsType:
    """Tag as wrapper key: the variant name keys its payload."""
    name = _variant_name(container_rename_all, variant)
    match variant.content:
        case Unit():
            return TsLiteral(name)
        case Unnamed(ty=ty):
            return TsObject((TsField(name, map_type(ty)),))
        case Named(fields=fields):
            return TsObject((TsField(name, _fields_object(variant, fields)),))
        case _:
            raise NotImplementedError("Unknown variant content")


def adjacently_tagged(
    container_rename_all: RenameRule | None, tag: str, content: str, variant: Variant
) -> TsType:
    """Tag and payload under two sibling keys; unit variants carry only the tag."""
    name = _variant_name(container_rename_all, variant)
    tag_field = TsField(tag, TsLiteral(name))
    match variant.content:
        case Unit():
            return TsObject((tag_field,))
        case Unnamed(ty=ty):
            return TsObject((tag_field, TsField(content, map_type(ty))))
        case Named(fields=fields):
            return TsObject((tag_field, TsField(content, _fields_object(variant, fields))))
        case _:
            raise NotImplementedError("Unknown variant content")


def _check_object_payload(variant: Variant, payload: TsType) -> None:
    """Reject payloads that can never merge with the tag object.

    Opaque paths are accepted; whether they name a record is unknowable here.
    """
    match payload:
        case TsBuiltin(kind=kind):
            what = kind
        case TsArray():
            what = "an array"
        case TsUnion():
            what = "an optional value"
        case TsLiteral():
            what = "a literal"
        case _:
            return
    raise TaggingError(
        "NonObjectPayload",
        variant.name,
        "internally tagged variant '"
        + variant.name
        + "' wraps "
        + what
        + "; only record-shaped payloads can carry the tag",
    )


def internally_tagged(container_rename_all: RenameRule | None, tag: str, variant: Variant) -> TsType:
    """Tag merged into the payload object by intersection."""
    name = _variant_name(container_rename_all, variant)
    match variant.content:
        case Unit():
            return _tag_object(tag, name)
        case Unnamed(ty=ty):
            payload = map_type(ty)
            _check_object_payload(variant, payload)
            return TsIntersection(_tag_object(tag, name), payload)
        case Named(fields=fields):
            return TsIntersection(_tag_object(tag, name), _fields_object(variant, fields))
        case _:
            raise NotImplementedError("Unknown variant content")


def tag_variants(
    enum: Enum,
    rename_all: RenameRule | None,
    tag: str | None,
    content: str | None,
) -> TsUnion:
    """Translate every variant of enum, in declaration order, into one union."""
    strategy = strategy_for(tag, content)
    logger.debug("tagging enum %s with %s strategy", enum.name, strategy)
    members: list[TsType] = []
    for variant in enum.variants:
        if strategy == "external":
            members.append(externally_tagged(rename_all, variant))
        elif strategy == "adjacent":
            assert tag is not None and content is not None
            members.append(adjacently_tagged(rename_all, tag, content, variant))
        else:
            assert tag is not None
            members.append(internally_tagged(rename_all, tag, variant))
    return TsUnion(tuple(members))
