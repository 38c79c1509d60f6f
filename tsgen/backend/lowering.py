"""Lowering: IR Container -> TypeScript definition.

| IR item                 | Definition                            |
|-------------------------|---------------------------------------|
| struct with named fields| interface, fields renamed by rename_all |
| newtype struct          | type alias of the wrapped type        |
| enum                    | type alias of a tagged union          |

The container's rename applies to the item's own name. Lifetime
parameters are dropped; type parameters keep their declared order.
"""

from __future__ import annotations

import logging

from ..ir import (
    Container,
    Enum,
    NamedFields,
    Newtype,
    Struct,
)
from ..tsast import TsDefinition, TsField, TsInterface, TsTypeAlias
from .tagging import tag_variants
from .types import map_type
from .util import rename_field, rename_type

logger = logging.getLogger(__name__)


def _lower_struct(container: Container, item: Struct) -> TsDefinition:
    attrs = container.attributes
    name = rename_type(attrs.rename, item.name)
    parameters = tuple(item.type_parameters())
    match item.content:
        case NamedFields(fields=fields):
            lowered = tuple(
                TsField(rename_field(attrs.rename_all, f.name), map_type(f.ty)) for f in fields
            )
            return TsInterface(item.is_pub(), name, parameters, lowered)
        case Newtype(field=field):
            return TsTypeAlias(item.is_pub(), name, parameters, map_type(field.ty))
        case _:
            raise NotImplementedError("Unknown struct content")


def _lower_enum(container: Container, item: Enum) -> TsDefinition:
    attrs = container.attributes
    union = tag_variants(item, attrs.rename_all, attrs.tag, attrs.content)
    return TsTypeAlias(
        item.is_pub(),
        rename_type(attrs.rename, item.name),
        tuple(item.type_parameters()),
        union,
    )


def lower(container: Container) -> TsDefinition:
    """Translate one container. Raises TypeMappingError or TaggingError atomically."""
    logger.debug("lowering %s", container.item.name)
    match container.item:
        case Struct() as item:
            return _lower_struct(container, item)
        case Enum() as item:
            return _lower_enum(container, item)
        case _:
            raise NotImplementedError("Unknown item")


def lower_all(containers: list[Container]) -> list[TsDefinition]:
    """Translate containers independently, preserving input order."""
    return [lower(c) for c in containers]
