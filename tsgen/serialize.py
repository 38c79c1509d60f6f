"""Serialization of IR and target trees to JSON-compatible dicts.

IR output is exactly the format frontend/load.py reads back.
"""

from __future__ import annotations

from .ir import (
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
    Type,
    TypeArgument,
    TypeParameter,
    Unit,
    Unnamed,
    Variant,
    VariantAttributes,
    VariantContent,
)
from .tsast import (
    TsArray,
    TsBuiltin,
    TsField,
    TsInterface,
    TsIntersection,
    TsLiteral,
    TsObject,
    TsPath,
    TsPathSegment,
    TsType,
    TsTypeAlias,
    TsUnion,
)


def serialize(obj: object) -> object:
    """Recursively serialize an object to a JSON-compatible structure."""
    if obj is None:
        return None
    if isinstance(obj, (bool, int, float, str)):
        return obj
    if isinstance(obj, (list, tuple)):
        return [serialize(x) for x in obj]
    if isinstance(obj, dict):
        return {str(k): serialize(v) for k, v in obj.items()}
    if isinstance(obj, (TsType, TsField, TsPathSegment, TsInterface, TsTypeAlias)):
        return _ts_serialize(obj)
    return _ir_serialize(obj)


def _ir_serialize(obj: object) -> object:
    """Serialize IR nodes via isinstance dispatch."""
    if isinstance(obj, Type):
        return _serialize_type(obj)
    if isinstance(obj, VariantContent):
        return _serialize_variant_content(obj)
    if isinstance(obj, Container):
        return {
            "_type": "Container",
            "attributes": serialize(obj.attributes),
            "item": serialize(obj.item),
        }
    if isinstance(obj, ContainerAttributes):
        return {
            "rename": obj.rename,
            "rename_all": obj.rename_all,
            "tag": obj.tag,
            "content": obj.content,
        }
    if isinstance(obj, Struct):
        return {
            "_type": "Struct",
            "visibility": obj.visibility,
            "name": obj.name,
            "parameters": serialize(obj.parameters),
            "content": serialize(obj.content),
        }
    if isinstance(obj, NamedFields):
        return {"_type": "NamedFields", "fields": serialize(obj.fields)}
    if isinstance(obj, Newtype):
        return {"_type": "UnnamedField", "ty": serialize(obj.field.ty)}
    if isinstance(obj, Enum):
        return {
            "_type": "Enum",
            "visibility": obj.visibility,
            "name": obj.name,
            "parameters": serialize(obj.parameters),
            "variants": serialize(obj.variants),
        }
    if isinstance(obj, Variant):
        return {
            "_type": "Variant",
            "name": obj.name,
            "attributes": serialize(obj.attributes),
            "content": serialize(obj.content),
        }
    if isinstance(obj, VariantAttributes):
        return {"rename": obj.rename, "rename_all": obj.rename_all}
    if isinstance(obj, NamedField):
        return {"name": obj.name, "ty": serialize(obj.ty)}
    if isinstance(obj, TypeParameter):
        return {"_type": "Type", "name": obj.name}
    if isinstance(obj, LifetimeParameter):
        return {"_type": "Lifetime", "name": obj.name}
    if isinstance(obj, PathSegment):
        return {"name": obj.name, "arguments": serialize(obj.arguments)}
    if isinstance(obj, TypeArgument):
        return {"_type": "Type", "ty": serialize(obj.ty)}
    if isinstance(obj, LifetimeArgument):
        return {"_type": "Lifetime", "name": obj.name}
    raise NotImplementedError("cannot serialize " + type(obj).__name__)


def _serialize_type(typ: Type) -> dict[str, object]:
    match typ:
        case Path(path=path):
            return {"_type": "Path", "segments": serialize(path.segments)}
        case Reference(lifetime=lifetime, ty=ty):
            return {"_type": "Reference", "lifetime": lifetime, "ty": serialize(ty)}
        case Slice(element=element):
            return {"_type": "Slice", "element": serialize(element)}
        case Array(element=element):
            return {"_type": "Array", "element": serialize(element)}
        case _:
            raise NotImplementedError("Unknown type")


def _serialize_variant_content(content: VariantContent) -> dict[str, object]:
    match content:
        case Unit():
            return {"_type": "Unit"}
        case Unnamed(ty=ty):
            return {"_type": "Unnamed", "ty": serialize(ty)}
        case Named(fields=fields):
            return {"_type": "Named", "fields": serialize(fields)}
        case _:
            raise NotImplementedError("Unknown variant content")


def _ts_serialize(obj: object) -> object:
    """Serialize target nodes via isinstance dispatch."""
    if isinstance(obj, TsInterface):
        return {
            "_type": "Interface",
            "export": obj.export,
            "name": obj.name,
            "parameters": serialize(obj.parameters),
            "fields": serialize(obj.fields),
        }
    if isinstance(obj, TsTypeAlias):
        return {
            "_type": "TypeAlias",
            "export": obj.export,
            "name": obj.name,
            "parameters": serialize(obj.parameters),
            "ty": serialize(obj.ty),
        }
    if isinstance(obj, TsField):
        return {"name": obj.name, "ty": serialize(obj.ty)}
    if isinstance(obj, TsPathSegment):
        return {"name": obj.name, "arguments": serialize(obj.arguments)}
    match obj:
        case TsBuiltin(kind=kind):
            return {"_type": "Builtin", "kind": kind}
        case TsPath(segments=segments):
            return {"_type": "Path", "segments": serialize(segments)}
        case TsObject(fields=fields):
            return {"_type": "Object", "fields": serialize(fields)}
        case TsLiteral(value=value):
            return {"_type": "Literal", "value": value}
        case TsArray(element=element):
            return {"_type": "Array", "element": serialize(element)}
        case TsUnion(members=members):
            return {"_type": "Union", "members": serialize(members)}
        case TsIntersection(left=left, right=right):
            return {"_type": "Intersection", "left": serialize(left), "right": serialize(right)}
        case _:
            raise NotImplementedError("Unknown target node")
