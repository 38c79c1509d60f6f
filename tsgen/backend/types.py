"""Type mapping: IR type uses -> TypeScript type expressions."""

from __future__ import annotations

from typing import Literal

from ..ir import (
    Array,
    LifetimeArgument,
    Path,
    PathSegment,
    Reference,
    Slice,
    Type,
    TypeArgument,
    builtin_of,
)
from ..tsast import (
    BOOLEAN,
    NULL,
    NUMBER,
    STRING,
    TsArray,
    TsBuiltin,
    TsPath,
    TsPathSegment,
    TsType,
    TsUnion,
)

TypeMappingErrorKind = Literal["MalformedCollectionArgument"]


class TypeMappingError(Exception):
    """A type use that the mapper cannot translate.

    Raised instead of producing a partial result; the enclosing
    translation fails as a whole.
    """

    def __init__(self, kind: TypeMappingErrorKind, msg: str):
        self.kind: TypeMappingErrorKind = kind
        self.msg: str = msg
        super().__init__(msg)


def _builtin(name: str) -> TsBuiltin:
    if name == "bool":
        return BOOLEAN
    if name == "char":
        return STRING
    return NUMBER


def _collection_argument(segment: PathSegment) -> Type:
    """The type argument of a Vec/Option segment, which must come first."""
    if len(segment.arguments) == 0:
        raise TypeMappingError(
            "MalformedCollectionArgument",
            "missing type argument to " + segment.name,
        )
    match segment.arguments[0]:
        case TypeArgument(ty=ty):
            return ty
        case LifetimeArgument(name=name):
            raise TypeMappingError(
                "MalformedCollectionArgument",
                "unexpected lifetime argument '" + name + " provided to " + segment.name,
            )
        case _:
            raise NotImplementedError("Unknown generic argument")


def _map_segment(segment: PathSegment) -> TsPathSegment:
    """Map a path segment, dropping lifetime arguments."""
    arguments: list[TsType] = []
    for argument in segment.arguments:
        if isinstance(argument, TypeArgument):
            arguments.append(map_type(argument.ty))
    return TsPathSegment(segment.name, tuple(arguments))


def _map_path(ty: Path) -> TsType:
    builtin = builtin_of(ty.path)
    if builtin is not None:
        return _builtin(builtin)
    first = ty.path.first()
    match first.name:
        case "String":
            return STRING
        case "Vec":
            return TsArray(map_type(_collection_argument(first)))
        case "Option":
            return TsUnion((map_type(_collection_argument(first)), NULL))
        case _:
            return TsPath(tuple(_map_segment(s) for s in ty.path.segments))


def map_type(ty: Type) -> TsType:
    """Translate an IR type use.

    | IR                         | TypeScript          |
    |----------------------------|---------------------|
    | bool                       | boolean             |
    | integer / float widths     | number              |
    | char, String, &str         | string              |
    | Vec<T>, [T], [T; N]        | T[]                 |
    | Option<T>                  | T | null            |
    | &'a T                      | T                   |
    | any other path             | same path, mapped   |

    Raises TypeMappingError when Vec or Option lack a type argument.
    """
    match ty:
        case Path():
            return _map_path(ty)
        case Reference(ty=inner):
            if isinstance(inner, Path) and inner.path.is_single("str"):
                return STRING
            return map_type(inner)
        case Slice(element=element):
            return TsArray(map_type(element))
        case Array(element=element):
            return TsArray(map_type(element))
        case _:
            raise NotImplementedError("Unknown type")
