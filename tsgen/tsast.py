"""TypeScript target model - definitions and type expressions.

Nodes produced by lowering and consumed by the printer in
backend/typescript.py. Like the IR, every node is frozen and sequences
are tuples.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


# ============================================================
# TYPES
# ============================================================


@dataclass(frozen=True)
class TsType:
    """Base for all type expressions. Abstract."""


@dataclass(frozen=True)
class TsBuiltin(TsType):
    """Keyword types.

    | Kind    | Produced from                          |
    |---------|----------------------------------------|
    | number  | all integer and float widths           |
    | boolean | bool                                   |
    | string  | char, String, &str                     |
    | null    | the absent half of Option<T>           |
    | never   | an enum without variants               |
    """

    kind: Literal["number", "boolean", "string", "null", "never"]


@dataclass(frozen=True)
class TsPathSegment:
    """One `.`-separated segment of a type reference."""

    name: str
    arguments: tuple[TsType, ...] = ()


@dataclass(frozen=True)
class TsPath(TsType):
    """Opaque reference to a type declared elsewhere, e.g. `types.Foo<T>`."""

    segments: tuple[TsPathSegment, ...]


@dataclass(frozen=True)
class TsField:
    """`name: ty;` inside an interface or object literal type."""

    name: str
    ty: TsType


@dataclass(frozen=True)
class TsObject(TsType):
    """Object literal type, rendered inline: `{ a: T; b: U; }`."""

    fields: tuple[TsField, ...] = ()


@dataclass(frozen=True)
class TsLiteral(TsType):
    """String literal type, rendered double-quoted."""

    value: str


@dataclass(frozen=True)
class TsArray(TsType):
    """`T[]`. Fixed-size and dynamically-sized arrays both map here."""

    element: TsType


@dataclass(frozen=True)
class TsUnion(TsType):
    """`A | B | ...`. Members keep their given order; no deduplication."""

    members: tuple[TsType, ...]


@dataclass(frozen=True)
class TsIntersection(TsType):
    """`left & right`."""

    left: TsType
    right: TsType


NUMBER = TsBuiltin("number")
BOOLEAN = TsBuiltin("boolean")
STRING = TsBuiltin("string")
NULL = TsBuiltin("null")
NEVER = TsBuiltin("never")


def ts_path(*names: str) -> TsPath:
    """Factory for an argument-free reference, e.g. ts_path("Foo")."""
    return TsPath(tuple(TsPathSegment(n) for n in names))


# ============================================================
# DEFINITIONS
# ============================================================


@dataclass(frozen=True)
class TsDefinition:
    """Base for top-level declarations. Abstract."""

    export: bool
    name: str
    parameters: tuple[str, ...]


@dataclass(frozen=True)
class TsInterface(TsDefinition):
    """`interface Name<T> { ... }` from a record-shaped struct."""

    fields: tuple[TsField, ...] = ()


@dataclass(frozen=True)
class TsTypeAlias(TsDefinition):
    """`type Name<T> = ty;` from a newtype struct or an enum.

    Invariants:
    - when ty is a TsUnion, each member renders on its own `| ` line
    """

    ty: TsType = NEVER
