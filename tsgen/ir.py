"""tsgen IR - language-neutral description of one type definition.

This module defines the input side of the translation engine. A Container
describes a single struct or enum together with the serialization
directives that were attached to it.

Architecture:
    Serialized IR -> Frontend (load) -> [IR] -> Backend (lowering) -> tsast -> TypeScript

All nodes are frozen. Sequences are tuples so that trees are hashable and
can be compared structurally in tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, get_args


# ============================================================
# RENAME RULES
# ============================================================

RenameRule = Literal[
    "lowercase",
    "UPPERCASE",
    "PascalCase",
    "camelCase",
    "snake_case",
    "SCREAMING_SNAKE_CASE",
    "kebab-case",
    "SCREAMING-KEBAB-CASE",
]
"""Case-conversion policy applied to an identifier at translation time.

Values are the literals accepted by the serialization convention's
`rename` / `rename_all` attributes.

| Rule                 | Field `four_five_six` | Type `FooBar`  |
|----------------------|-----------------------|----------------|
| lowercase            | four_five_six         | foobar         |
| UPPERCASE            | FOUR_FIVE_SIX         | FOOBAR         |
| PascalCase           | FourFiveSix           | FooBar         |
| camelCase            | fourFiveSix           | fooBar         |
| snake_case           | four_five_six         | foo_bar        |
| SCREAMING_SNAKE_CASE | FOUR_FIVE_SIX         | FOO_BAR        |
| kebab-case           | four-five-six         | foo-bar        |
| SCREAMING-KEBAB-CASE | FOUR-FIVE-SIX         | FOO-BAR        |
"""

RENAME_RULES: tuple[str, ...] = get_args(RenameRule)


# ============================================================
# TYPES
#
# Type uses as they appear in field and variant positions. The front
# end resolves source syntax into these four shapes.
# ============================================================


@dataclass(frozen=True)
class Type:
    """Base for all type uses. Abstract."""


@dataclass(frozen=True)
class GenericArgument:
    """Base for generic arguments. Abstract."""


@dataclass(frozen=True)
class TypeArgument(GenericArgument):
    """A type supplied as a generic argument, e.g. `u8` in `Vec<u8>`."""

    ty: Type


@dataclass(frozen=True)
class LifetimeArgument(GenericArgument):
    """A lifetime supplied as a generic argument, e.g. `'a` in `Foo<'a>`.

    Has no target equivalent; dropped during type mapping.
    """

    name: str


@dataclass(frozen=True)
class PathSegment:
    """One `::`-separated segment of a path, with its generic arguments."""

    name: str
    arguments: tuple[GenericArgument, ...] = ()


@dataclass(frozen=True)
class TypePath:
    """A named type, e.g. `Foo` or `std::collections::HashMap<K, V>`.

    Invariants:
    - segments is non-empty
    """

    segments: tuple[PathSegment, ...]

    def first(self) -> PathSegment:
        return self.segments[0]

    def is_single(self, name: str) -> bool:
        """True if this path is exactly one segment called name."""
        return len(self.segments) == 1 and self.segments[0].name == name


@dataclass(frozen=True)
class Path(Type):
    """A path naming some type."""

    path: TypePath


@dataclass(frozen=True)
class Reference(Type):
    """A borrowed type use, e.g. `&'a str`.

    The lifetime is kept even though the target cannot express it, so
    that references stay distinguishable from owned values in the IR.
    lifetime is None for an elided lifetime (`&T`).
    """

    lifetime: str | None
    ty: Type


@dataclass(frozen=True)
class Slice(Type):
    """A dynamically-sized array, e.g. `[T]`."""

    element: Type


@dataclass(frozen=True)
class Array(Type):
    """A fixed-size array, e.g. `[T; 16]`. The length is not retained."""

    element: Type


# ============================================================
# BUILTIN SCALARS
# ============================================================

BUILTIN_TYPES: frozenset[str] = frozenset(
    {
        "bool",
        "u8",
        "u16",
        "u32",
        "u64",
        "u128",
        "usize",
        "i8",
        "i16",
        "i32",
        "i64",
        "i128",
        "isize",
        "f32",
        "f64",
        "char",
    }
)


def builtin_of(path: TypePath) -> str | None:
    """Return the builtin scalar a path names, or None for any other path.

    A path names a builtin only when it has exactly one segment, that
    segment has no generic arguments, and its name is a reserved scalar
    identifier.
    """
    if len(path.segments) != 1:
        return None
    segment = path.segments[0]
    if len(segment.arguments) > 0:
        return None
    if segment.name in BUILTIN_TYPES:
        return segment.name
    return None


def path_type(*names: str) -> Path:
    """Factory for an argument-free path, e.g. path_type("std", "string", "String")."""
    return Path(TypePath(tuple(PathSegment(n) for n in names)))


def generic_type(name: str, *arguments: Type) -> Path:
    """Factory for a single-segment path with type arguments, e.g. Vec<T>."""
    args = tuple(TypeArgument(a) for a in arguments)
    return Path(TypePath((PathSegment(name, args),)))


# ============================================================
# GENERIC PARAMETERS
# ============================================================


@dataclass(frozen=True)
class GenericParameter:
    """Base for declared generic parameters. Abstract."""

    name: str


@dataclass(frozen=True)
class TypeParameter(GenericParameter):
    """A declared type parameter, e.g. `T`."""


@dataclass(frozen=True)
class LifetimeParameter(GenericParameter):
    """A declared lifetime parameter, e.g. `'a` (name stored without the quote)."""


# ============================================================
# FIELDS
# ============================================================


@dataclass(frozen=True)
class NamedField:
    """A named field of a struct or struct-like variant."""

    name: str
    ty: Type


@dataclass(frozen=True)
class UnnamedField:
    """The single unnamed field of a newtype struct."""

    ty: Type


# ============================================================
# STRUCTS
# ============================================================

Visibility = Literal["pub", "none"]


@dataclass(frozen=True)
class StructContent:
    """Base for the two struct shapes. Abstract."""


@dataclass(frozen=True)
class NamedFields(StructContent):
    """Record-shaped struct body (zero or more named fields)."""

    fields: tuple[NamedField, ...] = ()


@dataclass(frozen=True)
class Newtype(StructContent):
    """Single unnamed field wrapper, translated as a transparent alias."""

    field: UnnamedField


@dataclass(frozen=True)
class Item:
    """Base for top-level items. Abstract."""

    visibility: Visibility
    name: str
    parameters: tuple[GenericParameter, ...]

    def is_pub(self) -> bool:
        return self.visibility == "pub"

    def type_parameters(self) -> list[str]:
        """Names of declared type parameters in order, lifetimes dropped."""
        return [p.name for p in self.parameters if isinstance(p, TypeParameter)]


@dataclass(frozen=True)
class Struct(Item):
    """Struct definition.

    Invariants:
    - content is NamedFields or Newtype; unit structs never reach the engine
    """

    content: StructContent = field(default_factory=NamedFields)


# ============================================================
# ENUMS
# ============================================================


@dataclass(frozen=True)
class VariantContent:
    """Base for variant payload shapes. Abstract."""


@dataclass(frozen=True)
class Unit(VariantContent):
    """Variant without payload."""


@dataclass(frozen=True)
class Unnamed(VariantContent):
    """Variant wrapping exactly one unnamed type."""

    ty: Type


@dataclass(frozen=True)
class Named(VariantContent):
    """Struct-like variant with named fields."""

    fields: tuple[NamedField, ...] = ()


@dataclass(frozen=True)
class VariantAttributes:
    """Directives scoped to a single variant.

    rename renames the variant's own name; rename_all renames the fields
    of a struct-like variant. Neither inherits from the container.
    """

    rename: RenameRule | None = None
    rename_all: RenameRule | None = None


@dataclass(frozen=True)
class Variant:
    """One enum variant."""

    name: str
    content: VariantContent = field(default_factory=Unit)
    attributes: VariantAttributes = field(default_factory=VariantAttributes)


@dataclass(frozen=True)
class Enum(Item):
    """Enum definition. Variants are kept in declaration order."""

    variants: tuple[Variant, ...] = ()


# ============================================================
# CONTAINER
# ============================================================


@dataclass(frozen=True)
class ContainerAttributes:
    """Serialization directives attached to the container.

    | Attribute  | Meaning                                          |
    |------------|--------------------------------------------------|
    | rename     | rule applied to the container's own name         |
    | rename_all | rule applied to direct field / variant names     |
    | tag        | discriminant field name (internal/adjacent tags) |
    | content    | payload field name; only meaningful with tag     |
    """

    rename: RenameRule | None = None
    rename_all: RenameRule | None = None
    tag: str | None = None
    content: str | None = None


@dataclass(frozen=True)
class Container:
    """Root of the IR: one struct or enum plus its attributes."""

    item: Item
    attributes: ContainerAttributes = field(default_factory=ContainerAttributes)
