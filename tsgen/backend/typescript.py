"""TypeScript backend: target model -> TypeScript source text.

Output is fully determined by the input tree: fields, members and
definitions are written in the order given, fields are indented with a
single tab, and every field and alias statement ends in `;`.
"""

from __future__ import annotations

from ..tsast import (
    TsArray,
    TsBuiltin,
    TsDefinition,
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
from .util import Emitter, escape_string, is_identifier


class TsBackend:
    """Emit TypeScript declarations from target definitions."""

    def __init__(self) -> None:
        self.out = Emitter("\t")

    def emit(self, definition: TsDefinition) -> str:
        """Render one definition, newline-terminated."""
        self.out = Emitter("\t")
        match definition:
            case TsInterface():
                self._emit_interface(definition)
            case TsTypeAlias():
                self._emit_alias(definition)
            case _:
                raise NotImplementedError("Unknown definition")
        return self.out.output()

    def _head(self, keyword: str, definition: TsDefinition) -> str:
        text = ""
        if definition.export:
            text += "export "
        text += keyword + " " + definition.name
        if len(definition.parameters) > 0:
            text += "<" + ", ".join(definition.parameters) + ">"
        return text

    def _emit_interface(self, iface: TsInterface) -> None:
        self.out.line(self._head("interface", iface) + " {")
        self.out.indent += 1
        for f in iface.fields:
            self.out.line(self._field(f))
        self.out.indent -= 1
        self.out.line("}")

    def _emit_alias(self, alias: TsTypeAlias) -> None:
        head = self._head("type", alias)
        if isinstance(alias.ty, TsUnion) and len(alias.ty.members) > 0:
            self.out.line(head + " =")
            self.out.indent += 1
            members = alias.ty.members
            for i, member in enumerate(members):
                text = "| " + self._type(member)
                if i == len(members) - 1:
                    text += ";"
                self.out.line(text)
            self.out.indent -= 1
            return
        self.out.line(head + " = " + self._type(alias.ty) + ";")

    def _field(self, f: TsField) -> str:
        return _field_name(f.name) + ": " + self._type(f.ty) + ";"

    def _segment(self, segment: TsPathSegment) -> str:
        if len(segment.arguments) == 0:
            return segment.name
        args = ", ".join(self._type(a) for a in segment.arguments)
        return segment.name + "<" + args + ">"

    def _type(self, typ: TsType) -> str:
        match typ:
            case TsBuiltin(kind=kind):
                return kind
            case TsPath(segments=segments):
                return ".".join(self._segment(s) for s in segments)
            case TsObject(fields=fields):
                return "{" + "".join(" " + self._field(f) for f in fields) + " }"
            case TsLiteral(value=value):
                return '"' + escape_string(value) + '"'
            case TsArray(element=element):
                if _is_compound(element):
                    return "(" + self._type(element) + ")[]"
                return self._type(element) + "[]"
            case TsUnion(members=members):
                if len(members) == 0:
                    return "never"
                return " | ".join(self._type(m) for m in members)
            case TsIntersection(left=left, right=right):
                return self._operand(left) + " & " + self._operand(right)
            case _:
                raise NotImplementedError("Unknown type")

    def _operand(self, typ: TsType) -> str:
        """Render an intersection operand, parenthesising unions."""
        if isinstance(typ, TsUnion) and len(typ.members) > 1:
            return "(" + self._type(typ) + ")"
        return self._type(typ)


def _is_compound(typ: TsType) -> bool:
    """True if typ needs parentheses before a postfix `[]`."""
    if isinstance(typ, TsUnion):
        return len(typ.members) > 1
    return isinstance(typ, TsIntersection)


def _field_name(name: str) -> str:
    if is_identifier(name):
        return name
    return '"' + escape_string(name) + '"'


def render(definition: TsDefinition) -> str:
    """Render one definition as TypeScript source."""
    return TsBackend().emit(definition)


def emit_typescript(definitions: list[TsDefinition]) -> str:
    """Render definitions in order, separated by a blank line."""
    backend = TsBackend()
    return "\n".join(backend.emit(d) for d in definitions)
