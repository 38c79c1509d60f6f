"""Shorthand type expressions: `Vec<Option<&'a str>>` -> IR Type.

Lets serialized IR spell field types in source syntax instead of nested
node objects. Only the four IR type shapes are accepted; anything else
(tuples, function pointers, trait objects, qualified self paths) is a
syntax error.
"""

from __future__ import annotations

from ..ir import (
    Array,
    GenericArgument,
    LifetimeArgument,
    Path,
    PathSegment,
    Reference,
    Slice,
    Type,
    TypeArgument,
    TypePath,
)

TK_IDENT = "IDENT"
TK_INT = "INT"
TK_LIFETIME = "LIFETIME"
TK_OP = "OP"
TK_EOF = "EOF"

OPERATORS: set[str] = {"<", ">", ",", "&", "[", "]", ";"}


class TypeSyntaxError(Exception):
    """Malformed type expression, with a 1-indexed column."""

    def __init__(self, msg: str, col: int):
        self.msg: str = msg
        self.col: int = col
        super().__init__(msg + " at col " + str(col))


class Token:
    """A token with type, value, and column."""

    def __init__(self, type_: str, value: str, col: int):
        self.type: str = type_
        self.value: str = value
        self.col: int = col

    def __repr__(self) -> str:
        return "Token(" + self.type + ", " + repr(self.value) + ", " + str(self.col) + ")"


def _is_alpha(c: str) -> bool:
    return (c >= "a" and c <= "z") or (c >= "A" and c <= "Z") or c == "_"


def _is_digit(c: str) -> bool:
    return c >= "0" and c <= "9"


def _read_word(src: str, pos: int) -> int:
    """Return the end position of the identifier starting at pos."""
    while pos < len(src) and (_is_alpha(src[pos]) or _is_digit(src[pos])):
        pos += 1
    return pos


def tokenize(src: str) -> list[Token]:
    tokens: list[Token] = []
    pos = 0
    while pos < len(src):
        c = src[pos]
        col = pos + 1
        if c == " " or c == "\t" or c == "\n":
            pos += 1
        elif _is_alpha(c):
            end = _read_word(src, pos)
            tokens.append(Token(TK_IDENT, src[pos:end], col))
            pos = end
        elif _is_digit(c):
            end = pos
            while end < len(src) and (_is_digit(src[end]) or src[end] == "_"):
                end += 1
            tokens.append(Token(TK_INT, src[pos:end], col))
            pos = end
        elif c == "'":
            if pos + 1 >= len(src) or not _is_alpha(src[pos + 1]):
                raise TypeSyntaxError("expected lifetime name after '", col)
            end = _read_word(src, pos + 1)
            tokens.append(Token(TK_LIFETIME, src[pos + 1 : end], col))
            pos = end
        elif src.startswith("::", pos):
            tokens.append(Token(TK_OP, "::", col))
            pos += 2
        elif c in OPERATORS:
            tokens.append(Token(TK_OP, c, col))
            pos += 1
        else:
            raise TypeSyntaxError("unexpected character " + repr(c), col)
    tokens.append(Token(TK_EOF, "", len(src) + 1))
    return tokens


class TypeParser:
    """Recursive descent parser over type expression tokens."""

    def __init__(self, tokens: list[Token]):
        self.tokens: list[Token] = tokens
        self.pos: int = 0

    # ── Helpers ──────────────────────────────────────────────

    def current(self) -> Token:
        return self.tokens[self.pos]

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        self.pos += 1
        return tok

    def at(self, value: str) -> bool:
        tok = self.current()
        return tok.type == TK_OP and tok.value == value

    def at_type(self, type_: str) -> bool:
        return self.current().type == type_

    def expect(self, value: str) -> Token:
        if not self.at(value):
            raise self.error("expected '" + value + "', got " + self._describe())
        return self.advance()

    def expect_ident(self) -> Token:
        if not self.at_type(TK_IDENT):
            raise self.error("expected identifier, got " + self._describe())
        return self.advance()

    def error(self, msg: str) -> TypeSyntaxError:
        return TypeSyntaxError(msg, self.current().col)

    def _describe(self) -> str:
        tok = self.current()
        if tok.type == TK_EOF:
            return "end of input"
        if tok.type == TK_LIFETIME:
            return "lifetime '" + tok.value
        return "'" + tok.value + "'"

    # ── Grammar ──────────────────────────────────────────────

    def parse(self) -> Type:
        ty = self.parse_type()
        if not self.at_type(TK_EOF):
            raise self.error("unexpected " + self._describe() + " after type")
        return ty

    def parse_type(self) -> Type:
        if self.at("&"):
            return self._parse_reference()
        if self.at("["):
            return self._parse_brackets()
        if self.at("::") or self.at_type(TK_IDENT):
            return Path(self._parse_path())
        raise self.error("expected type, got " + self._describe())

    def _parse_reference(self) -> Type:
        self.expect("&")
        lifetime: str | None = None
        if self.at_type(TK_LIFETIME):
            lifetime = self.advance().value
        if self.at_type(TK_IDENT) and self.current().value == "mut":
            self.advance()
        return Reference(lifetime, self.parse_type())

    def _parse_brackets(self) -> Type:
        self.expect("[")
        element = self.parse_type()
        if self.at(";"):
            self.advance()
            if not (self.at_type(TK_INT) or self.at_type(TK_IDENT)):
                raise self.error("expected array length, got " + self._describe())
            self.advance()
            self.expect("]")
            return Array(element)
        self.expect("]")
        return Slice(element)

    def _parse_path(self) -> TypePath:
        if self.at("::"):
            self.advance()
        segments: list[PathSegment] = [self._parse_segment()]
        while self.at("::"):
            self.advance()
            segments.append(self._parse_segment())
        return TypePath(tuple(segments))

    def _parse_segment(self) -> PathSegment:
        name = self.expect_ident().value
        if self.at("::") and self.tokens[self.pos + 1].value == "<":
            self.advance()
        arguments: list[GenericArgument] = []
        if self.at("<"):
            self.advance()
            while not self.at(">"):
                arguments.append(self._parse_argument())
                if not self.at(","):
                    break
                self.advance()
            self.expect(">")
        return PathSegment(name, tuple(arguments))

    def _parse_argument(self) -> GenericArgument:
        if self.at_type(TK_LIFETIME):
            return LifetimeArgument(self.advance().value)
        return TypeArgument(self.parse_type())


def parse_type_expr(src: str) -> Type:
    """Parse a type expression. Raises TypeSyntaxError."""
    return TypeParser(tokenize(src)).parse()
