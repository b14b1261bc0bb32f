"""Core data models shared across proper components.

Type expressions are the parsed, read-only form of the types that appear
in Go declarations. They form a closed set of variants; grammar nodes the
parser does not model are kept as :class:`Other` so they are never lost.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .proptypes import PropType


class TypeExpr:
    """Base class for parsed type expressions."""


@dataclass(frozen=True)
class Ident(TypeExpr):
    """A bare identifier such as ``int`` or ``User``.

    ``declared`` is true when a type with this name is declared in the same
    source file, which shadows any predeclared type of the same name.
    """

    name: str
    declared: bool = False


@dataclass(frozen=True)
class Pointer(TypeExpr):
    inner: TypeExpr


@dataclass(frozen=True)
class Paren(TypeExpr):
    inner: TypeExpr


@dataclass(frozen=True)
class Array(TypeExpr):
    """An array or slice; the length does not matter."""

    elem: TypeExpr


@dataclass(frozen=True)
class Map(TypeExpr):
    """A map; only the value type is kept since keys encode as strings."""

    value: TypeExpr


@dataclass(frozen=True)
class Field:
    """A struct field declaration.

    Embedded fields have no names. ``tag`` is the tag literal as written in
    the source, including its quotes.
    """

    names: Tuple[str, ...]
    type: TypeExpr
    tag: Optional[str] = None


@dataclass(frozen=True)
class Struct(TypeExpr):
    fields: Tuple[Field, ...] = ()


@dataclass(frozen=True)
class Interface(TypeExpr):
    pass


@dataclass(frozen=True)
class Selector(TypeExpr):
    """A qualified reference ``package.Member``."""

    package: str
    member: str


@dataclass(frozen=True)
class Channel(TypeExpr):
    pass


@dataclass(frozen=True)
class Function(TypeExpr):
    pass


@dataclass(frozen=True)
class Other(TypeExpr):
    """Any grammar node not modelled above, identified by its node kind."""

    kind: str


def is_exported(name: str) -> bool:
    """Report whether a Go identifier is visible outside its package."""
    return bool(name) and name[0].isupper()


@dataclass(frozen=True)
class Position:
    """A 1-based source location."""

    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"


@dataclass(frozen=True)
class TypeSpec:
    """A named type declaration as found in a source file."""

    name: str
    position: Position
    type: TypeExpr


@dataclass
class SourceUnit:
    """The type declarations of one source file, in source order."""

    path: str
    specs: List[TypeSpec] = field(default_factory=list)


@dataclass(frozen=True)
class TypeDeclaration:
    """A named type with its inferred prop type.

    ``schema`` is None when the type cannot be represented; it is still
    written out, as ``null``.
    """

    name: str
    position: Position
    schema: Optional[PropType]
