"""Models types from the JavaScript prop-types library.

Every node is an immutable value that can be formatted with JavaScript
syntax. Formatting is pure: the output depends only on the node, the
indentation level and the :class:`FormatOptions` in effect.
"""

from __future__ import annotations

import json
import re
from abc import ABC, abstractmethod
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Iterator, Optional, Sequence, Tuple


@dataclass(frozen=True)
class FormatOptions:
    """Knobs that affect how prop types are written out."""

    # Variable name by which the prop-types library is imported.
    import_name: str = "PropTypes"
    # Characters used for one level of indentation.
    indent: str = "  "


DEFAULT_OPTIONS = FormatOptions()

_IDENTIFIER_RE = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")

_current_options: ContextVar[FormatOptions] = ContextVar(
    "proper_format_options", default=DEFAULT_OPTIONS
)


def get_format_options() -> FormatOptions:
    """Return the options used when ``format`` is called without explicit options."""
    return _current_options.get()


def set_format_options(options: FormatOptions) -> Token[FormatOptions]:
    """Replace the process-wide options; pass the returned token to ``reset_format_options``."""
    return _current_options.set(options)


def reset_format_options(token: Token[FormatOptions]) -> None:
    _current_options.reset(token)


@contextmanager
def format_options(
    *, import_name: str | None = None, indent: str | None = None
) -> Iterator[FormatOptions]:
    """Temporarily override the import name and/or indentation."""
    current = get_format_options()
    options = replace(
        current,
        import_name=current.import_name if import_name is None else import_name,
        indent=current.indent if indent is None else indent,
    )
    token = set_format_options(options)
    try:
        yield options
    finally:
        reset_format_options(token)


class PropType(ABC):
    """A prop type that can be formatted with JavaScript syntax."""

    def format(self, indent: int = 0, options: FormatOptions | None = None) -> str:
        return self._format(indent, options or get_format_options())

    @abstractmethod
    def _format(self, indent: int, options: FormatOptions) -> str:
        """Render the node at the given indentation level."""

    def children(self) -> Iterable[Optional["PropType"]]:
        return ()

    def walk(self) -> Iterator["PropType"]:
        """Yield this node and all of its descendants, depth first."""
        yield self
        for child in self.children():
            if child is not None:
                yield from child.walk()


class SimpleKind(str, Enum):
    ANY = "any"
    ARRAY = "array"
    BOOL = "bool"
    FUNC = "func"
    NUMBER = "number"
    OBJECT = "object"
    STRING = "string"
    SYMBOL = "symbol"
    # Anything that can be rendered: numbers, strings, elements, or an array
    # or fragment containing these types.
    NODE = "node"
    # A React element (i.e. <MyComponent />).
    ELEMENT = "element"
    # A React element type (i.e. MyComponent).
    ELEMENT_TYPE = "elementType"


@dataclass(frozen=True)
class Simple(PropType):
    kind: SimpleKind

    def _format(self, indent: int, options: FormatOptions) -> str:
        return f"{options.import_name}.{self.kind.value}"


ANY = Simple(SimpleKind.ANY)
ARRAY = Simple(SimpleKind.ARRAY)
BOOL = Simple(SimpleKind.BOOL)
FUNC = Simple(SimpleKind.FUNC)
NUMBER = Simple(SimpleKind.NUMBER)
OBJECT = Simple(SimpleKind.OBJECT)
STRING = Simple(SimpleKind.STRING)
SYMBOL = Simple(SimpleKind.SYMBOL)
NODE = Simple(SimpleKind.NODE)
ELEMENT = Simple(SimpleKind.ELEMENT)
ELEMENT_TYPE = Simple(SimpleKind.ELEMENT_TYPE)


@dataclass(frozen=True)
class InstanceOf(PropType):
    """A prop that is an instance of a class."""

    class_name: str

    def _format(self, indent: int, options: FormatOptions) -> str:
        return _format_call("instanceOf", self.class_name, options)


@dataclass(frozen=True, init=False)
class OneOf(PropType):
    """A prop limited to specific values, treated as an enum.

    Literals must already be in JavaScript syntax, including quotes for
    strings (``"'lorem'"`` for the JavaScript string ``'lorem'``).
    """

    literals: Tuple[str, ...]

    def __init__(self, *literals: str) -> None:
        object.__setattr__(self, "literals", tuple(literals))

    def _format(self, indent: int, options: FormatOptions) -> str:
        return _format_call("oneOf", format_array(self.literals, indent, options), options)


@dataclass(frozen=True, init=False)
class OneOfType(PropType):
    """An object that could be one of many types."""

    types: Tuple[Optional[PropType], ...]

    def __init__(self, *types: Optional[PropType]) -> None:
        object.__setattr__(self, "types", tuple(types))

    def children(self) -> Iterable[Optional[PropType]]:
        return self.types

    def _format(self, indent: int, options: FormatOptions) -> str:
        values = [_format_optional(typ, indent + 1, options) for typ in self.types]
        return _format_call("oneOfType", format_array(values, indent, options), options)


@dataclass(frozen=True)
class ArrayOf(PropType):
    """An array of a certain type."""

    type: Optional[PropType]

    def children(self) -> Iterable[Optional[PropType]]:
        return (self.type,)

    def _format(self, indent: int, options: FormatOptions) -> str:
        return _format_call("arrayOf", _format_optional(self.type, indent, options), options)


@dataclass(frozen=True)
class ObjectOf(PropType):
    """An object with property values of a certain type."""

    type: Optional[PropType]

    def children(self) -> Iterable[Optional[PropType]]:
        return (self.type,)

    def _format(self, indent: int, options: FormatOptions) -> str:
        return _format_call("objectOf", _format_optional(self.type, indent, options), options)


@dataclass(frozen=True)
class ShapeEntry:
    """A key-value pair describing one property of an object."""

    name: str
    type: Optional[PropType]


@dataclass(frozen=True, init=False)
class Shape(PropType):
    """An object taking on a particular shape."""

    entries: Tuple[ShapeEntry, ...]

    def __init__(self, entries: Sequence[ShapeEntry] | None = None) -> None:
        object.__setattr__(self, "entries", tuple(entries or ()))

    def children(self) -> Iterable[Optional[PropType]]:
        return [entry.type for entry in self.entries]

    def _format(self, indent: int, options: FormatOptions) -> str:
        return _format_call("shape", format_object(self.entries, indent, options), options)


class Exact(Shape):
    """An object with warnings on extra properties."""

    def _format(self, indent: int, options: FormatOptions) -> str:
        return _format_call("exact", format_object(self.entries, indent, options), options)


@dataclass(frozen=True)
class IsRequired(PropType):
    """A prop that is required."""

    type: PropType

    def children(self) -> Iterable[Optional[PropType]]:
        return (self.type,)

    def _format(self, indent: int, options: FormatOptions) -> str:
        return self.type._format(indent, options) + ".isRequired"


@dataclass(frozen=True)
class Diagnostic(PropType):
    """Placeholder for a type that could not be mapped to a prop type.

    Renders as ``<<message>>`` so that gaps show up in generated code
    instead of being mistaken for ``null``.
    """

    message: str

    def _format(self, indent: int, options: FormatOptions) -> str:
        return f"<<{self.message}>>"


def _format_optional(typ: Optional[PropType], indent: int, options: FormatOptions) -> str:
    if typ is None:
        return "null"
    return typ._format(indent, options)


def _format_call(name: str, value: str, options: FormatOptions) -> str:
    return f"{options.import_name}.{name}({value})"


def _property_name(name: str) -> str:
    # Keys that are not plain identifiers, such as "first-name", need quotes.
    if _IDENTIFIER_RE.fullmatch(name):
        return name
    return json.dumps(name)


def format_array(values: Sequence[str], indent: int, options: FormatOptions) -> str:
    """Format strings as a JavaScript array.

    An empty array and an array holding a single one-line value stay on one
    line. Anything else puts each value on its own line with a trailing comma.
    """
    if not values:
        return "[]"
    if len(values) == 1 and "\n" not in values[0]:
        return f"[{values[0]}]"
    inner = options.indent * (indent + 1)
    lines = ["["]
    lines.extend(f"{inner}{value}," for value in values)
    lines.append(f"{options.indent * indent}]")
    return "\n".join(lines)


def format_object(entries: Sequence[ShapeEntry], indent: int, options: FormatOptions) -> str:
    """Format shape entries as a JavaScript object, one entry per line."""
    if not entries:
        return "{}"
    inner = options.indent * (indent + 1)
    lines = ["{"]
    for entry in entries:
        value = _format_optional(entry.type, indent + 1, options)
        lines.append(f"{inner}{_property_name(entry.name)}: {value},")
    lines.append(f"{options.indent * indent}}}")
    return "\n".join(lines)


__all__ = [
    "ANY",
    "ARRAY",
    "BOOL",
    "DEFAULT_OPTIONS",
    "ELEMENT",
    "ELEMENT_TYPE",
    "FUNC",
    "NODE",
    "NUMBER",
    "OBJECT",
    "STRING",
    "SYMBOL",
    "ArrayOf",
    "Diagnostic",
    "Exact",
    "FormatOptions",
    "InstanceOf",
    "IsRequired",
    "ObjectOf",
    "OneOf",
    "OneOfType",
    "PropType",
    "Shape",
    "ShapeEntry",
    "Simple",
    "SimpleKind",
    "format_array",
    "format_object",
    "format_options",
    "get_format_options",
    "reset_format_options",
    "set_format_options",
]
