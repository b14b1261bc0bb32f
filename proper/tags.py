"""Struct tag helpers following Go's reflect and encoding/json conventions."""

from __future__ import annotations

from typing import Optional, Tuple

_SIMPLE_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "\\": "\\",
    '"': '"',
}

_HEX_ESCAPE_WIDTHS = {"x": 2, "u": 4, "U": 8}
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_OCTAL_DIGITS = frozenset("01234567")


def unquote(literal: str) -> str:
    """Interpret a Go raw or interpreted string literal.

    Raises ValueError when the literal is malformed.
    """
    if len(literal) < 2 or literal[0] != literal[-1]:
        raise ValueError(f"invalid string literal: {literal!r}")
    quote, body = literal[0], literal[1:-1]
    if quote == "`":
        if "`" in body:
            raise ValueError(f"invalid raw string literal: {literal!r}")
        return body.replace("\r", "")
    if quote != '"' or "\n" in body:
        raise ValueError(f"invalid string literal: {literal!r}")

    # Escapes may produce arbitrary bytes, so decode once at the end.
    out = bytearray()
    index = 0
    while index < len(body):
        char = body[index]
        if char == '"':
            raise ValueError(f"unescaped quote in {literal!r}")
        if char != "\\":
            out.extend(char.encode("utf-8"))
            index += 1
            continue
        if index + 1 >= len(body):
            raise ValueError(f"dangling escape in {literal!r}")
        escape = body[index + 1]
        if escape in _SIMPLE_ESCAPES:
            out.extend(_SIMPLE_ESCAPES[escape].encode("utf-8"))
            index += 2
        elif escape in _HEX_ESCAPE_WIDTHS:
            width = _HEX_ESCAPE_WIDTHS[escape]
            digits = body[index + 2 : index + 2 + width]
            if len(digits) != width or not set(digits) <= _HEX_DIGITS:
                raise ValueError(f"invalid \\{escape} escape in {literal!r}")
            value = int(digits, 16)
            if escape == "x":
                out.append(value)
            else:
                if value > 0x10FFFF or 0xD800 <= value <= 0xDFFF:
                    raise ValueError(f"invalid code point in {literal!r}")
                out.extend(chr(value).encode("utf-8"))
            index += 2 + width
        elif escape in _OCTAL_DIGITS:
            digits = body[index + 1 : index + 4]
            if len(digits) != 3 or not set(digits) <= _OCTAL_DIGITS or int(digits, 8) > 0xFF:
                raise ValueError(f"invalid octal escape in {literal!r}")
            out.append(int(digits, 8))
            index += 4
        else:
            raise ValueError(f"unknown escape \\{escape} in {literal!r}")
    return out.decode("utf-8", errors="replace")


def lookup(tag: str, key: str) -> Tuple[str, bool]:
    """Return the value associated with ``key`` in an unquoted struct tag.

    Mirrors reflect.StructTag.Lookup: the tag is a sequence of
    space-separated ``key:"value"`` pairs and scanning stops at the first
    malformed pair.
    """
    while tag:
        tag = tag.lstrip(" ")
        if not tag:
            break

        index = 0
        while (
            index < len(tag)
            and tag[index] > " "
            and tag[index] not in ':"'
            and tag[index] != "\x7f"
        ):
            index += 1
        if index == 0 or index + 1 >= len(tag) or tag[index] != ":" or tag[index + 1] != '"':
            break
        name = tag[:index]
        tag = tag[index + 1 :]

        index = 1
        while index < len(tag) and tag[index] != '"':
            if tag[index] == "\\":
                index += 1
            index += 1
        if index >= len(tag):
            break
        quoted = tag[: index + 1]
        tag = tag[index + 1 :]

        if name == key:
            try:
                return unquote(quoted), True
            except ValueError:
                break
    return "", False


def lookup_tag(literal: Optional[str], key: str) -> Tuple[str, bool]:
    """Look up ``key`` in a struct tag literal as written in the source."""
    if literal is None:
        return "", False
    try:
        tag = unquote(literal)
    except ValueError:
        return "", False
    return lookup(tag, key)


class TagOptions(str):
    """The comma-separated options following the name in a json tag."""

    def contains(self, option: str) -> bool:
        if not self:
            return False
        return option in self.split(",")


def parse_json_tag(tag: str) -> Tuple[str, TagOptions]:
    """Split a json tag into its name and options."""
    name, sep, options = tag.partition(",")
    return name, TagOptions(options if sep else "")


__all__ = ["TagOptions", "lookup", "lookup_tag", "parse_json_tag", "unquote"]
