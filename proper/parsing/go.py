"""Tree-sitter powered Go type declaration parser."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Set

import tree_sitter_go
from tree_sitter import Language, Node, Parser

from ..errors import SourceParseError
from ..logging import get_logger
from ..models import (
    Array,
    Channel,
    Field,
    Function,
    Ident,
    Interface,
    Map,
    Other,
    Paren,
    Pointer,
    Position,
    Selector,
    SourceUnit,
    Struct,
    TypeExpr,
    TypeSpec,
)

GO_LANGUAGE = Language(tree_sitter_go.language())

_SPEC_KINDS = {"type_spec", "type_alias"}
_ARRAY_KINDS = {"array_type", "slice_type", "implicit_length_array_type"}

_logger = get_logger("parsing.go")


class GoParser:
    """Extracts top-level type declarations from Go source files."""

    def __init__(self) -> None:
        self._parser = Parser(GO_LANGUAGE)

    def parse_file(self, path: Path, display_name: str | None = None) -> SourceUnit:
        return self.parse(path.read_bytes(), display_name or str(path))

    def parse(self, source: bytes, filename: str) -> SourceUnit:
        """Parse Go source into a unit holding its type declarations in order.

        Raises SourceParseError when the source contains syntax errors.
        """
        tree = self._parser.parse(source)
        root = tree.root_node
        if root.has_error:
            bad = _first_error(root) or root
            line, column = bad.start_point
            raise SourceParseError(f"{filename}:{line + 1}:{column + 1}: syntax error")

        converter = _Converter(source, _declared_names(root, source))
        unit = SourceUnit(path=filename)
        for decl in _type_declarations(root):
            line, column = decl.start_point
            position = Position(filename, line + 1, column + 1)
            for spec in decl.named_children:
                if spec.type not in _SPEC_KINDS:
                    continue
                name_node = spec.child_by_field_name("name")
                type_node = spec.child_by_field_name("type")
                if name_node is None or type_node is None:
                    continue
                unit.specs.append(
                    TypeSpec(
                        name=_node_text(name_node, source),
                        position=position,
                        type=converter.convert(type_node),
                    )
                )
        _logger.debug("Parsed %d type declarations from %s", len(unit.specs), filename)
        return unit


class _Converter:
    def __init__(self, source: bytes, declared: Set[str]) -> None:
        self._source = source
        self._declared = declared

    def convert(self, node: Node) -> TypeExpr:
        kind = node.type
        if kind == "type_identifier":
            name = _node_text(node, self._source)
            return Ident(name, declared=name in self._declared)
        if kind == "pointer_type":
            return Pointer(self._convert_inner(node))
        if kind == "parenthesized_type":
            return Paren(self._convert_inner(node))
        if kind in _ARRAY_KINDS:
            return Array(self._convert_field(node, "element"))
        if kind == "map_type":
            return Map(self._convert_field(node, "value"))
        if kind == "struct_type":
            return Struct(tuple(self._convert_fields(node)))
        if kind == "interface_type":
            return Interface()
        if kind == "qualified_type":
            package = node.child_by_field_name("package")
            member = node.child_by_field_name("name")
            if package is None or member is None:
                return Other(kind)
            return Selector(_node_text(package, self._source), _node_text(member, self._source))
        if kind == "channel_type":
            return Channel()
        if kind == "function_type":
            return Function()
        return Other(kind)

    def _convert_inner(self, node: Node) -> TypeExpr:
        inner = _first_named(node)
        if inner is None:
            return Other(node.type)
        return self.convert(inner)

    def _convert_field(self, node: Node, field_name: str) -> TypeExpr:
        child = node.child_by_field_name(field_name)
        if child is None:
            return Other(node.type)
        return self.convert(child)

    def _convert_fields(self, struct_node: Node) -> Iterator[Field]:
        for field_list in _named_children_of_kind(struct_node, "field_declaration_list"):
            for decl in _named_children_of_kind(field_list, "field_declaration"):
                type_node = decl.child_by_field_name("type")
                if type_node is None:
                    continue
                names = tuple(
                    _node_text(name, self._source) for name in decl.children_by_field_name("name")
                )
                typ = self.convert(type_node)
                if not names and any(child.type == "*" for child in decl.children):
                    typ = Pointer(typ)
                tag_node = decl.child_by_field_name("tag")
                tag = _node_text(tag_node, self._source) if tag_node is not None else None
                yield Field(names=names, type=typ, tag=tag)


def _type_declarations(root: Node) -> Iterable[Node]:
    return _named_children_of_kind(root, "type_declaration")


def _declared_names(root: Node, source: bytes) -> Set[str]:
    names: Set[str] = set()
    for decl in _type_declarations(root):
        for spec in decl.named_children:
            if spec.type in _SPEC_KINDS:
                name_node = spec.child_by_field_name("name")
                if name_node is not None:
                    names.add(_node_text(name_node, source))
    return names


def _named_children_of_kind(node: Node, kind: str) -> List[Node]:
    return [child for child in node.named_children if child.type == kind]


def _first_named(node: Node) -> Optional[Node]:
    for child in node.named_children:
        if child.type != "comment":
            return child
    return None


def _first_error(node: Node) -> Optional[Node]:
    if node.type == "ERROR" or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = _first_error(child)
            if found is not None:
                return found
    return None


def _node_text(node: Node, source: bytes) -> str:
    return source[node.start_byte : node.end_byte].decode("utf-8", errors="ignore")


__all__ = ["GO_LANGUAGE", "GoParser"]
