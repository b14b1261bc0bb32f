"""Infers prop types from parsed Go type expressions."""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from . import proptypes
from .models import (
    Array,
    Channel,
    Function,
    Ident,
    Interface,
    Map,
    Other,
    Paren,
    Pointer,
    Selector,
    SourceUnit,
    Struct,
    TypeDeclaration,
    TypeExpr,
    is_exported,
)
from .proptypes import PropType
from .tags import lookup_tag, parse_json_tag

# A prop type, and whether the expression can be represented at all.
Inference = Tuple[Optional[PropType], bool]

_NOT_REPRESENTABLE: Inference = (None, False)

# Predeclared Go types, from https://go.dev/ref/spec#Types.
_PREDECLARED: Dict[str, Optional[PropType]] = {
    "bool": proptypes.BOOL,
    "string": proptypes.STRING,
    # any is interface{}; error is a predeclared interface.
    "any": proptypes.ANY,
    "error": proptypes.ANY,
    "complex64": None,
    "complex128": None,
}
_NUMERIC = (
    "uint8", "uint16", "uint32", "uint64", "int8", "int16", "int32", "int64",
    "float32", "float64", "byte", "rune", "uint", "int", "uintptr",
)
_PREDECLARED.update((name, proptypes.NUMBER) for name in _NUMERIC)

# Types from other packages whose json encoding is a plain string.
WELL_KNOWN_SELECTORS: Dict[Tuple[str, str], PropType] = {
    ("time", "Time"): proptypes.STRING,
    ("bson", "ObjectId"): proptypes.STRING,
}

# []byte is encoded to json as a base64 string; uint8 is the same type.
_BYTE_NAMES = frozenset({"byte", "uint8"})


def infer(expr: TypeExpr) -> Inference:
    """Return the prop type for a type expression.

    The second element is False when the type has no json encoding, such as
    channels and funcs, which make encoding/json fail with an
    UnsupportedTypeError.
    """
    if isinstance(expr, Ident):
        return _infer_ident(expr)
    if isinstance(expr, (Pointer, Paren)):
        return infer(expr.inner)
    if isinstance(expr, Selector):
        return _infer_selector(expr)
    if isinstance(expr, Array):
        return _infer_array(expr)
    if isinstance(expr, Map):
        value, ok = infer(expr.value)
        if ok:
            return proptypes.ObjectOf(value), True
        return proptypes.OBJECT, True
    if isinstance(expr, Struct):
        return _infer_struct(expr)
    if isinstance(expr, Interface):
        # Finding every type that satisfies an interface is out of reach, so
        # any value is accepted rather than a oneOfType of the implementations.
        return proptypes.ANY, True
    if isinstance(expr, (Channel, Function)):
        return _NOT_REPRESENTABLE
    kind = expr.kind if isinstance(expr, Other) else type(expr).__name__
    return proptypes.Diagnostic(f"unmatched {kind}"), True


def _infer_ident(ident: Ident) -> Inference:
    if not ident.declared and ident.name in _PREDECLARED:
        typ = _PREDECLARED[ident.name]
        if typ is None:
            return _NOT_REPRESENTABLE
        return typ, True
    # Named types are left unresolved rather than inlined.
    return proptypes.Diagnostic(f"unresolved {ident.name}"), True


def _infer_selector(selector: Selector) -> Inference:
    typ = WELL_KNOWN_SELECTORS.get((selector.package, selector.member))
    if typ is None:
        return _NOT_REPRESENTABLE
    return typ, True


def _infer_array(array: Array) -> Inference:
    elem = array.elem
    if isinstance(elem, Ident) and elem.name in _BYTE_NAMES and not elem.declared:
        return proptypes.STRING, True
    typ, ok = infer(elem)
    if ok:
        return proptypes.ArrayOf(typ), True
    # The element type has no encoding, but the value is still an array.
    return proptypes.ARRAY, True


def _infer_struct(struct: Struct) -> Inference:
    entries: List[proptypes.ShapeEntry] = []
    for field in struct.fields:
        typ, ok = infer(field.type)
        if not ok:
            continue
        for name in field.names:
            if not is_exported(name):  # invisible to encoding/json
                continue
            field_name = name
            tag, found = lookup_tag(field.tag, "json")
            if found:
                tag_name, options = parse_json_tag(tag)
                if tag_name == "-":
                    continue
                if tag_name:
                    field_name = tag_name
                # TODO: emit omitempty once prop types can express conditional
                # omission; until then the option is read and ignored.
                omit_empty = options.contains("omitempty")  # noqa: F841
            entries.append(proptypes.ShapeEntry(field_name, typ))
    return proptypes.Shape(entries), True


def inspect_unit(unit: SourceUnit) -> List[TypeDeclaration]:
    """Infer a declaration for every named type in a source unit."""
    declarations: List[TypeDeclaration] = []
    for spec in unit.specs:
        typ, ok = infer(spec.type)
        declarations.append(
            TypeDeclaration(name=spec.name, position=spec.position, schema=typ if ok else None)
        )
    return declarations


__all__ = ["Inference", "WELL_KNOWN_SELECTORS", "infer", "inspect_unit"]
