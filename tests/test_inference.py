"""Tests for prop type inference from type expressions."""

from __future__ import annotations

import pytest

from proper import proptypes as pt
from proper.inference import infer, inspect_unit
from proper.models import (
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
    TypeSpec,
)
from proper.proptypes import ArrayOf, Diagnostic, ObjectOf, Shape, ShapeEntry


@pytest.mark.parametrize(
    ("name", "want"),
    [
        ("bool", pt.BOOL),
        ("string", pt.STRING),
        ("int", pt.NUMBER),
        ("uint64", pt.NUMBER),
        ("float32", pt.NUMBER),
        ("rune", pt.NUMBER),
        ("byte", pt.NUMBER),
        ("uintptr", pt.NUMBER),
        ("any", pt.ANY),
        ("error", pt.ANY),
    ],
)
def test_predeclared_identifiers(name: str, want: pt.PropType) -> None:
    assert infer(Ident(name)) == (want, True)


@pytest.mark.parametrize("name", ["complex64", "complex128"])
def test_complex_numbers_are_not_representable(name: str) -> None:
    assert infer(Ident(name)) == (None, False)


def test_named_types_stay_unresolved() -> None:
    assert infer(Ident("Address")) == (Diagnostic("unresolved Address"), True)


def test_shadowed_predeclared_name_is_not_a_primitive() -> None:
    assert infer(Ident("string", declared=True)) == (Diagnostic("unresolved string"), True)
    assert infer(Ident("any", declared=True)) == (Diagnostic("unresolved any"), True)


def test_any_matches_empty_interface() -> None:
    assert infer(Ident("any")) == infer(Interface())
    assert infer(Map(Ident("any"))) == (ObjectOf(pt.ANY), True)


def test_pointers_and_parens_are_transparent() -> None:
    assert infer(Pointer(Ident("int"))) == (pt.NUMBER, True)
    assert infer(Paren(Pointer(Paren(Ident("string"))))) == (pt.STRING, True)
    assert infer(Pointer(Function())) == (None, False)


@pytest.mark.parametrize(
    ("selector", "want"),
    [
        (Selector("time", "Time"), (pt.STRING, True)),
        (Selector("bson", "ObjectId"), (pt.STRING, True)),
        (Selector("time", "Duration"), (None, False)),
        (Selector("sql", "NullString"), (None, False)),
    ],
)
def test_selectors_use_well_known_table(selector: Selector, want: tuple) -> None:
    assert infer(selector) == want


def test_byte_arrays_encode_as_strings() -> None:
    assert infer(Array(Ident("byte"))) == (pt.STRING, True)
    assert infer(Array(Ident("uint8"))) == (pt.STRING, True)
    assert infer(Array(Ident("byte", declared=True))) == (
        ArrayOf(Diagnostic("unresolved byte")),
        True,
    )


def test_arrays() -> None:
    assert infer(Array(Ident("int"))) == (ArrayOf(pt.NUMBER), True)
    assert infer(Array(Array(Ident("string")))) == (ArrayOf(ArrayOf(pt.STRING)), True)
    assert infer(Array(Channel())) == (pt.ARRAY, True)
    assert infer(Array(Pointer(Ident("byte")))) == (ArrayOf(pt.NUMBER), True)


def test_maps() -> None:
    assert infer(Map(Ident("float64"))) == (ObjectOf(pt.NUMBER), True)
    assert infer(Map(Interface())) == (ObjectOf(pt.ANY), True)
    assert infer(Map(Function())) == (pt.OBJECT, True)


def test_interfaces_accept_anything() -> None:
    assert infer(Interface()) == (pt.ANY, True)


@pytest.mark.parametrize("expr", [Channel(), Function()])
def test_channels_and_funcs_are_not_representable(expr) -> None:
    assert infer(expr) == (None, False)


def test_unmatched_kinds_become_visible_placeholders() -> None:
    typ, ok = infer(Other("generic_type"))
    assert ok is True
    assert typ == Diagnostic("unmatched generic_type")
    assert typ.format(0) == "<<unmatched generic_type>>"


def test_struct_scenario_renames_and_drops_fields() -> None:
    struct = Struct(
        (
            Field(("Name",), Ident("string")),
            Field(("Age",), Ident("int"), '`json:"age,omitempty"`'),
            Field(("secret",), Ident("string")),
        )
    )

    assert infer(struct) == (
        Shape([ShapeEntry("Name", pt.STRING), ShapeEntry("age", pt.NUMBER)]),
        True,
    )


def test_struct_excludes_unexported_skipped_and_unrepresentable_fields() -> None:
    struct = Struct(
        (
            Field(("hidden",), Ident("int")),
            Field(("Skipped",), Ident("int"), '`json:"-"`'),
            Field(("Callback",), Function()),
            Field(("Title",), Ident("string")),
        )
    )

    assert infer(struct) == (Shape([ShapeEntry("Title", pt.STRING)]), True)


def test_struct_field_names_and_tags() -> None:
    struct = Struct(
        (
            Field(("X", "y", "Z"), Ident("float64")),
            Field(("Empty",), Ident("bool"), '`json:",omitempty"`'),
            Field(("Other",), Ident("bool"), '`xml:"other"`'),
            Field(("A",), Ident("int"), '`json:"dup"`'),
            Field(("B",), Ident("string"), '`json:"dup"`'),
            Field((), Ident("Embedded")),
        )
    )

    typ, ok = infer(struct)

    assert ok is True
    assert typ == Shape(
        [
            ShapeEntry("X", pt.NUMBER),
            ShapeEntry("Z", pt.NUMBER),
            ShapeEntry("Empty", pt.BOOL),
            ShapeEntry("Other", pt.BOOL),
            ShapeEntry("dup", pt.NUMBER),
            ShapeEntry("dup", pt.STRING),
        ]
    )


def test_empty_struct() -> None:
    typ, ok = infer(Struct())
    assert ok is True
    assert typ.format(0) == "PropTypes.shape({})"


def test_nested_struct_formatting() -> None:
    struct = Struct(
        (
            Field(("Tags",), Array(Ident("string")), '`json:"tags"`'),
            Field(
                ("Owner",),
                Pointer(Struct((Field(("ID",), Selector("bson", "ObjectId"), '`json:"_id"`'),))),
                '`json:"owner"`',
            ),
        )
    )

    typ, _ = infer(struct)

    assert typ.format(0) == (
        "PropTypes.shape({\n"
        "  tags: PropTypes.arrayOf(PropTypes.string),\n"
        "  owner: PropTypes.shape({\n"
        "    _id: PropTypes.string,\n"
        "  }),\n"
        "})"
    )


def test_inspect_unit_keeps_unrepresentable_declarations_as_none() -> None:
    position = Position("models.go", 3, 1)
    unit = SourceUnit(
        path="models.go",
        specs=[
            TypeSpec("Handler", position, Function()),
            TypeSpec("ID", position, Ident("int64")),
        ],
    )

    declarations = inspect_unit(unit)

    assert [(decl.name, decl.schema) for decl in declarations] == [
        ("Handler", None),
        ("ID", pt.NUMBER),
    ]
    assert all(decl.position == position for decl in declarations)
