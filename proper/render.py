"""Renders inferred declarations as JavaScript source."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List, Sequence

from jinja2 import Environment, FileSystemLoader

from .errors import DuplicateDeclarationError
from .models import Position, TypeDeclaration
from .proptypes import FormatOptions, get_format_options

DEFAULT_IMPORT_SOURCE = "prop-types"

_TEMPLATES_DIR = Path(__file__).with_name("templates")


def format_declaration(decl: TypeDeclaration, options: FormatOptions | None = None) -> str:
    """Format a declaration as a JavaScript const preceded by its source position."""
    typ = "null"
    if decl.schema is not None:
        typ = decl.schema.format(0, options)
    return f"// {decl.position}\nconst {decl.name} = {typ};"


def render_unit(
    declarations: Sequence[TypeDeclaration], options: FormatOptions | None = None
) -> str:
    """Render the declarations of one source unit separated by blank lines."""
    return "\n\n".join(format_declaration(decl, options) for decl in declarations)


def render_units(
    units: Iterable[Sequence[TypeDeclaration]], options: FormatOptions | None = None
) -> str:
    rendered = [render_unit(declarations, options) for declarations in units if declarations]
    if not rendered:
        return ""
    return "\n\n".join(rendered) + "\n"


def render_module(
    units: Iterable[Sequence[TypeDeclaration]],
    options: FormatOptions | None = None,
    import_source: str = DEFAULT_IMPORT_SOURCE,
) -> str:
    """Render declarations as a standalone ES module importing prop-types.

    Raises DuplicateDeclarationError when two declarations share a name,
    since a module cannot hold two consts of the same name.
    """
    options = options or get_format_options()
    declarations: List[str] = []
    seen: Dict[str, Position] = {}
    for unit in units:
        for decl in unit:
            if decl.name in seen:
                raise DuplicateDeclarationError(
                    f"{decl.name} is declared at both {seen[decl.name]} and {decl.position}"
                )
            seen[decl.name] = decl.position
            declarations.append(format_declaration(decl, options))
    template = _environment().get_template("module.js.j2")
    return template.render(
        import_name=options.import_name,
        import_source=import_source,
        declarations=declarations,
        exports=list(seen),
    )


def _environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(_TEMPLATES_DIR)),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


__all__ = [
    "DEFAULT_IMPORT_SOURCE",
    "format_declaration",
    "render_module",
    "render_unit",
    "render_units",
]
