"""Generate React prop types from Go type declarations."""

from .inference import infer, inspect_unit
from .models import TypeDeclaration
from .proptypes import FormatOptions, PropType, format_options
from .render import format_declaration

__version__ = "0.1.0"

__all__ = [
    "FormatOptions",
    "PropType",
    "TypeDeclaration",
    "format_declaration",
    "format_options",
    "infer",
    "inspect_unit",
]
