"""Source parsers producing type expressions."""

from .go import GoParser

__all__ = ["GoParser"]
