"""Drives scanning, parsing and inference for a source tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from .errors import SourceParseError
from .inference import inspect_unit
from .logging import get_logger
from .models import TypeDeclaration
from .parsing import GoParser
from .proptypes import Diagnostic
from .scanner import SourceScanner

_logger = get_logger("generator")


@dataclass
class InspectedUnit:
    """Declarations inferred from one Go source file."""

    path: str
    declarations: List[TypeDeclaration] = field(default_factory=list)


class Generator:
    """Inspects Go sources and infers a prop type for every named type."""

    def __init__(
        self,
        parser: Optional[GoParser] = None,
        scanner: Optional[SourceScanner] = None,
    ) -> None:
        self._parser = parser or GoParser()
        self._scanner = scanner or SourceScanner()

    def inspect(
        self, path: Path, *, recursive: bool = False, strict: bool = False
    ) -> List[InspectedUnit]:
        """Inspect a Go file or directory.

        Files with syntax errors are skipped with a warning, or abort the run
        when ``strict`` is set.
        """
        return self.inspect_files(self._scanner.scan(path, recursive=recursive), strict=strict)

    def inspect_files(self, files: Sequence[Path], *, strict: bool = False) -> List[InspectedUnit]:
        units: List[InspectedUnit] = []
        for path in files:
            display_name = path.as_posix()
            try:
                unit = self._parser.parse_file(path, display_name)
            except SourceParseError as exc:
                if strict:
                    raise
                _logger.warning("Skipping %s", exc)
                continue
            declarations = inspect_unit(unit)
            _report_diagnostics(declarations)
            units.append(InspectedUnit(path=display_name, declarations=declarations))
        return units


def _report_diagnostics(declarations: Sequence[TypeDeclaration]) -> None:
    for decl in declarations:
        if decl.schema is None:
            _logger.debug(
                "%s has no json representation", decl.name, extra={"position": decl.position}
            )
            continue
        for node in decl.schema.walk():
            if isinstance(node, Diagnostic):
                _logger.warning(
                    "%s: %s", decl.name, node.message, extra={"position": decl.position}
                )


__all__ = ["Generator", "InspectedUnit"]
