"""Discovers the Go source files whose types are inspected."""

from __future__ import annotations

import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterator, List, Sequence

from .logging import get_logger

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    "node_modules",
    "testdata",
    "vendor",
}

_GO_SUFFIX = ".go"
_TEST_SUFFIX = "_test.go"

_logger = get_logger("scanner")


@dataclass
class IgnoreRule:
    """Represents an exclusion pattern from .proper.yml."""

    pattern: str
    directory_only: bool
    anchored: bool
    has_slash: bool

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if not self.pattern:
            return False
        if self.directory_only and not is_dir:
            return False

        if self.anchored or self.has_slash:
            if fnmatchcase(rel_path, self.pattern):
                return True
            return self.directory_only and rel_path.startswith(f"{self.pattern}/")

        return any(fnmatchcase(part, self.pattern) for part in rel_path.split("/"))


def build_ignore_rule(pattern: str) -> IgnoreRule | None:
    pattern = pattern.strip()
    if not pattern:
        return None

    directory_only = pattern.endswith("/")
    if directory_only:
        pattern = pattern[:-1]

    anchored = pattern.startswith("/")
    if anchored:
        pattern = pattern[1:]

    return IgnoreRule(
        pattern=pattern,
        directory_only=directory_only,
        anchored=anchored,
        has_slash="/" in pattern,
    )


def is_go_source(name: str) -> bool:
    """Report whether a file name is a non-test Go source file."""
    return name.endswith(_GO_SUFFIX) and not name.endswith(_TEST_SUFFIX)


def _is_hidden(name: str) -> bool:
    # The go tool ignores directories and files starting with "." or "_".
    return name.startswith((".", "_"))


class SourceScanner:
    """Walks a directory tree to list Go sources in a stable order."""

    def __init__(self, exclude_paths: Sequence[str] = ()) -> None:
        self._rules: List[IgnoreRule] = [
            rule for rule in (build_ignore_rule(pattern) for pattern in exclude_paths) if rule
        ]

    def scan(self, root: Path, *, recursive: bool = False) -> List[Path]:
        """Return the Go files under ``root``; a file root is returned as is."""
        root = root.expanduser()
        if not root.exists():
            raise FileNotFoundError(f"Source path not found: {root}")
        if root.is_file():
            return [root]

        files = sorted(self._iter_files(root, recursive))
        _logger.debug("Found %d Go source files under %s", len(files), root)
        return files

    def _iter_files(self, root: Path, recursive: bool) -> Iterator[Path]:
        for dirpath, dirnames, filenames in os.walk(root):
            current_dir = Path(dirpath)
            rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""

            if recursive:
                dirnames[:] = [
                    name
                    for name in dirnames
                    if name not in _EXCLUDED_DIRS
                    and not _is_hidden(name)
                    and not self._ignored(_join(rel_dir, name), True)
                ]
            else:
                dirnames[:] = []

            for filename in filenames:
                if not is_go_source(filename) or _is_hidden(filename):
                    continue
                if self._ignored(_join(rel_dir, filename), False):
                    continue
                yield current_dir / filename

    def _ignored(self, rel_path: str, is_dir: bool) -> bool:
        return any(rule.matches(rel_path, is_dir) for rule in self._rules)


def _join(rel_dir: str, name: str) -> str:
    return f"{rel_dir}/{name}" if rel_dir else name


__all__ = ["IgnoreRule", "SourceScanner", "build_ignore_rule", "is_go_source"]
