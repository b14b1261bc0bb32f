"""Tests for Go source discovery."""

from __future__ import annotations

from pathlib import Path

import pytest

from proper.scanner import SourceScanner, build_ignore_rule, is_go_source
from tests._fixtures.go_tree import GoTreeBuilder


def _names(root: Path, files: list[Path]) -> list[str]:
    return [path.relative_to(root).as_posix() for path in files]


def _populate(go_tree: GoTreeBuilder) -> None:
    go_tree.write(
        {
            "b.go": "package p\n",
            "a.go": "package p\n",
            "a_test.go": "package p\n",
            "notes.txt": "not go\n",
            "_draft.go": "package p\n",
            "sub/c.go": "package sub\n",
            "sub/gen/d.go": "package gen\n",
            "vendor/v.go": "package v\n",
            "testdata/t.go": "package t\n",
            ".hidden/h.go": "package h\n",
        }
    )


def test_scan_lists_package_files_sorted(go_tree: GoTreeBuilder) -> None:
    _populate(go_tree)

    files = SourceScanner().scan(go_tree.path())

    assert _names(go_tree.path(), files) == ["a.go", "b.go"]


def test_scan_recursive_skips_vendor_testdata_and_hidden(go_tree: GoTreeBuilder) -> None:
    _populate(go_tree)

    files = SourceScanner().scan(go_tree.path(), recursive=True)

    assert _names(go_tree.path(), files) == ["a.go", "b.go", "sub/c.go", "sub/gen/d.go"]


def test_scan_honours_exclude_patterns(go_tree: GoTreeBuilder) -> None:
    _populate(go_tree)

    files = SourceScanner(["sub/gen/", "b.go"]).scan(go_tree.path(), recursive=True)

    assert _names(go_tree.path(), files) == ["a.go", "sub/c.go"]


def test_scan_accepts_single_file(go_tree: GoTreeBuilder) -> None:
    _populate(go_tree)
    target = go_tree.path("a_test.go")

    assert SourceScanner().scan(target) == [target]


def test_scan_missing_path_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        SourceScanner().scan(tmp_path / "missing")


def test_is_go_source() -> None:
    assert is_go_source("user.go")
    assert not is_go_source("user_test.go")
    assert not is_go_source("user.go.orig")


def test_ignore_rule_matching() -> None:
    rule = build_ignore_rule("*_gen.go")
    assert rule is not None
    assert rule.matches("models/user_gen.go", False)
    assert not rule.matches("models/user.go", False)

    directory = build_ignore_rule("/internal/")
    assert directory is not None
    assert directory.matches("internal", True)
    assert not directory.matches("internal", False)
    assert build_ignore_rule("   ") is None
