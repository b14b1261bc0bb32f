"""Tests for proper.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from proper.config import ProperConfig, load_config, parse_indent
from proper.errors import ConfigError


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, ProperConfig)
    assert config.root == tmp_path.resolve()
    assert config.output.import_name is None
    assert config.output.indent is None
    assert config.output.import_source is None
    assert config.output.module is False
    assert config.scan.recursive is False
    assert config.scan.exclude_paths == []


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".proper.yml"
    config_file.write_text(
        """
output:
  import_name: PT
  indent: 4
  import_source: "prop-types"
  module: true
scan:
  recursive: yes
  exclude_paths:
    - "internal/gen/"
    - "*_mock.go"
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.output.import_name == "PT"
    assert config.output.indent == "    "
    assert config.output.import_source == "prop-types"
    assert config.output.module is True
    assert config.scan.recursive is True
    assert config.scan.exclude_paths == ["internal/gen/", "*_mock.go"]


def test_load_config_from_a_source_file_uses_its_directory(tmp_path: Path) -> None:
    (tmp_path / ".proper.yml").write_text("output:\n  indent: \"\\t\"\n", encoding="utf-8")

    config = load_config(tmp_path / "user.go")

    assert config.output.indent == "\t"


def test_load_config_empty_file(tmp_path: Path) -> None:
    (tmp_path / ".proper.yml").write_text("\n", encoding="utf-8")

    assert load_config(tmp_path).scan.exclude_paths == []


@pytest.mark.parametrize(
    "content",
    [
        "- just\n- a list\n",
        "output: [unclosed\n",
        "output:\n  import_name: not-an-identifier\n",
        "output:\n  indent: [1, 2]\n",
    ],
)
def test_load_config_rejects_invalid_files(tmp_path: Path, content: str) -> None:
    (tmp_path / ".proper.yml").write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_parse_indent() -> None:
    assert parse_indent(2) == "  "
    assert parse_indent("3") == "   "
    assert parse_indent("\\t") == "\t"
    assert parse_indent("--") == "--"
    assert parse_indent(True) is None
    with pytest.raises(ConfigError):
        parse_indent(-1)
