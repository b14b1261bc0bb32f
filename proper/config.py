"""Configuration loading for proper (.proper.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .errors import ConfigError

CONFIG_FILENAME = ".proper.yml"


@dataclass
class OutputConfig:
    """How generated prop types are written."""

    import_name: Optional[str] = None
    indent: Optional[str] = None
    import_source: Optional[str] = None
    module: bool = False


@dataclass
class ScanConfig:
    """Which Go sources are inspected."""

    recursive: bool = False
    exclude_paths: List[str] = field(default_factory=list)


@dataclass
class ProperConfig:
    """Represents the settings defined in .proper.yml."""

    root: Path
    output: OutputConfig = field(default_factory=OutputConfig)
    scan: ScanConfig = field(default_factory=ScanConfig)


def load_config(config_path: Path) -> ProperConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ProperConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    output_data = _as_dict(data.get("output"))
    output = OutputConfig(
        import_name=_as_str(output_data.get("import_name")),
        indent=_as_indent(output_data.get("indent")),
        import_source=_as_str(output_data.get("import_source")),
        module=_as_bool(output_data.get("module")) or False,
    )
    if output.import_name is not None and not output.import_name.isidentifier():
        raise ConfigError(f"output.import_name is not a valid identifier: {output.import_name!r}")

    scan_data = _as_dict(data.get("scan"))
    scan = ScanConfig(
        recursive=_as_bool(scan_data.get("recursive")) or False,
        exclude_paths=_as_str_list(scan_data.get("exclude_paths")),
    )

    return ProperConfig(root=root, output=output, scan=scan)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.suffix not in {".yml", ".yaml"}:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return {} if loaded is None else loaded


def parse_indent(value: Any) -> Optional[str]:
    """Interpret an indent setting: a number of spaces or a literal string."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        if value < 0:
            raise ConfigError(f"indent must not be negative: {value}")
        return " " * value
    if isinstance(value, str):
        if value.isdigit():
            return " " * int(value)
        return value.replace("\\t", "\t")
    return None


def _as_indent(value: Any) -> Optional[str]:
    if value is None:
        return None
    indent = parse_indent(value)
    if indent is None:
        raise ConfigError(f"output.indent must be a number or a string, got {value!r}")
    return indent


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "OutputConfig",
    "ProperConfig",
    "ScanConfig",
    "load_config",
    "parse_indent",
]
