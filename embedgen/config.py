"""Configuration loading for embedgen (.embedgen.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .encoding.constants import DEFAULT_ROW_SIZE, DEFAULT_WRAP_WIDTH, STYLE_STRING, STYLES
from .errors import ConfigError
from .registry import DUPLICATE_POLICIES, ON_DUPLICATE_OVERWRITE

CONFIG_FILENAME = ".embedgen.yml"
DEFAULT_BASE_NAME = "embedded_files"


@dataclass
class OutputConfig:
    """Where the generated documents are written."""

    directory: Optional[Path] = None
    base_name: str = DEFAULT_BASE_NAME


@dataclass
class EncodingConfig:
    """Literal style used for embedded data."""

    style: str = STYLE_STRING
    wrap_width: int = DEFAULT_WRAP_WIDTH
    row_size: int = DEFAULT_ROW_SIZE


@dataclass
class RegistryConfig:
    """Registry assembly policies."""

    on_duplicate: str = ON_DUPLICATE_OVERWRITE


@dataclass
class EmbedGenConfig:
    """Represents the settings defined in .embedgen.yml."""

    root: Path
    namespace: Optional[str] = None
    output: OutputConfig = field(default_factory=OutputConfig)
    encoding: EncodingConfig = field(default_factory=EncodingConfig)
    registry: RegistryConfig = field(default_factory=RegistryConfig)
    exclude_paths: List[str] = field(default_factory=list)


def load_config(config_path: Path) -> EmbedGenConfig:
    """Load configuration from disk, returning defaults when the file is absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return EmbedGenConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    output = OutputConfig()
    output_data = _as_dict(data.get("output"))
    if output_data:
        directory = _as_str(output_data.get("directory"))
        output.directory = root / directory if directory else None
        base_name = _as_str(output_data.get("base_name"))
        if base_name:
            output.base_name = base_name

    encoding = EncodingConfig()
    encoding_data = _as_dict(data.get("encoding"))
    if encoding_data:
        style = _as_str(encoding_data.get("style"))
        if style is not None:
            if style not in STYLES:
                raise ConfigError(
                    f"encoding.style must be one of {', '.join(STYLES)} (got '{style}')"
                )
            encoding.style = style
        encoding.wrap_width = _positive_int(
            encoding_data.get("wrap_width"), "encoding.wrap_width", encoding.wrap_width
        )
        encoding.row_size = _positive_int(
            encoding_data.get("row_size"), "encoding.row_size", encoding.row_size
        )

    registry = RegistryConfig()
    registry_data = _as_dict(data.get("registry"))
    if registry_data:
        policy = _as_str(registry_data.get("on_duplicate"))
        if policy is not None:
            if policy not in DUPLICATE_POLICIES:
                raise ConfigError(
                    f"registry.on_duplicate must be one of {', '.join(DUPLICATE_POLICIES)} (got '{policy}')"
                )
            registry.on_duplicate = policy

    return EmbedGenConfig(
        root=root,
        namespace=_as_str(data.get("namespace")) or None,
        output=output,
        encoding=encoding,
        registry=registry,
        exclude_paths=_as_str_list(data.get("exclude_paths")),
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _positive_int(value: Any, key: str, default: int) -> int:
    if value is None:
        return default
    parsed = _as_int(value)
    if parsed is None or parsed < 1:
        raise ConfigError(f"{key} must be a positive integer (got {value!r})")
    return parsed


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_BASE_NAME",
    "EmbedGenConfig",
    "EncodingConfig",
    "OutputConfig",
    "RegistryConfig",
    "load_config",
]
