"""Configuration loading for docxref (.docxref.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".docxref.yml"

DEFAULT_INCLUDE = ("*.sgml", "ref/*.sgml")
DEFAULT_MIN_LINES = 200
DEFAULT_MIN_REFERENCES = 3
GRAPH_FORMATS = ("dot", "json")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class AttributeConfig:
    """Markup attributes carrying anchor declarations and reference targets."""

    anchor: str = "id"
    reference: str = "linkend"


@dataclass
class ThresholdConfig:
    """Size and popularity cut-offs applied by the ranking reports."""

    min_lines: int = DEFAULT_MIN_LINES
    min_references: int = DEFAULT_MIN_REFERENCES


@dataclass
class GraphConfig:
    """Reference graph export settings."""

    format: str = "dot"
    edge_weights: bool = False


@dataclass
class DocxrefConfig:
    """Represents the settings defined in .docxref.yml."""

    root: Path
    include: List[str] = field(default_factory=lambda: list(DEFAULT_INCLUDE))
    exclude_paths: List[str] = field(default_factory=list)
    attributes: AttributeConfig = field(default_factory=AttributeConfig)
    thresholds: ThresholdConfig = field(default_factory=ThresholdConfig)
    graph: GraphConfig = field(default_factory=GraphConfig)
    output_dir: Optional[Path] = None
    workers: int = 1


def load_config(config_path: Path) -> DocxrefConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return DocxrefConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = DocxrefConfig(root=root)

    include = _as_str_list(data.get("include"))
    if include:
        config.include = include
    config.exclude_paths = _as_str_list(data.get("exclude_paths"))

    attribute_data = _as_dict(data.get("attributes"))
    if attribute_data:
        anchor = _as_str(attribute_data.get("anchor"))
        reference = _as_str(attribute_data.get("reference"))
        config.attributes = AttributeConfig(
            anchor=anchor or config.attributes.anchor,
            reference=reference or config.attributes.reference,
        )
        if config.attributes.anchor == config.attributes.reference:
            raise ConfigError("attributes.anchor and attributes.reference must differ")

    threshold_data = _as_dict(data.get("thresholds"))
    if threshold_data:
        min_lines = _as_int(threshold_data.get("min_lines"))
        min_references = _as_int(threshold_data.get("min_references"))
        config.thresholds = ThresholdConfig(
            min_lines=DEFAULT_MIN_LINES if min_lines is None else min_lines,
            min_references=DEFAULT_MIN_REFERENCES if min_references is None else min_references,
        )
        if config.thresholds.min_lines < 0 or config.thresholds.min_references < 0:
            raise ConfigError("thresholds must not be negative")

    graph_data = _as_dict(data.get("graph"))
    if graph_data:
        config.graph = GraphConfig(
            format=_as_str(graph_data.get("format")) or "dot",
            edge_weights=_as_bool(graph_data.get("edge_weights")) or False,
        )
        if config.graph.format not in GRAPH_FORMATS:
            raise ConfigError(
                f"graph.format must be one of: {', '.join(GRAPH_FORMATS)} "
                f"(got {config.graph.format!r})"
            )

    output_dir = _as_str(data.get("output_dir"))
    if output_dir:
        config.output_dir = root / output_dir

    workers = _as_int(data.get("workers"))
    if workers is not None:
        if workers < 1:
            raise ConfigError("workers must be at least 1")
        config.workers = workers

    return config


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
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "AttributeConfig",
    "ConfigError",
    "DocxrefConfig",
    "GraphConfig",
    "ThresholdConfig",
    "load_config",
]
