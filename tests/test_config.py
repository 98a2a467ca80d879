"""Tests for docxref.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from docxref.config import ConfigError, DocxrefConfig, load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, DocxrefConfig)
    assert config.root == tmp_path.resolve()
    assert config.include == ["*.sgml", "ref/*.sgml"]
    assert config.exclude_paths == []
    assert config.attributes.anchor == "id"
    assert config.attributes.reference == "linkend"
    assert config.thresholds.min_lines == 200
    assert config.thresholds.min_references == 3
    assert config.graph.format == "dot"
    assert config.graph.edge_weights is False
    assert config.output_dir is None
    assert config.workers == 1


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    (tmp_path / ".docxref.yml").write_text(
        """
include:
  - "*.xml"
exclude_paths: [drafts/]
attributes:
  anchor: "xml:id"
  reference: "href"
thresholds:
  min_lines: 150
  min_references: 4
graph:
  format: json
  edge_weights: yes
output_dir: out
workers: 4
""",
        encoding="utf-8",
    )

    config = load_config(tmp_path)

    assert config.include == ["*.xml"]
    assert config.exclude_paths == ["drafts/"]
    assert config.attributes.anchor == "xml:id"
    assert config.attributes.reference == "href"
    assert config.thresholds.min_lines == 150
    assert config.thresholds.min_references == 4
    assert config.graph.format == "json"
    assert config.graph.edge_weights is True
    assert config.output_dir == tmp_path.resolve() / "out"
    assert config.workers == 4


def test_partial_thresholds_keep_defaults(tmp_path: Path) -> None:
    (tmp_path / ".docxref.yml").write_text("thresholds:\n  min_lines: 0\n", encoding="utf-8")

    config = load_config(tmp_path)

    assert config.thresholds.min_lines == 0
    assert config.thresholds.min_references == 3


def test_explicit_config_file_path(tmp_path: Path) -> None:
    config_file = tmp_path / "custom.yml"
    config_file.write_text("workers: 2\n", encoding="utf-8")

    assert load_config(config_file).workers == 2


def test_empty_file_yields_defaults(tmp_path: Path) -> None:
    (tmp_path / ".docxref.yml").write_text("\n", encoding="utf-8")
    assert load_config(tmp_path).workers == 1


@pytest.mark.parametrize(
    "content",
    [
        "- just\n- a list\n",
        "workers: 0\n",
        "thresholds:\n  min_lines: -1\n",
        "attributes:\n  anchor: id\n  reference: id\n",
        "include: [unclosed\n",
        "graph:\n  format: svg\n",
    ],
)
def test_invalid_config_raises(tmp_path: Path, content: str) -> None:
    (tmp_path / ".docxref.yml").write_text(content, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(tmp_path)
