"""Pipeline orchestration for corpus analysis runs."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import List, Optional, Sequence

from .config import CONFIG_FILENAME, DocxrefConfig, load_config
from .corpus import CorpusScanner
from .extractors import AnchorExtractor, ReferenceExtractor, extract_corpus
from .graph import ReferenceGraph, ReferenceGraphBuilder, get_exporter
from .index import CrossReferenceIndex
from .logging import get_logger, log_stage
from .metrics import FileMetricsAggregator
from .models import CorpusManifest, FileMetrics
from .reports import ReportRenderer, ScoringReportGenerator, ScoringReports

GRAPH_BASENAME = "document-graph-stats"


@dataclass
class AnalysisResult:
    """Everything derived from one corpus snapshot."""

    manifest: CorpusManifest
    index: CrossReferenceIndex
    metrics: List[FileMetrics]
    reports: ScoringReports
    graph: ReferenceGraph
    config: DocxrefConfig


@dataclass
class RunOverrides:
    """Command-line or request values that take precedence over .docxref.yml."""

    min_lines: Optional[int] = None
    min_references: Optional[int] = None
    workers: Optional[int] = None
    graph_format: Optional[str] = None
    edge_weights: Optional[bool] = None
    output_dir: Optional[Path] = None


class Orchestrator:
    """Coordinates scanning, extraction, indexing, scoring and graph export."""

    def __init__(
        self,
        scanner: CorpusScanner | None = None,
        aggregator: FileMetricsAggregator | None = None,
        graph_builder: ReferenceGraphBuilder | None = None,
        renderer: ReportRenderer | None = None,
    ) -> None:
        self.scanner = scanner or CorpusScanner()
        self.aggregator = aggregator or FileMetricsAggregator()
        self.graph_builder = graph_builder or ReferenceGraphBuilder()
        self.renderer = renderer or ReportRenderer()
        self.logger = get_logger("orchestrator")

    def load_config(
        self,
        path: str | Path,
        *,
        config_path: Path | None = None,
        overrides: RunOverrides | None = None,
    ) -> DocxrefConfig:
        corpus_path = Path(path).expanduser().resolve()
        if config_path is None:
            config_path = corpus_path / CONFIG_FILENAME
        config = load_config(config_path)
        if overrides is None:
            return config

        thresholds = config.thresholds
        if overrides.min_lines is not None:
            thresholds = replace(thresholds, min_lines=overrides.min_lines)
        if overrides.min_references is not None:
            thresholds = replace(thresholds, min_references=overrides.min_references)
        graph = config.graph
        if overrides.graph_format is not None:
            graph = replace(graph, format=overrides.graph_format)
        if overrides.edge_weights is not None:
            graph = replace(graph, edge_weights=overrides.edge_weights)
        return replace(
            config,
            thresholds=thresholds,
            graph=graph,
            workers=overrides.workers or config.workers,
            output_dir=overrides.output_dir or config.output_dir,
        )

    def run(self, path: str | Path, *, config: DocxrefConfig | None = None) -> AnalysisResult:
        """Analyze the corpus at ``path`` and return metrics, reports and graph.

        Raises :class:`~docxref.index.DuplicateAnchorError` before any report is
        produced when an anchor id is declared twice.
        """
        corpus_path = Path(path).expanduser().resolve()
        config = config or self.load_config(corpus_path)
        self.logger.info("Starting analysis of %s", corpus_path)

        with log_stage(self.logger, "scan"):
            manifest = self.scanner.scan(
                corpus_path, include=config.include, exclude=config.exclude_paths
            )
        self.logger.info("Found %d documents", len(manifest.documents))

        with log_stage(self.logger, "extract"):
            extractions = extract_corpus(
                manifest,
                self.scanner.read,
                AnchorExtractor(config.attributes.anchor),
                ReferenceExtractor(config.attributes.reference),
                workers=config.workers,
            )

        with log_stage(self.logger, "index"):
            index = CrossReferenceIndex.build(
                ((item.path, item.anchors) for item in extractions),
                ((item.path, item.references) for item in extractions),
            )
        self.logger.info(
            "Indexed %d anchors and %d references", len(index.anchors), len(index.references)
        )
        if index.dangling:
            self.logger.warning(
                "%d reference(s) point at undeclared anchors", len(index.dangling)
            )

        with log_stage(self.logger, "aggregate"):
            metrics = self.aggregator.aggregate(manifest, index)

        generator = ScoringReportGenerator(
            min_lines=config.thresholds.min_lines,
            min_references=config.thresholds.min_references,
        )
        with log_stage(self.logger, "report"):
            reports = generator.generate(metrics, index)

        with log_stage(self.logger, "graph"):
            graph = self.graph_builder.build(metrics, index)
        self.logger.debug("Graph has %d nodes and %d edges", len(graph.nodes), len(graph.edges))

        return AnalysisResult(
            manifest=manifest,
            index=index,
            metrics=metrics,
            reports=reports,
            graph=graph,
            config=config,
        )

    def render_graph(self, result: AnalysisResult, graph_format: str | None = None) -> str:
        exporter = get_exporter(
            graph_format or result.config.graph.format,
            edge_weights=result.config.graph.edge_weights,
        )
        return exporter.export(result.graph)

    def write_outputs(
        self,
        result: AnalysisResult,
        output_dir: Path,
        *,
        formats: Sequence[str] = ("text", "json"),
    ) -> List[Path]:
        """Write the reports and graph under ``output_dir`` and return the paths."""
        output_dir.mkdir(parents=True, exist_ok=True)
        written: List[Path] = []

        if "text" in formats:
            target = output_dir / "reports.txt"
            target.write_text(self.renderer.render_text(result.reports), encoding="utf-8")
            written.append(target)
        if "json" in formats:
            target = output_dir / "reports.json"
            target.write_text(self.renderer.render_json(result.reports), encoding="utf-8")
            written.append(target)

        exporter = get_exporter(
            result.config.graph.format, edge_weights=result.config.graph.edge_weights
        )
        graph_path = output_dir / f"{GRAPH_BASENAME}{exporter.suffix}"
        graph_path.write_text(exporter.export(result.graph), encoding="utf-8")
        written.append(graph_path)

        for path in written:
            self.logger.info("Wrote %s", path)
        return written


__all__ = ["AnalysisResult", "Orchestrator", "RunOverrides"]
