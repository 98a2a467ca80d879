"""CLI entrypoints for docxref commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import GRAPH_FORMATS, ConfigError
from .index import DuplicateAnchorError
from .logging import configure_logging
from .orchestrator import Orchestrator, RunOverrides


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_corpus_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the documentation tree (defaults to current directory).",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a .docxref.yml file (defaults to the one in the corpus root).",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of threads used to extract documents.",
    )
    parser.add_argument(
        "--graph-format",
        choices=GRAPH_FORMATS,
        default=None,
        help="Serialization used for the reference graph.",
    )
    parser.add_argument(
        "--edge-weights",
        action="store_true",
        default=None,
        help="Emit edge weights in the graph output.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docxref",
        description="Rank documentation pages whose cross-references need finer-grained anchors.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write the run log to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Print the ranking reports for a documentation tree.",
    )
    _add_verbose_option(analyze_parser, suppress_default=True)
    _add_corpus_options(analyze_parser)
    analyze_parser.add_argument(
        "--format",
        choices=("text", "json"),
        default="text",
        help="Report format printed to stdout.",
    )
    analyze_parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Also write reports and the reference graph into this directory.",
    )
    analyze_parser.add_argument(
        "--min-lines",
        type=int,
        default=None,
        help="Minimum page size in lines for the size-weighted reports.",
    )
    analyze_parser.add_argument(
        "--min-references",
        type=int,
        default=None,
        help="Minimum number of inbound references for the size-weighted reports.",
    )

    graph_parser = subparsers.add_parser(
        "graph",
        help="Print the document reference graph.",
    )
    _add_verbose_option(graph_parser, suppress_default=True)
    _add_corpus_options(graph_parser)

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service exposing analysis results.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to bind.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for docxref commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose),
        quiet=args.command != "serve",
        log_file=args.log_file,
    )

    if args.command == "serve":
        from .service import run_service

        run_service(host=args.host, port=args.port)
        return

    orchestrator = Orchestrator()
    overrides = RunOverrides(
        min_lines=getattr(args, "min_lines", None),
        min_references=getattr(args, "min_references", None),
        workers=args.workers,
        graph_format=args.graph_format,
        edge_weights=args.edge_weights,
        output_dir=getattr(args, "output_dir", None),
    )

    try:
        config = orchestrator.load_config(args.path, config_path=args.config, overrides=overrides)
        result = orchestrator.run(args.path, config=config)
    except (FileNotFoundError, NotADirectoryError) as exc:
        parser.exit(1, f"{exc}\n")
    except DuplicateAnchorError as exc:
        parser.exit(1, f"docxref {args.command} failed: {exc}\nAnchor ids must be unique across the corpus.\n")
    except ConfigError as exc:
        parser.exit(1, f"docxref {args.command} failed: {exc}\n")

    if args.command == "graph":
        sys.stdout.write(orchestrator.render_graph(result))
        return

    if args.format == "json":
        sys.stdout.write(orchestrator.renderer.render_json(result.reports))
    else:
        sys.stdout.write(orchestrator.renderer.render_text(result.reports))

    if config.output_dir is not None:
        written = orchestrator.write_outputs(result, config.output_dir)
        for path in written:
            print(f"Wrote {_relativize(path)}", file=sys.stderr)


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
