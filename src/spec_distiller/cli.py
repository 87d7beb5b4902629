"""Command-line interface for spec-distiller."""

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from schemas.config import BuildConfig
from schemas.report import BuildReport
from spec_distiller.exceptions import SpecDistillerError
from spec_distiller.loaders.corpus_loader import discover_sources
from spec_distiller.loaders.spec_writer import remove_spec
from spec_distiller.pipeline.orchestrator import SpecBuilder
from spec_distiller.pipeline.scheduler import BuildScheduler
from spec_distiller.pipeline.watcher import SourceWatcher

DEFAULT_SOURCE_DIR = Path(".")
DEFAULT_POLL_INTERVAL = 1.0


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def load_config(args: argparse.Namespace) -> BuildConfig:
    """Build a BuildConfig from an optional JSON file overridden by CLI flags.

    Raises:
        SpecDistillerError: If the config file cannot be read or validated
    """
    data: dict = {}
    if getattr(args, "config", None) is not None:
        try:
            data = json.loads(args.config.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise SpecDistillerError(f"Cannot read config {args.config}: {e}") from e

    data["source_dir"] = args.source if args.source is not None else data.get(
        "source_dir", DEFAULT_SOURCE_DIR
    )
    if args.output is not None:
        data["output_dir"] = args.output
    if getattr(args, "base_url", None) is not None:
        data["base_url"] = args.base_url

    try:
        return BuildConfig.model_validate(data)
    except ValidationError as e:
        raise SpecDistillerError(f"Invalid configuration: {e}") from e


def log_report(report: BuildReport, logger: logging.Logger) -> None:
    """Log a summary of a build report."""
    logger.info(f"Build date: {report.build_date}")
    for doc in report.documents:
        status = "FAILED" if doc.failed else "ok"
        logger.info(
            f"  {doc.shortname}: {status} "
            f"({doc.definitions} definitions, {doc.references} references, "
            f"{len(doc.citations)} citations)"
        )
    if report.warnings:
        logger.warning(f"  Warnings: {len(report.warnings)}")
        for issue in report.warnings:
            logger.warning(f"    - {issue}")
    if report.errors:
        logger.error(f"  Errors: {len(report.errors)}")
        for issue in report.errors:
            logger.error(f"    - {issue}")


def build(args: argparse.Namespace) -> int:
    """Execute the build command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    try:
        config = load_config(args)
        if not config.source_dir.is_dir():
            logger.error(f"Source directory not found: {config.source_dir}")
            return 1

        report = SpecBuilder(config).build()
    except SpecDistillerError as e:
        logger.error(f"Build failed: {e.message}")
        return 1

    log_report(report, logger)

    if args.report is not None:
        args.report.parent.mkdir(parents=True, exist_ok=True)
        args.report.write_text(report.model_dump_json(indent=2))
        logger.info(f"Wrote report to {args.report}")

    return 0 if report.ok else 1


def watch(args: argparse.Namespace) -> int:
    """Execute the watch command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 on graceful shutdown, non-zero for errors)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    try:
        config = load_config(args)
    except SpecDistillerError as e:
        logger.error(f"Cannot watch: {e.message}")
        return 1

    if not config.source_dir.is_dir():
        logger.error(f"Source directory not found: {config.source_dir}")
        return 1

    builder = SpecBuilder(config)

    def run_build() -> None:
        log_report(builder.build(), logger)

    watcher = SourceWatcher(
        config,
        BuildScheduler(run_build),
        poll_interval=args.interval,
    )
    watcher.run_forever()
    return 0


def clean(args: argparse.Namespace) -> int:
    """Execute the clean command: delete every published counterpart of a source.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    try:
        config = load_config(args)
    except SpecDistillerError as e:
        logger.error(f"Cannot clean: {e.message}")
        return 1

    if not config.source_dir.is_dir():
        logger.error(f"Source directory not found: {config.source_dir}")
        return 1

    removed = 0
    for source in discover_sources(config.source_dir, config.source_suffix):
        if remove_spec(source, config.resolved_output_dir, config.source_suffix):
            removed += 1

    logger.info(f"Removed {removed} published specs")
    return 0


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--source",
        type=Path,
        default=None,
        help=f"Directory containing .src.html sources (default: {DEFAULT_SOURCE_DIR})",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Directory for published specs (default: the source directory)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON file with build settings; command-line flags take precedence",
    )
    parser.add_argument(
        "--base-url",
        type=str,
        default=None,
        help="Site root used for canonical spec URLs (default: https://dasl.ing)",
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    parser = argparse.ArgumentParser(
        prog="spec-distiller",
        description="Build a cross-linked corpus of specifications from .src.html sources",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
    )

    build_parser = subparsers.add_parser(
        "build",
        help="Build every spec once",
        description="Index all sources, then publish each spec with resolved definitions and citations.",
    )
    _add_common_arguments(build_parser)
    build_parser.add_argument(
        "--report",
        type=Path,
        default=None,
        help="Write the build report as JSON to this path",
    )
    build_parser.set_defaults(func=build)

    watch_parser = subparsers.add_parser(
        "watch",
        help="Rebuild whenever sources change",
        description="Poll the source directory and rebuild the corpus when sources, the bibliography or the person registry change.",
    )
    _add_common_arguments(watch_parser)
    watch_parser.add_argument(
        "--interval",
        type=float,
        default=DEFAULT_POLL_INTERVAL,
        help=f"Seconds between polls (default: {DEFAULT_POLL_INTERVAL})",
    )
    watch_parser.set_defaults(func=watch)

    clean_parser = subparsers.add_parser(
        "clean",
        help="Delete published specs",
        description="Delete the published .html file of every source.",
    )
    _add_common_arguments(clean_parser)
    clean_parser.set_defaults(func=clean)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
