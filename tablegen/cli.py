# File: tablegen/cli.py
"""
TableGen - Command-Line Interface
==================================

Usage examples::

    # Write all artifacts for the tables in a metadata file to a zip
    python -m tablegen -m sys_user.yaml -o code.zip

    # Element style, explicit package and module
    python -m tablegen -m sys_user.yaml -o code.zip --style element \\
        --package com.example.crm --module crm

    # List artifact paths without writing anything
    python -m tablegen -m sys_user.yaml --preview

Exit codes:
    0: success
    1: configuration error
    2: generation error
    4: input/argument error
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, NoReturn, Optional, Sequence

# ---------------------------------------------------------------------------
# Logger (configured in _setup_logging)
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("tablegen")


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

EXIT_SUCCESS: int = 0
EXIT_CONFIG_ERROR: int = 1
EXIT_GENERATION_ERROR: int = 2
EXIT_INPUT_ERROR: int = 4


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------


def _setup_logging(verbosity: int) -> None:
    """
    Configure the tablegen logger.

    Args:
        verbosity: 0 = WARNING, 1 = INFO, 2+ = DEBUG.
    """
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity >= 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    handler: logging.StreamHandler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s",
            datefmt="%H:%M:%S",
        )
    )

    root_logger: logging.Logger = logging.getLogger("tablegen")
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.propagate = False


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    from tablegen import __version__
    from tablegen.models import Style

    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        prog="tablegen",
        description=(
            "TableGen: generate entity, mapper, service, controller, menu SQL "
            "and frontend artifacts from table metadata."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  %(prog)s -m sys_user.yaml -o code.zip\n"
            "  %(prog)s -m sys_user.yaml --preview --style element\n"
        ),
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-m",
        "--metadata",
        required=True,
        metavar="FILE",
        help="Table metadata file (JSON or YAML).",
    )
    parser.add_argument(
        "-o",
        "--output",
        metavar="ZIP",
        default=None,
        help="Zip archive to write.",
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Print artifact paths and sizes instead of writing an archive.",
    )
    parser.add_argument(
        "--config",
        metavar="FILE",
        default=None,
        help="Generator settings YAML (defaults to the packaged settings).",
    )

    overrides = parser.add_argument_group("generation overrides")
    overrides.add_argument(
        "--style",
        choices=[s.value for s in Style],
        default=None,
        help="Frontend style.",
    )
    overrides.add_argument("--author", default=None)
    overrides.add_argument("--package", dest="package_name", default=None)
    overrides.add_argument("--module", dest="module_name", default=None)
    overrides.add_argument("--table-prefix", dest="table_prefix", default=None)
    overrides.add_argument("--comments", default=None, help="Table comment override.")
    overrides.add_argument(
        "--crud-payload",
        metavar="FILE",
        default=None,
        help="Pre-serialised avue form options used verbatim for the CRUD config.",
    )

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v INFO, -vv DEBUG).",
    )
    verbosity.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress all log output.",
    )
    return parser


def _build_config_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """Collect the override flags that were actually given."""
    overrides: Dict[str, Any] = {}
    for key in ("style", "author", "package_name", "module_name", "table_prefix", "comments"):
        value: Optional[str] = getattr(args, key)
        if value is not None:
            overrides[key] = value
    return overrides


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------


def _run(args: argparse.Namespace) -> int:
    from tablegen.config import ConfigurationError, load_settings
    from tablegen.generator import CodeGenerator, load_metadata_file, parse_metadata
    from tablegen.templates import TemplateRenderError

    try:
        settings = load_settings(Path(args.config) if args.config else None)
    except ConfigurationError as exc:
        logger.error("%s", exc)
        return EXIT_CONFIG_ERROR

    try:
        raw = load_metadata_file(Path(args.metadata).resolve())
        requests, config = parse_metadata(raw)
        crud_payload: Optional[str] = (
            Path(args.crud_payload).read_text(encoding="utf-8")
            if args.crud_payload
            else None
        )
    except (OSError, ValueError) as exc:
        logger.error("Failed to load input: %s", exc)
        return EXIT_INPUT_ERROR

    config = config.model_copy(update=_build_config_overrides(args))
    generator = CodeGenerator(settings=settings)

    try:
        if args.preview:
            for table, columns in requests:
                for artifact in generator.generate_artifacts(
                    config, table, columns, crud_payload=crud_payload
                ):
                    print(f"{artifact.size_bytes:>8d}  {artifact.path}")
        else:
            results = generator.write_archive(
                Path(args.output), requests, config, crud_payload=crud_payload
            )
            total: int = sum(len(r) for r in results)
            print(f"Wrote {total} artifacts for {len(results)} table(s) to {args.output}")
    except (TemplateRenderError, ValueError, OSError) as exc:
        logger.error("Generation failed: %s", exc)
        return EXIT_GENERATION_ERROR

    return EXIT_SUCCESS


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------


def cli_main(argv: Optional[Sequence[str]] = None) -> NoReturn:
    """
    Main CLI entry point.

    Args:
        argv: Optional argument list (defaults to sys.argv[1:]).
    """
    parser: argparse.ArgumentParser = _build_parser()
    args: argparse.Namespace = parser.parse_args(argv)

    if args.quiet:
        logging.disable(logging.CRITICAL)
    _setup_logging(-1 if args.quiet else args.verbose)

    if not args.preview and args.output is None:
        logger.error("An output archive is required. Use -o/--output or --preview.")
        parser.print_usage(sys.stderr)
        sys.exit(EXIT_INPUT_ERROR)

    exit_code: int = _run(args)
    if exit_code == EXIT_SUCCESS:
        logger.info("Generation completed successfully.")
    sys.exit(exit_code)


__all__: List[str] = [
    "cli_main",
    "EXIT_SUCCESS",
    "EXIT_CONFIG_ERROR",
    "EXIT_GENERATION_ERROR",
    "EXIT_INPUT_ERROR",
]
