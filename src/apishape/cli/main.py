# Copyright 2026 Apishape Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the apishape command-line interface."""

import argparse
import logging
import sys
from pathlib import Path

from apishape.config import CONFIG_FILE_NAME, ConfigError, GeneratorConfig, default_config_text, load_config
from apishape.emitter.artifact import write_artifact
from apishape.emitter.typescript import EmitError, EmitOptions, render_document
from apishape.extractor.collector import EndpointCollector
from apishape.extractor.graph import BuildResult, build_graph
from apishape.metadata.snapshot import SnapshotError, load_snapshot
from apishape.validation.checks import validate

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the apishape CLI."""
    parser = argparse.ArgumentParser(
        prog="apishape",
        description="apishape: TypeScript declarations for HTTP API payload types",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log extraction details to stderr")
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # init subcommand
    init_parser = subparsers.add_parser(
        "init",
        help="Write a starter configuration file",
        description=f"Create a commented {CONFIG_FILE_NAME} with the default settings.",
    )
    init_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory to write the configuration to (default: current directory)",
    )

    # check subcommand
    check_parser = subparsers.add_parser(
        "check",
        help="Extract and validate types without writing output",
        description="Resolve every endpoint of a metadata snapshot and report problems.",
    )
    _add_input_arguments(check_parser)

    # generate subcommand
    generate_parser = subparsers.add_parser(
        "generate",
        help="Write TypeScript declarations (or a JSON artifact)",
        description=(
            "Resolve every endpoint of a metadata snapshot and write the declarations. "
            "Output is written for every cleanly resolved endpoint even when others fail."
        ),
    )
    _add_input_arguments(generate_parser)
    generate_parser.add_argument(
        "-o",
        "--output",
        help="Output file (default: the configured 'output', relative to the current directory)",
    )
    generate_parser.add_argument(
        "--format",
        choices=["ts", "json"],
        default="ts",
        help="Output format: TypeScript declarations or a JSON artifact (default: ts)",
    )

    args = parser.parse_args()
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _add_input_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("snapshot", help="Metadata snapshot file (YAML or JSON)")
    parser.add_argument(
        "-c",
        "--config",
        help=f"Configuration file (default: {CONFIG_FILE_NAME} in the current directory, if present)",
    )


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "init":
        return _cmd_init(args)
    if args.command == "check":
        return _cmd_check(args)
    if args.command == "generate":
        return _cmd_generate(args)
    return 0


def _cmd_init(args: argparse.Namespace) -> int:
    """Handle the init subcommand."""
    directory = Path(args.directory).resolve()

    if not directory.exists():
        print(f"Error: directory '{directory}' does not exist.", file=sys.stderr)
        return 1

    config_file = directory / CONFIG_FILE_NAME
    if config_file.exists():
        print(f"Error: configuration already exists at '{config_file}'.", file=sys.stderr)
        return 1

    config_file.write_text(default_config_text(), encoding="utf-8")
    print(f"Wrote default configuration to '{config_file}'.")
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    """Handle the check subcommand."""
    loaded = _extract(args)
    if loaded is None:
        return 1
    _config, result = loaded

    has_errors = _report(result)
    if has_errors:
        return 1

    print("No issues found.")
    return 0


def _cmd_generate(args: argparse.Namespace) -> int:
    """Handle the generate subcommand."""
    loaded = _extract(args)
    if loaded is None:
        return 1
    config, result = loaded

    has_errors = _report(result)
    output = Path(args.output or config.output)
    try:
        if args.format == "json":
            write_artifact(result.extraction, output)
        else:
            document = render_document(result.extraction, EmitOptions.from_config(config))
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(document, encoding="utf-8")
    except EmitError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"Error: cannot write '{output}': {exc}", file=sys.stderr)
        return 1

    print(f"Wrote {len(result.extraction.graph)} type(s) to '{output}'.")
    return 1 if has_errors else 0


def _extract(args: argparse.Namespace) -> tuple[GeneratorConfig, BuildResult] | None:
    """Load the configuration and snapshot, then run extraction; print input errors."""
    try:
        config = _load_config(args.config)
        snapshot = load_snapshot(Path(args.snapshot))
    except (ConfigError, SnapshotError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return None

    signatures = EndpointCollector(snapshot, config).collect()
    print(f"Resolving {len(signatures)} endpoint(s)...")
    return config, build_graph(signatures, snapshot, config)


def _load_config(path: str | None) -> GeneratorConfig:
    if path is not None:
        return load_config(Path(path))
    default = Path.cwd() / CONFIG_FILE_NAME
    if default.exists():
        return load_config(default)
    return GeneratorConfig()


def _report(result: BuildResult) -> bool:
    """Print extraction errors and validation findings; return True if anything is fatal."""
    has_errors = False
    for error in result.report.errors:
        print(f"Error: {error}", file=sys.stderr)
        has_errors = True

    validation = validate(result.extraction)
    for warning in validation.warnings:
        print(f"Warning: {warning.message}")
    for error in validation.errors:
        print(f"Error: {error.message}", file=sys.stderr)
        has_errors = True
    return has_errors
