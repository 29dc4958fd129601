# Copyright 2026 Shapegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the shapegen command-line interface."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from shapegen.codegen.director import generate
from shapegen.config import CodegenSettings, SettingsError, load_settings
from shapegen.errors import CodegenError
from shapegen.logging import configure_logging
from shapegen.model.loader import ModelLoadError, load_model
from shapegen.transforms.closure import SYNTHETIC_SERVICE_ID, compute_closure, synthesize_service

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the shapegen CLI."""
    parser = argparse.ArgumentParser(
        prog="shapegen",
        description="shapegen: Rust code generator for smithy4rs shape models",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # generate subcommand
    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate Rust sources from a model",
        description="Generate schemas and type declarations for every top-level shape of a JSON model.",
    )
    generate_parser.add_argument("model", help="Path to the JSON model file")
    generate_parser.add_argument(
        "--config",
        default=None,
        help="Path to a YAML settings file (default: built-in settings)",
    )
    generate_parser.add_argument(
        "--output-dir",
        default=".",
        help="Directory the generated files are written to (default: current directory)",
    )
    generate_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug output",
    )
    generate_parser.add_argument(
        "--log-file",
        default=None,
        help="Also write log output to this file",
    )

    # closure subcommand
    closure_parser = subparsers.add_parser(
        "closure",
        help="List the shapes that would be generated",
        description=(
            "Print the top-level shapes of a model and the operations of the synthetic service "
            "that gathers them."
        ),
    )
    closure_parser.add_argument("model", help="Path to the JSON model file")

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "generate":
        return _cmd_generate(args)
    if args.command == "closure":
        return _cmd_closure(args)
    return 0


def _cmd_generate(args: argparse.Namespace) -> int:
    """Handle the generate subcommand."""
    log_file = Path(args.log_file) if args.log_file else None
    configure_logging(verbose=args.verbose, log_file=log_file)

    settings = CodegenSettings()
    if args.config is not None:
        try:
            settings = load_settings(Path(args.config))
        except SettingsError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1

    try:
        model = load_model(Path(args.model))
        files = generate(model, settings)
    except (ModelLoadError, CodegenError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    output_dir = Path(args.output_dir)
    if output_dir.exists() and not output_dir.is_dir():
        print(f"Error: output path '{output_dir}' is not a directory.", file=sys.stderr)
        return 1
    output_dir.mkdir(parents=True, exist_ok=True)

    # Files are written only once every file has been generated.
    for filename, text in files.items():
        target = output_dir / filename
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
        print(f"Wrote '{target}'.")
    if not files:
        print("No shapes to generate.")
    return 0


def _cmd_closure(args: argparse.Namespace) -> int:
    """Handle the closure subcommand."""
    try:
        model = load_model(Path(args.model))
        closure = compute_closure(model)
        synthesized = synthesize_service(model)
    except (ModelLoadError, CodegenError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(f"Top-level shapes ({len(closure)}):")
    for shape in closure:
        print(f"  {shape.id} ({shape.type.value})")

    service = synthesized.expect_shape(SYNTHETIC_SERVICE_ID)
    print(f"Synthetic operations ({len(service.operations)}):")
    for operation_id in service.operations:
        print(f"  {operation_id}")
    return 0
