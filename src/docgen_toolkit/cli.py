"""
Module: cli

Purpose:
    Command-line entry point (`docgen`).

Commands:
    render TEMPLATE [--data FILE | --sample-data] [--format ...] [-o DIR]
        Build a document from a template JSON file
    bindings TEMPLATE
        List the bindings a template uses

Exit codes:
    0 success, 1 build/render failure, 2 invalid input
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from docgen_toolkit import __version__
from docgen_toolkit.binding import extract_bindings
from docgen_toolkit.config import DEFAULT_DPI, OUTPUT_FORMATS, BuildConfig
from docgen_toolkit.controller import BuildError, build_document
from docgen_toolkit.core.schemas.validator import ValidationError
from docgen_toolkit.core.utils.serialization import load_data_json, load_template_json
from docgen_toolkit.sample_data import generate_sample_data, get_sample_value

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docgen",
        description="Render data-bound document templates to PDF, HTML or JSON",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Increase log verbosity (-v info, -vv debug)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    render = subparsers.add_parser("render", help="Build a document from a template")
    render.add_argument("template", type=Path, help="Template JSON file")
    source = render.add_mutually_exclusive_group()
    source.add_argument("--data", "-d", type=Path, help="Data payload JSON file")
    source.add_argument("--sample-data", action="store_true",
                        help="Use the built-in invoice sample payload")
    render.add_argument("--format", "-f", dest="formats", nargs="+",
                        choices=OUTPUT_FORMATS, default=["pdf"],
                        help="Output format(s) (default: pdf)")
    render.add_argument("--output", "-o", type=Path, default=Path("output"),
                        help="Output directory (default: ./output)")
    render.add_argument("--name", dest="file_stem", default=None,
                        help="Output file name without suffix")
    render.add_argument("--dpi", type=int, default=DEFAULT_DPI,
                        help=f"Pixel density for PDF output (default: {DEFAULT_DPI})")
    render.add_argument("--margin-guides", action="store_true",
                        help="Outline the page margin in HTML output")
    render.add_argument("--strict", action="store_true",
                        help="Also validate the template against the JSON Schema")
    render.set_defaults(handler=_cmd_render)

    bindings = subparsers.add_parser("bindings", help="List bindings used by a template")
    bindings.add_argument("template", type=Path, help="Template JSON file")
    bindings.add_argument("--sample-values", action="store_true",
                          help="Show each binding's value in the sample payload")
    bindings.set_defaults(handler=_cmd_bindings)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    return args.handler(args)


def _cmd_render(args: argparse.Namespace) -> int:
    try:
        template = load_template_json(args.template, strict=args.strict)
        if args.sample_data:
            data = generate_sample_data()
        elif args.data is not None:
            data = load_data_json(args.data)
        else:
            data = None
        config = BuildConfig(
            output_dir=args.output,
            formats=tuple(args.formats),
            dpi=args.dpi,
            file_stem=args.file_stem,
            show_margin_guides=args.margin_guides,
        )
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except ValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        for detail in e.errors:
            print(f"  - {detail}", file=sys.stderr)
        return 2
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    try:
        result = build_document(template, data, config)
    except BuildError as e:
        print(f"Build failed: {e}", file=sys.stderr)
        return 1

    for warning in result.warnings:
        print(f"Warning: {warning}", file=sys.stderr)
    for path in result.outputs.values():
        print(path)
    return 0


def _cmd_bindings(args: argparse.Namespace) -> int:
    try:
        template = load_template_json(args.template)
    except (FileNotFoundError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    for binding in extract_bindings(template.elements):
        if args.sample_values:
            print(f"{binding}\t{get_sample_value(binding)}")
        else:
            print(binding)
    return 0


if __name__ == "__main__":
    sys.exit(main())
