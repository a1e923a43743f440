"""Command-line interface for javadecl."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from javadecl.config import load_config
from javadecl.errors import DeclarationError
from javadecl.pipeline import run

logger = logging.getLogger("javadecl")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="javadecl",
        description="Generate TypeScript declarations for Java classes and everything they reference.",
    )
    parser.add_argument(
        "output",
        type=Path,
        help="Directory to write the generated .ts files to",
    )
    parser.add_argument(
        "classnames",
        nargs="+",
        metavar="classname",
        help="The fully qualified class name(s) to convert",
    )
    parser.add_argument(
        "-cp",
        "--classpath",
        action="append",
        default=[],
        help="Classpath entries to search (may be repeated)",
    )
    parser.add_argument(
        "--sourcepath",
        action="append",
        default=[],
        help="Java source roots to read before falling back to javap (may be repeated)",
    )
    parser.add_argument(
        "--javap",
        default=None,
        help="Path to the javap executable (default: search PATH)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose (debug) output",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only report errors",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.WARNING, format="%(message)s")
    if args.verbose:
        logger.setLevel(logging.DEBUG)
    elif not args.quiet:
        logger.setLevel(logging.INFO)

    try:
        config = load_config(Path.cwd())
        config.classpath = args.classpath + config.classpath
        config.sourcepath = args.sourcepath + config.sourcepath
        if args.javap:
            config.javap = args.javap

        logger.info(
            "Converting classes %s to typescript and saving result to %s",
            ", ".join(args.classnames),
            args.output,
        )
        run(
            args.classnames,
            args.output,
            config,
            progress=lambda name: logger.info("Converting class %s", name),
        )
    except DeclarationError as e:
        logger.error("Failed to convert classes: %s", e)
        sys.exit(1)
