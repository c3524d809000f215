"""CLI entry point for abaqusreader."""

import argparse
import logging
import sys
from pathlib import Path

from abaqusreader import __version__


def _setup_logging(verbose: bool, no_color: bool):
    from rich.console import Console
    from rich.logging import RichHandler

    console = Console(stderr=True, force_terminal=not no_color)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=verbose)],
    )


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="abaqusreader",
        description="Parse an ABAQUS .inp input file and summarize its mesh or model",
    )
    parser.add_argument(
        "input_file",
        type=Path,
        help="Path to the ABAQUS .inp file",
    )
    parser.add_argument(
        "--model",
        action="store_true",
        help="Parse materials, sections, boundary conditions and steps as well",
    )
    parser.add_argument(
        "--surface",
        action="append",
        default=[],
        metavar="NAME",
        help="Materialize the named surface into face elements (repeatable)",
    )
    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=None,
        help="Write JSON report to file",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show detailed parsing progress",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored terminal output",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    args = parser.parse_args(argv)
    _setup_logging(args.verbose, args.no_color)

    from rich.console import Console
    from rich.markup import escape
    console = Console(force_terminal=not args.no_color, highlight=False)

    if not args.input_file.is_file():
        console.print(f"[bold red]Error:[/bold red] '{escape(str(args.input_file))}' is not a file")
        sys.exit(1)

    from abaqusreader.analysis.surfaces import create_surface_elements
    from abaqusreader.errors import AbaqusReaderError
    from abaqusreader.reader import parse_mesh, parse_model
    from abaqusreader.report.json_report import write_json_report
    from abaqusreader.report.terminal import render_mesh, render_model, render_surfaces

    try:
        if args.model:
            result = parse_model(args.input_file)
            mesh = result.mesh
            render_model(result, no_color=args.no_color)
        else:
            result = mesh = parse_mesh(args.input_file, verbose=args.verbose)
            render_mesh(mesh, title=args.input_file.name, no_color=args.no_color)

        if args.surface:
            surfaces = {name: create_surface_elements(mesh, name) for name in args.surface}
            render_surfaces(surfaces, no_color=args.no_color)
    except AbaqusReaderError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        sys.exit(1)

    if args.output:
        write_json_report(result, args.output)
        console.print(f"\n[dim]JSON report saved to: {args.output}[/dim]")
