"""Command line interface for the Express project generator."""

from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path
from typing import Sequence

from rich.console import Console
from rich.markup import escape

from . import __version__
from .collector import AnswerCollector, RichPrompter
from .config import GeneratorConfig
from .errors import FilesystemError, InputAborted
from .executor import ExecutionReport, PlanExecutor
from .npm import NpmClient
from .planner import plan


LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="expressgen",
        description="Interactively scaffold an Express backend project",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-d",
        "--directory",
        type=Path,
        default=None,
        help="Directory in which the project folder is created (defaults to the current one)",
    )
    parser.add_argument(
        "--skip-install",
        action="store_true",
        help="Generate files only and do not run npm",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _print_report(console: Console, report: ExecutionReport, installed: bool) -> None:
    if installed:
        if report.installed:
            names = " ".join(dep.specifier for dep in report.installed)
            console.print(f"Installed dependencies: {names}")
        if report.installed_dev:
            names = " ".join(dep.specifier for dep in report.installed_dev)
            console.print(f"Installed dev dependencies: {names}")

    for warning in report.warnings:
        console.print(f"[yellow]warning:[/yellow] {escape(warning)}")
    if report.warnings:
        console.print("Install the dependencies manually with npm once the problem is fixed.")

    console.print(f"\n[green]Project created at {escape(str(report.project_dir))}[/green]")


def main(
    argv: Sequence[str] | None = None,
    *,
    collector: AnswerCollector | None = None,
    executor: PlanExecutor | None = None,
    console: Console | None = None,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    console = console or Console()
    try:
        config = GeneratorConfig.from_env()
    except ValueError as exc:
        console.print(f"[red]Invalid configuration:[/red] {escape(str(exc))}")
        return 1

    collector = collector or AnswerCollector(RichPrompter(console))
    executor = executor or PlanExecutor(NpmClient(config))

    try:
        answers = collector.collect()
    except InputAborted as exc:
        console.print(f"[red]Aborted:[/red] {escape(str(exc))}")
        return 1

    console.print("\nCreating project with the following configuration:\n")
    console.print_json(answers.model_dump_json())

    generation_plan = plan(answers)
    base_dir = args.directory or Path.cwd()
    install = not args.skip_install

    try:
        report = asyncio.run(executor.execute(generation_plan, base_dir, install=install))
    except FilesystemError as exc:
        LOGGER.debug("generation failed", exc_info=True)
        console.print(f"[red]Generating project files failed:[/red] {escape(str(exc))}")
        return 1

    _print_report(console, report, install)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
