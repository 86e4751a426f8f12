"""Apply a :class:`GenerationPlan` to disk and install its dependencies."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import cast

from .errors import FilesystemError, PackageManagerError
from .manifest import MANIFEST_NAME, update_scripts
from .models import FileOp, FileOpKind, GenerationPlan, ResolvedDependency
from .npm import NpmClient

__all__ = ["ExecutionReport", "PlanExecutor"]


LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class ExecutionReport:
    """Outcome of one plan execution."""

    project_dir: Path
    created_dirs: list[Path] = field(default_factory=list)
    written_files: list[Path] = field(default_factory=list)
    installed: list[ResolvedDependency] = field(default_factory=list)
    installed_dev: list[ResolvedDependency] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.warnings


@dataclass(slots=True)
class PlanExecutor:
    """Write a plan beneath a base directory, then run npm against the result."""

    npm: NpmClient

    def __init__(self, npm: NpmClient | None = None) -> None:
        self.npm = npm or NpmClient()

    def apply(self, plan: GenerationPlan, base_dir: str | Path) -> ExecutionReport:
        """Apply every file operation of ``plan`` in order.

        Directory creation tolerates existing directories and writes overwrite
        existing files. The first failing operation raises
        :class:`FilesystemError`; operations already applied are left in place.
        """

        base_path = Path(base_dir).expanduser().resolve()
        report = ExecutionReport(project_dir=base_path / plan.root)

        for op in plan.operations:
            destination = base_path / op.path
            try:
                self._apply_one(op, destination)
            except OSError as exc:
                raise FilesystemError(destination, exc) from exc

            if op.kind is FileOpKind.MKDIR:
                report.created_dirs.append(destination)
            else:
                report.written_files.append(destination)
            LOGGER.debug("%s %s", op.kind.value, destination)

        return report

    @staticmethod
    def _apply_one(op: FileOp, destination: Path) -> None:
        if op.kind is FileOpKind.MKDIR:
            destination.mkdir(exist_ok=True)
            return
        destination.write_text(cast(str, op.content), encoding="utf-8")

    async def execute(
        self,
        plan: GenerationPlan,
        base_dir: str | Path,
        *,
        install: bool = True,
    ) -> ExecutionReport:
        """Write ``plan``, prepare ``package.json`` and install dependencies.

        Every file is written before npm runs. Runtime dependencies are
        installed before dev dependencies. npm failures are recorded in
        :attr:`ExecutionReport.warnings` and never undo generated files.
        """

        report = self.apply(plan, base_dir)
        project_dir = report.project_dir

        if install and not (project_dir / MANIFEST_NAME).exists():
            try:
                await self.npm.init(project_dir)
            except PackageManagerError as exc:
                LOGGER.warning("npm init failed: %s", exc)
                report.warnings.append(f"Initializing {MANIFEST_NAME} failed: {exc}")
        update_scripts(project_dir, plan.scripts)

        if not install:
            return report

        try:
            report.installed = await self.npm.install(plan.runtime_deps, project_dir)
        except PackageManagerError as exc:
            LOGGER.warning("installing dependencies failed: %s", exc)
            report.warnings.append(f"Installing dependencies failed: {exc}")

        try:
            report.installed_dev = await self.npm.install(plan.dev_deps, project_dir, dev=True)
        except PackageManagerError as exc:
            LOGGER.warning("installing dev dependencies failed: %s", exc)
            report.warnings.append(f"Installing dev dependencies failed: {exc}")

        return report
