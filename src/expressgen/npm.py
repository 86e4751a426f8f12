"""Async wrapper around the npm commands the generator depends on."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Awaitable, Callable, Iterable, Sequence

from .config import GeneratorConfig
from .errors import DependencyResolutionFailure, InstallCommandFailure, PackageManagerError
from .models import ResolvedDependency

__all__ = ["CommandResult", "CommandRunner", "NpmClient", "run_command"]


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Captured outcome of an external command."""

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


CommandRunner = Callable[[Sequence[str], Path | None, float | None], Awaitable[CommandResult]]


async def run_command(
    args: Sequence[str],
    cwd: Path | None = None,
    timeout: float | None = None,
) -> CommandResult:
    """Run ``args`` without a shell and capture its output.

    Raises :class:`TimeoutError` after killing the process when ``timeout``
    elapses, and :class:`OSError` when the executable cannot be started.
    """

    proc = await asyncio.create_subprocess_exec(
        *args,
        cwd=str(cwd) if cwd is not None else None,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    try:
        stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        proc.kill()
        await proc.wait()
        raise TimeoutError(f"`{' '.join(args)}` timed out after {timeout}s") from None

    return CommandResult(
        returncode=proc.returncode if proc.returncode is not None else -1,
        stdout=stdout.decode(errors="replace") if stdout else "",
        stderr=stderr.decode(errors="replace") if stderr else "",
    )


class NpmClient:
    """Resolve package versions and install them with npm."""

    def __init__(
        self,
        config: GeneratorConfig | None = None,
        *,
        runner: CommandRunner | None = None,
    ) -> None:
        self.config = config or GeneratorConfig()
        self._run = runner or run_command

    def _command(self, *args: str) -> list[str]:
        return [self.config.npm_executable, *args]

    async def _query_version(self, name: str) -> str:
        command = self._command("view", name, "version")
        try:
            result = await self._run(command, None, self.config.resolve_timeout)
        except TimeoutError as exc:
            raise DependencyResolutionFailure(name, str(exc)) from exc
        except OSError as exc:
            raise DependencyResolutionFailure(name, exc.strerror or str(exc)) from exc

        if not result.ok:
            raise DependencyResolutionFailure(
                name, result.stderr.strip() or f"npm exited with {result.returncode}"
            )

        lines = [line.strip() for line in result.stdout.splitlines() if line.strip()]
        if not lines:
            raise DependencyResolutionFailure(name, "registry returned no version")
        return lines[-1].strip("'\"")

    async def resolve(self, name: str) -> str | None:
        """Return the latest published version of ``name``, or ``None``.

        Failures are logged and never propagate, so one unknown package cannot
        abort a batch.
        """

        try:
            version = await self._query_version(name)
        except DependencyResolutionFailure as exc:
            LOGGER.warning("%s", exc)
            return None
        LOGGER.debug("resolved %s to %s", name, version)
        return version

    async def resolve_all(self, names: Iterable[str]) -> list[ResolvedDependency]:
        """Resolve every name concurrently, preserving the input order."""

        limit = asyncio.Semaphore(self.config.max_concurrency)

        async def _bounded(name: str) -> ResolvedDependency:
            async with limit:
                return ResolvedDependency(name=name, version=await self.resolve(name))

        return list(await asyncio.gather(*(_bounded(name) for name in names)))

    async def install(
        self,
        names: Iterable[str],
        target_dir: str | Path,
        *,
        dev: bool = False,
    ) -> list[ResolvedDependency]:
        """Install ``names`` into ``target_dir`` pinned to their latest versions.

        Packages whose version cannot be resolved are installed unpinned. Raises
        :class:`InstallCommandFailure` when npm cannot be started or exits with
        a non-zero status; the command is never retried.
        """

        packages = list(dict.fromkeys(names))
        if not packages:
            return []

        resolved = await self.resolve_all(packages)
        args = ["install"]
        if dev:
            args.append("--save-dev")
        args.extend(dependency.specifier for dependency in resolved)
        command = self._command(*args)

        LOGGER.info("running %s in %s", " ".join(command), target_dir)
        try:
            result = await self._run(command, Path(target_dir), self.config.install_timeout)
        except TimeoutError as exc:
            raise InstallCommandFailure(command, None, str(exc)) from exc
        except OSError as exc:
            raise InstallCommandFailure(command, None, exc.strerror or str(exc)) from exc

        if not result.ok:
            raise InstallCommandFailure(command, result.returncode, result.stderr)
        return resolved

    async def init(self, target_dir: str | Path) -> None:
        """Create a default ``package.json`` in ``target_dir`` with ``npm init -y``."""

        command = self._command("init", "-y")
        try:
            result = await self._run(command, Path(target_dir), self.config.install_timeout)
        except TimeoutError as exc:
            raise PackageManagerError(command, None, str(exc)) from exc
        except OSError as exc:
            raise PackageManagerError(command, None, exc.strerror or str(exc)) from exc

        if not result.ok:
            raise PackageManagerError(command, result.returncode, result.stderr)
