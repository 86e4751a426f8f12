"""Exception types raised while collecting answers and generating projects."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


class GeneratorError(RuntimeError):
    """Base class for every failure reported by the generator."""


class InputAborted(GeneratorError):
    """Raised when the user cancels the questionnaire."""

    def __init__(self, message: str = "questionnaire cancelled by user") -> None:
        super().__init__(message)


class FilesystemError(GeneratorError):
    """Raised when a planned directory or file operation fails."""

    def __init__(self, path: str | Path, cause: OSError) -> None:
        self.path = Path(path)
        self.cause = cause
        reason = cause.strerror or str(cause)
        super().__init__(f"{self.path}: {reason}")


class DependencyResolutionFailure(GeneratorError):
    """Raised when the registry cannot report a version for one package."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"could not resolve version for '{name}': {reason}")


class PackageManagerError(GeneratorError):
    """Raised when an external package-manager command fails."""

    def __init__(
        self,
        command: Sequence[str],
        returncode: int | None,
        stderr: str = "",
    ) -> None:
        self.command = tuple(command)
        self.returncode = returncode
        self.stderr = stderr.strip()
        detail = self.stderr or "no output"
        status = "could not be started" if returncode is None else f"exited with {returncode}"
        super().__init__(f"`{' '.join(self.command)}` {status}: {detail}")


class InstallCommandFailure(PackageManagerError):
    """Raised when the dependency install command fails."""


__all__ = [
    "DependencyResolutionFailure",
    "FilesystemError",
    "GeneratorError",
    "InputAborted",
    "InstallCommandFailure",
    "PackageManagerError",
]
