"""Runtime settings for the generator and its package-manager calls."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

ENV_PREFIX = "EXPRESSGEN_"


def _parse_timeout(raw: str, variable: str) -> float | None:
    value = raw.strip().lower()
    if value in {"", "none", "0"}:
        return None
    try:
        seconds = float(value)
    except ValueError as exc:
        raise ValueError(f"{variable} must be a number of seconds, got '{raw}'") from exc
    if seconds < 0:
        raise ValueError(f"{variable} must not be negative")
    return seconds


@dataclass(slots=True)
class GeneratorConfig:
    """Settings controlling how the generator talks to the package manager.

    Attributes
    ----------
    npm_executable:
        Name or path of the npm binary used for ``view``, ``init`` and
        ``install``.
    resolve_timeout:
        Seconds allowed for each version lookup. ``None`` disables the limit.
    install_timeout:
        Seconds allowed for each ``npm init`` and ``npm install`` command.
        ``None`` waits for npm to finish on its own.
    max_concurrency:
        Upper bound on simultaneous version lookups within one install.
    """

    npm_executable: str = "npm"
    resolve_timeout: float | None = 30.0
    install_timeout: float | None = None
    max_concurrency: int = 8

    def __post_init__(self) -> None:
        if not self.npm_executable.strip():
            raise ValueError("npm_executable must not be empty")
        if self.max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "GeneratorConfig":
        """Build a :class:`GeneratorConfig` from ``EXPRESSGEN_*`` variables.

        Unset variables fall back to the dataclass defaults.
        """

        env = os.environ if environ is None else environ
        defaults = cls()
        npm_executable = env.get(f"{ENV_PREFIX}NPM", defaults.npm_executable)

        resolve_timeout = defaults.resolve_timeout
        if f"{ENV_PREFIX}RESOLVE_TIMEOUT" in env:
            resolve_timeout = _parse_timeout(
                env[f"{ENV_PREFIX}RESOLVE_TIMEOUT"], f"{ENV_PREFIX}RESOLVE_TIMEOUT"
            )

        install_timeout = defaults.install_timeout
        if f"{ENV_PREFIX}INSTALL_TIMEOUT" in env:
            install_timeout = _parse_timeout(
                env[f"{ENV_PREFIX}INSTALL_TIMEOUT"], f"{ENV_PREFIX}INSTALL_TIMEOUT"
            )

        max_concurrency = defaults.max_concurrency
        raw_concurrency = env.get(f"{ENV_PREFIX}MAX_CONCURRENCY")
        if raw_concurrency is not None:
            try:
                max_concurrency = int(raw_concurrency)
            except ValueError as exc:
                raise ValueError(
                    f"{ENV_PREFIX}MAX_CONCURRENCY must be an integer, got '{raw_concurrency}'"
                ) from exc

        return cls(
            npm_executable=npm_executable,
            resolve_timeout=resolve_timeout,
            install_timeout=install_timeout,
            max_concurrency=max_concurrency,
        )
