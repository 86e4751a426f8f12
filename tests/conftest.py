from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, Mapping, Sequence

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from expressgen.config import GeneratorConfig  # noqa: E402
from expressgen.models import AnswerSet, Language  # noqa: E402
from expressgen.npm import CommandResult, NpmClient  # noqa: E402


class FakeNpm:
    """Scripted stand-in for the npm executable.

    ``versions`` maps package names to the version ``npm view`` reports; names
    missing from it fail like an unknown package. ``failures`` maps a
    subcommand (``"install"``, ``"init"``) to the exit status it returns.
    """

    def __init__(
        self,
        versions: Mapping[str, str] | None = None,
        *,
        failures: Mapping[str, int] | None = None,
        raise_for: Mapping[str, BaseException] | None = None,
    ) -> None:
        self.versions = dict(versions or {})
        self.failures = dict(failures or {})
        self.raise_for = dict(raise_for or {})
        self.calls: list[tuple[tuple[str, ...], Path | None, float | None]] = []

    def commands(self, subcommand: str) -> list[tuple[str, ...]]:
        return [args for args, _, _ in self.calls if args[1] == subcommand]

    async def __call__(
        self,
        args: Sequence[str],
        cwd: Path | None = None,
        timeout: float | None = None,
    ) -> CommandResult:
        args = tuple(args)
        self.calls.append((args, cwd, timeout))
        subcommand = args[1]

        key = args[2] if subcommand == "view" else subcommand
        if key in self.raise_for:
            raise self.raise_for[key]

        if subcommand == "view":
            name = args[2]
            if name not in self.versions:
                return CommandResult(1, "", f"npm ERR! 404 '{name}' is not in this registry.")
            return CommandResult(0, f"{self.versions[name]}\n", "")

        code = self.failures.get(subcommand, 0)
        if code:
            return CommandResult(code, "", f"npm ERR! {subcommand} failed")
        if subcommand == "init" and cwd is not None:
            (cwd / "package.json").write_text(
                '{\n  "name": "%s",\n  "version": "1.0.0",\n  "scripts": {\n    "test": "echo"\n  }\n}\n'
                % cwd.name,
                encoding="utf-8",
            )
        return CommandResult(0, "", "")


DEFAULT_VERSIONS = {
    "express": "4.21.1",
    "cors": "2.8.5",
    "dotenv": "16.4.5",
    "morgan": "1.10.0",
    "nodemon": "3.1.7",
    "typescript": "5.6.3",
    "ts-node": "10.9.2",
    "@types/express": "5.0.0",
    "@types/node": "22.7.5",
    "@types/cors": "2.8.17",
    "@types/morgan": "1.9.9",
}


@pytest.fixture()
def fake_npm() -> FakeNpm:
    return FakeNpm(DEFAULT_VERSIONS)


@pytest.fixture()
def make_npm() -> Callable[..., FakeNpm]:
    return FakeNpm


@pytest.fixture()
def npm_client(fake_npm: FakeNpm) -> NpmClient:
    return NpmClient(GeneratorConfig(resolve_timeout=5.0), runner=fake_npm)


@pytest.fixture()
def demo_answers() -> AnswerSet:
    return AnswerSet(
        project_name="demo",
        language=Language.JAVASCRIPT,
        enable_cors=True,
        basic_error_handler=True,
        env_file=True,
        morgan_logging=False,
        docker=False,
    )
