from __future__ import annotations

import asyncio
import json
from pathlib import Path

import pytest

from expressgen.errors import FilesystemError
from expressgen.executor import PlanExecutor
from expressgen.models import AnswerSet, FileOp, GenerationPlan, Language
from expressgen.npm import NpmClient
from expressgen.planner import plan


@pytest.fixture()
def executor(npm_client: NpmClient) -> PlanExecutor:
    return PlanExecutor(npm_client)


def test_apply_creates_expected_structure(tmp_path: Path, executor: PlanExecutor, demo_answers: AnswerSet):
    report = executor.apply(plan(demo_answers), tmp_path)

    project_dir = tmp_path.resolve() / "demo"
    assert report.project_dir == project_dir
    for folder in ("controllers", "middlewares", "models", "routes", "tests", "lib", "utils"):
        assert (project_dir / "src" / folder).is_dir()
    assert (project_dir / "src" / "app.js").read_text(encoding="utf-8").startswith(
        "const express = require('express');"
    )
    assert (project_dir / ".env").read_text(encoding="utf-8") == "PORT=3000\nNODE_ENV=development\n"
    assert not (project_dir / "Dockerfile").exists()
    assert len(report.written_files) == 4


def test_reapplying_is_idempotent(tmp_path: Path, executor: PlanExecutor):
    generation_plan = plan(AnswerSet(project_name="demo", language=Language.TYPESCRIPT, docker=True))
    executor.apply(generation_plan, tmp_path)
    snapshot = {
        path: path.read_bytes() for path in (tmp_path / "demo").rglob("*") if path.is_file()
    }

    (tmp_path / "demo" / "src" / "app.ts").write_text("edited", encoding="utf-8")
    executor.apply(generation_plan, tmp_path)

    assert snapshot == {
        path: path.read_bytes() for path in (tmp_path / "demo").rglob("*") if path.is_file()
    }


def test_file_in_place_of_directory_aborts(tmp_path: Path, executor: PlanExecutor, demo_answers: AnswerSet):
    (tmp_path / "demo").mkdir()
    (tmp_path / "demo" / "src").write_text("not a directory", encoding="utf-8")

    with pytest.raises(FilesystemError) as excinfo:
        executor.apply(plan(demo_answers), tmp_path)

    assert excinfo.value.path == tmp_path.resolve() / "demo" / "src"
    assert not (tmp_path / "demo" / "src" / "app.js").exists()


def test_failure_keeps_earlier_operations(tmp_path: Path, executor: PlanExecutor):
    generation_plan = GenerationPlan(
        root="demo",
        operations=(
            FileOp.mkdir("demo"),
            FileOp.write("demo/first.txt", "one"),
            FileOp.write("demo/missing/second.txt", "two"),
            FileOp.write("demo/third.txt", "three"),
        ),
    )

    with pytest.raises(FilesystemError):
        executor.apply(generation_plan, tmp_path)

    assert (tmp_path / "demo" / "first.txt").read_text(encoding="utf-8") == "one"
    assert not (tmp_path / "demo" / "third.txt").exists()


def test_execute_writes_files_before_installing(tmp_path: Path, fake_npm, demo_answers: AnswerSet):
    observed: list[tuple[str, bool]] = []

    async def runner(args, cwd=None, timeout=None):
        if args[1] in {"install", "init"}:
            observed.append((args[1], (tmp_path / "demo" / ".env").exists()))
        return await fake_npm(args, cwd, timeout)

    executor = PlanExecutor(NpmClient(runner=runner))
    report = asyncio.run(executor.execute(plan(demo_answers), tmp_path))

    assert observed == [("init", True), ("install", True), ("install", True)]
    runtime_install, dev_install = fake_npm.commands("install")
    assert "--save-dev" not in runtime_install
    assert dev_install[:3] == ("npm", "install", "--save-dev")
    assert [dep.name for dep in report.installed] == ["express", "dotenv", "cors"]
    assert [dep.name for dep in report.installed_dev] == ["nodemon"]
    assert report.ok


def test_execute_merges_scripts_into_manifest(tmp_path: Path, executor: PlanExecutor, demo_answers: AnswerSet):
    asyncio.run(executor.execute(plan(demo_answers), tmp_path))

    manifest = json.loads((tmp_path / "demo" / "package.json").read_text(encoding="utf-8"))
    assert manifest["scripts"]["dev"] == "nodemon src/app.js"
    assert manifest["scripts"]["watch"] == ""
    assert manifest["scripts"]["test"] == "echo"


def test_execute_without_install_skips_npm(tmp_path: Path, fake_npm, executor: PlanExecutor, demo_answers: AnswerSet):
    report = asyncio.run(executor.execute(plan(demo_answers), tmp_path, install=False))

    assert fake_npm.calls == []
    assert report.installed == [] and report.installed_dev == []
    manifest = json.loads((tmp_path / "demo" / "package.json").read_text(encoding="utf-8"))
    assert manifest["name"] == "demo"
    assert manifest["scripts"] == {"dev": "nodemon src/app.js", "watch": ""}


def test_install_failure_is_a_warning(tmp_path: Path, make_npm, demo_answers: AnswerSet):
    fake = make_npm({"express": "4.21.1"}, failures={"install": 1})
    executor = PlanExecutor(NpmClient(runner=fake))

    report = asyncio.run(executor.execute(plan(demo_answers), tmp_path))

    assert not report.ok
    assert len(report.warnings) == 2
    assert "Installing dependencies failed" in report.warnings[0]
    assert "Installing dev dependencies failed" in report.warnings[1]
    assert (tmp_path / "demo" / "src" / "app.js").exists()


def test_init_failure_falls_back_to_default_manifest(tmp_path: Path, make_npm, demo_answers: AnswerSet):
    fake = make_npm({"express": "4.21.1"}, failures={"init": 1})
    executor = PlanExecutor(NpmClient(runner=fake))

    report = asyncio.run(executor.execute(plan(demo_answers), tmp_path))

    assert any("package.json" in warning for warning in report.warnings)
    manifest = json.loads((tmp_path / "demo" / "package.json").read_text(encoding="utf-8"))
    assert manifest["scripts"]["dev"] == "nodemon src/app.js"
    assert len(fake.commands("install")) == 2


def test_existing_manifest_skips_init(tmp_path: Path, fake_npm, executor: PlanExecutor, demo_answers: AnswerSet):
    asyncio.run(executor.execute(plan(demo_answers), tmp_path))
    asyncio.run(executor.execute(plan(demo_answers), tmp_path))
    assert len(fake_npm.commands("init")) == 1


def test_undecodable_manifest_is_a_filesystem_error(tmp_path: Path, executor: PlanExecutor, demo_answers: AnswerSet):
    (tmp_path / "demo").mkdir()
    (tmp_path / "demo" / "package.json").write_bytes(b'{"name": "\xff"}')
    with pytest.raises(FilesystemError):
        asyncio.run(executor.execute(plan(demo_answers), tmp_path, install=False))
