"""Turn an :class:`AnswerSet` into a :class:`GenerationPlan`.

Planning is a pure function: it never touches the disk or the network, and the
same answers always produce an identical plan. Each optional feature is a row
in :data:`FEATURE_RULES`; the planner folds the rows enabled by the answers
into the dependency lists and the entry point instead of branching on every
language and toggle pair.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Mapping

from . import boilerplate
from .models import AnswerSet, FileOp, GenerationPlan, Language
from .template import TemplateRenderer

__all__ = [
    "BASE_DEV_DEPS",
    "BASE_RUNTIME_DEPS",
    "FEATURE_RULES",
    "FeatureRule",
    "SOURCE_FOLDERS",
    "TYPESCRIPT_TOOLCHAIN",
    "plan",
]


BASE_RUNTIME_DEPS = ("express",)
BASE_DEV_DEPS = ("nodemon",)
TYPESCRIPT_TOOLCHAIN = ("typescript", "@types/express", "@types/node", "ts-node")
SOURCE_FOLDERS = ("controllers", "middlewares", "models", "routes", "tests", "lib", "utils")


@dataclass(frozen=True, slots=True)
class FeatureRule:
    """What one boolean answer contributes to the generated project."""

    toggle: str
    runtime_deps: tuple[str, ...] = ()
    typescript_dev_deps: tuple[str, ...] = ()
    imports: Mapping[Language, tuple[str, ...]] = field(default_factory=dict)
    setup: Mapping[Language, tuple[str, ...]] = field(default_factory=dict)

    def enabled(self, answers: AnswerSet) -> bool:
        return bool(getattr(answers, self.toggle))


# Order matters: it fixes the order of imports, middleware and dependencies.
FEATURE_RULES: tuple[FeatureRule, ...] = (
    FeatureRule(
        toggle="env_file",
        runtime_deps=("dotenv",),
        imports={
            Language.JAVASCRIPT: ("require('dotenv').config();",),
            Language.TYPESCRIPT: ("import dotenv from 'dotenv';",),
        },
        setup={
            Language.TYPESCRIPT: ("dotenv.config(); // Load environment variables from .env",),
        },
    ),
    FeatureRule(
        toggle="enable_cors",
        runtime_deps=("cors",),
        typescript_dev_deps=("@types/cors",),
        imports={
            Language.JAVASCRIPT: ("const cors = require('cors');",),
            Language.TYPESCRIPT: ("import cors from 'cors';",),
        },
        setup={
            Language.JAVASCRIPT: ("app.use(cors()); // Enable CORS",),
            Language.TYPESCRIPT: ("app.use(cors()); // Enable CORS",),
        },
    ),
    FeatureRule(
        toggle="morgan_logging",
        runtime_deps=("morgan",),
        typescript_dev_deps=("@types/morgan",),
        imports={
            Language.JAVASCRIPT: ("const morgan = require('morgan');",),
            Language.TYPESCRIPT: ("import morgan from 'morgan';",),
        },
        setup={
            Language.JAVASCRIPT: ("app.use(morgan('dev')); // Log requests",),
            Language.TYPESCRIPT: ("app.use(morgan('dev')); // Log requests",),
        },
    ),
)

_EXPRESS_IMPORT = {
    Language.JAVASCRIPT: "const express = require('express');",
    Language.TYPESCRIPT: "import express from 'express';",
}

_SCRIPTS = {
    Language.JAVASCRIPT: {"dev": "nodemon src/app.js", "watch": ""},
    Language.TYPESCRIPT: {"dev": "nodemon src/app.ts", "watch": "tsc -w"},
}


def _unique(items: list[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(items))


def _render_entry_point(
    renderer: TemplateRenderer,
    language: Language,
    rules: tuple[FeatureRule, ...],
) -> str:
    imports = [_EXPRESS_IMPORT[language]]
    setup: list[str] = []
    for rule in rules:
        imports.extend(rule.imports.get(language, ()))
        setup.extend(rule.setup.get(language, ()))

    return renderer.render_string(
        boilerplate.APP_TEMPLATE,
        {"imports": imports, "setup": setup, "export": boilerplate.EXPORT_LINES[language]},
    )


def _render_dockerfile(renderer: TemplateRenderer, answers: AnswerSet) -> str:
    environment: list[str] = []
    if answers.env_file:
        environment = ["# Run in production mode", "ENV NODE_ENV=production", ""]
    return renderer.render_string(boilerplate.DOCKERFILE_TEMPLATE, {"environment": environment})


def plan(answers: AnswerSet, renderer: TemplateRenderer | None = None) -> GenerationPlan:
    """Build the generation plan for ``answers``."""

    renderer = renderer or TemplateRenderer()
    language = answers.language
    extension = language.extension
    typescript = language is Language.TYPESCRIPT
    active = tuple(rule for rule in FEATURE_RULES if rule.enabled(answers))

    runtime_deps = list(BASE_RUNTIME_DEPS)
    dev_deps = list(BASE_DEV_DEPS)
    if typescript:
        dev_deps.extend(TYPESCRIPT_TOOLCHAIN)
    for rule in active:
        runtime_deps.extend(rule.runtime_deps)
        if typescript:
            dev_deps.extend(rule.typescript_dev_deps)

    root = PurePosixPath(answers.project_name)
    src = root / "src"
    operations = [FileOp.mkdir(root), FileOp.mkdir(src)]
    operations.extend(FileOp.mkdir(src / folder) for folder in SOURCE_FOLDERS)

    # The error handler files are generated whatever basic_error_handler says.
    # TODO: gate them on that answer once its intended behaviour is decided.
    operations.append(
        FileOp.write(src / "utils" / f"errorHandler.{extension}", boilerplate.ERROR_HANDLER[language])
    )
    operations.append(FileOp.write(src / f"app.{extension}", _render_entry_point(renderer, language, active)))
    operations.append(
        FileOp.write(src / "middlewares" / f"error.{extension}", boilerplate.ERROR_MIDDLEWARE[language])
    )

    if answers.env_file:
        operations.append(FileOp.write(root / ".env", boilerplate.ENV_FILE))
    if typescript:
        operations.append(FileOp.write(root / "tsconfig.json", boilerplate.TSCONFIG))
    if answers.docker:
        operations.append(FileOp.write(root / "Dockerfile", _render_dockerfile(renderer, answers)))

    return GenerationPlan(
        root=root.as_posix(),
        operations=tuple(operations),
        runtime_deps=_unique(runtime_deps),
        dev_deps=_unique(dev_deps),
        scripts=dict(_SCRIPTS[language]),
    )
