"""Immutable data passed between the collector, planner and executor."""

from __future__ import annotations

from enum import Enum
from pathlib import PurePosixPath
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .naming import validate_project_name


class Language(str, Enum):
    """Source language of the generated project."""

    JAVASCRIPT = "JavaScript"
    TYPESCRIPT = "TypeScript"

    @property
    def extension(self) -> str:
        return "ts" if self is Language.TYPESCRIPT else "js"


class AnswerSet(BaseModel):
    """Answers to the questionnaire; the sole input to planning."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    project_name: str = Field("my-app", description="Directory name of the generated project.")
    language: Language = Field(Language.JAVASCRIPT, description="Source language of the project.")
    enable_cors: bool = Field(True, description="Register the cors middleware.")
    basic_error_handler: bool = Field(True, description="Use a basic error handler.")
    env_file: bool = Field(True, description="Load settings from a .env file with dotenv.")
    morgan_logging: bool = Field(True, description="Log requests with morgan.")
    docker: bool = Field(False, description="Generate a Dockerfile.")

    @field_validator("project_name")
    @classmethod
    def _check_project_name(cls, value: str) -> str:
        return validate_project_name(value)


class FileOpKind(str, Enum):
    """Kinds of filesystem action a plan may contain."""

    MKDIR = "mkdir"
    WRITE_FILE = "write_file"


class FileOp(BaseModel):
    """A single planned filesystem action, relative to the output directory."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: FileOpKind
    path: str = Field(..., description="Relative POSIX path of the directory or file.")
    content: Optional[str] = Field(None, description="File body; only set for writes.")

    @field_validator("path")
    @classmethod
    def _check_path(cls, value: str) -> str:
        path = PurePosixPath(value)
        if not value or path.is_absolute():
            raise ValueError(f"file operation path must be relative, got '{value}'")
        if ".." in path.parts:
            raise ValueError(f"file operation path must not contain '..', got '{value}'")
        return path.as_posix()

    @model_validator(mode="after")
    def _check_content(self) -> "FileOp":
        if self.kind is FileOpKind.WRITE_FILE and self.content is None:
            raise ValueError(f"write_file operation for '{self.path}' requires content")
        if self.kind is FileOpKind.MKDIR and self.content is not None:
            raise ValueError(f"mkdir operation for '{self.path}' must not carry content")
        return self

    @classmethod
    def mkdir(cls, path: PurePosixPath | str) -> "FileOp":
        return cls(kind=FileOpKind.MKDIR, path=str(path))

    @classmethod
    def write(cls, path: PurePosixPath | str, content: str) -> "FileOp":
        return cls(kind=FileOpKind.WRITE_FILE, path=str(path), content=content)

    @property
    def is_write(self) -> bool:
        return self.kind is FileOpKind.WRITE_FILE


class GenerationPlan(BaseModel):
    """Ordered filesystem operations and dependencies for one project."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    root: str = Field(..., description="Relative path of the project root directory.")
    operations: Tuple[FileOp, ...] = Field(default_factory=tuple)
    runtime_deps: Tuple[str, ...] = Field(default_factory=tuple)
    dev_deps: Tuple[str, ...] = Field(default_factory=tuple)
    scripts: Dict[str, str] = Field(default_factory=dict, description="npm scripts merged into package.json.")

    def writes(self) -> Tuple[FileOp, ...]:
        """Return the ``write_file`` operations in plan order."""

        return tuple(op for op in self.operations if op.is_write)

    def find(self, path: str) -> Optional[FileOp]:
        """Return the write operation targeting ``path``, if any."""

        for op in self.operations:
            if op.is_write and op.path == path:
                return op
        return None


class ResolvedDependency(BaseModel):
    """A package name paired with the version the registry reported."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    version: Optional[str] = None

    @property
    def specifier(self) -> str:
        """Argument passed to ``npm install``; unpinned when no version is known."""

        if self.version:
            return f"{self.name}@{self.version}"
        return self.name


__all__ = [
    "AnswerSet",
    "FileOp",
    "FileOpKind",
    "GenerationPlan",
    "Language",
    "ResolvedDependency",
]
