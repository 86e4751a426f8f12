"""Interactive generator for Express backend project skeletons.

Answers to a short questionnaire are turned into a deterministic generation
plan by :func:`plan`; :class:`PlanExecutor` writes the plan to disk and
installs the pinned npm dependencies through :class:`NpmClient`.
"""

from __future__ import annotations

__version__ = "1.0.0"

from .collector import AnswerCollector, RichPrompter
from .config import GeneratorConfig
from .errors import (
    DependencyResolutionFailure,
    FilesystemError,
    GeneratorError,
    InputAborted,
    InstallCommandFailure,
    PackageManagerError,
)
from .executor import ExecutionReport, PlanExecutor
from .models import AnswerSet, FileOp, FileOpKind, GenerationPlan, Language, ResolvedDependency
from .npm import NpmClient
from .planner import plan
from .template import TemplateRenderer, TemplateRenderingError

__all__ = [
    "AnswerCollector",
    "AnswerSet",
    "DependencyResolutionFailure",
    "ExecutionReport",
    "FileOp",
    "FileOpKind",
    "FilesystemError",
    "GenerationPlan",
    "GeneratorConfig",
    "GeneratorError",
    "InputAborted",
    "InstallCommandFailure",
    "Language",
    "NpmClient",
    "PackageManagerError",
    "PlanExecutor",
    "ResolvedDependency",
    "RichPrompter",
    "TemplateRenderer",
    "TemplateRenderingError",
    "plan",
]
