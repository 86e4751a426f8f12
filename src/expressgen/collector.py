"""Interactive questionnaire producing an :class:`AnswerSet`."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, Sequence

from rich.console import Console
from rich.prompt import Confirm, Prompt

from .errors import InputAborted
from .models import AnswerSet, Language
from .naming import validate_project_name

__all__ = ["QUESTIONS", "AnswerCollector", "Prompter", "Question", "RichPrompter"]


@dataclass(frozen=True, slots=True)
class Question:
    """One entry of the questionnaire."""

    name: str
    kind: str
    message: str
    default: Any = None
    choices: tuple[str, ...] = ()


QUESTIONS: tuple[Question, ...] = (
    Question("project_name", "text", "Enter your project name", default="my-app"),
    Question(
        "language",
        "choice",
        "Select your preferred language",
        default=Language.JAVASCRIPT.value,
        choices=tuple(language.value for language in Language),
    ),
    Question("enable_cors", "confirm", "Do you want to enable CORS?", default=True),
    Question("basic_error_handler", "confirm", "Do you want to use a basic error handler?", default=True),
    Question("env_file", "confirm", "Do you want to use an environment file?", default=True),
    Question("morgan_logging", "confirm", "Do you want to use Morgan for logging?", default=True),
    Question("docker", "confirm", "Do you want to use Docker for deployment?", default=False),
)


class Prompter(Protocol):
    """Backend that asks a single question and returns the raw answer."""

    def text(self, message: str, default: str) -> str: ...

    def choice(self, message: str, choices: Sequence[str], default: str) -> str: ...

    def confirm(self, message: str, default: bool) -> bool: ...

    def error(self, message: str) -> None: ...


class RichPrompter:
    """Terminal prompter built on :mod:`rich.prompt`."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def text(self, message: str, default: str) -> str:
        return Prompt.ask(message, default=default, console=self.console)

    def choice(self, message: str, choices: Sequence[str], default: str) -> str:
        return Prompt.ask(message, choices=list(choices), default=default, console=self.console)

    def confirm(self, message: str, default: bool) -> bool:
        return Confirm.ask(message, default=default, console=self.console)

    def error(self, message: str) -> None:
        self.console.print(f"[red]{message}[/red]")


class AnswerCollector:
    """Ask :data:`QUESTIONS` in order and validate the answers."""

    def __init__(
        self,
        prompter: Prompter | None = None,
        questions: Sequence[Question] = QUESTIONS,
    ) -> None:
        self.prompter = prompter or RichPrompter()
        self.questions = tuple(questions)

    def _ask(self, question: Question) -> Any:
        if question.kind == "text":
            while True:
                raw = self.prompter.text(question.message, question.default)
                try:
                    return validate_project_name(raw or question.default)
                except ValueError as exc:
                    self.prompter.error(str(exc))
        if question.kind == "choice":
            return self.prompter.choice(question.message, question.choices, question.default)
        if question.kind == "confirm":
            return self.prompter.confirm(question.message, question.default)
        raise ValueError(f"unknown question kind '{question.kind}'")

    def collect(self) -> AnswerSet:
        """Return the completed :class:`AnswerSet`.

        Raises :class:`InputAborted` when the user interrupts the prompt or the
        input stream closes. Nothing is written to disk here.
        """

        values: dict[str, Any] = {}
        try:
            for question in self.questions:
                values[question.name] = self._ask(question)
        except (KeyboardInterrupt, EOFError) as exc:
            raise InputAborted() from exc
        return AnswerSet(**values)
