"""Lightweight string templating for generated boilerplate."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Mapping, MutableMapping

__all__ = [
    "TemplateRenderer",
    "TemplateRenderingError",
]


_PLACEHOLDER_PATTERN = re.compile(r"{{\s*(?P<expression>[^{}]+?)\s*}}")


class TemplateRenderingError(RuntimeError):
    """Raised when the renderer cannot evaluate a placeholder."""


def _block(value: Any) -> str:
    if isinstance(value, str):
        lines: Iterable[Any] = value.splitlines()
    elif isinstance(value, Iterable):
        lines = value
    else:
        lines = [value]
    return "".join(f"{line}\n" for line in lines)


@dataclass(slots=True)
class TemplateRenderer:
    """Render templates with ``{{ placeholder|filters }}`` expressions.

    ``block`` terminates every line of a sequence with a newline, so an empty
    sequence renders as nothing at all.
    """

    filters: MutableMapping[str, Callable[[Any], Any]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.filters:
            self.filters["block"] = _block

    def render_string(self, template: str, context: Mapping[str, Any]) -> str:
        """Render ``template`` using ``context``.

        Every placeholder must name a key of ``context``; a missing key or an
        unknown filter raises :class:`TemplateRenderingError` so a typo never
        leaks into a generated project.
        """

        def substitute(match: re.Match[str]) -> str:
            key, *filters = [part.strip() for part in match.group("expression").split("|")]
            if key not in context:
                raise TemplateRenderingError(f"missing value for '{key}'")

            value = context[key]
            for filter_name in filters:
                try:
                    value = self.filters[filter_name](value)
                except KeyError as exc:
                    raise TemplateRenderingError(f"unknown filter '{filter_name}'") from exc

            return str(value)

        return _PLACEHOLDER_PATTERN.sub(substitute, template)
