"""Project name validation and npm package-name normalisation."""

from __future__ import annotations

import re
import unicodedata

__all__ = ["is_safe_directory_name", "package_name", "validate_project_name"]


_SEPARATORS = re.compile(r"[\s\-_.]+")
_UNSAFE_CHARACTERS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')
_RESERVED_NAMES = {".", ".."}
_MAX_PACKAGE_NAME = 214


def is_safe_directory_name(value: str) -> bool:
    """Return ``True`` when ``value`` can be used as a single directory name."""

    if not value or value != value.strip():
        return False
    if value in _RESERVED_NAMES:
        return False
    return _UNSAFE_CHARACTERS.search(value) is None


def validate_project_name(value: str) -> str:
    """Return ``value`` stripped, or raise :class:`ValueError` if it is unusable.

    The project name becomes the generated project's root directory, so it must
    be a single, non-empty path component without characters that are illegal
    in file names on common platforms.
    """

    name = value.strip()
    if not name:
        raise ValueError("project name must not be empty")
    if not is_safe_directory_name(name):
        raise ValueError(
            f"project name '{name}' is not a valid directory name; "
            "avoid path separators and the characters <>:\"|?*"
        )
    return name


def package_name(value: str) -> str:
    """Create a name accepted by the npm registry from ``value``.

    npm requires lowercase, URL-safe names that do not start with a dot or an
    underscore. Unicode characters are folded to ASCII.
    """

    text = unicodedata.normalize("NFKD", str(value))
    text = text.encode("ascii", "ignore").decode("ascii")
    text = re.sub(r"[^\w\s\-.]", "", text).strip().lower()
    text = _SEPARATORS.sub("-", text).strip("-")

    if not text:
        return "app"
    return text[:_MAX_PACKAGE_NAME]
