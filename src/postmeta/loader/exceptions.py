"""Exception types raised while loading post front matter."""

from __future__ import annotations

from pathlib import Path


class LoadError(Exception):
    """Base class for post loading errors.

    Attributes:
        field: Front matter key the error refers to, if any
        path: Source file, set when loading from disk
    """

    field: str | None
    path: Path | None

    def __init__(self, message: str, *, field: str | None = None, path: Path | None = None):
        super().__init__(message)
        self.field = field
        self.path = path

    @property
    def message(self) -> str:
        return str(self.args[0]) if self.args else ""

    def __str__(self) -> str:
        if self.path is not None:
            return f"{self.path}: {self.message}"
        return self.message


class MissingDelimiter(LoadError):
    """Raised when the content does not open and close a `---` block."""


class MissingRequiredField(LoadError):
    """Raised when `title` or `layout` is absent or empty."""


class MalformedValue(LoadError):
    """Raised when a value has the wrong shape (nested where scalar expected, or vice versa)."""
