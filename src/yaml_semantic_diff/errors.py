"""Exception hierarchy for yaml-semantic-diff.

Every error raised by the package derives from :class:`DiffError`, so
callers can catch a single base class at the process boundary.  Each
subclass keeps its context as attributes and renders a readable message.
"""

from __future__ import annotations

__all__ = [
    "DiffError",
    "InvalidPathError",
    "LoadError",
    "ParseError",
    "PathNotFoundError",
    "RegexCompileError",
]


class DiffError(Exception):
    """Base exception for all yaml-semantic-diff errors."""


class LoadError(DiffError):
    """A file, directory or URL could not be read."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"failed to load {source}: {reason}")


class ParseError(DiffError):
    """Input bytes are not well-formed YAML.

    ``line`` and ``column`` are 1-based and ``None`` when the parser did not
    report a position.
    """

    def __init__(
        self,
        source: str | None,
        message: str,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        self.source = source
        self.message = message
        self.line = line
        self.column = column
        where = source or "<input>"
        if line is not None:
            where = f"{where}:{line}"
            if column is not None:
                where = f"{where}:{column}"
        super().__init__(f"failed to parse {where}: {message}")


class PathNotFoundError(DiffError):
    """A chroot expression does not resolve inside a document."""

    def __init__(self, path: str, message: str, source: str | None = None) -> None:
        self.path = path
        self.message = message
        self.source = source
        prefix = f"{source}: " if source else ""
        super().__init__(f"{prefix}path {path!r} not found: {message}")


class InvalidPathError(DiffError, ValueError):
    """A path expression is syntactically malformed."""

    def __init__(self, expression: str, message: str) -> None:
        self.expression = expression
        self.message = message
        super().__init__(f"invalid path {expression!r}: {message}")


class RegexCompileError(DiffError):
    """A filter or exclude pattern is not a valid regular expression."""

    def __init__(self, pattern: str, message: str) -> None:
        self.pattern = pattern
        self.message = message
        super().__init__(f"invalid regular expression {pattern!r}: {message}")
