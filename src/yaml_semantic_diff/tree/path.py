"""Path model: immutable, hashable addresses into a document tree.

A ``Path`` is a tuple of segments:

- ``FieldSegment``  : a mapping key
- ``IndexSegment``  : a sequence index
- ``KeySegment``    : a sequence element addressed by an identifier field
  (``containers[name=nginx]``); its index is informational only and does
  not take part in equality, so the address is stable under reordering

Two renderings are supported:

- dotted:   ``spec.containers[0].image`` / ``spec.containers[name=nginx].image``
- go-patch: ``/spec/containers/0/image`` / ``/spec/containers/name=nginx/image``

The root path renders as ``""`` (dotted) and ``"/"`` (go-patch).
"""

from __future__ import annotations

import dataclasses
import re
from dataclasses import dataclass

from yaml_semantic_diff.errors import InvalidPathError

__all__ = ["FieldSegment", "IndexSegment", "KeySegment", "Path", "Segment"]


@dataclass(frozen=True, slots=True)
class FieldSegment:
    """A mapping key."""

    name: str


@dataclass(frozen=True, slots=True)
class IndexSegment:
    """A positional sequence index."""

    index: int


@dataclass(frozen=True, slots=True)
class KeySegment:
    """A sequence element addressed by ``field=value``."""

    field: str
    value: str
    index: int = dataclasses.field(default=-1, compare=False)


Segment = FieldSegment | IndexSegment | KeySegment

_BRACKET_RE = re.compile(r"\[([^\]]*)\]")


@dataclass(frozen=True, slots=True)
class Path:
    """Immutable sequence of segments from a document root."""

    segments: tuple[Segment, ...] = ()

    @classmethod
    def root(cls) -> Path:
        return cls()

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def child(self, name: str) -> Path:
        """Return the path of mapping key ``name`` under this path."""
        return Path((*self.segments, FieldSegment(name)))

    def index(self, index: int) -> Path:
        """Return the path of sequence element ``index`` under this path."""
        return Path((*self.segments, IndexSegment(index)))

    def keyed(self, field_name: str, value: str, index: int = -1) -> Path:
        """Return the path of the element whose ``field_name`` equals ``value``."""
        return Path((*self.segments, KeySegment(field_name, value, index)))

    @property
    def parent(self) -> Path:
        if not self.segments:
            return self
        return Path(self.segments[:-1])

    @property
    def is_root(self) -> bool:
        return not self.segments

    @property
    def last(self) -> Segment | None:
        return self.segments[-1] if self.segments else None

    def startswith(self, prefix: Path) -> bool:
        n = len(prefix.segments)
        return self.segments[:n] == prefix.segments

    def __len__(self) -> int:
        return len(self.segments)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def dotted(self) -> str:
        parts: list[str] = []
        for segment in self.segments:
            if isinstance(segment, FieldSegment):
                if parts:
                    parts.append(".")
                parts.append(segment.name)
            elif isinstance(segment, IndexSegment):
                parts.append(f"[{segment.index}]")
            else:
                parts.append(f"[{segment.field}={segment.value}]")
        return "".join(parts)

    def go_patch(self) -> str:
        parts: list[str] = []
        for segment in self.segments:
            if isinstance(segment, FieldSegment):
                parts.append(segment.name)
            elif isinstance(segment, IndexSegment):
                parts.append(str(segment.index))
            else:
                parts.append(f"{segment.field}={segment.value}")
        return "/" + "/".join(parts)

    def render(self, go_patch: bool = False) -> str:
        return self.go_patch() if go_patch else self.dotted()

    def __str__(self) -> str:
        return self.dotted()

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    @classmethod
    def parse(cls, text: str) -> Path:
        """Parse a dotted or go-patch path expression.

        Dotted: ``a.b[0].c`` or ``a.list[name=x].c``.  Go-patch (leading
        ``/``): ``/a/b/0/c`` or ``/a/list/name=x/c``; all-digit segments are
        indices.  ``""`` and ``"/"`` are the root.

        Raises:
            InvalidPathError: On empty segments or unbalanced brackets.
        """
        if text.startswith("/"):
            return cls._parse_go_patch(text)
        return cls._parse_dotted(text)

    @classmethod
    def _parse_go_patch(cls, text: str) -> Path:
        body = text[1:]
        if not body:
            return cls()
        segments: list[Segment] = []
        for part in body.split("/"):
            if not part:
                raise InvalidPathError(text, "empty path segment")
            if part.isdigit():
                segments.append(IndexSegment(int(part)))
            elif "=" in part:
                key, _, value = part.partition("=")
                if not key:
                    raise InvalidPathError(text, f"missing field name in {part!r}")
                segments.append(KeySegment(key, value))
            else:
                segments.append(FieldSegment(part))
        return cls(tuple(segments))

    @classmethod
    def _parse_dotted(cls, text: str) -> Path:
        if not text:
            return cls()
        segments: list[Segment] = []
        for part in _split_dotted(text):
            name, _, rest = part.partition("[")
            rest = "[" + rest if rest or part.endswith("[") else ""
            if not name and not rest:
                raise InvalidPathError(text, "empty path segment")
            if name:
                if "]" in name:
                    raise InvalidPathError(text, "unbalanced ']'")
                segments.append(FieldSegment(name))
            matched_to = 0
            for match in _BRACKET_RE.finditer(rest):
                if match.start() != matched_to:
                    raise InvalidPathError(text, f"unexpected text in {part!r}")
                segments.append(_bracket_segment(text, match.group(1)))
                matched_to = match.end()
            if matched_to != len(rest):
                raise InvalidPathError(text, f"unbalanced '[' in {part!r}")
        return cls(tuple(segments))


def _split_dotted(text: str) -> list[str]:
    """Split on dots outside brackets, so ``[name=web.v1]`` stays whole."""
    parts: list[str] = []
    start = 0
    depth = 0
    for i, char in enumerate(text):
        if char == "[":
            depth += 1
        elif char == "]":
            depth -= 1
        elif char == "." and depth == 0:
            parts.append(text[start:i])
            start = i + 1
    parts.append(text[start:])
    return parts


def _bracket_segment(text: str, inner: str) -> Segment:
    if inner.isdigit():
        return IndexSegment(int(inner))
    if "=" in inner:
        key, _, value = inner.partition("=")
        if key:
            return KeySegment(key, value)
    raise InvalidPathError(text, f"invalid index [{inner}]")
