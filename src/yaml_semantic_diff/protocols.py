"""Collaborator ports for yaml-semantic-diff.

Defines the structural interfaces the comparison core talks to.  Custom
implementations need no base class: any object with a conformant method
passes ``isinstance`` checks.

Example::

    from yaml_semantic_diff.protocols import Loader

    class InMemoryLoader:
        def __init__(self, files: dict[str, bytes]) -> None:
            self._files = files

        def load(self, source: str) -> bytes:
            return self._files[source]

    assert isinstance(InMemoryLoader({}), Loader)  # True, structural conformance
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from yaml_semantic_diff.result import ChangeEntry

__all__ = ["Loader", "Summarizer"]


@runtime_checkable
class Loader(Protocol):
    """Fetches the raw bytes of a file path or URL.

    Implementations raise ``LoadError`` when the source cannot be read.
    """

    def load(self, source: str) -> bytes: ...


@runtime_checkable
class Summarizer(Protocol):
    """Produces a natural-language summary of a set of changes.

    The core never calls a summarizer itself; callers that do should treat
    a failure as a warning and keep the diff output.
    """

    def summarize(self, entries: Sequence[ChangeEntry]) -> str: ...
