"""Result types returned by compare() calls.

This module provides the change entry produced by the diff engine, the
aggregate ``DiffResult``, and the exit-code helper used at the process
boundary.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, StrEnum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from yaml_semantic_diff.kubernetes.resource import ResourceKey
    from yaml_semantic_diff.tree.nodes import Node
    from yaml_semantic_diff.tree.path import Path

__all__ = ["ChangeEntry", "ChangeKind", "DiffResult", "ExitCode", "determine_exit_code"]


class ChangeKind(StrEnum):
    """Classification of a single difference."""

    ADDED = auto()
    REMOVED = auto()
    MODIFIED = auto()
    MOVED = auto()
    RENAMED_RESOURCE = auto()


@dataclass(frozen=True, slots=True)
class ChangeEntry:
    """One reported difference.

    Attributes:
        path: Location of the change inside its document.
        kind: What happened at ``path``.
        from_value: Node on the from side; ``None`` for additions.
        to_value: Node on the to side; ``None`` for removals.
        minor: True for numeric modifications within the minor threshold.
        document_index: Index of the from document, or of the to document for
            pure additions.
        resource: Kubernetes identity of the from document, if any.
        renamed_to: Kubernetes identity of the to document for renames.
        details: Nested field-level changes of a renamed resource.
    """

    path: Path
    kind: ChangeKind
    from_value: Node | None = None
    to_value: Node | None = None
    minor: bool = False
    document_index: int = 0
    resource: ResourceKey | None = None
    renamed_to: ResourceKey | None = None
    details: tuple[ChangeEntry, ...] = ()

    def render_path(self, go_patch: bool = False) -> str:
        return self.path.render(go_patch=go_patch)


@dataclass(frozen=True, slots=True)
class DiffResult:
    """Outcome of one comparison.

    Attributes:
        entries: Changes in traversal order (parents before children,
            documents in source order).
        computation_time_ms: Wall-clock duration of the comparison in
            milliseconds.
    """

    entries: tuple[ChangeEntry, ...]
    computation_time_ms: float = 0.0

    @property
    def has_differences(self) -> bool:
        return bool(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


class ExitCode(IntEnum):
    """Process exit status conventions."""

    SUCCESS = 0
    DIFFERENCES = 1
    ERROR = 255


def determine_exit_code(
    set_exit_code: bool,
    has_differences: bool,
    error: BaseException | None = None,
) -> ExitCode:
    """Map a comparison outcome to an exit code.

    Errors always yield ``ERROR``.  Differences yield ``DIFFERENCES`` only
    when ``set_exit_code`` is requested; otherwise a successful run exits 0.
    """
    if error is not None:
        return ExitCode.ERROR
    if set_exit_code and has_differences:
        return ExitCode.DIFFERENCES
    return ExitCode.SUCCESS
