"""Public API functions for yaml-semantic-diff.

This module provides the user-facing functions: compare, compare_documents,
compare_files, compare_directories and is_equivalent.  Each call creates a
fresh YamlComparator (and therefore a fresh DiffEngine) to guarantee zero
global state shared between calls.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from yaml_semantic_diff.algorithm.config import DiffConfig
from yaml_semantic_diff.comparator import YamlComparator
from yaml_semantic_diff.directory import compare_directories

if TYPE_CHECKING:
    from yaml_semantic_diff.protocols import Loader
    from yaml_semantic_diff.result import DiffResult
    from yaml_semantic_diff.tree.nodes import Document

__all__ = [
    "compare",
    "compare_directories",
    "compare_documents",
    "compare_files",
    "is_equivalent",
]


def compare(
    from_content: bytes | str,
    to_content: bytes | str,
    config: DiffConfig | None = None,
    *,
    from_source: str | None = None,
    to_source: str | None = None,
) -> DiffResult:
    """Compare two YAML streams and return their differences.

    Args:
        from_content: Original YAML bytes or text (one or more documents).
        to_content:   Changed YAML bytes or text.
        config:       Comparison options.  Defaults to ``DiffConfig()``.
        from_source:  Label for the original input, used in errors.
        to_source:    Label for the changed input, used in errors.

    Returns:
        A ``DiffResult`` whose entries are in traversal order.

    Raises:
        ParseError: When either input is not well-formed YAML.
        PathNotFoundError: When a chroot path does not exist.
        RegexCompileError: When a filter pattern is invalid.
    """
    comparator = YamlComparator(config=config)
    return comparator.compare(from_content, to_content, from_source, to_source)


def compare_documents(
    from_docs: list[Document],
    to_docs: list[Document],
    config: DiffConfig | None = None,
) -> DiffResult:
    """Compare two lists of already-parsed documents."""
    return YamlComparator(config=config).compare_documents(from_docs, to_docs)


def compare_files(
    from_source: str,
    to_source: str,
    config: DiffConfig | None = None,
    loader: Loader | None = None,
) -> DiffResult:
    """Load two files or URLs and compare them.

    Raises:
        LoadError: When a source cannot be read.
    """
    return YamlComparator(config=config, loader=loader).compare_sources(from_source, to_source)


def is_equivalent(
    from_content: bytes | str,
    to_content: bytes | str,
    config: DiffConfig | None = None,
) -> bool:
    """Return True when the two YAML streams have no reportable differences."""
    return not compare(from_content, to_content, config).has_differences
