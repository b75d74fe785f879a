"""Directory mode: compare every YAML file of two directories.

Files are paired by base name (non-recursive, ``.yaml`` and ``.yml``
only, sorted).  A file present on one side only is compared against an
empty document list, so each of its documents is reported as added or
removed.  Pairs are diffed concurrently on a thread pool and returned in
discovery order.

A file that fails to parse is recorded on its ``FileResult`` and the
remaining files proceed; an unreadable file or directory aborts the run
with ``LoadError``.
"""

from __future__ import annotations

import dataclasses
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import StrEnum, auto
from typing import TYPE_CHECKING

from yaml_semantic_diff.algorithm.config import DiffConfig
from yaml_semantic_diff.comparator import YamlComparator
from yaml_semantic_diff.errors import LoadError, ParseError
from yaml_semantic_diff.filtering import FilterEngine
from yaml_semantic_diff.loaders.local import FileLoader
from yaml_semantic_diff.observability import get_logger
from yaml_semantic_diff.tree.parser import parse_documents

if TYPE_CHECKING:
    from yaml_semantic_diff.protocols import Loader
    from yaml_semantic_diff.result import DiffResult
    from yaml_semantic_diff.tree.nodes import Document

__all__ = [
    "FilePair",
    "FilePairType",
    "FileResult",
    "build_file_pair_plan",
    "compare_directories",
    "discover_yaml_files",
    "is_directory",
]

log = get_logger("directory")

_YAML_SUFFIXES = (".yaml", ".yml")


class FilePairType(StrEnum):
    """Which directories a file name was found in."""

    BOTH = auto()
    ONLY_FROM = auto()
    ONLY_TO = auto()


@dataclass(frozen=True, slots=True)
class FilePair:
    """A file name and its full path on each side (``None`` when absent)."""

    name: str
    pair_type: FilePairType
    from_path: str | None = None
    to_path: str | None = None


@dataclass(frozen=True, slots=True)
class FileResult:
    """Outcome for one file pair: a result, or the parse error that skipped it."""

    pair: FilePair
    result: DiffResult | None = None
    error: ParseError | None = None

    @property
    def has_differences(self) -> bool:
        return self.result is not None and self.result.has_differences


def is_directory(path: str) -> bool:
    """Return True when ``path`` is an existing directory."""
    return bool(path) and os.path.isdir(path)


def discover_yaml_files(directory: str) -> list[str]:
    """Return the sorted base names of the YAML files directly in ``directory``."""
    try:
        with os.scandir(directory) as entries:
            names = [
                entry.name
                for entry in entries
                if entry.is_file(follow_symlinks=False) and entry.name.endswith(_YAML_SUFFIXES)
            ]
    except OSError as exc:
        raise LoadError(directory, exc.strerror or str(exc)) from exc
    return sorted(names)


def build_file_pair_plan(from_dir: str, to_dir: str) -> list[FilePair]:
    """Pair the YAML files of two directories by name, sorted by name."""
    from_files = set(discover_yaml_files(from_dir))
    to_files = set(discover_yaml_files(to_dir))
    pairs = []
    for name in sorted(from_files | to_files):
        if name in from_files and name in to_files:
            pair = FilePair(
                name,
                FilePairType.BOTH,
                os.path.join(from_dir, name),
                os.path.join(to_dir, name),
            )
        elif name in from_files:
            pair = FilePair(name, FilePairType.ONLY_FROM, from_path=os.path.join(from_dir, name))
        else:
            pair = FilePair(name, FilePairType.ONLY_TO, to_path=os.path.join(to_dir, name))
        pairs.append(pair)
    return pairs


def compare_directories(
    from_dir: str,
    to_dir: str,
    config: DiffConfig | None = None,
    loader: Loader | None = None,
    max_workers: int | None = None,
) -> list[FileResult]:
    """Compare all YAML files of ``from_dir`` and ``to_dir``.

    Args:
        from_dir: Directory holding the original files.
        to_dir: Directory holding the changed files.
        config: Comparison options; ``swap`` exchanges the directories.
        loader: Reads file bytes.  Defaults to ``FileLoader()``.
        max_workers: Thread pool size.  ``None`` lets the executor decide.

    Returns:
        One ``FileResult`` per file name, in sorted name order.

    Raises:
        LoadError: When a directory or file cannot be read.
        RegexCompileError: When a filter pattern is invalid.
    """
    config = config if config is not None else DiffConfig()
    FilterEngine.from_config(config)
    if config.swap:
        from_dir, to_dir = to_dir, from_dir
        config = dataclasses.replace(config, swap=False)
    file_loader: Loader = loader if loader is not None else FileLoader()
    plan = build_file_pair_plan(from_dir, to_dir)

    def _run(pair: FilePair) -> FileResult:
        try:
            from_docs = _load_documents(file_loader, pair.from_path)
            to_docs = _load_documents(file_loader, pair.to_path)
        except ParseError as exc:
            log.warning("file_skipped", file=pair.name, error=str(exc))
            return FileResult(pair=pair, error=exc)
        comparator = YamlComparator(config, loader=file_loader)
        return FileResult(pair=pair, result=comparator.compare_documents(from_docs, to_docs))

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        results = list(executor.map(_run, plan))
    log.debug("directories_compared", files=len(results))
    return results


def _load_documents(loader: Loader, path: str | None) -> list[Document]:
    if path is None:
        return []
    return parse_documents(loader.load(path), path)
