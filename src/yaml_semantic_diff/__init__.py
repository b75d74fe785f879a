"""yaml-semantic-diff: structure-aware differences between YAML documents."""

from __future__ import annotations

from yaml_semantic_diff.algorithm.config import DiffConfig
from yaml_semantic_diff.algorithm.engine import DiffEngine
from yaml_semantic_diff.api import (
    compare,
    compare_directories,
    compare_documents,
    compare_files,
    is_equivalent,
)
from yaml_semantic_diff.certificates import CertificateInspector
from yaml_semantic_diff.comparator import YamlComparator
from yaml_semantic_diff.errors import (
    DiffError,
    InvalidPathError,
    LoadError,
    ParseError,
    PathNotFoundError,
    RegexCompileError,
)
from yaml_semantic_diff.filtering import FilterEngine
from yaml_semantic_diff.kubernetes.resource import ResourceKey
from yaml_semantic_diff.result import (
    ChangeEntry,
    ChangeKind,
    DiffResult,
    ExitCode,
    determine_exit_code,
)
from yaml_semantic_diff.tree.path import Path

__version__: str = "0.1.0"
__all__: list[str] = [
    "CertificateInspector",
    "ChangeEntry",
    "ChangeKind",
    "DiffConfig",
    "DiffEngine",
    "DiffError",
    "DiffResult",
    "ExitCode",
    "FilterEngine",
    "InvalidPathError",
    "LoadError",
    "ParseError",
    "Path",
    "PathNotFoundError",
    "RegexCompileError",
    "ResourceKey",
    "YamlComparator",
    "compare",
    "compare_directories",
    "compare_documents",
    "compare_files",
    "determine_exit_code",
    "is_equivalent",
]
