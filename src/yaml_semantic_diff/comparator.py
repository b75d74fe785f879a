"""YamlComparator: orchestrator that wires parser, chroot, DiffEngine and filters.

This is the central wiring layer between the raw engine and the public
API.  One ``compare_*`` call runs the full pipeline:

1. compile filter rules (an invalid regex fails before any parsing)
2. parse both inputs into documents
3. swap the sides when ``config.swap`` is set
4. apply chroot settings
5. diff the document streams
6. apply include/exclude filters
7. wrap the entries in a ``DiffResult`` with wall-clock timing

Each comparator owns one ``DiffEngine`` and therefore one certificate
cache; two instances never share state.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from yaml_semantic_diff.algorithm.config import DiffConfig
from yaml_semantic_diff.algorithm.engine import DiffEngine
from yaml_semantic_diff.filtering import FilterEngine
from yaml_semantic_diff.loaders import SourceLoader
from yaml_semantic_diff.result import DiffResult
from yaml_semantic_diff.tree.chroot import apply_chroot
from yaml_semantic_diff.tree.parser import parse_documents

if TYPE_CHECKING:
    from yaml_semantic_diff.protocols import Loader
    from yaml_semantic_diff.tree.nodes import Document

__all__ = ["YamlComparator"]


class YamlComparator:
    """Runs parse, chroot, diff and filter for one pair of inputs.

    Example::

        from yaml_semantic_diff.comparator import YamlComparator

        cmp = YamlComparator()
        result = cmp.compare(b"replicas: 2\\n", b"replicas: 3\\n")
        [str(e.path) for e in result.entries]   # ["replicas"]
    """

    def __init__(
        self,
        config: DiffConfig | None = None,
        loader: Loader | None = None,
    ) -> None:
        self._config = config if config is not None else DiffConfig()
        self._loader: Loader = loader if loader is not None else SourceLoader()
        self._filters = FilterEngine.from_config(self._config)
        self._engine = DiffEngine(self._config)

    @property
    def config(self) -> DiffConfig:
        return self._config

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def compare(
        self,
        from_content: bytes | str,
        to_content: bytes | str,
        from_source: str | None = None,
        to_source: str | None = None,
    ) -> DiffResult:
        """Parse and compare two YAML streams."""
        t0 = time.perf_counter()
        from_docs = parse_documents(from_content, from_source)
        to_docs = parse_documents(to_content, to_source)
        return self._run(from_docs, to_docs, t0)

    def compare_documents(
        self,
        from_docs: list[Document],
        to_docs: list[Document],
    ) -> DiffResult:
        """Compare two already-parsed document lists."""
        return self._run(list(from_docs), list(to_docs), time.perf_counter())

    def compare_sources(self, from_source: str, to_source: str) -> DiffResult:
        """Load two files or URLs through the loader and compare them."""
        t0 = time.perf_counter()
        from_docs = parse_documents(self._loader.load(from_source), from_source)
        to_docs = parse_documents(self._loader.load(to_source), to_source)
        return self._run(from_docs, to_docs, t0)

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def _run(self, from_docs: list[Document], to_docs: list[Document], t0: float) -> DiffResult:
        config = self._config
        if config.swap:
            from_docs, to_docs = to_docs, from_docs
        from_docs = apply_chroot(from_docs, config.from_chroot, config.chroot_list_to_documents)
        to_docs = apply_chroot(to_docs, config.to_chroot, config.chroot_list_to_documents)
        entries = self._engine.diff_documents(from_docs, to_docs)
        entries = self._filters.apply(entries)
        elapsed_ms = (time.perf_counter() - t0) * 1000.0
        return DiffResult(entries=tuple(entries), computation_time_ms=elapsed_ms)
