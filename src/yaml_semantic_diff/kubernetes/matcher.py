"""ResourceMatcher: pair Kubernetes documents across two streams.

Matching runs in three passes over the non-empty documents:

1. Exact: documents with equal ``ResourceKey`` are paired.  Duplicate keys
   are consumed in stream order, so every document pairs at most once.
2. Rename: unmatched resources of the same kind (and compatible
   namespace and apiVersion) are scored with
   :func:`~yaml_semantic_diff.kubernetes.similarity.similarity` and
   assigned greedily when the score reaches the configured threshold.
3. Ordinal: unmatched non-resource documents are paired by position.

Whatever is left is reported as removed (from side) or added (to side).
"""

from __future__ import annotations

from collections import defaultdict, deque
from dataclasses import dataclass, field

import numpy as np

from yaml_semantic_diff.algorithm.config import DiffConfig
from yaml_semantic_diff.algorithm.matcher import greedy_match
from yaml_semantic_diff.kubernetes.resource import ResourceKey, resource_key
from yaml_semantic_diff.kubernetes.similarity import similarity
from yaml_semantic_diff.observability import get_logger
from yaml_semantic_diff.tree.nodes import Document, NullNode

__all__ = ["MatchPlan", "RenamePair", "ResourceMatcher"]

log = get_logger("kubernetes")


@dataclass(frozen=True, slots=True)
class RenamePair:
    from_index: int
    to_index: int
    score: float


@dataclass(slots=True)
class MatchPlan:
    """How the documents of two streams correspond.

    All indices are positions in the input document lists.
    """

    matched: dict[int, int] = field(default_factory=dict)
    renamed: dict[int, RenamePair] = field(default_factory=dict)
    paired: dict[int, int] = field(default_factory=dict)
    removed: list[int] = field(default_factory=list)
    added: list[int] = field(default_factory=list)
    from_keys: dict[int, ResourceKey] = field(default_factory=dict)
    to_keys: dict[int, ResourceKey] = field(default_factory=dict)


class ResourceMatcher:
    """Builds a ``MatchPlan`` for two document streams."""

    def __init__(self, config: DiffConfig | None = None) -> None:
        self._config = config or DiffConfig()

    def match(self, from_docs: list[Document], to_docs: list[Document]) -> MatchPlan:
        ignore_api = self._config.ignore_api_version
        plan = MatchPlan()
        from_live = [i for i, d in enumerate(from_docs) if not isinstance(d.root, NullNode)]
        to_live = [j for j, d in enumerate(to_docs) if not isinstance(d.root, NullNode)]
        for i in from_live:
            key = resource_key(from_docs[i].root, ignore_api)
            if key is not None:
                plan.from_keys[i] = key
        for j in to_live:
            key = resource_key(to_docs[j].root, ignore_api)
            if key is not None:
                plan.to_keys[j] = key

        # Pass 1: exact identity
        queues: dict[ResourceKey, deque[int]] = defaultdict(deque)
        for j in to_live:
            if j in plan.to_keys:
                queues[plan.to_keys[j]].append(j)
        for i in from_live:
            key = plan.from_keys.get(i)
            if key is not None and queues.get(key):
                plan.matched[i] = queues[key].popleft()

        taken_to = set(plan.matched.values())
        rest_from = [i for i in from_live if i in plan.from_keys and i not in plan.matched]
        rest_to = [j for j in to_live if j in plan.to_keys and j not in taken_to]

        # Pass 2: renames
        if self._config.detect_renames:
            for pair in self._detect_renames(from_docs, to_docs, rest_from, rest_to, plan):
                plan.renamed[pair.from_index] = pair
                taken_to.add(pair.to_index)

        # Pass 3: non-resource documents by ordinal
        plain_from = [i for i in from_live if i not in plan.from_keys]
        plain_to = [j for j in to_live if j not in plan.to_keys]
        for i, j in zip(plain_from, plain_to, strict=False):
            plan.paired[i] = j
            taken_to.add(j)

        plan.removed = [
            i
            for i in from_live
            if i not in plan.matched and i not in plan.renamed and i not in plan.paired
        ]
        plan.added = [j for j in to_live if j not in taken_to]
        log.debug(
            "resources_matched",
            matched=len(plan.matched),
            renamed=len(plan.renamed),
            removed=len(plan.removed),
            added=len(plan.added),
        )
        return plan

    # ------------------------------------------------------------------
    # Rename detection
    # ------------------------------------------------------------------

    def _eligible(self, a: ResourceKey, b: ResourceKey) -> bool:
        if a.kind != b.kind:
            return False
        if a.namespace is not None and b.namespace is not None and a.namespace != b.namespace:
            return False
        return self._config.ignore_api_version or a.api_version == b.api_version

    def _detect_renames(
        self,
        from_docs: list[Document],
        to_docs: list[Document],
        rest_from: list[int],
        rest_to: list[int],
        plan: MatchPlan,
    ) -> list[RenamePair]:
        if not rest_from or not rest_to:
            return []
        limit = self._config.rename_limit
        if len(rest_from) > limit or len(rest_to) > limit:
            log.debug("rename_detection_skipped", candidates=max(len(rest_from), len(rest_to)))
            return []

        scores = np.full((len(rest_from), len(rest_to)), -np.inf)
        for r, i in enumerate(rest_from):
            for c, j in enumerate(rest_to):
                if self._eligible(plan.from_keys[i], plan.to_keys[j]):
                    scores[r, c] = similarity(from_docs[i].root, to_docs[j].root)

        pairs = [
            RenamePair(rest_from[r], rest_to[c], score)
            for r, c, score in greedy_match(scores, self._config.rename_similarity_threshold)
        ]
        for pair in pairs:
            log.debug(
                "rename_detected",
                from_resource=str(plan.from_keys[pair.from_index]),
                to_resource=str(plan.to_keys[pair.to_index]),
                score=round(pair.score, 3),
            )
        return pairs
