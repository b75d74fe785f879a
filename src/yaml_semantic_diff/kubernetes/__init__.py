"""Kubernetes resource identity, matching and rename detection."""

from __future__ import annotations

from yaml_semantic_diff.kubernetes.matcher import MatchPlan, RenamePair, ResourceMatcher
from yaml_semantic_diff.kubernetes.resource import ResourceKey, is_kubernetes_resource, resource_key
from yaml_semantic_diff.kubernetes.similarity import flatten_leaves, similarity

__all__ = [
    "MatchPlan",
    "RenamePair",
    "ResourceKey",
    "ResourceMatcher",
    "flatten_leaves",
    "is_kubernetes_resource",
    "resource_key",
    "similarity",
]
