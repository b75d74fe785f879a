"""Kubernetes resource detection and identity keys."""

from __future__ import annotations

from dataclasses import dataclass

from yaml_semantic_diff.tree.nodes import MappingNode, Node, NullNode, ScalarKind, ScalarNode

__all__ = ["ResourceKey", "is_kubernetes_resource", "resource_key"]


@dataclass(frozen=True, slots=True)
class ResourceKey:
    """Identity of a Kubernetes object.

    ``api_version`` is ``None`` when API versions are ignored; ``namespace``
    is ``None`` when the object does not declare one.  ``name`` falls back
    to ``metadata.generateName``.
    """

    api_version: str | None
    kind: str
    namespace: str | None
    name: str

    def __str__(self) -> str:
        name = f"{self.namespace}/{self.name}" if self.namespace is not None else self.name
        if self.api_version is None:
            return f"{self.kind}:{name}"
        return f"{self.api_version}:{self.kind}:{name}"


def _string_field(mapping: MappingNode, key: str) -> str | None:
    value = mapping.entries.get(key)
    if isinstance(value, ScalarNode) and value.kind is ScalarKind.STRING:
        return str(value.value)
    return None


def _identity_name(metadata: MappingNode) -> str | None:
    for key in ("name", "generateName"):
        value = metadata.entries.get(key)
        if value is not None and not isinstance(value, NullNode):
            return str(value) if isinstance(value, ScalarNode) else None
    return None


def is_kubernetes_resource(node: Node | None) -> bool:
    """Return True when ``node`` looks like a Kubernetes object.

    Requires string ``apiVersion`` and ``kind`` and a ``metadata`` mapping
    holding a scalar ``name`` or ``generateName``.
    """
    if not isinstance(node, MappingNode):
        return False
    if _string_field(node, "apiVersion") is None or _string_field(node, "kind") is None:
        return False
    metadata = node.entries.get("metadata")
    if not isinstance(metadata, MappingNode):
        return False
    return _identity_name(metadata) is not None


def resource_key(node: Node | None, ignore_api_version: bool = False) -> ResourceKey | None:
    """Return the identity of ``node``, or ``None`` if it is not a resource."""
    if not is_kubernetes_resource(node) or not isinstance(node, MappingNode):
        return None
    metadata = node.entries["metadata"]
    if not isinstance(metadata, MappingNode):
        return None
    namespace = metadata.entries.get("namespace")
    return ResourceKey(
        api_version=None if ignore_api_version else _string_field(node, "apiVersion"),
        kind=_string_field(node, "kind") or "",
        namespace=str(namespace) if isinstance(namespace, ScalarNode) else None,
        name=_identity_name(metadata) or "",
    )
