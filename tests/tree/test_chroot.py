"""Tests for chroot navigation.

Covers:
- navigate() through fields, indices and [field=value] selectors
- PathNotFoundError for missing keys, out-of-range indices, type mismatches
- apply_chroot() renumbering, list expansion, null-document handling
"""

from __future__ import annotations

import pytest

from yaml_semantic_diff.errors import PathNotFoundError
from yaml_semantic_diff.tree.chroot import apply_chroot, navigate
from yaml_semantic_diff.tree.nodes import Node, to_python
from yaml_semantic_diff.tree.parser import parse_documents
from yaml_semantic_diff.tree.path import Path

DOC = """
spec:
  containers:
    - name: web
      image: nginx:1.25
    - name: sidecar
      image: envoy:1.30
  replicas: 3
"""


@pytest.fixture
def root() -> Node:
    return parse_documents(DOC)[0].root


class TestNavigate:
    def test_field(self, root: Node) -> None:
        assert to_python(navigate(root, Path.parse("spec.replicas"))) == 3

    def test_index(self, root: Node) -> None:
        node = navigate(root, Path.parse("spec.containers[1].image"))
        assert to_python(node) == "envoy:1.30"

    def test_selector(self, root: Node) -> None:
        node = navigate(root, Path.parse("spec.containers[name=sidecar]"))
        assert to_python(node) == {"name": "sidecar", "image": "envoy:1.30"}

    def test_selector_value_with_dots(self) -> None:
        root = parse_documents("containers:\n  - name: web.v1\n    image: nginx\n")[0].root
        node = navigate(root, Path.parse("containers[name=web.v1].image"))
        assert to_python(node) == "nginx"

    def test_go_patch_expression(self, root: Node) -> None:
        node = navigate(root, Path.parse("/spec/containers/0/name"))
        assert to_python(node) == "web"

    def test_missing_key(self, root: Node) -> None:
        with pytest.raises(PathNotFoundError, match="key does not exist"):
            navigate(root, Path.parse("spec.template"))

    def test_index_out_of_range(self, root: Node) -> None:
        with pytest.raises(PathNotFoundError, match="out of range"):
            navigate(root, Path.parse("spec.containers[5]"))

    def test_field_on_list(self, root: Node) -> None:
        with pytest.raises(PathNotFoundError, match="not a mapping"):
            navigate(root, Path.parse("spec.containers.name"))

    def test_index_on_mapping(self, root: Node) -> None:
        with pytest.raises(PathNotFoundError, match="not a list"):
            navigate(root, Path.parse("spec[0]"))

    def test_selector_without_match(self, root: Node) -> None:
        with pytest.raises(PathNotFoundError, match="no element matches"):
            navigate(root, Path.parse("spec.containers[name=db]"))

    def test_error_carries_source(self, root: Node) -> None:
        with pytest.raises(PathNotFoundError) as info:
            navigate(root, Path.parse("nope"), source="a.yaml")
        assert info.value.source == "a.yaml"
        assert info.value.path == "nope"


class TestApplyChroot:
    def test_empty_expression_is_identity(self) -> None:
        docs = parse_documents(DOC)
        assert apply_chroot(docs, "") is docs

    def test_replaces_roots(self) -> None:
        docs = parse_documents("a: {x: 1}\n---\na: {x: 2}\n")
        result = apply_chroot(docs, "a.x")
        assert [to_python(d.root) for d in result] == [1, 2]
        assert [d.index for d in result] == [0, 1]

    def test_list_to_documents(self) -> None:
        docs = parse_documents("items:\n  - {n: 1}\n  - {n: 2}\n  - {n: 3}\n")
        result = apply_chroot(docs, "items", list_to_documents=True)
        assert [to_python(d.root) for d in result] == [{"n": 1}, {"n": 2}, {"n": 3}]
        assert [d.index for d in result] == [0, 1, 2]

    def test_list_kept_without_expansion(self) -> None:
        docs = parse_documents("items: [1, 2]\n")
        result = apply_chroot(docs, "items")
        assert len(result) == 1
        assert to_python(result[0].root) == [1, 2]

    def test_null_documents_skipped(self) -> None:
        docs = parse_documents("a: 1\n---\n")
        result = apply_chroot(docs, "a")
        assert [to_python(d.root) for d in result] == [1]

    def test_all_null_raises(self) -> None:
        with pytest.raises(PathNotFoundError, match="empty"):
            apply_chroot(parse_documents(""), "a")

    def test_missing_in_any_document_raises(self) -> None:
        docs = parse_documents("a: 1\n---\nb: 2\n")
        with pytest.raises(PathNotFoundError):
            apply_chroot(docs, "a")
