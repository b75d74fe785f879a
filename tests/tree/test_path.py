"""Tests for the Path value object.

Covers:
- Incremental construction (child / index / keyed) and structural equality
- KeySegment equality ignores the informational index
- Dotted and go-patch rendering, including the root path
- Path.parse for both notations and malformed input
- Keyed values containing dots survive a render/parse round trip
- parent / is_root / startswith helpers
"""

from __future__ import annotations

import pytest

from yaml_semantic_diff.errors import InvalidPathError
from yaml_semantic_diff.tree.path import FieldSegment, IndexSegment, KeySegment, Path


class TestConstruction:
    def test_structural_equality_and_hash(self) -> None:
        a = Path.root().child("spec").child("containers").index(0)
        b = Path.root().child("spec").child("containers").index(0)
        assert a == b
        assert hash(a) == hash(b)
        assert len({a, b}) == 1

    def test_keyed_segment_ignores_index(self) -> None:
        a = Path.root().keyed("name", "nginx", 0)
        b = Path.root().keyed("name", "nginx", 3)
        assert a == b

    def test_segments(self) -> None:
        p = Path.root().child("a").index(2).keyed("name", "x")
        assert p.segments == (FieldSegment("a"), IndexSegment(2), KeySegment("name", "x"))

    def test_parent_and_root(self) -> None:
        p = Path.root().child("a").child("b")
        assert p.parent == Path.root().child("a")
        assert Path.root().is_root
        assert not p.is_root
        assert Path.root().parent == Path.root()

    def test_startswith(self) -> None:
        p = Path.root().child("a").child("b")
        assert p.startswith(Path.root().child("a"))
        assert p.startswith(Path.root())
        assert not p.startswith(Path.root().child("b"))


class TestRendering:
    def test_dotted(self) -> None:
        p = Path.root().child("spec").child("containers").index(0).child("image")
        assert str(p) == "spec.containers[0].image"

    def test_dotted_keyed(self) -> None:
        p = Path.root().child("spec").child("containers").keyed("name", "nginx").child("image")
        assert p.dotted() == "spec.containers[name=nginx].image"

    def test_go_patch(self) -> None:
        p = Path.root().child("spec").child("containers").index(0).child("image")
        assert p.go_patch() == "/spec/containers/0/image"

    def test_go_patch_keyed(self) -> None:
        p = Path.root().child("spec").child("containers").keyed("name", "nginx").child("image")
        assert p.render(go_patch=True) == "/spec/containers/name=nginx/image"

    def test_root_renderings(self) -> None:
        assert Path.root().dotted() == ""
        assert Path.root().go_patch() == "/"

    def test_leading_index(self) -> None:
        assert Path.root().index(1).child("a").dotted() == "[1].a"


class TestParse:
    @pytest.mark.parametrize(
        "text",
        [
            "spec.containers[0].image",
            "spec.containers[name=nginx].image",
            "a.b.c",
            "[1].a",
            "matrix[0][1]",
        ],
    )
    def test_dotted_round_trip(self, text: str) -> None:
        assert Path.parse(text).dotted() == text

    @pytest.mark.parametrize(
        "text",
        ["/spec/containers/0/image", "/spec/containers/name=nginx/image", "/a"],
    )
    def test_go_patch_round_trip(self, text: str) -> None:
        assert Path.parse(text).go_patch() == text

    @pytest.mark.parametrize(
        "value",
        ["web.v1", "api.example.com", "app.kubernetes.io/name", "1.2.3"],
    )
    def test_keyed_value_with_dots_round_trip(self, value: str) -> None:
        p = Path.root().child("spec").child("containers").keyed("name", value).child("image")
        assert Path.parse(str(p)) == p

    def test_dots_inside_brackets_do_not_split(self) -> None:
        p = Path.parse("metadata.labels[key=app.kubernetes.io].value")
        assert p.segments == (
            FieldSegment("metadata"),
            FieldSegment("labels"),
            KeySegment("key", "app.kubernetes.io"),
            FieldSegment("value"),
        )

    def test_notations_agree(self) -> None:
        assert Path.parse("/spec/template/0") == Path.parse("spec.template[0]")

    def test_root(self) -> None:
        assert Path.parse("") == Path.root()
        assert Path.parse("/") == Path.root()

    @pytest.mark.parametrize("text", ["a..b", "a[0", "a[x]", "a]b", "a[0]x", "//a", "/a/=v"])
    def test_malformed(self, text: str) -> None:
        with pytest.raises(InvalidPathError):
            Path.parse(text)

    def test_invalid_path_is_value_error(self) -> None:
        with pytest.raises(ValueError, match="invalid path"):
            Path.parse("a..b")
