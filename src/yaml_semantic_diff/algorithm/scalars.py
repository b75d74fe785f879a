"""Leaf comparison helpers: equality, whitespace folding, minor changes."""

from __future__ import annotations

import math

from yaml_semantic_diff.tree.nodes import NullNode, ScalarKind, ScalarNode

__all__ = ["fold_whitespace", "is_minor_change", "leaves_equal"]

_NUMERIC = (ScalarKind.INT, ScalarKind.FLOAT)


def fold_whitespace(text: str) -> str:
    """Trim ``text`` and collapse internal whitespace runs to one space."""
    return " ".join(text.split())


def leaves_equal(
    a: ScalarNode | NullNode,
    b: ScalarNode | NullNode,
    ignore_whitespace: bool = False,
) -> bool:
    """Return True when two leaves hold the same semantic value.

    Kinds must match (``1`` and ``"1"`` differ).  NaN equals NaN.
    """
    if isinstance(a, NullNode) or isinstance(b, NullNode):
        return isinstance(a, NullNode) and isinstance(b, NullNode)
    if a.kind is not b.kind:
        return False
    if a.kind is ScalarKind.STRING and ignore_whitespace:
        return fold_whitespace(str(a.value)) == fold_whitespace(str(b.value))
    if a.kind is ScalarKind.FLOAT and math.isnan(a.value) and math.isnan(b.value):
        return True
    return bool(a.value == b.value)


def is_minor_change(
    old: ScalarNode | NullNode | None,
    new: ScalarNode | NullNode | None,
    threshold: float,
) -> bool:
    """Return True for a numeric change within ``threshold`` relative to ``old``.

    Booleans are not numeric here.  A zero or non-finite old value is never
    minor.
    """
    if not isinstance(old, ScalarNode) or not isinstance(new, ScalarNode):
        return False
    if old.kind not in _NUMERIC or new.kind not in _NUMERIC:
        return False
    try:
        before, after = float(old.value), float(new.value)
    except OverflowError:
        return False
    if before == 0.0 or not math.isfinite(before) or not math.isfinite(after):
        return False
    relative = abs(after - before) / abs(before)
    return relative <= threshold or math.isclose(relative, threshold)
