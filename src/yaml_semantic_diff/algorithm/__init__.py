"""algorithm subpackage: comparison options and matching primitives.

Import ``DiffEngine`` from :mod:`yaml_semantic_diff.algorithm.engine` or
from the top-level package; this module only re-exports the pieces that
the Kubernetes matcher also depends on.

Example::

    from yaml_semantic_diff.algorithm import DiffConfig
    from yaml_semantic_diff.algorithm.engine import DiffEngine

    engine = DiffEngine(DiffConfig(ignore_order_changes=True))
"""

from __future__ import annotations

from yaml_semantic_diff.algorithm.config import DiffConfig
from yaml_semantic_diff.algorithm.matcher import greedy_match
from yaml_semantic_diff.algorithm.scalars import fold_whitespace, is_minor_change, leaves_equal

__all__ = ["DiffConfig", "fold_whitespace", "greedy_match", "is_minor_change", "leaves_equal"]
