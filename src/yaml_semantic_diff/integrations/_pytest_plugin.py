"""pytest plugin for yaml-semantic-diff.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from typing import Any

import pytest
import yaml

from yaml_semantic_diff import DiffConfig, compare


def _as_yaml(value: Any) -> bytes | str:
    if isinstance(value, bytes | str):
        return value
    return yaml.safe_dump(value, sort_keys=False)


@pytest.fixture(scope="session")
def assert_yaml_equivalent() -> Any:
    """Fixture that returns a callable YAML equivalence asserter.

    The fixture is session-scoped because the returned callable is stateless
    (delegates to compare() which creates a fresh comparator per call).

    Usage in tests::

        def test_manifest(assert_yaml_equivalent):
            assert_yaml_equivalent("a: 1\\nb: 2\\n", "b: 2\\na: 1\\n")

        def test_changed(assert_yaml_equivalent):
            with pytest.raises(AssertionError, match=r"replicas"):
                assert_yaml_equivalent({"replicas": 2}, {"replicas": 3})

    Returns:
        A callable ``_assert(actual, expected, config=None) -> None`` that
        raises ``AssertionError`` listing every difference.  ``actual`` and
        ``expected`` may be YAML text, bytes, or plain Python data.
    """

    def _assert(actual: Any, expected: Any, config: DiffConfig | None = None) -> None:
        result = compare(_as_yaml(expected), _as_yaml(actual), config)
        if result.has_differences:
            go_patch = config.use_go_patch_style if config is not None else False
            lines = [
                f"  {entry.kind}: {entry.render_path(go_patch) or '<document>'}"
                f" [doc {entry.document_index}]"
                for entry in result.entries
            ]
            raise AssertionError(
                f"YAML documents not equivalent: {len(result.entries)} difference(s)\n"
                + "\n".join(lines)
            )

    return _assert
