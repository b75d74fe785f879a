"""Packaging correctness verification for yaml-semantic-diff.

Tests validate:
- Top-level import exposes the public API
- py.typed marker is present in the wheel
- Pytest plugin entry point is registered
- Package metadata is correct

These tests inspect the built wheel and current installation rather than
creating temporary virtualenvs (faster, more reliable in CI).
"""

from __future__ import annotations

import subprocess
import zipfile
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent.parent


class TestBaseInstall:
    """Verify the base install imports and runs."""

    def test_import_yaml_semantic_diff(self):  # type: ignore[no-untyped-def]
        import yaml_semantic_diff

        assert hasattr(yaml_semantic_diff, "compare")
        assert hasattr(yaml_semantic_diff, "is_equivalent")
        assert hasattr(yaml_semantic_diff, "compare_directories")

    def test_compare_basic(self):  # type: ignore[no-untyped-def]
        from yaml_semantic_diff import compare

        assert not compare("a: 1\n", "a: 1\n").has_differences

    def test_py_typed_in_source_tree(self):  # type: ignore[no-untyped-def]
        assert (PROJECT_ROOT / "src" / "yaml_semantic_diff" / "py.typed").is_file()


class TestWheelContents:
    """Verify the built wheel contains required files."""

    @pytest.fixture(scope="class")
    def wheel_path(self) -> Path:
        """Build a fresh wheel and return its path."""
        dist_dir = PROJECT_ROOT / "dist"
        try:
            result = subprocess.run(
                ["poetry", "build", "-f", "wheel"],
                cwd=str(PROJECT_ROOT),
                capture_output=True,
                text=True,
            )
        except FileNotFoundError:
            pytest.skip("poetry is not installed")
        if result.returncode != 0:
            pytest.skip(f"poetry build failed: {result.stderr}")

        wheels = sorted(dist_dir.glob("yaml_semantic_diff-*.whl"), key=lambda p: p.stat().st_mtime)
        if not wheels:
            pytest.skip("No wheel found in dist/")
        return wheels[-1]

    def test_py_typed_in_wheel(self, wheel_path: Path):  # type: ignore[no-untyped-def]
        with zipfile.ZipFile(wheel_path) as zf:
            names = zf.namelist()
            assert any(n.endswith("py.typed") for n in names), f"py.typed not found: {names}"

    def test_no_pycache_in_wheel(self, wheel_path: Path):  # type: ignore[no-untyped-def]
        with zipfile.ZipFile(wheel_path) as zf:
            pycache_files = [n for n in zf.namelist() if "__pycache__" in n]
            assert not pycache_files, f"__pycache__ found in wheel: {pycache_files}"

    def test_all_source_modules_in_wheel(self, wheel_path: Path):  # type: ignore[no-untyped-def]
        expected_modules = [
            "yaml_semantic_diff/__init__.py",
            "yaml_semantic_diff/api.py",
            "yaml_semantic_diff/certificates.py",
            "yaml_semantic_diff/comparator.py",
            "yaml_semantic_diff/directory.py",
            "yaml_semantic_diff/errors.py",
            "yaml_semantic_diff/filtering.py",
            "yaml_semantic_diff/protocols.py",
            "yaml_semantic_diff/result.py",
            "yaml_semantic_diff/algorithm/config.py",
            "yaml_semantic_diff/algorithm/engine.py",
            "yaml_semantic_diff/algorithm/matcher.py",
            "yaml_semantic_diff/algorithm/scalars.py",
            "yaml_semantic_diff/kubernetes/matcher.py",
            "yaml_semantic_diff/kubernetes/resource.py",
            "yaml_semantic_diff/kubernetes/similarity.py",
            "yaml_semantic_diff/loaders/local.py",
            "yaml_semantic_diff/loaders/remote.py",
            "yaml_semantic_diff/observability/logging.py",
            "yaml_semantic_diff/tree/chroot.py",
            "yaml_semantic_diff/tree/nodes.py",
            "yaml_semantic_diff/tree/ordered_mapping.py",
            "yaml_semantic_diff/tree/parser.py",
            "yaml_semantic_diff/tree/path.py",
            "yaml_semantic_diff/integrations/_pytest_plugin.py",
        ]
        with zipfile.ZipFile(wheel_path) as zf:
            names = zf.namelist()
            for module in expected_modules:
                assert any(module in n for n in names), f"Module {module} not found in wheel"

    def test_metadata_in_wheel(self, wheel_path: Path):  # type: ignore[no-untyped-def]
        with zipfile.ZipFile(wheel_path) as zf:
            metadata_files = [n for n in zf.namelist() if n.endswith("METADATA")]
            assert metadata_files, "No METADATA found in wheel"
            metadata = zf.read(metadata_files[0]).decode()
            assert "yaml-semantic-diff" in metadata.lower()
            assert "0.1.0" in metadata


class TestPytestPluginDiscovery:
    """Verify the pytest plugin is discoverable."""

    def test_entry_point_registered(self):  # type: ignore[no-untyped-def]
        from importlib.metadata import entry_points

        names = [ep.name for ep in entry_points(group="pytest11")]
        assert "yaml_semantic_diff" in names, f"Available: {names}"

    def test_fixture_available(self):  # type: ignore[no-untyped-def]
        import importlib

        mod = importlib.import_module("yaml_semantic_diff.integrations._pytest_plugin")
        assert hasattr(mod, "assert_yaml_equivalent")


class TestPackageMetadata:
    """Verify pyproject.toml metadata completeness."""

    def test_version(self):  # type: ignore[no-untyped-def]
        import yaml_semantic_diff

        assert yaml_semantic_diff.__version__ == "0.1.0"

    def test_public_exports(self):  # type: ignore[no-untyped-def]
        import yaml_semantic_diff

        expected = {
            "ChangeEntry",
            "ChangeKind",
            "DiffConfig",
            "DiffResult",
            "ExitCode",
            "compare",
            "compare_directories",
            "compare_files",
            "is_equivalent",
        }
        missing = expected - set(yaml_semantic_diff.__all__)
        assert not missing, f"Missing: {missing}"
