"""Tests for structlog setup and the events library modules emit."""

from __future__ import annotations

import json
from collections.abc import Iterator

import pytest
import structlog
from structlog.testing import capture_logs

from yaml_semantic_diff import DiffConfig, compare
from yaml_semantic_diff.observability import get_logger, setup_logging


@pytest.fixture
def reset_structlog() -> Iterator[None]:
    yield
    structlog.reset_defaults()


class TestSetupLogging:
    def test_json_to_stderr(self, reset_structlog: None, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging("debug")
        get_logger("test").info("hello", answer=42)
        line = capsys.readouterr().err.strip().splitlines()[-1]
        payload = json.loads(line)
        assert payload["event"] == "hello"
        assert payload["component"] == "test"
        assert payload["answer"] == 42
        assert payload["level"] == "info"
        assert "ts" in payload

    def test_level_filters(self, reset_structlog: None, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging("warning")
        get_logger("test").info("quiet")
        assert capsys.readouterr().err == ""


class TestLibraryEvents:
    def test_rename_logged(self) -> None:
        a = "apiVersion: v1\nkind: ConfigMap\nmetadata: {name: old}\ndata: {k: v}\n"
        b = a.replace("name: old", "name: new")
        with capture_logs() as logs:
            compare(a, b, DiffConfig())
        events = [entry["event"] for entry in logs]
        assert "kubernetes_mode" in events
        assert "rename_detected" in events
        rename = next(entry for entry in logs if entry["event"] == "rename_detected")
        assert rename["from_resource"] == "v1:ConfigMap:old"
        assert rename["to_resource"] == "v1:ConfigMap:new"
