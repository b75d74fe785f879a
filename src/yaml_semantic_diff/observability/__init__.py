"""Structured logging helpers."""

from __future__ import annotations

from yaml_semantic_diff.observability.logging import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
