"""Default ``Loader`` implementations for local files and HTTP(S) URLs."""

from __future__ import annotations

from yaml_semantic_diff.loaders.local import FileLoader
from yaml_semantic_diff.loaders.remote import (
    DEFAULT_TIMEOUT,
    MAX_RESPONSE_SIZE,
    HttpLoader,
    SourceLoader,
    is_remote_source,
)

__all__ = [
    "DEFAULT_TIMEOUT",
    "MAX_RESPONSE_SIZE",
    "FileLoader",
    "HttpLoader",
    "SourceLoader",
    "is_remote_source",
]
