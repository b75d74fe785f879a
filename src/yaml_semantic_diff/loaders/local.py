"""FileLoader: read YAML input from the local filesystem."""

from __future__ import annotations

from pathlib import Path

from yaml_semantic_diff.errors import LoadError


class FileLoader:
    """Reads a local file into bytes."""

    def __repr__(self) -> str:
        return "FileLoader()"

    def load(self, source: str) -> bytes:
        path = Path(source)
        if path.is_dir():
            raise LoadError(source, "is a directory")
        try:
            return path.read_bytes()
        except FileNotFoundError as exc:
            raise LoadError(source, "file does not exist") from exc
        except OSError as exc:
            raise LoadError(source, exc.strerror or str(exc)) from exc
