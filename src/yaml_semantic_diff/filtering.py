"""FilterEngine: include/exclude change entries by path.

Rules are evaluated against the dotted rendering of an entry's path
(``spec.containers[0].image``), whatever rendering is used for display.

- path rules match the path exactly, or as a prefix that ends at a path
  boundary (``.`` or ``[``): ``spec.replicas`` matches ``spec.replicas``
  but not ``spec.replicasMax``
- regex rules use ``re.search``

An entry is kept when there are no include rules or it matches at least
one of them, and it matches no exclude rule.  Path rules may also be
written in go-patch form (``/spec/replicas``).
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

from yaml_semantic_diff.algorithm.config import DiffConfig
from yaml_semantic_diff.errors import RegexCompileError
from yaml_semantic_diff.result import ChangeEntry
from yaml_semantic_diff.tree.path import Path

__all__ = ["FilterEngine", "path_matches"]


def path_matches(path: str, rule: str) -> bool:
    """Return True when ``rule`` equals ``path`` or is a boundary prefix of it."""
    if path == rule:
        return True
    if not rule or not path.startswith(rule):
        return False
    return path[len(rule)] in ".["


def _normalise_rule(rule: str) -> str:
    return Path.parse(rule).dotted() if rule.startswith("/") else rule


def _compile(patterns: Iterable[str]) -> tuple[re.Pattern[str], ...]:
    compiled = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern))
        except re.error as exc:
            raise RegexCompileError(pattern, str(exc)) from exc
    return tuple(compiled)


@dataclass(frozen=True, slots=True)
class FilterEngine:
    """Compiled include/exclude rules."""

    include_paths: tuple[str, ...] = ()
    exclude_paths: tuple[str, ...] = ()
    include_patterns: tuple[re.Pattern[str], ...] = ()
    exclude_patterns: tuple[re.Pattern[str], ...] = ()

    @classmethod
    def from_config(cls, config: DiffConfig) -> FilterEngine:
        """Compile the rules in ``config``.

        Raises:
            RegexCompileError: When a pattern is not a valid regex.
            InvalidPathError: When a go-patch path rule is malformed.
        """
        return cls(
            include_paths=tuple(_normalise_rule(r) for r in config.filter_paths),
            exclude_paths=tuple(_normalise_rule(r) for r in config.exclude_paths),
            include_patterns=_compile(config.filter_regexps),
            exclude_patterns=_compile(config.exclude_regexps),
        )

    @property
    def is_empty(self) -> bool:
        return not (
            self.include_paths or self.exclude_paths or self.include_patterns or self.exclude_patterns
        )

    def keeps(self, entry: ChangeEntry) -> bool:
        path = entry.path.dotted()
        has_include = bool(self.include_paths or self.include_patterns)
        if has_include and not self._matches(path, self.include_paths, self.include_patterns):
            return False
        return not self._matches(path, self.exclude_paths, self.exclude_patterns)

    def apply(self, entries: Iterable[ChangeEntry]) -> list[ChangeEntry]:
        """Return the entries that pass the rules, in their original order."""
        if self.is_empty:
            return list(entries)
        return [entry for entry in entries if self.keeps(entry)]

    @staticmethod
    def _matches(
        path: str,
        rules: tuple[str, ...],
        patterns: tuple[re.Pattern[str], ...],
    ) -> bool:
        return any(path_matches(path, rule) for rule in rules) or any(
            pattern.search(path) for pattern in patterns
        )
