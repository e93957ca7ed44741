"""Exclusion rules that keep development files out of the staged tree."""

from __future__ import annotations

import dataclasses
import enum
import typing as typ
from pathlib import PurePath

__all__ = ["DEFAULT_EXCLUSIONS", "ExclusionRule", "RuleKind", "is_excluded"]


class RuleKind(enum.Enum):
    """How an :class:`ExclusionRule` pattern is compared with a path."""

    SUFFIX = "suffix"
    SUBSTRING = "contains"


@dataclasses.dataclass(slots=True, frozen=True)
class ExclusionRule:
    """A single exclusion pattern.

    Examples
    --------
    >>> ExclusionRule.suffix(".es").matches("views/index.es")
    True
    >>> ExclusionRule.substring("node_modules").matches("utils/node_modules/a.js")
    True
    """

    kind: RuleKind
    pattern: str

    @classmethod
    def suffix(cls, pattern: str) -> ExclusionRule:
        return cls(RuleKind.SUFFIX, pattern)

    @classmethod
    def substring(cls, pattern: str) -> ExclusionRule:
        return cls(RuleKind.SUBSTRING, pattern)

    def matches(self, relative_path: str) -> bool:
        """Return ``True`` when ``relative_path`` is caught by this rule."""
        if self.kind is RuleKind.SUFFIX:
            return PurePath(relative_path).name.endswith(self.pattern)
        return self.pattern in relative_path


DEFAULT_EXCLUSIONS: tuple[ExclusionRule, ...] = (
    ExclusionRule.suffix(".es"),
    ExclusionRule.substring(".DS_Store"),
    ExclusionRule.substring("node_modules"),
)


def is_excluded(relative_path: str, rules: typ.Iterable[ExclusionRule]) -> bool:
    """Return ``True`` if any rule in ``rules`` matches ``relative_path``."""
    return any(rule.matches(relative_path) for rule in rules)
