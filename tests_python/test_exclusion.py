"""Tests for the exclusion rules applied while staging."""

from __future__ import annotations

import pytest

from plugin_release import ExclusionRule, is_excluded
from plugin_release.exclusion import DEFAULT_EXCLUSIONS


@pytest.mark.parametrize(
    ("relative_path", "expected"),
    [
        pytest.param("views/index.es", True, id="source_suffix"),
        pytest.param("views/index.js", False, id="compiled_file"),
        pytest.param("assets/.DS_Store", True, id="os_metadata"),
        pytest.param("utils/node_modules/dep/index.js", True, id="nested_dependency"),
        pytest.param("utils/node_modules", True, id="dependency_dir"),
        pytest.param("i18n/en-US.json", False, id="locale"),
    ],
)
def test_default_rules(relative_path: str, expected: bool) -> None:
    """The default rules should drop sources, OS metadata, and dependencies."""

    assert is_excluded(relative_path, DEFAULT_EXCLUSIONS) is expected


def test_suffix_rule_checks_final_segment_only() -> None:
    """Suffix rules must not match directory names earlier in the path."""

    rule = ExclusionRule.suffix(".src")
    assert rule.matches("lib/a.src"), "file ending in .src should be excluded"
    assert not rule.matches("lib.src/a.js"), "directory suffix should not match"


def test_substring_rule_matches_anywhere() -> None:
    """Substring rules should match at any position in the relative path."""

    rule = ExclusionRule.substring("cache")
    assert rule.matches("views/.cache/entry.js")
    assert rule.matches("cache")
    assert not rule.matches("views/entry.js")


def test_no_rules_never_excludes() -> None:
    """An empty rule set should exclude nothing."""

    assert not is_excluded("anything/at/all.es", [])
