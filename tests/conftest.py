"""
Shared fixtures for the isolate-on-stack test suite.

Provides test fixtures for:
- Parsing CSS snippets
- Linting with a single rule enabled
- Temporary stylesheet projects for CLI tests
"""

import json
from collections.abc import Callable
from pathlib import Path

import pytest

from isolate_on_stack.config import LintConfig
from isolate_on_stack.linter import Linter
from isolate_on_stack.models import LintResult, Stylesheet
from isolate_on_stack.parser import parse_stylesheet


@pytest.fixture()
def parse() -> Callable[[str], Stylesheet]:
    """Parse a CSS snippet."""

    def _parse(css: str) -> Stylesheet:
        return parse_stylesheet(css, "test.css")

    return _parse


@pytest.fixture()
def lint_with_rule() -> Callable[..., LintResult]:
    """Lint a CSS snippet with exactly one rule enabled.

    Usage: lint_with_rule(css, "z-index-range", maxZIndex=50)
    """

    def _lint(css: str, rule: str, **options) -> LintResult:
        config = LintConfig().enable(rule, **options)
        return Linter(config).lint_source(css, "test.css")

    return _lint


@pytest.fixture()
def css_project(tmp_path: Path) -> Path:
    """Create a small project with stylesheets and a config file."""
    (tmp_path / "styles").mkdir()
    (tmp_path / "styles" / "clean.css").write_text(".card {\n  color: red;\n}\n")
    (tmp_path / "styles" / "redundant.css").write_text(
        ".modal {\n  position: relative;\n  z-index: 1;\n  isolation: isolate;\n}\n"
    )
    (tmp_path / ".isolate-on-stack.json").write_text(
        json.dumps({"rules": {"no-redundant-declaration": True}})
    )
    return tmp_path
