"""Unit tests for isolate_on_stack.linter module."""

from pathlib import Path

import pytest

from isolate_on_stack.config import LintConfig
from isolate_on_stack.errors import StylesheetReadError
from isolate_on_stack.linter import (
    READ_ERROR_RULE,
    WRITE_ERROR_RULE,
    Linter,
    lint_source,
    read_stylesheet,
)
from isolate_on_stack.models import Severity


class TestLintSource:
    """Tests for linting stylesheet text."""

    def test_recommended_by_default(self):
        css = ".x { position: relative; z-index: 1; isolation: isolate; }"

        result = lint_source(css)

        assert [d.rule_id for d in result.diagnostics] == [
            "isolate-on-stack/no-redundant-declaration"
        ]

    def test_scenario_no_diagnostics(self):
        result = lint_source(".a { position: absolute; z-index: 1; }")

        assert result.diagnostics == []
        assert not result.errored

    def test_scenario_div_isolation(self):
        result = lint_source("div { isolation: isolate; }")

        assert [d.rule_id for d in result.diagnostics] == [
            "isolate-on-stack/performance-high-descendant-count"
        ]

    def test_parent_displays(self):
        config = LintConfig().enable("no-redundant-declaration")
        css = ".item { z-index: 1; isolation: isolate; }"

        result = Linter(config).lint_source(css, parent_displays={".item": "grid"})

        assert len(result.diagnostics) == 1

    def test_empty_value_ignored(self):
        result = lint_source(".a { z-index: ; } .b { transform: translateZ(0); }")

        assert [d.node.property for d in result.diagnostics] == ["transform"]


class TestLintFiles:
    """Tests for the multi-file batch."""

    def test_unreadable_file_reported(self, tmp_path: Path):
        good = tmp_path / "good.css"
        good.write_text(".a { z-index: 500; }")
        missing = tmp_path / "missing.css"

        results = Linter(LintConfig().enable("z-index-range")).lint_files([missing, good])

        assert results[0].file_path == str(missing)
        assert results[0].diagnostics[0].rule_id == READ_ERROR_RULE
        assert results[0].diagnostics[0].severity == Severity.ERROR
        assert len(results[1].diagnostics) == 1

    def test_invalid_utf8(self, tmp_path: Path):
        path = tmp_path / "binary.css"
        path.write_bytes(b"\xff\xfe\x00garbage")

        with pytest.raises(StylesheetReadError):
            read_stylesheet(path)

    def test_bom_dropped(self, tmp_path: Path):
        path = tmp_path / "bom.css"
        path.write_bytes(b"\xef\xbb\xbf.a { opacity: 1; }")

        assert read_stylesheet(path) == ".a { opacity: 1; }"

    def test_diagnostic_locations_carry_path(self, tmp_path: Path):
        path = tmp_path / "a.css"
        path.write_text(".a { z-index: 500; }")

        result = Linter(LintConfig().enable("z-index-range")).lint_file(path)

        assert str(result.diagnostics[0].location) == f"{path}:1:6"


class TestWriteFixed:
    """Tests for writing fixed stylesheets back to disk."""

    CSS = ".popover {\n  position: absolute;\n  z-index: 5;\n}\n"

    def test_writes_output(self, tmp_path: Path):
        path = tmp_path / "popover.css"
        path.write_text(self.CSS)
        linter = Linter(LintConfig().enable("isolation-for-position-zindex"))
        result = linter.lint_file(path, fix=True)

        assert linter.write_fixed(result) is True
        assert "isolation: isolate;" in path.read_text()

    def test_nothing_to_write(self, tmp_path: Path):
        path = tmp_path / "clean.css"
        path.write_text(".a { color: red; }")
        linter = Linter(LintConfig().enable("isolation-for-position-zindex"))
        result = linter.lint_file(path, fix=True)

        assert linter.write_fixed(result) is False

    def test_unwritable_path_reported(self, tmp_path: Path):
        linter = Linter(LintConfig().enable("isolation-for-position-zindex"))
        result = linter.lint_source(self.CSS, str(tmp_path), fix=True)

        assert linter.write_fixed(result) is False
        assert result.diagnostics[-1].rule_id == WRITE_ERROR_RULE
        assert result.errored
