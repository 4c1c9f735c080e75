"""Unit tests for isolate_on_stack.fixer module."""

from isolate_on_stack.config import LintConfig
from isolate_on_stack.fixer import apply_fixes
from isolate_on_stack.linter import Linter
from isolate_on_stack.models import Fix

ISOLATION = "isolation: isolate"


class TestApplyFixes:
    """Tests for apply_fixes."""

    def test_multiline_block(self):
        source = ".a {\n  position: absolute;\n  z-index: 10;\n}\n"

        fixed = apply_fixes(source, [Fix(3, 3, ISOLATION)])

        assert fixed == ".a {\n  position: absolute;\n  z-index: 10;\n  isolation: isolate;\n}\n"

    def test_single_line_block(self):
        source = ".a { position: absolute; z-index: 10; }"

        fixed = apply_fixes(source, [Fix(1, 26, ISOLATION)])

        assert fixed == ".a { position: absolute; z-index: 10; isolation: isolate; }"

    def test_missing_semicolon(self):
        source = ".a { position: absolute; z-index: 10 }"

        fixed = apply_fixes(source, [Fix(1, 26, ISOLATION)])

        assert fixed == ".a { position: absolute; z-index: 10; isolation: isolate }"

    def test_missing_semicolon_multiline(self):
        source = ".a {\n  position: absolute;\n  z-index: 10\n}"

        fixed = apply_fixes(source, [Fix(3, 3, ISOLATION)])

        assert fixed == ".a {\n  position: absolute;\n  z-index: 10;\n  isolation: isolate\n}"

    def test_skips_semicolons_in_strings_and_parens(self):
        source = '.a { background: url("a;b.png"); z-index: 1; }'

        fixed = apply_fixes(source, [Fix(1, 6, ISOLATION)])

        assert fixed == '.a { background: url("a;b.png"); isolation: isolate; z-index: 1; }'

    def test_multiple_fixes_applied_back_to_front(self):
        source = ".a { z-index: 1; }\n.b { z-index: 2; }\n"

        fixed = apply_fixes(source, [Fix(1, 6, ISOLATION), Fix(2, 6, ISOLATION)])

        assert fixed == (
            ".a { z-index: 1; isolation: isolate; }\n.b { z-index: 2; isolation: isolate; }\n"
        )

    def test_duplicate_fixes_applied_once(self):
        source = ".a { z-index: 1; }"

        fixed = apply_fixes(source, [Fix(1, 6, ISOLATION), Fix(1, 6, ISOLATION)])

        assert fixed.count(ISOLATION) == 1

    def test_out_of_range_fix_skipped(self):
        source = ".a { z-index: 1; }"

        assert apply_fixes(source, [Fix(9, 1, ISOLATION)]) == source

    def test_no_fixes(self):
        assert apply_fixes(".a {}", []) == ".a {}"


class TestLinterFix:
    """Tests for fixing through the linter."""

    def test_fix_then_clean(self):
        config = LintConfig().enable("isolation-for-position-zindex")
        source = ".a {\n  position: absolute;\n  z-index: 10;\n}\n"

        result = Linter(config).lint_source(source, "a.css", fix=True)

        assert result.output == (
            ".a {\n  position: absolute;\n  z-index: 10;\n  isolation: isolate;\n}\n"
        )
        assert result.diagnostics == []

    def test_fix_without_fixable_diagnostics(self):
        config = LintConfig().enable("z-index-range")

        result = Linter(config).lint_source(".a { z-index: 500; }", fix=True)

        assert result.output is None
        assert len(result.diagnostics) == 1
