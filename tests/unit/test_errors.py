"""Unit tests for isolate_on_stack.errors and isolate_on_stack.models."""

from isolate_on_stack.errors import (
    CONFIG_EXIT_CODE,
    ConfigurationError,
    ErrorCategory,
    StylesheetReadError,
    handle_exception,
)
from isolate_on_stack.models import (
    Declaration,
    Diagnostic,
    LintResult,
    RuleBlock,
    Severity,
    SourceLocation,
    Stylesheet,
)


class TestConfigurationError:
    """Tests for ConfigurationError."""

    def test_attributes(self):
        error = ConfigurationError(
            "Invalid options", config_file="a.json", problems=["first", "second"]
        )

        assert error.category == ErrorCategory.CONFIGURATION
        assert error.exit_code == CONFIG_EXIT_CODE
        assert error.problems == ["first", "second"]
        assert error.details == {
            "config_file": "a.json",
            "problem 1": "first",
            "problem 2": "second",
        }

    def test_format_without_color(self):
        text = ConfigurationError("Invalid options", suggestion="Fix it").format(use_color=False)

        assert text.splitlines()[:2] == ["Error: Invalid options", "Suggestion: Fix it"]
        assert "\033[" not in text

    def test_str(self):
        assert str(ConfigurationError("Bad")).startswith("Error: Bad")


class TestStylesheetReadError:
    def test_message(self):
        error = StylesheetReadError("a.css", "No such file")

        assert error.message == "Cannot read stylesheet: a.css: No such file"
        assert error.file_path == "a.css"
        assert error.exit_code == 1


class TestHandleException:
    """Tests for handle_exception."""

    def test_lint_error(self):
        message, code = handle_exception(ConfigurationError("Bad"), use_color=False)

        assert code == CONFIG_EXIT_CODE
        assert message.startswith("Error: Bad")

    def test_generic_exception(self):
        message, code = handle_exception(RuntimeError("boom"), use_color=False)

        assert (message, code) == ("Error: boom", 1)


class TestModels:
    """Tests for the parsed tree and diagnostic models."""

    def test_declaration_normalization(self):
        decl = Declaration("Z-Index", " AUTO ", SourceLocation(None, 1, 1))

        assert decl.name == "z-index"
        assert decl.normalized_value == "auto"
        assert decl.value == " AUTO "

    def test_location_str(self):
        assert str(SourceLocation(None, 3, 7)) == "<input>:3:7"

    def test_rule_block_helpers(self):
        location = SourceLocation(None, 1, 1)
        first = Declaration("z-index", "1", location)
        second = Declaration("Z-INDEX", "2", location)
        block = RuleBlock(".a", (first, second), location, {"parent-display": "Flex"})

        assert block.declarations_named("z-index") == [first, second]
        assert block.last_declaration("z-index") is second
        assert block.last_declaration("opacity") is None
        assert block.parent_display == "flex"

    def test_rule_block_hashable(self):
        block = RuleBlock(".a", (), SourceLocation(None, 1, 1), {"descendants": "5"})

        assert hash(block) == hash(RuleBlock(".a", (), SourceLocation(None, 1, 1)))

    def test_stylesheet_location(self):
        assert Stylesheet(file_path="a.css").location == SourceLocation("a.css", 1, 1)

    def test_lint_result_counts(self):
        node = Stylesheet()
        result = LintResult(
            None,
            [
                Diagnostic("r", "m", node, Severity.WARNING),
                Diagnostic("r", "m", node, Severity.WARNING),
                Diagnostic("s", "m", node),
            ],
        )

        assert result.warning_count == 2
        assert result.error_count == 1
        assert result.errored

    def test_warnings_only_not_errored(self):
        result = LintResult(None, [Diagnostic("r", "m", Stylesheet(), Severity.WARNING)])

        assert not result.errored
