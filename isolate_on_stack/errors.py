"""Structured error types with recovery suggestions.

Errors raised outside of rule evaluation (configuration, file access)
carry a category, an optional suggestion and the exit code the CLI
should use when the error ends a run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# Exit code used by stylelint-compatible tooling for invalid configuration
CONFIG_EXIT_CODE = 78


class ErrorCategory(Enum):
    """Categories of linter errors."""

    CONFIGURATION = "configuration"  # Invalid config file or rule options
    FILE_SYSTEM = "file_system"  # Unreadable stylesheet
    RUNTIME = "runtime"  # Unexpected errors


@dataclass
class LintError(Exception):
    """Base class for structured linter errors.

    Attributes:
        category: Error category for grouping.
        message: Human-readable error message.
        suggestion: Optional actionable recovery suggestion.
        details: Optional additional details dict.
        exit_code: Exit code to use when this error terminates the CLI.
    """

    category: ErrorCategory
    message: str
    suggestion: str | None = None
    details: dict[str, Any] | None = field(default_factory=dict)
    exit_code: int = 1

    def __post_init__(self) -> None:
        """Initialize the exception with the message."""
        super().__init__(self.message)

    def format(self, use_color: bool = True) -> str:
        """Format the error for display.

        Args:
            use_color: Whether to include ANSI color codes.

        Returns:
            Formatted error string with suggestion if available.
        """
        red = "\033[91m" if use_color else ""
        cyan = "\033[96m" if use_color else ""
        dim = "\033[2m" if use_color else ""
        reset = "\033[0m" if use_color else ""

        lines = [f"{red}Error:{reset} {self.message}"]

        if self.suggestion:
            lines.append(f"{cyan}Suggestion:{reset} {self.suggestion}")

        if self.details:
            for key, value in self.details.items():
                lines.append(f"{dim}  {key}: {value}{reset}")

        return "\n".join(lines)

    def __str__(self) -> str:
        """Return the formatted error message."""
        return self.format(use_color=False)


class ConfigurationError(LintError):
    """Error in the configuration file or in a rule's options."""

    def __init__(
        self,
        message: str,
        config_file: str | None = None,
        suggestion: str | None = None,
        problems: list[str] | None = None,
    ):
        details: dict[str, Any] = {}
        if config_file:
            details["config_file"] = config_file
        for index, problem in enumerate(problems or [], 1):
            details[f"problem {index}"] = problem

        super().__init__(
            category=ErrorCategory.CONFIGURATION,
            message=message,
            suggestion=suggestion
            or "Check your configuration file syntax and rule options",
            details=details or None,
            exit_code=CONFIG_EXIT_CODE,
        )
        self.problems = list(problems or [])


class StylesheetReadError(LintError):
    """Error when a stylesheet cannot be read or decoded."""

    def __init__(self, file_path: str, original_error: str | None = None):
        message = f"Cannot read stylesheet: {file_path}"
        if original_error:
            message = f"{message}: {original_error}"

        super().__init__(
            category=ErrorCategory.FILE_SYSTEM,
            message=message,
            suggestion="Verify the file exists, is readable and is valid text",
            details={"file": file_path},
            exit_code=1,
        )
        self.file_path = file_path


def handle_exception(
    error: Exception,
    use_color: bool = True,
    verbose: bool = False,
) -> tuple[str, int]:
    """Convert any exception to formatted output and exit code.

    Args:
        error: The exception to handle.
        use_color: Whether to use color in output.
        verbose: Whether to include full traceback.

    Returns:
        Tuple of (formatted_message, exit_code).
    """
    import traceback

    if isinstance(error, LintError):
        message = error.format(use_color=use_color)
        exit_code = error.exit_code
    else:
        red = "\033[91m" if use_color else ""
        reset = "\033[0m" if use_color else ""
        message = f"{red}Error:{reset} {error}"
        exit_code = 1

    if verbose:
        message += "\n\nTraceback:\n" + traceback.format_exc()

    return message, exit_code
