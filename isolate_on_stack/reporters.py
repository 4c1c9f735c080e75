"""Diagnostic sinks and output reporters.

`DiagnosticReporter` is the append-only per-file sink the rule engine
reports into. `CLIReporter` and `JSONReporter` render finished results.
"""

import json
import sys
from typing import Any, TextIO

from .models import Diagnostic, LintResult, Severity


class DiagnosticReporter:
    """Append-only collection of diagnostics for one stylesheet."""

    def __init__(self, file_path: str | None = None):
        self.file_path = file_path
        self._diagnostics: list[Diagnostic] = []

    def report(self, diagnostic: Diagnostic) -> None:
        """Record a diagnostic."""
        self._diagnostics.append(diagnostic)

    def extend(self, diagnostics: list[Diagnostic]) -> None:
        for diagnostic in diagnostics:
            self.report(diagnostic)

    @property
    def diagnostics(self) -> tuple[Diagnostic, ...]:
        """Diagnostics recorded so far, in report order."""
        return tuple(self._diagnostics)

    def __len__(self) -> int:
        return len(self._diagnostics)

    def to_result(self, output: str | None = None) -> LintResult:
        """Build the LintResult for this file."""
        return LintResult(
            file_path=self.file_path,
            diagnostics=list(self._diagnostics),
            output=output,
        )


class CLIReporter:
    """CLI reporter with color-coded output.

    Format: file:line:column  severity  message  (rule-id)
    Colors: red=error, yellow=warning

    Example output:
        src/modal.css:4:3  error  Redundant 'isolation: isolate'. ...  (isolate-on-stack/no-redundant-declaration)

        1 problem (1 error, 0 warnings)
    """

    COLORS = {
        Severity.ERROR: "\033[0;31m",  # Red
        Severity.WARNING: "\033[1;33m",  # Yellow
    }
    RESET = "\033[0m"
    DIM = "\033[2m"

    def __init__(self, stream: TextIO = sys.stdout, use_color: bool | None = None):
        """Initialize the CLI reporter.

        Args:
            stream: Output stream (default: stdout).
            use_color: Whether to use ANSI colors. Auto-detects if None.
        """
        self.stream = stream
        if use_color is None:
            self.use_color = hasattr(stream, "isatty") and stream.isatty()
        else:
            self.use_color = use_color

    def report(self, results: list[LintResult]) -> None:
        """Output diagnostics for every file, then a summary line."""
        for result in results:
            for diagnostic in result.diagnostics:
                self._report_diagnostic(diagnostic, result.file_path)
        self._print_summary(results)

    def _report_diagnostic(self, diagnostic: Diagnostic, file_path: str | None) -> None:
        location = f"{file_path or '<input>'}:{diagnostic.line}:{diagnostic.column}"
        severity = diagnostic.severity.value
        reset = self.RESET if self.use_color else ""
        dim = self.DIM if self.use_color else ""
        color = self.COLORS.get(diagnostic.severity, "") if self.use_color else ""

        line = (
            f"{location}  {color}{severity}{reset}  {diagnostic.message}  "
            f"{dim}({diagnostic.rule_id}){reset}"
        )
        print(line, file=self.stream)

    def _print_summary(self, results: list[LintResult]) -> None:
        errors = sum(r.error_count for r in results)
        warnings = sum(r.warning_count for r in results)
        total = errors + warnings

        if total == 0:
            summary = f"No problems found in {len(results)} file(s)"
        else:
            noun = "problem" if total == 1 else "problems"
            summary = f"\n{total} {noun} ({errors} error(s), {warnings} warning(s))"

        print(summary, file=self.stream)


class JSONReporter:
    """JSON reporter in the stylelint result shape.

    Output format:
    [
        {
            "source": "path/to/file.css",
            "errored": bool,
            "warnings": [{"line", "column", "rule", "severity", "text"}]
        }
    ]
    """

    def __init__(self, stream: TextIO = sys.stdout):
        """Initialize the JSON reporter.

        Args:
            stream: Output stream (default: stdout).
        """
        self.stream = stream

    def report(self, results: list[LintResult]) -> list[dict[str, Any]]:
        """Output results as JSON.

        Returns:
            The output list (also written to stream).
        """
        output = [result.to_dict() for result in results]
        print(json.dumps(output, indent=2), file=self.stream)
        return output
