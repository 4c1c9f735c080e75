"""Batch linting facade: read, parse, lint and optionally fix stylesheets."""

import time
from collections.abc import Iterable, Mapping
from pathlib import Path

from .config import LintConfig
from .errors import StylesheetReadError
from .fixer import apply_fixes, fixes_for
from .linter_logging import LogCategory, get_category_logger
from .messages import rule_name
from .models import Diagnostic, LintResult, Severity, Stylesheet
from .parser import parse_stylesheet
from .rules.engine import RuleEngine, create_rule_engine

logger = get_category_logger(LogCategory.RULES)

READ_ERROR_RULE = rule_name("read-error")
WRITE_ERROR_RULE = rule_name("write-error")


class Linter:
    """Lints stylesheets with one configured rule engine.

    Files are independent: a failure reading one file is reported as a
    diagnostic for that file and the batch continues.
    """

    def __init__(self, config: LintConfig | None = None, engine: RuleEngine | None = None):
        """Initialize the linter.

        Args:
            config: Rule table; defaults to the recommended rules.
            engine: Pre-built engine (overrides config).

        Raises:
            ConfigurationError: If the config is invalid.
        """
        self.engine = engine or create_rule_engine(config)

    def lint_source(
        self,
        css: str,
        file_path: str | None = None,
        fix: bool = False,
        parent_displays: Mapping[str, str] | None = None,
    ) -> LintResult:
        """Lint stylesheet text.

        Args:
            css: Stylesheet source.
            file_path: Path used in diagnostics.
            fix: Apply autofixes; the fixed text is returned in
                `LintResult.output` and remaining diagnostics are for it.
            parent_displays: Optional selector to parent display mapping.

        Returns:
            LintResult for the stylesheet.
        """
        stylesheet = parse_stylesheet(css, file_path)
        result = self.engine.lint(stylesheet, parent_displays=parent_displays)

        if fix:
            fixes = fixes_for(result.diagnostics)
            if fixes:
                fixed = apply_fixes(css, fixes)
                logger.info(f"Applied {len(fixes)} fix(es) to {file_path or '<input>'}")
                result = self.engine.lint(
                    parse_stylesheet(fixed, file_path), parent_displays=parent_displays
                )
                result.output = fixed
        return result

    def lint_file(self, path: Path | str, fix: bool = False) -> LintResult:
        """Lint one file; unreadable files yield an error diagnostic."""
        file_path = str(path)
        start_time = time.time()

        try:
            css = read_stylesheet(Path(path))
        except StylesheetReadError as e:
            logger.warning(e.message, extra={"file_path": file_path})
            return LintResult(
                file_path=file_path,
                diagnostics=[
                    Diagnostic(
                        rule_id=READ_ERROR_RULE,
                        message=e.message,
                        node=Stylesheet(file_path=file_path),
                        severity=Severity.ERROR,
                    )
                ],
            )

        result = self.lint_source(css, file_path, fix=fix)
        logger.debug(
            f"Linted {file_path}: {len(result.diagnostics)} diagnostic(s)",
            extra={"file_path": file_path, "duration_ms": (time.time() - start_time) * 1000},
        )
        return result

    def lint_files(self, paths: Iterable[Path | str], fix: bool = False) -> list[LintResult]:
        """Lint several files in order."""
        return [self.lint_file(path, fix=fix) for path in paths]

    def write_fixed(self, result: LintResult) -> bool:
        """Write a fixed result back to its file.

        A failed write is logged and reported as an error diagnostic on
        the result, so the rest of the batch is still written and shown.

        Returns:
            True when the file was rewritten.
        """
        if result.output is None or not result.file_path:
            return False
        try:
            Path(result.file_path).write_text(result.output, encoding="utf-8")
        except OSError as e:
            message = f"Cannot write fixed stylesheet: {result.file_path}: {e}"
            logger.error(message, extra={"file_path": result.file_path})
            result.diagnostics.append(
                Diagnostic(
                    rule_id=WRITE_ERROR_RULE,
                    message=message,
                    node=Stylesheet(file_path=result.file_path),
                    severity=Severity.ERROR,
                )
            )
            return False
        logger.info(f"Fixed {result.file_path}", extra={"file_path": result.file_path})
        return True


def read_stylesheet(path: Path) -> str:
    """Read a stylesheet as UTF-8 text (a BOM is dropped).

    Raises:
        StylesheetReadError: If the file cannot be read or decoded.
    """
    try:
        return path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise StylesheetReadError(str(path), str(e)) from e


def lint_source(
    css: str,
    config: LintConfig | None = None,
    file_path: str | None = None,
    fix: bool = False,
) -> LintResult:
    """Lint stylesheet text with a one-off linter."""
    return Linter(config).lint_source(css, file_path, fix=fix)
