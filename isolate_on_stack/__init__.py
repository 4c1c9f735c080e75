"""isolate-on-stack: stacking-context analysis for CSS.

Detects when rule blocks create stacking contexts and flags misuse of
`isolation: isolate` relative to that.
"""

__version__ = "1.0.0"

from .collector import PropertyCollector, PropertyMap
from .config import ConfigLoader, LintConfig, RuleOptions
from .errors import ConfigurationError, LintError, StylesheetReadError
from .linter import Linter, lint_source
from .models import Declaration, Diagnostic, Fix, LintResult, RuleBlock, Severity, Stylesheet
from .parser import parse_stylesheet
from .selectors import estimate_descendant_count
from .stacking import creates_stacking_context, isolation_is_isolate

__all__ = [
    "__version__",
    "ConfigLoader",
    "ConfigurationError",
    "Declaration",
    "Diagnostic",
    "Fix",
    "LintConfig",
    "LintError",
    "LintResult",
    "Linter",
    "PropertyCollector",
    "PropertyMap",
    "RuleBlock",
    "RuleOptions",
    "Severity",
    "Stylesheet",
    "StylesheetReadError",
    "creates_stacking_context",
    "estimate_descendant_count",
    "isolation_is_isolate",
    "lint_source",
    "parse_stylesheet",
]
