"""Data models for stacking-context linting.

This module defines the parsed stylesheet structures the rules read
(declarations, rule blocks, stylesheets) and the diagnostics they
produce. Parsed structures are frozen: rules never mutate the tree.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Severity(Enum):
    """Severity levels for diagnostics."""

    ERROR = "error"  # Fails the lint run
    WARNING = "warning"  # Reported but does not fail the run


@dataclass(frozen=True)
class SourceLocation:
    """Position of a node in a stylesheet (1-based line and column)."""

    file_path: str | None
    line: int
    column: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "file_path": self.file_path,
            "line": self.line,
            "column": self.column,
        }

    def __str__(self) -> str:
        """Return file:line:column format for easy navigation."""
        return f"{self.file_path or '<input>'}:{self.line}:{self.column}"


@dataclass(frozen=True)
class Declaration:
    """A single `property: value` pair taken verbatim from a rule block."""

    property: str
    value: str
    location: SourceLocation
    important: bool = False

    @property
    def name(self) -> str:
        """Property name normalized for comparison."""
        return self.property.lower()

    @property
    def normalized_value(self) -> str:
        """Value normalized for case-insensitive comparison."""
        return self.value.strip().lower()

    def __str__(self) -> str:
        return f"{self.property}: {self.value}"


@dataclass(frozen=True)
class RuleBlock:
    """A qualified rule: a selector and its ordered declarations.

    Annotations come from a comment placed directly before the block,
    e.g. ``/* @parent-display: flex */`` or ``/* @descendants: 150 */``.
    """

    selector: str
    declarations: tuple[Declaration, ...]
    location: SourceLocation
    annotations: dict[str, str] = field(default_factory=dict, compare=False)

    def declarations_named(self, name: str) -> list[Declaration]:
        """Get declarations for a property, in source order."""
        name = name.lower()
        return [decl for decl in self.declarations if decl.name == name]

    def last_declaration(self, name: str) -> Declaration | None:
        """Get the last declaration for a property, if any."""
        matches = self.declarations_named(name)
        return matches[-1] if matches else None

    @property
    def parent_display(self) -> str | None:
        """Display value of the parent element, when annotated."""
        value = self.annotations.get("parent-display")
        return value.lower() if value else None


@dataclass(frozen=True)
class Stylesheet:
    """A parsed stylesheet: rule blocks in document order."""

    rules: tuple[RuleBlock, ...] = ()
    file_path: str | None = None
    source: str = ""

    @property
    def location(self) -> SourceLocation:
        """Location used for diagnostics that concern the whole file."""
        return SourceLocation(self.file_path, 1, 1)

    def walk_declarations(self):
        """Yield (rule block, declaration) pairs in document order."""
        for block in self.rules:
            for decl in block.declarations:
                yield block, decl


@dataclass(frozen=True)
class Fix:
    """Text insertion that resolves a diagnostic.

    The text is inserted after the declaration that starts at
    (line, column), or after the last declaration of the block.
    """

    line: int
    column: int
    text: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"line": self.line, "column": self.column, "text": self.text}


@dataclass(frozen=True)
class Diagnostic:
    """A lint finding reported against a declaration or rule block."""

    rule_id: str
    message: str
    node: Declaration | RuleBlock | Stylesheet
    severity: Severity = Severity.ERROR
    fix: Fix | None = None

    @property
    def location(self) -> SourceLocation:
        return self.node.location

    @property
    def line(self) -> int:
        return self.location.line

    @property
    def column(self) -> int:
        return self.location.column

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary in the host framework's warning shape."""
        result = {
            "line": self.line,
            "column": self.column,
            "rule": self.rule_id,
            "severity": self.severity.value,
            "text": f"{self.message} ({self.rule_id})",
        }
        if self.fix:
            result["fix"] = self.fix.to_dict()
        return result


@dataclass
class LintResult:
    """Diagnostics for one stylesheet."""

    file_path: str | None
    diagnostics: list[Diagnostic] = field(default_factory=list)
    output: str | None = None  # Fixed source when fixes were applied

    @property
    def errored(self) -> bool:
        """True if any diagnostic has error severity."""
        return any(d.severity == Severity.ERROR for d in self.diagnostics)

    @property
    def error_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.severity == Severity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.severity == Severity.WARNING)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "source": self.file_path,
            "errored": self.errored,
            "warnings": [d.to_dict() for d in self.diagnostics],
        }
