"""Base rule class for stacking-context linting.

This module defines the abstract base class for all rules and the
context they evaluate against. Rules are pure: they read the parsed
stylesheet and the collected property maps and return diagnostics,
leaving reporting to the engine.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field

from ..collector import PropertyCollector, PropertyMap, selector_key
from ..config import RuleOptions
from ..messages import rule_name
from ..models import Declaration, Diagnostic, Fix, RuleBlock, Severity, Stylesheet


@dataclass(frozen=True)
class RuleContext:
    """Everything a rule needs for one lint pass.

    Property maps are collected once per pass and shared read-only by
    every rule.
    """

    stylesheet: Stylesheet
    properties: Mapping[str, PropertyMap]
    options: RuleOptions = field(default_factory=RuleOptions)
    collector: PropertyCollector = field(default_factory=PropertyCollector)

    def property_map(self, block: RuleBlock) -> PropertyMap:
        """Merged property map for the block's selector."""
        key = selector_key(block.selector)
        found = self.properties.get(key)
        if found is None:
            return PropertyMap(key, parent_display=block.parent_display)
        return found

    def is_ignored(self, block: RuleBlock) -> bool:
        """True when the block's selector matches `ignoreSelectors`."""
        return self.options.is_selector_ignored(block.selector)

    def blocks(self):
        """Rule blocks not excluded by `ignoreSelectors`, in document order."""
        return [block for block in self.stylesheet.rules if not self.is_ignored(block)]


class BaseRule(ABC):
    """Abstract base class for stacking-context rules.

    All rules must inherit from this class and implement the required
    abstract members. Rules are responsible for:
    - Defining their short name (the id adds the namespace)
    - Specifying default severity
    - Implementing evaluation logic without side effects
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Short rule name, e.g. 'z-index-range'."""

    @property
    def rule_id(self) -> str:
        """Fully qualified rule identifier."""
        return rule_name(self.name)

    @property
    def default_severity(self) -> Severity:
        return Severity.ERROR

    @property
    def description(self) -> str:
        """Human-readable description of what this rule checks."""
        return f"Rule {self.rule_id}"

    @abstractmethod
    def evaluate(self, context: RuleContext) -> list[Diagnostic]:
        """Evaluate the rule and return diagnostics.

        Args:
            context: RuleContext for one stylesheet.

        Returns:
            Diagnostics in document order.
        """

    def get_severity(self, options: RuleOptions) -> Severity:
        """Configured severity, or the rule default."""
        return options.severity or self.default_severity

    def _create_diagnostic(
        self,
        message: str,
        node: Declaration | RuleBlock | Stylesheet,
        context: RuleContext,
        fix: Fix | None = None,
    ) -> Diagnostic:
        return Diagnostic(
            rule_id=self.rule_id,
            message=message,
            node=node,
            severity=self.get_severity(context.options),
            fix=fix,
        )

    def _isolate_declarations(self, block: RuleBlock) -> list[Declaration]:
        """The block's `isolation: isolate` declarations."""
        return [
            decl
            for decl in block.declarations_named("isolation")
            if decl.normalized_value == "isolate"
        ]
