"""Rule engine for stacking-context linting.

This module provides the RuleEngine class that orchestrates rule
evaluation and manages rule registration. A lint pass runs in two
phases: rules evaluate against properties collected once for the
stylesheet, then their diagnostics are handed to a DiagnosticReporter.
"""

import time
from collections.abc import Mapping

from .. import messages
from ..collector import PropertyCollector
from ..config import LintConfig, RuleOptions, normalize_rule_id
from ..errors import ConfigurationError
from ..linter_logging import LogCategory, get_category_logger
from ..models import Diagnostic, LintResult, Severity, Stylesheet
from ..reporters import DiagnosticReporter
from .base import BaseRule, RuleContext

logger = get_category_logger(LogCategory.RULES)


class RuleEngine:
    """Engine for running stacking-context rules.

    Only rules enabled in the config are evaluated; disabled rules are
    never invoked.
    """

    def __init__(
        self,
        config: LintConfig | None = None,
        collector: PropertyCollector | None = None,
    ):
        """Initialize the rule engine.

        Args:
            config: Rule table; defaults to the recommended rules.
            collector: Property collector shared by every pass.
        """
        self.config = config if config is not None else LintConfig.recommended()
        self.collector = collector or PropertyCollector()
        self._rules: dict[str, BaseRule] = {}
        self._options: dict[str, RuleOptions] | None = None

    def register(self, rule: BaseRule) -> None:
        """Register a rule with the engine.

        Raises:
            ValueError: If a rule with the same ID is already registered.
        """
        if rule.rule_id in self._rules:
            raise ValueError(f"Rule {rule.rule_id} is already registered")
        self._rules[rule.rule_id] = rule
        self._options = None

    def unregister(self, rule_id: str) -> None:
        """Unregister a rule by ID."""
        self._rules.pop(normalize_rule_id(rule_id), None)
        self._options = None

    def get_rule(self, rule_id: str) -> BaseRule | None:
        return self._rules.get(normalize_rule_id(rule_id))

    def get_all_rules(self) -> list[BaseRule]:
        return list(self._rules.values())

    def get_enabled_rules(self) -> list[BaseRule]:
        """Registered rules enabled in the config, in registration order."""
        return [r for r in self._rules.values() if self.config.is_rule_enabled(r.rule_id)]

    @property
    def rule_count(self) -> int:
        """Number of registered rules."""
        return len(self._rules)

    def configure(self, strict: bool = False) -> None:
        """Validate the config against the registered rules.

        Builds the options of every enabled rule once.

        Args:
            strict: Also reject rules in the config that are not registered.

        Raises:
            ConfigurationError: For unknown rules (strict only), invalid
                options or regular expressions that fail to compile.
        """
        unknown = [rule_id for rule_id in self.config.rules if rule_id not in self._rules]
        if strict and unknown:
            raise ConfigurationError(
                "Unknown rule(s) in configuration",
                config_file=self.config.source,
                suggestion="Available rules: " + ", ".join(sorted(self._rules)),
                problems=[f"unknown rule '{rule_id}'" for rule_id in unknown],
            )

        options: dict[str, RuleOptions] = {}
        problems: list[str] = []
        for rule in self.get_enabled_rules():
            rule_options = self.config.get_rule_options(rule.rule_id)
            problems.extend(f"{rule.rule_id}: {p}" for p in rule_options.invalid_patterns())
            options[rule.rule_id] = rule_options

        if problems:
            raise ConfigurationError(
                "Invalid regular expression in rule options",
                config_file=self.config.source,
                problems=problems,
            )

        self._options = options
        logger.debug(f"Configured {len(options)} enabled rule(s)")

    def run(
        self,
        stylesheet: Stylesheet,
        parent_displays: Mapping[str, str] | None = None,
    ) -> list[Diagnostic]:
        """Evaluate enabled rules against a stylesheet.

        Args:
            stylesheet: Parsed stylesheet.
            parent_displays: Optional selector to parent display mapping.

        Returns:
            Diagnostics in document order.
        """
        if self._options is None:
            self.configure()

        if not self._options:
            return []

        properties = self.collector.collect(stylesheet, parent_displays)
        diagnostics: list[Diagnostic] = []

        for rule_id, options in self._options.items():
            context = RuleContext(
                stylesheet=stylesheet,
                properties=properties,
                options=options,
                collector=self.collector,
            )
            diagnostics.extend(self._execute_rule(self._rules[rule_id], context))

        # Stable: rules keep registration order at the same position
        diagnostics.sort(key=lambda d: (d.line, d.column))
        return diagnostics

    def lint(
        self,
        stylesheet: Stylesheet,
        reporter: DiagnosticReporter | None = None,
        parent_displays: Mapping[str, str] | None = None,
    ) -> LintResult:
        """Run a full pass and report diagnostics into a reporter."""
        reporter = reporter or DiagnosticReporter(stylesheet.file_path)
        reporter.extend(self.run(stylesheet, parent_displays))
        return reporter.to_result()

    def _execute_rule(self, rule: BaseRule, context: RuleContext) -> list[Diagnostic]:
        """Execute a single rule, turning a crash into a diagnostic."""
        start_time = time.time()

        try:
            diagnostics = rule.evaluate(context)
        except Exception as e:
            logger.warning(
                f"Rule {rule.rule_id} failed on {context.stylesheet.file_path or '<input>'}: {e}",
                exc_info=True,
                extra={"rule_id": rule.rule_id, "file_path": context.stylesheet.file_path},
            )
            return [
                Diagnostic(
                    rule_id=rule.rule_id,
                    message=messages.rule_crashed(e),
                    node=context.stylesheet,
                    severity=Severity.ERROR,
                )
            ]

        execution_time_ms = (time.time() - start_time) * 1000
        logger.debug(
            f"Rule {rule.rule_id}: {len(diagnostics)} diagnostic(s) in {execution_time_ms:.1f}ms",
            extra={"rule_id": rule.rule_id, "duration_ms": execution_time_ms},
        )
        return list(diagnostics)

    def register_default_rules(self) -> None:
        """Register all built-in rules."""
        from .legacy import IsolationForPositionZIndexRule
        from .stacking_context import (
            IneffectiveOnBackgroundBlendRule,
            NoRedundantDeclarationRule,
            PerformanceHighDescendantCountRule,
            PreferOverSideEffectsRule,
        )
        from .z_index import ZIndexRangeRule

        for rule_class in [
            NoRedundantDeclarationRule,
            IneffectiveOnBackgroundBlendRule,
            PreferOverSideEffectsRule,
            ZIndexRangeRule,
            PerformanceHighDescendantCountRule,
            IsolationForPositionZIndexRule,
        ]:
            self.register(rule_class())


def create_rule_engine(
    config: LintConfig | None = None,
    register_defaults: bool = True,
) -> RuleEngine:
    """Create and configure a rule engine.

    Args:
        config: Rule table; defaults to the recommended rules.
        register_defaults: Whether to register the built-in rules.

    Returns:
        Configured RuleEngine instance.

    Raises:
        ConfigurationError: If the config is invalid.
    """
    engine = RuleEngine(config)

    if register_defaults:
        engine.register_default_rules()
        engine.configure(strict=True)

    return engine
