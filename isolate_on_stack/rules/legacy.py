"""Single-rule variant: require `isolation: isolate` on positioned, z-indexed blocks.

Unlike the other rules, this one evaluates each rule block on its own
declarations rather than on the merged per-selector map, and carries
autofix edits.
"""

from .. import messages
from ..config import match_any
from ..models import Diagnostic, Fix, RuleBlock
from ..selectors import class_tokens, element_tokens, is_pseudo_element_only
from ..stacking import (
    creates_stacking_context,
    find_triggering_property,
    has_position_and_z_index_stacking_context,
    isolation_is_isolate,
)
from .base import BaseRule, RuleContext

ISOLATION_DECLARATION = "isolation: isolate"


class IsolationForPositionZIndexRule(BaseRule):
    """Expects `isolation: isolate` next to `position` + `z-index`.

    Options: ignoreSelectors, ignoreElements, ignoreClasses,
    requireClasses and ignoreWhenStackingContextExists.
    """

    @property
    def name(self) -> str:
        return "isolation-for-position-zindex"

    @property
    def description(self) -> str:
        return "Require 'isolation: isolate' with position and z-index"

    def evaluate(self, context: RuleContext) -> list[Diagnostic]:
        diagnostics = []
        for block in context.blocks():
            if self._is_excluded(block, context):
                continue
            diagnostics.extend(self._evaluate_block(block, context))
        return diagnostics

    def _is_excluded(self, block: RuleBlock, context: RuleContext) -> bool:
        options = context.options
        if options.ignore_elements and match_any(
            options.ignore_elements, element_tokens(block.selector)
        ):
            return True
        if options.ignore_classes and match_any(
            options.ignore_classes, class_tokens(block.selector)
        ):
            return True
        return False

    def _evaluate_block(self, block: RuleBlock, context: RuleContext) -> list[Diagnostic]:
        properties = context.collector.collect_block(block)
        has_isolation = isolation_is_isolate(properties)

        if is_pseudo_element_only(block.selector):
            if not has_isolation:
                return []
            return [
                self._create_diagnostic(
                    messages.pseudo_element_isolation(block.selector), decl, context
                )
                for decl in self._isolate_declarations(block)
            ]

        # Triggers other than the position/z-index pair itself
        others = {k: v for k, v in properties.items() if k not in ("position", "z-index")}
        other_context = creates_stacking_context(others, properties.parent_display)
        ignore_existing = context.options.ignore_when_stacking_context_exists

        if has_position_and_z_index_stacking_context(properties):
            if not has_isolation:
                if ignore_existing and other_context:
                    return []
                z_index = block.last_declaration("z-index")
                fix = Fix(z_index.location.line, z_index.location.column, ISOLATION_DECLARATION)
                return [self._create_diagnostic(messages.EXPECTED_ISOLATION, block, context, fix)]

            if ignore_existing and other_context:
                trigger = find_triggering_property(others, properties.parent_display)
                return [
                    self._create_diagnostic(
                        messages.redundant_with_existing_context(trigger), decl, context
                    )
                    for decl in self._isolate_declarations(block)
                ]
            return []

        return self._check_required_classes(block, context, has_isolation)

    def _check_required_classes(
        self, block: RuleBlock, context: RuleContext, has_isolation: bool
    ) -> list[Diagnostic]:
        if has_isolation or not context.options.require_classes:
            return []
        class_name = match_any(context.options.require_classes, class_tokens(block.selector))
        if class_name is None:
            return []

        fix = None
        if block.declarations:
            last = block.declarations[-1]
            fix = Fix(last.location.line, last.location.column, ISOLATION_DECLARATION)
        return [
            self._create_diagnostic(messages.required_class(class_name), block, context, fix)
        ]
