"""Rules about `isolation: isolate` and the stacking contexts around it."""

from .. import messages
from ..models import Diagnostic
from ..selectors import estimate_descendant_count
from ..stacking import (
    STACKING_CONTEXT_PROPERTIES,
    creates_stacking_context,
    find_triggering_property,
    is_hack_opacity,
    is_hack_transform,
    is_hack_will_change,
    isolation_is_isolate,
)
from .base import BaseRule, RuleContext


class NoRedundantDeclarationRule(BaseRule):
    """Detects `isolation: isolate` where another property already creates the context."""

    @property
    def name(self) -> str:
        return "no-redundant-declaration"

    @property
    def description(self) -> str:
        return "Disallow 'isolation: isolate' when a stacking context already exists"

    def evaluate(self, context: RuleContext) -> list[Diagnostic]:
        diagnostics = []
        for block in context.blocks():
            properties = context.property_map(block)
            if not isolation_is_isolate(properties):
                continue
            if not creates_stacking_context(properties):
                continue

            message = messages.no_redundant_declaration(find_triggering_property(properties))
            for decl in self._isolate_declarations(block):
                diagnostics.append(self._create_diagnostic(message, decl, context))
        return diagnostics


class IneffectiveOnBackgroundBlendRule(BaseRule):
    """Detects `isolation: isolate` used to contain `background-blend-mode`.

    Background blending happens between the element's own background
    layers, so isolation has no effect on it.
    """

    @property
    def name(self) -> str:
        return "ineffective-on-background-blend"

    @property
    def description(self) -> str:
        return "Disallow 'isolation: isolate' combined with background-blend-mode"

    def evaluate(self, context: RuleContext) -> list[Diagnostic]:
        diagnostics = []
        for block in context.blocks():
            properties = context.property_map(block)
            if not isolation_is_isolate(properties):
                continue
            blend_mode = properties.get("background-blend-mode")
            if blend_mode is None or blend_mode.strip().lower() == "normal":
                continue

            for decl in self._isolate_declarations(block):
                diagnostics.append(
                    self._create_diagnostic(
                        messages.INEFFECTIVE_ON_BACKGROUND_BLEND, decl, context
                    )
                )
        return diagnostics


class PreferOverSideEffectsRule(BaseRule):
    """Flags declarations that exist only to force a stacking context.

    Patterns:
    - opacity in [0.99, 1)
    - no-op 3D transforms (translateZ(0), translate3d(0,0,0), identity matrix3d)
    - will-change hints naming opacity, transform or z-index
    """

    @property
    def name(self) -> str:
        return "prefer-over-side-effects"

    @property
    def description(self) -> str:
        return "Prefer 'isolation: isolate' over side-effect properties"

    def evaluate(self, context: RuleContext) -> list[Diagnostic]:
        diagnostics = []
        for block, decl in context.stylesheet.walk_declarations():
            if context.is_ignored(block) or not self._is_hack(decl.name, decl.value):
                continue
            diagnostics.append(
                self._create_diagnostic(
                    messages.prefer_over_side_effects(decl.name, decl.value),
                    decl,
                    context,
                )
            )
        return diagnostics

    @staticmethod
    def _is_hack(name: str, value: str) -> bool:
        if name == "opacity":
            return is_hack_opacity(value)
        if name == "transform":
            return is_hack_transform(value)
        if name == "will-change":
            return is_hack_will_change(value)
        return False


class PerformanceHighDescendantCountRule(BaseRule):
    """Warns when a stacking context is created on a broadly matching selector.

    The descendant count is a heuristic estimate from the selector text.
    A `/* @descendants: N */` comment before the block overrides it.
    """

    @property
    def name(self) -> str:
        return "performance-high-descendant-count"

    @property
    def description(self) -> str:
        return "Warn about stacking contexts on elements with many descendants"

    def evaluate(self, context: RuleContext) -> list[Diagnostic]:
        threshold = context.options.max_descendant_count
        diagnostics = []

        for block in context.blocks():
            if not any(decl.name in STACKING_CONTEXT_PROPERTIES for decl in block.declarations):
                continue

            properties = context.property_map(block)
            if not (creates_stacking_context(properties) or isolation_is_isolate(properties)):
                continue

            count = self._descendant_count(block)
            if count > threshold:
                diagnostics.append(
                    self._create_diagnostic(
                        messages.performance_high_descendant_count(block.selector, count),
                        block,
                        context,
                    )
                )
        return diagnostics

    @staticmethod
    def _descendant_count(block) -> int:
        annotated = block.annotations.get("descendants")
        if annotated is not None and annotated.isdigit():
            return int(annotated)
        return estimate_descendant_count(block.selector)
