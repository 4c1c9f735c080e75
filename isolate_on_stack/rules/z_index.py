"""Z-index magnitude rule."""

from .. import messages
from ..models import Diagnostic
from ..stacking import parse_z_index
from .base import BaseRule, RuleContext


class ZIndexRangeRule(BaseRule):
    """Flags z-index values above `maxZIndex` (default 100).

    Large z-index values usually mean layering is being fought globally
    instead of scoped with stacking contexts.
    """

    @property
    def name(self) -> str:
        return "z-index-range"

    @property
    def description(self) -> str:
        return "Limit z-index values to a configured maximum"

    def evaluate(self, context: RuleContext) -> list[Diagnostic]:
        max_z_index = context.options.max_z_index
        diagnostics = []

        for block in context.blocks():
            for decl in block.declarations_named("z-index"):
                value = parse_z_index(decl.value)
                if value is not None and value > max_z_index:
                    diagnostics.append(
                        self._create_diagnostic(
                            messages.z_index_range(value, max_z_index), decl, context
                        )
                    )
        return diagnostics
