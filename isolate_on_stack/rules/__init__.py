"""Stacking-context rules and the engine that runs them."""

from .base import BaseRule, RuleContext
from .engine import RuleEngine, create_rule_engine
from .legacy import IsolationForPositionZIndexRule
from .stacking_context import (
    IneffectiveOnBackgroundBlendRule,
    NoRedundantDeclarationRule,
    PerformanceHighDescendantCountRule,
    PreferOverSideEffectsRule,
)
from .z_index import ZIndexRangeRule

__all__ = [
    "BaseRule",
    "RuleContext",
    "RuleEngine",
    "create_rule_engine",
    "NoRedundantDeclarationRule",
    "IneffectiveOnBackgroundBlendRule",
    "PreferOverSideEffectsRule",
    "ZIndexRangeRule",
    "PerformanceHighDescendantCountRule",
    "IsolationForPositionZIndexRule",
]
