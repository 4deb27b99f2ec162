"""Accessibility rules package.

This package provides the rule engine and built-in rules for
detecting accessibility violations in UI element snapshots.
"""

from .base import BaseRule, ElementRule, PairRule, RuleContext, RuleResult
from .duplication import DuplicatedLabelRule
from .engine import RuleEngine, create_rule_engine, default_rules, evaluate
from .labels import (
    ButtonLabelRule,
    ImageLabelRule,
    LabelLengthRule,
    LabelPresenceRule,
)
from .size import MinimumInteractiveSizeRule, MinimumSizeRule
from .traits import ImageTraitRule

__all__ = [
    # Base classes
    "BaseRule",
    "ElementRule",
    "PairRule",
    "RuleContext",
    "RuleResult",
    # Engine
    "RuleEngine",
    "create_rule_engine",
    "default_rules",
    "evaluate",
    # Size rules
    "MinimumSizeRule",
    "MinimumInteractiveSizeRule",
    # Label rules
    "LabelPresenceRule",
    "ButtonLabelRule",
    "ImageLabelRule",
    "LabelLengthRule",
    # Trait rules
    "ImageTraitRule",
    # Duplication rules
    "DuplicatedLabelRule",
]
