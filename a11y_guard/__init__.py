"""Accessibility rule evaluation for UI element snapshots.

Given captured UI elements and a set of rules, reports elements that are
too small, badly labelled, missing traits or sharing labels.

Main components:
- models: Element snapshot shape, rule ids and violations
- rules: Rule catalogue, RuleEngine and the ``evaluate`` entry point
- config: Configuration loading and validation
- snapshot: JSON element snapshot loading
"""

from .config import (
    A11yConfigLoader,
    A11yGuardConfig,
    EvaluationOptions,
    IgnoreRule,
    SeverityThresholds,
    load_config,
)
from .errors import A11yGuardError, ConfigError, SnapshotError
from .models import (
    CallSite,
    Element,
    ElementType,
    EvaluationResult,
    Frame,
    RuleGroup,
    RuleId,
    Severity,
    Trait,
    Violation,
)
from .rules import RuleEngine, create_rule_engine, evaluate
from .snapshot import load_snapshot, parse_snapshot

__version__ = "1.0.0"

__all__ = [
    # Models
    "CallSite",
    "Element",
    "ElementType",
    "EvaluationResult",
    "Frame",
    "RuleGroup",
    "RuleId",
    "Severity",
    "Trait",
    "Violation",
    # Engine
    "RuleEngine",
    "create_rule_engine",
    "evaluate",
    # Config
    "A11yConfigLoader",
    "A11yGuardConfig",
    "EvaluationOptions",
    "IgnoreRule",
    "SeverityThresholds",
    "load_config",
    # Snapshot
    "load_snapshot",
    "parse_snapshot",
    # Errors
    "A11yGuardError",
    "ConfigError",
    "SnapshotError",
]
