"""Base rule classes for accessibility checking.

This module defines the abstract base classes for all accessibility
rules, providing a standard interface for eligibility, evaluation and
violation construction. Single-element rules derive from ``ElementRule``;
rules comparing two elements derive from ``PairRule``.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from ..config import EvaluationOptions
from ..models import CallSite, Element, ElementType, RuleId, Violation


@dataclass
class RuleResult:
    """Result of running one rule over an element collection."""

    rule_id: RuleId
    violations: list[Violation] = field(default_factory=list)
    execution_time_ms: float = 0.0

    @property
    def violation_count(self) -> int:
        """Number of violations produced."""
        return len(self.violations)


@dataclass(frozen=True)
class RuleContext:
    """Context passed to rules for evaluation."""

    options: EvaluationOptions = field(default_factory=EvaluationOptions)
    location: CallSite = field(default_factory=lambda: CallSite("<unknown>", 0))

    @property
    def min_label_length(self) -> int:
        return self.options.min_label_length


class BaseRule(ABC):
    """Abstract base class for accessibility rules.

    Rules are stateless: they read elements and return violations, and
    never raise for a well-formed element.
    """

    @property
    @abstractmethod
    def rule_id(self) -> RuleId:
        """Unique rule identifier."""

    @property
    @abstractmethod
    def category(self) -> str:
        """Rule category for severity mapping.

        One of: 'size', 'label', 'trait', 'duplication'
        """

    @property
    def description(self) -> str:
        """Human-readable description of what this rule checks."""
        return f"Rule {self.rule_id.value}"

    @property
    def is_pairwise(self) -> bool:
        """Whether this rule compares pairs of elements."""
        return False

    def _create_violation(
        self,
        check: str,
        message: str,
        elements: Sequence[Element],
        context: RuleContext,
        rule_id: RuleId | None = None,
        data: dict[str, Any] | None = None,
    ) -> Violation:
        """Create a properly structured Violation.

        Args:
            check: Identifier of the failed condition within the rule.
            message: Human-readable failure message.
            elements: The offending element(s).
            context: Evaluation context supplying the call site.
            rule_id: Rule to attribute the violation to. Defaults to this rule.
            data: Expected/actual values for reporters.
        """
        return Violation(
            rule_id=rule_id or self.rule_id,
            check=check,
            message=message,
            elements=tuple(e.description for e in elements),
            location=context.location,
            data=data or {},
        )

    def __repr__(self) -> str:
        """String representation of the rule."""
        return f"<{self.__class__.__name__} {self.rule_id.value}>"


class ElementRule(BaseRule):
    """Rule evaluated against one element at a time.

    Eligibility is declared with ``target_types`` (``None`` means every
    type) and ``exempt_types``. Ignored elements are never eligible.
    """

    target_types: frozenset[ElementType] | None = None
    exempt_types: frozenset[ElementType] = frozenset()

    def applies_to(self, element: Element) -> bool:
        """Check whether the rule should be evaluated for an element."""
        if element.should_ignore:
            return False
        if self.target_types is not None and element.type not in self.target_types:
            return False
        if element.type in self.exempt_types:
            return False
        return self._is_eligible(element)

    def _is_eligible(self, element: Element) -> bool:
        """Rule-specific eligibility beyond the element type."""
        return True

    def evaluate(self, element: Element, context: RuleContext) -> list[Violation]:
        """Evaluate the rule and return violations.

        Args:
            element: Element under test.
            context: RuleContext with options and call site.

        Returns:
            List of Violation objects, empty when the element passes or
            is not eligible.
        """
        if not self.applies_to(element):
            return []
        return self.check(element, context)

    @abstractmethod
    def check(self, element: Element, context: RuleContext) -> list[Violation]:
        """Run the rule's conditions on an eligible element."""


class PairRule(BaseRule):
    """Rule comparing two elements.

    Pairs are drawn from the full collection, ignored elements included;
    each unordered pair is visited exactly once.
    """

    @property
    def is_pairwise(self) -> bool:
        return True

    @abstractmethod
    def applies_to(self, first: Element, second: Element) -> bool:
        """Check whether the pair should be compared."""

    @abstractmethod
    def check(
        self, first: Element, second: Element, context: RuleContext
    ) -> list[Violation]:
        """Run the rule's conditions on an eligible pair."""

    def evaluate(
        self, first: Element, second: Element, context: RuleContext
    ) -> list[Violation]:
        """Evaluate the rule for one pair."""
        if not self.applies_to(first, second):
            return []
        return self.check(first, second, context)

    def evaluate_all(
        self, elements: Sequence[Element], context: RuleContext
    ) -> list[Violation]:
        """Evaluate every unordered pair (i < j) in collection order."""
        violations: list[Violation] = []
        for i, first in enumerate(elements):
            for second in elements[i + 1 :]:
                violations.extend(self.evaluate(first, second, context))
        return violations
