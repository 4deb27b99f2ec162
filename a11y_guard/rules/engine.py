"""Rule engine for accessibility checking.

This module provides the RuleEngine class that manages rule registration
and drives evaluation, and the ``evaluate`` function that is the pure
entry point: rules in, elements in, violations out.
"""

import dataclasses
import time
from collections.abc import Iterable, Sequence

from ..config import A11yGuardConfig, EvaluationOptions, resolve_rule_ids
from ..guard_logging import LogCategory, get_category_logger
from ..models import (
    CallSite,
    Element,
    EvaluationResult,
    RuleGroup,
    RuleId,
    Violation,
)
from .base import BaseRule, ElementRule, PairRule, RuleContext, RuleResult

logger = get_category_logger(LogCategory.ENGINE)

RuleSelection = Iterable["RuleId | RuleGroup | str"]


class RuleEngine:
    """Engine for running accessibility rules.

    Single-element rules run over the non-ignored elements, element by
    element in catalogue order; pairwise rules then run over every
    unordered pair of the full collection. No rule stops another.
    """

    def __init__(self, config: A11yGuardConfig | None = None):
        """Initialize the rule engine.

        Args:
            config: Guard configuration; defaults apply when omitted.
        """
        self.config = config or A11yGuardConfig()
        self._rules: dict[RuleId, BaseRule] = {}
        self._rules_by_category: dict[str, list[BaseRule]] = {}

    def register(self, rule: BaseRule) -> None:
        """Register a rule with the engine.

        Raises:
            ValueError: If a rule with the same ID is already registered.
        """
        if rule.rule_id in self._rules:
            raise ValueError(f"Rule {rule.rule_id.value} is already registered")

        self._rules[rule.rule_id] = rule
        self._rules_by_category.setdefault(rule.category, []).append(rule)

    def unregister(self, rule_id: RuleId) -> None:
        """Unregister a rule by ID."""
        rule = self._rules.pop(rule_id, None)
        if rule is None:
            return
        self._rules_by_category[rule.category] = [
            r for r in self._rules_by_category[rule.category] if r.rule_id != rule_id
        ]

    def get_rule(self, rule_id: RuleId) -> BaseRule | None:
        """Get a rule by ID."""
        return self._rules.get(rule_id)

    def get_rules_by_category(self, category: str) -> list[BaseRule]:
        """Get all rules in a category."""
        return list(self._rules_by_category.get(category, []))

    def get_all_rules(self) -> list[BaseRule]:
        """Get all registered rules in catalogue order."""
        return [self._rules[r] for r in RuleId if r in self._rules]

    @property
    def rule_count(self) -> int:
        """Number of registered rules."""
        return len(self._rules)

    def _select(self, rule_ids: RuleSelection) -> list[BaseRule]:
        """Resolve a selection to registered rules in catalogue order."""
        if isinstance(rule_ids, (str, RuleId, RuleGroup)):
            rule_ids = [rule_ids]
        selected = resolve_rule_ids(list(rule_ids))
        missing = [r.value for r in selected if r not in self._rules]
        if missing:
            logger.debug(f"Skipping unregistered rules: {', '.join(missing)}")
        return [self._rules[r] for r in selected if r in self._rules]

    def evaluate(
        self,
        rule_ids: RuleSelection,
        elements: Sequence[Element],
        options: EvaluationOptions | None = None,
        location: CallSite | None = None,
    ) -> list[Violation]:
        """Evaluate the selected rules and return every violation.

        Pure: configuration severities and ignore rules are not applied.

        Args:
            rule_ids: Rule ids or group names to run.
            elements: Elements in iteration order.
            options: Evaluation options; defaults when omitted.
            location: Call site to attribute violations to. Defaults to
                the caller of this method.

        Returns:
            Violations ordered by element, then rule, then pair.
        """
        context = RuleContext(
            options=options or EvaluationOptions(),
            location=location or CallSite.caller(),
        )
        violations, _ = self._run_rules(self._select(rule_ids), list(elements), context)
        return violations

    def run(
        self,
        elements: Sequence[Element],
        rule_ids: RuleSelection | None = None,
        location: CallSite | None = None,
    ) -> EvaluationResult:
        """Run rules with configuration applied.

        Args:
            elements: Elements in iteration order.
            rule_ids: Optional rule selection. Defaults to the configured rules.
            location: Call site to attribute violations to.

        Returns:
            EvaluationResult with severities assigned and ignored
            violations removed.
        """
        start_time = time.time()
        elements = list(elements)
        rules = self._select(self.config.rules if rule_ids is None else rule_ids)
        context = RuleContext(
            options=self.config.options,
            location=location or CallSite.caller(),
        )

        ordered, rule_results = self._run_rules(rules, elements, context)

        violations: list[Violation] = []
        suppressed = 0
        for violation in ordered:
            if self.config.is_rule_ignored(violation.rule_id, violation.elements):
                suppressed += 1
                continue
            category = self._rules[violation.rule_id].category
            violations.append(
                dataclasses.replace(
                    violation,
                    severity=self.config.severity_thresholds.for_category(category),
                )
            )

        total_time_ms = (time.time() - start_time) * 1000
        result = EvaluationResult(
            violations=violations,
            rules=[rule.rule_id for rule in rules],
            element_count=len(elements),
            evaluated_count=sum(1 for e in elements if not e.should_ignore),
            suppressed_count=suppressed,
            analysis_time_ms=total_time_ms,
            rule_results=rule_results,
        )
        logger.info(
            f"Evaluated {len(rules)} rule(s) over {len(elements)} element(s): "
            f"{len(violations)} violation(s), {suppressed} suppressed",
            extra={
                "duration_ms": total_time_ms,
                "element_count": len(elements),
                "violation_count": len(violations),
            },
        )
        return result

    def _run_rules(
        self,
        rules: list[BaseRule],
        elements: list[Element],
        context: RuleContext,
    ) -> tuple[list[Violation], list[RuleResult]]:
        """Execute rules.

        Returns:
            Violations in output order (element, then rule, then pair)
            and one RuleResult per rule.
        """
        results = {rule.rule_id: RuleResult(rule_id=rule.rule_id) for rule in rules}
        element_rules = [r for r in rules if isinstance(r, ElementRule)]
        pair_rules = [r for r in rules if isinstance(r, PairRule)]
        ordered: list[Violation] = []

        for element in (e for e in elements if not e.should_ignore):
            for rule in element_rules:
                started = time.perf_counter()
                found = rule.evaluate(element, context)
                result = results[rule.rule_id]
                result.execution_time_ms += (time.perf_counter() - started) * 1000
                result.violations.extend(found)
                ordered.extend(found)

        for rule in pair_rules:
            started = time.perf_counter()
            found = rule.evaluate_all(elements, context)
            result = results[rule.rule_id]
            result.execution_time_ms = (time.perf_counter() - started) * 1000
            result.violations.extend(found)
            ordered.extend(found)

        for result in results.values():
            logger.debug(
                f"{result.rule_id.value}: {result.violation_count} violation(s) "
                f"in {result.execution_time_ms:.2f}ms",
                extra={
                    "rule_id": result.rule_id.value,
                    "duration_ms": result.execution_time_ms,
                    "violation_count": result.violation_count,
                },
            )

        return ordered, list(results.values())

    def register_default_rules(self) -> None:
        """Register all built-in rules in catalogue order."""
        for rule in default_rules():
            self.register(rule)


def default_rules() -> list[BaseRule]:
    """Instantiate the built-in rule catalogue."""
    from .duplication import DuplicatedLabelRule
    from .labels import ButtonLabelRule, ImageLabelRule, LabelLengthRule, LabelPresenceRule
    from .size import MinimumInteractiveSizeRule, MinimumSizeRule
    from .traits import ImageTraitRule

    return [
        MinimumSizeRule(),
        MinimumInteractiveSizeRule(),
        LabelPresenceRule(),
        ButtonLabelRule(),
        ImageLabelRule(),
        LabelLengthRule(),
        ImageTraitRule(),
        DuplicatedLabelRule(),
    ]


def create_rule_engine(
    config: A11yGuardConfig | None = None,
    register_defaults: bool = True,
) -> RuleEngine:
    """Create and configure a rule engine.

    Args:
        config: Guard configuration.
        register_defaults: Whether to register the built-in rules.

    Returns:
        Configured RuleEngine instance.
    """
    engine = RuleEngine(config)

    if register_defaults:
        engine.register_default_rules()

    return engine


def evaluate(
    rules: RuleSelection,
    elements: Sequence[Element],
    options: EvaluationOptions | None = None,
    location: CallSite | None = None,
) -> list[Violation]:
    """Evaluate accessibility rules over a collection of elements.

    Args:
        rules: Rule ids (or group names) to run; order is irrelevant.
        elements: Elements in iteration order, as captured.
        options: Evaluation options such as the minimum label length.
        location: Call site to attribute violations to. Defaults to the
            caller of this function.

    Returns:
        Every violation found, ordered by element, then rule, then pair.

    Example:
        >>> violations = evaluate({RuleId.MINIMUM_SIZE}, elements)
        >>> for v in violations:
        ...     print(v.location, v.message)
    """
    location = location or CallSite.caller()
    engine = create_rule_engine()
    return engine.evaluate(rules, elements, options=options, location=location)
