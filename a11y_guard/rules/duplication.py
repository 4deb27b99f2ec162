"""Duplication rules for accessibility checking.

This module provides the rule that detects controls sharing the same
label, which makes them indistinguishable to assistive technology.
"""

from ..models import Element, RuleId, Violation
from .base import PairRule, RuleContext


class DuplicatedLabelRule(PairRule):
    """Distinct controls must not share a label.

    Empty labels count as equal. Ignored elements still take part; only
    an element compared with its own underlying identity is skipped.
    """

    @property
    def rule_id(self) -> RuleId:
        return RuleId.DUPLICATED

    @property
    def category(self) -> str:
        return "duplication"

    @property
    def description(self) -> str:
        return "Controls must have unique labels"

    def applies_to(self, first: Element, second: Element) -> bool:
        return (
            first.is_control
            and second.is_control
            and first.underlying_element != second.underlying_element
        )

    def check(
        self, first: Element, second: Element, context: RuleContext
    ) -> list[Violation]:
        if first.label != second.label:
            return []

        return [
            self._create_violation(
                check="duplicated_label",
                message=(
                    "Accessibility Failure: Elements have duplicated labels: "
                    f"{first.description}, {second.description}"
                ),
                elements=[first, second],
                context=context,
                data={"label": first.label},
            )
        ]
