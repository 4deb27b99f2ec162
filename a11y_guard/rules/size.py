"""Size rules for accessibility checking.

This module provides rules that check element frames against minimum
visible size and minimum touch-target size.
"""

from ..models import Element, RuleId, Violation
from .base import ElementRule, RuleContext


class _FrameSizeRule(ElementRule):
    """Checks height and width against a floor, reporting each separately."""

    MIN_DIMENSION: float = 0
    SUBJECT = "Element"

    @property
    def category(self) -> str:
        return "size"

    def check(self, element: Element, context: RuleContext) -> list[Violation]:
        violations = []
        minimum = self.MIN_DIMENSION

        # Both dimensions are reported; no short-circuit
        for check, actual, adjective in (
            ("height", element.frame.height, "tall"),
            ("width", element.frame.width, "wide"),
        ):
            if actual >= minimum:
                continue
            violations.append(
                self._create_violation(
                    check=check,
                    message=(
                        f"Accessibility Failure: {self.SUBJECT} not {adjective} enough: "
                        f"{element.description}. Minimum {check}: {minimum:g}, "
                        f"actual: {actual:g}"
                    ),
                    elements=[element],
                    context=context,
                    data={"expected_min": minimum, "actual": actual},
                )
            )

        return violations


class MinimumSizeRule(_FrameSizeRule):
    """Every element must be at least 18x18 to be perceivable."""

    MIN_DIMENSION = 18

    @property
    def rule_id(self) -> RuleId:
        return RuleId.MINIMUM_SIZE

    @property
    def description(self) -> str:
        return "Elements must be at least 18x18"


class MinimumInteractiveSizeRule(_FrameSizeRule):
    """Interactive elements must offer a 44x44 touch target."""

    MIN_DIMENSION = 44
    SUBJECT = "Interactive element"

    @property
    def rule_id(self) -> RuleId:
        return RuleId.MINIMUM_INTERACTIVE_SIZE

    @property
    def description(self) -> str:
        return "Interactive elements must be at least 44x44"

    def _is_eligible(self, element: Element) -> bool:
        return element.is_interactive
