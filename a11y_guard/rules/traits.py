"""Trait rules for accessibility checking."""

from ..models import Element, ElementType, RuleId, Trait, Violation
from .base import ElementRule, RuleContext


class ImageTraitRule(ElementRule):
    """Images must carry the image trait.

    An absent trait set fails the same way as an empty one.
    """

    target_types = frozenset({ElementType.IMAGE})

    @property
    def rule_id(self) -> RuleId:
        return RuleId.IMAGE_TRAIT

    @property
    def category(self) -> str:
        return "trait"

    @property
    def description(self) -> str:
        return "Images must have the image trait"

    def check(self, element: Element, context: RuleContext) -> list[Violation]:
        if element.has_trait(Trait.IMAGE):
            return []

        actual = (
            sorted(t.value for t in element.traits)
            if element.traits is not None
            else None
        )
        return [
            self._create_violation(
                check="image_trait",
                message=(
                    f"Accessibility Failure: Image should have Image trait: "
                    f"{element.description}"
                ),
                elements=[element],
                context=context,
                data={"expected": Trait.IMAGE.value, "actual": actual},
            )
        ]
