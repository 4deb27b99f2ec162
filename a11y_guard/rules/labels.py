"""Label rules for accessibility checking.

This module provides rules that check accessibility labels for
presence, length and wording, with stricter variants for controls
and images.
"""

import regex

from ..models import Element, ElementType, RuleId, Violation
from .base import ElementRule, RuleContext

# TODO: Localise the word lists below once labels carry a locale
BUTTON_WORD = "button"
IMAGE_AVOID_WORDS = ("image", "picture", "graphic", "icon")
IMAGE_FILENAME_TOKENS = (
    "_",
    "-",
    ".png",
    ".jpg",
    ".jpeg",
    ".pdf",
    ".avci",
    ".heic",
    ".heif",
)
MAX_LABEL_LENGTH = 40

_GRAPHEME = regex.compile(r"\X")


def label_length(label: str) -> int:
    """Count user-perceived characters (extended grapheme clusters)."""
    return len(_GRAPHEME.findall(label))


class LabelPresenceRule(ElementRule):
    """Labels must be longer than the configured minimum.

    Cells are exempt; they usually expose their content through child
    elements.
    """

    exempt_types = frozenset({ElementType.CELL})

    @property
    def rule_id(self) -> RuleId:
        return RuleId.LABEL_PRESENCE

    @property
    def category(self) -> str:
        return "label"

    @property
    def description(self) -> str:
        return "Labels must be meaningful (longer than the minimum length)"

    def check(self, element: Element, context: RuleContext) -> list[Violation]:
        return self.presence_violations(element, context, self.rule_id)

    def presence_violations(
        self,
        element: Element,
        context: RuleContext,
        rule_id: RuleId,
    ) -> list[Violation]:
        """Run the presence check on behalf of ``rule_id``.

        Stricter label rules call this first, so exemptions are applied
        here rather than only in ``applies_to``.
        """
        if element.should_ignore or element.type in self.exempt_types:
            return []

        minimum = context.min_label_length
        length = label_length(element.label)
        if length > minimum:
            return []

        return [
            self._create_violation(
                check="label_presence",
                message=(
                    f"Accessibility Failure: Label not meaningful: "
                    f"{element.description}. Minimum length: {minimum}"
                ),
                elements=[element],
                context=context,
                rule_id=rule_id,
                data={"expected_min_exclusive": minimum, "actual": length},
            )
        ]


class ButtonLabelRule(ElementRule):
    """Control labels must be meaningful, capitalised and trait-free.

    Each condition is reported independently so one control can fail
    several at once.
    """

    def __init__(self) -> None:
        self._presence = LabelPresenceRule()

    @property
    def rule_id(self) -> RuleId:
        return RuleId.BUTTON_LABEL

    @property
    def category(self) -> str:
        return "label"

    @property
    def description(self) -> str:
        return "Control labels must not restate 'button', start uppercase and have no periods"

    def _is_eligible(self, element: Element) -> bool:
        return element.is_control

    def check(self, element: Element, context: RuleContext) -> list[Violation]:
        violations = self._presence.presence_violations(element, context, self.rule_id)
        label = element.label

        if BUTTON_WORD in label.lower():
            violations.append(
                self._create_violation(
                    check="contains_button",
                    message=(
                        "Accessibility Failure: Button should not contain the word "
                        "button in the accessibility label, set this as an "
                        f"accessibility trait: {element.description}"
                    ),
                    elements=[element],
                    context=context,
                    data={"token": BUTTON_WORD, "label": label},
                )
            )

        if label and not label[0].isupper():
            violations.append(
                self._create_violation(
                    check="capitalisation",
                    message=(
                        "Accessibility Failure: Buttons should begin with a "
                        f"capital letter: {element.description}"
                    ),
                    elements=[element],
                    context=context,
                    data={"first_character": label[0]},
                )
            )

        if "." in label:
            violations.append(
                self._create_violation(
                    check="punctuation",
                    message=(
                        "Accessibility Failure: Button accessibility labels "
                        f"shouldn't contain punctuation: {element.description}"
                    ),
                    elements=[element],
                    context=context,
                    data={"token": ".", "label": label},
                )
            )

        return violations


class ImageLabelRule(ElementRule):
    """Image labels must be meaningful and not look like file names.

    One violation is reported per offending token.
    """

    target_types = frozenset({ElementType.IMAGE})

    def __init__(self) -> None:
        self._presence = LabelPresenceRule()

    @property
    def rule_id(self) -> RuleId:
        return RuleId.IMAGE_LABEL

    @property
    def category(self) -> str:
        return "label"

    @property
    def description(self) -> str:
        return "Image labels must not contain image words or file names"

    def check(self, element: Element, context: RuleContext) -> list[Violation]:
        violations = self._presence.presence_violations(element, context, self.rule_id)
        folded = element.label.lower()

        for word in IMAGE_AVOID_WORDS:
            if word in folded:
                violations.append(
                    self._create_violation(
                        check="avoid_word",
                        message=(
                            "Accessibility Failure: Images should not contain image "
                            "words in the accessibility label, set the image "
                            f"accessibility trait: {element.description}. "
                            f"Found: '{word}'"
                        ),
                        elements=[element],
                        context=context,
                        data={"token": word, "label": element.label},
                    )
                )

        for token in IMAGE_FILENAME_TOKENS:
            if token in folded:
                violations.append(
                    self._create_violation(
                        check="filename",
                        message=(
                            "Accessibility Failure: Image file name is used as the "
                            f"accessibility label: {element.description}. "
                            f"Found: '{token}'"
                        ),
                        elements=[element],
                        context=context,
                        data={"token": token, "label": element.label},
                    )
                )

        return violations


class LabelLengthRule(ElementRule):
    """Labels must be short; prose elements are exempt."""

    exempt_types = frozenset({ElementType.STATIC_TEXT, ElementType.TEXT_VIEW})

    @property
    def rule_id(self) -> RuleId:
        return RuleId.LABEL_LENGTH

    @property
    def category(self) -> str:
        return "label"

    @property
    def description(self) -> str:
        return f"Labels must be at most {MAX_LABEL_LENGTH} characters"

    def check(self, element: Element, context: RuleContext) -> list[Violation]:
        length = label_length(element.label)
        if length <= MAX_LABEL_LENGTH:
            return []

        return [
            self._create_violation(
                check="label_length",
                message=(
                    f"Accessibility Failure: Label is too long: {element.description}. "
                    f"Maximum length: {MAX_LABEL_LENGTH}, actual: {length}"
                ),
                elements=[element],
                context=context,
                data={"expected_max": MAX_LABEL_LENGTH, "actual": length},
            )
        ]
