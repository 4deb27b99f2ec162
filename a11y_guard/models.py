"""Data models for accessibility rule evaluation.

This module defines the element snapshot shape the rules read, the
rule identifiers, and the violation records the engine returns.
"""

import sys
from collections.abc import Hashable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .rules.base import RuleResult


class Severity(Enum):
    """Severity levels for accessibility violations."""

    FAIL = "fail"  # Blocks the run
    WARN = "warn"  # Highlighted but doesn't block
    INFO = "info"  # Informational only


class ElementType(Enum):
    """Semantic kind of a UI element.

    Only ``image``, ``staticText``, ``textView`` and ``cell`` change how
    rules apply; the remaining kinds are carried for reporting.
    """

    OTHER = "other"
    APPLICATION = "application"
    WINDOW = "window"
    ALERT = "alert"
    BUTTON = "button"
    CELL = "cell"
    CHECK_BOX = "checkBox"
    COLLECTION_VIEW = "collectionView"
    IMAGE = "image"
    KEY = "key"
    LINK = "link"
    MENU_ITEM = "menuItem"
    NAVIGATION_BAR = "navigationBar"
    PICKER = "picker"
    SCROLL_VIEW = "scrollView"
    SEARCH_FIELD = "searchField"
    SECURE_TEXT_FIELD = "secureTextField"
    SEGMENTED_CONTROL = "segmentedControl"
    SLIDER = "slider"
    STATIC_TEXT = "staticText"
    STEPPER = "stepper"
    SWITCH = "switch"
    TAB = "tab"
    TAB_BAR = "tabBar"
    TABLE = "table"
    TEXT_FIELD = "textField"
    TEXT_VIEW = "textView"
    TOGGLE = "toggle"
    TOOLBAR = "toolbar"
    WEB_VIEW = "webView"


class Trait(Enum):
    """Assistive-technology trait attached to an element."""

    BUTTON = "button"
    LINK = "link"
    IMAGE = "image"
    SELECTED = "selected"
    PLAYS_SOUND = "playsSound"
    KEYBOARD_KEY = "keyboardKey"
    STATIC_TEXT = "staticText"
    SUMMARY_ELEMENT = "summaryElement"
    NOT_ENABLED = "notEnabled"
    UPDATES_FREQUENTLY = "updatesFrequently"
    SEARCH_FIELD = "searchField"
    STARTS_MEDIA_SESSION = "startsMediaSession"
    ADJUSTABLE = "adjustable"
    ALLOWS_DIRECT_INTERACTION = "allowsDirectInteraction"
    CAUSES_PAGE_TURN = "causesPageTurn"
    HEADER = "header"
    TAB_BAR = "tabBar"


class RuleId(Enum):
    """Identifiers of the toggleable accessibility rules.

    Declaration order is the order rules run for each element.
    """

    MINIMUM_SIZE = "minimumSize"
    MINIMUM_INTERACTIVE_SIZE = "minimumInteractiveSize"
    LABEL_PRESENCE = "labelPresence"
    BUTTON_LABEL = "buttonLabel"
    IMAGE_LABEL = "imageLabel"
    LABEL_LENGTH = "labelLength"
    IMAGE_TRAIT = "imageTrait"
    DUPLICATED = "duplicated"

    @classmethod
    def parse(cls, value: "str | RuleId") -> "RuleId":
        """Resolve a rule id from its value or enum member name.

        Raises:
            ValueError: If no rule matches.
        """
        if isinstance(value, RuleId):
            return value
        try:
            return cls(value)
        except ValueError:
            pass
        name = str(value).upper().replace("-", "_")
        if name in cls.__members__:
            return cls[name]
        known = ", ".join(r.value for r in cls)
        raise ValueError(f"Unknown rule '{value}'. Known rules: {known}")


class RuleGroup(Enum):
    """Named presets of rule ids."""

    ALL = "all"
    SIZE = "size"
    LABELS = "labels"
    IMAGES = "images"
    CONTROLS = "controls"

    @property
    def rule_ids(self) -> frozenset[RuleId]:
        """Rule ids covered by this preset."""
        return _RULE_GROUPS[self]


_RULE_GROUPS: dict[RuleGroup, frozenset[RuleId]] = {
    RuleGroup.ALL: frozenset(RuleId),
    RuleGroup.SIZE: frozenset(
        {RuleId.MINIMUM_SIZE, RuleId.MINIMUM_INTERACTIVE_SIZE}
    ),
    RuleGroup.LABELS: frozenset(
        {
            RuleId.LABEL_PRESENCE,
            RuleId.BUTTON_LABEL,
            RuleId.IMAGE_LABEL,
            RuleId.LABEL_LENGTH,
        }
    ),
    RuleGroup.IMAGES: frozenset({RuleId.IMAGE_LABEL, RuleId.IMAGE_TRAIT}),
    RuleGroup.CONTROLS: frozenset(
        {RuleId.BUTTON_LABEL, RuleId.MINIMUM_INTERACTIVE_SIZE, RuleId.DUPLICATED}
    ),
}


@dataclass(frozen=True)
class Frame:
    """Element size in device-independent units."""

    width: float
    height: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"width": self.width, "height": self.height}


@dataclass(frozen=True)
class Element:
    """One inspectable UI node under test.

    Elements are supplied by whatever captured the UI tree; the engine
    only reads them. ``traits`` is ``None`` when the capture reported no
    trait information, which is distinct from an empty set.
    """

    description: str
    frame: Frame
    label: str = ""
    type: ElementType = ElementType.OTHER
    traits: frozenset[Trait] | None = None
    is_control: bool = False
    is_interactive: bool = False
    should_ignore: bool = False
    underlying_element: Hashable = field(default_factory=object)

    @property
    def is_image(self) -> bool:
        return self.type is ElementType.IMAGE

    @property
    def is_cell(self) -> bool:
        return self.type is ElementType.CELL

    @property
    def is_long_form_text(self) -> bool:
        """Static text and text views hold prose and may exceed label caps."""
        return self.type in (ElementType.STATIC_TEXT, ElementType.TEXT_VIEW)

    def has_trait(self, trait: Trait) -> bool:
        """Check trait membership; an absent trait set contains nothing."""
        return self.traits is not None and trait in self.traits

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "description": self.description,
            "label": self.label,
            "type": self.type.value,
            "traits": (
                sorted(t.value for t in self.traits)
                if self.traits is not None
                else None
            ),
            "frame": self.frame.to_dict(),
            "isControl": self.is_control,
            "isInteractive": self.is_interactive,
            "shouldIgnore": self.should_ignore,
        }


@dataclass(frozen=True)
class CallSite:
    """Caller location a violation is attributed to."""

    file_path: str
    line: int

    @classmethod
    def caller(cls, depth: int = 1) -> "CallSite":
        """Build a call site from the Python stack.

        Args:
            depth: Frames above the function calling this method.
        """
        frame = sys._getframe(depth + 1)
        return cls(file_path=frame.f_code.co_filename, line=frame.f_lineno)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"file_path": self.file_path, "line": self.line}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CallSite":
        """Create from dictionary."""
        return cls(file_path=data["file_path"], line=data["line"])

    def __str__(self) -> str:
        """Return file:line format for easy navigation."""
        return f"{self.file_path}:{self.line}"


@dataclass(frozen=True)
class Violation:
    """One failure of one rule against one or two elements.

    ``check`` distinguishes the individual condition inside a rule
    (e.g. ``height`` vs ``width`` for the size rules).
    """

    rule_id: RuleId
    check: str
    message: str
    elements: tuple[str, ...]
    location: CallSite
    severity: Severity = Severity.FAIL
    data: dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "rule_id": self.rule_id.value,
            "check": self.check,
            "severity": self.severity.value,
            "message": self.message,
            "elements": list(self.elements),
            "location": self.location.to_dict(),
            "data": self.data,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Violation":
        """Create from dictionary."""
        return cls(
            rule_id=RuleId(data["rule_id"]),
            check=data["check"],
            message=data["message"],
            elements=tuple(data.get("elements", [])),
            location=CallSite.from_dict(data["location"]),
            severity=Severity(data.get("severity", "fail")),
            data=data.get("data", {}),
        )


@dataclass
class EvaluationResult:
    """Complete result of an accessibility evaluation run."""

    violations: list[Violation] = field(default_factory=list)
    rules: list[RuleId] = field(default_factory=list)
    element_count: int = 0
    evaluated_count: int = 0  # Elements not ignored
    suppressed_count: int = 0  # Dropped by ignore rules
    analysis_time_ms: float = 0.0
    rule_results: list["RuleResult"] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "violations": [v.to_dict() for v in self.violations],
            "rules": [r.value for r in self.rules],
            "element_count": self.element_count,
            "evaluated_count": self.evaluated_count,
            "suppressed_count": self.suppressed_count,
            "analysis_time_ms": self.analysis_time_ms,
        }

    @property
    def fail_count(self) -> int:
        """Count of FAIL severity violations."""
        return sum(1 for v in self.violations if v.severity == Severity.FAIL)

    @property
    def warn_count(self) -> int:
        """Count of WARN severity violations."""
        return sum(1 for v in self.violations if v.severity == Severity.WARN)

    @property
    def info_count(self) -> int:
        """Count of INFO severity violations."""
        return sum(1 for v in self.violations if v.severity == Severity.INFO)

    def should_block(self) -> bool:
        """Check if any violations should block the caller."""
        return self.fail_count > 0
