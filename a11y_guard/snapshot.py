"""Element snapshot loading.

Element trees are captured elsewhere and exported as JSON. A snapshot is
either a list of elements or an object with an ``elements`` list. Keys
use camelCase:

    {
        "id": "login-button",
        "description": "Button 'Log in'",
        "label": "Log in",
        "type": "button",
        "traits": ["button"],
        "frame": {"width": 120, "height": 44},
        "isControl": true,
        "isInteractive": true,
        "shouldIgnore": false,
        "children": [...]
    }

Nested ``children`` are flattened depth-first, parent first. Elements
without an ``id``, or with a null one, get their flattened position as
identity.
"""

import json
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    ValidationError,
)

from .errors import SnapshotError
from .guard_logging import LogCategory, get_category_logger
from .models import Element, ElementType, Frame, Trait

logger = get_category_logger(LogCategory.SNAPSHOT)


class FrameNode(BaseModel):
    """Frame of a snapshot element; dimensions must be JSON numbers."""

    width: StrictFloat | StrictInt
    height: StrictFloat | StrictInt


class ElementNode(BaseModel):
    """One element of a snapshot document, as exported.

    Flags are strict booleans so that strings such as ``"false"`` are
    rejected rather than read as true.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: StrictStr | StrictInt | None = None
    description: StrictStr | None = None
    label: StrictStr | None = None
    type: StrictStr | None = None
    traits: list[StrictStr] | None = None
    frame: FrameNode
    is_control: StrictBool = Field(default=False, alias="isControl")
    is_interactive: StrictBool = Field(default=False, alias="isInteractive")
    should_ignore: StrictBool = Field(default=False, alias="shouldIgnore")
    children: list[Any] | None = None


def _parse_type(value: str | None) -> ElementType:
    if value is None:
        return ElementType.OTHER
    try:
        return ElementType(value)
    except ValueError:
        logger.warning(f"Unknown element type '{value}', treating as 'other'")
        return ElementType.OTHER


def _parse_traits(value: list[str] | None) -> frozenset[Trait] | None:
    if value is None:
        return None
    traits = set()
    for item in value:
        try:
            traits.add(Trait(item))
        except ValueError:
            logger.warning(f"Unknown trait '{item}', skipping")
    return frozenset(traits)


def element_from_dict(data: dict[str, Any], position: int = 0) -> Element:
    """Create an Element from its snapshot dictionary.

    Args:
        data: Element dictionary (children are not followed).
        position: Flattened position, used as identity when ``id`` is
            absent or null.

    Raises:
        ValidationError: If the frame is missing, a dimension is not a
            number, or a flag is not a boolean.
    """
    node = ElementNode.model_validate(data)
    label = node.label or ""
    return Element(
        description=node.description or label or f"element #{position}",
        frame=Frame(width=node.frame.width, height=node.frame.height),
        label=label,
        type=_parse_type(node.type),
        traits=_parse_traits(node.traits),
        is_control=node.is_control,
        is_interactive=node.is_interactive,
        should_ignore=node.should_ignore,
        underlying_element=node.id if node.id is not None else f"#{position}",
    )


def _walk(nodes: list[Any]) -> Iterator[dict[str, Any]]:
    for node in nodes:
        if not isinstance(node, dict):
            raise TypeError(f"element must be an object, got {type(node).__name__}")
        yield node
        yield from _walk(node.get("children") or [])


def parse_snapshot(data: Any) -> list[Element]:
    """Build elements from decoded snapshot JSON.

    Raises:
        SnapshotError: If the document or any element is malformed.
    """
    if isinstance(data, dict):
        data = data.get("elements")
    if not isinstance(data, list):
        raise SnapshotError(
            "Snapshot must be a list of elements or an object with 'elements'"
        )

    elements: list[Element] = []
    try:
        for position, node in enumerate(_walk(data)):
            elements.append(element_from_dict(node, position))
    except (ValidationError, TypeError) as e:
        raise SnapshotError(
            f"Malformed element at position {len(elements)}",
            reason=f"{type(e).__name__}: {e}",
        ) from e

    logger.debug(f"Parsed {len(elements)} element(s) from snapshot")
    return elements


def load_snapshot(path: Path | str) -> list[Element]:
    """Load elements from a snapshot JSON file.

    Raises:
        SnapshotError: If the file cannot be read or is malformed.
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise SnapshotError(
            "Could not read element snapshot", path=str(path), reason=str(e)
        ) from e

    try:
        return parse_snapshot(data)
    except SnapshotError as e:
        e.details = {**(e.details or {}), "path": str(path)}
        raise
