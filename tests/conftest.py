"""
Shared fixtures for the accessibility guard test suite.

Provides test fixtures for:
- Element construction with sensible passing defaults
- Rule evaluation context with a fixed call site
- Element snapshot files
"""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from a11y_guard.config import EvaluationOptions
from a11y_guard.models import CallSite, Element, ElementType, Frame, Trait
from a11y_guard.rules.base import RuleContext

TEST_LOCATION = CallSite("tests/test_screen.py", 42)


@pytest.fixture
def make_element() -> Callable[..., Element]:
    """Factory for elements that pass every rule unless told otherwise."""

    def _make(
        description: str = "Element",
        label: str = "Continue",
        type: ElementType = ElementType.OTHER,
        width: float = 60,
        height: float = 60,
        traits: frozenset[Trait] | None = None,
        is_control: bool = False,
        is_interactive: bool = False,
        should_ignore: bool = False,
        identity: Any = None,
    ) -> Element:
        kwargs: dict[str, Any] = {}
        if identity is not None:
            kwargs["underlying_element"] = identity
        return Element(
            description=description,
            frame=Frame(width=width, height=height),
            label=label,
            type=type,
            traits=traits,
            is_control=is_control,
            is_interactive=is_interactive,
            should_ignore=should_ignore,
            **kwargs,
        )

    return _make


@pytest.fixture
def location() -> CallSite:
    """Fixed call site for violation attribution."""
    return TEST_LOCATION


@pytest.fixture
def context() -> RuleContext:
    """Rule context with default options."""
    return RuleContext(options=EvaluationOptions(), location=TEST_LOCATION)


@pytest.fixture
def snapshot_file(tmp_path: Path) -> Callable[[Any], Path]:
    """Write snapshot JSON to a temporary file."""

    def _write(data: Any, name: str = "snapshot.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write
