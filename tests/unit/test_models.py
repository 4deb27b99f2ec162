"""Unit tests for accessibility data models."""

import dataclasses

import pytest

from a11y_guard.models import (
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


def make_violation(severity=Severity.FAIL, rule_id=RuleId.MINIMUM_SIZE):
    return Violation(
        rule_id=rule_id,
        check="height",
        message="Accessibility Failure: Element not tall enough: Logo",
        elements=("Logo",),
        location=CallSite("tests/test_home.py", 10),
        severity=severity,
        data={"expected_min": 18, "actual": 10},
    )


class TestRuleId:
    """Tests for RuleId parsing."""

    def test_catalogue_order(self):
        """Test declaration order matches the rule catalogue."""
        assert [r.value for r in RuleId] == [
            "minimumSize",
            "minimumInteractiveSize",
            "labelPresence",
            "buttonLabel",
            "imageLabel",
            "labelLength",
            "imageTrait",
            "duplicated",
        ]

    @pytest.mark.parametrize(
        "value", ["minimumSize", "MINIMUM_SIZE", "minimum_size", "minimum-size"]
    )
    def test_parse_value_or_name(self, value):
        """Test values and member names are accepted."""
        assert RuleId.parse(value) is RuleId.MINIMUM_SIZE

    def test_parse_member(self):
        """Test members pass through."""
        assert RuleId.parse(RuleId.DUPLICATED) is RuleId.DUPLICATED

    def test_parse_unknown(self):
        """Test unknown ids list the known rules."""
        with pytest.raises(ValueError, match="Known rules: minimumSize"):
            RuleId.parse("contrast")


class TestRuleGroup:
    """Tests for rule group presets."""

    def test_all_covers_catalogue(self):
        """Test the 'all' group contains every rule."""
        assert RuleGroup.ALL.rule_ids == frozenset(RuleId)

    def test_every_group_defined(self):
        """Test every group resolves to a non-empty set."""
        for group in RuleGroup:
            assert group.rule_ids

    def test_images_group(self):
        """Test the image group."""
        assert RuleGroup("images").rule_ids == {RuleId.IMAGE_LABEL, RuleId.IMAGE_TRAIT}


class TestElement:
    """Tests for Element."""

    def test_defaults(self):
        """Test default field values."""
        element = Element(description="Logo", frame=Frame(10, 10))

        assert element.label == ""
        assert element.type is ElementType.OTHER
        assert element.traits is None
        assert element.is_control is False
        assert element.should_ignore is False

    def test_distinct_default_identities(self):
        """Test two elements built without identity are distinct."""
        first = Element(description="A", frame=Frame(10, 10))
        second = Element(description="A", frame=Frame(10, 10))

        assert first.underlying_element != second.underlying_element

    def test_type_predicates(self):
        """Test image, cell and prose predicates."""
        image = Element("i", Frame(1, 1), type=ElementType.IMAGE)
        cell = Element("c", Frame(1, 1), type=ElementType.CELL)
        text = Element("t", Frame(1, 1), type=ElementType.TEXT_VIEW)

        assert image.is_image and not image.is_cell
        assert cell.is_cell
        assert text.is_long_form_text and not image.is_long_form_text

    def test_has_trait(self):
        """Test trait lookup tolerates absent trait sets."""
        with_traits = Element("i", Frame(1, 1), traits=frozenset({Trait.IMAGE}))
        without = Element("i", Frame(1, 1))

        assert with_traits.has_trait(Trait.IMAGE)
        assert not with_traits.has_trait(Trait.BUTTON)
        assert not without.has_trait(Trait.IMAGE)

    def test_frozen(self):
        """Test elements cannot be mutated."""
        element = Element("i", Frame(1, 1))

        with pytest.raises(dataclasses.FrozenInstanceError):
            element.label = "changed"

    def test_to_dict(self):
        """Test dictionary form uses snapshot keys."""
        element = Element(
            description="Play",
            frame=Frame(44, 44),
            label="Play",
            type=ElementType.BUTTON,
            traits=frozenset({Trait.PLAYS_SOUND, Trait.BUTTON}),
            is_control=True,
        )

        data = element.to_dict()

        assert data["type"] == "button"
        assert data["traits"] == ["button", "playsSound"]
        assert data["frame"] == {"width": 44, "height": 44}
        assert data["isControl"] is True


class TestCallSite:
    """Tests for CallSite."""

    def test_str(self):
        """Test file:line format."""
        assert str(CallSite("tests/test_home.py", 10)) == "tests/test_home.py:10"

    def test_caller(self):
        """Test the caller frame is captured."""
        site = CallSite.caller(depth=0)

        assert site.file_path.endswith("test_models.py")

    def test_round_trip(self):
        """Test dictionary conversion."""
        site = CallSite("a.py", 3)

        assert CallSite.from_dict(site.to_dict()) == site


class TestViolation:
    """Tests for Violation."""

    def test_to_dict(self):
        """Test dictionary form."""
        data = make_violation().to_dict()

        assert data["rule_id"] == "minimumSize"
        assert data["severity"] == "fail"
        assert data["elements"] == ["Logo"]
        assert data["location"] == {"file_path": "tests/test_home.py", "line": 10}

    def test_from_dict(self):
        """Test restoring from a dictionary."""
        original = make_violation(severity=Severity.WARN)

        restored = Violation.from_dict(original.to_dict())

        assert restored == original
        assert restored.data == original.data

    def test_data_excluded_from_equality(self):
        """Test diagnostic data does not affect equality."""
        assert make_violation() == dataclasses.replace(make_violation(), data={})

    def test_hashable(self):
        """Test violations can be collected into sets."""
        assert len({make_violation(), make_violation()}) == 1


class TestEvaluationResult:
    """Tests for EvaluationResult."""

    def test_counts(self):
        """Test counts per severity."""
        result = EvaluationResult(
            violations=[
                make_violation(Severity.FAIL),
                make_violation(Severity.WARN),
                make_violation(Severity.WARN),
                make_violation(Severity.INFO),
            ]
        )

        assert result.fail_count == 1
        assert result.warn_count == 2
        assert result.info_count == 1
        assert result.should_block() is True

    def test_warnings_do_not_block(self):
        """Test only FAIL violations block."""
        result = EvaluationResult(violations=[make_violation(Severity.WARN)])

        assert result.should_block() is False

    def test_to_dict(self):
        """Test dictionary form."""
        result = EvaluationResult(
            violations=[make_violation()],
            rules=[RuleId.MINIMUM_SIZE],
            element_count=3,
            evaluated_count=2,
        )

        data = result.to_dict()

        assert data["rules"] == ["minimumSize"]
        assert data["element_count"] == 3
        assert data["evaluated_count"] == 2
        assert len(data["violations"]) == 1
