"""Unit tests for the SARIF exporter."""

import json

from a11y_guard.models import CallSite, EvaluationResult, RuleId, Severity, Violation
from a11y_guard.reporters import RULE_METADATA, SARIFConfig, SARIFExporter


def make_violation(rule_id=RuleId.MINIMUM_SIZE, severity=Severity.FAIL, line=12):
    return Violation(
        rule_id=rule_id,
        check="width",
        message="Accessibility Failure: Element not wide enough: Logo",
        elements=("Logo",),
        location=CallSite("tests/test_home.py", line),
        severity=severity,
        data={"expected_min": 18, "actual": 4},
    )


class TestSARIFExporter:
    """Tests for SARIFExporter."""

    def test_metadata_covers_catalogue(self):
        """Test every rule has SARIF metadata."""
        assert set(RULE_METADATA) == set(RuleId)

    def test_empty_document(self):
        """Test an empty result is a valid SARIF shell."""
        doc = SARIFExporter().export(EvaluationResult())

        assert doc["version"] == "2.1.0"
        run = doc["runs"][0]
        assert run["tool"]["driver"]["name"] == "a11y-guard"
        assert run["tool"]["driver"]["rules"] == []
        assert run["results"] == []

    def test_result_fields(self):
        """Test a violation maps to a SARIF result."""
        doc = SARIFExporter().export(EvaluationResult(violations=[make_violation()]))

        result = doc["runs"][0]["results"][0]
        assert result["ruleId"] == "minimumSize"
        assert result["ruleIndex"] == 0
        assert result["level"] == "error"
        location = result["locations"][0]["physicalLocation"]
        assert location["artifactLocation"]["uri"] == "tests/test_home.py"
        assert location["region"]["startLine"] == 12
        assert result["properties"]["check"] == "width"
        assert result["properties"]["elements"] == ["Logo"]
        assert result["properties"]["data"] == {"expected_min": 18, "actual": 4}

    def test_rule_index_in_catalogue_order(self):
        """Test rule definitions are listed in catalogue order."""
        violations = [
            make_violation(RuleId.DUPLICATED),
            make_violation(RuleId.MINIMUM_SIZE),
        ]

        doc = SARIFExporter().export(EvaluationResult(violations=violations))

        run = doc["runs"][0]
        assert [r["id"] for r in run["tool"]["driver"]["rules"]] == [
            "minimumSize",
            "duplicated",
        ]
        assert [r["ruleIndex"] for r in run["results"]] == [1, 0]

    def test_severity_levels(self):
        """Test severities map to SARIF levels."""
        violations = [
            make_violation(severity=Severity.FAIL),
            make_violation(severity=Severity.WARN),
            make_violation(severity=Severity.INFO),
        ]

        doc = SARIFExporter().export(EvaluationResult(violations=violations))

        assert [r["level"] for r in doc["runs"][0]["results"]] == [
            "error",
            "warning",
            "note",
        ]

    def test_unknown_line_clamped(self):
        """Test line numbers below one are clamped for SARIF."""
        doc = SARIFExporter().export(EvaluationResult(violations=[make_violation(line=0)]))

        region = doc["runs"][0]["results"][0]["locations"][0]["physicalLocation"]["region"]
        assert region["startLine"] == 1

    def test_exclude_data(self):
        """Test data can be left out."""
        exporter = SARIFExporter(SARIFConfig(include_data=False))

        doc = exporter.export(EvaluationResult(violations=[make_violation()]))

        assert "data" not in doc["runs"][0]["results"][0]["properties"]

    def test_export_to_file(self, tmp_path):
        """Test writing the document to disk."""
        output = tmp_path / "reports" / "a11y.sarif"

        SARIFExporter().export(EvaluationResult(violations=[make_violation()]), output)

        assert json.loads(output.read_text())["runs"][0]["results"][0]["ruleId"] == (
            "minimumSize"
        )

    def test_export_json(self):
        """Test JSON string output."""
        text = SARIFExporter().export_json(EvaluationResult())

        assert json.loads(text)["version"] == "2.1.0"
