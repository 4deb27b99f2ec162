"""Unit tests for CLI and JSON reporters."""

import io
import json

from a11y_guard.cli.reporter import CLIReporter, JSONReporter
from a11y_guard.models import CallSite, EvaluationResult, RuleId, Severity, Violation


def make_violation(rule_id=RuleId.MINIMUM_SIZE, severity=Severity.FAIL, message="Too small"):
    return Violation(
        rule_id=rule_id,
        check="height",
        message=message,
        elements=("Logo",),
        location=CallSite("tests/test_home.py", 12),
        severity=severity,
    )


def make_result(*violations, suppressed=0):
    return EvaluationResult(
        violations=list(violations),
        rules=list(RuleId),
        element_count=5,
        evaluated_count=4,
        suppressed_count=suppressed,
        analysis_time_ms=3.2,
    )


class TestCLIReporter:
    """Tests for CLIReporter."""

    def test_violation_line(self):
        """Test each violation is printed as location, rule and message."""
        stream = io.StringIO()

        CLIReporter(stream, use_color=False).report(make_result(make_violation()))

        lines = stream.getvalue().splitlines()
        assert lines[0] == "tests/test_home.py:12 minimumSize Too small"
        assert "1 violation(s) across 5 element(s) in 3ms (1 blocking)" in lines[-1]

    def test_clean_summary(self):
        """Test the summary for a clean run."""
        stream = io.StringIO()

        CLIReporter(stream, use_color=False).report(make_result())

        assert "No violations across 5 element(s)" in stream.getvalue()

    def test_suppressed_count(self):
        """Test suppressed violations are mentioned."""
        stream = io.StringIO()

        CLIReporter(stream, use_color=False).report(make_result(suppressed=2))

        assert "2 suppressed by ignore rules" in stream.getvalue()

    def test_warnings_not_blocking(self):
        """Test the blocking count omits warnings."""
        stream = io.StringIO()

        CLIReporter(stream, use_color=False).report(
            make_result(make_violation(severity=Severity.WARN))
        )

        assert "blocking" not in stream.getvalue()

    def test_color(self):
        """Test colors are applied per severity."""
        stream = io.StringIO()

        CLIReporter(stream, use_color=True).report(make_result(make_violation()))

        assert CLIReporter.COLORS[Severity.FAIL] in stream.getvalue()

    def test_color_autodetect(self):
        """Test non-terminal streams get no color."""
        assert CLIReporter(io.StringIO()).use_color is False


class TestJSONReporter:
    """Tests for JSONReporter."""

    def test_pass(self):
        """Test a clean result passes."""
        stream = io.StringIO()

        output = JSONReporter(stream).report(make_result())

        assert output["decision"] == "pass"
        assert output["reason"] == "Accessibility checks passed"
        assert json.loads(stream.getvalue()) == output

    def test_block_single_rule(self):
        """Test the reason names a single failing rule."""
        output = JSONReporter(io.StringIO()).report(
            make_result(make_violation(), make_violation())
        )

        assert output["decision"] == "block"
        assert output["reason"] == "Blocked: minimumSize violation"
        assert output["counts"] == {"fail": 2, "warn": 0, "info": 0}

    def test_block_many_rules(self):
        """Test the reason truncates after three rules."""
        result = make_result(
            *(make_violation(rule_id=r) for r in list(RuleId)[:4])
        )

        output = JSONReporter(io.StringIO()).report(result)

        assert output["reason"].startswith("Blocked: 4 rule violations")
        assert output["reason"].endswith("...)")

    def test_warnings_pass(self):
        """Test warnings alone pass with a note."""
        output = JSONReporter(io.StringIO()).report(
            make_result(make_violation(severity=Severity.WARN))
        )

        assert output["decision"] == "pass"
        assert "1 warnings" in output["reason"]

    def test_counts_and_metadata(self):
        """Test run metadata is included."""
        output = JSONReporter(io.StringIO()).report(make_result(suppressed=1))

        assert output["element_count"] == 5
        assert output["evaluated_count"] == 4
        assert output["suppressed_count"] == 1
        assert output["rules"][0] == "minimumSize"
