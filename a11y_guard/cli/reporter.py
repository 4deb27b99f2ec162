"""Output reporters for accessibility evaluation results.

This module provides formatters for outputting evaluation results in
formats suitable for terminal display and machine consumption.
"""

import json
import sys
from typing import Any, TextIO

from ..models import EvaluationResult, Severity, Violation


class CLIReporter:
    """CLI reporter with color-coded output.

    Format: file:line ruleId message
    Colors: red=FAIL, yellow=WARN, blue=INFO

    Example output:
        tests/test_login.py:12 minimumSize Accessibility Failure: Element not tall enough: ...
        tests/test_login.py:12 duplicated Accessibility Failure: Elements have duplicated labels: ...

        2 violation(s) across 14 element(s) in 3ms (2 blocking)
    """

    COLORS = {
        Severity.FAIL: "\033[0;31m",  # Red
        Severity.WARN: "\033[1;33m",  # Yellow
        Severity.INFO: "\033[0;34m",  # Blue
    }
    RESET = "\033[0m"
    DIM = "\033[2m"

    def __init__(self, stream: TextIO = sys.stderr, use_color: bool | None = None):
        """Initialize the CLI reporter.

        Args:
            stream: Output stream (default: stderr).
            use_color: Whether to use ANSI colors. Auto-detects if None.
        """
        self.stream = stream
        if use_color is None:
            self.use_color = hasattr(stream, "isatty") and stream.isatty()
        else:
            self.use_color = use_color

    def report(self, result: EvaluationResult) -> None:
        """Output violations in CLI format."""
        for violation in result.violations:
            self._report_violation(violation)

        self._print_summary(result)

    def _report_violation(self, violation: Violation) -> None:
        location = str(violation.location)
        rule = violation.rule_id.value

        if self.use_color:
            color = self.COLORS.get(violation.severity, "")
            line = f"{color}{location} {rule}{self.RESET} {violation.message}"
        else:
            line = f"{location} {rule} {violation.message}"

        print(line, file=self.stream)

    def _print_summary(self, result: EvaluationResult) -> None:
        total = len(result.violations)
        time_ms = result.analysis_time_ms
        scope = f"across {result.element_count} element(s)"

        if total == 0:
            summary = f"\nNo violations {scope} ({time_ms:.0f}ms)"
        else:
            summary = f"\n{total} violation(s) {scope} in {time_ms:.0f}ms"
            if result.fail_count > 0:
                summary += f" ({result.fail_count} blocking)"

        if result.suppressed_count:
            dim = self.DIM if self.use_color else ""
            reset = self.RESET if self.use_color else ""
            summary += f"\n{dim}{result.suppressed_count} suppressed by ignore rules{reset}"

        print(summary, file=self.stream)


class JSONReporter:
    """JSON reporter for machine consumption.

    Output format:
    {
        "decision": "pass" | "block",
        "reason": "summary",
        "violations": [...],
        "analysis_time_ms": float,
        "rules": [...],
        "element_count": int,
        "evaluated_count": int,
        "suppressed_count": int,
        "counts": {"fail": int, "warn": int, "info": int}
    }
    """

    def __init__(self, stream: TextIO = sys.stdout):
        self.stream = stream

    def report(self, result: EvaluationResult) -> dict[str, Any]:
        """Output violations as JSON.

        Returns:
            The output dictionary (also written to stream).
        """
        output = {
            "decision": "block" if result.should_block() else "pass",
            "reason": self._build_reason(result),
            "violations": [v.to_dict() for v in result.violations],
            "analysis_time_ms": result.analysis_time_ms,
            "rules": [r.value for r in result.rules],
            "element_count": result.element_count,
            "evaluated_count": result.evaluated_count,
            "suppressed_count": result.suppressed_count,
            "counts": {
                "fail": result.fail_count,
                "warn": result.warn_count,
                "info": result.info_count,
            },
        }

        json.dump(output, self.stream)
        return output

    def _build_reason(self, result: EvaluationResult) -> str:
        if result.fail_count == 0:
            if result.warn_count == 0 and result.info_count == 0:
                return "Accessibility checks passed"
            return (
                f"Accessibility checks passed ({result.warn_count} warnings, "
                f"{result.info_count} info)"
            )

        fail_rules = [
            v.rule_id.value for v in result.violations if v.severity == Severity.FAIL
        ]
        unique_rules = list(dict.fromkeys(fail_rules))  # Preserve order, remove dupes

        if len(unique_rules) == 1:
            return f"Blocked: {unique_rules[0]} violation"
        elif len(unique_rules) <= 3:
            return f"Blocked: {len(unique_rules)} rule violations ({', '.join(unique_rules)})"
        else:
            return f"Blocked: {len(unique_rules)} rule violations ({', '.join(unique_rules[:3])}...)"
