"""SARIF exporter for accessibility violations.

This module exports violations to SARIF (Static Analysis Results
Interchange Format) so they can be surfaced by code scanning tools.

SARIF Specification: https://docs.oasis-open.org/sarif/sarif/v2.1.0/
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..models import CallSite, EvaluationResult, RuleId, Severity, Violation


@dataclass
class SARIFConfig:
    """Configuration for SARIF output."""

    tool_name: str = "a11y-guard"
    tool_version: str = "1.0.0"
    tool_information_uri: str = "https://www.w3.org/WAI/standards-guidelines/wcag/"
    include_data: bool = True  # Whether to attach expected/actual values


# Rule metadata for SARIF
RULE_METADATA: dict[RuleId, dict[str, Any]] = {
    RuleId.MINIMUM_SIZE: {
        "name": "Minimum Size",
        "shortDescription": "Element smaller than 18x18",
        "fullDescription": (
            "Elements must be at least 18 points tall and wide so they can be "
            "perceived. Height and width are checked independently."
        ),
        "tags": ["accessibility", "size"],
    },
    RuleId.MINIMUM_INTERACTIVE_SIZE: {
        "name": "Minimum Interactive Size",
        "shortDescription": "Interactive element smaller than 44x44",
        "fullDescription": (
            "Elements receiving direct touch or pointer input must offer a "
            "touch target of at least 44x44 points."
        ),
        "tags": ["accessibility", "size", "touch-target"],
    },
    RuleId.LABEL_PRESENCE: {
        "name": "Label Presence",
        "shortDescription": "Accessibility label missing or too short",
        "fullDescription": (
            "Elements other than cells need an accessibility label longer than "
            "the configured minimum length."
        ),
        "tags": ["accessibility", "label"],
    },
    RuleId.BUTTON_LABEL: {
        "name": "Button Label",
        "shortDescription": "Control label restates its role or is badly formed",
        "fullDescription": (
            "Control labels must be meaningful, start with a capital letter, "
            "contain no periods and not include the word 'button'; the role is "
            "conveyed by traits."
        ),
        "tags": ["accessibility", "label", "control"],
    },
    RuleId.IMAGE_LABEL: {
        "name": "Image Label",
        "shortDescription": "Image label restates its role or is a file name",
        "fullDescription": (
            "Image labels must be meaningful, must not contain words such as "
            "'image' or 'icon' and must not look like a file name."
        ),
        "tags": ["accessibility", "label", "image"],
    },
    RuleId.LABEL_LENGTH: {
        "name": "Label Length",
        "shortDescription": "Accessibility label longer than 40 characters",
        "fullDescription": (
            "Labels should be short. Static text and text views are exempt."
        ),
        "tags": ["accessibility", "label"],
    },
    RuleId.IMAGE_TRAIT: {
        "name": "Image Trait",
        "shortDescription": "Image without the image trait",
        "fullDescription": (
            "Image elements must carry the image trait so assistive technology "
            "announces them as images."
        ),
        "tags": ["accessibility", "trait", "image"],
    },
    RuleId.DUPLICATED: {
        "name": "Duplicated Label",
        "shortDescription": "Two controls share the same label",
        "fullDescription": (
            "Distinct controls with identical labels cannot be told apart by "
            "assistive technology users."
        ),
        "tags": ["accessibility", "label", "duplication"],
    },
}


class SARIFExporter:
    """Exports violations to SARIF format.

    SARIF (Static Analysis Results Interchange Format) is an OASIS
    standard for representing static analysis results.
    """

    SARIF_VERSION = "2.1.0"
    SARIF_SCHEMA = "https://json.schemastore.org/sarif-2.1.0.json"

    def __init__(self, config: SARIFConfig | None = None):
        self.config = config or SARIFConfig()

    def export(
        self,
        result: EvaluationResult,
        output_path: Path | None = None,
    ) -> dict[str, Any]:
        """Export violations to SARIF format.

        Args:
            result: Evaluation result to export.
            output_path: Optional path to write SARIF file.

        Returns:
            SARIF document as dictionary.
        """
        sarif_doc = self._build_sarif_document(result.violations)

        if output_path:
            output_path = Path(output_path)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, "w") as f:
                json.dump(sarif_doc, f, indent=2)

        return sarif_doc

    def export_json(self, result: EvaluationResult) -> str:
        """Export violations to SARIF JSON string."""
        return json.dumps(self.export(result), indent=2)

    def _build_sarif_document(self, violations: list[Violation]) -> dict[str, Any]:
        # Catalogue order keeps rule indices stable between runs
        present = {v.rule_id for v in violations}
        rule_ids = [r for r in RuleId if r in present]
        rule_index = {rule_id: idx for idx, rule_id in enumerate(rule_ids)}

        results = [
            self._build_result(violation, rule_index[violation.rule_id])
            for violation in violations
        ]

        return {
            "$schema": self.SARIF_SCHEMA,
            "version": self.SARIF_VERSION,
            "runs": [
                {
                    "tool": {
                        "driver": {
                            "name": self.config.tool_name,
                            "version": self.config.tool_version,
                            "informationUri": self.config.tool_information_uri,
                            "rules": self._build_rule_definitions(rule_ids),
                        }
                    },
                    "results": results,
                }
            ],
        }

    def _build_rule_definitions(self, rule_ids: list[RuleId]) -> list[dict[str, Any]]:
        rules = []
        for rule_id in rule_ids:
            metadata = RULE_METADATA.get(rule_id, {})
            rules.append(
                {
                    "id": rule_id.value,
                    "name": metadata.get("name", rule_id.value),
                    "shortDescription": {
                        "text": metadata.get("shortDescription", f"Rule {rule_id.value}")
                    },
                    "fullDescription": {
                        "text": metadata.get(
                            "fullDescription", f"Accessibility rule: {rule_id.value}"
                        )
                    },
                    "defaultConfiguration": {"level": "error"},
                    "properties": {
                        "tags": metadata.get("tags", ["accessibility"]),
                    },
                }
            )
        return rules

    def _build_result(self, violation: Violation, rule_index: int) -> dict[str, Any]:
        result: dict[str, Any] = {
            "ruleId": violation.rule_id.value,
            "ruleIndex": rule_index,
            "level": self._severity_to_sarif_level(violation.severity),
            "message": {"text": violation.message},
            "locations": [self._build_location(violation.location)],
        }

        properties: dict[str, Any] = {
            "check": violation.check,
            "elements": list(violation.elements),
        }
        if self.config.include_data and violation.data:
            properties["data"] = violation.data
        result["properties"] = properties

        return result

    def _build_location(self, location: CallSite) -> dict[str, Any]:
        return {
            "physicalLocation": {
                "artifactLocation": {"uri": location.file_path},
                "region": {"startLine": max(location.line, 1)},
            }
        }

    def _severity_to_sarif_level(self, severity: Severity) -> str:
        mapping = {
            Severity.FAIL: "error",
            Severity.WARN: "warning",
            Severity.INFO: "note",
        }
        return mapping.get(severity, "warning")


__all__ = [
    "RULE_METADATA",
    "SARIFConfig",
    "SARIFExporter",
]
