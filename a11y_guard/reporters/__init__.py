"""Reporters for accessibility violations.

This package provides export formats for evaluation results, including
SARIF for code scanning integration.
"""

from .sarif import RULE_METADATA, SARIFConfig, SARIFExporter

__all__ = [
    "RULE_METADATA",
    "SARIFConfig",
    "SARIFExporter",
]
