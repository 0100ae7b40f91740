"""Diagnostics."""

from elmdiag.diagnostics.diagnostic import ELM_SOURCE, Diagnostic, Severity
from elmdiag.diagnostics.mapper import (
    clean_details,
    format_message,
    issue_to_diagnostic,
    region_to_range,
    severity_from_string,
)
from elmdiag.diagnostics.report import count_by_severity, has_errors

__all__ = [
    "ELM_SOURCE",
    "Diagnostic",
    "Severity",
    "clean_details",
    "count_by_severity",
    "format_message",
    "has_errors",
    "issue_to_diagnostic",
    "region_to_range",
    "severity_from_string",
]
