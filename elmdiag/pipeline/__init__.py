"""Check -> resolve -> group -> map pipeline and its result carriers."""

from elmdiag.pipeline.entrypoints import (
    TOOL_UNAVAILABLE_NOTICE,
    build_file_diagnostics,
    check_for_errors,
    create_diagnostics,
)
from elmdiag.pipeline.grouping import group_issues_by_file
from elmdiag.pipeline.provider import DiagnosticsPublisher, MakeDiagnosticsProvider
from elmdiag.pipeline.results import FileDiagnostics

__all__ = [
    "TOOL_UNAVAILABLE_NOTICE",
    "DiagnosticsPublisher",
    "FileDiagnostics",
    "MakeDiagnosticsProvider",
    "build_file_diagnostics",
    "check_for_errors",
    "create_diagnostics",
    "group_issues_by_file",
]
