"""Compiler report decoding and the canonical issue model."""

from elmdiag.issues.model import (
    CompileErrorsReport,
    ErrorReport,
    FileErrors,
    Issue,
    MessageFragment,
    PlainText,
    Problem,
    Report,
    StyledText,
    render_fragment,
    render_message,
)
from elmdiag.issues.parser import (
    IssueStreamParser,
    decode_report_line,
    parse_report_lines,
    report_to_issues,
)

__all__ = [
    "CompileErrorsReport",
    "ErrorReport",
    "FileErrors",
    "Issue",
    "IssueStreamParser",
    "MessageFragment",
    "PlainText",
    "Problem",
    "Report",
    "StyledText",
    "decode_report_line",
    "parse_report_lines",
    "render_fragment",
    "render_message",
    "report_to_issues",
]
