"""Issue -> Diagnostic conversion."""

from __future__ import annotations

import re
from typing import Final

from elmdiag.diagnostics.diagnostic import ELM_SOURCE, Diagnostic, Severity
from elmdiag.issues import Issue
from elmdiag.text import Range, Region

# Terminal styling codes (e.g. `[31m`) that leak into report text.
_STYLE_CODE: Final[re.Pattern[str]] = re.compile(r"\[\d+m")

_SEVERITIES: Final[dict[str, Severity]] = {
    "error": Severity.ERROR,
    "warning": Severity.WARNING,
}


def region_to_range(region: Region) -> Range:
    """1-based inclusive region -> 0-based range; nothing else is adjusted."""
    return Range(region.start.offset(-1), region.end.offset(-1))


def clean_details(details: str) -> str:
    return _STYLE_CODE.sub("", details)


def format_message(issue: Issue) -> str:
    return issue.overview + " - " + clean_details(issue.details)


def severity_from_string(value: str) -> Severity:
    """Unknown or empty severity strings fall back to `Severity.ERROR`."""
    return _SEVERITIES.get(value, Severity.ERROR)


def issue_to_diagnostic(issue: Issue) -> Diagnostic:
    return Diagnostic(
        range=region_to_range(issue.region),
        message=format_message(issue),
        severity=severity_from_string(issue.type),
        source=ELM_SOURCE,
    )
