"""Diagnostics core types."""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Final

from elmdiag.text import Range

ELM_SOURCE: Final[str] = "Elm"
"""Source label attached to every diagnostic produced from `elm make`."""


class Severity(IntEnum):
    """Editor-protocol severity codes."""

    ERROR = 1
    WARNING = 2


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Positional, editor-facing diagnostic rendered from a compiler issue."""

    range: Range
    message: str
    severity: Severity = Severity.ERROR
    source: str = ELM_SOURCE

    def to_dict(self) -> dict[str, Any]:
        return {
            "range": self.range.to_lsp(),
            "message": self.message,
            "severity": int(self.severity),
            "source": self.source,
        }
