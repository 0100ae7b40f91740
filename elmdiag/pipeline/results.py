"""Pipeline result carriers handed to the diagnostics publisher."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from elmdiag.diagnostics import Diagnostic, has_errors


@dataclass(frozen=True, slots=True)
class FileDiagnostics:
    """Diagnostics attributed to one resolved file, in encounter order."""

    uri: str
    diagnostics: tuple[Diagnostic, ...]

    @property
    def has_errors(self) -> bool:
        return has_errors(self.diagnostics)

    def to_dict(self) -> dict[str, Any]:
        """Editor-protocol `publishDiagnostics` params."""
        return {
            "uri": self.uri,
            "diagnostics": [diagnostic.to_dict() for diagnostic in self.diagnostics],
        }
