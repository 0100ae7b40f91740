"""Editor diagnostics from `elm make --report json` output."""

from elmdiag.pipeline import (
    FileDiagnostics,
    MakeDiagnosticsProvider,
    check_for_errors,
    create_diagnostics,
)

__all__ = [
    "FileDiagnostics",
    "MakeDiagnosticsProvider",
    "check_for_errors",
    "create_diagnostics",
]
