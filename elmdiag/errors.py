"""Error taxonomy for compiler invocation and report parsing."""

from __future__ import annotations


class ElmDiagError(Exception):
    """Base class for errors raised by elmdiag."""


class ToolUnavailableError(ElmDiagError):
    """The compiler executable could not be located."""

    def __init__(self, executable: str) -> None:
        super().__init__(f"Compiler executable not found: {executable!r}")
        self.executable = executable


class SpawnFailureError(ElmDiagError):
    """The compiler process could not be launched for any other reason."""

    def __init__(self, command: list[str], reason: str) -> None:
        super().__init__(f"Failed to launch {' '.join(command)!r}: {reason}")
        self.command = command


class MalformedReportLineError(ElmDiagError):
    """A report line was not valid JSON or had an invalid structure."""

    def __init__(self, line_number: int, line: str, reason: str) -> None:
        preview = line if len(line) <= 200 else line[:200] + "..."
        super().__init__(f"Malformed report line {line_number}: {reason}: {preview!r}")
        self.line_number = line_number
        self.line = line
        self.reason = reason
