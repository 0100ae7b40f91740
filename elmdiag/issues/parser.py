"""Decode `elm make --report json` lines into canonical issues."""

from __future__ import annotations

from collections.abc import Iterable
import json
import logging
from typing import Any, Final

from elmdiag.errors import MalformedReportLineError
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
    render_message,
)
from elmdiag.text import FILE_START_REGION, Region

logger = logging.getLogger(__name__)

COMPILE_ERRORS_TYPE: Final[str] = "compile-errors"
ERROR_TYPE: Final[str] = "error"


def decode_report_line(line: str, *, line_number: int = 1) -> Report | None:
    """Decode one report line; `None` when the document type is not recognized."""
    try:
        document = json.loads(line)
    except json.JSONDecodeError as exc:
        raise MalformedReportLineError(line_number, line, f"invalid JSON ({exc.msg})") from exc

    if not isinstance(document, dict):
        return None
    kind = document.get("type")
    try:
        if kind == COMPILE_ERRORS_TYPE:
            return _decode_compile_errors(document)
        if kind == ERROR_TYPE:
            return _decode_error(document)
    except (KeyError, TypeError, ValueError) as exc:
        raise MalformedReportLineError(line_number, line, f"invalid {kind!r} document ({exc!r})") from exc

    logger.debug("Ignoring report document with type %r", kind)
    return None


def report_to_issues(report: Report, *, default_path: str | None = None) -> list[Issue]:
    """Expand a decoded report into issues, in document order."""
    if isinstance(report, CompileErrorsReport):
        return [
            Issue(
                file=file_errors.path,
                region=problem.region,
                overview=problem.title,
                details=render_message(problem.message),
            )
            for file_errors in report.errors
            for problem in file_errors.problems
        ]

    path = report.path
    if path is None:
        path = default_path if default_path is not None else ""
    return [
        Issue(
            file=path,
            region=report.region if report.region is not None else FILE_START_REGION,
            overview=report.title,
            details=render_message(report.message),
        )
    ]


class IssueStreamParser:
    """Incremental parser fed one report line at a time, in arrival order."""

    def __init__(self, *, default_path: str | None = None) -> None:
        self.default_path = default_path
        self.issues: list[Issue] = []
        self._line_number = 0

    def feed(self, line: str) -> list[Issue]:
        self._line_number += 1
        report = decode_report_line(line, line_number=self._line_number)
        if report is None:
            return []
        issues = report_to_issues(report, default_path=self.default_path)
        self.issues.extend(issues)
        return issues

    @property
    def lines_seen(self) -> int:
        return self._line_number


def parse_report_lines(lines: Iterable[str], *, default_path: str | None = None) -> list[Issue]:
    parser = IssueStreamParser(default_path=default_path)
    for line in lines:
        parser.feed(line)
    return parser.issues


def _decode_compile_errors(document: dict[str, Any]) -> CompileErrorsReport:
    return CompileErrorsReport(
        errors=tuple(_decode_file_errors(entry) for entry in _as_list(document["errors"], "errors"))
    )


def _decode_file_errors(entry: Any) -> FileErrors:
    if not isinstance(entry, dict):
        raise TypeError(f"Expected error entry object, got {type(entry).__name__}")
    name = entry.get("name")
    return FileErrors(
        path=_as_str(entry["path"], "path"),
        problems=tuple(_decode_problem(problem) for problem in _as_list(entry["problems"], "problems")),
        name=name if isinstance(name, str) else None,
    )


def _decode_problem(problem: Any) -> Problem:
    if not isinstance(problem, dict):
        raise TypeError(f"Expected problem object, got {type(problem).__name__}")
    return Problem(
        title=_as_str(problem["title"], "title"),
        region=Region.from_json(problem["region"]),
        message=_decode_message(problem["message"]),
    )


def _decode_error(document: dict[str, Any]) -> ErrorReport:
    path = document.get("path")
    region = document.get("region")
    return ErrorReport(
        path=None if path is None else _as_str(path, "path"),
        title=_as_str(document["title"], "title"),
        message=_decode_message(document["message"]),
        region=None if region is None else Region.from_json(region),
    )


def _decode_message(raw: Any) -> tuple[MessageFragment, ...]:
    fragments: list[MessageFragment] = []
    for item in _as_list(raw, "message"):
        if isinstance(item, str):
            fragments.append(PlainText(item))
        elif isinstance(item, dict):
            color = item.get("color")
            fragments.append(
                StyledText(
                    string=_as_str(item["string"], "string"),
                    bold=bool(item.get("bold", False)),
                    underline=bool(item.get("underline", False)),
                    color=color if isinstance(color, str) else None,
                )
            )
        else:
            raise TypeError(f"Unsupported message fragment: {item!r}")
    return tuple(fragments)


def _as_list(value: Any, field: str) -> list[Any]:
    if not isinstance(value, list):
        raise TypeError(f"Expected list for {field!r}, got {type(value).__name__}")
    return value


def _as_str(value: Any, field: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"Expected string for {field!r}, got {type(value).__name__}")
    return value
