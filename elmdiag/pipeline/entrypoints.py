"""Entrypoints that run one compiler check and build per-file diagnostics."""

from __future__ import annotations

from collections.abc import Iterable
import contextlib
import logging
from typing import Final

from elmdiag.diagnostics import issue_to_diagnostic
from elmdiag.errors import ToolUnavailableError
from elmdiag.issues import Issue, IssueStreamParser
from elmdiag.make import MakeInvoker
from elmdiag.pipeline.grouping import group_issues_by_file
from elmdiag.pipeline.results import FileDiagnostics
from elmdiag.workspace import file_uri_to_path, path_to_file_uri, resolve_issue

logger = logging.getLogger(__name__)

TOOL_UNAVAILABLE_NOTICE: Final[str] = (
    "The 'elm make' compiler is not available.  Install Elm from http://elm-lang.org/."
)


async def check_for_errors(
    invoker: MakeInvoker,
    *,
    workspace_root: str,
    file_path: str,
) -> list[Issue]:
    """Run the compiler on `file_path` and collect the issues it reports.

    A missing compiler yields `[]`; any other launch failure or a malformed
    report line propagates and no partial result is returned.
    """
    parser = IssueStreamParser(default_path=file_path)
    try:
        async with contextlib.aclosing(invoker.report_lines(file_path, cwd=workspace_root)) as lines:
            async for line in lines:
                parser.feed(line)
    except ToolUnavailableError:
        logger.info(TOOL_UNAVAILABLE_NOTICE)
        return []

    logger.debug("Parsed %d issue(s) from %d report line(s)", len(parser.issues), parser.lines_seen)
    return parser.issues


def build_file_diagnostics(issues: Iterable[Issue], *, workspace_root: str) -> list[FileDiagnostics]:
    """Resolve, group and map issues into one entry per file."""
    resolved = [resolve_issue(issue, workspace_root) for issue in issues]
    return [
        FileDiagnostics(
            uri=path_to_file_uri(path),
            diagnostics=tuple(issue_to_diagnostic(issue) for issue in file_issues),
        )
        for path, file_issues in group_issues_by_file(resolved)
    ]


async def create_diagnostics(
    invoker: MakeInvoker,
    *,
    workspace_root: str,
    document_uri: str,
) -> list[FileDiagnostics]:
    """Check the saved document and return diagnostics grouped per file."""
    issues = await check_for_errors(
        invoker,
        workspace_root=workspace_root,
        file_path=file_uri_to_path(document_uri),
    )
    return build_file_diagnostics(issues, workspace_root=workspace_root)
