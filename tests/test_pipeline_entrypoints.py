import asyncio
from collections.abc import AsyncGenerator, Sequence
import logging

import pytest

from elmdiag.diagnostics import Severity
from elmdiag.errors import MalformedReportLineError, SpawnFailureError, ToolUnavailableError
from elmdiag.pipeline import (
    TOOL_UNAVAILABLE_NOTICE,
    FileDiagnostics,
    MakeDiagnosticsProvider,
    build_file_diagnostics,
    check_for_errors,
    create_diagnostics,
)
from elmdiag.text import Range
from tests._shared_reports import (
    NAMING_ERROR_LINE,
    NO_ELM_JSON_LINE,
    UNKNOWN_PACKAGE_LINE,
    compile_errors_line,
    error_line,
    file_errors,
    problem,
    region,
)


class FakeInvoker:
    """Replays canned report lines, or fails the launch with `error`."""

    def __init__(self, lines: Sequence[str] = (), *, error: Exception | None = None) -> None:
        self.lines = list(lines)
        self.error = error
        self.calls: list[tuple[str, str]] = []
        self.closed = False
        self.lines_yielded = 0

    async def report_lines(self, file_path: str, *, cwd: str) -> AsyncGenerator[str, None]:
        self.calls.append((file_path, cwd))
        if self.error is not None:
            raise self.error
        try:
            for line in self.lines:
                await asyncio.sleep(0)
                self.lines_yielded += 1
                yield line
        finally:
            self.closed = True


class RecordingPublisher:
    def __init__(self) -> None:
        self.published: list[FileDiagnostics] = []

    def publish_diagnostics(self, group: FileDiagnostics) -> None:
        self.published.append(group)


def test_check_for_errors_collects_issues_in_arrival_order() -> None:
    invoker = FakeInvoker([NAMING_ERROR_LINE, UNKNOWN_PACKAGE_LINE])

    issues = asyncio.run(check_for_errors(invoker, workspace_root="/ws", file_path="/ws/src/Main.elm"))

    assert [issue.overview for issue in issues] == [
        "NAMING ERROR",
        "TYPE MISMATCH",
        "UNUSED IMPORT",
        "UNKNOWN PACKAGE",
    ]
    assert invoker.calls == [("/ws/src/Main.elm", "/ws")]
    assert invoker.closed is True


def test_check_for_errors_without_output_yields_nothing() -> None:
    invoker = FakeInvoker([])

    assert asyncio.run(check_for_errors(invoker, workspace_root="/ws", file_path="/ws/A.elm")) == []
    assert invoker.closed is True


def test_tool_unavailable_yields_empty_result_and_logs_notice(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="elmdiag")
    invoker = FakeInvoker(error=ToolUnavailableError("elm"))

    result = asyncio.run(create_diagnostics(invoker, workspace_root="/ws", document_uri="file:///ws/A.elm"))

    assert result == []
    assert TOOL_UNAVAILABLE_NOTICE in caplog.messages


def test_spawn_failure_propagates() -> None:
    invoker = FakeInvoker(error=SpawnFailureError(["elm", "make"], "permission denied"))

    with pytest.raises(SpawnFailureError):
        asyncio.run(check_for_errors(invoker, workspace_root="/ws", file_path="/ws/A.elm"))


def test_malformed_line_aborts_check_and_closes_stream() -> None:
    invoker = FakeInvoker([NAMING_ERROR_LINE, "elm: internal error", UNKNOWN_PACKAGE_LINE])

    with pytest.raises(MalformedReportLineError) as excinfo:
        asyncio.run(create_diagnostics(invoker, workspace_root="/ws", document_uri="file:///ws/A.elm"))

    assert excinfo.value.line_number == 2
    assert invoker.lines_yielded == 2
    assert invoker.closed is True


def test_same_file_from_both_document_shapes_forms_one_group() -> None:
    lines = [
        compile_errors_line(file_errors("A.elm", problem("NAMING ERROR", region(2, 3, 2, 7), "missing"))),
        error_line("A.elm", "MODULE NAME MISMATCH", "bad ", {"string": "module", "color": "RED"}, " name"),
    ]

    groups = asyncio.run(
        create_diagnostics(FakeInvoker(lines), workspace_root="/ws", document_uri="file:///ws/A.elm")
    )

    assert len(groups) == 1
    assert groups[0].uri == "file:///A.elm"
    assert [diagnostic.message for diagnostic in groups[0].diagnostics] == [
        "NAMING ERROR - missing",
        "MODULE NAME MISMATCH - bad module name",
    ]
    assert [diagnostic.range for diagnostic in groups[0].diagnostics] == [
        Range.create(1, 2, 1, 6),
        Range.create(0, 0, 0, 0),
    ]


def test_create_diagnostics_resolves_relative_paths_and_groups_per_file() -> None:
    invoker = FakeInvoker([NAMING_ERROR_LINE, NO_ELM_JSON_LINE])

    groups = asyncio.run(
        create_diagnostics(invoker, workspace_root="/ws", document_uri="file:///ws/src/My%20Page.elm")
    )

    assert invoker.calls == [("/ws/src/My Page.elm", "/ws")]
    assert [group.uri for group in groups] == [
        "file:///ws/src/Main.elm",
        "file:///ws/src/Page/Home.elm",
        "file:///ws/src/My%20Page.elm",
    ]
    assert [len(group.diagnostics) for group in groups] == [2, 1, 1]
    assert all(
        diagnostic.severity is Severity.ERROR and diagnostic.source == "Elm"
        for group in groups
        for diagnostic in group.diagnostics
    )


def test_build_file_diagnostics_to_dict() -> None:
    invoker = FakeInvoker([UNKNOWN_PACKAGE_LINE])
    issues = asyncio.run(check_for_errors(invoker, workspace_root="/ws", file_path="/ws/A.elm"))

    groups = build_file_diagnostics(issues, workspace_root="/ws")

    assert [group.to_dict() for group in groups] == [
        {
            "uri": "file:///elm.json",
            "diagnostics": [
                {
                    "range": {
                        "start": {"line": 0, "character": 0},
                        "end": {"line": 0, "character": 0},
                    },
                    "message": "UNKNOWN PACKAGE - I cannot find elm/htm on the package server.",
                    "severity": 1,
                    "source": "Elm",
                }
            ],
        }
    ]
    assert groups[0].has_errors is True


def test_provider_publishes_each_group_in_order() -> None:
    publisher = RecordingPublisher()
    provider = MakeDiagnosticsProvider(
        "/ws",
        invoker=FakeInvoker([NAMING_ERROR_LINE]),
        publisher=publisher,
    )

    groups = asyncio.run(provider.on_did_save("file:///ws/src/Main.elm"))

    assert publisher.published == groups
    assert [group.uri for group in groups] == [
        "file:///ws/src/Main.elm",
        "file:///ws/src/Page/Home.elm",
    ]


def test_provider_without_publisher_rejects_on_did_save() -> None:
    provider = MakeDiagnosticsProvider("/ws", invoker=FakeInvoker())

    try:
        asyncio.run(provider.on_did_save("file:///ws/A.elm"))
    except ValueError as exc:
        assert "requires a publisher" in str(exc)
    else:
        raise AssertionError("Expected ValueError when no publisher is configured")


def test_concurrent_checks_do_not_share_state() -> None:
    provider = MakeDiagnosticsProvider("/ws", invoker=FakeInvoker([NAMING_ERROR_LINE]))
    other = MakeDiagnosticsProvider("/ws", invoker=FakeInvoker([UNKNOWN_PACKAGE_LINE]))

    async def _run_both() -> tuple[list[FileDiagnostics], list[FileDiagnostics]]:
        return await asyncio.gather(
            provider.create_diagnostics("file:///ws/src/Main.elm"),
            other.create_diagnostics("file:///ws/src/Main.elm"),
        )

    first, second = asyncio.run(_run_both())

    assert [len(group.diagnostics) for group in first] == [2, 1]
    assert [group.uri for group in second] == ["file:///elm.json"]
