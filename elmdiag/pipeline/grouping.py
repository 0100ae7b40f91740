"""Per-file grouping of resolved issues."""

from __future__ import annotations

from collections.abc import Iterable

from elmdiag.issues import Issue


def group_issues_by_file(issues: Iterable[Issue]) -> list[tuple[str, list[Issue]]]:
    """Group issues by `file`.

    Groups follow first occurrence of each path; issues keep their input
    order inside a group. Nothing is sorted.
    """
    groups: dict[str, list[Issue]] = {}
    for issue in issues:
        groups.setdefault(issue.file, []).append(issue)
    return list(groups.items())
