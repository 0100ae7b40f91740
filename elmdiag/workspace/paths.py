"""Workspace-relative path resolution and `file://` URI conversion."""

from __future__ import annotations

from dataclasses import replace
import re
from typing import Final
from urllib.parse import quote, unquote, urlsplit

from elmdiag.issues import Issue

_DRIVE_LETTER: Final[re.Pattern[str]] = re.compile(r"^/?([A-Za-z]):")


def resolve_issue_path(raw: str, workspace_root: str) -> str:
    """Make a compiler-reported path absolute.

    Only a leading `.` is treated as "relative to the workspace root": the
    first character is dropped and the remainder appended to the root as-is.
    `..`-prefixed paths therefore resolve to `<root>./...` and every other
    form is returned unchanged.
    """
    if raw.startswith("."):
        return workspace_root + raw[1:]
    return raw


def resolve_issue(issue: Issue, workspace_root: str) -> Issue:
    resolved = resolve_issue_path(issue.file, workspace_root)
    if resolved == issue.file:
        return issue
    return replace(issue, file=resolved)


def path_to_file_uri(path: str) -> str:
    """Build a `file://` URI; relative paths are rooted at `/`."""
    normalized = path.replace("\\", "/")
    if normalized.startswith("//"):
        authority, _, rest = normalized[2:].partition("/")
        return f"file://{quote(authority.lower())}/{quote(rest, safe='/')}"
    if not normalized.startswith("/"):
        normalized = "/" + normalized
    match = _DRIVE_LETTER.match(normalized)
    if match is not None:
        normalized = f"/{match.group(1).lower()}:{normalized[match.end():]}"
    return "file://" + quote(normalized, safe="/")


def file_uri_to_path(uri: str) -> str:
    """Filesystem path of a `file://` URI."""
    parts = urlsplit(uri)
    if parts.scheme != "file":
        raise ValueError(f"Not a file URI: {uri!r}")
    path = unquote(parts.path)
    if parts.netloc:
        return f"//{parts.netloc}{path}"
    if _DRIVE_LETTER.match(path) is not None:
        # `/c:/x` -> `c:/x`
        return path[1:]
    return path
