"""Workspace path helpers."""

from elmdiag.workspace.paths import (
    file_uri_to_path,
    path_to_file_uri,
    resolve_issue,
    resolve_issue_path,
)

__all__ = [
    "file_uri_to_path",
    "path_to_file_uri",
    "resolve_issue",
    "resolve_issue_path",
]
