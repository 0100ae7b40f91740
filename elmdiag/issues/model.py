"""Canonical issue model and decoded compiler report documents."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TypeAlias

from elmdiag.text import Region


@dataclass(frozen=True, slots=True)
class PlainText:
    """Bare string fragment of a compiler message."""

    text: str


@dataclass(frozen=True, slots=True)
class StyledText:
    """Decorated fragment (`{"string": .., "bold": .., ...}`) of a compiler message."""

    string: str
    bold: bool = False
    underline: bool = False
    color: str | None = None


MessageFragment: TypeAlias = PlainText | StyledText


def render_fragment(fragment: MessageFragment) -> str:
    if isinstance(fragment, PlainText):
        return fragment.text
    return fragment.string


def render_message(fragments: Iterable[MessageFragment]) -> str:
    return "".join(render_fragment(fragment) for fragment in fragments)


@dataclass(frozen=True, slots=True)
class Issue:
    """One compiler-reported problem before it is rendered for an editor."""

    file: str
    region: Region
    overview: str
    details: str
    tag: str = "error"
    type: str = "error"
    subregion: str = ""


@dataclass(frozen=True, slots=True)
class Problem:
    title: str
    region: Region
    message: tuple[MessageFragment, ...]


@dataclass(frozen=True, slots=True)
class FileErrors:
    path: str
    problems: tuple[Problem, ...]
    name: str | None = None


@dataclass(frozen=True, slots=True)
class CompileErrorsReport:
    """`{"type": "compile-errors"}` document: problems grouped per module."""

    errors: tuple[FileErrors, ...]


@dataclass(frozen=True, slots=True)
class ErrorReport:
    """`{"type": "error"}` document: a single project-level problem."""

    path: str | None
    title: str
    message: tuple[MessageFragment, ...]
    region: Region | None = None


Report: TypeAlias = CompileErrorsReport | ErrorReport
