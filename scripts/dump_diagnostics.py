#!/usr/bin/env python3
"""Run `elm make` over Elm files and dump the grouped diagnostics as JSON."""

from __future__ import annotations

import argparse
import asyncio
from dataclasses import replace
import json
import logging
from pathlib import Path
import sys

from tqdm import tqdm

from elmdiag.diagnostics import Severity, count_by_severity
from elmdiag.make import MakeOptions, SubprocessMakeInvoker
from elmdiag.pipeline import FileDiagnostics, create_diagnostics
from elmdiag.workspace import path_to_file_uri

logger = logging.getLogger("dump_diagnostics")


def _collect_elm_files(paths: list[Path]) -> list[Path]:
    files: list[Path] = []
    for path in paths:
        if path.is_dir():
            files.extend(sorted(path.rglob("*.elm")))
        elif path.is_file():
            files.append(path)
    return [file.resolve() for file in files if "elm-stuff" not in file.parts]


def _summary_line(path: Path, groups: list[FileDiagnostics]) -> str:
    counts = count_by_severity(diagnostic for group in groups for diagnostic in group.diagnostics)
    return (
        f"{path}: {len(groups)} file(s), "
        f"{counts[Severity.ERROR]} error(s), {counts[Severity.WARNING]} warning(s)"
    )


async def _run(
    files: list[Path],
    *,
    workspace_root: Path,
    invoker: SubprocessMakeInvoker,
    show_progress: bool,
) -> list[dict[str, object]]:
    results: list[dict[str, object]] = []
    iterator = tqdm(files, desc="elm make", unit="file") if show_progress else files
    for path in iterator:
        groups = await create_diagnostics(
            invoker,
            workspace_root=str(workspace_root),
            document_uri=path_to_file_uri(str(path)),
        )
        logger.debug("%s", _summary_line(path, groups))
        results.append(
            {
                "file": str(path),
                "groups": [group.to_dict() for group in groups],
            }
        )
    return results


def main() -> int:
    parser = argparse.ArgumentParser(description="Dump elm make diagnostics grouped per file")
    parser.add_argument("paths", nargs="+", type=Path, help="Elm files or directories to check")
    parser.add_argument(
        "--workspace-root",
        type=Path,
        default=Path.cwd(),
        help="Directory holding elm.json (default: current directory)",
    )
    parser.add_argument("--elm", type=str, default="elm", help="Compiler executable (default: elm)")
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable tqdm progress bars",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--indent", type=int, default=2, help="JSON indent (default: 2)")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    workspace_root: Path = args.workspace_root.resolve()
    if not workspace_root.is_dir():
        raise SystemExit(f"Invalid --workspace-root: {workspace_root}")

    files = _collect_elm_files(args.paths)
    if not files:
        raise SystemExit("No .elm files found")

    invoker = SubprocessMakeInvoker(replace(MakeOptions.for_platform(), executable=args.elm))
    results = asyncio.run(
        _run(
            files,
            workspace_root=workspace_root,
            invoker=invoker,
            show_progress=not args.no_progress,
        )
    )
    print(json.dumps(results, indent=args.indent))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
