"""Compiler invoker port and its asyncio subprocess adapter."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncGenerator
import contextlib
import logging
import os
import signal
from typing import Protocol

from elmdiag.errors import MalformedReportLineError, SpawnFailureError, ToolUnavailableError
from elmdiag.make.options import MakeOptions, build_make_command

logger = logging.getLogger(__name__)

# POSIX children get their own process group so helpers they fork (which
# inherit the stderr pipe) are killed together with them.
_OWN_PROCESS_GROUP = os.name == "posix"


class MakeInvoker(Protocol):
    """Runs the compiler for one file and yields its diagnostic-channel lines.

    Raises `ToolUnavailableError` when the executable cannot be found and
    `SpawnFailureError` for any other launch failure.
    """

    def report_lines(self, file_path: str, *, cwd: str) -> AsyncGenerator[str, None]: ...


class SubprocessMakeInvoker:
    """Runs `elm make --report json` and streams its stderr line by line."""

    def __init__(self, options: MakeOptions | None = None) -> None:
        self.options = options if options is not None else MakeOptions.for_platform()

    async def report_lines(self, file_path: str, *, cwd: str) -> AsyncGenerator[str, None]:
        command = build_make_command(file_path, self.options)
        process = await self._spawn(command, cwd=cwd)
        stderr = process.stderr
        if stderr is None:
            raise RuntimeError("Compiler process was started without a stderr pipe")
        finished = False
        line_number = 0
        try:
            while True:
                try:
                    raw = await stderr.readline()
                except ValueError as exc:
                    raise MalformedReportLineError(
                        line_number + 1,
                        "",
                        f"line exceeds {self.options.line_limit} bytes",
                    ) from exc
                if not raw:
                    break
                line_number += 1
                yield raw.decode("utf-8", errors="replace").rstrip("\r\n")
            returncode = await process.wait()
            finished = True
            # Exit status carries no information beyond the report itself.
            logger.debug("%s exited with status %s", command[0], returncode)
        finally:
            if not finished:
                await self._terminate(process)
                await process.wait()

    async def _terminate(self, process: asyncio.subprocess.Process) -> None:
        """Kill the compiler and everything still holding its stderr pipe."""
        logger.debug("Killing compiler process %s", process.pid)
        if _OWN_PROCESS_GROUP:
            with contextlib.suppress(ProcessLookupError):
                os.killpg(process.pid, signal.SIGKILL)
            return
        if process.returncode is None:
            with contextlib.suppress(ProcessLookupError):
                process.kill()
        if self.options.use_shell:
            # `kill()` only reaches cmd.exe; take the compiler tree down with it.
            killer = await asyncio.create_subprocess_exec(
                "taskkill",
                "/F",
                "/T",
                "/PID",
                str(process.pid),
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.DEVNULL,
            )
            await killer.wait()

    async def _spawn(self, command: list[str], *, cwd: str) -> asyncio.subprocess.Process:
        logger.debug("Spawning %s (cwd=%s)", command, cwd)
        try:
            if self.options.use_shell:
                # A missing compiler is reported by the shell as text on stderr,
                # not as FileNotFoundError, so it cannot become ToolUnavailableError
                # here; that text then fails to decode as a report line.
                return await asyncio.create_subprocess_shell(
                    " ".join(command),
                    cwd=cwd,
                    stdin=asyncio.subprocess.DEVNULL,
                    stdout=asyncio.subprocess.DEVNULL,
                    stderr=asyncio.subprocess.PIPE,
                    limit=self.options.line_limit,
                    start_new_session=_OWN_PROCESS_GROUP,
                )
            return await asyncio.create_subprocess_exec(
                *command,
                cwd=cwd,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
                limit=self.options.line_limit,
                start_new_session=_OWN_PROCESS_GROUP,
            )
        except FileNotFoundError as exc:
            if exc.filename is not None and exc.filename == cwd:
                raise SpawnFailureError(command, f"working directory does not exist: {cwd}") from exc
            raise ToolUnavailableError(command[0]) from exc
        except OSError as exc:
            raise SpawnFailureError(command, str(exc)) from exc
