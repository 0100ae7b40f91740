"""`elm make` invocation options."""

from dataclasses import dataclass
import sys
from typing import Final

DEFAULT_LINE_LIMIT: Final[int] = 16 * 1024 * 1024
"""Max bytes per report line; the JSON report arrives as one long line."""


@dataclass(frozen=True, slots=True)
class MakeOptions:
    """How the compiler is launched for one check."""

    executable: str = "elm"
    report: str = "json"
    output: str = "/dev/null"
    use_shell: bool = False
    line_limit: int = DEFAULT_LINE_LIMIT

    @staticmethod
    def for_platform(platform: str = sys.platform) -> "MakeOptions":
        if platform == "win32":
            return MakeOptions(use_shell=True)
        return MakeOptions(use_shell=False)


def build_make_command(file_path: str, options: MakeOptions) -> list[str]:
    """Argument vector for checking one file; build output is discarded."""
    if options.use_shell:
        file_path = '"' + file_path + '"'
    return [
        options.executable,
        "make",
        file_path,
        "--report",
        options.report,
        "--output",
        options.output,
    ]
