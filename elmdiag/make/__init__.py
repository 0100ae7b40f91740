"""`elm make` invocation."""

from elmdiag.make.invoker import MakeInvoker, SubprocessMakeInvoker
from elmdiag.make.options import DEFAULT_LINE_LIMIT, MakeOptions, build_make_command

__all__ = [
    "DEFAULT_LINE_LIMIT",
    "MakeInvoker",
    "MakeOptions",
    "SubprocessMakeInvoker",
    "build_make_command",
]
