"""The single terminal failure path.

:func:`fatal` is the only place that turns an error into process
termination.  Command handlers raise; the shell and the generic
renderer hand the error to :func:`fatal`.
"""

from __future__ import annotations

import logging
import sys
from typing import NoReturn

from llmctl.cli import exit_codes
from llmctl.cli.console import console
from llmctl.exceptions import LlmError, UsageError

logger = logging.getLogger(__name__)

APP_NAME: str = "llm"
"""Short name used as prefix on error lines and as the root help key."""


def _show_command_help(err: UsageError) -> None:
    parsers = err.context.parsers
    parser = parsers.get(err.command) or parsers.get(APP_NAME)
    if parser is None:
        # No help table (e.g. a context built outside the shell).
        console.text(f"[{APP_NAME}] {err}")
        return
    parser.print_help()


def fatal(err: BaseException) -> NoReturn:
    """Report *err* and terminate the process with :data:`exit_codes.FAILURE`.

    * :class:`UsageError` — show the help of the command named in the
      error; the raw error text is not printed.
    * anything else — print ``[llm] <message>`` on stderr, followed by
      the hint of an :class:`LlmError` when it carries one.
    """
    if isinstance(err, UsageError):
        logger.debug("usage error for command %r", err.command)
        _show_command_help(err)
    else:
        logger.debug("fatal error", exc_info=err)
        console.text(f"[{APP_NAME}] {err}")
        if isinstance(err, LlmError) and err.hint:
            console.text(f"Hint: {err.hint}", style="yellow")
    sys.exit(exit_codes.FAILURE)
