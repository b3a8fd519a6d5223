"""CLI application entry point and command routing for llm.

This module owns the command table and the process boundary.  It
catches :class:`~llmctl.exceptions.LlmError`, ``KeyboardInterrupt`` and
any unexpected ``Exception`` and hands them to
:func:`~llmctl.cli.boundary.fatal`, which prints and exits.

Architecture notes
------------------
* No business logic lives here.  Commands live in
  :mod:`llmctl.cli.commands` and only use the parse / connect / render
  primitives.
* Argument errors raised by argparse are turned into
  :class:`~llmctl.exceptions.UsageError` so that they follow the same
  help-and-exit-1 path as errors raised by command handlers.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from typing import NoReturn

from llmctl.cli import exit_codes
from llmctl.cli.boundary import APP_NAME, fatal
from llmctl.cli.commands import GROUPS, Command, CommandGroup
from llmctl.cli.console import console
from llmctl.config import ClientConfig
from llmctl.core.models import InvocationContext
from llmctl.exceptions import LlmError, UsageError
from llmctl.version import __version__

logger = logging.getLogger(__name__)

LOG_FORMAT: str = "%(asctime)s  %(levelname)s  %(name)s | %(message)s"

HelpTable = dict[str, argparse.ArgumentParser]


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

class _ArgumentParser(argparse.ArgumentParser):
    """``ArgumentParser`` that raises :class:`UsageError` instead of exiting."""

    command_name: str = APP_NAME
    help_table: HelpTable | None = None

    def error(self, message: str) -> NoReturn:
        logger.debug("argument error in %r: %s", self.command_name, message)
        raise UsageError(
            self.command_name,
            InvocationContext(command=self.command_name, parsers=self.help_table or {}),
        )


def _positive_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"'{value}' is not a number") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"'{value}' must be greater than zero")
    return number


def _claim(name: str, table: HelpTable) -> None:
    if name in table:
        raise ValueError(f"duplicate command {name!r} in command table")


def _register(parser: _ArgumentParser, name: str, table: HelpTable) -> None:
    parser.command_name = name
    parser.help_table = table
    table[name] = parser


def _add_command(
    group_sub: argparse._SubParsersAction,
    group: CommandGroup,
    command: Command,
    table: HelpTable,
) -> None:
    qualified = group.qualified(command)
    _claim(qualified, table)
    sub = group_sub.add_parser(
        command.name,
        help=command.help,
        description=command.description or command.help,
    )
    _register(sub, qualified, table)
    for index, name in enumerate(command.positionals):
        sub.add_argument(f"arg{index}", nargs="?", default="", metavar=name)
    for flag in command.flags:
        sub.add_argument(
            f"--{flag.name}",
            dest=f"flag_{flag.name}",
            default=None,
            choices=flag.choices,
            help=flag.help,
        )
    sub.set_defaults(qualified_command=qualified)


def _build_parser(
    groups: Sequence[CommandGroup] = GROUPS,
    defaults: ClientConfig | None = None,
) -> tuple[_ArgumentParser, HelpTable, dict[str, Command]]:
    """Construct the parser tree, the help table and the command table.

    Raises
    ------
    ValueError
        When two commands share a qualified name.
    """
    defaults = defaults or ClientConfig.from_env()
    table: HelpTable = {}
    commands: dict[str, Command] = {}

    parser = _ArgumentParser(
        prog=APP_NAME,
        description="control plane for your llmd",
    )
    _register(parser, APP_NAME, table)
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s version {__version__}",
    )
    parser.add_argument(
        "--rpcserver",
        default=defaults.rpcserver,
        help=f"llmd daemon address host:port (default {defaults.rpcserver})",
    )
    parser.add_argument(
        "--timeout",
        type=_positive_float,
        default=defaults.timeout,
        help=f"seconds to wait for the connection and each call (default {defaults.timeout:g})",
    )
    parser.add_argument(
        "--tlscertpath",
        default=defaults.tls_cert_path,
        help="PEM root certificate; dials with TLS when set",
    )
    parser.add_argument(
        "--insecure",
        action=argparse.BooleanOptionalAction,
        default=defaults.insecure,
        help="dial without transport security (default: %(default)s)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=defaults.debug,
        help="log debug output to stderr",
    )

    group_parsers = parser.add_subparsers(dest="group", metavar="<command>")
    for group in groups:
        _claim(group.name, table)
        group_parser = group_parsers.add_parser(group.name, help=group.help, description=group.help)
        _register(group_parser, group.name, table)
        leaf_parsers = group_parser.add_subparsers(dest="leaf", metavar="<subcommand>")
        for command in group.commands:
            _add_command(leaf_parsers, group, command, table)
            commands[group.qualified(command)] = command

    return parser, table, commands


# ---------------------------------------------------------------------------
# Invocation
# ---------------------------------------------------------------------------

def _config_from_args(args: argparse.Namespace) -> ClientConfig:
    return ClientConfig(
        rpcserver=args.rpcserver,
        timeout=args.timeout,
        insecure=args.insecure,
        tls_cert_path=args.tlscertpath,
        debug=args.debug,
    )


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        stream=sys.stderr,
        format=LOG_FORMAT,
    )


def _build_context(
    args: argparse.Namespace,
    command: Command,
    qualified: str,
    config: ClientConfig,
    table: HelpTable,
) -> InvocationContext:
    positionals = tuple(
        getattr(args, f"arg{index}") or "" for index in range(len(command.positionals))
    )
    flags = {flag.name: getattr(args, f"flag_{flag.name}") for flag in command.flags}
    return InvocationContext(
        command=qualified,
        args=positionals,
        flags=flags,
        config=config,
        parsers=table,
    )


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the llm CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.

    Returns
    -------
    int
        OS process exit code for successful runs.  Failures are raised
        as :class:`~llmctl.exceptions.LlmError` for :func:`cli` to handle.
    """
    parser, table, commands = _build_parser()
    args = parser.parse_args(argv)

    config = _config_from_args(args)
    _configure_logging(config.debug)

    if args.group is None:
        parser.print_help()
        return exit_codes.SUCCESS

    qualified: str | None = getattr(args, "qualified_command", None)
    if qualified is None:
        table[args.group].print_help()
        return exit_codes.SUCCESS

    command = commands[qualified]
    ctx = _build_context(args, command, qualified, config, table)
    logger.debug("running %r against %s", qualified, config.rpcserver)
    command.action(ctx)
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli(argv: list[str] | None = None) -> None:
    """Top-level error boundary invoked by the console-script entry point.

    Every failure ends in :func:`~llmctl.cli.boundary.fatal`; the process
    never exits with a raw stack trace during normal usage.
    """
    try:
        code = main(argv)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except LlmError as exc:
        fatal(exc)
    except Exception as exc:  # noqa: BLE001
        fatal(
            LlmError(
                f"unexpected error: {type(exc).__name__}: {exc}",
                hint="Please report this issue.",
            ),
        )
    sys.exit(code)
