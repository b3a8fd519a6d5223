"""Declarative command table entries.

A command declares its positionals and flags as data.  The shell turns
these into argparse parsers and, at run time, into an
:class:`~llmctl.core.models.InvocationContext` for the action.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from llmctl.core.models import InvocationContext


@dataclass(frozen=True, slots=True)
class Flag:
    """A string-valued ``--name`` option.  Unset flags parse to ``None``."""

    name: str
    help: str
    choices: tuple[str, ...] | None = None


@dataclass(frozen=True, slots=True)
class Command:
    """One leaf command, e.g. ``accounts new``."""

    name: str
    """Leaf name inside its group (``"new"``)."""

    help: str
    action: Callable[[InvocationContext], None]
    positionals: tuple[str, ...] = ()
    """Optional positional slots, in index order."""

    flags: tuple[Flag, ...] = ()
    description: str | None = None


@dataclass(frozen=True, slots=True)
class CommandGroup:
    """A named set of commands, e.g. ``accounts``."""

    name: str
    help: str
    commands: tuple[Command, ...]

    def qualified(self, command: Command) -> str:
        """Return the table key for *command*, e.g. ``"accounts new"``."""
        return f"{self.name} {command.name}"
