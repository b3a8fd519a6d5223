"""Per-invocation value objects.

The invocation context is a **frozen** dataclass built once by the
shell for the command being run.  It is never persisted or shared
between invocations.
"""

from __future__ import annotations

import argparse
from collections.abc import Mapping
from dataclasses import dataclass, field

from llmctl.config import ClientConfig


@dataclass(frozen=True, slots=True)
class InvocationContext:
    """Flags and positional arguments available to one command execution."""

    command: str
    """Qualified command name, e.g. ``"accounts new"``."""

    args: tuple[str, ...] = ()
    """Positional values in declaration order.  Missing ones are ``""``."""

    flags: Mapping[str, str | None] = field(default_factory=dict)
    """Command flags by name; ``None`` means the flag was not given."""

    config: ClientConfig = field(default_factory=ClientConfig)
    """Global connection settings."""

    parsers: Mapping[str, argparse.ArgumentParser] = field(default_factory=dict)
    """Command table used by the error boundary to show help."""

    def is_set(self, flag: str) -> bool:
        """Return ``True`` if *flag* was given explicitly on the command line."""
        return self.flags.get(flag) is not None

    def flag(self, name: str) -> str | None:
        return self.flags.get(name)

    def arg(self, index: int) -> str:
        """Return the positional at *index*, or ``""`` when absent."""
        if 0 <= index < len(self.args):
            return self.args[index]
        return ""
