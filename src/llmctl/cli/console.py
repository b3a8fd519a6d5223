"""CLI console helpers with optional Rich support.

This module intentionally avoids module-level imports of Rich so that
bootstrap paths (``--help``, ``--version``) and the error boundary stay
functional even when Rich is not installed.
"""

from __future__ import annotations

import sys
from typing import Any


def get_rich_console() -> Any | None:
	"""Create a Rich console targeting stderr, or ``None`` without Rich."""
	try:
		from rich.console import Console
	except ModuleNotFoundError:
		return None
	return Console(stderr=True)


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with a plain stderr fallback."""

	def print(self, *objects: object) -> None:
		"""Render markup with Rich when available, else plain stderr print."""
		rich_console = get_rich_console()
		if rich_console is None:
			print(*objects, file=sys.stderr)
			return
		rich_console.print(*objects)

	def text(self, message: str, *, style: str | None = None) -> None:
		"""Print *message* verbatim: no markup parsing, no highlighting, no wrapping."""
		rich_console = get_rich_console()
		if rich_console is None:
			print(message, file=sys.stderr)
			return
		rich_console.print(
			message,
			style=style,
			markup=False,
			highlight=False,
			soft_wrap=True,
		)


console = _ConsoleProxy()
