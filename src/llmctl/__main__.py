"""Allow ``python -m llmctl`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m llmctl`` behaves identically to the ``llm`` console
script.
"""

from __future__ import annotations

from llmctl.cli.app import cli

if __name__ == "__main__":
    cli()
