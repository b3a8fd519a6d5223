"""Process-wide version string.

The value is injected at build time through the distribution metadata
written by the packaging backend.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

DISTRIBUTION_NAME: str = "llm-ctl"

try:
    __version__: str = version(DISTRIBUTION_NAME)
except PackageNotFoundError:  # running from a source checkout
    __version__ = "0.0.0"
