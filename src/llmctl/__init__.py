"""llm — control plane for your llmd.

A thin gRPC client: typed argument parsing in, tab-indented JSON out.
"""

from llmctl.version import __version__

__all__: list[str] = ["__version__"]
