"""Infrastructure layer — gRPC integration.

This layer wraps all interaction with grpc and protobuf.  Every raw
third-party exception must be caught here and re-raised as a
:class:`~llmctl.exceptions.LlmError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
"""

from llmctl.infra.connection import get_client, get_client_conn, new_trader_client, open_client
from llmctl.infra.trader_client import TraderClient

__all__: list[str] = [
    "TraderClient",
    "get_client",
    "get_client_conn",
    "new_trader_client",
    "open_client",
]
