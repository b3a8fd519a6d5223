"""Custom exception hierarchy for llm.

All exceptions that cross layer boundaries must inherit from
:class:`LlmError`.  Raw third-party exceptions (e.g. from grpc) must
NEVER propagate beyond the infrastructure layer — they must be caught
and re-raised as a typed subclass defined here, with the original
exception chained as ``__cause__``.

Hierarchy
---------
LlmError
├── UsageError
├── DecodeError
├── RpcConnectionError
├── RpcCallError
└── SerializationError
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from llmctl.core.models import InvocationContext


class LlmError(Exception):
    """Base exception for all llm errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Command line ----------------------------------------------------------

class UsageError(LlmError):
    """Raised when a command was invoked with missing or malformed input.

    Carries only data: the boundary, not the error, decides to show the
    command help for :attr:`command` using the parsers in :attr:`context`.
    """

    def __init__(self, command: str, context: InvocationContext) -> None:
        super().__init__(f"invalid usage of command {command}")
        self.command: str = command
        self.context: InvocationContext = context


class DecodeError(LlmError):
    """Raised when a typed value (hex, integer, amount) cannot be decoded."""

    def __init__(self, message: str, *, text: str, hint: str | None = None) -> None:
        super().__init__(message, hint=hint)
        self.text: str = text
        """The offending input text."""


# --- RPC -------------------------------------------------------------------

class RpcConnectionError(LlmError):
    """Raised when the RPC server cannot be reached."""

    def __init__(self, message: str, *, address: str, hint: str | None = None) -> None:
        super().__init__(message, hint=hint)
        self.address: str = address


class RpcCallError(LlmError):
    """Raised when the server answers an RPC with a non-OK status."""

    def __init__(self, method: str, code: str, details: str) -> None:
        super().__init__(f"rpc {method} failed: {code}: {details}")
        self.method: str = method
        self.code: str = code
        self.details: str = details


# --- Rendering -------------------------------------------------------------

class SerializationError(LlmError):
    """Raised when a response value cannot be rendered as JSON."""
