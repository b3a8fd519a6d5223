"""Shared pytest fixtures and configuration for the llm test suite.

Guidelines
----------
* No internet access in any test.
* grpc must be mocked at the infra boundary, except for the loopback
  server fixture in ``test_integration.py``.
* Core tests must be pure — no side effects.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any
from unittest.mock import MagicMock

import grpc
import pytest

from llmctl.config import ClientConfig
from llmctl.core.models import InvocationContext


@pytest.fixture
def make_ctx() -> Callable[..., InvocationContext]:
    """Factory for invocation contexts with sensible defaults."""

    def _make(
        *args: str,
        command: str = "accounts close",
        flags: dict[str, str | None] | None = None,
        config: ClientConfig | None = None,
        parsers: dict[str, Any] | None = None,
    ) -> InvocationContext:
        return InvocationContext(
            command=command,
            args=tuple(args),
            flags=flags or {},
            config=config or ClientConfig(),
            parsers=parsers or {},
        )

    return _make


@pytest.fixture
def fake_client() -> MagicMock:
    """A stand-in for :class:`~llmctl.infra.trader_client.TraderClient`."""
    return MagicMock(name="TraderClient")


@pytest.fixture
def patch_open_client(
    monkeypatch: pytest.MonkeyPatch, fake_client: MagicMock,
) -> Callable[[str], list[InvocationContext]]:
    """Route ``open_client`` in a command module to :func:`fake_client`.

    Returns a function taking the command module path; it yields the
    list of contexts the command opened clients with.
    """

    def _patch(module: str) -> list[InvocationContext]:
        opened: list[InvocationContext] = []

        @contextmanager
        def _open_client(ctx: InvocationContext) -> Iterator[MagicMock]:
            opened.append(ctx)
            yield fake_client

        monkeypatch.setattr(f"{module}.open_client", _open_client)
        return opened

    return _patch


class _FakeRpcError(grpc.RpcError):
    def __init__(self, code: grpc.StatusCode, details: str) -> None:
        super().__init__(details)
        self._code = code
        self._details = details

    def code(self) -> grpc.StatusCode:
        return self._code

    def details(self) -> str:
        return self._details


@pytest.fixture
def rpc_error() -> Callable[[grpc.StatusCode, str], grpc.RpcError]:
    """Factory for ``grpc.RpcError`` instances carrying a status and details."""
    return _FakeRpcError
