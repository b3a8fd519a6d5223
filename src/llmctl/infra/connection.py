"""Channel construction for the llmd RPC server.

Resolves an address into a :class:`grpc.Channel` plus an explicit
release function, and adapts channels into :class:`TraderClient`
handles.  Connection failures never leak raw grpc exceptions; the
client surfaces them as :class:`~llmctl.exceptions.RpcConnectionError`
with the transport's reason.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path

import grpc

from llmctl.config import ClientConfig
from llmctl.core.models import InvocationContext
from llmctl.exceptions import RpcConnectionError
from llmctl.infra.trader_client import TraderClient

logger = logging.getLogger(__name__)

Release = Callable[[], None]


def _credentials(config: ClientConfig, address: str) -> grpc.ChannelCredentials:
    """Build TLS credentials, optionally pinned to ``config.tls_cert_path``."""
    root_certificates: bytes | None = None
    if config.tls_cert_path is not None:
        try:
            root_certificates = Path(config.tls_cert_path).expanduser().read_bytes()
        except OSError as exc:
            raise RpcConnectionError(
                f"unable to connect to RPC server {address}: "
                f"cannot read TLS certificate {config.tls_cert_path}: {exc}",
                address=address,
            ) from exc
    return grpc.ssl_channel_credentials(root_certificates=root_certificates)


def _dial(address: str, config: ClientConfig) -> grpc.Channel:
    if config.use_tls:
        logger.debug("dialing %s with TLS", address)
        return grpc.secure_channel(address, _credentials(config, address))
    logger.debug("dialing %s without transport security", address)
    return grpc.insecure_channel(address)


def _releaser(channel: grpc.Channel) -> Release:
    released = False

    def release() -> None:
        nonlocal released
        if released:
            return
        released = True
        logger.debug("closing channel")
        channel.close()

    return release


def get_client_conn(
    address: str,
    config: ClientConfig | None = None,
) -> tuple[grpc.Channel, Release]:
    """Open a channel to *address*.

    Dialing is lazy: the connection is attempted by the first call, which
    fails at once with :class:`~llmctl.exceptions.RpcConnectionError` when
    the server refuses or the name does not resolve, and is otherwise
    bounded by the call deadline.  A failed build opens nothing, so the
    caller only ever releases successful builds.

    Returns
    -------
    tuple[grpc.Channel, Callable[[], None]]
        The channel and an idempotent release function.

    Raises
    ------
    RpcConnectionError
        When the TLS certificate cannot be read.
    """
    config = config or ClientConfig()
    channel = _dial(address, config)
    return channel, _releaser(channel)


def new_trader_client(
    channel: grpc.Channel,
    config: ClientConfig | None = None,
    *,
    address: str = "",
) -> TraderClient:
    """Adapt *channel* into a typed client.  Never fails."""
    timeout = config.timeout if config is not None else None
    return TraderClient(channel, timeout=timeout, address=address)


def get_client(ctx: InvocationContext) -> tuple[TraderClient, Release]:
    """Connect to ``ctx.config.rpcserver`` and return a client plus release."""
    address = ctx.config.rpcserver
    channel, release = get_client_conn(address, ctx.config)
    return new_trader_client(channel, ctx.config, address=address), release


@contextmanager
def open_client(ctx: InvocationContext) -> Iterator[TraderClient]:
    """Context-managed :func:`get_client`; releases on every exit path."""
    client, release = get_client(ctx)
    try:
        yield client
    finally:
        release()
