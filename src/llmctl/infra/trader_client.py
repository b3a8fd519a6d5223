"""Typed client for the ``clmrpc.Trader`` service.

This module (together with :mod:`llmctl.infra.connection`) is the only
place that touches ``grpc``.  Status errors raised by a call are caught
here: ``UNAVAILABLE`` becomes :class:`~llmctl.exceptions.RpcConnectionError`
and every other status :class:`~llmctl.exceptions.RpcCallError`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

import grpc
from google.protobuf.message import Message

from llmctl.exceptions import RpcCallError, RpcConnectionError
from llmctl.infra import trader_proto

logger = logging.getLogger(__name__)


class TraderClient:
    """Wrap a channel with one callable stub per ``clmrpc.Trader`` method.

    Construction only registers stubs on the channel; it performs no I/O
    and cannot fail.

    Usage::

        client = TraderClient(channel, timeout=30.0, address="localhost:12010")
        resp = client.list_accounts(trader_proto.ListAccountsRequest())
    """

    def __init__(
        self,
        channel: grpc.Channel,
        *,
        timeout: float | None = None,
        address: str = "",
    ) -> None:
        self._address = address
        self._timeout = timeout
        self._stubs: dict[str, Callable[..., Message]] = {}
        for method in trader_proto.SERVICE.methods:
            request_cls = trader_proto.message_class(method.input_type.name)
            response_cls = trader_proto.message_class(method.output_type.name)
            self._stubs[method.name] = channel.unary_unary(
                trader_proto.method_path(method),
                request_serializer=request_cls.SerializeToString,
                response_deserializer=response_cls.FromString,
            )

    @property
    def address(self) -> str:
        """The ``host:port`` the channel was dialed with."""
        return self._address

    @property
    def timeout(self) -> float | None:
        """Per-call deadline in seconds; ``None`` waits indefinitely."""
        return self._timeout

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def call(self, method: str, request: Message) -> Message:
        """Invoke *method* with *request* and return the decoded response.

        Raises
        ------
        RpcConnectionError
            When the server cannot be reached (``UNAVAILABLE``): refused
            connections and unresolvable names fail at once, with the
            transport's reason as the message.
        RpcCallError
            When the server answers with any other non-OK status,
            including ``DEADLINE_EXCEEDED`` once :attr:`timeout` elapses.
        """
        stub = self._stubs[method]
        logger.debug("calling %s on %s (timeout=%s)", method, self._address, self._timeout)
        try:
            return stub(request, timeout=self._timeout)
        except grpc.RpcError as exc:
            code = exc.code() if hasattr(exc, "code") else None
            details = (exc.details() if hasattr(exc, "details") else str(exc)) or ""
            if code == grpc.StatusCode.UNAVAILABLE:
                raise RpcConnectionError(
                    f"unable to connect to RPC server {self._address}: {details}",
                    address=self._address,
                    hint="Is llmd running? Check --rpcserver.",
                ) from exc
            raise RpcCallError(
                method,
                code.name if code is not None else "UNKNOWN",
                details,
            ) from exc


    # ------------------------------------------------------------------
    # Accounts
    # ------------------------------------------------------------------

    def init_account(self, request: Message) -> Message:
        return self.call("InitAccount", request)

    def list_accounts(self, request: Message) -> Message:
        return self.call("ListAccounts", request)

    def close_account(self, request: Message) -> Message:
        return self.call("CloseAccount", request)

    # ------------------------------------------------------------------
    # Orders
    # ------------------------------------------------------------------

    def submit_order(self, request: Message) -> Message:
        return self.call("SubmitOrder", request)

    def list_orders(self, request: Message) -> Message:
        return self.call("ListOrders", request)

    def cancel_order(self, request: Message) -> Message:
        return self.call("CancelOrder", request)

    # ------------------------------------------------------------------
    # Auction
    # ------------------------------------------------------------------

    def auction_fee(self, request: Message) -> Message:
        return self.call("AuctionFee", request)
