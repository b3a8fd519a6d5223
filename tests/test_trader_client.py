"""Tests for the typed Trader client and its descriptors.

The channel is a mock; these tests check stub registration, deadline
propagation and RpcError mapping.
"""

from __future__ import annotations

from collections.abc import Callable
from unittest.mock import MagicMock

import grpc
import pytest

from llmctl.exceptions import RpcCallError, RpcConnectionError
from llmctl.infra import trader_proto
from llmctl.infra.trader_client import TraderClient

RpcErrorFactory = Callable[[grpc.StatusCode, str], grpc.RpcError]


def _channel_with_stubs() -> tuple[MagicMock, dict[str, MagicMock]]:
    stubs: dict[str, MagicMock] = {}

    def unary_unary(path: str, **_kwargs: object) -> MagicMock:
        stubs[path] = MagicMock(name=path)
        return stubs[path]

    channel = MagicMock(name="Channel")
    channel.unary_unary.side_effect = unary_unary
    return channel, stubs


# ---------------------------------------------------------------------------
# Descriptors
# ---------------------------------------------------------------------------

class TestTraderProto:
    def test_service_methods(self) -> None:
        names = {method.name for method in trader_proto.SERVICE.methods}
        assert names == {
            "InitAccount",
            "ListAccounts",
            "CloseAccount",
            "SubmitOrder",
            "ListOrders",
            "CancelOrder",
            "AuctionFee",
        }

    def test_method_path(self) -> None:
        method = trader_proto.SERVICE.methods_by_name["ListAccounts"]
        assert trader_proto.method_path(method) == "/clmrpc.Trader/ListAccounts"

    def test_message_round_trip(self) -> None:
        order = trader_proto.Order(order_nonce=b"\x01\x02", amt=500, order_type="ask")
        decoded = trader_proto.Order.FromString(order.SerializeToString())
        assert decoded == order

    def test_uint32_field_rejects_overflow(self) -> None:
        with pytest.raises(ValueError):
            trader_proto.InitAccountRequest(account_expiry=2**32)


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------

class TestTraderClient:
    def test_registers_one_stub_per_method(self) -> None:
        channel, stubs = _channel_with_stubs()
        TraderClient(channel)
        assert len(stubs) == len(trader_proto.SERVICE.methods)
        assert "/clmrpc.Trader/AuctionFee" in stubs

    def test_construction_performs_no_calls(self) -> None:
        channel, stubs = _channel_with_stubs()
        TraderClient(channel)
        assert all(not stub.called for stub in stubs.values())

    def test_call_passes_timeout(self) -> None:
        channel, stubs = _channel_with_stubs()
        expected = trader_proto.ListAccountsResponse()
        stubs_path = "/clmrpc.Trader/ListAccounts"

        client = TraderClient(channel, timeout=3.0)
        stubs[stubs_path].return_value = expected
        request = trader_proto.ListAccountsRequest()

        assert client.list_accounts(request) is expected
        stubs[stubs_path].assert_called_once_with(request, timeout=3.0)

    def test_rpc_error_is_mapped(self, rpc_error: RpcErrorFactory) -> None:
        channel, stubs = _channel_with_stubs()
        client = TraderClient(channel)
        stubs["/clmrpc.Trader/CancelOrder"].side_effect = rpc_error(
            grpc.StatusCode.NOT_FOUND, "order not found",
        )

        with pytest.raises(RpcCallError) as exc_info:
            client.cancel_order(trader_proto.CancelOrderRequest(order_nonce=b"\x00"))

        err = exc_info.value
        assert err.method == "CancelOrder"
        assert err.code == "NOT_FOUND"
        assert err.details == "order not found"
        assert str(err) == "rpc CancelOrder failed: NOT_FOUND: order not found"
        assert isinstance(err.__cause__, grpc.RpcError)

    def test_unavailable_is_connection_error(self, rpc_error: RpcErrorFactory) -> None:
        channel, stubs = _channel_with_stubs()
        client = TraderClient(channel, address="127.0.0.1:1")
        reason = "failed to connect to all addresses; Connection refused"
        stubs["/clmrpc.Trader/ListOrders"].side_effect = rpc_error(
            grpc.StatusCode.UNAVAILABLE, reason,
        )

        with pytest.raises(RpcConnectionError) as exc_info:
            client.list_orders(trader_proto.ListOrdersRequest())

        err = exc_info.value
        assert err.address == "127.0.0.1:1"
        assert str(err) == f"unable to connect to RPC server 127.0.0.1:1: {reason}"
        assert isinstance(err.__cause__, grpc.RpcError)

    def test_deadline_stays_call_error(self, rpc_error: RpcErrorFactory) -> None:
        channel, stubs = _channel_with_stubs()
        client = TraderClient(channel, timeout=0.5, address="daemon:9")
        stubs["/clmrpc.Trader/AuctionFee"].side_effect = rpc_error(
            grpc.StatusCode.DEADLINE_EXCEEDED, "Deadline Exceeded",
        )

        with pytest.raises(RpcCallError, match="DEADLINE_EXCEEDED"):
            client.auction_fee(trader_proto.AuctionFeeRequest())
