"""Message and service descriptors for the ``clmrpc.Trader`` gRPC service.

The descriptors are assembled at import time from
:mod:`google.protobuf.descriptor_pb2` into a private descriptor pool, and
concrete message classes are obtained from
:func:`google.protobuf.message_factory.GetMessageClass`.  The resulting
classes behave exactly like ``protoc``-generated ones.
"""

from __future__ import annotations

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory
from google.protobuf.descriptor import MethodDescriptor, ServiceDescriptor
from google.protobuf.message import Message

PACKAGE: str = "clmrpc"
SERVICE_NAME: str = "Trader"

_F = descriptor_pb2.FieldDescriptorProto

# (name, type, label, type_name); field numbers follow declaration order.
_FieldSpec = tuple[str, int, int, str]

_OPT = _F.LABEL_OPTIONAL
_REP = _F.LABEL_REPEATED


def _scalar(name: str, field_type: int) -> _FieldSpec:
    return (name, field_type, _OPT, "")


def _message(name: str, type_name: str, *, repeated: bool = False) -> _FieldSpec:
    return (name, _F.TYPE_MESSAGE, _REP if repeated else _OPT, f".{PACKAGE}.{type_name}")


_MESSAGES: dict[str, tuple[_FieldSpec, ...]] = {
    # --- accounts ---------------------------------------------------------
    "Account": (
        _scalar("trader_key", _F.TYPE_BYTES),
        _scalar("outpoint", _F.TYPE_STRING),
        _scalar("value", _F.TYPE_UINT64),
        _scalar("expiration_height", _F.TYPE_UINT32),
        _scalar("state", _F.TYPE_STRING),
        _scalar("close_txid", _F.TYPE_BYTES),
    ),
    "InitAccountRequest": (
        _scalar("account_value", _F.TYPE_UINT64),
        _scalar("account_expiry", _F.TYPE_UINT32),
    ),
    "ListAccountsRequest": (),
    "ListAccountsResponse": (
        _message("accounts", "Account", repeated=True),
    ),
    "CloseAccountRequest": (
        _scalar("trader_key", _F.TYPE_BYTES),
        _scalar("output_addr", _F.TYPE_STRING),
    ),
    "CloseAccountResponse": (
        _scalar("close_txid", _F.TYPE_BYTES),
    ),
    # --- orders -----------------------------------------------------------
    "Order": (
        _scalar("order_nonce", _F.TYPE_BYTES),
        _scalar("order_type", _F.TYPE_STRING),
        _scalar("trader_key", _F.TYPE_BYTES),
        _scalar("amt", _F.TYPE_UINT64),
        _scalar("rate_fixed", _F.TYPE_UINT32),
        _scalar("duration", _F.TYPE_UINT32),
        _scalar("units_unfulfilled", _F.TYPE_UINT32),
        _scalar("state", _F.TYPE_STRING),
    ),
    "SubmitOrderRequest": (
        _message("order", "Order"),
    ),
    "SubmitOrderResponse": (
        _scalar("accepted_order_nonce", _F.TYPE_BYTES),
        _scalar("invalid_order", _F.TYPE_STRING),
    ),
    "ListOrdersRequest": (),
    "ListOrdersResponse": (
        _message("orders", "Order", repeated=True),
    ),
    "CancelOrderRequest": (
        _scalar("order_nonce", _F.TYPE_BYTES),
    ),
    "CancelOrderResponse": (),
    # --- auction ----------------------------------------------------------
    "ExecutionFee": (
        _scalar("base_fee", _F.TYPE_UINT64),
        _scalar("fee_rate", _F.TYPE_UINT64),
    ),
    "AuctionFeeRequest": (),
    "AuctionFeeResponse": (
        _message("execution_fee", "ExecutionFee"),
    ),
}

# method name -> (request message, response message)
_METHODS: dict[str, tuple[str, str]] = {
    "InitAccount": ("InitAccountRequest", "Account"),
    "ListAccounts": ("ListAccountsRequest", "ListAccountsResponse"),
    "CloseAccount": ("CloseAccountRequest", "CloseAccountResponse"),
    "SubmitOrder": ("SubmitOrderRequest", "SubmitOrderResponse"),
    "ListOrders": ("ListOrdersRequest", "ListOrdersResponse"),
    "CancelOrder": ("CancelOrderRequest", "CancelOrderResponse"),
    "AuctionFee": ("AuctionFeeRequest", "AuctionFeeResponse"),
}


def _build_file() -> descriptor_pb2.FileDescriptorProto:
    file_proto = descriptor_pb2.FileDescriptorProto(
        name="clmrpc/trader.proto",
        package=PACKAGE,
        syntax="proto3",
    )
    for msg_name, fields in _MESSAGES.items():
        msg = file_proto.message_type.add(name=msg_name)
        for number, (name, field_type, label, type_name) in enumerate(fields, start=1):
            field = msg.field.add(name=name, number=number, type=field_type, label=label)
            if type_name:
                field.type_name = type_name

    service = file_proto.service.add(name=SERVICE_NAME)
    for method_name, (request, response) in _METHODS.items():
        service.method.add(
            name=method_name,
            input_type=f".{PACKAGE}.{request}",
            output_type=f".{PACKAGE}.{response}",
        )
    return file_proto


POOL = descriptor_pool.DescriptorPool()
POOL.AddSerializedFile(_build_file().SerializeToString())

SERVICE: ServiceDescriptor = POOL.FindServiceByName(f"{PACKAGE}.{SERVICE_NAME}")


def message_class(name: str) -> type[Message]:
    """Return the concrete message class for ``clmrpc.<name>``."""
    descriptor = POOL.FindMessageTypeByName(f"{PACKAGE}.{name}")
    return message_factory.GetMessageClass(descriptor)


def method_path(method: MethodDescriptor) -> str:
    """Return the HTTP/2 path gRPC uses for *method*."""
    return f"/{SERVICE.full_name}/{method.name}"


Account = message_class("Account")
InitAccountRequest = message_class("InitAccountRequest")
ListAccountsRequest = message_class("ListAccountsRequest")
ListAccountsResponse = message_class("ListAccountsResponse")
CloseAccountRequest = message_class("CloseAccountRequest")
CloseAccountResponse = message_class("CloseAccountResponse")
Order = message_class("Order")
SubmitOrderRequest = message_class("SubmitOrderRequest")
SubmitOrderResponse = message_class("SubmitOrderResponse")
ListOrdersRequest = message_class("ListOrdersRequest")
ListOrdersResponse = message_class("ListOrdersResponse")
CancelOrderRequest = message_class("CancelOrderRequest")
CancelOrderResponse = message_class("CancelOrderResponse")
ExecutionFee = message_class("ExecutionFee")
AuctionFeeRequest = message_class("AuctionFeeRequest")
AuctionFeeResponse = message_class("AuctionFeeResponse")
