"""``llm orders`` — submit, list and cancel orders."""

from __future__ import annotations

from llmctl.cli.commands.base import Command, CommandGroup, Flag
from llmctl.cli.render import print_resp_json
from llmctl.core.models import InvocationContext
from llmctl.core.parse import parse_amt_arg, parse_hex_str, parse_uint32
from llmctl.exceptions import LlmError
from llmctl.infra import trader_proto
from llmctl.infra.connection import open_client

ORDER_TYPES: tuple[str, ...] = ("ask", "bid")
DEFAULT_ORDER_TYPE: str = "bid"


def submit_order(ctx: InvocationContext) -> None:
    amt = parse_amt_arg(ctx, 0, "amt", ctx.command)
    if amt <= 0:
        raise LlmError(
            f"order amount must be positive, got {amt}",
            hint="Pass the amount in satoshis, e.g. 1000000.",
        )
    acct_key = parse_hex_str(ctx, 1, "acct_key", ctx.command)
    rate_fixed = parse_uint32(ctx, 2, "rate_fixed", ctx.command)
    duration = parse_uint32(ctx, 3, "duration", ctx.command)

    order = trader_proto.Order(
        order_type=ctx.flag("type") or DEFAULT_ORDER_TYPE,
        trader_key=acct_key,
        amt=int(amt),
        rate_fixed=rate_fixed,
        duration=duration,
    )
    with open_client(ctx) as client:
        resp = client.submit_order(trader_proto.SubmitOrderRequest(order=order))
    print_resp_json(resp)


def list_orders(ctx: InvocationContext) -> None:
    with open_client(ctx) as client:
        resp = client.list_orders(trader_proto.ListOrdersRequest())
    print_resp_json(resp)


def cancel_order(ctx: InvocationContext) -> None:
    nonce = parse_hex_str(ctx, 0, "order_nonce", ctx.command)

    with open_client(ctx) as client:
        resp = client.cancel_order(trader_proto.CancelOrderRequest(order_nonce=nonce))
    print_resp_json(resp)


GROUP = CommandGroup(
    name="orders",
    help="Submit and manage orders.",
    commands=(
        Command(
            name="submit",
            help="Submit an ask or bid order.",
            action=submit_order,
            positionals=("amt", "acct_key", "rate_fixed", "duration"),
            flags=(
                Flag("amt", "the order amount in satoshis"),
                Flag("acct_key", "the hex-encoded trader key of the funding account"),
                Flag("rate_fixed", "the fixed rate in parts per million"),
                Flag("duration", "the lease duration in blocks"),
                Flag("type", f"the order type (default {DEFAULT_ORDER_TYPE})", ORDER_TYPES),
            ),
        ),
        Command(
            name="list",
            help="List all orders.",
            action=list_orders,
        ),
        Command(
            name="cancel",
            help="Cancel an order.",
            action=cancel_order,
            positionals=("order_nonce",),
            flags=(
                Flag("order_nonce", "the hex-encoded nonce of the order to cancel"),
            ),
        ),
    ),
)
