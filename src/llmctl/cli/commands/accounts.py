"""``llm accounts`` — manage trader accounts on the daemon."""

from __future__ import annotations

from llmctl.cli.commands.base import Command, CommandGroup, Flag
from llmctl.cli.render import print_resp_json
from llmctl.core.models import InvocationContext
from llmctl.core.parse import parse_hex_str, parse_uint32, parse_uint64
from llmctl.infra import trader_proto
from llmctl.infra.connection import open_client


def new_account(ctx: InvocationContext) -> None:
    amt = parse_uint64(ctx, 0, "amt", ctx.command)
    expiry = parse_uint32(ctx, 1, "expiry", ctx.command)

    request = trader_proto.InitAccountRequest(
        account_value=amt,
        account_expiry=expiry,
    )
    with open_client(ctx) as client:
        resp = client.init_account(request)
    print_resp_json(resp)


def list_accounts(ctx: InvocationContext) -> None:
    with open_client(ctx) as client:
        resp = client.list_accounts(trader_proto.ListAccountsRequest())
    print_resp_json(resp)


def close_account(ctx: InvocationContext) -> None:
    trader_key = parse_hex_str(ctx, 0, "trader_key", ctx.command)

    request = trader_proto.CloseAccountRequest(
        trader_key=trader_key,
        output_addr=ctx.flag("addr") or "",
    )
    with open_client(ctx) as client:
        resp = client.close_account(request)
    print_resp_json(resp)


GROUP = CommandGroup(
    name="accounts",
    help="Interact with trader accounts.",
    commands=(
        Command(
            name="new",
            help="Create an account.",
            description=(
                "Send the amount in satoshis to a new account that expires "
                "at the given absolute block height."
            ),
            action=new_account,
            positionals=("amt", "expiry"),
            flags=(
                Flag("amt", "the amount in satoshis to create the account with"),
                Flag("expiry", "the block height at which this account should expire"),
            ),
        ),
        Command(
            name="list",
            help="List all existing accounts.",
            action=list_accounts,
        ),
        Command(
            name="close",
            help="Close an existing account.",
            description=(
                "Close an account and move its funds to the given address, "
                "or to a wallet address when none is given."
            ),
            action=close_account,
            positionals=("trader_key",),
            flags=(
                Flag("trader_key", "the hex-encoded trader key of the account to close"),
                Flag("addr", "an optional address to sweep the funds to"),
            ),
        ),
    ),
)
