"""``llm auction`` — query auction parameters."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from llmctl.cli.commands.base import Command, CommandGroup, Flag
from llmctl.cli.render import print_json, print_resp_json
from llmctl.core.amount import Amount
from llmctl.core.models import InvocationContext
from llmctl.core.parse import parse_amt_arg
from llmctl.exceptions import DecodeError
from llmctl.infra import trader_proto
from llmctl.infra.connection import open_client

FEE_RATE_SCALE: int = 1_000_000
"""Fee rates are quoted in parts per million of the matched amount."""


@dataclass(frozen=True, slots=True)
class FeeQuote:
    """Execution fee the auctioneer would charge for one amount."""

    amt: Amount
    base_fee: Amount
    fee_rate: int
    total_fee: Amount

    @classmethod
    def for_amount(cls, amt: Amount, base_fee: int, fee_rate: int) -> FeeQuote:
        """Quote *amt* against the server's ``ExecutionFee`` values.

        Raises
        ------
        DecodeError
            When the fee, or the total it implies, does not fit an amount.
        """
        try:
            base = Amount(base_fee)
            total = Amount(base + amt * fee_rate // FEE_RATE_SCALE)
        except OverflowError as exc:
            raise DecodeError(
                f"invalid execution fee (base_fee {base_fee}, fee_rate {fee_rate}): {exc}",
                text=str(base_fee),
            ) from exc
        return cls(amt=amt, base_fee=base, fee_rate=fee_rate, total_fee=total)

    def to_dict(self) -> dict[str, Any]:
        return {
            "amt": self.amt,
            "base_fee": self.base_fee,
            "fee_rate": self.fee_rate,
            "total_fee": self.total_fee,
            "total_fee_btc": str(self.total_fee),
        }


def auction_fee(ctx: InvocationContext) -> None:
    amt: Amount | None = None
    if ctx.is_set("amt") or ctx.arg(0):
        amt = parse_amt_arg(ctx, 0, "amt", ctx.command)

    with open_client(ctx) as client:
        resp = client.auction_fee(trader_proto.AuctionFeeRequest())

    if amt is None:
        print_resp_json(resp)
        return

    fee = resp.execution_fee
    print_json(FeeQuote.for_amount(amt, fee.base_fee, fee.fee_rate))


GROUP = CommandGroup(
    name="auction",
    help="Query auction parameters.",
    commands=(
        Command(
            name="fee",
            help="Show the current auction execution fee.",
            description=(
                "Print the auctioneer's execution fee. With an amount, print "
                "the total fee for an order of that size instead."
            ),
            action=auction_fee,
            positionals=("amt",),
            flags=(
                Flag("amt", "an optional order amount in satoshis to quote the fee for"),
            ),
        ),
    ),
)
