"""Command groups aggregated by the shell into one command table."""

from llmctl.cli.commands.accounts import GROUP as ACCOUNTS
from llmctl.cli.commands.auction import GROUP as AUCTION
from llmctl.cli.commands.base import Command, CommandGroup, Flag
from llmctl.cli.commands.orders import GROUP as ORDERS

GROUPS: tuple[CommandGroup, ...] = (ACCOUNTS, ORDERS, AUCTION)

__all__: list[str] = [
    "ACCOUNTS",
    "AUCTION",
    "Command",
    "CommandGroup",
    "Flag",
    "GROUPS",
    "ORDERS",
]
