"""Core layer — pure value parsing and domain value types.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O.
* No imports from ``cli`` or ``infra``.
* All functions must be fully typed and deterministic.
"""

from llmctl.core.amount import Amount
from llmctl.core.models import InvocationContext
from llmctl.core.parse import (
    parse_amt,
    parse_amt_arg,
    parse_hex_str,
    parse_str,
    parse_uint32,
    parse_uint64,
)
from llmctl.core.protocols import Renderable

__all__: list[str] = [
    "Amount",
    "InvocationContext",
    "Renderable",
    "parse_amt",
    "parse_amt_arg",
    "parse_hex_str",
    "parse_str",
    "parse_uint32",
    "parse_uint64",
]
