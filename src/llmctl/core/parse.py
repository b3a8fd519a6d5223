"""Typed value extraction from flags and positional arguments.

Every parser follows the same precedence rule:

1. If the named flag was explicitly set, its value is used.
2. Otherwise, if the positional argument at the index is non-empty, it
   is used.
3. Otherwise a :class:`~llmctl.exceptions.UsageError` is raised for the
   owning command.

The functions here are pure: no I/O, no side effects.
"""

from __future__ import annotations

import re

from llmctl.core.amount import MAX_AMOUNT, MIN_AMOUNT, Amount
from llmctl.core.models import InvocationContext
from llmctl.exceptions import DecodeError, UsageError

MAX_UINT64: int = 2**64 - 1
MAX_UINT32: int = 2**32 - 1

_HEX_RE = re.compile(r"[0-9a-fA-F]*")
_UINT_RE = re.compile(r"[0-9]+")
_INT_RE = re.compile(r"[+-]?[0-9]+")


# ---------------------------------------------------------------------------
# Strings
# ---------------------------------------------------------------------------

def parse_str(ctx: InvocationContext, arg_idx: int, flag: str, cmd: str) -> str:
    """Return the raw text for *flag*, falling back to positional *arg_idx*."""
    if ctx.is_set(flag):
        return ctx.flags[flag] or ""
    positional = ctx.arg(arg_idx)
    if positional != "":
        return positional
    raise UsageError(cmd, ctx)


# ---------------------------------------------------------------------------
# Byte sequences
# ---------------------------------------------------------------------------

def decode_hex(text: str) -> bytes:
    """Decode hexadecimal *text*; both cases are accepted, nothing else is."""
    if _HEX_RE.fullmatch(text) is None:
        raise DecodeError(
            f'invalid hex string "{text}": contains non-hex characters',
            text=text,
        )
    if len(text) % 2:
        raise DecodeError(f'invalid hex string "{text}": odd length', text=text)
    return bytes.fromhex(text)


def parse_hex_str(ctx: InvocationContext, arg_idx: int, flag: str, cmd: str) -> bytes:
    return decode_hex(parse_str(ctx, arg_idx, flag, cmd))


# ---------------------------------------------------------------------------
# Unsigned integers
# ---------------------------------------------------------------------------

def decode_uint64(text: str) -> int:
    """Parse base-10 *text* as an unsigned 64-bit integer.

    Signs, whitespace and digit separators are rejected, matching the
    strictness of the daemon's own parser.
    """
    if _UINT_RE.fullmatch(text) is None:
        raise DecodeError(f'invalid uint64 "{text}": invalid syntax', text=text)
    value = int(text, 10)
    if value > MAX_UINT64:
        raise DecodeError(f'invalid uint64 "{text}": value out of range', text=text)
    return value


def parse_uint64(ctx: InvocationContext, arg_idx: int, flag: str, cmd: str) -> int:
    return decode_uint64(parse_str(ctx, arg_idx, flag, cmd))


def parse_uint32(ctx: InvocationContext, arg_idx: int, flag: str, cmd: str) -> int:
    """Like :func:`parse_uint64`, additionally bounded to 32 bits."""
    text = parse_str(ctx, arg_idx, flag, cmd)
    value = decode_uint64(text)
    if value > MAX_UINT32:
        raise DecodeError(f'invalid uint32 "{text}": value out of range', text=text)
    return value


# ---------------------------------------------------------------------------
# Currency amounts
# ---------------------------------------------------------------------------

def parse_amt(text: str) -> Amount:
    """Parse base-10 *text* as a signed satoshi :class:`Amount`."""
    if _INT_RE.fullmatch(text) is None:
        raise DecodeError(
            f'invalid amt value: parsing "{text}": invalid syntax', text=text,
        )
    value = int(text, 10)
    if not MIN_AMOUNT <= value <= MAX_AMOUNT:
        raise DecodeError(
            f'invalid amt value: parsing "{text}": value out of range', text=text,
        )
    return Amount(value)


def parse_amt_arg(ctx: InvocationContext, arg_idx: int, flag: str, cmd: str) -> Amount:
    """Apply the flag/positional precedence, then :func:`parse_amt`."""
    return parse_amt(parse_str(ctx, arg_idx, flag, cmd))
