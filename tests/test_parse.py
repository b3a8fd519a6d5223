"""Tests for the typed value parsers (core/parse.py).

Every test is a pure function call — no I/O, no mocking.  Coverage:

* Flag-over-positional precedence for every variant
* Usage errors naming the owning command
* Hex decoding (case, odd length, non-hex characters)
* Unsigned 64/32-bit bounds
* Signed satoshi amounts
"""

from __future__ import annotations

from collections.abc import Callable

import pytest

from llmctl.core.amount import Amount
from llmctl.core.models import InvocationContext
from llmctl.core.parse import (
    MAX_UINT64,
    decode_hex,
    decode_uint64,
    parse_amt,
    parse_amt_arg,
    parse_hex_str,
    parse_str,
    parse_uint32,
    parse_uint64,
)
from llmctl.exceptions import DecodeError, UsageError

MakeCtx = Callable[..., InvocationContext]


# ---------------------------------------------------------------------------
# Precedence
# ---------------------------------------------------------------------------

class TestPrecedence:
    def test_flag_wins_over_positional(self, make_ctx: MakeCtx) -> None:
        ctx = make_ctx("positional", flags={"name": "flagged"})
        assert parse_str(ctx, 0, "name", ctx.command) == "flagged"

    def test_positional_used_when_flag_unset(self, make_ctx: MakeCtx) -> None:
        ctx = make_ctx("positional", flags={"name": None})
        assert parse_str(ctx, 0, "name", ctx.command) == "positional"

    def test_positional_index_is_respected(self, make_ctx: MakeCtx) -> None:
        ctx = make_ctx("first", "second")
        assert parse_str(ctx, 1, "name", ctx.command) == "second"

    def test_empty_flag_value_still_counts_as_set(self, make_ctx: MakeCtx) -> None:
        ctx = make_ctx("positional", flags={"name": ""})
        assert parse_str(ctx, 0, "name", ctx.command) == ""

    @pytest.mark.parametrize(
        ("parser", "flag_value", "expected"),
        [
            (parse_hex_str, "beef", b"\xbe\xef"),
            (parse_uint64, "42", 42),
            (parse_uint32, "7", 7),
            (parse_amt_arg, "-5", Amount(-5)),
        ],
    )
    def test_flag_wins_for_every_variant(
        self,
        make_ctx: MakeCtx,
        parser: Callable[..., object],
        flag_value: str,
        expected: object,
    ) -> None:
        # The positional would fail to decode; it must never be looked at.
        ctx = make_ctx("not-a-value!", flags={"v": flag_value})
        assert parser(ctx, 0, "v", ctx.command) == expected


# ---------------------------------------------------------------------------
# Usage errors
# ---------------------------------------------------------------------------

class TestUsageErrors:
    @pytest.mark.parametrize(
        "parser",
        [parse_str, parse_hex_str, parse_uint64, parse_uint32, parse_amt_arg],
    )
    def test_missing_flag_and_positional(
        self, make_ctx: MakeCtx, parser: Callable[..., object],
    ) -> None:
        ctx = make_ctx(command="orders cancel", flags={"order_nonce": None})
        with pytest.raises(UsageError) as exc_info:
            parser(ctx, 0, "order_nonce", "orders cancel")
        assert exc_info.value.command == "orders cancel"
        assert exc_info.value.context is ctx

    def test_empty_positional_is_missing(self, make_ctx: MakeCtx) -> None:
        ctx = make_ctx("")
        with pytest.raises(UsageError):
            parse_str(ctx, 0, "name", ctx.command)

    def test_index_past_end_is_missing(self, make_ctx: MakeCtx) -> None:
        ctx = make_ctx("only")
        with pytest.raises(UsageError):
            parse_str(ctx, 3, "name", ctx.command)

    def test_message_names_command(self, make_ctx: MakeCtx) -> None:
        ctx = make_ctx()
        with pytest.raises(UsageError, match="invalid usage of command accounts new"):
            parse_str(ctx, 0, "amt", "accounts new")


# ---------------------------------------------------------------------------
# Hex
# ---------------------------------------------------------------------------

class TestDecodeHex:
    def test_round_trip(self) -> None:
        data = bytes(range(256))
        assert decode_hex(data.hex()) == data

    def test_uppercase_accepted(self) -> None:
        assert decode_hex("DEADBEEF") == b"\xde\xad\xbe\xef"

    def test_empty_string_is_empty_bytes(self) -> None:
        assert decode_hex("") == b""

    def test_odd_length_rejected(self) -> None:
        with pytest.raises(DecodeError, match="odd length") as exc_info:
            decode_hex("abc")
        assert exc_info.value.text == "abc"

    @pytest.mark.parametrize("text", ["zz", "0x00", "ab cd", "gg00"])
    def test_non_hex_rejected(self, text: str) -> None:
        with pytest.raises(DecodeError, match="non-hex"):
            decode_hex(text)


# ---------------------------------------------------------------------------
# Unsigned integers
# ---------------------------------------------------------------------------

class TestDecodeUint64:
    def test_zero(self) -> None:
        assert decode_uint64("0") == 0

    def test_max(self) -> None:
        assert decode_uint64(str(MAX_UINT64)) == MAX_UINT64

    def test_overflow(self) -> None:
        with pytest.raises(DecodeError, match="out of range"):
            decode_uint64(str(MAX_UINT64 + 1))

    @pytest.mark.parametrize("text", ["-1", "+1", "1.5", "abc", " 1", "1_000", ""])
    def test_invalid_syntax(self, text: str) -> None:
        with pytest.raises(DecodeError, match="invalid syntax"):
            decode_uint64(text)


class TestParseUint32:
    def test_max(self, make_ctx: MakeCtx) -> None:
        ctx = make_ctx(str(2**32 - 1))
        assert parse_uint32(ctx, 0, "v", ctx.command) == 2**32 - 1

    def test_overflow(self, make_ctx: MakeCtx) -> None:
        ctx = make_ctx(str(2**32))
        with pytest.raises(DecodeError, match="uint32"):
            parse_uint32(ctx, 0, "v", ctx.command)


# ---------------------------------------------------------------------------
# Amounts
# ---------------------------------------------------------------------------

class TestParseAmt:
    def test_positive(self) -> None:
        amt = parse_amt("100000")
        assert amt == 100_000
        assert isinstance(amt, Amount)

    def test_negative(self) -> None:
        assert parse_amt("-2500") == -2500

    def test_int64_bounds(self) -> None:
        assert parse_amt(str(2**63 - 1)) == 2**63 - 1
        assert parse_amt(str(-(2**63))) == -(2**63)

    def test_out_of_range(self) -> None:
        with pytest.raises(DecodeError, match="out of range"):
            parse_amt(str(2**63))

    @pytest.mark.parametrize("text", ["abc", "1e3", "12.5", ""])
    def test_non_numeric_reports_text(self, text: str) -> None:
        with pytest.raises(DecodeError) as exc_info:
            parse_amt(text)
        assert str(exc_info.value).startswith("invalid amt value")
        assert f'"{text}"' in str(exc_info.value)
        assert exc_info.value.text == text
