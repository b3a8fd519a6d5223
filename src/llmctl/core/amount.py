"""Monetary amounts in satoshis."""

from __future__ import annotations

from decimal import Decimal

SATOSHI_PER_BITCOIN: int = 100_000_000

MIN_AMOUNT: int = -(2**63)
MAX_AMOUNT: int = 2**63 - 1


class Amount(int):
    """A signed amount of the smallest indivisible unit (satoshi).

    Subclassing ``int`` keeps arithmetic and JSON encoding identical to a
    plain integer while giving the value a unit-aware ``str()``.
    """

    __slots__ = ()

    def __new__(cls, satoshis: int = 0) -> Amount:
        value = int(satoshis)
        if not MIN_AMOUNT <= value <= MAX_AMOUNT:
            raise OverflowError(f"amount {value} outside int64 range")
        return super().__new__(cls, value)

    def to_btc(self) -> Decimal:
        """Return the amount in whole bitcoin."""
        return Decimal(int(self)).scaleb(-8).normalize()

    def __str__(self) -> str:
        return f"{self.to_btc():f} BTC"

    def __repr__(self) -> str:
        return f"Amount({int(self)})"
