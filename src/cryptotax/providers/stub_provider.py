"""Stub price provider for offline/testing use."""

from decimal import Decimal
import random

from cryptotax.core.timezone import now_utc
from cryptotax.domain.views import CoinPrice


# Deterministic fake prices for common symbols: (price, 24h change %)
_STUB_PRICES: dict[str, tuple[Decimal, Decimal]] = {
    "BTC": (Decimal("64250.00"), Decimal("1.85")),
    "ETH": (Decimal("3420.50"), Decimal("2.10")),
    "SOL": (Decimal("148.75"), Decimal("-0.95")),
    "ADA": (Decimal("0.45"), Decimal("0.30")),
    "DOT": (Decimal("6.90"), Decimal("-1.20")),
    "LINK": (Decimal("14.25"), Decimal("0.75")),
    "MATIC": (Decimal("0.72"), Decimal("-2.40")),
    "XRP": (Decimal("0.52"), Decimal("0.15")),
    "USDT": (Decimal("1.00"), Decimal("0.00")),
    "USDC": (Decimal("1.00"), Decimal("0.00")),
}


class StubPriceProvider:
    """
    Stub provider with deterministic fake data for offline operation.

    Uses predefined prices for common symbols; generates seeded random prices for unknown symbols.
    """

    def __init__(self, seed: int = 42):
        """Initialize with optional random seed for reproducibility."""
        self._rng = random.Random(seed)
        self._generated: dict[str, tuple[Decimal, Decimal]] = {}

    def get_current_prices(self, symbols: list[str]) -> dict[str, CoinPrice]:
        """Return stub prices for requested symbols."""
        as_of = now_utc()
        result: dict[str, CoinPrice] = {}

        for symbol in symbols:
            upper_symbol = symbol.upper()
            if upper_symbol in _STUB_PRICES:
                price, change = _STUB_PRICES[upper_symbol]
            else:
                if upper_symbol not in self._generated:
                    base_price = Decimal(str(1 + self._rng.random() * 100))
                    change_pct = Decimal(str((self._rng.random() - 0.5) * 10))
                    self._generated[upper_symbol] = (
                        base_price.quantize(Decimal("0.01")),
                        change_pct.quantize(Decimal("0.01")),
                    )
                price, change = self._generated[upper_symbol]

            result[upper_symbol] = CoinPrice(
                symbol=upper_symbol,
                price=price,
                change_24h=change,
                last_updated=as_of,
            )

        return result
