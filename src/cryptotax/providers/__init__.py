"""Market price providers module."""

from cryptotax.providers.price_provider import PriceProvider
from cryptotax.providers.stub_provider import StubPriceProvider
from cryptotax.providers.coingecko_provider import CoinGeckoPriceProvider

__all__ = [
    "PriceProvider",
    "StubPriceProvider",
    "CoinGeckoPriceProvider",
]
