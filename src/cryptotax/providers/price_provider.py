"""Price provider protocol."""

from typing import Protocol

from cryptotax.domain.views import CoinPrice


class PriceProvider(Protocol):
    """
    Protocol for market price providers.

    Implementations fetch current USD prices. Symbols the source does not
    know are omitted from the result; transport failures raise.
    """

    def get_current_prices(self, symbols: list[str]) -> dict[str, CoinPrice]:
        """
        Fetch prices for multiple symbols.

        Returns dict mapping upper-cased symbol -> CoinPrice.
        """
        ...
