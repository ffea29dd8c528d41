"""Market data service for current coin prices."""

import logging
from datetime import datetime
from typing import Callable

from cryptotax.core.exceptions import UpstreamError
from cryptotax.core.timezone import now_utc
from cryptotax.domain.views import CoinPrice
from cryptotax.providers.price_provider import PriceProvider

logger = logging.getLogger(__name__)


class MarketDataService:
    """
    Service for fetching current prices.

    Wraps provider with per-symbol caching and graceful degradation.
    """

    def __init__(
        self,
        provider: PriceProvider,
        cache_ttl_seconds: int = 60,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._provider = provider
        self._cache_ttl = cache_ttl_seconds
        self._clock = clock
        self._price_cache: dict[str, tuple[CoinPrice, datetime]] = {}

    def get_current_prices(self, symbols: list[str]) -> dict[str, CoinPrice]:
        """
        Fetch prices for symbols with caching.

        Returns dict mapping symbol -> CoinPrice.
        Uses cached data if within TTL; falls back to stale cache on provider failure.
        Symbols with no price from either source are omitted.
        """
        if not symbols:
            return {}

        # Normalize and de-duplicate, keeping first-seen order
        symbols = list(dict.fromkeys(s.upper() for s in symbols))

        result: dict[str, CoinPrice] = {}
        missing: list[str] = []
        for symbol in symbols:
            if self._is_fresh(symbol):
                result[symbol] = self._price_cache[symbol][0]
            else:
                missing.append(symbol)

        if not missing:
            logger.debug("Using cached prices for %d symbols", len(symbols))
            return result

        try:
            new_prices = self._provider.get_current_prices(missing)
        except (UpstreamError, ConnectionError, TimeoutError) as exc:
            # Graceful degradation: serve whatever is cached, even if stale
            logger.error("Price provider failed for %s: %s", ", ".join(missing), exc)
            for symbol in missing:
                if symbol in self._price_cache:
                    result[symbol] = self._price_cache[symbol][0]
        else:
            fetched_at = self._clock()
            for symbol, price in new_prices.items():
                self._price_cache[symbol.upper()] = (price, fetched_at)
            for symbol in missing:
                if symbol in self._price_cache:
                    result[symbol] = self._price_cache[symbol][0]

        return {s: result[s] for s in symbols if s in result}

    def clear_cache(self) -> None:
        """Drop all cached prices."""
        self._price_cache.clear()

    def _is_fresh(self, symbol: str) -> bool:
        """Check if a cached price is within TTL."""
        cached = self._price_cache.get(symbol)
        if cached is None:
            return False
        elapsed = (self._clock() - cached[1]).total_seconds()
        return elapsed < self._cache_ttl
