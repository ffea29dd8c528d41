"""CoinGecko price provider."""

import logging
from decimal import Decimal
from typing import Optional

import requests

from cryptotax.core.exceptions import UpstreamError
from cryptotax.core.timezone import now_utc
from cryptotax.domain.views import CoinPrice

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.coingecko.com/api/v3"

# Symbol -> CoinGecko coin id; unknown symbols fall back to the lower-cased symbol
SYMBOL_TO_COIN_ID: dict[str, str] = {
    "BTC": "bitcoin",
    "ETH": "ethereum",
    "ADA": "cardano",
    "DOT": "polkadot",
    "SOL": "solana",
    "LINK": "chainlink",
    "UNI": "uniswap",
    "MATIC": "matic-network",
    "AVAX": "avalanche-2",
    "ATOM": "cosmos",
    "NEAR": "near",
    "FTM": "fantom",
    "ALGO": "algorand",
    "XRP": "ripple",
    "LTC": "litecoin",
    "BCH": "bitcoin-cash",
    "XLM": "stellar",
    "VET": "vechain",
    "ICP": "internet-computer",
    "THETA": "theta-token",
    "FIL": "filecoin",
    "TRX": "tron",
    "ETC": "ethereum-classic",
    "XMR": "monero",
    "CAKE": "pancakeswap-token",
    "AAVE": "aave",
    "GRT": "the-graph",
    "SUSHI": "sushi",
    "CRV": "curve-dao-token",
    "COMP": "compound-governance-token",
    "YFI": "yearn-finance",
    "SNX": "havven",
    "MKR": "maker",
    "USDT": "tether",
    "USDC": "usd-coin",
    "BUSD": "binance-usd",
    "DAI": "dai",
}


def get_coin_id(symbol: str) -> str:
    """Map a ticker symbol to its CoinGecko id."""
    return SYMBOL_TO_COIN_ID.get(symbol.upper(), symbol.lower())


class CoinGeckoPriceProvider:
    """Fetches USD prices from the CoinGecko ``/simple/price`` endpoint."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = 15.0,
        session: Optional[requests.Session] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout_seconds
        self._session = session or requests.Session()

    def get_current_prices(self, symbols: list[str]) -> dict[str, CoinPrice]:
        """Return prices for the symbols CoinGecko knows; others are omitted."""
        unique_symbols = list(dict.fromkeys(s.upper() for s in symbols))
        if not unique_symbols:
            return {}

        coin_ids = {symbol: get_coin_id(symbol) for symbol in unique_symbols}
        try:
            response = self._session.get(
                f"{self._base_url}/simple/price",
                params={
                    "ids": ",".join(sorted(set(coin_ids.values()))),
                    "vs_currencies": "usd",
                    "include_24hr_change": "true",
                },
                timeout=self._timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as exc:
            raise UpstreamError("CoinGecko", str(exc)) from exc
        except ValueError as exc:
            raise UpstreamError("CoinGecko", f"invalid JSON: {exc}") from exc

        if not isinstance(payload, dict):
            raise UpstreamError("CoinGecko", "unexpected payload")

        as_of = now_utc()
        result: dict[str, CoinPrice] = {}
        for symbol, coin_id in coin_ids.items():
            data = payload.get(coin_id)
            if not isinstance(data, dict) or not data.get("usd"):
                logger.warning("Price data not found for %s (coin id: %s)", symbol, coin_id)
                continue
            result[symbol] = CoinPrice(
                symbol=symbol,
                price=Decimal(str(data["usd"])),
                change_24h=Decimal(str(data.get("usd_24h_change") or 0)),
                last_updated=as_of,
            )

        logger.info("Fetched %d/%d prices from CoinGecko", len(result), len(unique_symbols))
        return result
