"""Market price view models."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass
class CoinPrice:
    """Current USD price for a symbol."""

    symbol: str
    price: Decimal
    change_24h: Decimal
    last_updated: datetime
