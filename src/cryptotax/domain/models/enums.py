"""Enumerations for domain models."""

from enum import Enum


class TransactionType(str, Enum):
    """Types of transactions produced by the ingestion pipeline."""

    BUY = "buy"
    SELL = "sell"
    TRADE = "trade"
    STAKE = "stake"
    UNSTAKE = "unstake"
    REWARD = "reward"
    AIRDROP = "airdrop"
    TRANSFER_IN = "transfer_in"
    TRANSFER_OUT = "transfer_out"
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    MINING = "mining"
    DEFI_YIELD = "defi_yield"


# Treated as income at fair market value when building holdings
INCOME_TYPES = frozenset(
    {
        TransactionType.STAKE,
        TransactionType.REWARD,
        TransactionType.AIRDROP,
        TransactionType.MINING,
        TransactionType.DEFI_YIELD,
    }
)

TAXABLE_TYPES = frozenset({TransactionType.SELL, TransactionType.TRADE})


class ExchangeType(str, Enum):
    """Source exchange or export format of a transaction."""

    BINANCE_SPOT = "binance_spot"
    BINANCE_DEPOSIT = "binance_deposit"
    BINANCE_WITHDRAWAL = "binance_withdrawal"
    COINBASE = "coinbase"
    COINBASE_PRO = "coinbase_pro"
    KRAKEN = "kraken"
    KUCOIN = "kucoin"
    HUOBI = "huobi"
    BYBIT = "bybit"
    MANUAL = "manual"
    OTHER = "other"


class ProcessingStatus(str, Enum):
    """Lifecycle states of an upload processing job."""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


class AccountingMethod(str, Enum):
    """Lot matching methods for tax calculations."""

    FIFO = "FIFO"  # First In, First Out (default)
    LIFO = "LIFO"
    SPECIFIC_ID = "SPECIFIC_ID"  # Not supported
    AVERAGE_COST = "AVERAGE_COST"  # Not supported


class TaxTerm(str, Enum):
    """Holding period classification of a realized gain."""

    SHORT_TERM = "short_term"
    LONG_TERM = "long_term"
