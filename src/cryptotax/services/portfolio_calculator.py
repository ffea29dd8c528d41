"""Portfolio calculator for deriving holdings, gains and tax lots from transactions."""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Callable, Optional

from cryptotax.core.exceptions import ValidationError
from cryptotax.core.timezone import now_utc, to_reporting_tz
from cryptotax.domain.models import (
    AccountingMethod,
    Holding,
    INCOME_TYPES,
    TaxCalculation,
    TaxTerm,
    TaxTransaction,
    Transaction,
    TransactionType,
    UserPortfolio,
)
from cryptotax.domain.views import PerformerView, PortfolioMetrics
from cryptotax.repositories.protocols import (
    PortfolioRepository,
    TaxCalculationRepository,
    TransactionRepository,
)
from cryptotax.services.market_data_service import MarketDataService

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")

# Simplified rates; actual rates depend on jurisdiction
SHORT_TERM_TAX_RATE = Decimal("0.37")
LONG_TERM_TAX_RATE = Decimal("0.20")
LONG_TERM_HOLDING_PERIOD = timedelta(days=365)

COIN_NAMES: dict[str, str] = {
    "BTC": "Bitcoin",
    "ETH": "Ethereum",
    "ADA": "Cardano",
    "DOT": "Polkadot",
    "SOL": "Solana",
    "LINK": "Chainlink",
    "UNI": "Uniswap",
    "MATIC": "Polygon",
    "AVAX": "Avalanche",
    "ATOM": "Cosmos",
    "NEAR": "NEAR Protocol",
    "FTM": "Fantom",
    "ALGO": "Algorand",
    "XRP": "XRP",
    "LTC": "Litecoin",
    "BCH": "Bitcoin Cash",
    "XLM": "Stellar",
    "VET": "VeChain",
    "ICP": "Internet Computer",
    "THETA": "Theta Network",
    "FIL": "Filecoin",
    "TRX": "TRON",
    "ETC": "Ethereum Classic",
    "XMR": "Monero",
    "CAKE": "PancakeSwap",
    "AAVE": "Aave",
    "GRT": "The Graph",
    "SUSHI": "SushiSwap",
    "CRV": "Curve DAO Token",
    "COMP": "Compound",
    "YFI": "yearn.finance",
    "SNX": "Synthetix",
    "MKR": "Maker",
    "USDT": "Tether",
    "USDC": "USD Coin",
    "BUSD": "Binance USD",
    "DAI": "Dai",
}


def get_coin_name(symbol: str) -> str:
    """Return the display name for a symbol, or the symbol itself."""
    return COIN_NAMES.get(symbol.upper(), symbol.upper())


@dataclass
class HoldingCalculation:
    """Running state for one symbol while replaying transactions."""

    symbol: str
    total_amount: Decimal = ZERO
    total_invested: Decimal = ZERO
    average_cost_basis: Decimal = ZERO
    realized_gain_loss: Decimal = ZERO
    transaction_count: int = 0


@dataclass
class _Lot:
    transaction_id: str
    acquired_at: datetime
    remaining: Decimal
    price: Decimal


class PortfolioCalculator:
    """
    Computes portfolio state from the transaction store.

    Holdings use average cost basis. Snapshots are saved after every
    calculation and reused by ``get_portfolio`` until they go stale.
    """

    def __init__(
        self,
        transaction_repo: TransactionRepository,
        portfolio_repo: PortfolioRepository,
        market_data_service: MarketDataService,
        tax_repo: Optional[TaxCalculationRepository] = None,
        cache_ttl_seconds: int = 300,
        reporting_timezone: str = "UTC",
        clock: Callable[[], datetime] = now_utc,
    ):
        self._transaction_repo = transaction_repo
        self._portfolio_repo = portfolio_repo
        self._market = market_data_service
        self._tax_repo = tax_repo
        self._cache_ttl = timedelta(seconds=cache_ttl_seconds)
        self._tz_name = reporting_timezone
        self._clock = clock

    # ------------------------------------------------------------------
    # Portfolio
    # ------------------------------------------------------------------

    def get_portfolio(self, user_id: str, force_recalculate: bool = False) -> UserPortfolio:
        """
        Return the user's portfolio, reusing the stored snapshot while fresh.

        Recomputes when forced, when no snapshot exists, or when the snapshot
        is older than the cache TTL.
        """
        if force_recalculate:
            logger.info("Force recalculating portfolio for %s", user_id)
            return self.calculate_user_portfolio(user_id)

        snapshot = self._portfolio_repo.get(user_id)
        if snapshot is None:
            logger.info("No cached portfolio for %s, calculating", user_id)
            return self.calculate_user_portfolio(user_id)

        if snapshot.last_updated is None or snapshot.last_updated < self._clock() - self._cache_ttl:
            logger.info("Cached portfolio for %s is stale, recalculating", user_id)
            return self.calculate_user_portfolio(user_id)

        logger.debug("Using cached portfolio for %s", user_id)
        return snapshot

    def calculate_user_portfolio(self, user_id: str) -> UserPortfolio:
        """Recompute the portfolio from all of the user's transactions and save it."""
        transactions = self._transaction_repo.list_by_user(user_id)
        return self.build_portfolio(user_id, transactions)

    def build_portfolio(self, user_id: str, transactions: list[Transaction]) -> UserPortfolio:
        """Compute and save the portfolio for an already-fetched transaction list."""
        if not transactions:
            portfolio = UserPortfolio(user_id=user_id, last_updated=self._clock())
            return self._portfolio_repo.save(portfolio)

        calculations = self.calculate_holdings(transactions)
        prices = self._market.get_current_prices(list(calculations.keys()))

        holdings: list[Holding] = []
        total_value = ZERO
        total_invested = ZERO
        total_realized = ZERO

        for symbol, calc in calculations.items():
            # Realized gains count even when the position is fully closed
            total_realized += calc.realized_gain_loss

            if calc.total_amount <= ZERO:
                if calc.realized_gain_loss != ZERO:
                    logger.info(
                        "%s fully sold, realized gain/loss: %s",
                        symbol,
                        calc.realized_gain_loss.quantize(Decimal("0.01")),
                    )
                continue

            price = prices.get(symbol)
            current_price = price.price if price else ZERO
            current_value = calc.total_amount * current_price
            gain_loss = (current_value - calc.total_invested) + calc.realized_gain_loss
            gain_loss_percent = (
                gain_loss / calc.total_invested * HUNDRED if calc.total_invested > ZERO else ZERO
            )

            holdings.append(
                Holding(
                    symbol=symbol,
                    name=get_coin_name(symbol),
                    amount=calc.total_amount,
                    average_cost_basis=calc.average_cost_basis,
                    total_invested=calc.total_invested,
                    current_price=current_price,
                    current_value=current_value,
                    gain_loss=gain_loss,
                    gain_loss_percent=gain_loss_percent,
                )
            )
            total_value += current_value
            total_invested += calc.total_invested

        for holding in holdings:
            holding.allocation = (
                holding.current_value / total_value * HUNDRED if total_value > ZERO else ZERO
            )
        holdings.sort(key=lambda h: h.current_value, reverse=True)

        total_unrealized = total_value - total_invested
        total_gains = total_unrealized + total_realized
        total_gains_percent = total_gains / total_invested * HUNDRED if total_invested > ZERO else ZERO

        logger.info(
            "Portfolio for %s: value=%s invested=%s unrealized=%s realized=%s holdings=%d",
            user_id,
            total_value.quantize(Decimal("0.01")),
            total_invested.quantize(Decimal("0.01")),
            total_unrealized.quantize(Decimal("0.01")),
            total_realized.quantize(Decimal("0.01")),
            len(holdings),
        )

        portfolio = UserPortfolio(
            user_id=user_id,
            holdings=holdings,
            total_value=total_value,
            total_invested=total_invested,
            total_gains=total_gains,
            total_gains_percent=total_gains_percent,
            last_updated=self._clock(),
        )
        return self._portfolio_repo.save(portfolio)

    def calculate_holdings(self, transactions: list[Transaction]) -> dict[str, HoldingCalculation]:
        """
        Replay transactions oldest-first into per-symbol running totals.

        Returns calculations keyed by upper-cased symbol, in first-seen order.
        """
        holdings: dict[str, HoldingCalculation] = {}

        for txn in sorted(transactions, key=lambda t: t.timestamp):
            symbol = txn.symbol.upper()
            calc = holdings.setdefault(symbol, HoldingCalculation(symbol=symbol))
            calc.transaction_count += 1

            if txn.type == TransactionType.BUY:
                self._apply_buy(calc, txn.amount, txn)
            elif txn.type == TransactionType.SELL:
                self._apply_sell(calc, txn.amount, txn)
            elif txn.type == TransactionType.TRADE:
                if txn.amount > ZERO:
                    self._apply_buy(calc, txn.amount, txn)
                else:
                    self._apply_sell(calc, abs(txn.amount), txn)
            elif txn.type in INCOME_TYPES:
                # Income at fair market value
                calc.total_amount += txn.amount
                calc.total_invested += txn.amount * txn.price
            elif txn.type == TransactionType.TRANSFER_IN:
                cost = txn.amount * txn.price if txn.price > ZERO else txn.total_value
                calc.total_amount += txn.amount
                calc.total_invested += cost
            elif txn.type == TransactionType.TRANSFER_OUT:
                self._apply_transfer_out(calc, txn.amount)

            if calc.total_amount > ZERO:
                calc.average_cost_basis = calc.total_invested / calc.total_amount

        return holdings

    @staticmethod
    def _apply_buy(calc: HoldingCalculation, amount: Decimal, txn: Transaction) -> None:
        calc.total_amount += amount
        calc.total_invested += amount * txn.price + txn.fee

    @staticmethod
    def _apply_sell(calc: HoldingCalculation, amount: Decimal, txn: Transaction) -> None:
        if calc.total_amount <= ZERO:
            logger.warning(
                "Sell of %s %s at %s on %s with no holdings available",
                amount,
                calc.symbol,
                txn.price,
                txn.timestamp.isoformat(),
            )
            return

        sell_amount = min(amount, calc.total_amount)
        cost_basis = sell_amount * calc.average_cost_basis
        proceeds = sell_amount * txn.price - txn.fee

        calc.total_amount -= sell_amount
        calc.total_invested = max(ZERO, calc.total_invested - cost_basis)
        calc.realized_gain_loss += proceeds - cost_basis

        if amount > sell_amount:
            logger.warning(
                "Oversell of %s on %s: tried to sell %s, only had %s",
                calc.symbol,
                txn.timestamp.isoformat(),
                amount,
                sell_amount,
            )

    @staticmethod
    def _apply_transfer_out(calc: HoldingCalculation, amount: Decimal) -> None:
        if calc.total_amount <= ZERO:
            return
        transfer_amount = min(amount, calc.total_amount)
        calc.total_amount -= transfer_amount
        calc.total_invested -= transfer_amount * calc.average_cost_basis

    # ------------------------------------------------------------------
    # Tax lots
    # ------------------------------------------------------------------

    def calculate_tax_liability(
        self,
        user_id: str,
        tax_year: int,
        method: AccountingMethod = AccountingMethod.FIFO,
    ) -> TaxCalculation:
        """
        Match disposals in ``tax_year`` against acquisition lots.

        Lots opened before the tax year are carried in; disposals after it
        are ignored. Gains on lots held longer than a year are long term.
        """
        if method not in (AccountingMethod.FIFO, AccountingMethod.LIFO):
            raise ValidationError(f"Accounting method {method.value} is not supported")

        transactions = self._transaction_repo.list_by_user(user_id)
        tax_transactions = self._match_lots(transactions, tax_year, method)

        short_term = sum(
            (t.gain_loss for t in tax_transactions if t.tax_type == TaxTerm.SHORT_TERM), ZERO
        )
        long_term = sum(
            (t.gain_loss for t in tax_transactions if t.tax_type == TaxTerm.LONG_TERM), ZERO
        )
        liability = (
            max(ZERO, short_term) * SHORT_TERM_TAX_RATE + max(ZERO, long_term) * LONG_TERM_TAX_RATE
        )

        calculation = TaxCalculation(
            user_id=user_id,
            tax_year=tax_year,
            method=method,
            short_term_gains=short_term,
            long_term_gains=long_term,
            total_gains=short_term + long_term,
            total_tax_liability=liability,
            transactions=tax_transactions,
            created_at=self._clock(),
        )
        if self._tax_repo is not None:
            calculation = self._tax_repo.save(calculation)
        return calculation

    def _match_lots(
        self,
        transactions: list[Transaction],
        tax_year: int,
        method: AccountingMethod,
    ) -> list[TaxTransaction]:
        lots: dict[str, list[_Lot]] = {}
        matched: list[TaxTransaction] = []

        for txn in sorted(transactions, key=lambda t: t.timestamp):
            year = to_reporting_tz(txn.timestamp, self._tz_name).year
            if year > tax_year:
                break

            symbol = txn.symbol.upper()
            if txn.type in (TransactionType.BUY, TransactionType.TRANSFER_IN):
                lots.setdefault(symbol, []).append(
                    _Lot(
                        transaction_id=txn.id,
                        acquired_at=txn.timestamp,
                        remaining=txn.amount,
                        price=txn.price,
                    )
                )
                continue

            if txn.type not in (TransactionType.SELL, TransactionType.TRANSFER_OUT):
                continue

            open_lots = lots.get(symbol, [])
            remaining = txn.amount
            while remaining > ZERO and open_lots:
                lot = open_lots[0] if method == AccountingMethod.FIFO else open_lots[-1]
                slice_amount = min(remaining, lot.remaining)
                held_for = txn.timestamp - lot.acquired_at
                cost_basis = slice_amount * lot.price

                if year == tax_year:
                    matched.append(
                        TaxTransaction(
                            transaction_id=txn.id,
                            symbol=symbol,
                            type=txn.type,
                            date=txn.timestamp,
                            amount=slice_amount,
                            cost_basis=cost_basis,
                            sale_price=txn.price,
                            gain_loss=slice_amount * txn.price - cost_basis,
                            holding_period_days=held_for.days,
                            tax_type=(
                                TaxTerm.LONG_TERM
                                if held_for > LONG_TERM_HOLDING_PERIOD
                                else TaxTerm.SHORT_TERM
                            ),
                        )
                    )

                lot.remaining -= slice_amount
                if lot.remaining <= ZERO:
                    open_lots.remove(lot)
                remaining -= slice_amount

        return matched

    # ------------------------------------------------------------------
    # Metrics
    # ------------------------------------------------------------------

    def get_portfolio_metrics(self, user_id: str) -> PortfolioMetrics:
        """Best/worst performers and volatility across current holdings."""
        portfolio = self.calculate_user_portfolio(user_id)
        return self.metrics_for(portfolio)

    @staticmethod
    def metrics_for(portfolio: UserPortfolio) -> PortfolioMetrics:
        """Compute metrics for an already-calculated portfolio."""
        if not portfolio.holdings:
            return PortfolioMetrics()

        best = max(portfolio.holdings, key=lambda h: h.gain_loss_percent)
        worst = min(portfolio.holdings, key=lambda h: h.gain_loss_percent)

        # Population standard deviation of per-holding returns
        returns = [h.gain_loss_percent for h in portfolio.holdings]
        mean = sum(returns, ZERO) / len(returns)
        variance = sum(((r - mean) ** 2 for r in returns), ZERO) / len(returns)

        return PortfolioMetrics(
            total_return=portfolio.total_gains,
            total_return_percent=portfolio.total_gains_percent,
            best_performer=PerformerView(symbol=best.symbol, return_percent=best.gain_loss_percent),
            worst_performer=PerformerView(symbol=worst.symbol, return_percent=worst.gain_loss_percent),
            volatility=variance.sqrt(),
        )
