"""
Live dashboard.

Subscribes to both stores and recomputes the dashboard snapshot on
every bet-collection change. Account notifications only refresh the
displayed balance; the two streams are not ordered relative to each
other, so the statistics never read the balance.
"""

from datetime import datetime
from typing import Callable, Optional

from config import LedgerSettings, settings
from config.logging_config import get_logger
from betledger.events import Callback, EventChannel, Subscription
from betledger.models import Account, Bet, DashboardSnapshot, Period
from betledger.stats.aggregator import build_dashboard
from betledger.stores.base import AccountStore, BetStore

logger = get_logger(__name__)


class Dashboard:
    """
    Reactive view over the bet and account stores.

    Usage:
        async with Dashboard(bet_store, account_store) as dashboard:
            dashboard.on_update(render)
            ...
    """

    def __init__(
        self,
        bet_store: BetStore,
        account_store: AccountStore,
        period: Optional[Period] = None,
        ledger_settings: Optional[LedgerSettings] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._bet_store = bet_store
        self._account_store = account_store
        self._settings = ledger_settings or settings.ledger
        self._period = period or Period(self._settings.default_period)
        self._clock = clock

        self._bets: list[Bet] = []
        self._account = Account()
        self._snapshot: Optional[DashboardSnapshot] = None

        self._subscriptions: list[Subscription] = []
        self._updates: EventChannel[DashboardSnapshot] = EventChannel("dashboard")

    @property
    def snapshot(self) -> Optional[DashboardSnapshot]:
        """Latest computed snapshot, None before the first bet notification."""
        return self._snapshot

    @property
    def account(self) -> Account:
        return self._account

    @property
    def balance(self) -> float:
        return self._account.balance

    @property
    def period(self) -> Period:
        return self._period

    @property
    def is_running(self) -> bool:
        return bool(self._subscriptions)

    def on_update(self, callback: Callback) -> Subscription:
        """Register a callback receiving each new DashboardSnapshot."""
        return self._updates.subscribe(callback)

    async def start(self) -> None:
        """Subscribe to both stores. Each delivers its current state immediately."""
        if self.is_running:
            return
        self._subscriptions.append(
            await self._account_store.subscribe_document(self._handle_account)
        )
        self._subscriptions.append(
            await self._bet_store.subscribe_collection(self._handle_bets)
        )
        logger.info("Dashboard started", period=self._period.value)

    async def set_period(self, period: Period) -> DashboardSnapshot:
        """Change the period filter and recompute from the cached bets."""
        self._period = period
        return await self._recompute()

    async def close(self) -> None:
        """
        Release the store subscriptions.

        Listeners registered with on_update stay registered, so the
        dashboard can be started again. Unsubscribe them through their
        own Subscription handles.
        """
        for subscription in self._subscriptions:
            subscription.unsubscribe()
        self._subscriptions.clear()
        logger.info("Dashboard closed")

    async def __aenter__(self) -> "Dashboard":
        await self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def _handle_bets(self, bets: list[Bet]) -> None:
        self._bets = bets
        await self._recompute()

    def _handle_account(self, account: Account) -> None:
        self._account = account
        logger.debug("Balance refreshed", balance=account.balance)

    async def _recompute(self) -> DashboardSnapshot:
        self._snapshot = build_dashboard(
            self._bets,
            period=self._period,
            now=self._clock(),
            recent_limit=self._settings.recent_bets_limit,
            chart_days=self._settings.chart_days,
        )
        logger.debug(
            "Dashboard recomputed",
            bets=self._snapshot.stats.total_bets,
            total_profit=self._snapshot.stats.total_profit,
        )
        await self._updates.publish(self._snapshot)
        return self._snapshot
