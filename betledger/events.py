"""
Change notification channel.

Stores publish snapshots through an EventChannel; consumers hold a
Subscription and must release it when they are torn down.
"""

import asyncio
from typing import Any, Awaitable, Callable, Generic, TypeVar, Union

from config.logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

Callback = Callable[[T], Union[None, Awaitable[None]]]


class Subscription:
    """Handle returned by subscribe(); call unsubscribe() to stop updates."""

    def __init__(self, channel: "EventChannel[Any]", callback: Callable) -> None:
        self._channel = channel
        self._callback = callback
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def unsubscribe(self) -> None:
        """Stop receiving updates. Safe to call more than once."""
        if not self._active:
            return
        self._active = False
        self._channel._remove(self)

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc_info) -> None:
        self.unsubscribe()


class EventChannel(Generic[T]):
    """
    Ordered fan-out of values to registered callbacks.

    Callbacks may be sync or async. A failing callback is logged and
    does not prevent delivery to the remaining subscribers.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._subscriptions: list[Subscription] = []

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def subscribe(self, callback: Callback) -> Subscription:
        """
        Register a callback for published values.

        Args:
            callback: Function called with each published value

        Returns:
            Subscription handle
        """
        subscription = Subscription(self, callback)
        self._subscriptions.append(subscription)
        logger.debug(
            "Registered subscriber",
            channel=self.name,
            total_subscribers=len(self._subscriptions),
        )
        return subscription

    async def publish(self, value: T) -> None:
        """Deliver a value to every active subscriber, in subscription order."""
        for subscription in list(self._subscriptions):
            await self.deliver(subscription, value)

    async def deliver(self, subscription: Subscription, value: T) -> None:
        """Deliver a value to a single subscriber (used for initial snapshots)."""
        if not subscription.active:
            return
        try:
            result = subscription._callback(value)
            if asyncio.iscoroutine(result):
                await result
        except Exception as e:
            logger.error(
                "Error in subscriber callback",
                channel=self.name,
                error=str(e),
            )

    def _remove(self, subscription: Subscription) -> None:
        try:
            self._subscriptions.remove(subscription)
        except ValueError:
            return
        logger.debug(
            "Removed subscriber",
            channel=self.name,
            total_subscribers=len(self._subscriptions),
        )

    def close(self) -> None:
        """Release every subscription."""
        for subscription in list(self._subscriptions):
            subscription.unsubscribe()

