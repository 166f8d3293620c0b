"""
Observable snapshot holder.

A ReactiveStore keeps exactly one current value. Every set() replaces it
wholesale and notifies subscribed observers synchronously, in subscription
order. All mutation happens on the event loop thread, so no locking is done.
"""
from typing import Callable, Generic, List, TypeVar

from bittensor.utils.btlogging import logging

T = TypeVar("T")

Observer = Callable[[T], None]


class Subscription:
    """Handle returned by ReactiveStore.subscribe(). Each handle owns one registration."""

    def __init__(self, store: "ReactiveStore", observer: Observer):
        self._store = store
        self.observer = observer

    def unsubscribe(self) -> None:
        self._store._remove(self)


class ReactiveStore(Generic[T]):
    """Holds the latest snapshot and notifies observers on replacement."""

    def __init__(self, initial: T, name: str = "store"):
        self.name = name
        self._value = initial
        self._subscriptions: List[Subscription] = []

    def get(self) -> T:
        """Return the latest value."""
        return self._value

    def set(self, value: T) -> None:
        """
        Replace the current value and notify observers.

        An observer that raises is logged and skipped; the remaining observers
        are still notified.
        """
        self._value = value
        for subscription in list(self._subscriptions):
            try:
                subscription.observer(value)
            except Exception as e:
                logging.error(f"Observer {subscription.observer!r} of {self.name} failed: {e}")

    def subscribe(self, observer: Observer) -> Subscription:
        subscription = Subscription(self, observer)
        self._subscriptions.append(subscription)
        return subscription

    def unsubscribe(self, observer: Observer) -> None:
        """Remove the earliest registration of `observer`, if any."""
        for subscription in self._subscriptions:
            if subscription.observer == observer:
                self._remove(subscription)
                return

    def _remove(self, subscription: Subscription) -> None:
        self._subscriptions = [s for s in self._subscriptions if s is not subscription]

    @property
    def observer_count(self) -> int:
        return len(self._subscriptions)
