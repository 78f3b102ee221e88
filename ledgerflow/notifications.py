"""Notification fan-out for LedgerFlow.

Observers subscribe to a NotificationBus and receive a message after every
processed transaction. Delivery is best-effort: a failing observer never
affects the transaction it is being told about.
"""
from abc import ABC, abstractmethod
from typing import List

from ledgerflow.exceptions import ObserverFailure


class TransactionObserver(ABC):
    """Interface for notification subscribers."""

    @abstractmethod
    def update(self, transaction, message: str):
        pass


class EmailNotification(TransactionObserver):
    """Console stand-in for an e-mail integration."""

    def __init__(self):
        self.outbox: List[str] = []

    def update(self, transaction, message: str):
        text = f"Email: {message} for transaction '{transaction.description}'"
        self.outbox.append(text)
        print(text)


class SmsNotification(TransactionObserver):
    """Console stand-in for an SMS integration."""

    def __init__(self):
        self.outbox: List[str] = []

    def update(self, transaction, message: str):
        text = f"SMS: {message} for transaction '{transaction.description}'"
        self.outbox.append(text)
        print(text)


class NotificationBus:
    """Ordered list of observers notified synchronously."""

    def __init__(self):
        self._observers = []

    @property
    def observers(self) -> tuple:
        return tuple(self._observers)

    def attach(self, observer):
        """Subscribe an observer. The same observer may be attached twice.

        Raises:
            TypeError: If the object has no callable `update`.
        """
        if not callable(getattr(observer, 'update', None)):
            raise TypeError(f"{type(observer).__name__} does not provide update(transaction, message)")
        self._observers.append(observer)

    def detach(self, observer):
        """Remove the first matching subscription; absent observers are ignored."""
        try:
            self._observers.remove(observer)
        except ValueError:
            pass

    def notify(self, transaction, message: str) -> List[ObserverFailure]:
        """Call update() on every observer in attachment order.

        The subscriber list is snapshotted first, so observers may attach or
        detach while being notified.

        Returns:
            One ObserverFailure per observer that raised; empty when all succeeded.
        """
        failures = []
        for observer in list(self._observers):
            try:
                observer.update(transaction, message)
            except Exception as e:
                failure = ObserverFailure(observer, e)
                print(f"Notification error: {failure}")
                failures.append(failure)
        return failures

    def __len__(self):
        return len(self._observers)
