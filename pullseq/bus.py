from __future__ import annotations

from collections.abc import Generator
from collections.abc import Iterable
from contextlib import contextmanager
from contextvars import ContextVar
from itertools import chain
from queue import Queue
from threading import Lock
from typing import Any


class Bus:
    """Distribute events to subscribers in this process.

    Sequences publish to the bus that was active when they were created.
    Subscribers receive every event that is an instance of a type they
    subscribed to, in the order it was published.
    """

    __current = ContextVar["Bus | None"]("Bus.current", default=None)

    def __init__(self):
        self.__lock = Lock()
        self.__subscriptions: dict[type, set[Queue[Any]]] = {}

    @classmethod
    def current(cls) -> Bus | None:
        """The bus activated in the current context, if any."""
        return cls.__current.get()

    @contextmanager
    def activate(self) -> Generator[Bus]:
        token = self.__current.set(self)
        try:
            yield self
        finally:
            self.__current.reset(token)

    def subscribe[T](self, types: Iterable[type[T]]) -> Queue[T]:
        queue = Queue[T]()
        with self.__lock:
            for type in types:
                self.__subscriptions.setdefault(type, set()).add(queue)
        return queue

    def unsubscribe(self, queue: Queue) -> None:
        """Unsubscribe a queue from all event types."""
        with self.__lock:
            for type, subscriptions in list(self.__subscriptions.items()):
                subscriptions.discard(queue)
                if not subscriptions:
                    del self.__subscriptions[type]
        queue.shutdown(immediate=True)

    def publish(self, event: Any) -> None:
        with self.__lock:
            subscribers = {
                subscription
                for type, subscriptions in self.__subscriptions.items()
                for subscription in subscriptions
                if isinstance(event, type)
            }
        for subscriber in subscribers:
            subscriber.put(event)

    def shutdown(self) -> None:
        with self.__lock:
            subscribers = set(chain.from_iterable(self.__subscriptions.values()))
            self.__subscriptions.clear()
        for subscriber in subscribers:
            subscriber.shutdown()
