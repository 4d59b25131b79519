from collections.abc import Iterable
from concurrent.futures import Future
from threading import Lock
from typing import Any
from typing import overload

from .suspension import Suspension


class Gather[T](Suspension[T]):
    """Start several suspensions at once and wait for all of them.

    The result is a tuple of results in the order the suspensions were
    given. If any of them fail, the gathered future fails with an
    ExceptionGroup holding every failure.
    """

    def __init__(self, suspensions: Iterable[Suspension[Any]]):
        super().__init__()
        self.__suspensions = tuple(suspensions)

    def start(self) -> Future[T]:
        gathered = Future[T]()
        if not self.__suspensions:
            gathered.set_result(())  # type: ignore[arg-type]
            return gathered

        futures = [suspension.start() for suspension in self.__suspensions]
        lock = Lock()

        def gathered_on_done(gathered: Future[T]):
            if gathered.cancelled():
                for future in futures:
                    future.cancel()

        gathered.add_done_callback(gathered_on_done)

        def on_done(_: Future[Any]):
            with lock:
                if gathered.done() or not all(future.done() for future in futures):
                    return
                collect()

        def collect():
            results = []
            exceptions = []
            for future in futures:
                try:
                    results.append(future.result(timeout=0))
                except Exception as exception:
                    exceptions.append(exception)
            if exceptions:
                gathered.set_exception(
                    ExceptionGroup("Some gathered suspensions failed.", exceptions)
                )
            else:
                gathered.set_result(tuple(results))  # type: ignore[arg-type]

        for future in futures:
            future.add_done_callback(on_done)

        return gathered


S = Suspension


@overload
def gather[T1](s: S[T1], /) -> Gather[tuple[T1]]: ...
@overload
def gather[T1, T2](s1: S[T1], s2: S[T2], /) -> Gather[tuple[T1, T2]]: ...
@overload
def gather[T1, T2, T3](
    s1: S[T1], s2: S[T2], s3: S[T3], /
) -> Gather[tuple[T1, T2, T3]]: ...
@overload
def gather(*suspensions: Suspension[Any]) -> Gather[tuple[Any, ...]]: ...


def gather(*suspensions: Suspension[Any]) -> Gather[Any]:
    return Gather(suspensions)
