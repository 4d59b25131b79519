from collections.abc import Callable
from collections.abc import Coroutine
from collections.abc import Generator
from collections.abc import Iterator
from concurrent.futures import TimeoutError
from dataclasses import dataclass
from dataclasses import field
from functools import partial
from typing import Any
from typing import Self

from .bus import Bus
from .config import Settings
from .config import settings as default_settings
from .cursor import END
from .cursor import Cursor
from .emit import Emit
from .event import Event
from .id import random_id
from .state import ProducerState
from .suspension import Suspension

type Body[T] = Generator[T, None, None] | Coroutine[Suspension[Any], Any, None]


class AlreadyRunning(Exception):
    """The sequence was resumed while its producer body was running."""


class Closed(Exception):
    """The sequence has been closed and can no longer be driven."""


class Sequence[T]:
    """A lazy sequence of the values produced by a suspended body.

    The body is a generator, which produces with ``yield``, or a coroutine,
    which produces with ``await emit(value)`` and may await any other
    suspension in between. It does not run until the first cursor is
    requested, and it only runs far enough to produce the next value.

    The sequence owns the body. ``close()`` tears it down, running its
    ``finally`` clauses and context manager exits, whether or not it was
    exhausted.
    """

    @dataclass(eq=False, kw_only=True)
    class Started(Event): ...

    @dataclass(eq=False, kw_only=True)
    class Yielded(Event):
        value: Any = field(repr=False)

    @dataclass(eq=False, kw_only=True)
    class Failed(Event):
        exception: Exception = field(repr=False)

    @dataclass(eq=False, kw_only=True)
    class Finished(Event): ...

    @dataclass(eq=False, kw_only=True)
    class Destroyed(Event): ...

    def __init__(
        self,
        body: Body[T],
        /,
        *,
        settings: Settings | None = None,
        bus: Bus | None = None,
    ):
        if not isinstance(body, Generator | Coroutine):
            raise TypeError(
                f"A sequence body must be a generator or a coroutine, got: {body!r}"
            )
        self.id = random_id(prefix="seq-")
        self.__body = body
        self.__coroutine = isinstance(body, Coroutine)
        self.__settings = settings or default_settings()
        self.__bus = bus or Bus.current()
        self.__state = ProducerState[T]()
        self.__state.start()
        self.__running = False
        self.__closed = False

    def __repr__(self):
        return f"<{type(self).__name__} {self.id!r} {self.__state.slot!r}>"

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __iter__(self) -> Iterator[T]:
        cursor = self.begin()
        while cursor != END:
            yield cursor.dereference()
            cursor.advance()

    @property
    def state(self) -> ProducerState[T]:
        return self.__state

    @property
    def closed(self) -> bool:
        return self.__closed

    @property
    def finished(self) -> bool:
        return self.__state.finished()

    def begin(self) -> Cursor[T]:
        """Drive the body to its next suspend point and return a cursor.

        The sequence cannot be rewound: on a sequence that has already
        been driven, this continues from where it left off.
        """
        if self.__closed:
            raise Closed(f"{self!r} is closed.")
        cursor = Cursor(self)
        return cursor.advance()

    def end(self) -> Cursor[T]:
        return END

    def resume(self) -> None:
        """Run the body until it yields, returns, or fails."""
        if self.__closed:
            raise Closed(f"{self!r} is closed.")
        if self.__running:
            raise AlreadyRunning(f"{self!r} is already running.")
        if self.__state.finished():
            return
        if self.__state.failure() is not None:
            # The body already unwound when it failed.
            self.__finish()
            return

        if not self.__state.started():
            self.__publish(self.Started(id=self.id))

        self.__running = True
        try:
            self.__run(partial(self.__body.send, None))
        finally:
            self.__running = False

    def __run(self, next_step: Callable[[], Any]):
        while True:
            try:
                suspension = next_step()
            except StopIteration:
                self.__finish()
                return
            except Exception as exception:
                self.__state.fail(exception)
                self.__publish(self.Failed(id=self.id, exception=exception))
                return

            if not self.__coroutine:
                self.__yield(suspension)
                return

            match suspension:
                case Emit(value=value):
                    self.__yield(value)
                    return
                case Suspension():
                    next_step = self.__wait(suspension)
                case _:
                    next_step = partial(
                        self.__body.throw,
                        TypeError(
                            f"Producer bodies can only await suspensions, "
                            f"got: {suspension!r}"
                        ),
                    )

    def __wait(self, suspension: Suspension[Any]) -> Callable[[], Any]:
        """Wait for an awaited suspension and return the step that resumes."""
        try:
            future = suspension.start()
        except Exception as exception:
            return partial(self.__body.throw, exception)

        try:
            result = future.result(timeout=self.__settings.await_timeout)
        except TimeoutError as exception:
            future.cancel()
            return partial(self.__body.throw, exception)
        except Exception as exception:
            return partial(self.__body.throw, exception)
        return partial(self.__body.send, result)

    def __yield(self, value: T):
        self.__state.yield_(value)
        self.__publish(self.Yielded(id=self.id, value=value))

    def __finish(self):
        self.__state.finish()
        self.__publish(self.Finished(id=self.id))

    def __publish(self, event: Event):
        if self.__bus is not None and self.__settings.events:
            self.__bus.publish(event)

    def close(self) -> None:
        """Tear down the body and everything its frame holds.

        Safe to call more than once, and on a body that never started.
        The last value, or a captured failure that was never read, is
        discarded, and every cursor on the sequence becomes the end cursor.
        """
        if self.__closed:
            return
        if self.__running:
            raise AlreadyRunning(f"{self!r} cannot be closed from its own body.")
        self.__closed = True
        try:
            self.__body.close()
        finally:
            self.__state.finish()
            self.__publish(self.Destroyed(id=self.id))
