from .result import Done
from .result import Err
from .result import Ok
from .result import Pending
from .result import Slot


class ProducerState[T]:
    """The single slot shared by a producer body and its consumer.

    The slot holds exactly one of: nothing yet, the most recently
    produced value, a captured failure, or the finished marker. The
    producer body and the consumer never run at the same time, so the
    slot is only written while the other side is suspended.

    The hooks are called by the sequence driving the body, never by the
    body itself or by consumers. ``start()`` is always called first.
    """

    __slot: Slot[T]

    def __repr__(self):
        return f"<{type(self).__name__} {self.__slot!r}>"

    @property
    def slot(self) -> Slot[T]:
        return self.__slot

    def start(self) -> None:
        """Create the slot empty: nothing runs until the body is first resumed."""
        self.__slot = Pending()

    def yield_(self, value: T, /) -> None:
        self.__slot = Ok(value)

    def finish(self) -> None:
        self.__slot = Done()

    def fail(self, error: Exception, /) -> None:
        self.__slot = Err(error, error.__traceback__)

    def started(self) -> bool:
        return not isinstance(self.__slot, Pending)

    def failure(self) -> Exception | None:
        """Return the captured failure without clearing it."""
        match self.__slot:
            case Err(error=error):
                return error
            case _:
                return None

    def value(self) -> T:
        """Return the current value.

        Callers check ``failure()`` and ``finished()`` first.
        """
        match self.__slot:
            case Ok(value=value):
                return value
            case slot:
                raise RuntimeError(f"No value has been produced: {slot!r}")

    def finished(self) -> bool:
        return isinstance(self.__slot, Done)
