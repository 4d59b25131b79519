from dataclasses import dataclass
from dataclasses import field
from types import TracebackType


@dataclass
class Pending:
    """The producer body has not been resumed yet."""


@dataclass
class Ok[T]:
    value: T


@dataclass
class Err[E: BaseException]:
    error: E
    traceback: TracebackType | None = field(default=None, compare=False, repr=False)


@dataclass
class Done:
    """The producer body returned, unwound after a failure, or was closed."""


type Slot[T] = Pending | Ok[T] | Err[Exception] | Done
