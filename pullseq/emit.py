from concurrent.futures import Future
from dataclasses import dataclass
from dataclasses import field

from .suspension import Suspension


@dataclass(eq=False, kw_only=True)
class Emit[T](Suspension[None]):
    """Hand a value to the consumer from a coroutine producer body.

    The driving sequence recognizes this suspension and turns it into a
    yield instead of starting it.
    """

    value: T = field(repr=False)

    def start(self) -> Future[None]:
        raise RuntimeError("emit() can only be awaited directly by a producer body.")


def emit[T](value: T, /) -> Emit[T]:
    return Emit(value=value)
