from concurrent.futures import Future
from concurrent.futures import InvalidStateError
from contextlib import suppress
from dataclasses import dataclass
from threading import Timer

from .suspension import Suspension


@dataclass(eq=False, kw_only=True)
class Pause(Suspension[None]):
    interval: float

    def __post_init__(self):
        if self.interval < 0:
            raise ValueError(f"Pause interval cannot be negative, got: {self.interval}")

    def start(self) -> Future[None]:
        future = Future[None]()

        def elapsed():
            with suppress(InvalidStateError):
                future.set_result(None)

        timer = Timer(self.interval, elapsed)
        timer.name = f"pullseq-pause-{self.id}"
        timer.daemon = True
        # A cancelled or timed out pause stops its timer.
        future.add_done_callback(lambda _: timer.cancel())
        timer.start()
        return future


def pause(interval: float, /) -> Pause:
    """Suspend the producer body for ``interval`` seconds."""
    return Pause(interval=interval)
