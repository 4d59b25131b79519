from __future__ import annotations

from typing import TYPE_CHECKING
from typing import Any
from typing import Self

from .result import Err

if TYPE_CHECKING:
    from .sequence import Sequence


class Exhausted(Exception):
    """The end cursor was dereferenced."""


class Cursor[T]:
    """A forward-only, single-pass position in a sequence.

    Advancing resumes the producer body for exactly one step.
    Dereferencing reads what that step produced, and is the only place
    a failure captured from the body is raised.

    Once the body has finished the cursor is the end cursor, and compares
    equal to ``END`` and to every other finished cursor.
    """

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, sequence: Sequence[T] | None = None, /):
        self.__sequence = sequence

    def __repr__(self):
        if (sequence := self.__target()) is None:
            return f"<{type(self).__name__} end>"
        return f"<{type(self).__name__} {sequence.id!r}>"

    def __target(self) -> Sequence[T] | None:
        if self.__sequence is not None and self.__sequence.finished:
            self.__sequence = None
        return self.__sequence

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cursor):
            return NotImplemented
        return self.__target() is other.__target()

    def advance(self) -> Self:
        if (sequence := self.__target()) is None:
            return self
        sequence.resume()
        self.__target()
        return self

    def dereference(self) -> T:
        if (sequence := self.__target()) is None:
            raise Exhausted("The end cursor has no value.")
        match sequence.state.slot:
            case Err(error=error, traceback=traceback):
                # Each read starts from the traceback captured in the body.
                raise error.with_traceback(traceback)
        return sequence.state.value()

    @property
    def value(self) -> T:
        return self.dereference()


END: Cursor[Any] = Cursor()
