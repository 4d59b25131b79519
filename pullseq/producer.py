from collections.abc import Callable
from collections.abc import Coroutine
from collections.abc import Generator
from functools import wraps
from inspect import iscoroutinefunction
from inspect import isgeneratorfunction
from typing import Any
from typing import overload

from .sequence import Sequence
from .suspension import Suspension


@overload
def producer[**A, T](
    fn: Callable[A, Generator[T, None, None]],
) -> Callable[A, Sequence[T]]: ...
@overload
def producer[**A](
    fn: Callable[A, Coroutine[Suspension[Any], Any, None]],
) -> Callable[A, Sequence[Any]]: ...


def producer(fn: Callable[..., Any]) -> Callable[..., Sequence[Any]]:
    """Decorate a generator or coroutine function to return a sequence.

    Calling the decorated function creates the body suspended at its
    start. None of the body runs until the sequence is first driven.
    """
    if not (isgeneratorfunction(fn) or iscoroutinefunction(fn)):
        raise TypeError(
            f"A producer must be a generator or coroutine function, got: {fn!r}"
        )

    @wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> Sequence[Any]:
        return Sequence(fn(*args, **kwargs))

    return wrapper
