from dataclasses import dataclass
from queue import ShutDown

import pytest

from .bus import Bus
from .event import Event


@dataclass(eq=False, kw_only=True)
class Ping(Event): ...


@dataclass(eq=False, kw_only=True)
class Pong(Event): ...


def test_subscribers_only_receive_subscribed_types():
    bus = Bus()
    pings = bus.subscribe({Ping})
    everything = bus.subscribe({Event})
    try:
        bus.publish(ping := Ping(id="a"))
        bus.publish(pong := Pong(id="a"))

        assert pings.get_nowait() is ping
        assert pings.empty()
        assert everything.get_nowait() is ping
        assert everything.get_nowait() is pong
    finally:
        bus.shutdown()


def test_subscriber_of_overlapping_types_receives_each_event_once():
    bus = Bus()
    events = bus.subscribe({Ping, Event})
    try:
        bus.publish(Ping(id="a"))
        events.get_nowait()
        assert events.empty()
    finally:
        bus.shutdown()


def test_unsubscribe_shuts_the_queue_down():
    bus = Bus()
    events = bus.subscribe({Ping})
    bus.unsubscribe(events)
    bus.publish(Ping(id="a"))
    with pytest.raises(ShutDown):
        events.get()


def test_shutdown_shuts_every_subscriber_down():
    bus = Bus()
    first = bus.subscribe({Ping})
    second = bus.subscribe({Pong})
    bus.shutdown()
    for queue in (first, second):
        with pytest.raises(ShutDown):
            queue.get()


def test_activate_sets_the_current_bus():
    outer = Bus()
    inner = Bus()
    assert Bus.current() is None
    with outer.activate():
        assert Bus.current() is outer
        with inner.activate():
            assert Bus.current() is inner
        assert Bus.current() is outer
    assert Bus.current() is None
