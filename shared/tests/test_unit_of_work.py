from dataclasses import dataclass

import pytest

from shared.application.message_bus import MessageBus
from shared.application.uow import DjangoUnitOfWork
from shared.domain.base import Aggregate, DomainEvent


@dataclass(kw_only=True)
class Pinged(DomainEvent):
    note: str


@dataclass(kw_only=True, eq=False)
class Probe(Aggregate):
    name: str = "probe"

    def ping(self, note):
        self.add_event(Pinged(aggregate_id=self.id, note=note))


@pytest.fixture
def bus_with_recorder():
    bus = MessageBus()
    received = []
    bus.register_event_handler(Pinged, received.append)
    return bus, received


@pytest.mark.django_db
def test_events_are_published_only_after_commit(bus_with_recorder, django_capture_on_commit_callbacks):
    bus, received = bus_with_recorder
    probe = Probe()

    with django_capture_on_commit_callbacks(execute=True) as callbacks:
        with DjangoUnitOfWork(bus) as uow:
            probe.ping("hello")
            uow.collect_events(probe)
            assert received == []

    assert len(callbacks) == 1
    assert [event.note for event in received] == ["hello"]
    assert probe.events == []


@pytest.mark.django_db
def test_events_are_dropped_on_rollback(bus_with_recorder, django_capture_on_commit_callbacks):
    bus, received = bus_with_recorder
    probe = Probe()

    with django_capture_on_commit_callbacks(execute=True) as callbacks:
        with pytest.raises(RuntimeError):
            with DjangoUnitOfWork(bus) as uow:
                probe.ping("lost")
                uow.collect_events(probe)
                raise RuntimeError("boom")

    assert callbacks == []
    assert received == []


def test_failing_handler_does_not_stop_other_handlers():
    bus = MessageBus()
    received = []

    def broken(event):
        raise RuntimeError("smtp down")

    bus.register_event_handler(Pinged, broken)
    bus.register_event_handler(Pinged, received.append)

    bus.publish_events([Pinged(note="still delivered")])

    assert [event.note for event in received] == ["still delivered"]


def test_registering_a_handler_twice_is_a_no_op():
    received = []
    bus = MessageBus()
    bus.register_event_handler(Pinged, received.append)
    bus.register_event_handler(Pinged, received.append)

    bus.publish_events([Pinged(note="once")])

    assert [event.note for event in received] == ["once"]
