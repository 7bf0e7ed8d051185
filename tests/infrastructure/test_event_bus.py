from travel_booking.domain import (
    DomainEvent,
    ReservationApproved,
    ReservationEvent,
    ReservationRejected,
)
from travel_booking.infrastructure import InMemoryEventBus


def test_subscriber_receives_events_of_subtypes():
    bus = InMemoryEventBus()
    received = []
    bus.subscribe(ReservationEvent, received.append)

    event = ReservationApproved(reservation_id=1001, username="alice")
    bus.publish(event)

    assert received == [event]


def test_subscriber_of_other_type_is_not_called():
    bus = InMemoryEventBus()
    received = []
    bus.subscribe(ReservationRejected, received.append)

    bus.publish(ReservationApproved(reservation_id=1001, username="alice"))

    assert received == []


def test_failing_handler_does_not_stop_others():
    """Тест: ошибка одного обработчика не мешает остальным."""
    bus = InMemoryEventBus()
    received = []

    def failing(event):
        raise RuntimeError("boom")

    bus.subscribe(DomainEvent, failing)
    bus.subscribe(ReservationEvent, received.append)

    bus.publish(ReservationApproved(reservation_id=1001, username="alice"))

    assert len(received) == 1
