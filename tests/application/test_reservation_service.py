"""
Тесты для сервиса бронирований.
"""

import pytest

from travel_booking.application import CatalogService, ReservationService
from travel_booking.domain import (
    BusinessRuleValidationException,
    EntityNotFoundException,
    ReservationApproved,
    ReservationEvent,
    ReservationRequested,
    ReservationStatus,
)
from travel_booking.infrastructure import InMemoryEventBus, InMemoryUnitOfWork

pytestmark = pytest.mark.usefixtures("seeded")


class TestReserve:
    """Тесты создания заявок."""

    def test_reserve_flight(self, reservations: ReservationService):
        reservation = reservations.reserve_flight("alice", 101)

        assert reservation.reservation_id == 1001
        assert reservation.username == "alice"
        assert reservation.flight_number == 101
        assert reservation.hotel_id is None
        assert reservation.status == ReservationStatus.PENDING

    def test_reservation_ids_are_increasing(self, reservations: ReservationService):
        first = reservations.reserve_flight("alice", 101)
        second = reservations.reserve_hotel("bob", 7)
        third = reservations.reserve_flight("bob", 101)

        assert first.reservation_id < second.reservation_id < third.reservation_id

    def test_reserve_unknown_flight(self, reservations: ReservationService):
        with pytest.raises(EntityNotFoundException, match="Рейс 999 не найден"):
            reservations.reserve_flight("alice", 999)

    def test_reserve_unknown_hotel(self, reservations: ReservationService):
        with pytest.raises(EntityNotFoundException, match="Отель 999 не найден"):
            reservations.reserve_hotel("alice", 999)

    def test_reserve_for_unknown_user(self, reservations: ReservationService):
        with pytest.raises(EntityNotFoundException):
            reservations.reserve_flight("mallory", 101)

    def test_fully_booked_flight_rejects_new_requests(
        self, reservations: ReservationService
    ):
        """Тест: при отсутствии мест новая заявка не принимается."""
        for username in ("alice", "bob"):
            reservation = reservations.reserve_flight(username, 101)
            reservations.decide_reservation(reservation.reservation_id, approve=True)

        with pytest.raises(BusinessRuleValidationException, match="полностью забронирован"):
            reservations.reserve_flight("alice", 101)

        assert len(reservations.all_reservations()) == 2

    def test_pending_requests_do_not_block_booking(
        self, reservations: ReservationService
    ):
        # Как и в исходной системе, ожидающие заявки не уменьшают число
        # мест, доступных для новых заявок
        for _ in range(3):
            reservations.reserve_flight("alice", 101)

        assert len(reservations.reservations_by_status("Pending")) == 3

    def test_zero_capacity_hotel(
        self, catalog: CatalogService, reservations: ReservationService
    ):
        catalog.add_hotel(8, "Closed Inn", "Faro", 0)

        with pytest.raises(BusinessRuleValidationException):
            reservations.reserve_hotel("alice", 8)


class TestAdminDecisions:
    """Тесты решений администратора."""

    def test_approval_decrements_available_seats(
        self, catalog: CatalogService, reservations: ReservationService
    ):
        reservation = reservations.reserve_flight("alice", 101)
        reservations.decide_reservation(reservation.reservation_id, approve=True)

        assert reservations.get_reservation(reservation.reservation_id).status == (
            ReservationStatus.APPROVED
        )
        [flight] = catalog.list_flights_for_booking()
        assert flight.seats == 1

    def test_reject(self, reservations: ReservationService):
        reservation = reservations.reserve_hotel("alice", 7)

        result = reservations.decide_reservation(reservation.reservation_id, approve=False)

        assert result.status == ReservationStatus.REJECTED

    def test_approval_cannot_overbook(self, reservations: ReservationService):
        """Тест: одобрение не может превысить вместимость отеля."""
        first = reservations.reserve_hotel("alice", 7)
        second = reservations.reserve_hotel("bob", 7)
        reservations.decide_reservation(first.reservation_id, approve=True)

        with pytest.raises(BusinessRuleValidationException, match="не осталось номеров"):
            reservations.decide_reservation(second.reservation_id, approve=True)

        assert reservations.get_reservation(second.reservation_id).status == (
            ReservationStatus.PENDING
        )

    def test_decide_unknown_reservation(self, reservations: ReservationService):
        with pytest.raises(EntityNotFoundException):
            reservations.decide_reservation(4242, approve=True)

    def test_cannot_decide_twice(self, reservations: ReservationService):
        reservation = reservations.reserve_flight("alice", 101)
        reservations.decide_reservation(reservation.reservation_id, approve=False)

        with pytest.raises(BusinessRuleValidationException):
            reservations.decide_reservation(reservation.reservation_id, approve=True)

    def test_admin_notifications(self, reservations: ReservationService):
        pending = reservations.reserve_flight("alice", 101)
        approved = reservations.reserve_hotel("bob", 7)
        reservations.decide_reservation(approved.reservation_id, approve=True)
        reservations.request_cancellation("bob", approved.reservation_id)

        notifications = reservations.admin_notifications()

        assert [r.reservation_id for r in notifications.pending] == [
            pending.reservation_id
        ]
        assert [r.reservation_id for r in notifications.cancel_requested] == [
            approved.reservation_id
        ]
        assert not notifications.is_empty


class TestCancellation:
    """Тесты отмены бронирований."""

    @pytest.fixture
    def approved_id(self, reservations: ReservationService) -> int:
        reservation = reservations.reserve_flight("alice", 101)
        reservations.decide_reservation(reservation.reservation_id, approve=True)
        return reservation.reservation_id

    def test_request_cancellation(self, reservations: ReservationService, approved_id):
        result = reservations.request_cancellation("alice", approved_id)

        assert result.status == ReservationStatus.CANCEL_REQUESTED

    def test_cancellation_only_from_approved(self, reservations: ReservationService):
        reservation = reservations.reserve_flight("alice", 101)

        with pytest.raises(BusinessRuleValidationException):
            reservations.request_cancellation("alice", reservation.reservation_id)

        assert reservations.get_reservation(reservation.reservation_id).status == (
            ReservationStatus.PENDING
        )

    def test_cannot_cancel_someone_elses_reservation(
        self, reservations: ReservationService, approved_id
    ):
        with pytest.raises(EntityNotFoundException):
            reservations.request_cancellation("bob", approved_id)

    def test_confirmed_cancellation_frees_seat(
        self,
        catalog: CatalogService,
        reservations: ReservationService,
        approved_id,
    ):
        reservations.request_cancellation("alice", approved_id)
        result = reservations.decide_cancellation(approved_id, confirm=True)

        assert result.status == ReservationStatus.CANCELLED
        assert catalog.list_flights_for_booking()[0].seats == 2

    def test_denied_cancellation_restores_approval(
        self, reservations: ReservationService, approved_id
    ):
        reservations.request_cancellation("alice", approved_id)
        result = reservations.decide_cancellation(approved_id, confirm=False)

        assert result.status == ReservationStatus.APPROVED

    def test_decide_cancellation_without_request(
        self, reservations: ReservationService, approved_id
    ):
        with pytest.raises(BusinessRuleValidationException):
            reservations.decide_cancellation(approved_id, confirm=True)


class TestQueries:
    def test_user_reservations(self, reservations: ReservationService):
        reservations.reserve_flight("alice", 101)
        reservations.reserve_hotel("bob", 7)
        reservations.reserve_hotel("alice", 7)

        mine = reservations.user_reservations("alice")

        assert [r.username for r in mine] == ["alice", "alice"]
        assert mine[1].flight_ref == -1
        assert mine[1].hotel_ref == 7

    def test_reservations_by_status_accepts_strings(
        self, reservations: ReservationService
    ):
        reservation = reservations.reserve_flight("alice", 101)
        reservations.decide_reservation(reservation.reservation_id, approve=True)

        assert len(reservations.reservations_by_status("Approved")) == 1
        assert reservations.reservations_by_status(ReservationStatus.CANCELLED) == []


def test_events_published_after_commit(
    uow: InMemoryUnitOfWork,
    event_bus: InMemoryEventBus,
    reservations: ReservationService,
):
    """Тест: события бронирования публикуются в шину."""
    received = []
    event_bus.subscribe(ReservationEvent, received.append)

    reservation = reservations.reserve_flight("alice", 101)
    reservations.decide_reservation(reservation.reservation_id, approve=True)

    assert [type(e) for e in received] == [ReservationRequested, ReservationApproved]
    assert all(e.reservation_id == reservation.reservation_id for e in received)


def test_rollback_does_not_republish_events(
    event_bus: InMemoryEventBus, reservations: ReservationService
):
    """Тест: после отката уже опубликованные события не публикуются повторно."""
    received = []
    event_bus.subscribe(ReservationEvent, received.append)

    reservation = reservations.reserve_flight("alice", 101)
    with pytest.raises(BusinessRuleValidationException):
        reservations.request_cancellation("alice", reservation.reservation_id)
    reservations.decide_reservation(reservation.reservation_id, approve=True)

    assert [type(e) for e in received] == [ReservationRequested, ReservationApproved]


def test_rolled_back_reservation_has_no_pending_events(
    uow: InMemoryUnitOfWork, reservations: ReservationService
):
    reservation = reservations.reserve_hotel("alice", 7)
    with pytest.raises(EntityNotFoundException):
        reservations.decide_reservation(9999, approve=True)

    stored = uow.reservations.get(reservation.reservation_id)
    assert stored.pull_domain_events() == []


def test_failed_operation_rolls_back(uow: InMemoryUnitOfWork, reservations):
    """Тест: при ошибке изменения откатываются."""
    reservation = reservations.reserve_hotel("alice", 7)
    stored = uow.reservations.get(reservation.reservation_id)

    # Изменение в обход сервиса, которое должно быть отброшено при откате
    stored.approve()
    with pytest.raises(EntityNotFoundException):
        reservations.decide_reservation(9999, approve=True)

    assert uow.reservations.get(reservation.reservation_id).status == (
        ReservationStatus.PENDING
    )
