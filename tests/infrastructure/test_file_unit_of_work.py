"""
Интеграционные тесты: сервисы поверх файловой единицы работы.
"""

import pytest

from travel_booking.application import (
    AccountService,
    CatalogService,
    ReservationService,
)
from travel_booking.domain import EntityNotFoundException, ReservationStatus
from travel_booking.infrastructure import (
    FileReservationIdSequence,
    FileUnitOfWork,
    InMemoryReservationIdSequence,
)


def open_services(data_dir):
    uow = FileUnitOfWork(data_dir)
    return uow, AccountService(uow), CatalogService(uow), ReservationService(uow)


@pytest.fixture
def data_dir(tmp_path):
    uow, accounts, catalog, _ = open_services(tmp_path)
    accounts.register("admin", "secret", is_admin=True)
    accounts.register("alice", "pass1")
    catalog.add_flight(101, "Lisbon", "Porto", "08:00", "09:00", 2)
    catalog.add_hotel(7, "Sea View", "Porto", 1)
    return tmp_path


def test_empty_directory_starts_empty(tmp_path):
    uow = FileUnitOfWork(tmp_path / "missing")

    assert uow.users.list_all() == []
    assert uow.flights.list_all() == []
    assert uow.reservations.list_all() == []
    assert uow.reservation_ids.last_id == 1000


def test_data_survives_restart(data_dir):
    """Тест: данные сохраняются между запусками."""
    _, _, _, reservations = open_services(data_dir)
    reservation = reservations.reserve_flight("alice", 101)
    reservations.decide_reservation(reservation.reservation_id, approve=True)

    uow, accounts, catalog, reservations = open_services(data_dir)

    assert [u.username for u in accounts.list_users()] == ["admin", "alice"]
    assert catalog.get_flight(101).destination == "Porto"
    assert catalog.get_hotel(7).rooms == 1
    assert reservations.get_reservation(reservation.reservation_id).status == (
        ReservationStatus.APPROVED
    )
    assert (data_dir / "flights.txt").read_text(encoding="utf-8") == (
        "101|Lisbon|Porto|08:00|09:00|2\n"
    )


def test_reservation_ids_increase_across_restarts(data_dir):
    """Тест: идентификаторы бронирований растут между перезапусками."""
    _, _, _, reservations = open_services(data_dir)
    first = reservations.reserve_flight("alice", 101)

    _, _, _, reservations = open_services(data_dir)
    second = reservations.reserve_hotel("alice", 7)

    assert first.reservation_id == 1001
    assert second.reservation_id == 1002
    assert (data_dir / "last_id.txt").read_text(encoding="utf-8") == "1002"


def test_lost_counter_file_does_not_reuse_ids(data_dir):
    _, _, _, reservations = open_services(data_dir)
    for _ in range(3):
        last = reservations.reserve_flight("alice", 101)
    (data_dir / "last_id.txt").unlink()

    _, _, _, reservations = open_services(data_dir)
    new = reservations.reserve_flight("alice", 101)

    assert new.reservation_id == last.reservation_id + 1


def test_failed_request_consumes_no_id(data_dir):
    _, _, _, reservations = open_services(data_dir)

    with pytest.raises(EntityNotFoundException):
        reservations.reserve_flight("alice", 999)

    assert not (data_dir / "last_id.txt").exists()


def test_rollback_restores_last_commit(data_dir):
    uow, _, catalog, _ = open_services(data_dir)
    uow.flights.get(101).seats_available = 99

    uow.rollback()

    assert catalog.get_flight(101).seats == 2


def test_commit_writes_all_files(tmp_path):
    uow = FileUnitOfWork(tmp_path)

    uow.commit()

    for name in ("users.json", "flights.txt", "hotels.txt", "reservations.json"):
        assert (tmp_path / name).exists()


class TestReservationIdSequence:
    def test_in_memory_sequence(self):
        sequence = InMemoryReservationIdSequence()

        assert [sequence.next_id() for _ in range(3)] == [1001, 1002, 1003]

    def test_ensure_at_least(self):
        sequence = InMemoryReservationIdSequence()
        sequence.ensure_at_least(2000)
        sequence.ensure_at_least(10)

        assert sequence.next_id() == 2001

    def test_file_sequence_persists_each_id(self, tmp_path):
        path = tmp_path / "last_id.txt"
        sequence = FileReservationIdSequence(path)

        assert sequence.next_id() == 1001
        assert path.read_text(encoding="utf-8") == "1001"
        assert FileReservationIdSequence(path).next_id() == 1002

    def test_invalid_counter_file_falls_back_to_default(self, tmp_path):
        path = tmp_path / "last_id.txt"
        path.write_text("not a number", encoding="utf-8")

        assert FileReservationIdSequence(path).last_id == 1000
