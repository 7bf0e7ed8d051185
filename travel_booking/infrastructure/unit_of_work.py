"""
Единицы работы: в памяти и с сохранением в файлы.
"""

from pathlib import Path
from typing import Optional, Union

from travel_booking.application import interfaces as ports
from travel_booking.domain import Flight, Hotel, Reservation, User
from travel_booking.logger import get_logger

from .file_store import DelimitedRecordFile, JsonRecordFile
from .id_sequence import FileReservationIdSequence, InMemoryReservationIdSequence
from .repositories import (
    InMemoryFlightRepository,
    InMemoryHotelRepository,
    InMemoryReservationRepository,
    InMemoryUserRepository,
)

FLIGHT_FIELDS = (
    "flight_number",
    "origin",
    "destination",
    "departure_time",
    "arrival_time",
    "seats_available",
)
HOTEL_FIELDS = ("hotel_id", "name", "location", "rooms_available")

USERS_FILE = "users.json"
FLIGHTS_FILE = "flights.txt"
HOTELS_FILE = "hotels.txt"
RESERVATIONS_FILE = "reservations.json"
LAST_ID_FILE = "last_id.txt"


class InMemoryUnitOfWork(ports.UnitOfWork):
    """Единица работы в памяти.

    При фиксации запоминает копию состояния всех репозиториев,
    при откате возвращает их к этой копии.
    """

    def __init__(
        self,
        reservation_ids: Optional[ports.ReservationIdSequence] = None,
        logger: Optional[ports.Logger] = None,
    ):
        self.users = InMemoryUserRepository()
        self.flights = InMemoryFlightRepository()
        self.hotels = InMemoryHotelRepository()
        self.reservations = InMemoryReservationRepository()
        self.reservation_ids = reservation_ids or InMemoryReservationIdSequence()
        self._logger = logger or get_logger(__name__)
        self._snapshot = self._take_snapshot()

    def commit(self) -> None:
        """Фиксирует все изменения."""
        self._snapshot = self._take_snapshot()
        self._logger.debug("UnitOfWork committed")

    def rollback(self) -> None:
        """Откатывает все изменения."""
        users, flights, hotels, reservations = self._snapshot
        self.users.restore(users)
        self.flights.restore(flights)
        self.hotels.restore(hotels)
        self.reservations.restore(reservations)
        self._logger.warning("UnitOfWork rolled back")

    def _take_snapshot(self):
        return (
            self.users.snapshot(),
            self.flights.snapshot(),
            self.hotels.snapshot(),
            self.reservations.snapshot(),
        )


class FileUnitOfWork(InMemoryUnitOfWork):
    """Единица работы, сохраняющая данные в каталог с файлами.

    При создании загружает все файлы, при фиксации перезаписывает их.
    """

    def __init__(
        self,
        data_dir: Union[str, Path],
        logger: Optional[ports.Logger] = None,
    ):
        self.data_dir = Path(data_dir)
        logger = logger or get_logger(__name__)
        self._users_file = JsonRecordFile(self.data_dir / USERS_FILE, User, logger)
        self._flights_file = DelimitedRecordFile(
            self.data_dir / FLIGHTS_FILE, Flight, FLIGHT_FIELDS, logger
        )
        self._hotels_file = DelimitedRecordFile(
            self.data_dir / HOTELS_FILE, Hotel, HOTEL_FIELDS, logger
        )
        self._reservations_file = JsonRecordFile(
            self.data_dir / RESERVATIONS_FILE, Reservation, logger
        )
        super().__init__(
            reservation_ids=FileReservationIdSequence(
                self.data_dir / LAST_ID_FILE, logger=logger
            ),
            logger=logger,
        )
        self.load()

    def load(self) -> None:
        """Загружает все данные с диска, отбрасывая несохраненные изменения."""
        self.users.restore(self._users_file.read())
        self.flights.restore(self._flights_file.read())
        self.hotels.restore(self._hotels_file.read())
        self.reservations.restore(self._reservations_file.read())

        # Счетчик мог быть потерян или отстать от сохраненных бронирований
        self.reservation_ids.ensure_at_least(self.reservations.max_id())

        self._snapshot = self._take_snapshot()
        self._logger.info(
            "Данные загружены",
            data_dir=str(self.data_dir),
            users=len(self.users.list_all()),
            flights=len(self.flights.list_all()),
            hotels=len(self.hotels.list_all()),
            reservations=len(self.reservations.list_all()),
        )

    def commit(self) -> None:
        """Перезаписывает все файлы текущим состоянием."""
        self._users_file.write(self.users.list_all())
        self._flights_file.write(self.flights.list_all())
        self._hotels_file.write(self.hotels.list_all())
        self._reservations_file.write(self.reservations.list_all())
        super().commit()
