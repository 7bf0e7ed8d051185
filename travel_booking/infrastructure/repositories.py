"""
Реализации репозиториев в памяти.

Записи хранятся в словаре, порядок добавления сохраняется. Файловое
хранение поверх них реализует единица работы (см. unit_of_work.py).
"""

from typing import Callable, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel

from travel_booking.application import interfaces as ports
from travel_booking.domain import (
    EntityNotFoundException,
    Flight,
    Hotel,
    Reservation,
    User,
)

K = TypeVar("K")
T = TypeVar("T", bound=BaseModel)


class InMemoryRepository(Generic[K, T]):
    """Базовый класс для репозиториев, хранящих записи в памяти."""

    entity_name = "Запись"

    def __init__(self, key: Callable[[T], K]):
        self._key = key
        self._items: Dict[K, T] = {}

    def get(self, key: K) -> Optional[T]:
        return self._items.get(key)

    def add(self, item: T) -> None:
        key = self._key(item)
        if key in self._items:
            raise ValueError(f"{self.entity_name} {key} уже существует")
        self._items[key] = item

    def remove(self, key: K) -> None:
        if key not in self._items:
            raise EntityNotFoundException(f"{self.entity_name} {key} не найдена")
        del self._items[key]

    def list_all(self) -> List[T]:
        return list(self._items.values())

    def snapshot(self) -> List[T]:
        """Возвращает независимую копию всех записей."""
        return [self._copy(item) for item in self._items.values()]

    def restore(self, items: List[T]) -> None:
        """Заменяет содержимое репозитория копиями переданных записей."""
        self._items = {}
        for item in items:
            self.add(self._copy(item))

    @staticmethod
    def _copy(item: T) -> T:
        # Копируются только поля модели, неопубликованные события не переносятся
        return type(item).model_validate(item.model_dump())


class InMemoryUserRepository(InMemoryRepository[str, User], ports.UserRepository):
    """Реализация репозитория пользователей в памяти."""

    entity_name = "Учетная запись"

    def __init__(self) -> None:
        super().__init__(key=lambda user: user.username)


class InMemoryFlightRepository(InMemoryRepository[int, Flight], ports.FlightRepository):
    """Реализация репозитория рейсов в памяти."""

    entity_name = "Запись о рейсе"

    def __init__(self) -> None:
        super().__init__(key=lambda flight: flight.flight_number)


class InMemoryHotelRepository(InMemoryRepository[int, Hotel], ports.HotelRepository):
    """Реализация репозитория отелей в памяти."""

    entity_name = "Запись об отеле"

    def __init__(self) -> None:
        super().__init__(key=lambda hotel: hotel.hotel_id)


class InMemoryReservationRepository(
    InMemoryRepository[int, Reservation], ports.ReservationRepository
):
    """Реализация репозитория бронирований в памяти."""

    entity_name = "Запись о бронировании"

    def __init__(self) -> None:
        super().__init__(key=lambda reservation: reservation.reservation_id)
