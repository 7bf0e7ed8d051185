"""
Интерфейсы (порты) прикладного слоя.

Определяют контракты, которые реализуются инфраструктурными адаптерами.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional, Protocol, Type, TypeVar

from travel_booking.domain import (
    DomainEvent,
    Flight,
    Hotel,
    Reservation,
    ReservationStatus,
    User,
)

T_Event = TypeVar("T_Event", bound=DomainEvent)


class Logger(Protocol):
    """Интерфейс для логгера."""

    def info(self, message: str, **kwargs: Any) -> None: ...
    def error(self, message: str, **kwargs: Any) -> None: ...
    def warning(self, message: str, **kwargs: Any) -> None: ...
    def debug(self, message: str, **kwargs: Any) -> None: ...


class EventBus(ABC):
    """Шина доменных событий."""

    @abstractmethod
    def publish(self, event: DomainEvent) -> None:
        raise NotImplementedError

    @abstractmethod
    def subscribe(
        self, event_type: Type[T_Event], handler: Callable[[T_Event], None]
    ) -> None:
        raise NotImplementedError


class UserRepository(ABC):
    """Репозиторий пользователей. Сохраняет порядок регистрации."""

    @abstractmethod
    def get(self, username: str) -> Optional[User]:
        raise NotImplementedError

    @abstractmethod
    def add(self, user: User) -> None:
        """Добавляет пользователя в конец списка."""
        raise NotImplementedError

    @abstractmethod
    def remove(self, username: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def list_all(self) -> List[User]:
        raise NotImplementedError


class FlightRepository(ABC):
    """Репозиторий рейсов."""

    @abstractmethod
    def get(self, flight_number: int) -> Optional[Flight]:
        raise NotImplementedError

    @abstractmethod
    def add(self, flight: Flight) -> None:
        raise NotImplementedError

    @abstractmethod
    def remove(self, flight_number: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def list_all(self) -> List[Flight]:
        raise NotImplementedError


class HotelRepository(ABC):
    """Репозиторий отелей."""

    @abstractmethod
    def get(self, hotel_id: int) -> Optional[Hotel]:
        raise NotImplementedError

    @abstractmethod
    def add(self, hotel: Hotel) -> None:
        raise NotImplementedError

    @abstractmethod
    def remove(self, hotel_id: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def list_all(self) -> List[Hotel]:
        raise NotImplementedError


class ReservationRepository(ABC):
    """Репозиторий бронирований."""

    @abstractmethod
    def get(self, reservation_id: int) -> Optional[Reservation]:
        raise NotImplementedError

    @abstractmethod
    def add(self, reservation: Reservation) -> None:
        raise NotImplementedError

    @abstractmethod
    def list_all(self) -> List[Reservation]:
        raise NotImplementedError

    def find_by_user(self, username: str) -> List[Reservation]:
        return [r for r in self.list_all() if r.username == username]

    def find_by_status(self, status: ReservationStatus) -> List[Reservation]:
        return [r for r in self.list_all() if r.status == status]

    def max_id(self) -> int:
        """Наибольший выданный идентификатор или 0, если бронирований нет."""
        return max((r.reservation_id for r in self.list_all()), default=0)


class ReservationIdSequence(ABC):
    """Генератор возрастающих идентификаторов бронирований."""

    @property
    @abstractmethod
    def last_id(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def next_id(self) -> int:
        """Выдает следующий идентификатор и запоминает его."""
        raise NotImplementedError

    @abstractmethod
    def ensure_at_least(self, value: int) -> None:
        """Гарантирует, что следующие идентификаторы будут больше value."""
        raise NotImplementedError


class UnitOfWork(ABC):
    """Единица работы: все хранилища приложения и их фиксация."""

    users: UserRepository
    flights: FlightRepository
    hotels: HotelRepository
    reservations: ReservationRepository
    reservation_ids: ReservationIdSequence

    @abstractmethod
    def commit(self) -> None:
        """Фиксирует все изменения."""
        raise NotImplementedError

    @abstractmethod
    def rollback(self) -> None:
        """Откатывает изменения к последнему зафиксированному состоянию."""
        raise NotImplementedError
