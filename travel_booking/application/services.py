"""
Прикладной слой системы бронирования.

Сервисы приложения координируют работу доменной модели и хранилищ.
Каждая изменяющая операция фиксирует единицу работы, а при ошибке
откатывает ее и пробрасывает исключение дальше.
"""

import random
from pathlib import Path
from typing import List, Optional, Union

from travel_booking.domain import (
    AuthenticationException,
    BusinessRuleValidationException,
    EntityNotFoundException,
    Flight,
    Hotel,
    Reservation,
    ReservationStatus,
    User,
    bookable_rooms,
    bookable_seats,
    displayed_rooms,
    displayed_seats,
)
from travel_booking.logger import get_logger

from .dto import AdminNotificationsDTO, FlightDTO, HotelDTO, ReservationDTO, UserDTO
from .interfaces import EventBus, Logger, UnitOfWork

RECOMMENDATION_PHRASES = (
    "Обратите внимание на рейс {number} из {origin} в {destination}. "
    "Это направление очень популярно у наших путешественников!",
    "Не пропустите рейс {number} из {origin} в {destination}. "
    "Его выбирают настоящие любители путешествий!",
    "Откройте для себя рейс {number}: путешествие из {origin} в {destination}. "
    "Приключения ждут!",
)


class AccountService:
    """Сервис приложения для работы с учетными записями."""

    def __init__(self, uow: UnitOfWork, logger: Optional[Logger] = None):
        self._uow = uow
        self._logger = logger or get_logger(__name__)

    def register(self, username: str, password: str, is_admin: bool = False) -> UserDTO:
        """Регистрирует нового пользователя."""
        try:
            if self._uow.users.get(username) is not None:
                raise BusinessRuleValidationException(
                    f"Пользователь {username} уже существует"
                )

            user = User(username=username, password=password, is_admin=is_admin)
            self._uow.users.add(user)
            self._uow.commit()

        except Exception:
            self._uow.rollback()
            raise

        self._logger.info("Пользователь зарегистрирован", username=username, role=user.role)
        return UserDTO.from_domain(user, len(self._uow.users.list_all()))

    def login(self, username: str, password: str, expect_admin: bool) -> UserDTO:
        """Проверяет учетные данные и роль пользователя."""
        user = self._uow.users.get(username)
        if user is None or not user.check_password(password):
            self._logger.warning("Неудачная попытка входа", username=username)
            raise AuthenticationException("Неверное имя пользователя или пароль")

        if user.is_admin != expect_admin:
            self._logger.warning(
                "Вход с неверной ролью", username=username, role=user.role
            )
            raise AuthenticationException("Доступ запрещен: неверная роль пользователя")

        self._logger.info("Пользователь вошел в систему", username=username)
        return self._to_dto(user)

    def list_users(self) -> List[UserDTO]:
        """Возвращает пользователей в порядке регистрации."""
        return [
            UserDTO.from_domain(user, position)
            for position, user in enumerate(self._uow.users.list_all(), start=1)
        ]

    def delete_user(self, username: str) -> None:
        """Удаляет пользователя по имени."""
        try:
            if self._uow.users.get(username) is None:
                raise EntityNotFoundException(f"Пользователь {username} не найден")
            self._uow.users.remove(username)
            self._uow.commit()

        except Exception:
            self._uow.rollback()
            raise

        self._logger.info("Пользователь удален", username=username)

    def delete_user_at(self, position: int) -> str:
        """Удаляет пользователя по номеру в списке (начиная с 1)."""
        users = self._uow.users.list_all()
        if not 1 <= position <= len(users):
            raise EntityNotFoundException(f"Пользователь с номером {position} не найден")

        username = users[position - 1].username
        self.delete_user(username)
        return username

    def _to_dto(self, user: User) -> UserDTO:
        for position, candidate in enumerate(self._uow.users.list_all(), start=1):
            if candidate.username == user.username:
                return UserDTO.from_domain(user, position)
        raise EntityNotFoundException(f"Пользователь {user.username} не найден")


class CatalogService:
    """Сервис приложения для управления рейсами и отелями."""

    def __init__(self, uow: UnitOfWork, logger: Optional[Logger] = None):
        self._uow = uow
        self._logger = logger or get_logger(__name__)

    # Рейсы

    def add_flight(
        self,
        flight_number: int,
        origin: str,
        destination: str,
        departure_time: str,
        arrival_time: str,
        seats_available: int,
    ) -> FlightDTO:
        """Добавляет новый рейс."""
        try:
            if self._uow.flights.get(flight_number) is not None:
                raise BusinessRuleValidationException(
                    f"Рейс {flight_number} уже существует"
                )

            flight = Flight(
                flight_number=flight_number,
                origin=origin,
                destination=destination,
                departure_time=departure_time,
                arrival_time=arrival_time,
                seats_available=seats_available,
            )
            self._uow.flights.add(flight)
            self._uow.commit()

        except Exception:
            self._uow.rollback()
            raise

        self._logger.info("Рейс добавлен", flight_number=flight_number)
        return FlightDTO.from_domain(flight)

    def edit_flight(
        self,
        flight_number: int,
        origin: str,
        destination: str,
        departure_time: str,
        arrival_time: str,
        seats_available: int,
    ) -> FlightDTO:
        """Заменяет данные существующего рейса.

        Одобренные бронирования при этом не перепроверяются: если новая
        вместимость меньше их числа, новые заявки просто перестанут приниматься.
        """
        try:
            flight = self._get_flight(flight_number)
            flight.update_details(
                origin=origin,
                destination=destination,
                departure_time=departure_time,
                arrival_time=arrival_time,
                seats_available=seats_available,
            )
            self._uow.commit()

        except Exception:
            self._uow.rollback()
            raise

        self._logger.info("Рейс изменен", flight_number=flight_number)
        return FlightDTO.from_domain(flight)

    def delete_flight(self, flight_number: int) -> None:
        """Удаляет рейс."""
        try:
            self._get_flight(flight_number)
            self._uow.flights.remove(flight_number)
            self._uow.commit()

        except Exception:
            self._uow.rollback()
            raise

        self._warn_about_orphans(flight_number=flight_number)
        self._logger.info("Рейс удален", flight_number=flight_number)

    def get_flight(self, flight_number: int) -> FlightDTO:
        return FlightDTO.from_domain(self._get_flight(flight_number))

    def list_flights(self) -> List[FlightDTO]:
        """Возвращает рейсы с их полной вместимостью."""
        return [FlightDTO.from_domain(flight) for flight in self._uow.flights.list_all()]

    def list_flights_for_booking(self) -> List[FlightDTO]:
        """Возвращает рейсы с местами, еще не занятыми заявками."""
        reservations = self._uow.reservations.list_all()
        return [
            FlightDTO.from_domain(flight, displayed_seats(flight, reservations))
            for flight in self._uow.flights.list_all()
        ]

    def recommend_flight(self, rng: Optional[random.Random] = None) -> Optional[str]:
        """Выбирает случайный рейс и фразу для рекомендации."""
        flights = self._uow.flights.list_all()
        if not flights:
            return None

        rng = rng or random.Random()
        flight = rng.choice(flights)
        phrase = rng.choice(RECOMMENDATION_PHRASES)
        return phrase.format(
            number=flight.flight_number,
            origin=flight.origin,
            destination=flight.destination,
        )

    # Отели

    def add_hotel(
        self, hotel_id: int, name: str, location: str, rooms_available: int
    ) -> HotelDTO:
        """Добавляет новый отель."""
        try:
            if self._uow.hotels.get(hotel_id) is not None:
                raise BusinessRuleValidationException(f"Отель {hotel_id} уже существует")

            hotel = Hotel(
                hotel_id=hotel_id,
                name=name,
                location=location,
                rooms_available=rooms_available,
            )
            self._uow.hotels.add(hotel)
            self._uow.commit()

        except Exception:
            self._uow.rollback()
            raise

        self._logger.info("Отель добавлен", hotel_id=hotel_id)
        return HotelDTO.from_domain(hotel)

    def edit_hotel(
        self, hotel_id: int, name: str, location: str, rooms_available: int
    ) -> HotelDTO:
        """Заменяет данные существующего отеля."""
        try:
            hotel = self._get_hotel(hotel_id)
            hotel.update_details(
                name=name, location=location, rooms_available=rooms_available
            )
            self._uow.commit()

        except Exception:
            self._uow.rollback()
            raise

        self._logger.info("Отель изменен", hotel_id=hotel_id)
        return HotelDTO.from_domain(hotel)

    def delete_hotel(self, hotel_id: int) -> None:
        """Удаляет отель."""
        try:
            self._get_hotel(hotel_id)
            self._uow.hotels.remove(hotel_id)
            self._uow.commit()

        except Exception:
            self._uow.rollback()
            raise

        self._warn_about_orphans(hotel_id=hotel_id)
        self._logger.info("Отель удален", hotel_id=hotel_id)

    def get_hotel(self, hotel_id: int) -> HotelDTO:
        return HotelDTO.from_domain(self._get_hotel(hotel_id))

    def list_hotels(self) -> List[HotelDTO]:
        return [HotelDTO.from_domain(hotel) for hotel in self._uow.hotels.list_all()]

    def list_hotels_for_booking(self) -> List[HotelDTO]:
        reservations = self._uow.reservations.list_all()
        return [
            HotelDTO.from_domain(hotel, displayed_rooms(hotel, reservations))
            for hotel in self._uow.hotels.list_all()
        ]

    def _get_flight(self, flight_number: int) -> Flight:
        flight = self._uow.flights.get(flight_number)
        if flight is None:
            raise EntityNotFoundException(f"Рейс {flight_number} не найден")
        return flight

    def _get_hotel(self, hotel_id: int) -> Hotel:
        hotel = self._uow.hotels.get(hotel_id)
        if hotel is None:
            raise EntityNotFoundException(f"Отель {hotel_id} не найден")
        return hotel

    def _warn_about_orphans(
        self, flight_number: Optional[int] = None, hotel_id: Optional[int] = None
    ) -> None:
        orphans = [
            r.reservation_id
            for r in self._uow.reservations.list_all()
            if (flight_number is not None and r.flight_number == flight_number)
            or (hotel_id is not None and r.hotel_id == hotel_id)
        ]
        if orphans:
            self._logger.warning(
                "Удален объект, на который ссылаются бронирования",
                flight_number=flight_number,
                hotel_id=hotel_id,
                reservations=orphans,
            )


class ReservationService:
    """Сервис приложения для работы с бронированиями."""

    def __init__(
        self,
        uow: UnitOfWork,
        event_bus: Optional[EventBus] = None,
        logger: Optional[Logger] = None,
    ):
        self._uow = uow
        self._event_bus = event_bus
        self._logger = logger or get_logger(__name__)

    def reserve_flight(self, username: str, flight_number: int) -> ReservationDTO:
        """Создает заявку на место на рейсе."""
        try:
            self._ensure_user(username)
            flight = self._uow.flights.get(flight_number)
            if flight is None:
                raise EntityNotFoundException(f"Рейс {flight_number} не найден")

            if bookable_seats(flight, self._uow.reservations.list_all()) <= 0:
                raise BusinessRuleValidationException(
                    f"Рейс {flight_number} полностью забронирован"
                )

            reservation = Reservation.request_flight(
                reservation_id=self._uow.reservation_ids.next_id(),
                username=username,
                flight_number=flight_number,
            )
            self._uow.reservations.add(reservation)
            self._uow.commit()

        except Exception:
            self._uow.rollback()
            raise

        self._publish(reservation)
        return ReservationDTO.from_domain(reservation)

    def reserve_hotel(self, username: str, hotel_id: int) -> ReservationDTO:
        """Создает заявку на номер в отеле."""
        try:
            self._ensure_user(username)
            hotel = self._uow.hotels.get(hotel_id)
            if hotel is None:
                raise EntityNotFoundException(f"Отель {hotel_id} не найден")

            if bookable_rooms(hotel, self._uow.reservations.list_all()) <= 0:
                raise BusinessRuleValidationException(
                    f"В отеле {hotel_id} нет свободных номеров"
                )

            reservation = Reservation.request_hotel(
                reservation_id=self._uow.reservation_ids.next_id(),
                username=username,
                hotel_id=hotel_id,
            )
            self._uow.reservations.add(reservation)
            self._uow.commit()

        except Exception:
            self._uow.rollback()
            raise

        self._publish(reservation)
        return ReservationDTO.from_domain(reservation)

    def get_reservation(self, reservation_id: int) -> ReservationDTO:
        return ReservationDTO.from_domain(self._get(reservation_id))

    def user_reservations(self, username: str) -> List[ReservationDTO]:
        return [
            ReservationDTO.from_domain(r)
            for r in self._uow.reservations.find_by_user(username)
        ]

    def all_reservations(self) -> List[ReservationDTO]:
        return [ReservationDTO.from_domain(r) for r in self._uow.reservations.list_all()]

    def reservations_by_status(
        self, status: Union[ReservationStatus, str]
    ) -> List[ReservationDTO]:
        status = ReservationStatus(status)
        return [
            ReservationDTO.from_domain(r)
            for r in self._uow.reservations.find_by_status(status)
        ]

    def admin_notifications(self) -> AdminNotificationsDTO:
        """Заявки на бронирование и на отмену, ожидающие решения."""
        return AdminNotificationsDTO(
            pending=self.reservations_by_status(ReservationStatus.PENDING),
            cancel_requested=self.reservations_by_status(
                ReservationStatus.CANCEL_REQUESTED
            ),
        )

    def request_cancellation(self, username: str, reservation_id: int) -> ReservationDTO:
        """Пользователь просит отменить свое одобренное бронирование."""
        try:
            reservation = self._uow.reservations.get(reservation_id)
            # Чужие бронирования для пользователя не существуют
            if reservation is None or reservation.username != username:
                raise EntityNotFoundException(
                    f"Бронирование {reservation_id} не найдено"
                )

            reservation.request_cancellation()
            self._uow.commit()

        except Exception:
            self._uow.rollback()
            raise

        self._publish(reservation)
        return ReservationDTO.from_domain(reservation)

    def decide_reservation(self, reservation_id: int, approve: bool) -> ReservationDTO:
        """Администратор одобряет или отклоняет заявку."""
        try:
            reservation = self._get(reservation_id)
            if approve:
                if reservation.status == ReservationStatus.PENDING:
                    self._ensure_capacity(reservation)
                reservation.approve()
            else:
                reservation.reject()
            self._uow.commit()

        except Exception:
            self._uow.rollback()
            raise

        self._publish(reservation)
        return ReservationDTO.from_domain(reservation)

    def decide_cancellation(self, reservation_id: int, confirm: bool) -> ReservationDTO:
        """Администратор подтверждает отмену или отказывает в ней."""
        try:
            reservation = self._get(reservation_id)
            if confirm:
                reservation.confirm_cancellation()
            else:
                reservation.deny_cancellation()
            self._uow.commit()

        except Exception:
            self._uow.rollback()
            raise

        self._publish(reservation)
        return ReservationDTO.from_domain(reservation)

    def _get(self, reservation_id: int) -> Reservation:
        reservation = self._uow.reservations.get(reservation_id)
        if reservation is None:
            raise EntityNotFoundException(f"Бронирование {reservation_id} не найдено")
        return reservation

    def _ensure_user(self, username: str) -> None:
        if self._uow.users.get(username) is None:
            raise EntityNotFoundException(f"Пользователь {username} не найден")

    def _ensure_capacity(self, reservation: Reservation) -> None:
        reservations = self._uow.reservations.list_all()
        if reservation.is_flight:
            flight = self._uow.flights.get(reservation.flight_number)
            if flight is None:
                raise EntityNotFoundException(
                    f"Рейс {reservation.flight_number} не найден"
                )
            if bookable_seats(flight, reservations) <= 0:
                raise BusinessRuleValidationException(
                    f"На рейсе {flight.flight_number} не осталось мест"
                )
        elif reservation.is_hotel:
            hotel = self._uow.hotels.get(reservation.hotel_id)
            if hotel is None:
                raise EntityNotFoundException(f"Отель {reservation.hotel_id} не найден")
            if bookable_rooms(hotel, reservations) <= 0:
                raise BusinessRuleValidationException(
                    f"В отеле {hotel.hotel_id} не осталось номеров"
                )

    def _publish(self, reservation: Reservation) -> None:
        for event in reservation.pull_domain_events():
            self._logger.debug(
                "Событие бронирования",
                event=event.event_type,
                reservation_id=reservation.reservation_id,
            )
            if self._event_bus is not None:
                self._event_bus.publish(event)


class ReportService:
    """Формирует текстовый отчет по всем бронированиям."""

    def __init__(self, uow: UnitOfWork, logger: Optional[Logger] = None):
        self._uow = uow
        self._logger = logger or get_logger(__name__)

    def render(self) -> str:
        reservations = self._uow.reservations.list_all()
        if not reservations:
            return "No reservations available.\n"

        lines = ["Reservations Report:", "ID | User | Flight | Hotel | Status"]
        for r in reservations:
            # В отчете отсутствующая ссылка записывается как 0
            lines.append(
                f"{r.reservation_id} | {r.username} | {r.flight_number or 0} | "
                f"{r.hotel_id or 0} | {r.status.value}"
            )
        return "\n".join(lines) + "\n"

    def generate(self, path: Union[str, Path]) -> Path:
        """Записывает отчет в файл и возвращает путь к нему."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.render(), encoding="utf-8")
        self._logger.info("Отчет по бронированиям сформирован", path=str(path))
        return path
