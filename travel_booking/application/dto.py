"""
DTO (Data Transfer Objects) для представления данных вне прикладного слоя.
"""

from typing import List, Optional

from pydantic import BaseModel

from travel_booking.domain import (
    NO_REFERENCE,
    Flight,
    Hotel,
    Reservation,
    ReservationStatus,
    User,
)


class UserDTO(BaseModel):
    """DTO пользователя. Пароль наружу не передается."""

    position: int  # Порядковый номер в списке, начиная с 1
    username: str
    is_admin: bool

    @classmethod
    def from_domain(cls, user: User, position: int) -> "UserDTO":
        return cls(position=position, username=user.username, is_admin=user.is_admin)


class FlightDTO(BaseModel):
    """DTO рейса со свободными местами."""

    flight_number: int
    origin: str
    destination: str
    departure_time: str
    arrival_time: str
    seats: int

    @classmethod
    def from_domain(cls, flight: Flight, seats: Optional[int] = None) -> "FlightDTO":
        """Создает DTO из доменной модели.

        Если seats не передан, показывается вместимость рейса.
        """
        return cls(
            flight_number=flight.flight_number,
            origin=flight.origin,
            destination=flight.destination,
            departure_time=flight.departure_time,
            arrival_time=flight.arrival_time,
            seats=flight.seats_available if seats is None else seats,
        )


class HotelDTO(BaseModel):
    """DTO отеля со свободными номерами."""

    hotel_id: int
    name: str
    location: str
    rooms: int

    @classmethod
    def from_domain(cls, hotel: Hotel, rooms: Optional[int] = None) -> "HotelDTO":
        return cls(
            hotel_id=hotel.hotel_id,
            name=hotel.name,
            location=hotel.location,
            rooms=hotel.rooms_available if rooms is None else rooms,
        )


class ReservationDTO(BaseModel):
    """DTO бронирования."""

    reservation_id: int
    username: str
    flight_number: Optional[int]
    hotel_id: Optional[int]
    status: ReservationStatus

    @classmethod
    def from_domain(cls, reservation: Reservation) -> "ReservationDTO":
        return cls(
            reservation_id=reservation.reservation_id,
            username=reservation.username,
            flight_number=reservation.flight_number,
            hotel_id=reservation.hotel_id,
            status=reservation.status,
        )

    @property
    def flight_ref(self) -> int:
        return self.flight_number if self.flight_number is not None else NO_REFERENCE

    @property
    def hotel_ref(self) -> int:
        return self.hotel_id if self.hotel_id is not None else NO_REFERENCE


class AdminNotificationsDTO(BaseModel):
    """Заявки, ожидающие решения администратора."""

    pending: List[ReservationDTO]
    cancel_requested: List[ReservationDTO]

    @property
    def is_empty(self) -> bool:
        return not self.pending and not self.cancel_requested
